"""Order placement: workflow, PDF receipt and confirmation email."""

from .receipt import ReceiptRenderer, render_receipt
from .mailer import SmtpMailer
from .workflow import OrderWorkflow

__all__ = [
    "ReceiptRenderer",
    "render_receipt",
    "SmtpMailer",
    "OrderWorkflow",
]
