"""Render single-page PDF order receipts."""

from __future__ import annotations

import os
import tempfile
from typing import List, Tuple

import fitz  # PyMuPDF

from ..errors import DocumentError
from ..logging import get_logger
from ..paths import ensure_dir
from ..store import Order

LOG = get_logger("orders-receipt")

RECEIPT_FILENAME = "order.pdf"
TEMP_PREFIX = "order_confirmation_"

# A4 portrait in PDF points
PAGE_WIDTH = 595
PAGE_HEIGHT = 842
MARGIN = 56
TITLE_SIZE = 16
BODY_SIZE = 12
LINE_STEP = 28


def receipt_lines(order: Order) -> List[str]:
    return [
        f"Order ID: {order.order_id}",
        f"Client ID: {order.client_id}",
        f"Product ID: {order.product_id}",
        f"Quantity: {order.quantity}",
        f"Total Price: {order.price:.2f}",
    ]


def render_receipt(order: Order) -> bytes:
    doc = fitz.open()
    try:
        page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        y = MARGIN + TITLE_SIZE
        page.insert_text((MARGIN, y), "Order Confirmation", fontname="hebo", fontsize=TITLE_SIZE)
        y += LINE_STEP + 6
        for line in receipt_lines(order):
            page.insert_text((MARGIN, y), line, fontname="helv", fontsize=BODY_SIZE)
            y += LINE_STEP
        return doc.tobytes()
    finally:
        doc.close()


class ReceiptRenderer:
    """Writes the receipt to `<output_dir>/order.pdf` and to a temporary copy.

    The temporary copy is what gets attached to the confirmation email; the
    caller owns it and removes it when done.
    """

    def __init__(self, output_dir: str) -> None:
        self.output_dir = output_dir

    def write(self, order: Order) -> Tuple[str, str]:
        LOG.info(f"Rendering receipt for order {order.order_id}")
        try:
            data = render_receipt(order)
        except (RuntimeError, ValueError) as exc:
            raise DocumentError(f"Could not generate PDF: {exc}") from exc

        try:
            path = os.path.join(ensure_dir(self.output_dir), RECEIPT_FILENAME)
            with open(path, "wb") as f:
                f.write(data)
            fd, temp_path = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=".pdf")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
        except OSError as exc:
            raise DocumentError(f"Could not save PDF: {exc}") from exc

        LOG.info(f"Receipt written: {path} (attachment copy {temp_path})")
        return path, temp_path
