"""Send order confirmation emails through an SMTP relay."""

from __future__ import annotations

import os
import smtplib
from email.message import EmailMessage
from typing import Optional

from ..config import ShopConfig
from ..errors import DeliveryError
from ..logging import get_logger

LOG = get_logger("orders-mailer")


class SmtpMailer:
    def __init__(
        self,
        host: str,
        port: int,
        *,
        sender: str,
        user: Optional[str] = None,
        password: Optional[str] = None,
        starttls: bool = False,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.user = user
        self.password = password
        self.starttls = starttls
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ShopConfig) -> "SmtpMailer":
        return cls(
            config.smtp_host,
            config.smtp_port,
            sender=config.smtp_sender,
            user=config.smtp_user,
            password=config.smtp_password,
            starttls=config.smtp_starttls,
            timeout=config.smtp_timeout,
        )

    def build_message(self, recipient: str, subject: str, body: str, attachment_path: Optional[str] = None) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = recipient
        msg["Subject"] = subject
        msg.set_content(body)
        if attachment_path:
            with open(attachment_path, "rb") as f:
                data = f.read()
            msg.add_attachment(
                data,
                maintype="application",
                subtype="pdf",
                filename=os.path.basename(attachment_path),
            )
        return msg

    def send(self, recipient: str, subject: str, body: str, attachment_path: Optional[str] = None) -> None:
        LOG.info(f"Sending '{subject}' to {recipient} via {self.host}:{self.port}")
        try:
            msg = self.build_message(recipient, subject, body, attachment_path)
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.starttls:
                    smtp.starttls()
                if self.user:
                    smtp.login(self.user, self.password or "")
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(f"Could not send email: {exc}") from exc
        LOG.info("Email handed to relay")
