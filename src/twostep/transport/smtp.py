"""SMTP email delivery for passcodes."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from twostep.config import settings
from twostep.transport.base import EmailNotifier
from twostep.validation import is_valid_email_address

logger = logging.getLogger(__name__)


class SmtpEmailNotifier(EmailNotifier):
    """Sends mail from a fixed sender account over SMTP with implicit TLS."""

    def __init__(
        self,
        sender_identity: str,
        sender_secret: str,
        host: str | None = None,
        port: int | None = None,
        timeout: float = 30.0,
    ) -> None:
        if not sender_identity or not sender_identity.strip():
            raise ValueError("Sender email must not be empty")
        if not is_valid_email_address(sender_identity):
            raise ValueError("Invalid sender email format")
        if not sender_secret or not sender_secret.strip():
            raise ValueError("Sender password must not be empty")
        self._sender = sender_identity
        self._secret = sender_secret
        self._host = host or settings.smtp_host
        self._port = int(port or settings.smtp_port)
        self._timeout = timeout

    def send(self, recipient: str, subject: str, body: str) -> bool:
        for name, value in (("Recipient email", recipient), ("Email subject", subject), ("Email body", body)):
            if not value or not value.strip():
                raise ValueError(f"{name} is required")

        msg = EmailMessage()
        msg["From"] = self._sender
        msg["To"] = recipient
        msg["Subject"] = subject
        msg.set_content(body)

        try:
            with smtplib.SMTP_SSL(self._host, self._port, timeout=self._timeout) as server:
                server.login(self._sender, self._secret)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError):
            logger.error("Failed to send email to %s via %s:%d", recipient, self._host, self._port, exc_info=True)
            return False

        logger.info("Email sent to %s", recipient)
        return True
