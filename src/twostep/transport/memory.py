"""In-memory notifiers: keep messages instead of delivering them.

Used for ``--dry-run`` logins and in tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from twostep.transport.base import EmailNotifier, SmsNotifier

logger = logging.getLogger(__name__)


@dataclass
class SentMessage:
    recipient: str
    body: str
    subject: str | None = None
    context: str | None = None


class InMemoryEmailNotifier(EmailNotifier):
    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.outbox: list[SentMessage] = []

    def send(self, recipient: str, subject: str, body: str) -> bool:
        logger.info("[dry-run email] To: %s | %s | %s", recipient, subject, body)
        self.outbox.append(SentMessage(recipient=recipient, body=body, subject=subject))
        return self.succeed


class InMemorySmsNotifier(SmsNotifier):
    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.outbox: list[SentMessage] = []

    def send(self, recipient: str, message: str, context: str) -> bool:
        logger.info("[dry-run sms] To: %s | %s", recipient, message)
        self.outbox.append(SentMessage(recipient=recipient, body=message, context=context))
        return self.succeed
