"""Notifier interfaces. Every transport failure collapses to a False return."""

from __future__ import annotations

from abc import ABC, abstractmethod


class EmailNotifier(ABC):
    """Delivers a message to an email address."""

    @abstractmethod
    def send(self, recipient: str, subject: str, body: str) -> bool:
        """
        Send one email.

        Args:
            recipient: Destination email address
            subject: Subject line
            body: Plain-text body

        Returns:
            True if the transport accepted the message
        """


class SmsNotifier(ABC):
    """Delivers a text message to a phone number."""

    @abstractmethod
    def send(self, recipient: str, message: str, context: str) -> bool:
        """
        Send one SMS.

        Args:
            recipient: Phone number in E.164 form
            message: Message body
            context: Free-form tag describing why the message was sent

        Returns:
            True if the carrier accepted the message
        """
