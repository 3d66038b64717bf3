"""Per-channel passcode strategies: generate, deliver and compare an OTP.

Each strategy instance owns its RNG and its live code, so concurrent login
flows never see each other's codes. Codes come from ``random.Random``: they
are not meant to be cryptographically strong.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod

from twostep.errors import DeliveryFailed
from twostep.models import CODE_MAX, CODE_MIN, Channel
from twostep.transport.base import EmailNotifier, SmsNotifier

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATE = "Your verification code is: {code}"
EMAIL_SUBJECT = "Your Verification Code"
SMS_CONTEXT = "verification"


class VerificationStrategy(ABC):
    """Base class for the email and SMS passcode channels."""

    channel: Channel

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._live_code: str | None = None

    @property
    def live_code(self) -> str | None:
        """The most recently generated code, or None before the first send."""
        return self._live_code

    def generate_code(self) -> str:
        """Generate a fresh 6-digit code, replacing the live one."""
        self._live_code = str(self._rng.randint(CODE_MIN, CODE_MAX))
        return self._live_code

    def send_code(self, destination: str) -> None:
        """Generate a new code and deliver it to ``destination``.

        Raises DeliveryFailed if the notifier rejects or cannot send the message.
        """
        code = self.generate_code()
        body = MESSAGE_TEMPLATE.format(code=code)
        try:
            delivered = self._deliver(destination, body)
        except (ValueError, OSError) as e:
            logger.error("%s delivery to %s raised", self.channel.value, destination, exc_info=True)
            raise DeliveryFailed(f"Failed to send verification code via {self.channel.value}: {e}") from e

        if not delivered:
            logger.error("%s notifier reported failure for %s", self.channel.value, destination)
            raise DeliveryFailed(f"Failed to send verification code via {self.channel.value}.")

        logger.info("Verification code sent via %s to %s", self.channel.value, destination)
        logger.debug("Live %s code: %s", self.channel.value, code)

    def matches(self, candidate: str, secret: str | None = None) -> bool:
        """Exact comparison against the live code; no trimming or case folding.

        ``secret`` is accepted for credential-aware strategies and unused here.
        """
        if self._live_code is None:
            return False
        return candidate == self._live_code

    @abstractmethod
    def _deliver(self, destination: str, body: str) -> bool:
        """Hand the composed message to the channel's notifier."""


class EmailStrategy(VerificationStrategy):
    channel = Channel.EMAIL

    def __init__(self, notifier: EmailNotifier, rng: random.Random | None = None) -> None:
        super().__init__(rng)
        self.notifier = notifier

    def _deliver(self, destination: str, body: str) -> bool:
        return self.notifier.send(destination, EMAIL_SUBJECT, body)


class SmsStrategy(VerificationStrategy):
    channel = Channel.SMS

    def __init__(self, notifier: SmsNotifier, rng: random.Random | None = None) -> None:
        super().__init__(rng)
        self.notifier = notifier

    def _deliver(self, destination: str, body: str) -> bool:
        return self.notifier.send(destination, body, SMS_CONTEXT)


def create_strategy(
    channel: Channel,
    *,
    email_notifier: EmailNotifier,
    sms_notifier: SmsNotifier,
    rng: random.Random | None = None,
) -> VerificationStrategy:
    """Build the strategy for ``channel`` bound to its notifier."""
    if channel is Channel.SMS:
        return SmsStrategy(sms_notifier, rng)
    if channel is Channel.EMAIL:
        return EmailStrategy(email_notifier, rng)
    raise ValueError(f"Unsupported channel: {channel}")
