"""Data passed between the presenter, controller and strategies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

CODE_MIN = 100000  # 6-digit minimum
CODE_MAX = 999999  # 6-digit maximum


class Channel(StrEnum):
    EMAIL = "email"
    SMS = "sms"


class Outcome(StrEnum):
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Credentials:
    """What the user submitted for one login attempt."""
    identity: str
    secret: str
    channel: Channel
    destination: str | None = None

    @property
    def recipient(self) -> str | None:
        """Where the passcode goes: the phone for SMS, the identity for email."""
        if self.channel is Channel.SMS:
            return self.destination
        return self.identity

    def __repr__(self) -> str:
        return (
            f"Credentials(identity={self.identity!r}, secret='***', "
            f"channel={self.channel.value!r}, destination={self.destination!r})"
        )
