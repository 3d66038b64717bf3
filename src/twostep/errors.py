"""Error taxonomy for the login flow.

Running out of attempts and user cancellation are not errors; they surface
as ``Outcome.FAILURE`` and ``Outcome.CANCELLED``.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base class for everything raised by twostep."""


class InvalidInput(AuthError):
    """Bad identity, secret or phone number. Shown to the user."""


class DeliveryFailed(AuthError):
    """The notifier could not deliver the passcode."""


class NoStrategyBound(AuthError):
    """A context was used before a strategy was bound to it."""


class ConfigError(AuthError):
    """Required configuration is missing or empty."""
