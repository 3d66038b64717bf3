"""twostep — credential check plus email/SMS one-time passcode login."""

__version__ = "0.1.0"
