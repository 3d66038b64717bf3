"""Holds the strategy the current login flow is using."""

from __future__ import annotations

from twostep.auth.strategy import VerificationStrategy
from twostep.errors import NoStrategyBound

# Placeholder second argument for strategy.matches(); no strategy reads it yet
RESERVED_SECRET = "password"


class AuthenticationContext:
    def __init__(self, strategy: VerificationStrategy | None = None) -> None:
        self._strategy = strategy

    @property
    def strategy(self) -> VerificationStrategy | None:
        return self._strategy

    def set_strategy(self, strategy: VerificationStrategy) -> None:
        """Bind ``strategy``. Any code held by the previous one is dropped with it."""
        self._strategy = strategy

    def send_code(self, destination: str) -> None:
        self._require_strategy().send_code(destination)

    def verify(self, candidate: str) -> bool:
        return self._require_strategy().matches(candidate, RESERVED_SECRET)

    def _require_strategy(self) -> VerificationStrategy:
        if self._strategy is None:
            raise NoStrategyBound("No verification strategy bound to the context")
        return self._strategy
