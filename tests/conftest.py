"""Shared fixtures and fakes for the login flow tests."""

from __future__ import annotations

import pytest

from twostep.config import AuthConfig
from twostep.transport.memory import InMemoryEmailNotifier, InMemorySmsNotifier

CORRECT_IDENTITY = "user@example.com"
CORRECT_SECRET = "s3cret-Pass"


class ScriptedPresenter:
    """Presenter that replays canned input and records what it was shown."""

    def __init__(
        self,
        identity: str = CORRECT_IDENTITY,
        secret: str = CORRECT_SECRET,
        destination: str | None = None,
        use_sms: bool = False,
        cancelled: bool = False,
        codes: list[str | None] | None = None,
    ) -> None:
        self.identity = identity
        self.secret = secret
        self.destination = destination
        self.use_sms = use_sms
        self.cancelled = cancelled
        self.codes = list(codes or [])
        self.code_requests = 0
        self.calls: list[str] = []
        self.errors: list[str] = []
        self.successes: list[str] = []

    def get_identity(self) -> str:
        self.calls.append("get_identity")
        return self.identity

    def get_secret(self) -> str:
        self.calls.append("get_secret")
        return self.secret

    def get_destination(self) -> str | None:
        self.calls.append("get_destination")
        return self.destination

    def use_alternate_channel(self) -> bool:
        self.calls.append("use_alternate_channel")
        return self.use_sms

    def is_cancelled(self) -> bool:
        self.calls.append("is_cancelled")
        return self.cancelled

    def get_candidate_code(self) -> str | None:
        self.code_requests += 1
        if not self.codes:
            return None
        return self.codes.pop(0)

    def show_success(self, message: str) -> None:
        self.successes.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(
        correct_identity=CORRECT_IDENTITY,
        correct_secret=CORRECT_SECRET,
        sender_identity="no-reply@example.com",
        sender_secret="app-password",
    )


@pytest.fixture
def email_notifier() -> InMemoryEmailNotifier:
    return InMemoryEmailNotifier()


@pytest.fixture
def sms_notifier() -> InMemorySmsNotifier:
    return InMemorySmsNotifier()
