"""User-facing side of a login: input collection and feedback."""

from __future__ import annotations

import getpass
from collections.abc import Callable
from typing import Protocol


class Presenter(Protocol):
    def get_identity(self) -> str: ...

    def get_secret(self) -> str: ...

    def get_destination(self) -> str | None: ...

    def use_alternate_channel(self) -> bool:
        """True to deliver the passcode by SMS instead of email."""
        ...

    def is_cancelled(self) -> bool: ...

    def get_candidate_code(self) -> str | None: ...

    def show_success(self, message: str) -> None: ...

    def show_error(self, message: str) -> None: ...


# ANSI colors
GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"


class TerminalPresenter:
    """Prompts on the terminal.

    Call ``prompt()`` before handing the presenter to a controller. Ctrl-C or
    EOF while entering credentials cancels the login.
    """

    def __init__(
        self,
        use_sms: bool | None = None,
        input_fn: Callable[[str], str] = input,
        secret_fn: Callable[[str], str] = getpass.getpass,
        output_fn: Callable[[str], None] = print,
        color: bool = True,
    ) -> None:
        self._use_sms = use_sms
        self._input = input_fn
        self._secret = secret_fn
        self._output = output_fn
        self._color = color
        self._identity = ""
        self._password = ""
        self._destination: str | None = None
        self._cancelled = False

    def prompt(self) -> None:
        try:
            self._identity = self._input("Email: ").strip()
            self._password = self._secret("Password: ")
            if self._use_sms is None:
                answer = self._input("Send code by SMS instead of email? [y/N]: ")
                self._use_sms = answer.strip().lower() in ("y", "yes")
            if self._use_sms:
                self._destination = self._input("Phone number (e.g. +14155550123): ").strip()
        except (EOFError, KeyboardInterrupt):
            self._cancelled = True
            self._output("")

    def get_identity(self) -> str:
        return self._identity

    def get_secret(self) -> str:
        return self._password

    def get_destination(self) -> str | None:
        return self._destination

    def use_alternate_channel(self) -> bool:
        return bool(self._use_sms)

    def is_cancelled(self) -> bool:
        return self._cancelled

    def get_candidate_code(self) -> str | None:
        if self._cancelled:
            return None
        try:
            return self._input("Verification code: ")
        except EOFError:
            return None
        except KeyboardInterrupt:
            self._cancelled = True
            self._output("")
            return None

    def show_success(self, message: str) -> None:
        self._output(self._paint(GREEN, message))

    def show_error(self, message: str) -> None:
        self._output(self._paint(RED, message))

    def _paint(self, color: str, message: str) -> str:
        if not self._color:
            return message
        return f"{color}{message}{RESET}"
