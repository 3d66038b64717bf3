"""twostep CLI — unified entry point.

Usage:
    python -m twostep login                 # Interactive login (email or SMS code)
    python -m twostep login --sms           # Skip the channel prompt, use SMS
    python -m twostep login --dry-run       # Log the code instead of sending it
    python -m twostep check-config          # Validate the auth config file
"""

from __future__ import annotations

import argparse
import logging
import sys

from twostep.auth.controller import AuthenticationController, run_authentication
from twostep.config import AuthConfig, load_auth_config, settings
from twostep.errors import ConfigError
from twostep.models import Outcome
from twostep.presenter import TerminalPresenter
from twostep.transport.base import EmailNotifier, SmsNotifier
from twostep.transport.memory import InMemoryEmailNotifier, InMemorySmsNotifier
from twostep.transport.sms import TwilioSmsNotifier
from twostep.transport.smtp import SmtpEmailNotifier

logger = logging.getLogger("twostep")

EXIT_CODES = {
    Outcome.SUCCESS: 0,
    Outcome.FAILURE: 1,
    Outcome.CANCELLED: 130,
}
EXIT_CONFIG_ERROR = 2


def _load_config(args: argparse.Namespace) -> AuthConfig:
    try:
        return load_auth_config(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)


def build_notifiers(config: AuthConfig, dry_run: bool = False) -> tuple[EmailNotifier, SmsNotifier]:
    """Real transports, or in-memory ones that only log the message."""
    if dry_run:
        return InMemoryEmailNotifier(), InMemorySmsNotifier()
    email = SmtpEmailNotifier(config.sender_identity, config.sender_secret)
    if settings.twilio_account_sid:
        sms: SmsNotifier = TwilioSmsNotifier()
    else:
        # No carrier configured; every SMS send fails and the login aborts
        logger.warning("TWILIO_ACCOUNT_SID not set, SMS delivery disabled")
        sms = InMemorySmsNotifier(succeed=False)
    return email, sms


def cmd_login(args: argparse.Namespace) -> None:
    """Run an interactive login."""
    config = _load_config(args)
    try:
        email, sms = build_notifiers(config, dry_run=args.dry_run)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    presenter = TerminalPresenter(use_sms=True if args.sms else None, color=sys.stdout.isatty())
    presenter.prompt()

    controller = AuthenticationController(presenter, config, email, sms)
    outcome = run_authentication(controller, presenter)
    sys.exit(EXIT_CODES[outcome])


def _mask(value: str) -> str:
    return value[:2] + "*" * max(len(value) - 2, 0) if len(value) > 4 else "*" * len(value)


def cmd_check_config(args: argparse.Namespace) -> None:
    """Validate the auth config and print it with secrets masked."""
    config = _load_config(args)
    print(f"\n{'Key':<20} {'Value'}")
    print("-" * 45)
    print(f"  {'correct_identity':<18} {config.correct_identity}")
    print(f"  {'correct_secret':<18} {_mask(config.correct_secret)}")
    print(f"  {'sender_identity':<18} {config.sender_identity}")
    print(f"  {'sender_secret':<18} {_mask(config.sender_secret)}")
    print(f"\n  SMTP: {settings.smtp_host}:{settings.smtp_port}")
    print(f"  Twilio: {'configured' if settings.twilio_account_sid else 'not configured'}\n")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="twostep",
        description="twostep — password plus email/SMS passcode login",
    )
    sub = parser.add_subparsers(dest="command", help="Command to run")

    # login
    p_login = sub.add_parser("login", help="Interactive login")
    p_login.add_argument("--config", help="Path to the auth YAML file")
    p_login.add_argument("--sms", action="store_true", help="Deliver the code by SMS")
    p_login.add_argument("--dry-run", action="store_true", help="Log codes instead of sending them")
    p_login.add_argument("-v", "--verbose", action="store_true")

    # check-config
    p_check = sub.add_parser("check-config", help="Validate the auth config file")
    p_check.add_argument("--config", help="Path to the auth YAML file")
    p_check.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    dispatch = {
        "login": cmd_login,
        "check-config": cmd_check_config,
    }
    dispatch[args.command](args)


if __name__ == "__main__":
    main()
