"""Login orchestration: credential check, passcode dispatch, bounded retries."""

from __future__ import annotations

import logging

from twostep.auth.context import AuthenticationContext
from twostep.auth.strategy import create_strategy
from twostep.config import AuthConfig
from twostep.errors import DeliveryFailed, InvalidInput
from twostep.models import Channel, Credentials, Outcome
from twostep.presenter import Presenter
from twostep.transport.base import EmailNotifier, SmsNotifier
from twostep.validation import is_valid_phone_number

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3

SUCCESS_MESSAGE = "Successfully logged in!"
FAILURE_MESSAGE = "Authentication failed"


class AuthenticationController:
    """Runs one login flow against a presenter.

    The flow is strictly sequential. Use one controller (and so one strategy)
    per concurrent login.
    """

    def __init__(
        self,
        presenter: Presenter,
        config: AuthConfig,
        email_notifier: EmailNotifier,
        sms_notifier: SmsNotifier,
    ) -> None:
        if presenter is None:
            raise ValueError("presenter cannot be None")
        self.presenter = presenter
        self.config = config
        self.email_notifier = email_notifier
        self.sms_notifier = sms_notifier
        # Set once the presenter has been told why the login failed
        self.failure_reported = False

    def authenticate(self) -> Outcome:
        """Run the whole flow.

        Invalid input is reported to the presenter and returns FAILURE.
        DeliveryFailed propagates to the caller.
        """
        self.failure_reported = False
        if self.presenter.is_cancelled():
            logger.info("Login cancelled before start")
            return Outcome.CANCELLED

        credentials = self.collect_credentials()
        try:
            self.validate_credentials(credentials)
        except InvalidInput as e:
            logger.warning("Login input validation failed: %s", e)
            self.presenter.show_error(str(e))
            self.failure_reported = True
            return Outcome.FAILURE

        if self.perform_authentication(credentials):
            logger.info("Login succeeded for %s via %s", credentials.identity, credentials.channel.value)
            return Outcome.SUCCESS
        logger.info("Login failed for %s: verification attempts exhausted", credentials.identity)
        return Outcome.FAILURE

    def collect_credentials(self) -> Credentials:
        channel = Channel.SMS if self.presenter.use_alternate_channel() else Channel.EMAIL
        return Credentials(
            identity=self.presenter.get_identity(),
            secret=self.presenter.get_secret(),
            channel=channel,
            destination=self.presenter.get_destination() if channel is Channel.SMS else None,
        )

    def validate_credentials(self, credentials: Credentials) -> None:
        """Raise InvalidInput on the first bad field: identity, secret, then phone."""
        if credentials.identity != self.config.correct_identity:
            raise InvalidInput("Invalid email address")
        if credentials.secret != self.config.correct_secret:
            raise InvalidInput("Invalid password")
        if credentials.channel is Channel.SMS and not is_valid_phone_number(credentials.destination):
            raise InvalidInput("Invalid phone number format")

    def perform_authentication(self, credentials: Credentials) -> bool:
        strategy = create_strategy(
            credentials.channel,
            email_notifier=self.email_notifier,
            sms_notifier=self.sms_notifier,
        )
        context = AuthenticationContext()
        context.set_strategy(strategy)
        context.send_code(credentials.recipient)
        return self.verify_code(context)

    def verify_code(self, context: AuthenticationContext) -> bool:
        for attempt in range(MAX_ATTEMPTS):
            candidate = self.presenter.get_candidate_code()
            if candidate is not None and context.verify(candidate):
                return True

            remaining = MAX_ATTEMPTS - attempt - 1
            logger.info("Verification attempt %d/%d failed", attempt + 1, MAX_ATTEMPTS)
            self.presenter.show_error(f"Invalid verification code. Attempts remaining: {remaining}")
        return False


def run_authentication(controller: AuthenticationController, presenter: Presenter) -> Outcome:
    """Run a login and tell the user how it went.

    Delivery failures are shown as an error and reported as FAILURE. A failure
    the controller already explained (bad input) gets no second message.
    """
    try:
        outcome = controller.authenticate()
    except DeliveryFailed as e:
        logger.error("Login aborted: %s", e)
        presenter.show_error(f"Authentication error: {e}")
        return Outcome.FAILURE

    if outcome is Outcome.SUCCESS:
        presenter.show_success(SUCCESS_MESSAGE)
    elif outcome is Outcome.FAILURE and not controller.failure_reported:
        presenter.show_error(FAILURE_MESSAGE)
    return outcome
