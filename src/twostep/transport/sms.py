"""SMS delivery via the Twilio REST API."""

from __future__ import annotations

import logging

import httpx

from twostep.config import settings
from twostep.transport.base import SmsNotifier

logger = logging.getLogger(__name__)

TWILIO_BASE = "https://api.twilio.com/2010-04-01"


class TwilioSmsNotifier(SmsNotifier):
    """Posts messages to Twilio's Messages resource.

    Pass ``client`` to reuse a connection pool (or a mock transport in tests).
    """

    def __init__(
        self,
        account_sid: str | None = None,
        auth_token: str | None = None,
        from_number: str | None = None,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.account_sid = account_sid if account_sid is not None else settings.twilio_account_sid
        self._auth_token = auth_token if auth_token is not None else settings.twilio_auth_token
        self.from_number = from_number if from_number is not None else settings.twilio_phone_number
        if not (self.account_sid and self._auth_token and self.from_number):
            raise ValueError(
                "Twilio not configured. "
                "Set TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN and TWILIO_PHONE_NUMBER."
            )
        self._client = client
        self._timeout = timeout

    @property
    def messages_url(self) -> str:
        return f"{TWILIO_BASE}/Accounts/{self.account_sid}/Messages.json"

    def send(self, recipient: str, message: str, context: str) -> bool:
        if not recipient or not recipient.strip():
            logger.error("Recipient phone number is empty")
            return False
        if not message or not message.strip():
            logger.error("SMS body is empty")
            return False

        try:
            resp = self._post(
                data={"To": recipient, "From": self.from_number, "Body": message},
            )
            resp.raise_for_status()
        except httpx.HTTPError:
            logger.error("Failed to send SMS to %s (%s)", recipient, context, exc_info=True)
            return False

        try:
            sid = resp.json().get("sid")
        except ValueError:
            sid = None
        logger.info("SMS sent to %s (%s, sid=%s)", recipient, context, sid)
        return True

    def _post(self, data: dict[str, str]) -> httpx.Response:
        auth = (self.account_sid, self._auth_token)
        if self._client is not None:
            return self._client.post(self.messages_url, data=data, auth=auth, timeout=self._timeout)
        return httpx.post(self.messages_url, data=data, auth=auth, timeout=self._timeout)
