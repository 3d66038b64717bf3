"""Tests for the SMTP, Twilio and in-memory notifiers."""

from __future__ import annotations

import smtplib
from urllib.parse import parse_qs

import httpx
import pytest

from twostep.transport.memory import InMemoryEmailNotifier, InMemorySmsNotifier
from twostep.transport.sms import TwilioSmsNotifier
from twostep.transport.smtp import SmtpEmailNotifier


class FakeSMTP:
    instances: list[FakeSMTP] = []
    fail_with: Exception | None = None

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.logins: list[tuple[str, str]] = []
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def login(self, user, password):
        if FakeSMTP.fail_with is not None:
            raise FakeSMTP.fail_with
        self.logins.append((user, password))

    def send_message(self, msg):
        self.sent.append(msg)


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail_with = None
    monkeypatch.setattr("twostep.transport.smtp.smtplib.SMTP_SSL", FakeSMTP)
    return FakeSMTP


# --- SMTP ---


@pytest.mark.parametrize(
    ("sender", "secret", "match"),
    [
        ("", "pw", "must not be empty"),
        ("   ", "pw", "must not be empty"),
        ("not-an-address", "pw", "Invalid sender email format"),
        ("sender@example.com", "", "password must not be empty"),
    ],
)
def test_smtp_rejects_bad_sender(sender, secret, match):
    with pytest.raises(ValueError, match=match):
        SmtpEmailNotifier(sender, secret)


def test_smtp_sends(fake_smtp):
    notifier = SmtpEmailNotifier("sender@example.com", "app-pw", host="smtp.test", port=2465)
    assert notifier.send("user@example.com", "Subject", "Body text") is True

    server = fake_smtp.instances[0]
    assert (server.host, server.port) == ("smtp.test", 2465)
    assert server.logins == [("sender@example.com", "app-pw")]
    msg = server.sent[0]
    assert msg["From"] == "sender@example.com"
    assert msg["To"] == "user@example.com"
    assert msg["Subject"] == "Subject"
    assert msg.get_content().strip() == "Body text"


def test_smtp_uses_settings_defaults(fake_smtp):
    SmtpEmailNotifier("sender@example.com", "app-pw").send("user@example.com", "S", "B")
    assert (fake_smtp.instances[0].host, fake_smtp.instances[0].port) == ("smtp.gmail.com", 465)


@pytest.mark.parametrize(
    ("recipient", "subject", "body"),
    [("", "S", "B"), ("user@example.com", " ", "B"), ("user@example.com", "S", "")],
)
def test_smtp_rejects_blank_fields(fake_smtp, recipient, subject, body):
    notifier = SmtpEmailNotifier("sender@example.com", "app-pw")
    with pytest.raises(ValueError, match="required"):
        notifier.send(recipient, subject, body)
    assert fake_smtp.instances == []


@pytest.mark.parametrize(
    "error",
    [smtplib.SMTPAuthenticationError(535, b"bad credentials"), ConnectionRefusedError("refused")],
    ids=["auth", "network"],
)
def test_smtp_failure_returns_false(fake_smtp, error):
    fake_smtp.fail_with = error
    notifier = SmtpEmailNotifier("sender@example.com", "app-pw")
    assert notifier.send("user@example.com", "S", "B") is False


# --- Twilio ---


def _twilio(handler) -> TwilioSmsNotifier:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return TwilioSmsNotifier("AC123", "token", "+15005550006", client=client)


def test_twilio_requires_settings():
    with pytest.raises(ValueError, match="Twilio not configured"):
        TwilioSmsNotifier("", "", "")


def test_twilio_sends():
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(201, json={"sid": "SM1", "status": "queued"})

    notifier = _twilio(handler)
    assert notifier.send("+14155550123", "Your verification code is: 123456", "verification") is True

    req = requests[0]
    assert req.method == "POST"
    assert str(req.url) == "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json"
    assert req.headers["Authorization"].startswith("Basic ")
    form = parse_qs(req.content.decode())
    assert form == {
        "To": ["+14155550123"],
        "From": ["+15005550006"],
        "Body": ["Your verification code is: 123456"],
    }


def test_twilio_non_json_success_still_sent():
    notifier = _twilio(lambda request: httpx.Response(201, text="<Response/>"))
    assert notifier.send("+14155550123", "hi", "verification") is True


def test_twilio_http_error_returns_false():
    notifier = _twilio(lambda request: httpx.Response(400, json={"code": 21211, "message": "Invalid 'To'"}))
    assert notifier.send("+14155550123", "hi", "verification") is False


def test_twilio_network_error_returns_false():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    assert _twilio(handler).send("+14155550123", "hi", "verification") is False


@pytest.mark.parametrize(("recipient", "message"), [("", "hi"), ("  ", "hi"), ("+14155550123", "")])
def test_twilio_blank_fields_skip_request(recipient, message):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(201, json={})

    assert _twilio(handler).send(recipient, message, "verification") is False
    assert calls == []


# --- in-memory ---


def test_memory_notifiers_record_messages():
    email, sms = InMemoryEmailNotifier(), InMemorySmsNotifier(succeed=False)
    assert email.send("user@example.com", "Subj", "Body") is True
    assert sms.send("+14155550123", "Body", "verification") is False
    assert email.outbox[0].subject == "Subj"
    assert sms.outbox[0].context == "verification"
