from __future__ import annotations

import smtplib

import pytest

from irs_timesheet.core.enums import NotifyChannel
from irs_timesheet.core.exceptions import ExternalServiceError, ValidationError
from irs_timesheet.notifications.factory import NotifierFactory
from irs_timesheet.notifications.mail_queue_notifier import MailQueueCredentialsNotifier
from irs_timesheet.notifications.message import CredentialsMessage
from irs_timesheet.notifications.share_notifier import ShareCredentialsNotifier
from irs_timesheet.notifications.smtp_notifier import SMTPConfig, SMTPCredentialsNotifier

MESSAGE = CredentialsMessage(name="Jane <Smith>", email="jane@irs.com", password="Ab3dEf7hJk", role="Manager")


class InMemoryMailQueue:
    def __init__(self):
        self.docs = []

    def enqueue(self, *, to: str, subject: str, html: str) -> int:
        self.docs.append({"to": to, "subject": subject, "html": html})
        return len(self.docs)


class FakeSMTP:
    instances: list["FakeSMTP"] = []
    fail_login = False

    def __init__(self, host, port, timeout=None):
        self.host, self.port = host, port
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        if FakeSMTP.fail_login:
            raise smtplib.SMTPAuthenticationError(535, b"bad credentials")
        self.calls.append(("login", user, password))

    def sendmail(self, sender, to, body):
        self.calls.append(("sendmail", sender, tuple(to)))


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail_login = False
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


def test_message_html_lists_credentials_escaped():
    html = MESSAGE.html()
    assert MESSAGE.subject == "Your IRS Timesheet login credentials"
    assert "Hello Jane &lt;Smith&gt;," in html
    assert "<strong>Password:</strong> Ab3dEf7hJk" in html
    assert "<strong>Role:</strong> Manager" in html
    assert "Email: jane@irs.com" in MESSAGE.text()


def test_share_returns_text_for_admin():
    outcome = ShareCredentialsNotifier().deliver(MESSAGE)
    assert outcome.delivered
    assert outcome.share_text == MESSAGE.text()


def test_mail_queue_writes_document():
    queue = InMemoryMailQueue()
    outcome = MailQueueCredentialsNotifier(queue).deliver(MESSAGE)

    assert outcome.channel == NotifyChannel.MAIL_QUEUE
    assert queue.docs == [{"to": "jane@irs.com", "subject": MESSAGE.subject, "html": MESSAGE.html()}]


def test_smtp_sends_with_starttls_and_login(fake_smtp):
    cfg = SMTPConfig.from_dict({"host": "smtp.test", "port": 2525, "user": "bot@irs.com", "password": "abcd efgh"})

    outcome = SMTPCredentialsNotifier(cfg).deliver(MESSAGE)

    assert outcome.delivered
    [smtp] = fake_smtp.instances
    assert (smtp.host, smtp.port) == ("smtp.test", 2525)
    assert smtp.calls == [
        "starttls",
        ("login", "bot@irs.com", "abcdefgh"),
        ("sendmail", "bot@irs.com", ("jane@irs.com",)),
    ]


def test_smtp_failure_becomes_external_service_error(fake_smtp):
    fake_smtp.fail_login = True
    notifier = SMTPCredentialsNotifier(SMTPConfig.from_dict({"host": "smtp.test", "user": "bot@irs.com"}))
    with pytest.raises(ExternalServiceError):
        notifier.deliver(MESSAGE)


def test_factory_picks_one_channel():
    factory = NotifierFactory(smtp_config={"host": "smtp.test"}, mail_queue=InMemoryMailQueue())

    assert isinstance(factory.for_channel("share"), ShareCredentialsNotifier)
    assert isinstance(factory.for_channel("mail_queue"), MailQueueCredentialsNotifier)
    assert isinstance(factory.for_channel(NotifyChannel.SMTP), SMTPCredentialsNotifier)
    with pytest.raises(ValidationError):
        factory.for_channel("pigeon")
    with pytest.raises(ValidationError):
        NotifierFactory().for_channel("smtp")
