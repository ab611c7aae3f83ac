from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from ..core.enums import NotifyChannel
from ..core.exceptions import ExternalServiceError
from .base import CredentialsNotifier, NotificationOutcome
from .message import CredentialsMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SMTPConfig:
    host: str
    port: int = 587
    user: str = ""
    password: str = ""
    sender: str = ""
    use_tls: bool = True
    timeout: int = 15

    @classmethod
    def from_dict(cls, cfg: dict) -> "SMTPConfig":
        user = str(cfg.get("user", ""))
        return cls(
            host=str(cfg.get("host", "localhost")),
            port=int(cfg.get("port", 587)),
            user=user,
            # Gmail app passwords are shown with spaces.
            password=str(cfg.get("password", "")).replace(" ", ""),
            sender=str(cfg.get("sender") or user),
            use_tls=bool(cfg.get("use_tls", True)),
            timeout=int(cfg.get("timeout", 15)),
        )


class SMTPCredentialsNotifier(CredentialsNotifier):
    """Transactional send over SMTP."""

    channel = NotifyChannel.SMTP

    def __init__(self, config: SMTPConfig):
        self._config = config

    def _build(self, message: CredentialsMessage) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = f"IRS Timesheet <{self._config.sender}>"
        msg["To"] = message.email
        msg["Subject"] = message.subject
        msg.attach(MIMEText(message.text(), "plain"))
        msg.attach(MIMEText(message.html(), "html"))
        return msg

    def deliver(self, message: CredentialsMessage) -> NotificationOutcome:
        msg = self._build(message)
        try:
            with smtplib.SMTP(self._config.host, self._config.port, timeout=self._config.timeout) as s:
                if self._config.use_tls:
                    s.starttls()
                if self._config.user:
                    s.login(self._config.user, self._config.password)
                s.sendmail(self._config.sender, [message.email], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise ExternalServiceError(f"Could not send credentials email: {e}") from e

        logger.info("credentials email sent to %s", message.email)
        return NotificationOutcome(channel=self.channel, delivered=True)
