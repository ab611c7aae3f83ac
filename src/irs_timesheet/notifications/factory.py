from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import NotifyChannel
from ..core.exceptions import ValidationError
from .base import CredentialsNotifier
from .mail_queue_notifier import MailQueueCredentialsNotifier
from .repository import MailQueueRepository
from .share_notifier import ShareCredentialsNotifier
from .smtp_notifier import SMTPConfig, SMTPCredentialsNotifier


@dataclass
class NotifierFactory:
    """Factory Pattern: pick exactly one delivery channel from settings."""

    smtp_config: Optional[dict] = None
    mail_queue: Optional[MailQueueRepository] = None

    def for_channel(self, channel: str | NotifyChannel) -> CredentialsNotifier:
        try:
            channel = NotifyChannel(channel)
        except ValueError:
            raise ValidationError(f"Unknown notification channel: {channel}")

        if channel == NotifyChannel.SMTP:
            if not self.smtp_config:
                raise ValidationError("SMTP channel selected but SMTP_CONFIG is empty")
            return SMTPCredentialsNotifier(SMTPConfig.from_dict(self.smtp_config))
        if channel == NotifyChannel.MAIL_QUEUE:
            if self.mail_queue is None:
                raise ValidationError("Mail queue channel selected without a queue repository")
            return MailQueueCredentialsNotifier(self.mail_queue)
        return ShareCredentialsNotifier()
