from __future__ import annotations

from ..core.enums import NotifyChannel
from .base import CredentialsNotifier, NotificationOutcome
from .message import CredentialsMessage


class ShareCredentialsNotifier(CredentialsNotifier):
    """Hand the message back to the admin to paste or share themselves."""

    channel = NotifyChannel.SHARE

    def deliver(self, message: CredentialsMessage) -> NotificationOutcome:
        return NotificationOutcome(channel=self.channel, delivered=True, share_text=message.text())
