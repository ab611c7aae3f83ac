from __future__ import annotations

import logging

from ..core.enums import NotifyChannel
from .base import CredentialsNotifier, NotificationOutcome
from .message import CredentialsMessage
from .repository import MailQueueRepository

logger = logging.getLogger(__name__)


class MailQueueCredentialsNotifier(CredentialsNotifier):
    """Queue a mail document; an external extension does the sending."""

    channel = NotifyChannel.MAIL_QUEUE

    def __init__(self, queue: MailQueueRepository):
        self._queue = queue

    def deliver(self, message: CredentialsMessage) -> NotificationOutcome:
        mail_id = self._queue.enqueue(to=message.email, subject=message.subject, html=message.html())
        logger.info("credentials email queued id=%s to=%s", mail_id, message.email)
        return NotificationOutcome(channel=self.channel, delivered=True)
