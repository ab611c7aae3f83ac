from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..core.enums import NotifyChannel
from .message import CredentialsMessage


@dataclass(frozen=True)
class NotificationOutcome:
    channel: NotifyChannel
    delivered: bool
    share_text: Optional[str] = None
    warning: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "channel": self.channel.value,
            "delivered": self.delivered,
            "share_text": self.share_text,
            "warning": self.warning,
        }


class CredentialsNotifier(ABC):
    """Strategy Pattern: one way of handing credentials to a new user.

    Implementations raise ExternalServiceError when delivery fails.
    """

    channel: NotifyChannel

    @abstractmethod
    def deliver(self, message: CredentialsMessage) -> NotificationOutcome:
        raise NotImplementedError
