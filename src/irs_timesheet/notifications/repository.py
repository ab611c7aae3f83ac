from __future__ import annotations

from typing import Protocol


class MailQueueRepository(Protocol):
    """The ``mail`` collection read by an external sender."""

    def enqueue(self, *, to: str, subject: str, html: str) -> int:
        raise NotImplementedError
