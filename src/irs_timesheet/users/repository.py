from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Account


class UserRepository(Protocol):
    """Directory of accounts (the ``users`` collection).

    The service layer depends on this interface, never on a concrete DB.
    """

    def get_by_id(self, account_id: str) -> Optional[Account]:
        raise NotImplementedError

    def find_by_email(self, email: str) -> Optional[Account]:
        """Case-insensitive lookup."""

        raise NotImplementedError

    def create(self, account: Account) -> None:
        raise NotImplementedError

    def update_fields(self, account_id: str, fields: dict) -> bool:
        """Merge ``fields`` (name/email/role/status) into the record."""

        raise NotImplementedError

    def delete_by_id(self, account_id: str) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Account]:
        """Newest first."""

        raise NotImplementedError
