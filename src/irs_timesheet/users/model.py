from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_display_date
from ..core.enums import AccountStatus, Role


@dataclass(frozen=True)
class Account:
    """Directory record of a user.

    Distinct from the identity provider's credential record: this is what
    carries role and status. ``role`` may be None for a half-written profile.
    """

    account_id: str
    name: str
    email: str
    role: Optional[Role]
    status: AccountStatus
    created: date

    @property
    def is_blocked(self) -> bool:
        return self.status == AccountStatus.BLOCKED

    def to_dict(self) -> dict:
        return {
            "id": self.account_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value if self.role else None,
            "status": self.status.value,
            "created": format_display_date(self.created),
        }
