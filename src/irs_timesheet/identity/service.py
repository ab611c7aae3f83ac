from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role
from ..core.exceptions import (
    AccountBlocked,
    AccountNotFound,
    InvalidCredentials,
    ProfileIncomplete,
)
from ..users.repository import UserRepository
from .provider import IdentityDisabled, IdentityNotFound, IdentityProvider, WrongSecret

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login. Never role-less."""

    account_id: str
    name: str
    email: str
    role: Role

    def to_dict(self) -> dict:
        return {"id": self.account_id, "name": self.name, "email": self.email, "role": self.role.value}


class AuthService:
    """Use case: authenticate user (login) and resolve the session principal."""

    def __init__(self, identity: IdentityProvider, users: UserRepository):
        self._identity = identity
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        try:
            identity_id = self._identity.verify_identity(email, password)
        except IdentityNotFound:
            raise AccountNotFound("No account found with this email. Please check your email or contact admin.")
        except WrongSecret:
            raise InvalidCredentials("Incorrect password. Please try again.")
        except IdentityDisabled:
            raise AccountBlocked("This account has been disabled. Contact support.")

        account = self._users.get_by_id(identity_id)
        if account is None:
            logger.warning("identity %s has no directory record", identity_id)
            self._identity.sign_out(identity_id)
            raise ProfileIncomplete("User profile not found. Please contact admin.")

        if account.is_blocked:
            self._identity.sign_out(identity_id)
            raise AccountBlocked("Account blocked by company. Contact support.")

        if account.role is None:
            self._identity.sign_out(identity_id)
            raise ProfileIncomplete("User profile is incomplete. Please contact admin.")

        logger.info("login ok account=%s role=%s", account.account_id, account.role.value)
        return SessionUser(
            account_id=account.account_id,
            name=account.name,
            email=account.email,
            role=account.role,
        )

    def current_account(self, account_id: str) -> Optional[SessionUser]:
        """Re-resolve a session principal; None when it may no longer act."""
        account = self._users.get_by_id(account_id)
        if account is None or account.is_blocked or account.role is None:
            return None
        return SessionUser(
            account_id=account.account_id,
            name=account.name,
            email=account.email,
            role=account.role,
        )

    def logout(self, account_id: str) -> None:
        self._identity.sign_out(account_id)
