from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import normalize_email, require_min_length, require_non_empty
from ..core.constants import GENERATED_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH, PASSWORD_ALPHABET
from ..core.enums import AccountStatus, Role
from ..core.exceptions import (
    DuplicateEmail,
    ExternalServiceError,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from ..identity.provider import EmailInUse, IdentityProvider, InvalidEmail, WeakSecret
from ..notifications.base import CredentialsNotifier, NotificationOutcome
from ..notifications.message import CredentialsMessage
from . import permissions
from .model import Account
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _parse_role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Role must be one of: " + ", ".join(r.value for r in Role))


def _parse_status(value) -> AccountStatus:
    try:
        return AccountStatus(value)
    except ValueError:
        raise ValidationError("Status must be one of: " + ", ".join(s.value for s in AccountStatus))


@dataclass(frozen=True)
class AccountCreation:
    """Result of create_account.

    ``warning`` is set when the account exists but the credentials could not
    be delivered.
    """

    account: Account
    notification: Optional[NotificationOutcome] = None
    warning: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "account": self.account.to_dict(),
            "notification": self.notification.to_dict() if self.notification else None,
            "warning": self.warning,
        }


class UserService:
    """Use case: manage accounts (admin)."""

    def __init__(
        self,
        users: UserRepository,
        identity: IdentityProvider,
        notifier: Optional[CredentialsNotifier] = None,
    ):
        self._users = users
        self._identity = identity
        self._notifier = notifier

    @staticmethod
    def generate_password(length: int = GENERATED_PASSWORD_LENGTH) -> str:
        if length < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))

    def create_account(
        self,
        *,
        current_role: Optional[Role],
        name: str,
        email: str,
        password: str,
        role,
    ) -> AccountCreation:
        role = _parse_role(role)
        if not permissions.can_create(current_role, role):
            if role.is_admin:
                raise PermissionDenied("Only Super Admin can create Admin or Super Admin accounts")
            raise PermissionDenied("Only Admin or Super Admin can create accounts")

        name = require_non_empty(name, "Name")
        email = normalize_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.find_by_email(email):
            raise DuplicateEmail("This email is already registered")

        try:
            account_id = self._identity.create_identity(email, password)
        except EmailInUse:
            raise DuplicateEmail("This email is already registered")
        except WeakSecret:
            raise ValidationError("Password is too weak. Use at least 6 characters.")
        except InvalidEmail:
            raise ValidationError("Invalid email address")

        account = Account(
            account_id=account_id,
            name=name,
            email=email,
            role=role,
            status=AccountStatus.ACTIVE,
            created=now_local().date(),
        )
        try:
            self._users.create(account)
        except Exception as e:
            logger.exception("directory write failed for %s, removing identity %s", email, account_id)
            try:
                self._identity.delete_identity(account_id)
            except Exception:
                logger.exception("could not remove identity %s; it is now orphaned", account_id)
            raise ExternalServiceError("Could not save the user profile. Please try again.") from e

        logger.info("account created id=%s role=%s", account_id, role.value)
        outcome, warning = self._notify(account, password)
        return AccountCreation(account=account, notification=outcome, warning=warning)

    def _notify(self, account: Account, password: str):
        if self._notifier is None:
            return None, None
        message = CredentialsMessage(
            name=account.name,
            email=account.email,
            password=password,
            role=account.role.value,
        )
        try:
            return self._notifier.deliver(message), None
        except ExternalServiceError as e:
            logger.warning("credentials delivery failed for %s: %s", account.email, e)
            return None, f"User created, but the credentials could not be sent: {e}"

    def _get_manageable(self, *, current_role: Optional[Role], current_user_id: str, account_id: str) -> Account:
        target = self._users.get_by_id(account_id)
        if target is None:
            raise NotFound("User not found")
        if not permissions.can_manage(
            actor_role=current_role,
            actor_id=current_user_id,
            target_id=target.account_id,
            target_role=target.role,
        ):
            if target.account_id == current_user_id:
                raise PermissionDenied("You cannot change your own account here")
            raise PermissionDenied("You do not have permission to manage this user")
        return target

    def update_account(
        self,
        *,
        current_role: Optional[Role],
        current_user_id: str,
        account_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        status=None,
        role=None,
    ) -> Account:
        target = self._get_manageable(
            current_role=current_role, current_user_id=current_user_id, account_id=account_id
        )

        fields: dict = {}
        if name is not None:
            fields["name"] = require_non_empty(name, "Name")
        if email is not None:
            new_email = normalize_email(email)
            if new_email != target.email:
                other = self._users.find_by_email(new_email)
                if other and other.account_id != target.account_id:
                    raise DuplicateEmail("This email is already registered")
                fields["email"] = new_email
        if status is not None:
            fields["status"] = _parse_status(status)
        if role is not None:
            new_role = _parse_role(role)
            if new_role not in permissions.assignable_roles(current_role):
                raise PermissionDenied(f"You cannot assign the {new_role.value} role")
            fields["role"] = new_role

        if fields and not self._users.update_fields(target.account_id, fields):
            raise NotFound("User not found")

        logger.info("account updated id=%s fields=%s", target.account_id, sorted(fields))
        updated = self._users.get_by_id(target.account_id)
        if updated is None:
            raise NotFound("User not found")
        return updated

    def set_blocked(
        self,
        *,
        current_role: Optional[Role],
        current_user_id: str,
        account_id: str,
        blocked: bool,
    ) -> Account:
        status = AccountStatus.BLOCKED if blocked else AccountStatus.ACTIVE
        return self.update_account(
            current_role=current_role,
            current_user_id=current_user_id,
            account_id=account_id,
            status=status,
        )

    def delete_account(self, *, current_role: Optional[Role], current_user_id: str, account_id: str) -> None:
        """Remove the directory record only.

        The identity stays behind but can no longer resolve a profile, so it
        cannot log in.
        """
        target = self._get_manageable(
            current_role=current_role, current_user_id=current_user_id, account_id=account_id
        )
        if not self._users.delete_by_id(target.account_id):
            raise NotFound("User not found")
        logger.info("account deleted id=%s", target.account_id)

    def list_accounts(self, *, current_role: Optional[Role]) -> Sequence[Account]:
        if current_role is None or not current_role.is_admin:
            raise PermissionDenied("Only Admin or Super Admin can list users")
        return [a for a in self._users.list_all() if permissions.can_view(current_role, a.role)]

    def get_account(self, *, current_role: Optional[Role], account_id: str) -> Account:
        if current_role is None or not current_role.is_admin:
            raise PermissionDenied("Only Admin or Super Admin can view users")
        account = self._users.get_by_id(account_id)
        if account is None or not permissions.can_view(current_role, account.role):
            raise NotFound("User not found")
        return account

    def name_for(self, account_id: str) -> Optional[str]:
        account = self._users.get_by_id(account_id)
        return account.name if account else None
