from __future__ import annotations

from typing import Protocol


class IdentityError(Exception):
    """Failure reported by the identity provider."""


class EmailInUse(IdentityError):
    pass


class WeakSecret(IdentityError):
    pass


class InvalidEmail(IdentityError):
    pass


class IdentityNotFound(IdentityError):
    pass


class WrongSecret(IdentityError):
    pass


class IdentityDisabled(IdentityError):
    pass


class IdentityProvider(Protocol):
    """Credential store. Knows nothing about roles or profiles."""

    def create_identity(self, email: str, secret: str) -> str:
        """Return the new identity id.

        Raises EmailInUse, WeakSecret or InvalidEmail.
        """

        raise NotImplementedError

    def verify_identity(self, email: str, secret: str) -> str:
        """Return the identity id when the secret matches.

        Raises IdentityNotFound, WrongSecret or IdentityDisabled.
        """

        raise NotImplementedError

    def sign_out(self, identity_id: str) -> None:
        raise NotImplementedError

    def delete_identity(self, identity_id: str) -> bool:
        """Remove the credential record (compensation after a failed profile write)."""

        raise NotImplementedError
