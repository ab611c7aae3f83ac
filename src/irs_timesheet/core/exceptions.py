class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login fails."""


class InvalidCredentials(AuthenticationError):
    """Wrong password for an existing identity."""


class AccountNotFound(AuthenticationError):
    """No identity exists for the given email."""


class AccountBlocked(AuthenticationError):
    """The identity or its directory record is blocked."""


class ProfileIncomplete(AuthenticationError):
    """The identity exists but has no usable directory record."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class PermissionDenied(AuthorizationError):
    """Role gating rejected the action. Nothing was changed."""


class DuplicateEmail(DomainError):
    """Another account already uses this email (case-insensitive)."""


class StateConflict(DomainError):
    """A transition was attempted from the wrong status."""


class NoHoursEntered(StateConflict):
    """A week cannot be submitted without any hours."""


class CommentRequired(StateConflict):
    """Rejecting a week needs a non-empty comment."""


class NotFound(DomainError):
    """Unknown week or user id."""


class ExternalServiceError(DomainError):
    """The identity provider, database or mail channel is unavailable."""


class SortedQueryUnavailable(Exception):
    """The store cannot serve an ordered query; callers sort in memory."""
