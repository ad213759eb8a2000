class DomainError(Exception):
    """Base exception for business rule violations.

    ``http_status`` is the status code the API boundary answers with.
    """

    http_status = 400


class Unauthenticated(DomainError):
    """Raised when the identity claim is missing, expired or tampered."""

    http_status = 401


class ForbiddenError(DomainError):
    """Raised when a user lacks the role or ownership for an action."""

    http_status = 403


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    http_status = 400


class NotFoundError(DomainError):
    http_status = 404


class ConflictError(DomainError):
    """Raised when an action would duplicate existing state."""

    http_status = 409


class InvalidStateTransition(DomainError):
    """Raised when a workflow item is not in a state that allows the action."""

    http_status = 409


class InvariantViolation(DomainError):
    """Raised when computed data contradicts a record invariant."""

    http_status = 400


class StoreError(DomainError):
    """Raised when the underlying persistence layer fails."""

    http_status = 500
