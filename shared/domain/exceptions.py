"""
Domain Error Taxonomy

Errors raised by the services that own an invariant. Each carries the HTTP
status the API layer answers with; the translation itself lives in
``shared.infrastructure.exception_handler``.
"""


class DomainError(Exception):
    """Base class for expected, caller-facing failures."""

    status_code = 400
    default_message = "Request could not be processed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    """Missing or malformed input, invalid enum values."""

    status_code = 400
    default_message = "Invalid request."


class AuthorizationError(DomainError):
    """Authenticated caller lacks the role or scope for the action."""

    status_code = 403
    default_message = "You do not have permission to perform this action."


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Not found."


class ConflictError(DomainError):
    """An invariant would be violated: double booking, repeated resolution."""

    status_code = 409
    default_message = "Request conflicts with the current state."


class StorageError(DomainError):
    """Persistence failure, rendered to clients with the default message only."""

    status_code = 500
    default_message = "Internal storage error."
