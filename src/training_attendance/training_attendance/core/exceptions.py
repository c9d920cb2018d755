class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when an actor lacks permission for an action."""


class TimeFormatError(DomainError, ValueError):
    """Raised when a time-of-day text or hour/minute pair is malformed."""


class FormValidationError(ValidationError):
    """Raised when a submitted edit form still has field errors.

    ``result`` holds every field error found in the batch.
    """

    def __init__(self, result):
        super().__init__(f"{len(result.errors)} field error(s)")
        self.result = result
