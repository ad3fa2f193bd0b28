class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ScheduleConflictError(ValidationError):
    """Raised when a class would overlap another active class in the same room."""

    def __init__(self, message: str, *, conflicting_class_id: str):
        super().__init__(message)
        self.conflicting_class_id = conflicting_class_id


class NotificationDeliveryError(DomainError):
    """Raised when a notification cannot be addressed or handed to the mailer."""
