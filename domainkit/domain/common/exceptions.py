"""
Domain layer exceptions.

These exceptions represent contract violations in the modeling primitives:
malformed identity snapshots, write-once key re-assignment, invalid value
object properties. They are programming errors on the caller's side and are
never retried.
"""


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain exceptions should inherit from this class
    so they can be caught and handled uniformly.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """
    Raised when domain validation fails.

    Example: Invalid email format, negative quantity, etc.
    """

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidSnapshotError(DomainError):
    """
    Raised when an identity snapshot cannot be restored.

    Example: Snapshot without a local token, or with a malformed timestamp.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message, {"errors": errors} if errors else None)
        self.errors = errors or []


class KeyAlreadySetError(DomainError):
    """
    Raised when a write-once business key is assigned a second time.
    """

    def __init__(self, slot: str) -> None:
        super().__init__(f"{slot.capitalize()} key has already been set", {"slot": slot})
        self.slot = slot


class InvalidKeyError(DomainError):
    """
    Raised when a business key is None.
    """

    def __init__(self, slot: str) -> None:
        super().__init__(f"{slot.capitalize()} key cannot be None", {"slot": slot})
        self.slot = slot


class EventDeserializationError(DomainError):
    """
    Raised when a serialized domain event cannot be turned back into an event.

    Example: Unknown event type, or fields that the event class does not define.
    """


class ResultAccessError(DomainError):
    """
    Raised when reading the value of a failed Result or the error of a successful one.
    """
