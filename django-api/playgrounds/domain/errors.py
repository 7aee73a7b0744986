"""Domain error codes for the playgrounds module."""

from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_STATE = "INVALID_STATE"
    SLOT_CONFLICT = "SLOT_CONFLICT"
    SELF_BOOKING_NOT_ALLOWED = "SELF_BOOKING_NOT_ALLOWED"
    DUPLICATE_REPORT = "DUPLICATE_REPORT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """Raised when an entity does not exist (or is not visible)."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=f"{entity} not found",
        )
        self.entity = entity
        self.entity_id = entity_id


class UnauthorizedError(DomainError):
    """Raised when the caller lacks rights over the entity."""

    def __init__(self, message: str = "You are not allowed to do this") -> None:
        super().__init__(code=ErrorCode.UNAUTHORIZED, message=message)


class InvalidStateError(DomainError):
    """Raised when an operation is not legal from the current state."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_STATE, message=message)


class SlotConflictError(DomainError):
    """Raised when the requested slot overlaps an existing booking."""

    def __init__(self, conflicting_ids: tuple = ()) -> None:
        super().__init__(
            code=ErrorCode.SLOT_CONFLICT,
            message="This time slot is already booked",
        )
        self.conflicting_ids = conflicting_ids


class SelfBookingNotAllowedError(DomainError):
    """Raised when an owner tries to book their own playground."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SELF_BOOKING_NOT_ALLOWED,
            message="You cannot book your own playground",
        )


class DuplicateReportError(DomainError):
    """Raised when a user reports the same playground twice."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_REPORT,
            message="You have already reported this playground",
        )


class ValidationError(DomainError):
    """Malformed input. Returned by validators, raised by services."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(code=ErrorCode.VALIDATION_ERROR, message=message)
        self.field = field


class StorageError(DomainError):
    """Raised when the backing store fails. Never retried."""

    def __init__(self, message: str = "Storage is unavailable") -> None:
        super().__init__(code=ErrorCode.STORAGE_ERROR, message=message)
