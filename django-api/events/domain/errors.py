"""Domain error codes for the events and orders modules."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    INVALID_ID = "INVALID_ID"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNAUTHORIZED = "UNAUTHORIZED"
    INSUFFICIENT_INVENTORY = "INSUFFICIENT_INVENTORY"
    DUPLICATE_ORDER = "DUPLICATE_ORDER"
    VERIFICATION_FAILED = "VERIFICATION_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """A referenced entity does not exist."""


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class UserNotFoundError(NotFoundError):
    """Raised when a user (organizer, buyer or author) is not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.USER_NOT_FOUND,
            message="User not found",
        )
        self.user_id = user_id


class CategoryNotFoundError(NotFoundError):
    """Raised when a category is not found."""

    def __init__(self, category_id: str) -> None:
        super().__init__(
            code=ErrorCode.CATEGORY_NOT_FOUND,
            message="Category not found",
        )
        self.category_id = category_id


class CommentNotFoundError(NotFoundError):
    """Raised when a comment is not found."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            code=ErrorCode.COMMENT_NOT_FOUND,
            message="Comment not found",
        )
        self.comment_id = comment_id


class InvalidArgumentError(DomainError):
    """Raised for out-of-range or otherwise unacceptable input."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_ARGUMENT) -> None:
        super().__init__(code=code, message=message)


class InvalidIdError(InvalidArgumentError):
    """Raised when an identifier is not a well-formed UUID."""

    def __init__(self, kind: str = "ID") -> None:
        super().__init__(f"Invalid {kind} format", code=ErrorCode.INVALID_ID)


class UnauthorizedError(DomainError):
    """Raised when the actor has no rights over the target."""

    def __init__(self, message: str = "Not allowed to modify this resource") -> None:
        super().__init__(
            code=ErrorCode.UNAUTHORIZED,
            message=message,
        )


class InsufficientInventoryError(DomainError):
    """Raised when a decrement would take available tickets below zero."""

    def __init__(self, event_id: str, requested: int, available: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_INVENTORY,
            message="Not enough tickets available",
        )
        self.event_id = event_id
        self.requested = requested
        self.available = available


class DuplicateOrderError(DomainError):
    """Raised when an order already exists for a payment reference."""

    def __init__(self, payment_reference: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_ORDER,
            message="Order already processed",
        )
        self.payment_reference = payment_reference


class VerificationFailedError(DomainError):
    """Raised when a payment notification fails signature verification."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.VERIFICATION_FAILED,
            message="Invalid webhook signature",
        )
