"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId:
    """Unique identifier for a User (organizer, buyer or comment author)."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class CategoryId:
    """Unique identifier for a Category."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class CommentId:
    """Unique identifier for a Comment."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def from_minor_units(cls, minor: int | None) -> Self:
        """Build from an integer amount in cents. Missing amounts become zero."""
        if minor is None:
            return cls(amount=Decimal("0.00"))
        return cls(amount=(Decimal(minor) / 100).quantize(Decimal("0.01")))

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


@dataclass(frozen=True)
class Quantity:
    """Strictly positive number of tickets."""

    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError("Quantity must be positive")


@dataclass(frozen=True)
class RatingValue:
    """Star rating between 1 and 5 inclusive."""

    MIN = 1
    MAX = 5

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Rating must be an integer")
        if not self.MIN <= self.value <= self.MAX:
            raise ValueError(f"Rating must be between {self.MIN} and {self.MAX}")
