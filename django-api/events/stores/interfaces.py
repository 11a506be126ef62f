"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from dataclasses import dataclass

from events.domain import (
    Category,
    CategoryId,
    Comment,
    CommentId,
    Event,
    EventId,
    NewEvent,
    Rating,
    UserId,
    UserRef,
)


@dataclass(frozen=True)
class EventQuery:
    """Filter for event listings. Unset fields do not filter."""

    title_contains: str | None = None
    category_id: CategoryId | None = None
    organizer_id: UserId | None = None
    exclude_event_id: EventId | None = None


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager wrapping a single transaction."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId, for_update: bool = False) -> Event | None:
        """Return an event by ID, or None if not found.

        With for_update the row stays locked until the surrounding
        transaction ends.
        """
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def find_events(self, query: EventQuery, offset: int, limit: int) -> list[Event]:
        """Return matching events ordered by created_at descending."""
        ...

    @abstractmethod
    def count_events(self, query: EventQuery) -> int:
        """Return the number of events matching the query."""
        ...

    @abstractmethod
    def create_event(self, organizer_id: UserId, fields: NewEvent) -> Event:
        """Insert an event with full inventory and no ratings."""
        ...

    @abstractmethod
    def update_event(
        self, event_id: EventId, fields: NewEvent, available_tickets: int | None = None
    ) -> Event:
        """Overwrite editable fields.

        available_tickets is written in the same statement when given and left
        alone when None, so concurrent decrements are never overwritten.
        """
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> bool:
        """Delete an event. Returns False if nothing was deleted."""
        ...

    @abstractmethod
    def decrement_available_tickets(self, event_id: EventId, quantity: int) -> Event | None:
        """Atomically subtract quantity if at least that many tickets remain.

        Returns the updated event, or None when no row satisfied the
        condition (event missing or not enough tickets).
        """
        ...

    @abstractmethod
    def upsert_rating(self, event_id: EventId, user_id: UserId, value: int) -> None:
        """Insert or replace the user's rating for the event."""
        ...

    @abstractmethod
    def get_ratings(self, event_id: EventId) -> list[Rating]:
        """Return all ratings for an event."""
        ...

    @abstractmethod
    def set_average_rating(self, event_id: EventId, average: float) -> None:
        """Persist the derived average rating."""
        ...


class CategoryStore(ABC):
    """Interface for category persistence operations."""

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """Return all categories ordered by name."""
        ...

    @abstractmethod
    def get_category(self, category_id: CategoryId) -> Category | None:
        """Return a category by ID, or None if not found."""
        ...

    @abstractmethod
    def find_category_by_name(self, name: str) -> Category | None:
        """Return the first category whose name contains `name`, ignoring case."""
        ...

    @abstractmethod
    def create_category(self, name: str) -> Category | None:
        """Insert a category. Returns None if the name is taken."""
        ...


class UserStore(ABC):
    """Interface for looking up users."""

    @abstractmethod
    def get_user(self, user_id: UserId) -> UserRef | None:
        """Return a user by ID, or None if not found."""
        ...


class CommentStore(ABC):
    """Interface for comment persistence operations."""

    @abstractmethod
    def create_comment(self, event_id: EventId, user_id: UserId, content: str) -> Comment:
        """Insert a comment stamped with the current time."""
        ...

    @abstractmethod
    def get_comment(self, comment_id: CommentId) -> Comment | None:
        """Return a comment by ID, or None if not found."""
        ...

    @abstractmethod
    def list_comments(self, event_id: EventId) -> list[Comment]:
        """Return comments for an event ordered by created_at descending."""
        ...

    @abstractmethod
    def delete_comment(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        ...
