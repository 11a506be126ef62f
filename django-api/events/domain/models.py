"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from events.domain.value_objects import (
    Capacity,
    CategoryId,
    CommentId,
    EventId,
    Money,
    UserId,
)


@dataclass(frozen=True)
class UserRef:
    """Display reference to a user."""

    id: UserId
    first_name: str
    last_name: str


@dataclass(frozen=True)
class Category:
    """Domain representation of a Category."""

    id: CategoryId
    name: str


@dataclass(frozen=True)
class Rating:
    """One user's rating of an event."""

    user_id: UserId
    value: int


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event.

    available_tickets is always within [0, total_tickets].
    """

    id: EventId
    title: str
    description: str
    location: str
    image_url: str
    url: str
    start_date_time: datetime
    end_date_time: datetime
    price: Money
    is_free: bool
    category: Category | None
    organizer: UserRef
    total_tickets: Capacity
    available_tickets: Capacity
    average_rating: float
    created_at: datetime
    ratings: tuple[Rating, ...] = ()


@dataclass(frozen=True)
class NewEvent:
    """Caller-supplied fields for creating or editing an event.

    Inventory and rating fields are derived and never part of the input.
    """

    title: str
    description: str
    location: str
    image_url: str
    url: str
    start_date_time: datetime
    end_date_time: datetime
    price: Money
    is_free: bool
    category_id: CategoryId | None
    total_tickets: Capacity


@dataclass(frozen=True)
class EventPage:
    """One page of events plus the total page count for the same filter."""

    data: list[Event]
    total_pages: int


@dataclass(frozen=True)
class Comment:
    """Domain representation of a Comment."""

    id: CommentId
    content: str
    event_id: EventId
    event_title: str
    author: UserRef
    created_at: datetime
