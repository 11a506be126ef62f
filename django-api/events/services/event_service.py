"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

EventService owns ticket inventory: available_tickets starts at
total_tickets, only moves down through decrement_tickets, and is reset
to total_tickets when an organizer changes the total.
"""

import math
from decimal import Decimal
from typing import Any

import structlog

from events.domain import (
    Capacity,
    Category,
    CategoryId,
    Event,
    EventId,
    EventPage,
    Money,
    NewEvent,
    Quantity,
    UserId,
)
from events.domain.errors import (
    CategoryNotFoundError,
    EventNotFoundError,
    InsufficientInventoryError,
    InvalidArgumentError,
    InvalidIdError,
    UnauthorizedError,
    UserNotFoundError,
)
from events.stores.interfaces import CategoryStore, EventQuery, EventStore, UserStore

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 6
DEFAULT_RELATED_PAGE_SIZE = 3


def parse_event_id(value: str) -> EventId:
    try:
        return EventId.from_string(value)
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdError("event ID") from None


def parse_user_id(value: str) -> UserId:
    try:
        return UserId.from_string(value)
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdError("user ID") from None


def parse_category_id(value: str) -> CategoryId:
    try:
        return CategoryId.from_string(value)
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdError("category ID") from None


def build_new_event(fields: dict[str, Any]) -> NewEvent:
    """Turn validated request fields into a NewEvent.

    Raises:
        InvalidArgumentError: If a value breaks a domain rule.
        InvalidIdError: If category_id is not a valid UUID.
    """
    category_id = fields.get("category_id")
    try:
        new_event = NewEvent(
            title=fields["title"],
            description=fields.get("description", ""),
            location=fields.get("location", ""),
            image_url=fields["image_url"],
            url=fields.get("url", ""),
            start_date_time=fields["start_date_time"],
            end_date_time=fields["end_date_time"],
            price=Money(Decimal(fields.get("price") or 0)),
            is_free=fields.get("is_free", False),
            category_id=parse_category_id(category_id) if category_id else None,
            total_tickets=Capacity(fields["total_tickets"]),
        )
    except ValueError as exc:
        raise InvalidArgumentError(str(exc)) from exc
    if new_event.end_date_time < new_event.start_date_time:
        raise InvalidArgumentError("Event cannot end before it starts")
    return new_event


class EventService:
    """Service for event catalog and inventory operations."""

    def __init__(
        self,
        store: EventStore,
        categories: CategoryStore,
        users: UserStore,
    ) -> None:
        self._store = store
        self._categories = categories
        self._users = users

    def _get_or_raise(self, event_id: EventId) -> Event:
        event = self._store.get_event(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event

    def _check_category(self, fields: NewEvent) -> None:
        if fields.category_id is None:
            return
        if self._categories.get_category(fields.category_id) is None:
            raise CategoryNotFoundError(str(fields.category_id))

    def _page(self, query: EventQuery, page: int, limit: int) -> EventPage:
        if page < 1 or limit < 1:
            raise InvalidArgumentError("page and limit must be positive")
        offset = (page - 1) * limit
        events = self._store.find_events(query, offset=offset, limit=limit)
        count = self._store.count_events(query)
        return EventPage(data=events, total_pages=math.ceil(count / limit))

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        return self._get_or_raise(parse_event_id(event_id))

    def create_event(self, organizer_id: str, fields: NewEvent) -> Event:
        """Create an event with full inventory and no ratings.

        Raises:
            InvalidIdError: If organizer_id is not a valid UUID.
            UserNotFoundError: If the organizer does not exist.
            CategoryNotFoundError: If the referenced category does not exist.
        """
        organizer = parse_user_id(organizer_id)
        if self._users.get_user(organizer) is None:
            logger.warning("event_create_unknown_organizer", organizer_id=organizer_id)
            raise UserNotFoundError(organizer_id)
        self._check_category(fields)

        event = self._store.create_event(organizer, fields)
        logger.info(
            "event_created",
            event_id=str(event.id),
            organizer_id=organizer_id,
            total_tickets=event.total_tickets.value,
        )
        return event

    def update_event(self, organizer_id: str, event_id: str, fields: NewEvent) -> Event:
        """Overwrite an event's editable fields.

        Changing total_tickets resets available_tickets to the new total.

        Raises:
            InvalidIdError: If either ID is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            UnauthorizedError: If the caller is not the event's organizer.
            CategoryNotFoundError: If the referenced category does not exist.
        """
        organizer = parse_user_id(organizer_id)
        current = self._get_or_raise(parse_event_id(event_id))
        if current.organizer.id != organizer:
            raise UnauthorizedError("Only the organizer can edit this event")
        self._check_category(fields)

        # Inventory is only written when the total changes; otherwise a
        # decrement committed after the read above would be lost.
        available = None
        if fields.total_tickets != current.total_tickets:
            available = fields.total_tickets.value

        event = self._store.update_event(current.id, fields, available_tickets=available)
        logger.info(
            "event_updated",
            event_id=event_id,
            total_tickets=event.total_tickets.value,
            available_tickets=event.available_tickets.value,
        )
        return event

    def delete_event(self, event_id: str, organizer_id: str | None = None) -> None:
        """Delete an event. Deleting a missing event is not an error.

        Raises:
            InvalidIdError: If an ID is not a valid UUID.
            UnauthorizedError: If organizer_id is given and does not own the event.
        """
        eid = parse_event_id(event_id)
        if organizer_id is not None:
            event = self._store.get_event(eid)
            if event is not None and event.organizer.id != parse_user_id(organizer_id):
                raise UnauthorizedError("Only the organizer can delete this event")
        if self._store.delete_event(eid):
            logger.info("event_deleted", event_id=event_id)

    def decrement_tickets(self, event_id: str, quantity: int) -> Event:
        """Take quantity tickets out of inventory.

        The check and the subtraction happen in one conditional update, so
        concurrent purchases can never oversell.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            InvalidArgumentError: If quantity is not positive.
            EventNotFoundError: If the event does not exist.
            InsufficientInventoryError: If fewer than quantity tickets remain.
        """
        eid = parse_event_id(event_id)
        try:
            amount = Quantity(quantity)
        except ValueError as exc:
            raise InvalidArgumentError(str(exc)) from exc

        event = self._store.decrement_available_tickets(eid, amount.value)
        if event is None:
            current = self._get_or_raise(eid)
            raise InsufficientInventoryError(
                event_id,
                requested=amount.value,
                available=current.available_tickets.value,
            )
        logger.info(
            "tickets_decremented",
            event_id=event_id,
            quantity=amount.value,
            available_tickets=event.available_tickets.value,
        )
        return event

    def list_events(
        self,
        query: str | None = None,
        category: str | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> EventPage:
        """Return a page of events, newest first.

        query matches titles case-insensitively. category is a category name;
        an unknown name does not narrow the results.
        """
        category_id = None
        if category:
            match = self._categories.find_category_by_name(category)
            category_id = match.id if match else None
        return self._page(
            EventQuery(title_contains=query or None, category_id=category_id),
            page,
            limit,
        )

    def list_events_by_organizer(
        self,
        organizer_id: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> EventPage:
        """Return a page of the organizer's events, newest first."""
        return self._page(EventQuery(organizer_id=parse_user_id(organizer_id)), page, limit)

    def list_related_events(
        self,
        event_id: str,
        page: int = 1,
        limit: int = DEFAULT_RELATED_PAGE_SIZE,
    ) -> EventPage:
        """Return other events in the same category as event_id.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._get_or_raise(parse_event_id(event_id))
        if event.category is None:
            return EventPage(data=[], total_pages=0)
        return self._page(
            EventQuery(category_id=event.category.id, exclude_event_id=event.id),
            page,
            limit,
        )

    def list_categories(self) -> list[Category]:
        return self._categories.list_categories()

    def create_category(self, name: str) -> Category:
        """Create a category.

        Raises:
            InvalidArgumentError: If the name is blank or already taken.
        """
        name = name.strip()
        if not name:
            raise InvalidArgumentError("Category name cannot be blank")
        category = self._categories.create_category(name)
        if category is None:
            raise InvalidArgumentError("Category already exists")
        logger.info("category_created", category_id=str(category.id), name=name)
        return category
