"""Rating aggregation for events."""

import structlog

from events.domain import Rating, RatingValue
from events.domain.errors import EventNotFoundError, InvalidArgumentError, UserNotFoundError
from events.services.event_service import parse_event_id, parse_user_id
from events.stores.interfaces import EventStore, UserStore

logger = structlog.get_logger(__name__)


def average_of(ratings: list[Rating]) -> float:
    if not ratings:
        return 0.0
    return sum(r.value for r in ratings) / len(ratings)


class RatingService:
    """Keeps one rating per user per event and the event's average rating."""

    def __init__(self, store: EventStore, users: UserStore) -> None:
        self._store = store
        self._users = users

    def submit_rating(self, event_id: str, user_id: str, value: int) -> float:
        """Record the user's rating, replacing any earlier one, and return the new average.

        Raises:
            InvalidIdError: If either ID is not a valid UUID.
            InvalidArgumentError: If value is not an integer from 1 to 5.
            EventNotFoundError: If the event does not exist.
            UserNotFoundError: If the user does not exist.
        """
        eid = parse_event_id(event_id)
        uid = parse_user_id(user_id)
        try:
            rating = RatingValue(value)
        except ValueError as exc:
            raise InvalidArgumentError(str(exc)) from exc
        if self._users.get_user(uid) is None:
            raise UserNotFoundError(user_id)

        with self._store.atomic():
            # The row lock serializes concurrent submissions for the same event.
            if self._store.get_event(eid, for_update=True) is None:
                raise EventNotFoundError(event_id)
            self._store.upsert_rating(eid, uid, rating.value)
            average = average_of(self._store.get_ratings(eid))
            self._store.set_average_rating(eid, average)

        logger.info("event_rated", event_id=event_id, user_id=user_id, average_rating=average)
        return average

    def get_user_rating(self, event_id: str, user_id: str) -> int | None:
        """Return the user's rating for the event, or None if they have not rated it.

        Raises:
            InvalidIdError: If either ID is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        eid = parse_event_id(event_id)
        uid = parse_user_id(user_id)
        event = self._store.get_event(eid)
        if event is None:
            raise EventNotFoundError(event_id)
        for rating in event.ratings:
            if rating.user_id == uid:
                return rating.value
        return None
