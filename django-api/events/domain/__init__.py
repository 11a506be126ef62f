from events.domain.models import (
    Category,
    Comment,
    Event,
    EventPage,
    NewEvent,
    Rating,
    UserRef,
)
from events.domain.value_objects import (
    Capacity,
    CategoryId,
    CommentId,
    EventId,
    Money,
    Quantity,
    RatingValue,
    UserId,
)

__all__ = [
    "Category",
    "Comment",
    "Event",
    "EventPage",
    "NewEvent",
    "Rating",
    "UserRef",
    "EventId",
    "UserId",
    "CategoryId",
    "CommentId",
    "Money",
    "Capacity",
    "Quantity",
    "RatingValue",
]
