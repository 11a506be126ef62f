"""Comments on events."""

import structlog

from events.domain import Comment, CommentId
from events.domain.errors import (
    CommentNotFoundError,
    EventNotFoundError,
    InvalidArgumentError,
    InvalidIdError,
    UnauthorizedError,
    UserNotFoundError,
)
from events.services.event_service import parse_event_id, parse_user_id
from events.stores.interfaces import CommentStore, EventStore, UserStore

logger = structlog.get_logger(__name__)


def parse_comment_id(value: str) -> CommentId:
    try:
        return CommentId.from_string(value)
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdError("comment ID") from None


class CommentService:
    """Append, list and author-only delete of event comments."""

    def __init__(self, store: CommentStore, events: EventStore, users: UserStore) -> None:
        self._store = store
        self._events = events
        self._users = users

    def post_comment(self, event_id: str, user_id: str, content: str) -> Comment:
        """Add a comment to an event.

        Raises:
            InvalidIdError: If either ID is not a valid UUID.
            InvalidArgumentError: If content is blank.
            UserNotFoundError: If the user does not exist.
            EventNotFoundError: If the event does not exist.
        """
        eid = parse_event_id(event_id)
        uid = parse_user_id(user_id)
        content = content.strip()
        if not content:
            raise InvalidArgumentError("Comment cannot be empty")
        if self._users.get_user(uid) is None:
            raise UserNotFoundError(user_id)
        if not self._events.event_exists(eid):
            raise EventNotFoundError(event_id)

        comment = self._store.create_comment(eid, uid, content)
        logger.info("comment_posted", comment_id=str(comment.id), event_id=event_id, user_id=user_id)
        return comment

    def list_comments(self, event_id: str) -> list[Comment]:
        """Return the event's comments, newest first."""
        return self._store.list_comments(parse_event_id(event_id))

    def delete_comment(self, comment_id: str, user_id: str) -> None:
        """Delete a comment on behalf of its author.

        Raises:
            InvalidIdError: If either ID is not a valid UUID.
            CommentNotFoundError: If the comment does not exist.
            UnauthorizedError: If user_id is not the comment's author.
        """
        cid = parse_comment_id(comment_id)
        uid = parse_user_id(user_id)
        comment = self._store.get_comment(cid)
        if comment is None:
            raise CommentNotFoundError(comment_id)
        if comment.author.id != uid:
            logger.warning("comment_delete_denied", comment_id=comment_id, user_id=user_id)
            raise UnauthorizedError("Only the author can delete this comment")

        self._store.delete_comment(cid)
        logger.info("comment_deleted", comment_id=comment_id, user_id=user_id)
