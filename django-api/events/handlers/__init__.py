from events.handlers.views import (
    CategoryListView,
    CommentDetailView,
    EventCommentListView,
    EventDetailView,
    EventListView,
    EventRatingView,
    OrganizerEventListView,
    RelatedEventListView,
)

__all__ = [
    "CategoryListView",
    "CommentDetailView",
    "EventCommentListView",
    "EventDetailView",
    "EventListView",
    "EventRatingView",
    "OrganizerEventListView",
    "RelatedEventListView",
]
