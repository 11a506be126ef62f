from django.urls import path

from events.handlers import (
    CategoryListView,
    CommentDetailView,
    EventCommentListView,
    EventDetailView,
    EventListView,
    EventRatingView,
    OrganizerEventListView,
    RelatedEventListView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<str:event_id>/related",
        RelatedEventListView.as_view(),
        name="event-related",
    ),
    path("events/<str:event_id>/rating", EventRatingView.as_view(), name="event-rating"),
    path(
        "events/<str:event_id>/comments",
        EventCommentListView.as_view(),
        name="event-comments",
    ),
    path("comments/<str:comment_id>", CommentDetailView.as_view(), name="comment-detail"),
    path(
        "organizers/<str:user_id>/events",
        OrganizerEventListView.as_view(),
        name="organizer-events",
    ),
    path("categories", CategoryListView.as_view(), name="category-list"),
]
