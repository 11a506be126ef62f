"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import structlog
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.domain.errors import DomainError
from events.handlers.errors import error_response, validation_error_response
from events.handlers.serializers import (
    CategoryInputSerializer,
    CategorySerializer,
    CommentInputSerializer,
    CommentSerializer,
    EventInputSerializer,
    EventListQuerySerializer,
    EventPageSerializer,
    EventSerializer,
    PageQuerySerializer,
    RatingInputSerializer,
    RelatedEventsQuerySerializer,
)
from events.services.comment_service import CommentService
from events.services.event_service import EventService, build_new_event
from events.services.rating_service import RatingService
from events.stores.django_store import (
    DjangoCategoryStore,
    DjangoCommentStore,
    DjangoEventStore,
    DjangoUserStore,
)

logger = structlog.get_logger(__name__)


def get_event_service() -> EventService:
    return EventService(DjangoEventStore(), DjangoCategoryStore(), DjangoUserStore())


def get_rating_service() -> RatingService:
    return RatingService(DjangoEventStore(), DjangoUserStore())


def get_comment_service() -> CommentService:
    return CommentService(DjangoCommentStore(), DjangoEventStore(), DjangoUserStore())


def domain_error(request: Request, error: DomainError) -> Response:
    logger.warning(
        "request_rejected",
        path=request.path,
        method=request.method,
        code=error.code.value,
    )
    return error_response(error)


class EventListView(APIView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        params = EventListQuerySerializer(data=request.query_params)
        if not params.is_valid():
            return validation_error_response(params.errors)
        try:
            page = get_event_service().list_events(**params.validated_data)
        except DomainError as e:
            return domain_error(request, e)
        return Response(EventPageSerializer(page).data)

    def post(self, request: Request) -> Response:
        payload = EventInputSerializer(data=request.data)
        if not payload.is_valid():
            return validation_error_response(payload.errors)
        try:
            fields = build_new_event(payload.validated_data)
            event = get_event_service().create_event(str(request.user.pk), fields)
        except DomainError as e:
            return domain_error(request, e)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(APIView):
    """Handler for GET/PUT/DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        try:
            event = get_event_service().get_event(event_id)
        except DomainError as e:
            return domain_error(request, e)
        return Response(EventSerializer(event).data)

    def put(self, request: Request, event_id: str) -> Response:
        payload = EventInputSerializer(data=request.data)
        if not payload.is_valid():
            return validation_error_response(payload.errors)
        try:
            fields = build_new_event(payload.validated_data)
            event = get_event_service().update_event(str(request.user.pk), event_id, fields)
        except DomainError as e:
            return domain_error(request, e)
        return Response(EventSerializer(event).data)

    def delete(self, request: Request, event_id: str) -> Response:
        try:
            get_event_service().delete_event(event_id, organizer_id=str(request.user.pk))
        except DomainError as e:
            return domain_error(request, e)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RelatedEventListView(APIView):
    """Handler for GET /api/events/{event_id}/related"""

    def get(self, request: Request, event_id: str) -> Response:
        params = RelatedEventsQuerySerializer(data=request.query_params)
        if not params.is_valid():
            return validation_error_response(params.errors)
        try:
            page = get_event_service().list_related_events(event_id, **params.validated_data)
        except DomainError as e:
            return domain_error(request, e)
        return Response(EventPageSerializer(page).data)


class OrganizerEventListView(APIView):
    """Handler for GET /api/organizers/{user_id}/events"""

    def get(self, request: Request, user_id: str) -> Response:
        params = PageQuerySerializer(data=request.query_params)
        if not params.is_valid():
            return validation_error_response(params.errors)
        try:
            page = get_event_service().list_events_by_organizer(user_id, **params.validated_data)
        except DomainError as e:
            return domain_error(request, e)
        return Response(EventPageSerializer(page).data)


class CategoryListView(APIView):
    """Handler for GET/POST /api/categories"""

    def get(self, request: Request) -> Response:
        categories = get_event_service().list_categories()
        return Response(CategorySerializer(categories, many=True).data)

    def post(self, request: Request) -> Response:
        payload = CategoryInputSerializer(data=request.data)
        if not payload.is_valid():
            return validation_error_response(payload.errors)
        try:
            category = get_event_service().create_category(payload.validated_data["name"])
        except DomainError as e:
            return domain_error(request, e)
        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)


class EventRatingView(APIView):
    """Handler for GET/PUT /api/events/{event_id}/rating"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, event_id: str) -> Response:
        try:
            value = get_rating_service().get_user_rating(event_id, str(request.user.pk))
        except DomainError as e:
            return domain_error(request, e)
        return Response({"value": value})

    def put(self, request: Request, event_id: str) -> Response:
        payload = RatingInputSerializer(data=request.data)
        if not payload.is_valid():
            return validation_error_response(payload.errors)
        try:
            average = get_rating_service().submit_rating(
                event_id, str(request.user.pk), payload.validated_data["value"]
            )
        except DomainError as e:
            return domain_error(request, e)
        return Response({"average_rating": average})


class EventCommentListView(APIView):
    """Handler for GET/POST /api/events/{event_id}/comments"""

    def get(self, request: Request, event_id: str) -> Response:
        try:
            comments = get_comment_service().list_comments(event_id)
        except DomainError as e:
            return domain_error(request, e)
        return Response(CommentSerializer(comments, many=True).data)

    def post(self, request: Request, event_id: str) -> Response:
        payload = CommentInputSerializer(data=request.data)
        if not payload.is_valid():
            return validation_error_response(payload.errors)
        try:
            comment = get_comment_service().post_comment(
                event_id, str(request.user.pk), payload.validated_data["content"]
            )
        except DomainError as e:
            return domain_error(request, e)
        return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)


class CommentDetailView(APIView):
    """Handler for DELETE /api/comments/{comment_id}"""

    permission_classes = [IsAuthenticated]

    def delete(self, request: Request, comment_id: str) -> Response:
        try:
            get_comment_service().delete_comment(comment_id, str(request.user.pk))
        except DomainError as e:
            return domain_error(request, e)
        return Response(status=status.HTTP_204_NO_CONTENT)
