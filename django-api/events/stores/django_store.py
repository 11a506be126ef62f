"""Django ORM implementations of the event stores."""

from contextlib import AbstractContextManager

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import F, Prefetch, Q, QuerySet

from events import models
from events.domain import (
    Capacity,
    Category,
    CategoryId,
    Comment,
    CommentId,
    Event,
    EventId,
    Money,
    NewEvent,
    Rating,
    UserId,
    UserRef,
)
from events.stores.interfaces import (
    CategoryStore,
    CommentStore,
    EventQuery,
    EventStore,
    UserStore,
)


def user_to_domain(user) -> UserRef:
    return UserRef(
        id=UserId(user.pk),
        first_name=user.first_name,
        last_name=user.last_name,
    )


def category_to_domain(category: models.Category) -> Category:
    return Category(id=CategoryId(category.pk), name=category.name)


def event_to_domain(event: models.Event) -> Event:
    return Event(
        id=EventId(event.pk),
        title=event.title,
        description=event.description,
        location=event.location,
        image_url=event.image_url,
        url=event.url,
        start_date_time=event.start_date_time,
        end_date_time=event.end_date_time,
        price=Money(event.price),
        is_free=event.is_free,
        category=category_to_domain(event.category) if event.category else None,
        organizer=user_to_domain(event.organizer),
        total_tickets=Capacity(event.total_tickets),
        available_tickets=Capacity(event.available_tickets),
        average_rating=event.average_rating,
        created_at=event.created_at,
        ratings=tuple(
            Rating(user_id=UserId(r.user_id), value=r.value) for r in event.ratings.all()
        ),
    )


def comment_to_domain(comment: models.Comment) -> Comment:
    return Comment(
        id=CommentId(comment.pk),
        content=comment.content,
        event_id=EventId(comment.event_id),
        event_title=comment.event.title,
        author=user_to_domain(comment.user),
        created_at=comment.created_at,
    )


class DjangoEventStore(EventStore):
    """PostgreSQL-backed event store using Django ORM."""

    def _queryset(self) -> QuerySet[models.Event]:
        return models.Event.objects.select_related("organizer", "category").prefetch_related(
            Prefetch("ratings", queryset=models.Rating.objects.order_by("pk"))
        )

    def _filter(self, query: EventQuery) -> Q:
        conditions = Q()
        if query.title_contains:
            conditions &= Q(title__icontains=query.title_contains)
        if query.category_id is not None:
            conditions &= Q(category_id=query.category_id.value)
        if query.organizer_id is not None:
            conditions &= Q(organizer_id=query.organizer_id.value)
        if query.exclude_event_id is not None:
            conditions &= ~Q(pk=query.exclude_event_id.value)
        return conditions

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic()

    def get_event(self, event_id: EventId, for_update: bool = False) -> Event | None:
        queryset = self._queryset()
        if for_update:
            # Lock only the event row; nullable joins cannot be locked on PostgreSQL.
            queryset = queryset.select_for_update(of=("self",))
        event = queryset.filter(pk=event_id.value).first()
        return event_to_domain(event) if event else None

    def event_exists(self, event_id: EventId) -> bool:
        return models.Event.objects.filter(pk=event_id.value).exists()

    def find_events(self, query: EventQuery, offset: int, limit: int) -> list[Event]:
        events = self._queryset().filter(self._filter(query)).order_by("-created_at")
        return [event_to_domain(e) for e in events[offset : offset + limit]]

    def count_events(self, query: EventQuery) -> int:
        return models.Event.objects.filter(self._filter(query)).count()

    def create_event(self, organizer_id: UserId, fields: NewEvent) -> Event:
        event = models.Event.objects.create(
            organizer_id=organizer_id.value,
            category_id=fields.category_id.value if fields.category_id else None,
            title=fields.title,
            description=fields.description,
            location=fields.location,
            image_url=fields.image_url,
            url=fields.url,
            start_date_time=fields.start_date_time,
            end_date_time=fields.end_date_time,
            price=fields.price.amount,
            is_free=fields.is_free,
            total_tickets=fields.total_tickets.value,
            available_tickets=fields.total_tickets.value,
            average_rating=0,
        )
        return self.get_event(EventId(event.pk))

    def update_event(
        self, event_id: EventId, fields: NewEvent, available_tickets: int | None = None
    ) -> Event:
        columns = {
            "category_id": fields.category_id.value if fields.category_id else None,
            "title": fields.title,
            "description": fields.description,
            "location": fields.location,
            "image_url": fields.image_url,
            "url": fields.url,
            "start_date_time": fields.start_date_time,
            "end_date_time": fields.end_date_time,
            "price": fields.price.amount,
            "is_free": fields.is_free,
        }
        if available_tickets is not None:
            columns["total_tickets"] = fields.total_tickets.value
            columns["available_tickets"] = available_tickets
        models.Event.objects.filter(pk=event_id.value).update(**columns)
        return self.get_event(event_id)

    def delete_event(self, event_id: EventId) -> bool:
        deleted, _ = models.Event.objects.filter(pk=event_id.value).delete()
        return deleted > 0

    def decrement_available_tickets(self, event_id: EventId, quantity: int) -> Event | None:
        updated = models.Event.objects.filter(
            pk=event_id.value,
            available_tickets__gte=quantity,
        ).update(available_tickets=F("available_tickets") - quantity)
        if not updated:
            return None
        return self.get_event(event_id)

    def upsert_rating(self, event_id: EventId, user_id: UserId, value: int) -> None:
        models.Rating.objects.update_or_create(
            event_id=event_id.value,
            user_id=user_id.value,
            defaults={"value": value},
        )

    def get_ratings(self, event_id: EventId) -> list[Rating]:
        return [
            Rating(user_id=UserId(user_id), value=value)
            for user_id, value in models.Rating.objects.filter(event_id=event_id.value)
            .order_by("pk")
            .values_list("user_id", "value")
        ]

    def set_average_rating(self, event_id: EventId, average: float) -> None:
        models.Event.objects.filter(pk=event_id.value).update(average_rating=average)


class DjangoCategoryStore(CategoryStore):
    """Category store using Django ORM."""

    def list_categories(self) -> list[Category]:
        return [category_to_domain(c) for c in models.Category.objects.order_by("name")]

    def get_category(self, category_id: CategoryId) -> Category | None:
        category = models.Category.objects.filter(pk=category_id.value).first()
        return category_to_domain(category) if category else None

    def find_category_by_name(self, name: str) -> Category | None:
        category = models.Category.objects.filter(name__icontains=name).order_by("name").first()
        return category_to_domain(category) if category else None

    def create_category(self, name: str) -> Category | None:
        try:
            with transaction.atomic():
                category = models.Category.objects.create(name=name)
        except IntegrityError:
            return None
        return category_to_domain(category)


class DjangoUserStore(UserStore):
    """User lookups against the configured auth user model."""

    def get_user(self, user_id: UserId) -> UserRef | None:
        user = get_user_model().objects.filter(pk=user_id.value).first()
        return user_to_domain(user) if user else None


class DjangoCommentStore(CommentStore):
    """Comment store using Django ORM."""

    def _queryset(self) -> QuerySet[models.Comment]:
        return models.Comment.objects.select_related("user", "event")

    def create_comment(self, event_id: EventId, user_id: UserId, content: str) -> Comment:
        comment = models.Comment.objects.create(
            event_id=event_id.value,
            user_id=user_id.value,
            content=content,
        )
        return comment_to_domain(self._queryset().get(pk=comment.pk))

    def get_comment(self, comment_id: CommentId) -> Comment | None:
        comment = self._queryset().filter(pk=comment_id.value).first()
        return comment_to_domain(comment) if comment else None

    def list_comments(self, event_id: EventId) -> list[Comment]:
        comments = self._queryset().filter(event_id=event_id.value).order_by("-created_at")
        return [comment_to_domain(c) for c in comments]

    def delete_comment(self, comment_id: CommentId) -> None:
        models.Comment.objects.filter(pk=comment_id.value).delete()
