"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Category(models.Model):
    """Persistence model for event categories."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    location = models.CharField(max_length=255, blank=True, default="")
    image_url = models.URLField(max_length=500)
    url = models.URLField(max_length=500, blank=True, default="")
    start_date_time = models.DateTimeField()
    end_date_time = models.DateTimeField()
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    is_free = models.BooleanField(default=False)
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="events",
    )
    organizer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="organized_events",
    )
    total_tickets = models.PositiveIntegerField()
    available_tickets = models.PositiveIntegerField()
    average_rating = models.FloatField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="events_even_created_3c0a6b_idx"),
            models.Index(fields=["category", "-created_at"], name="events_even_categor_5d1e2f_idx"),
            models.Index(fields=["organizer", "-created_at"], name="events_even_organiz_8a4b7c_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(available_tickets__gte=0)
                & models.Q(available_tickets__lte=models.F("total_tickets")),
                name="event_available_tickets_within_total",
            ),
        ]

    def __str__(self) -> str:
        return self.title


class Rating(models.Model):
    """One user's star rating of an event."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="ratings")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="ratings",
    )
    value = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event", "user"], name="unique_rating_per_user"),
            models.CheckConstraint(
                condition=models.Q(value__gte=1) & models.Q(value__lte=5),
                name="rating_value_between_1_and_5",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user} - {self.value}"


class Comment(models.Model):
    """Persistence model for comments on an event."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    content = models.TextField()
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="comments")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["event", "-created_at"], name="events_comm_event_i_2e9f0d_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user} on {self.event}"
