"""Django ORM models for orders (persistence layer)."""

import uuid

from django.conf import settings
from django.db import models

from events.models import Event


class Order(models.Model):
    """A completed ticket purchase, one per Stripe checkout session."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    stripe_id = models.CharField(max_length=255, unique=True)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    quantity = models.PositiveIntegerField()
    event = models.ForeignKey(
        Event,
        on_delete=models.SET_NULL,
        null=True,
        related_name="orders",
    )
    buyer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["event", "-created_at"], name="orders_orde_event_i_7b3c1e_idx"),
            models.Index(fields=["buyer", "-created_at"], name="orders_orde_buyer_i_4f6a2d_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.stripe_id} x{self.quantity}"
