"""Django ORM implementation of the OrderStore."""

from contextlib import AbstractContextManager

from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from events.domain import EventId, Money, UserId
from events.stores.django_store import user_to_domain
from orders import models
from orders.domain import NewOrder, Order, OrderId
from orders.stores.interfaces import OrderStore


def order_to_domain(order: models.Order) -> Order:
    return Order(
        id=OrderId(order.pk),
        stripe_id=order.stripe_id,
        total_amount=Money(order.total_amount),
        quantity=order.quantity,
        event_id=EventId(order.event_id) if order.event_id else None,
        event_title=order.event.title if order.event_id else None,
        buyer=user_to_domain(order.buyer),
        created_at=order.created_at,
    )


class DjangoOrderStore(OrderStore):
    """PostgreSQL-backed order store using Django ORM."""

    def _queryset(self) -> QuerySet[models.Order]:
        return models.Order.objects.select_related("event", "buyer")

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic()

    def create_order(self, order: NewOrder) -> Order | None:
        try:
            # Savepoint so a unique violation leaves the outer transaction usable.
            with transaction.atomic():
                created = models.Order.objects.create(
                    stripe_id=order.stripe_id,
                    total_amount=order.total_amount.amount,
                    quantity=order.quantity.value,
                    event_id=order.event_id.value,
                    buyer_id=order.buyer_id.value,
                )
        except IntegrityError:
            if models.Order.objects.filter(stripe_id=order.stripe_id).exists():
                return None
            raise
        return order_to_domain(self._queryset().get(pk=created.pk))

    def get_by_stripe_id(self, stripe_id: str) -> Order | None:
        order = self._queryset().filter(stripe_id=stripe_id).first()
        return order_to_domain(order) if order else None

    def list_for_event(self, event_id: EventId) -> list[Order]:
        orders = self._queryset().filter(event_id=event_id.value).order_by("-created_at")
        return [order_to_domain(o) for o in orders]

    def list_for_buyer(self, buyer_id: UserId) -> list[Order]:
        orders = self._queryset().filter(buyer_id=buyer_id.value).order_by("-created_at")
        return [order_to_domain(o) for o in orders]
