"""Domain models for orders and payment notifications."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Self
from uuid import UUID

from events.domain import EventId, Money, Quantity, UserId, UserRef

CHECKOUT_COMPLETED = "checkout.session.completed"


@dataclass(frozen=True)
class OrderId:
    """Unique identifier for an Order."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Order:
    """Domain representation of an Order.

    stripe_id is unique across all orders.
    """

    id: OrderId
    stripe_id: str
    total_amount: Money
    quantity: int
    event_id: EventId | None
    event_title: str | None
    buyer: UserRef
    created_at: datetime


@dataclass(frozen=True)
class NewOrder:
    """Fields for inserting an Order."""

    stripe_id: str
    total_amount: Money
    quantity: Quantity
    event_id: EventId
    buyer_id: UserId


@dataclass(frozen=True)
class PaymentNotification:
    """A verified notification from the payment processor.

    amount_total is in minor currency units (cents).
    """

    event_type: str
    notification_id: str
    payment_reference: str | None = None
    amount_total: int | None = None
    metadata: dict[str, str] = field(default_factory=dict)
