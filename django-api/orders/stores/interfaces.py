"""Store and gateway interfaces for orders.

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from events.domain import EventId, UserId
from orders.domain import NewOrder, Order, PaymentNotification


class OrderStore(ABC):
    """Interface for order persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager wrapping a single transaction."""
        ...

    @abstractmethod
    def create_order(self, order: NewOrder) -> Order | None:
        """Insert an order. Returns None if the stripe_id is already taken."""
        ...

    @abstractmethod
    def get_by_stripe_id(self, stripe_id: str) -> Order | None:
        """Return the order for a payment reference, or None."""
        ...

    @abstractmethod
    def list_for_event(self, event_id: EventId) -> list[Order]:
        """Return orders for an event ordered by created_at descending."""
        ...

    @abstractmethod
    def list_for_buyer(self, buyer_id: UserId) -> list[Order]:
        """Return a buyer's orders ordered by created_at descending."""
        ...


class PaymentGateway(ABC):
    """Interface to the payment processor."""

    @abstractmethod
    def verify_notification(self, payload: bytes, signature: str | None) -> PaymentNotification:
        """Check the signature and decode a webhook payload.

        Raises:
            VerificationFailedError: If the signature or payload is invalid.
        """
        ...

    @abstractmethod
    def get_line_item_quantity(self, payment_reference: str) -> int | None:
        """Return the quantity of the first line item, or None if unknown."""
        ...
