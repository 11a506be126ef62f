"""Order reconciliation - turns paid checkouts into orders.

Every completed checkout becomes exactly one Order plus one inventory
decrement, inside a single transaction:
- not enough tickets: nothing is written
- order insert collides on stripe_id: the decrement is rolled back
"""

import structlog

from events.domain import Money, Quantity
from events.domain.errors import (
    DuplicateOrderError,
    InvalidArgumentError,
    UnauthorizedError,
    UserNotFoundError,
)
from events.services.event_service import EventService, parse_event_id, parse_user_id
from events.stores.interfaces import UserStore
from orders.domain import CHECKOUT_COMPLETED, NewOrder, Order, PaymentNotification
from orders.stores.interfaces import OrderStore, PaymentGateway

logger = structlog.get_logger(__name__)

DEFAULT_QUANTITY = 1


class OrderService:
    """Service for order reconciliation and order queries."""

    def __init__(
        self,
        store: OrderStore,
        gateway: PaymentGateway,
        inventory: EventService,
        users: UserStore,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._inventory = inventory
        self._users = users

    def handle_notification(self, notification: PaymentNotification) -> Order | None:
        """Dispatch a verified notification. Returns None for ignored event types."""
        if notification.event_type != CHECKOUT_COMPLETED:
            logger.info(
                "stripe_webhook_unhandled_event",
                event_type=notification.event_type,
                notification_id=notification.notification_id,
            )
            return None
        return self.reconcile_checkout(notification)

    def _resolve_quantity(self, notification: PaymentNotification) -> Quantity:
        raw = notification.metadata.get("quantity")
        if raw:
            try:
                return Quantity(int(raw))
            except ValueError:
                logger.warning("order_metadata_quantity_invalid", quantity=raw)

        looked_up = self._gateway.get_line_item_quantity(notification.payment_reference)
        if looked_up:
            try:
                return Quantity(looked_up)
            except ValueError:
                logger.warning("order_line_item_quantity_invalid", quantity=looked_up)
        return Quantity(DEFAULT_QUANTITY)

    def reconcile_checkout(self, notification: PaymentNotification) -> Order:
        """Create the order and take its tickets out of inventory.

        Raises:
            InvalidArgumentError: If the payment reference is missing.
            InvalidIdError: If eventId or buyerId metadata is missing or malformed.
            DuplicateOrderError: If an order already exists for the payment reference.
            UserNotFoundError: If the buyer does not exist.
            EventNotFoundError: If the event does not exist.
            InsufficientInventoryError: If the event has too few tickets left.
        """
        reference = notification.payment_reference
        if not reference:
            raise InvalidArgumentError("Payment reference is missing")
        event_id = parse_event_id(notification.metadata.get("eventId", ""))
        buyer_id = parse_user_id(notification.metadata.get("buyerId", ""))

        if self._store.get_by_stripe_id(reference) is not None:
            raise DuplicateOrderError(reference)
        if self._users.get_user(buyer_id) is None:
            raise UserNotFoundError(str(buyer_id))

        quantity = self._resolve_quantity(notification)
        try:
            total = Money.from_minor_units(notification.amount_total)
        except ValueError:
            logger.warning("order_amount_invalid", amount_total=notification.amount_total)
            total = Money.from_minor_units(None)

        with self._store.atomic():
            self._inventory.decrement_tickets(str(event_id), quantity.value)
            order = self._store.create_order(
                NewOrder(
                    stripe_id=reference,
                    total_amount=total,
                    quantity=quantity,
                    event_id=event_id,
                    buyer_id=buyer_id,
                )
            )
            if order is None:
                raise DuplicateOrderError(reference)

        logger.info(
            "order_created",
            order_id=str(order.id),
            stripe_id=reference,
            event_id=str(event_id),
            buyer_id=str(buyer_id),
            quantity=quantity.value,
            total_amount=str(total),
        )
        return order

    def list_orders_for_event(self, event_id: str, organizer_id: str) -> list[Order]:
        """Return the event's orders for its organizer.

        Raises:
            InvalidIdError: If either ID is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            UnauthorizedError: If the caller is not the event's organizer.
        """
        event = self._inventory.get_event(event_id)
        if event.organizer.id != parse_user_id(organizer_id):
            raise UnauthorizedError("Only the organizer can view orders for this event")
        return self._store.list_for_event(event.id)

    def list_orders_for_buyer(self, buyer_id: str) -> list[Order]:
        """Return the buyer's orders, newest first."""
        return self._store.list_for_buyer(parse_user_id(buyer_id))
