"""Unit tests for the services.

These test error handling and domain error mapping against store doubles.
Run with: pytest tests/test_services.py -v
"""

import uuid
from contextlib import nullcontext
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest

from events.domain import (
    Capacity,
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
from events.domain.errors import (
    CommentNotFoundError,
    DuplicateOrderError,
    EventNotFoundError,
    InsufficientInventoryError,
    InvalidArgumentError,
    InvalidIdError,
    UnauthorizedError,
    UserNotFoundError,
)
from events.services.comment_service import CommentService
from events.services.event_service import EventService, build_new_event
from events.services.rating_service import RatingService, average_of
from events.stores.interfaces import CategoryStore, CommentStore, EventStore, UserStore
from orders.domain import CHECKOUT_COMPLETED, NewOrder, Order, OrderId, PaymentNotification
from orders.services.order_service import OrderService
from orders.stores.interfaces import OrderStore, PaymentGateway

NOW = datetime(2030, 1, 1, 20, 0, tzinfo=timezone.utc)


def user_ref(user_id: uuid.UUID | None = None) -> UserRef:
    return UserRef(id=UserId(user_id or uuid.uuid4()), first_name="Ada", last_name="Lovelace")


def domain_event(organizer: UserRef | None = None, total: int = 100, available: int = 100) -> Event:
    return Event(
        id=EventId(uuid.uuid4()),
        title="Jazz Night",
        description="",
        location="Vienna",
        image_url="https://example.com/jazz.png",
        url="",
        start_date_time=NOW,
        end_date_time=NOW + timedelta(hours=2),
        price=Money(Decimal("10.00")),
        is_free=False,
        category=None,
        organizer=organizer or user_ref(),
        total_tickets=Capacity(total),
        available_tickets=Capacity(available),
        average_rating=0.0,
        created_at=NOW,
    )


def new_event(total: int = 100) -> NewEvent:
    return build_new_event(
        {
            "title": "Jazz Night",
            "image_url": "https://example.com/jazz.png",
            "start_date_time": NOW,
            "end_date_time": NOW + timedelta(hours=2),
            "total_tickets": total,
        }
    )


@pytest.fixture
def store() -> Mock:
    store = Mock(spec=EventStore)
    store.atomic.return_value = nullcontext()
    return store


@pytest.fixture
def categories() -> Mock:
    return Mock(spec=CategoryStore)


@pytest.fixture
def users() -> Mock:
    users = Mock(spec=UserStore)
    users.get_user.side_effect = lambda user_id: user_ref(user_id.value)
    return users


@pytest.fixture
def service(store, categories, users) -> EventService:
    return EventService(store, categories, users)


class TestEventService:
    """Tests for EventService."""

    def test_get_event_invalid_id_raises_error(self, service):
        """get_event raises InvalidIdError for malformed UUID."""
        with pytest.raises(InvalidIdError):
            service.get_event("not-a-uuid")

    def test_get_event_not_found_raises_error(self, service, store):
        """get_event raises EventNotFoundError when store returns None."""
        store.get_event.return_value = None
        with pytest.raises(EventNotFoundError):
            service.get_event(str(uuid.uuid4()))

    def test_create_event_invalid_organizer_id(self, service, store):
        with pytest.raises(InvalidIdError):
            service.create_event("42", new_event())
        store.create_event.assert_not_called()

    def test_create_event_unknown_organizer(self, service, store, users):
        users.get_user.side_effect = None
        users.get_user.return_value = None
        with pytest.raises(UserNotFoundError):
            service.create_event(str(uuid.uuid4()), new_event())
        store.create_event.assert_not_called()

    def test_build_new_event_rejects_end_before_start(self):
        with pytest.raises(InvalidArgumentError):
            build_new_event(
                {
                    "title": "Backwards",
                    "image_url": "https://example.com/x.png",
                    "start_date_time": NOW,
                    "end_date_time": NOW - timedelta(hours=1),
                    "total_tickets": 10,
                }
            )

    def test_update_event_by_non_organizer_is_unauthorized(self, service, store):
        store.get_event.return_value = domain_event()
        with pytest.raises(UnauthorizedError):
            service.update_event(str(uuid.uuid4()), str(uuid.uuid4()), new_event())
        store.update_event.assert_not_called()

    def test_update_event_resets_inventory_when_total_changes(self, service, store):
        organizer = user_ref()
        current = domain_event(organizer, total=100, available=40)
        store.get_event.return_value = current
        service.update_event(str(organizer.id), str(current.id), new_event(total=150))
        store.update_event.assert_called_once()
        assert store.update_event.call_args.kwargs["available_tickets"] == 150

    def test_update_event_leaves_inventory_alone_when_total_unchanged(self, service, store):
        organizer = user_ref()
        current = domain_event(organizer, total=100, available=40)
        store.get_event.return_value = current
        service.update_event(str(organizer.id), str(current.id), new_event(total=100))
        assert store.update_event.call_args.kwargs["available_tickets"] is None

    def test_delete_missing_event_is_not_an_error(self, service, store):
        store.get_event.return_value = None
        store.delete_event.return_value = False
        service.delete_event(str(uuid.uuid4()), organizer_id=str(uuid.uuid4()))

    def test_decrement_rejects_non_positive_quantity(self, service, store):
        with pytest.raises(InvalidArgumentError):
            service.decrement_tickets(str(uuid.uuid4()), 0)
        store.decrement_available_tickets.assert_not_called()

    def test_decrement_insufficient_inventory(self, service, store):
        event = domain_event(total=10, available=2)
        store.decrement_available_tickets.return_value = None
        store.get_event.return_value = event
        with pytest.raises(InsufficientInventoryError) as exc_info:
            service.decrement_tickets(str(event.id), 5)
        assert exc_info.value.available == 2
        assert exc_info.value.requested == 5

    def test_decrement_missing_event(self, service, store):
        store.decrement_available_tickets.return_value = None
        store.get_event.return_value = None
        with pytest.raises(EventNotFoundError):
            service.decrement_tickets(str(uuid.uuid4()), 1)

    def test_list_events_computes_total_pages(self, service, store, categories):
        categories.find_category_by_name.return_value = None
        store.find_events.return_value = []
        store.count_events.return_value = 13
        page = service.list_events(query="jazz", category="unknown", page=2, limit=6)
        assert page.total_pages == 3
        query = store.find_events.call_args.args[0]
        assert query.title_contains == "jazz"
        assert query.category_id is None
        assert store.find_events.call_args.kwargs == {"offset": 6, "limit": 6}


class TestRatingService:
    def test_average_of_empty_list_is_zero(self):
        assert average_of([]) == 0.0

    def test_average_of_ratings(self):
        ratings = [Rating(UserId(uuid.uuid4()), 4), Rating(UserId(uuid.uuid4()), 1)]
        assert average_of(ratings) == 2.5

    @pytest.mark.parametrize("value", [0, 6])
    def test_submit_rating_out_of_range(self, store, users, value):
        with pytest.raises(InvalidArgumentError):
            RatingService(store, users).submit_rating(str(uuid.uuid4()), str(uuid.uuid4()), value)
        store.upsert_rating.assert_not_called()

    def test_submit_rating_missing_event(self, store, users):
        store.get_event.return_value = None
        with pytest.raises(EventNotFoundError):
            RatingService(store, users).submit_rating(str(uuid.uuid4()), str(uuid.uuid4()), 3)
        store.upsert_rating.assert_not_called()

    def test_get_user_rating_absent_is_none(self, store, users):
        store.get_event.return_value = domain_event()
        assert RatingService(store, users).get_user_rating(str(uuid.uuid4()), str(uuid.uuid4())) is None


class TestCommentService:
    @pytest.fixture
    def comments(self) -> Mock:
        return Mock(spec=CommentStore)

    def test_post_comment_missing_event(self, comments, store, users):
        store.event_exists.return_value = False
        with pytest.raises(EventNotFoundError):
            CommentService(comments, store, users).post_comment(str(uuid.uuid4()), str(uuid.uuid4()), "Hi")
        comments.create_comment.assert_not_called()

    def test_post_comment_blank_content(self, comments, store, users):
        with pytest.raises(InvalidArgumentError):
            CommentService(comments, store, users).post_comment(str(uuid.uuid4()), str(uuid.uuid4()), "   ")

    def test_delete_missing_comment(self, comments, store, users):
        comments.get_comment.return_value = None
        with pytest.raises(CommentNotFoundError):
            CommentService(comments, store, users).delete_comment(str(uuid.uuid4()), str(uuid.uuid4()))

    def test_delete_by_non_author_is_unauthorized(self, comments, store, users):
        comment = Comment(
            id=CommentId(uuid.uuid4()),
            content="Great show",
            event_id=EventId(uuid.uuid4()),
            event_title="Jazz Night",
            author=user_ref(),
            created_at=NOW,
        )
        comments.get_comment.return_value = comment
        with pytest.raises(UnauthorizedError):
            CommentService(comments, store, users).delete_comment(str(comment.id), str(uuid.uuid4()))
        comments.delete_comment.assert_not_called()


def checkout(
    reference: str | None = "cs_1", amount_total: int | None = 3000, **metadata: str
) -> PaymentNotification:
    metadata.setdefault("eventId", str(uuid.uuid4()))
    metadata.setdefault("buyerId", str(uuid.uuid4()))
    return PaymentNotification(
        event_type=CHECKOUT_COMPLETED,
        notification_id="evt_1",
        payment_reference=reference,
        amount_total=amount_total,
        metadata=metadata,
    )


def created_order(new: NewOrder) -> Order:
    return Order(
        id=OrderId(uuid.uuid4()),
        stripe_id=new.stripe_id,
        total_amount=new.total_amount,
        quantity=new.quantity.value,
        event_id=new.event_id,
        event_title="Jazz Night",
        buyer=user_ref(new.buyer_id.value),
        created_at=NOW,
    )


class TestOrderService:
    @pytest.fixture
    def orders(self) -> Mock:
        orders = Mock(spec=OrderStore)
        orders.atomic.return_value = nullcontext()
        orders.get_by_stripe_id.return_value = None
        orders.create_order.side_effect = created_order
        return orders

    @pytest.fixture
    def gateway(self) -> Mock:
        gateway = Mock(spec=PaymentGateway)
        gateway.get_line_item_quantity.return_value = None
        return gateway

    @pytest.fixture
    def inventory(self) -> Mock:
        return Mock(spec=EventService)

    @pytest.fixture
    def order_service(self, orders, gateway, inventory, users) -> OrderService:
        return OrderService(orders, gateway, inventory, users)

    def test_ignores_other_event_types(self, order_service, orders):
        notification = PaymentNotification(event_type="customer.created", notification_id="evt_2")
        assert order_service.handle_notification(notification) is None
        orders.create_order.assert_not_called()

    def test_quantity_from_metadata_wins(self, order_service, gateway, inventory):
        order = order_service.reconcile_checkout(checkout(quantity="4"))
        assert order.quantity == 4
        gateway.get_line_item_quantity.assert_not_called()
        assert inventory.decrement_tickets.call_args.args[1] == 4

    def test_quantity_from_line_items(self, order_service, gateway):
        gateway.get_line_item_quantity.return_value = 3
        order = order_service.reconcile_checkout(checkout())
        assert order.quantity == 3
        gateway.get_line_item_quantity.assert_called_once_with("cs_1")

    @pytest.mark.parametrize("metadata_quantity", ["", "abc", "0"])
    def test_unusable_quantity_defaults_to_one(self, order_service, metadata_quantity):
        order = order_service.reconcile_checkout(checkout(quantity=metadata_quantity))
        assert order.quantity == 1

    @pytest.mark.parametrize(
        ("amount_total", "expected"),
        [
            (3000, Decimal("30.00")),
            (1999, Decimal("19.99")),
            (None, Decimal("0.00")),
            (-500, Decimal("0.00")),
        ],
    )
    def test_amount_resolution(self, order_service, orders, amount_total, expected):
        order_service.reconcile_checkout(checkout(amount_total=amount_total))
        assert orders.create_order.call_args.args[0].total_amount == Money(expected)

    def test_missing_reference(self, order_service, inventory):
        with pytest.raises(InvalidArgumentError):
            order_service.reconcile_checkout(checkout(reference=None))
        inventory.decrement_tickets.assert_not_called()

    def test_missing_metadata(self, order_service, inventory):
        with pytest.raises(InvalidIdError):
            order_service.reconcile_checkout(checkout(buyerId=""))
        inventory.decrement_tickets.assert_not_called()

    def test_known_reference_is_duplicate(self, order_service, orders, inventory):
        orders.get_by_stripe_id.return_value = Mock()
        with pytest.raises(DuplicateOrderError):
            order_service.reconcile_checkout(checkout())
        inventory.decrement_tickets.assert_not_called()

    def test_unique_violation_on_insert_is_duplicate(self, order_service, orders, inventory):
        orders.create_order.side_effect = None
        orders.create_order.return_value = None
        with pytest.raises(DuplicateOrderError):
            order_service.reconcile_checkout(checkout())
        inventory.decrement_tickets.assert_called_once()

    def test_unknown_buyer(self, order_service, users, inventory):
        users.get_user.side_effect = None
        users.get_user.return_value = None
        with pytest.raises(UserNotFoundError):
            order_service.reconcile_checkout(checkout())
        inventory.decrement_tickets.assert_not_called()

    def test_insufficient_inventory_creates_no_order(self, order_service, orders, inventory):
        inventory.decrement_tickets.side_effect = InsufficientInventoryError("e", requested=5, available=2)
        with pytest.raises(InsufficientInventoryError):
            order_service.reconcile_checkout(checkout(quantity="5"))
        orders.create_order.assert_not_called()
