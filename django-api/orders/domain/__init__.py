from orders.domain.models import (
    CHECKOUT_COMPLETED,
    NewOrder,
    Order,
    OrderId,
    PaymentNotification,
)

__all__ = [
    "CHECKOUT_COMPLETED",
    "NewOrder",
    "Order",
    "OrderId",
    "PaymentNotification",
]
