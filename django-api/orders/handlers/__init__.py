from orders.handlers.views import BuyerOrderListView, EventOrderListView
from orders.handlers.webhooks import StripeWebhookView

__all__ = [
    "BuyerOrderListView",
    "EventOrderListView",
    "StripeWebhookView",
]
