from django.urls import path

from orders.handlers import BuyerOrderListView, EventOrderListView, StripeWebhookView

urlpatterns = [
    path("orders", BuyerOrderListView.as_view(), name="order-list"),
    path("events/<str:event_id>/orders", EventOrderListView.as_view(), name="event-orders"),
    path("webhooks/stripe", StripeWebhookView.as_view(), name="stripe-webhook"),
]
