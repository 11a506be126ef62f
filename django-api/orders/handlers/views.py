"""HTTP handlers for order queries."""

from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.domain.errors import DomainError
from events.handlers.views import domain_error, get_event_service
from events.stores.django_store import DjangoUserStore
from orders.handlers.serializers import OrderSerializer
from orders.services.order_service import OrderService
from orders.stores.django_store import DjangoOrderStore
from orders.stores.stripe_gateway import StripePaymentGateway


def get_order_service() -> OrderService:
    return OrderService(
        DjangoOrderStore(),
        StripePaymentGateway(),
        get_event_service(),
        DjangoUserStore(),
    )


class EventOrderListView(APIView):
    """Handler for GET /api/events/{event_id}/orders"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, event_id: str) -> Response:
        try:
            orders = get_order_service().list_orders_for_event(event_id, str(request.user.pk))
        except DomainError as e:
            return domain_error(request, e)
        return Response(OrderSerializer(orders, many=True).data)


class BuyerOrderListView(APIView):
    """Handler for GET /api/orders"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        try:
            orders = get_order_service().list_orders_for_buyer(str(request.user.pk))
        except DomainError as e:
            return domain_error(request, e)
        return Response(OrderSerializer(orders, many=True).data)
