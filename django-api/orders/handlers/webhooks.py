"""Stripe webhook handler.

Stripe retries any delivery that does not get a 2xx answer. Failures a
retry cannot fix (duplicates, sold-out events, bad metadata) are therefore
acknowledged with 200 and logged; only unverifiable requests get a 400,
and unexpected errors propagate as 500 so Stripe tries again.
"""

import structlog
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.domain.errors import (
    DomainError,
    DuplicateOrderError,
    InsufficientInventoryError,
    VerificationFailedError,
)
from events.handlers.errors import error_body, error_response
from orders.handlers.serializers import OrderSerializer
from orders.handlers.views import get_order_service
from orders.stores.stripe_gateway import StripePaymentGateway

logger = structlog.get_logger(__name__)


class StripeWebhookView(APIView):
    """Handler for POST /api/webhooks/stripe"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        gateway = StripePaymentGateway()
        try:
            notification = gateway.verify_notification(
                request.body, request.META.get("HTTP_STRIPE_SIGNATURE")
            )
        except VerificationFailedError as e:
            logger.warning("stripe_webhook_verification_failed")
            return error_response(e)

        log = logger.bind(
            notification_id=notification.notification_id,
            event_type=notification.event_type,
            payment_reference=notification.payment_reference,
        )
        try:
            order = get_order_service().handle_notification(notification)
        except DuplicateOrderError as e:
            log.info("stripe_webhook_duplicate_order")
            return Response({"message": "OK", **error_body(e)}, status=status.HTTP_200_OK)
        except InsufficientInventoryError as e:
            log.error(
                "stripe_webhook_insufficient_inventory",
                event_id=e.event_id,
                requested=e.requested,
                available=e.available,
            )
            return Response({"message": "Not processed", **error_body(e)}, status=status.HTTP_200_OK)
        except DomainError as e:
            log.error("stripe_webhook_order_rejected", code=e.code.value)
            return Response({"message": "Not processed", **error_body(e)}, status=status.HTTP_200_OK)

        if order is None:
            return Response({"message": "Ignored"}, status=status.HTTP_200_OK)
        return Response({"message": "OK", "order": OrderSerializer(order).data}, status=status.HTTP_200_OK)
