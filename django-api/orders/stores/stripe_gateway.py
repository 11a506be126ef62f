"""Stripe implementation of the PaymentGateway."""

import stripe
import structlog
from django.conf import settings

from events.domain.errors import VerificationFailedError
from orders.domain import PaymentNotification
from orders.stores.interfaces import PaymentGateway

logger = structlog.get_logger(__name__)


class StripePaymentGateway(PaymentGateway):
    """Talks to Stripe with the keys from settings."""

    def __init__(
        self,
        api_key: str | None = None,
        webhook_secret: str | None = None,
        tolerance: int | None = None,
    ) -> None:
        self._api_key = api_key or settings.STRIPE_SECRET_KEY
        self._webhook_secret = webhook_secret or settings.STRIPE_WEBHOOK_SECRET
        self._tolerance = tolerance or settings.STRIPE_WEBHOOK_TOLERANCE

    def verify_notification(self, payload: bytes, signature: str | None) -> PaymentNotification:
        if not signature:
            raise VerificationFailedError()
        try:
            event = stripe.Webhook.construct_event(
                payload, signature, self._webhook_secret, tolerance=self._tolerance
            )
        except (ValueError, stripe.SignatureVerificationError) as exc:
            raise VerificationFailedError() from exc

        session = event.data.object
        amount_total = session.get("amount_total")
        return PaymentNotification(
            event_type=event.type,
            notification_id=event.id,
            payment_reference=session.get("id"),
            amount_total=amount_total if isinstance(amount_total, int) else None,
            metadata={str(k): str(v) for k, v in (session.get("metadata") or {}).items()},
        )

    def get_line_item_quantity(self, payment_reference: str) -> int | None:
        try:
            session = stripe.checkout.Session.retrieve(
                payment_reference,
                expand=["line_items"],
                api_key=self._api_key,
            )
        except stripe.StripeError as exc:
            logger.warning(
                "stripe_line_items_unavailable",
                payment_reference=payment_reference,
                error=str(exc),
            )
            return None
        line_items = getattr(session, "line_items", None)
        items = getattr(line_items, "data", None) or []
        if not items:
            return None
        return getattr(items[0], "quantity", None)
