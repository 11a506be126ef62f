"""Pytest configuration and shared fixtures."""

import hashlib
import hmac
import json
import time
from datetime import timedelta
from types import SimpleNamespace
from typing import Any, Callable

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from events.models import Category, Event

WEBHOOK_SECRET = "whsec_test_secret"


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def make_user(db) -> Callable[..., Any]:
    def _make(username: str = "organizer", **kwargs: Any):
        kwargs.setdefault("first_name", username.title())
        kwargs.setdefault("last_name", "Tester")
        return get_user_model().objects.create_user(username=username, password="pass12345", **kwargs)

    return _make


@pytest.fixture
def organizer(make_user):
    return make_user("organizer")


@pytest.fixture
def buyer(make_user):
    return make_user("buyer")


@pytest.fixture
def auth_client(organizer) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=organizer)
    return client


@pytest.fixture
def category(db) -> Category:
    return Category.objects.create(name="Music")


@pytest.fixture
def make_event(db, organizer) -> Callable[..., Event]:
    def _make(total_tickets: int = 100, available_tickets: int | None = None, **kwargs: Any) -> Event:
        start = timezone.now() + timedelta(days=7)
        kwargs.setdefault("title", "Jazz Night")
        kwargs.setdefault("organizer", organizer)
        kwargs.setdefault("image_url", "https://example.com/jazz.png")
        kwargs.setdefault("start_date_time", start)
        kwargs.setdefault("end_date_time", start + timedelta(hours=3))
        return Event.objects.create(
            total_tickets=total_tickets,
            available_tickets=total_tickets if available_tickets is None else available_tickets,
            **kwargs,
        )

    return _make


@pytest.fixture
def event(make_event) -> Event:
    return make_event()


@pytest.fixture
def stripe_settings(settings):
    settings.STRIPE_WEBHOOK_SECRET = WEBHOOK_SECRET
    settings.STRIPE_SECRET_KEY = "sk_test_dummy"
    return settings


def sign_payload(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Build a Stripe-Signature header value for payload."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def checkout_completed_payload(
    session_id: str,
    event_id: str,
    buyer_id: str,
    amount_total: int | None = 3000,
    **metadata: str,
) -> str:
    return json.dumps(
        {
            "id": f"evt_{session_id}",
            "object": "event",
            "type": "checkout.session.completed",
            "data": {
                "object": {
                    "id": session_id,
                    "object": "checkout.session",
                    "amount_total": amount_total,
                    "payment_status": "paid",
                    "metadata": {"eventId": event_id, "buyerId": buyer_id, **metadata},
                }
            },
        }
    )


@pytest.fixture
def line_items(monkeypatch) -> Callable[[int | None], list[str]]:
    """Stub the Stripe line item lookup. Returns the session ids requested."""
    requested: list[str] = []

    def _stub(quantity: int | None) -> list[str]:
        def retrieve(session_id: str, **params: Any) -> SimpleNamespace:
            requested.append(session_id)
            data = [] if quantity is None else [SimpleNamespace(quantity=quantity)]
            return SimpleNamespace(id=session_id, line_items=SimpleNamespace(data=data))

        monkeypatch.setattr("stripe.checkout.Session.retrieve", retrieve)
        return requested

    return _stub


@pytest.fixture
def post_checkout(api_client, stripe_settings) -> Callable[..., Any]:
    """POST a signed checkout.session.completed webhook."""

    def _post(
        session_id: str,
        event_id: str,
        buyer_id: str,
        amount_total: int | None = 3000,
        signature: str | None = None,
        **metadata: str,
    ):
        payload = checkout_completed_payload(session_id, event_id, buyer_id, amount_total, **metadata)
        return api_client.post(
            "/api/webhooks/stripe",
            data=payload,
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE=sign_payload(payload) if signature is None else signature,
        )

    return _post
