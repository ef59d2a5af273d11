"""Pytest configuration and shared fixtures."""

import hashlib
import hmac
import json
import time

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from events.domain import CheckoutSession
from events.domain.errors import UpstreamFailureError
from events.gateways.interfaces import CheckoutRequest, PaymentGateway
from events.models import Event

WEBHOOK_SECRET = "whsec_test_secret"


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def payment_settings(settings):
    settings.STRIPE_SECRET_KEY = "sk_test_dummy"
    settings.STRIPE_WEBHOOK_SECRET = WEBHOOK_SECRET
    settings.APP_URL = "https://app.example.com"
    settings.PUBLISH_FEE_AMOUNT = 3000
    settings.PUBLISH_FEE_CURRENCY = "usd"
    settings.PROMO_FEE_AMOUNT = 50
    settings.PROMO_FEE_CURRENCY = "aud"
    return settings


@pytest.fixture
def planner(django_user_model):
    return django_user_model.objects.create_user(username="planner@example.com", email="planner@example.com")


@pytest.fixture
def other_planner(django_user_model):
    return django_user_model.objects.create_user(username="second@example.com", email="second@example.com")


@pytest.fixture
def artist(django_user_model):
    return django_user_model.objects.create_user(username="artist@example.com", email="artist@example.com")


@pytest.fixture
def make_event(db):
    def _make(creator, role: str = "planner", status: str = "draft", title: str = "Warehouse Night") -> Event:
        return Event.objects.create(creator=creator, creator_role=role, status=status, title=title)

    return _make


@pytest.fixture
def client_for():
    """Return an API client authenticated as the given user with a bearer token."""

    def _client(user) -> APIClient:
        client = APIClient()
        token = RefreshToken.for_user(user).access_token
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        return client

    return _client


class StubGateway(PaymentGateway):
    """Records checkout requests instead of calling the processor."""

    def __init__(self) -> None:
        self.requests: list[CheckoutRequest] = []
        self.fail = False

    def open_checkout(self, request: CheckoutRequest) -> CheckoutSession:
        if self.fail:
            raise UpstreamFailureError("Failed to create checkout session")
        self.requests.append(request)
        session_id = f"cs_test_{len(self.requests)}"
        return CheckoutSession(id=session_id, url=f"https://checkout.stripe.com/c/pay/{session_id}")


@pytest.fixture
def gateway(monkeypatch) -> StubGateway:
    stub = StubGateway()
    monkeypatch.setattr("events.handlers.dependencies.StripeCheckoutGateway", lambda api_key: stub)
    return stub


@pytest.fixture
def stub_gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def stripe_delivery():
    """Build a Stripe-style webhook body and a matching signature header."""

    def _delivery(
        data: dict,
        event_type: str = "checkout.session.completed",
        secret: str = WEBHOOK_SECRET,
        timestamp: int | None = None,
    ) -> tuple[bytes, str]:
        payload = json.dumps(
            {"id": "evt_test_1", "object": "event", "type": event_type, "data": {"object": data}}
        )
        ts = timestamp if timestamp is not None else int(time.time())
        digest = hmac.new(secret.encode(), f"{ts}.{payload}".encode(), hashlib.sha256).hexdigest()
        return payload.encode(), f"t={ts},v1={digest}"

    return _delivery


@pytest.fixture
def checkout_completed():
    """Build the `data.object` of a completed publish checkout for an event."""

    def _object(
        event: Event,
        session_id: str = "cs_test_1",
        creator_id=None,
        purpose: str = "publish",
        payment_status: str = "paid",
    ) -> dict:
        return {
            "id": session_id,
            "object": "checkout.session",
            "mode": "payment",
            "payment_status": payment_status,
            "metadata": {
                "event_id": str(event.id),
                "creator_id": str(creator_id if creator_id is not None else event.creator_id),
                "creator_role": event.creator_role,
                "purpose": purpose,
            },
        }

    return _object
