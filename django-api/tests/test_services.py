"""Unit tests for PublishService, CheckoutService and WebhookReconciler.

These test orchestration and domain error mapping against the ORM stores.
Run with: pytest tests/test_services.py -v
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from events.domain import EventId, EventStatus, Money, PaymentPurpose, PaymentStatus
from events.domain.errors import (
    ConflictError,
    EventNotFoundError,
    ForbiddenError,
    InvalidEventIdError,
    InvalidPayloadError,
    QuotaExceededError,
    SignatureInvalidError,
    UpstreamFailureError,
)
from events.gateways.stripe_gateway import StripeCheckoutGateway, StripeWebhookVerifier
from events.models import Event, PendingPayment
from events.services.checkout_service import CheckoutPricing, CheckoutService
from events.services.publish_service import PublishService
from events.services.webhook_service import ReconcileOutcome, WebhookReconciler
from events.stores.django_store import DjangoEventStore, DjangoPaymentStore


@pytest.fixture
def publish_service() -> PublishService:
    return PublishService(DjangoEventStore())


@pytest.fixture
def checkout_service(publish_service, stub_gateway) -> CheckoutService:
    return CheckoutService(
        publish_service=publish_service,
        payments=DjangoPaymentStore(),
        gateway=stub_gateway,
        pricing=CheckoutPricing(publish_fee=Money(3000, "usd"), promo_fee=Money(50, "aud")),
        app_url="https://app.example.com/",
    )


@pytest.fixture
def reconciler(payment_settings) -> WebhookReconciler:
    return WebhookReconciler(
        verifier=StripeWebhookVerifier(secret=payment_settings.STRIPE_WEBHOOK_SECRET),
        events=DjangoEventStore(),
        payments=DjangoPaymentStore(),
    )


@pytest.mark.django_db
class TestPublishService:
    """Tests for PublishService."""

    def test_get_event_invalid_id_raises_error(self, publish_service):
        """get_event raises InvalidEventIdError for malformed UUID."""
        with pytest.raises(InvalidEventIdError):
            publish_service.get_event("not-a-uuid")

    def test_get_event_not_found_raises_error(self, publish_service):
        """get_event raises EventNotFoundError when store returns None."""
        with pytest.raises(EventNotFoundError):
            publish_service.get_event(str(uuid4()))

    def test_eligibility_for_non_creator_is_forbidden(self, publish_service, planner, other_planner, make_event):
        event = make_event(planner)
        with pytest.raises(ForbiddenError):
            publish_service.check_event_eligibility(str(event.id), other_planner.id)

    def test_planner_eligibility_tracks_platform_count(self, publish_service, planner, artist, make_event):
        draft = make_event(planner)
        assert publish_service.check_event_eligibility(str(draft.id), planner.id).allowed is True

        make_event(artist, role="artist", status="published")
        eligibility = publish_service.check_event_eligibility(str(draft.id), planner.id)
        assert eligibility.allowed is False
        assert eligibility.requires_payment is True
        assert eligibility.published_count == 1

    def test_artist_publishes_regardless_of_count(self, publish_service, artist, make_event):
        for _ in range(3):
            make_event(artist, role="artist", status="published")
        draft = make_event(artist, role="artist")

        event = publish_service.publish_free(str(draft.id), artist.id)

        assert event.status is EventStatus.PUBLISHED
        assert Event.objects.filter(status="published").count() == 4

    def test_planner_uses_the_single_free_slot(self, publish_service, planner, make_event):
        first = make_event(planner)
        second = make_event(planner, title="Second Night")

        assert publish_service.publish_free(str(first.id), planner.id).status is EventStatus.PUBLISHED

        with pytest.raises(QuotaExceededError) as exc_info:
            publish_service.publish_free(str(second.id), planner.id)
        assert exc_info.value.published_count == 1
        second.refresh_from_db()
        assert second.status == "draft"

    def test_publish_free_by_non_creator_is_forbidden(self, publish_service, planner, other_planner, make_event):
        event = make_event(planner)
        with pytest.raises(ForbiddenError):
            publish_service.publish_free(str(event.id), other_planner.id)
        event.refresh_from_db()
        assert event.status == "draft"

    def test_publish_free_on_published_event_conflicts(self, publish_service, artist, make_event):
        event = make_event(artist, role="artist", status="published")
        with pytest.raises(ConflictError):
            publish_service.publish_free(str(event.id), artist.id)

    def test_status_of_draft_hidden_from_others(self, publish_service, planner, other_planner, make_event):
        event = make_event(planner)
        assert publish_service.get_status(str(event.id), planner.id) is EventStatus.DRAFT
        with pytest.raises(EventNotFoundError):
            publish_service.get_status(str(event.id), other_planner.id)

    def test_status_of_published_event_visible_to_anyone(self, publish_service, artist, planner, make_event):
        event = make_event(artist, role="artist", status="published")
        assert publish_service.get_status(str(event.id), planner.id) is EventStatus.PUBLISHED


@pytest.mark.django_db
class TestDjangoEventStore:
    """Tests for the conditional status transitions."""

    def test_publish_if_draft_only_succeeds_once(self, planner, make_event):
        store = DjangoEventStore()
        event = make_event(planner)
        event_id = EventId(value=event.id)

        assert store.publish_if_draft(event_id) is True
        assert store.publish_if_draft(event_id) is False
        assert store.get_event(event_id).status is EventStatus.PUBLISHED

    def test_free_publish_refused_once_anything_is_published(self, planner, artist, make_event):
        store = DjangoEventStore()
        make_event(artist, role="artist", status="published")
        draft = make_event(planner)

        assert store.publish_if_draft_and_none_published(EventId(value=draft.id)) is False
        draft.refresh_from_db()
        assert draft.status == "draft"

    def test_publish_touches_updated_at(self, planner, make_event):
        store = DjangoEventStore()
        event = make_event(planner)
        before = event.updated_at

        store.publish_if_draft(EventId(value=event.id))

        event.refresh_from_db()
        assert event.updated_at >= before


@pytest.mark.django_db
class TestCheckoutService:
    """Tests for CheckoutService."""

    def test_open_checkout_records_pending_payment(self, checkout_service, stub_gateway, planner, make_event):
        event = make_event(planner)

        session = checkout_service.open_checkout(str(event.id), planner.id)

        payment = PendingPayment.objects.get(pk=session.id)
        assert payment.event_id == event.id
        assert payment.creator_id == planner.id
        assert payment.status == "pending"
        assert payment.purpose == "publish"
        assert payment.amount == Decimal("30.00")
        assert payment.currency == "usd"

        request = stub_gateway.requests[0]
        assert request.product_name == "Event Publishing"
        assert request.price == Money(3000, "usd")
        assert request.metadata == {
            "event_id": str(event.id),
            "creator_id": str(planner.id),
            "creator_role": "planner",
            "purpose": "publish",
        }
        assert request.success_url == f"https://app.example.com/publish/success?event_id={event.id}"
        assert request.cancel_url == f"https://app.example.com/publish/cancel?event_id={event.id}"

    def test_promo_checkout_uses_promo_fee(self, checkout_service, stub_gateway, planner, make_event):
        event = make_event(planner)

        session = checkout_service.open_checkout(str(event.id), planner.id, PaymentPurpose.PROMO)

        request = stub_gateway.requests[0]
        assert request.product_name == "Promo Test Payment"
        assert request.price == Money(50, "aud")
        assert request.metadata["purpose"] == "promo"
        assert "promo=true" in request.success_url
        assert PendingPayment.objects.get(pk=session.id).amount == Decimal("0.50")

    def test_non_creator_gets_no_session(self, checkout_service, stub_gateway, planner, other_planner, make_event):
        event = make_event(planner)
        with pytest.raises(ForbiddenError):
            checkout_service.open_checkout(str(event.id), other_planner.id)
        assert stub_gateway.requests == []
        assert PendingPayment.objects.count() == 0

    def test_published_event_gets_no_session(self, checkout_service, stub_gateway, artist, make_event):
        event = make_event(artist, role="artist", status="published")
        with pytest.raises(ConflictError):
            checkout_service.open_checkout(str(event.id), artist.id)
        assert PendingPayment.objects.count() == 0

    def test_gateway_failure_records_nothing(self, checkout_service, stub_gateway, planner, make_event):
        stub_gateway.fail = True
        event = make_event(planner)
        with pytest.raises(UpstreamFailureError):
            checkout_service.open_checkout(str(event.id), planner.id)
        assert PendingPayment.objects.count() == 0


class TestStripeCheckoutGateway:
    """Tests for StripeCheckoutGateway configuration handling."""

    def test_missing_api_key_is_upstream_failure(self):
        from events.gateways.interfaces import CheckoutRequest

        gateway = StripeCheckoutGateway(api_key="")
        request = CheckoutRequest(
            product_name="Event Publishing",
            description="Publish event: Warehouse Night",
            price=Money(3000, "usd"),
            success_url="https://app.example.com/publish/success",
            cancel_url="https://app.example.com/publish/cancel",
            metadata={},
        )
        with pytest.raises(UpstreamFailureError):
            gateway.open_checkout(request)


@pytest.mark.django_db
class TestWebhookReconciler:
    """Tests for WebhookReconciler."""

    def test_completed_checkout_publishes_draft(self, reconciler, stripe_delivery, checkout_completed, planner, make_event):
        event = make_event(planner)
        payload, signature = stripe_delivery(checkout_completed(event))

        assert reconciler.handle(payload, signature) is ReconcileOutcome.PUBLISHED
        event.refresh_from_db()
        assert event.status == "published"

    def test_duplicate_delivery_is_a_no_op(self, reconciler, stripe_delivery, checkout_completed, planner, make_event):
        event = make_event(planner)
        payload, signature = stripe_delivery(checkout_completed(event))

        assert reconciler.handle(payload, signature) is ReconcileOutcome.PUBLISHED
        assert reconciler.handle(payload, signature) is ReconcileOutcome.ALREADY_PUBLISHED
        assert Event.objects.filter(status="published").count() == 1

    def test_payment_row_marked_completed(self, reconciler, stripe_delivery, checkout_completed, planner, make_event):
        event = make_event(planner)
        DjangoPaymentStore().create_pending(
            checkout_session_id="cs_test_1",
            event_id=EventId(value=event.id),
            creator_id=planner.id,
            purpose=PaymentPurpose.PUBLISH,
            amount=Decimal("30.00"),
            currency="usd",
        )
        payload, signature = stripe_delivery(checkout_completed(event, session_id="cs_test_1"))

        reconciler.handle(payload, signature)

        payment = DjangoPaymentStore().get_by_session("cs_test_1")
        assert payment.status is PaymentStatus.COMPLETED

    def test_creator_mismatch_does_not_publish(
        self, reconciler, stripe_delivery, checkout_completed, planner, other_planner, make_event
    ):
        event = make_event(planner)
        payload, signature = stripe_delivery(checkout_completed(event, creator_id=other_planner.id))

        assert reconciler.handle(payload, signature) is ReconcileOutcome.CREATOR_MISMATCH
        event.refresh_from_db()
        assert event.status == "draft"

    def test_unknown_event_is_acknowledged(self, reconciler, stripe_delivery, checkout_completed, planner, make_event):
        event = make_event(planner)
        data = checkout_completed(event)
        event.delete()
        payload, signature = stripe_delivery(data)

        assert reconciler.handle(payload, signature) is ReconcileOutcome.EVENT_NOT_FOUND

    def test_promo_payment_never_publishes(self, reconciler, stripe_delivery, checkout_completed, planner, make_event):
        event = make_event(planner)
        payload, signature = stripe_delivery(checkout_completed(event, purpose="promo"))

        assert reconciler.handle(payload, signature) is ReconcileOutcome.PROMO_RECORDED
        event.refresh_from_db()
        assert event.status == "draft"

    def test_unpaid_completion_waits(self, reconciler, stripe_delivery, checkout_completed, planner, make_event):
        event = make_event(planner)
        payload, signature = stripe_delivery(checkout_completed(event, payment_status="unpaid"))

        assert reconciler.handle(payload, signature) is ReconcileOutcome.AWAITING_PAYMENT
        event.refresh_from_db()
        assert event.status == "draft"

    def test_async_success_publishes(self, reconciler, stripe_delivery, checkout_completed, planner, make_event):
        event = make_event(planner)
        payload, signature = stripe_delivery(
            checkout_completed(event), event_type="checkout.session.async_payment_succeeded"
        )

        assert reconciler.handle(payload, signature) is ReconcileOutcome.PUBLISHED

    def test_expired_session_marks_payment_failed(self, reconciler, stripe_delivery, checkout_completed, planner, make_event):
        event = make_event(planner)
        DjangoPaymentStore().create_pending(
            checkout_session_id="cs_test_9",
            event_id=EventId(value=event.id),
            creator_id=planner.id,
            purpose=PaymentPurpose.PUBLISH,
            amount=Decimal("30.00"),
            currency="usd",
        )
        data = checkout_completed(event, session_id="cs_test_9", payment_status="unpaid")
        payload, signature = stripe_delivery(data, event_type="checkout.session.expired")

        assert reconciler.handle(payload, signature) is ReconcileOutcome.PAYMENT_FAILED
        assert DjangoPaymentStore().get_by_session("cs_test_9").status is PaymentStatus.FAILED
        event.refresh_from_db()
        assert event.status == "draft"

    def test_unrelated_event_type_is_ignored(self, reconciler, stripe_delivery):
        payload, signature = stripe_delivery({"id": "pi_123"}, event_type="payment_intent.created")
        assert reconciler.handle(payload, signature) is ReconcileOutcome.IGNORED

    def test_missing_metadata_is_invalid_payload(self, reconciler, stripe_delivery):
        payload, signature = stripe_delivery({"id": "cs_test_1", "payment_status": "paid", "metadata": {}})
        with pytest.raises(InvalidPayloadError):
            reconciler.handle(payload, signature)

    def test_non_object_metadata_is_invalid_payload(self, reconciler, stripe_delivery):
        payload, signature = stripe_delivery({"id": "cs_test_1", "payment_status": "paid", "metadata": ["x"]})
        with pytest.raises(InvalidPayloadError):
            reconciler.handle(payload, signature)

    def test_wrong_secret_is_rejected(self, reconciler, stripe_delivery, checkout_completed, planner, make_event):
        event = make_event(planner)
        payload, signature = stripe_delivery(checkout_completed(event), secret="whsec_someone_else")

        with pytest.raises(SignatureInvalidError):
            reconciler.handle(payload, signature)
        event.refresh_from_db()
        assert event.status == "draft"

    def test_tampered_body_is_rejected(self, reconciler, stripe_delivery, checkout_completed, planner, make_event):
        event = make_event(planner)
        payload, signature = stripe_delivery(checkout_completed(event))

        with pytest.raises(SignatureInvalidError):
            reconciler.handle(payload.replace(b"paid", b"PAID"), signature)

    def test_stale_timestamp_is_rejected(self, reconciler, stripe_delivery, checkout_completed, planner, make_event):
        event = make_event(planner)
        payload, signature = stripe_delivery(checkout_completed(event), timestamp=1_000_000)

        with pytest.raises(SignatureInvalidError):
            reconciler.handle(payload, signature)

    def test_missing_signature_is_rejected(self, reconciler, stripe_delivery, checkout_completed, planner, make_event):
        event = make_event(planner)
        payload, _ = stripe_delivery(checkout_completed(event))

        with pytest.raises(SignatureInvalidError):
            reconciler.handle(payload, None)
