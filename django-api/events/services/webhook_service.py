"""Webhook reconciler - turns processor notifications into publishes.

Deliveries are at-least-once and unordered, and the free publish path writes
the same status field, so every transition here is a conditional
draft -> published update and every no-op is a normal outcome.
"""

import logging
from enum import Enum

from events.domain import EventId, PaymentPurpose
from events.domain.errors import InvalidPayloadError
from events.gateways.interfaces import WebhookNotification, WebhookVerifier
from events.stores.interfaces import EventStore, PaymentStore

logger = logging.getLogger(__name__)

COMPLETION_EVENTS = frozenset(
    {"checkout.session.completed", "checkout.session.async_payment_succeeded"}
)
FAILURE_EVENTS = frozenset(
    {"checkout.session.expired", "checkout.session.async_payment_failed"}
)
SETTLED_PAYMENT_STATUSES = frozenset({"paid", "no_payment_required"})


class ReconcileOutcome(str, Enum):
    PUBLISHED = "published"
    ALREADY_PUBLISHED = "already_published"
    EVENT_NOT_FOUND = "event_not_found"
    CREATOR_MISMATCH = "creator_mismatch"
    PROMO_RECORDED = "promo_recorded"
    AWAITING_PAYMENT = "awaiting_payment"
    PAYMENT_FAILED = "payment_failed"
    IGNORED = "ignored"


class WebhookReconciler:
    """Authenticates notifications and performs idempotent publishes."""

    def __init__(self, verifier: WebhookVerifier, events: EventStore, payments: PaymentStore) -> None:
        self._verifier = verifier
        self._events = events
        self._payments = payments

    def handle(self, payload: bytes, signature: str | None) -> ReconcileOutcome:
        """Process one raw delivery.

        Raises:
            SignatureInvalidError: If the delivery is not authentic.
            InvalidPayloadError: If an authentic delivery is malformed.
        """
        notification = self._verifier.verify(payload, signature)

        if notification.type in COMPLETION_EVENTS:
            outcome = self._on_completed(notification)
        elif notification.type in FAILURE_EVENTS:
            outcome = self._on_failed(notification)
        else:
            outcome = ReconcileOutcome.IGNORED

        logger.info(
            "Webhook %s (%s) handled: %s", notification.id, notification.type, outcome.value
        )
        return outcome

    def _on_completed(self, notification: WebhookNotification) -> ReconcileOutcome:
        if notification.data.get("payment_status") not in SETTLED_PAYMENT_STATUSES:
            return ReconcileOutcome.AWAITING_PAYMENT

        event_id, creator_id = self._read_metadata(notification)
        self._record_payment(notification, completed=True)

        if notification.metadata.get("purpose") == PaymentPurpose.PROMO.value:
            return ReconcileOutcome.PROMO_RECORDED

        event = self._events.get_event(event_id)
        if event is None:
            logger.warning("Paid checkout for unknown event %s", event_id)
            return ReconcileOutcome.EVENT_NOT_FOUND

        if str(event.creator_id) != creator_id:
            logger.warning(
                "Paid checkout creator %s does not own event %s; not publishing", creator_id, event_id
            )
            return ReconcileOutcome.CREATOR_MISMATCH

        if not event.is_draft:
            return ReconcileOutcome.ALREADY_PUBLISHED

        if not self._events.publish_if_draft(event_id):
            return ReconcileOutcome.ALREADY_PUBLISHED

        logger.info("Event %s published after payment", event_id)
        return ReconcileOutcome.PUBLISHED

    def _on_failed(self, notification: WebhookNotification) -> ReconcileOutcome:
        self._record_payment(notification, completed=False)
        return ReconcileOutcome.PAYMENT_FAILED

    def _record_payment(self, notification: WebhookNotification, *, completed: bool) -> None:
        session_id = notification.data.get("id")
        if not session_id:
            return
        if self._payments.get_by_session(session_id) is None:
            logger.warning("No pending payment recorded for checkout session %s", session_id)
            return
        if completed:
            self._payments.mark_completed(session_id)
        else:
            self._payments.mark_failed(session_id)

    def _read_metadata(self, notification: WebhookNotification) -> tuple[EventId, str]:
        metadata = notification.metadata
        raw_event_id = metadata.get("event_id")
        creator_id = metadata.get("creator_id")
        if not raw_event_id or not creator_id:
            raise InvalidPayloadError("Checkout session is missing event metadata")
        try:
            return EventId.from_string(raw_event_id), str(creator_id)
        except ValueError as e:
            raise InvalidPayloadError("Checkout session has an invalid event id") from e
