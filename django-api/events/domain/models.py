"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from events.domain.value_objects import (
    CreatorRole,
    EventId,
    EventStatus,
    PaymentPurpose,
    PaymentStatus,
)


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    creator_id: int
    creator_role: CreatorRole
    status: EventStatus
    title: str
    created_at: datetime
    updated_at: datetime

    @property
    def is_draft(self) -> bool:
        return self.status is EventStatus.DRAFT

    def is_owned_by(self, user_id: int) -> bool:
        return self.creator_id == user_id


@dataclass(frozen=True)
class PendingPayment:
    """Audit record of a checkout session opened for an event."""

    checkout_session_id: str
    event_id: EventId
    creator_id: int
    purpose: PaymentPurpose
    status: PaymentStatus
    amount: Decimal
    currency: str
    created_at: datetime


@dataclass(frozen=True)
class PublishEligibility:
    """Outcome of the publish eligibility check."""

    allowed: bool
    requires_payment: bool
    published_count: int | None = None


@dataclass(frozen=True)
class CheckoutSession:
    """A checkout session opened with the payment processor."""

    id: str
    url: str
