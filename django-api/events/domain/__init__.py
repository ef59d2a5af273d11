from events.domain.models import CheckoutSession, Event, PendingPayment, PublishEligibility
from events.domain.value_objects import (
    CreatorRole,
    EventId,
    EventStatus,
    Money,
    PaymentPurpose,
    PaymentStatus,
)

__all__ = [
    "Event",
    "PendingPayment",
    "PublishEligibility",
    "CheckoutSession",
    "EventId",
    "EventStatus",
    "CreatorRole",
    "PaymentStatus",
    "PaymentPurpose",
    "Money",
]
