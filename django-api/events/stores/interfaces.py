"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from events.domain import Event, EventId, PaymentPurpose, PendingPayment


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def count_published(self) -> int:
        """Return the platform-wide number of published events."""
        ...

    @abstractmethod
    def publish_if_draft(self, event_id: EventId) -> bool:
        """Set status to published where status is draft.

        Returns True only if this call performed the transition.
        """
        ...

    @abstractmethod
    def publish_if_draft_and_none_published(self, event_id: EventId) -> bool:
        """Publish a draft only while no event on the platform is published.

        The count check and the write are a single atomic operation.
        Returns True only if this call performed the transition.
        """
        ...


class PaymentStore(ABC):
    """Interface for pending payment records."""

    @abstractmethod
    def create_pending(
        self,
        *,
        checkout_session_id: str,
        event_id: EventId,
        creator_id: int,
        purpose: PaymentPurpose,
        amount: Decimal,
        currency: str,
    ) -> PendingPayment:
        """Record a freshly opened checkout session as pending."""
        ...

    @abstractmethod
    def get_by_session(self, checkout_session_id: str) -> PendingPayment | None:
        """Return the payment for a checkout session, or None."""
        ...

    @abstractmethod
    def list_for_event(self, event_id: EventId) -> list[PendingPayment]:
        """Return all payments for an event, newest first."""
        ...

    @abstractmethod
    def mark_completed(self, checkout_session_id: str) -> bool:
        """Move a pending payment to completed. Returns True if it changed."""
        ...

    @abstractmethod
    def mark_failed(self, checkout_session_id: str) -> bool:
        """Move a pending payment to failed. Returns True if it changed."""
        ...
