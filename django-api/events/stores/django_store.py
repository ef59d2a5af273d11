"""Django ORM implementations of the event and payment stores."""

from decimal import Decimal

from django.db import connection, transaction
from django.db.models import Exists
from django.utils import timezone

from events import models as orm
from events.domain import (
    CreatorRole,
    Event,
    EventId,
    EventStatus,
    PaymentPurpose,
    PaymentStatus,
    PendingPayment,
)
from events.stores.interfaces import EventStore, PaymentStore

# Arbitrary key shared by every free-publish attempt on PostgreSQL.
FREE_PUBLISH_LOCK_KEY = 734_001


def _to_event(row: orm.Event) -> Event:
    return Event(
        id=EventId(value=row.id),
        creator_id=row.creator_id,
        creator_role=CreatorRole(row.creator_role),
        status=EventStatus(row.status),
        title=row.title,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_payment(row: orm.PendingPayment) -> PendingPayment:
    return PendingPayment(
        checkout_session_id=row.checkout_session_id,
        event_id=EventId(value=row.event_id),
        creator_id=row.creator_id,
        purpose=PaymentPurpose(row.purpose),
        status=PaymentStatus(row.status),
        amount=row.amount,
        currency=row.currency,
        created_at=row.created_at,
    )


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    def get_event(self, event_id: EventId) -> Event | None:
        row = orm.Event.objects.filter(pk=event_id.value).first()
        return _to_event(row) if row is not None else None

    def count_published(self) -> int:
        return orm.Event.objects.filter(status=orm.Event.Status.PUBLISHED).count()

    def publish_if_draft(self, event_id: EventId) -> bool:
        updated = orm.Event.objects.filter(
            pk=event_id.value, status=orm.Event.Status.DRAFT
        ).update(status=orm.Event.Status.PUBLISHED, updated_at=timezone.now())
        return updated == 1

    def publish_if_draft_and_none_published(self, event_id: EventId) -> bool:
        already_published = orm.Event.objects.filter(status=orm.Event.Status.PUBLISHED)
        with transaction.atomic():
            if connection.vendor == "postgresql":
                with connection.cursor() as cursor:
                    cursor.execute("SELECT pg_advisory_xact_lock(%s)", [FREE_PUBLISH_LOCK_KEY])
            updated = (
                orm.Event.objects.filter(pk=event_id.value, status=orm.Event.Status.DRAFT)
                .filter(~Exists(already_published))
                .update(status=orm.Event.Status.PUBLISHED, updated_at=timezone.now())
            )
        return updated == 1


class DjangoPaymentStore(PaymentStore):
    """Relational pending-payment store using Django ORM."""

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
        row = orm.PendingPayment.objects.create(
            checkout_session_id=checkout_session_id,
            event_id=event_id.value,
            creator_id=creator_id,
            purpose=purpose.value,
            status=orm.PendingPayment.Status.PENDING,
            amount=amount,
            currency=currency,
        )
        return _to_payment(row)

    def get_by_session(self, checkout_session_id: str) -> PendingPayment | None:
        row = orm.PendingPayment.objects.filter(pk=checkout_session_id).first()
        return _to_payment(row) if row is not None else None

    def list_for_event(self, event_id: EventId) -> list[PendingPayment]:
        rows = orm.PendingPayment.objects.filter(event_id=event_id.value).order_by("-created_at")
        return [_to_payment(row) for row in rows]

    def mark_completed(self, checkout_session_id: str) -> bool:
        return self._transition(checkout_session_id, orm.PendingPayment.Status.COMPLETED)

    def mark_failed(self, checkout_session_id: str) -> bool:
        return self._transition(checkout_session_id, orm.PendingPayment.Status.FAILED)

    def _transition(self, checkout_session_id: str, status: str) -> bool:
        updated = orm.PendingPayment.objects.filter(
            pk=checkout_session_id, status=orm.PendingPayment.Status.PENDING
        ).update(status=status, updated_at=timezone.now())
        return updated == 1
