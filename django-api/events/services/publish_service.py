"""Publish service - eligibility and the free publish path.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging

from events.domain import CreatorRole, Event, EventId, EventStatus, PublishEligibility
from events.domain.eligibility import evaluate_publish_eligibility
from events.domain.errors import (
    ConflictError,
    EventNotFoundError,
    ForbiddenError,
    InvalidEventIdError,
    QuotaExceededError,
)
from events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


def parse_event_id(event_id: str) -> EventId:
    """Parse a raw event id.

    Raises:
        InvalidEventIdError: If the event_id is not a valid UUID.
    """
    try:
        return EventId.from_string(event_id)
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidEventIdError() from e


class PublishService:
    """Decides and performs publishes that need no payment."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def get_owned_event(self, event_id: str, caller_id: int) -> Event:
        """Return an event the caller created.

        Raises:
            ForbiddenError: If the caller is not the creator.
        """
        event = self.get_event(event_id)
        if not event.is_owned_by(caller_id):
            raise ForbiddenError()
        return event

    def check_eligibility(self, role: CreatorRole) -> PublishEligibility:
        """Evaluate the publish policy against a fresh published count."""
        if role is CreatorRole.ARTIST:
            return evaluate_publish_eligibility(role)
        return evaluate_publish_eligibility(role, self._store.count_published())

    def check_event_eligibility(self, event_id: str, caller_id: int) -> PublishEligibility:
        event = self.get_owned_event(event_id, caller_id)
        return self.check_eligibility(event.creator_role)

    def get_status(self, event_id: str, caller_id: int) -> EventStatus:
        """Return the status of an event visible to the caller.

        Drafts are only visible to their creator; anyone else gets not-found.
        """
        event = self.get_event(event_id)
        if event.is_draft and not event.is_owned_by(caller_id):
            raise EventNotFoundError(event_id)
        return event.status

    def publish_free(self, event_id: str, caller_id: int) -> Event:
        """Publish a draft event without payment.

        Artists are never capped. Planners get the single platform-wide free
        slot: the count check and the write happen in one conditional update.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            ForbiddenError: If the caller is not the creator.
            ConflictError: If the event is not a draft.
            QuotaExceededError: If the free slot is already used.
        """
        event = self.get_owned_event(event_id, caller_id)
        if not event.is_draft:
            raise ConflictError()

        if event.creator_role is CreatorRole.ARTIST:
            published = self._store.publish_if_draft(event.id)
        else:
            published = self._store.publish_if_draft_and_none_published(event.id)

        if not published:
            current = self._store.get_event(event.id)
            if current is None:
                raise EventNotFoundError(event_id)
            if not current.is_draft:
                raise ConflictError()
            count = self._store.count_published()
            logger.info(
                "Free publish refused for event %s: %d event(s) already published", event.id, count
            )
            raise QuotaExceededError(published_count=count)

        logger.info("Event %s published for free by user %s", event.id, caller_id)
        return self.get_event(event_id)
