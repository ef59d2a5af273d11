"""Checkout service - opens paid publish (and promo test) sessions."""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from events.domain import CheckoutSession, Event, Money, PaymentPurpose
from events.domain.errors import ConflictError
from events.gateways.interfaces import CheckoutRequest, PaymentGateway
from events.services.publish_service import PublishService
from events.stores.interfaces import PaymentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutPricing:
    """Flat fees charged per checkout purpose."""

    publish_fee: Money
    promo_fee: Money

    def for_purpose(self, purpose: PaymentPurpose) -> Money:
        if purpose is PaymentPurpose.PROMO:
            return self.promo_fee
        return self.publish_fee


class CheckoutService:
    """Opens checkout sessions for draft events and records them as pending."""

    def __init__(
        self,
        publish_service: PublishService,
        payments: PaymentStore,
        gateway: PaymentGateway,
        pricing: CheckoutPricing,
        app_url: str,
    ) -> None:
        self._publish = publish_service
        self._payments = payments
        self._gateway = gateway
        self._pricing = pricing
        self._app_url = app_url.rstrip("/")

    def open_checkout(
        self,
        event_id: str,
        caller_id: int,
        purpose: PaymentPurpose = PaymentPurpose.PUBLISH,
    ) -> CheckoutSession:
        """Open a checkout session for the caller's draft event.

        The pending payment row is written only once the processor session
        exists, and before the URL is handed back.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            ForbiddenError: If the caller is not the creator.
            ConflictError: If the event is not a draft.
            UpstreamFailureError: If the processor fails.
        """
        event = self._publish.get_owned_event(event_id, caller_id)
        if not event.is_draft:
            raise ConflictError("Event is already published")

        price = self._pricing.for_purpose(purpose)
        session = self._gateway.open_checkout(self._build_request(event, purpose, price))

        self._payments.create_pending(
            checkout_session_id=session.id,
            event_id=event.id,
            creator_id=event.creator_id,
            purpose=purpose,
            amount=price.amount,
            currency=price.currency,
        )
        logger.info(
            "Opened %s checkout session %s for event %s (%s)", purpose.value, session.id, event.id, price
        )
        return session

    def _build_request(self, event: Event, purpose: PaymentPurpose, price: Money) -> CheckoutRequest:
        query = {"event_id": str(event.id)}
        if purpose is PaymentPurpose.PROMO:
            query["promo"] = "true"
            product_name = "Promo Test Payment"
            description = f"Promo test for event: {event.title}"
        else:
            product_name = "Event Publishing"
            description = f"Publish event: {event.title}"

        return CheckoutRequest(
            product_name=product_name,
            description=description,
            price=price,
            success_url=f"{self._app_url}/publish/success?{urlencode(query)}",
            cancel_url=f"{self._app_url}/publish/cancel?{urlencode(query)}",
            metadata={
                "event_id": str(event.id),
                "creator_id": str(event.creator_id),
                "creator_role": event.creator_role.value,
                "purpose": purpose.value,
            },
        )
