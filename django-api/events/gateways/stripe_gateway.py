"""Stripe implementations of the payment gateway and webhook verifier."""

import json
import logging

import stripe

from events.domain import CheckoutSession
from events.domain.errors import InvalidPayloadError, SignatureInvalidError, UpstreamFailureError
from events.gateways.interfaces import (
    CheckoutRequest,
    PaymentGateway,
    WebhookNotification,
    WebhookVerifier,
)

logger = logging.getLogger(__name__)


class StripeCheckoutGateway(PaymentGateway):
    """Opens Stripe Checkout sessions in payment mode.

    The API key is passed per request instead of being set on the `stripe`
    module, so several gateways (or none) can coexist in one process.
    """

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    def open_checkout(self, request: CheckoutRequest) -> CheckoutSession:
        if not self._api_key:
            raise UpstreamFailureError("Stripe is not configured. Please contact support.")

        try:
            session = stripe.checkout.Session.create(
                api_key=self._api_key,
                mode="payment",
                payment_method_types=["card"],
                line_items=[
                    {
                        "price_data": {
                            "currency": request.price.currency,
                            "product_data": {
                                "name": request.product_name,
                                "description": request.description,
                            },
                            "unit_amount": request.price.amount_minor,
                        },
                        "quantity": 1,
                    }
                ],
                success_url=request.success_url,
                cancel_url=request.cancel_url,
                metadata=request.metadata,
            )
        except stripe.StripeError as e:
            logger.error("Stripe error creating checkout session: %s", e)
            raise UpstreamFailureError("Failed to create checkout session") from e

        return CheckoutSession(id=session.id, url=session.url)


class StripeWebhookVerifier(WebhookVerifier):
    """Checks the `Stripe-Signature` header against the endpoint secret."""

    def __init__(self, secret: str, tolerance: int = 300) -> None:
        self._secret = secret
        self._tolerance = tolerance

    def verify(self, payload: bytes, signature: str | None) -> WebhookNotification:
        if not signature or not self._secret:
            raise SignatureInvalidError()

        try:
            body = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidPayloadError() from e

        try:
            stripe.WebhookSignature.verify_header(body, signature, self._secret, self._tolerance)
        except stripe.SignatureVerificationError as e:
            raise SignatureInvalidError() from e

        try:
            envelope = json.loads(body)
        except json.JSONDecodeError as e:
            raise InvalidPayloadError() from e

        if not isinstance(envelope, dict):
            raise InvalidPayloadError()
        data = envelope.get("data")
        data = data.get("object") if isinstance(data, dict) else None
        if not isinstance(envelope.get("type"), str) or not isinstance(data, dict):
            raise InvalidPayloadError()
        if not isinstance(data.get("metadata") or {}, dict):
            raise InvalidPayloadError("Checkout session metadata must be an object")

        return WebhookNotification(
            id=str(envelope.get("id", "")),
            type=envelope["type"],
            data=data,
        )
