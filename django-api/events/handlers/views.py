"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.domain import PaymentPurpose
from events.domain.errors import DomainError, SignatureInvalidError
from events.handlers import dependencies
from events.handlers.errors import error_response
from events.handlers.serializers import (
    CheckoutSessionSerializer,
    EventIdRequestSerializer,
    EventStatusSerializer,
    PublishEligibilitySerializer,
)

logger = logging.getLogger(__name__)


class PublishEligibilityView(APIView):
    """Handler for GET /api/events/{event_id}/publish-eligibility"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, event_id: str) -> Response:
        service = dependencies.get_publish_service()
        try:
            eligibility = service.check_event_eligibility(event_id, request.user.id)
        except DomainError as e:
            return error_response(e)
        return Response(PublishEligibilitySerializer(eligibility).data)


class PublishFreeView(APIView):
    """Handler for POST /api/events/{event_id}/publish-free"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, event_id: str) -> Response:
        service = dependencies.get_publish_service()
        try:
            event = service.publish_free(event_id, request.user.id)
        except DomainError as e:
            return error_response(e)
        return Response(EventStatusSerializer(event).data)


class EventStatusView(APIView):
    """Handler for GET /api/events/{event_id}/status"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, event_id: str) -> Response:
        service = dependencies.get_publish_service()
        try:
            event_status = service.get_status(event_id, request.user.id)
        except DomainError as e:
            return error_response(e)
        return Response(EventStatusSerializer({"id": event_id, "status": event_status}).data)


class CheckoutSessionView(APIView):
    """Handler for POST /api/checkout/sessions"""

    permission_classes = [IsAuthenticated]
    purpose = PaymentPurpose.PUBLISH

    def post(self, request: Request) -> Response:
        serializer = EventIdRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        service = dependencies.get_checkout_service()
        try:
            session = service.open_checkout(
                serializer.validated_data["event_id"], request.user.id, self.purpose
            )
        except DomainError as e:
            return error_response(e)
        return Response(CheckoutSessionSerializer(session).data)


class PromoCheckoutSessionView(CheckoutSessionView):
    """Handler for POST /api/checkout/promo-sessions"""

    purpose = PaymentPurpose.PROMO


class StripeWebhookView(APIView):
    """Handler for POST /api/webhooks/stripe

    Authentic deliveries always get 200, including no-op outcomes, so the
    processor does not redeliver a notification that was handled.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        reconciler = dependencies.get_webhook_reconciler()
        try:
            outcome = reconciler.handle(request.body, request.headers.get("Stripe-Signature"))
        except SignatureInvalidError as e:
            logger.warning("Rejected webhook with invalid signature")
            return error_response(e)
        except DomainError as e:
            logger.warning("Rejected webhook: %s", e)
            return error_response(e)
        return Response({"received": True, "outcome": outcome.value})
