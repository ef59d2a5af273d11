"""Builds services from settings. The only place handlers touch configuration."""

from django.conf import settings

from events.domain import Money
from events.gateways.stripe_gateway import StripeCheckoutGateway, StripeWebhookVerifier
from events.services.checkout_service import CheckoutPricing, CheckoutService
from events.services.publish_service import PublishService
from events.services.webhook_service import WebhookReconciler
from events.stores.django_store import DjangoEventStore, DjangoPaymentStore


def get_publish_service() -> PublishService:
    return PublishService(DjangoEventStore())


def get_checkout_service() -> CheckoutService:
    return CheckoutService(
        publish_service=get_publish_service(),
        payments=DjangoPaymentStore(),
        gateway=StripeCheckoutGateway(api_key=settings.STRIPE_SECRET_KEY),
        pricing=CheckoutPricing(
            publish_fee=Money(settings.PUBLISH_FEE_AMOUNT, settings.PUBLISH_FEE_CURRENCY),
            promo_fee=Money(settings.PROMO_FEE_AMOUNT, settings.PROMO_FEE_CURRENCY),
        ),
        app_url=settings.APP_URL,
    )


def get_webhook_reconciler() -> WebhookReconciler:
    return WebhookReconciler(
        verifier=StripeWebhookVerifier(
            secret=settings.STRIPE_WEBHOOK_SECRET,
            tolerance=settings.STRIPE_WEBHOOK_TOLERANCE,
        ),
        events=DjangoEventStore(),
        payments=DjangoPaymentStore(),
    )
