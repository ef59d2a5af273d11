from events.handlers.views import (
    CheckoutSessionView,
    EventStatusView,
    PromoCheckoutSessionView,
    PublishEligibilityView,
    PublishFreeView,
    StripeWebhookView,
)

__all__ = [
    "CheckoutSessionView",
    "EventStatusView",
    "PromoCheckoutSessionView",
    "PublishEligibilityView",
    "PublishFreeView",
    "StripeWebhookView",
]
