from django.urls import path

from events.handlers import (
    CheckoutSessionView,
    EventStatusView,
    PromoCheckoutSessionView,
    PublishEligibilityView,
    PublishFreeView,
    StripeWebhookView,
)

urlpatterns = [
    path("events/<str:event_id>/status", EventStatusView.as_view(), name="event-status"),
    path(
        "events/<str:event_id>/publish-eligibility",
        PublishEligibilityView.as_view(),
        name="publish-eligibility",
    ),
    path("events/<str:event_id>/publish-free", PublishFreeView.as_view(), name="publish-free"),
    path("checkout/sessions", CheckoutSessionView.as_view(), name="checkout-session"),
    path(
        "checkout/promo-sessions",
        PromoCheckoutSessionView.as_view(),
        name="promo-checkout-session",
    ),
    path("webhooks/stripe", StripeWebhookView.as_view(), name="stripe-webhook"),
]
