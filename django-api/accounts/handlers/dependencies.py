"""Builds sign-in services from settings."""

from datetime import timedelta

from django.conf import settings

from accounts.notifiers import DjangoMailNotifier
from accounts.services.otp_service import OtpIssuer, OtpVerifier
from accounts.services.sessions import SimpleJwtSessionIssuer
from accounts.stores.django_store import DjangoCredentialStore, DjangoIdentityStore


def get_otp_issuer() -> OtpIssuer:
    return OtpIssuer(
        DjangoCredentialStore(),
        DjangoMailNotifier(settings.DEFAULT_FROM_EMAIL),
        ttl=timedelta(minutes=settings.OTP_TTL_MINUTES),
    )


def get_otp_verifier() -> OtpVerifier:
    return OtpVerifier(
        DjangoCredentialStore(),
        DjangoIdentityStore(),
        SimpleJwtSessionIssuer(),
        max_attempts=settings.OTP_MAX_ATTEMPTS,
    )
