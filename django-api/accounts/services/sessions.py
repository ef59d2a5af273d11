"""Session minting through the JWT identity provider."""

from abc import ABC, abstractmethod

from django.contrib.auth import get_user_model
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken

from accounts.domain import IssuedSession, UserIdentity


class SessionIssuer(ABC):
    @abstractmethod
    def issue(self, identity: UserIdentity) -> IssuedSession:
        """Mint a session the API's bearer authentication will accept."""
        ...


class SimpleJwtSessionIssuer(SessionIssuer):
    """Issues SimpleJWT refresh/access pairs for Django users."""

    def issue(self, identity: UserIdentity) -> IssuedSession:
        user = get_user_model().objects.get(pk=identity.id)
        refresh = RefreshToken.for_user(user)
        access = refresh.access_token
        return IssuedSession(
            access_token=str(access),
            refresh_token=str(refresh),
            expires_in=int(api_settings.ACCESS_TOKEN_LIFETIME.total_seconds()),
            expires_at=int(access["exp"]),
        )
