"""Domain models for passwordless sign-in."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OneTimeCode:
    """Stored sign-in code for an email address."""

    email: str
    code_hash: str
    expires_at: datetime
    attempts: int = 0

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(frozen=True)
class UserIdentity:
    id: int
    email: str


@dataclass(frozen=True)
class IssuedSession:
    """Tokens returned to the browser after a successful sign-in."""

    access_token: str
    refresh_token: str
    expires_in: int
    expires_at: int
    token_type: str = "bearer"


@dataclass(frozen=True)
class SignIn:
    session: IssuedSession
    user: UserIdentity
