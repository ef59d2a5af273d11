"""Passwordless sign-in: issue and verify one-time codes.

Services:
- Depend only on interfaces (stores, notifier, session issuer)
- Never persist or log a plaintext code
- Collapse every verification failure into one error
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, NoReturn

from django.utils import timezone

from accounts.domain import OneTimeCode, SignIn
from accounts.domain.codes import code_matches, generate_code, hash_code
from accounts.domain.errors import AuthenticationFailedError
from accounts.notifiers import OtpNotifier
from accounts.services.sessions import SessionIssuer
from accounts.stores.interfaces import CredentialStore, IdentityStore

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=10)
DEFAULT_MAX_ATTEMPTS = 5


def normalise_email(email: str) -> str:
    return email.strip().lower()


class OtpIssuer:
    """Creates a fresh code for an email and sends it."""

    def __init__(
        self,
        credentials: CredentialStore,
        notifier: OtpNotifier,
        *,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = timezone.now,
        code_factory: Callable[[], str] = generate_code,
    ) -> None:
        self._credentials = credentials
        self._notifier = notifier
        self._ttl = ttl
        self._clock = clock
        self._code_factory = code_factory

    def issue(self, email: str) -> None:
        """Store a new code (replacing any prior one) and email it.

        Raises:
            DeliveryFailedError: If the email could not be sent. The stored
                code stays live; a repeat request overwrites it.
        """
        email = normalise_email(email)
        code = self._code_factory()
        self._credentials.put(
            OneTimeCode(
                email=email,
                code_hash=hash_code(code),
                expires_at=self._clock() + self._ttl,
                attempts=0,
            )
        )
        self._notifier.send_code(email, code, int(self._ttl.total_seconds() // 60))
        logger.info("Issued sign-in code for %s", email)


class OtpVerifier:
    """Checks a submitted code, consumes it and signs the user in."""

    def __init__(
        self,
        credentials: CredentialStore,
        identities: IdentityStore,
        sessions: SessionIssuer,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._credentials = credentials
        self._identities = identities
        self._sessions = sessions
        self._max_attempts = max_attempts
        self._clock = clock

    def verify(self, email: str, code: str) -> SignIn:
        """Exchange a valid code for a session.

        The code is deleted before the session is minted, so it can be used
        at most once even under concurrent submissions.

        Raises:
            AuthenticationFailedError: If there is no live code, the code is
                wrong, expired, or was consumed concurrently.
        """
        email = normalise_email(email)
        now = self._clock()
        record = self._credentials.get(email)

        if record is None:
            self._reject(email, "no code on record")

        if record.is_expired(now):
            self._credentials.delete(email, record.code_hash)
            self._reject(email, "code expired")

        if record.attempts >= self._max_attempts:
            self._credentials.delete(email, record.code_hash)
            self._reject(email, "too many attempts")

        if not code_matches(record.code_hash, code):
            attempts = self._credentials.record_failed_attempt(email, record.code_hash)
            if attempts >= self._max_attempts:
                self._credentials.delete(email, record.code_hash)
            self._reject(email, "code mismatch")

        if not self._credentials.consume(email, record.code_hash, now):
            self._reject(email, "code already consumed")

        identity, created = self._identities.get_or_create(email)
        if created:
            logger.info("Created identity %s for %s", identity.id, email)

        session = self._sessions.issue(identity)
        logger.info("Signed in user %s with a one-time code", identity.id)
        return SignIn(session=session, user=identity)

    def _reject(self, email: str, reason: str) -> NoReturn:
        logger.info("Sign-in code rejected for %s: %s", email, reason)
        raise AuthenticationFailedError()
