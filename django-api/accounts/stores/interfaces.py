"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from accounts.domain import OneTimeCode, UserIdentity


class CredentialStore(ABC):
    """Interface for one-time code persistence, keyed by email."""

    @abstractmethod
    def put(self, code: OneTimeCode) -> None:
        """Insert or replace the code for `code.email`."""
        ...

    @abstractmethod
    def get(self, email: str) -> OneTimeCode | None:
        """Return the live code row for an email, or None."""
        ...

    @abstractmethod
    def delete(self, email: str, code_hash: str | None = None) -> None:
        """Remove the code for an email; only if it still holds `code_hash` when given."""
        ...

    @abstractmethod
    def record_failed_attempt(self, email: str, code_hash: str) -> int:
        """Increment the counter of the code holding `code_hash`; 0 if it was replaced."""
        ...

    @abstractmethod
    def consume(self, email: str, code_hash: str, now: datetime) -> bool:
        """Delete the row only if it still holds `code_hash` and is unexpired.

        Returns True for exactly one caller per stored code.
        """
        ...


class IdentityStore(ABC):
    """Interface to the identity provider's user records."""

    @abstractmethod
    def get_or_create(self, email: str) -> tuple[UserIdentity, bool]:
        """Return the identity for an email, creating it if absent."""
        ...
