"""Django ORM implementations of the credential and identity stores."""

from datetime import datetime

from django.contrib.auth import get_user_model
from django.db.models import F

from accounts import models as orm
from accounts.domain import OneTimeCode, UserIdentity
from accounts.stores.interfaces import CredentialStore, IdentityStore


def _to_code(row: orm.OneTimeCode) -> OneTimeCode:
    return OneTimeCode(
        email=row.email,
        code_hash=row.code_hash,
        expires_at=row.expires_at,
        attempts=row.attempts,
    )


class DjangoCredentialStore(CredentialStore):
    """Relational one-time code store using Django ORM."""

    def put(self, code: OneTimeCode) -> None:
        orm.OneTimeCode.objects.update_or_create(
            email=code.email,
            defaults={
                "code_hash": code.code_hash,
                "expires_at": code.expires_at,
                "attempts": code.attempts,
            },
        )

    def get(self, email: str) -> OneTimeCode | None:
        row = orm.OneTimeCode.objects.filter(pk=email).first()
        return _to_code(row) if row is not None else None

    def delete(self, email: str, code_hash: str | None = None) -> None:
        rows = orm.OneTimeCode.objects.filter(pk=email)
        if code_hash is not None:
            rows = rows.filter(code_hash=code_hash)
        rows.delete()

    def record_failed_attempt(self, email: str, code_hash: str) -> int:
        rows = orm.OneTimeCode.objects.filter(pk=email, code_hash=code_hash)
        rows.update(attempts=F("attempts") + 1)
        attempts = rows.values_list("attempts", flat=True).first()
        return attempts or 0

    def consume(self, email: str, code_hash: str, now: datetime) -> bool:
        deleted, _ = orm.OneTimeCode.objects.filter(
            pk=email, code_hash=code_hash, expires_at__gt=now
        ).delete()
        return deleted == 1


class DjangoIdentityStore(IdentityStore):
    """Identities are Django users matched on email.

    Users created here get the email as their username; users created
    elsewhere (admin, createsuperuser) are found by their email field.
    """

    def get_or_create(self, email: str) -> tuple[UserIdentity, bool]:
        users = get_user_model().objects
        user = users.filter(email__iexact=email).order_by("pk").first()
        if user is not None:
            return UserIdentity(id=user.pk, email=email), False

        user, created = users.get_or_create(
            username=email,
            defaults={"email": email},
        )
        if created:
            user.set_unusable_password()
            user.save(update_fields=["password"])
        return UserIdentity(id=user.pk, email=user.email), created
