"""Django ORM models (persistence layer) for sign-in codes."""

from django.db import models


class OneTimeCode(models.Model):
    """At most one live code per email; a new request overwrites the row."""

    email = models.EmailField(primary_key=True)
    code_hash = models.CharField(max_length=64)
    expires_at = models.DateTimeField()
    attempts = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.email} (expires {self.expires_at:%Y-%m-%d %H:%M})"
