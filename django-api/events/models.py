"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.conf import settings
from django.db import models


class Event(models.Model):
    """Persistence model for events."""

    class Role(models.TextChoices):
        ARTIST = "artist", "Artist"
        PLANNER = "planner", "Planner"

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PUBLISHED = "published", "Published"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="events"
    )
    creator_role = models.CharField(max_length=16, choices=Role.choices)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.DRAFT)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    location = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="events_status_idx"),
            models.Index(fields=["creator", "status"], name="events_creator_status_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class PendingPayment(models.Model):
    """Persistence model for checkout sessions opened against an event."""

    class Purpose(models.TextChoices):
        PUBLISH = "publish", "Publish"
        PROMO = "promo", "Promo"

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"
        FAILED = "failed", "Failed"

    checkout_session_id = models.CharField(primary_key=True, max_length=255)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="payments")
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="event_payments"
    )
    purpose = models.CharField(max_length=16, choices=Purpose.choices, default=Purpose.PUBLISH)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    currency = models.CharField(max_length=3)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.checkout_session_id} ({self.status})"
