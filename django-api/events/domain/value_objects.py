"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Self
from uuid import UUID


class EventStatus(str, Enum):
    """Lifecycle of an event. DRAFT -> PUBLISHED is the only transition."""

    DRAFT = "draft"
    PUBLISHED = "published"


class CreatorRole(str, Enum):
    ARTIST = "artist"
    PLANNER = "planner"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentPurpose(str, Enum):
    """What a checkout session pays for. PROMO never publishes the event."""

    PUBLISH = "publish"
    PROMO = "promo"


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price in minor units (cents) of a lowercase ISO currency."""

    amount_minor: int
    currency: str

    def __post_init__(self) -> None:
        if self.amount_minor < 0:
            raise ValueError("Money amount cannot be negative")
        if len(self.currency) != 3:
            raise ValueError("Currency must be a three-letter code")

    @property
    def amount(self) -> Decimal:
        return (Decimal(self.amount_minor) / 100).quantize(Decimal("0.01"))

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency.upper()}"
