"""Payment processor interfaces.

Services talk to the processor only through these, so tests can swap in
stubs without touching process-wide configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from events.domain import CheckoutSession, Money


@dataclass(frozen=True)
class CheckoutRequest:
    """Everything the processor needs to open a one-off payment session."""

    product_name: str
    description: str
    price: Money
    success_url: str
    cancel_url: str
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class WebhookNotification:
    """An authenticated processor notification."""

    id: str
    type: str
    data: dict[str, Any]

    @property
    def metadata(self) -> dict[str, Any]:
        return self.data.get("metadata") or {}


class PaymentGateway(ABC):
    """Opens hosted checkout sessions with the payment processor."""

    @abstractmethod
    def open_checkout(self, request: CheckoutRequest) -> CheckoutSession:
        """Create a checkout session.

        Raises:
            UpstreamFailureError: If the processor rejects or fails the request.
        """
        ...


class WebhookVerifier(ABC):
    """Authenticates raw webhook deliveries."""

    @abstractmethod
    def verify(self, payload: bytes, signature: str | None) -> WebhookNotification:
        """Return the parsed notification if the signature is valid.

        Raises:
            SignatureInvalidError: If the signature is missing or wrong.
            InvalidPayloadError: If the body is not a notification envelope.
        """
        ...
