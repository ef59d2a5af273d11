"""Domain error codes for the events module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"
    SIGNATURE_INVALID = "SIGNATURE_INVALID"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class ForbiddenError(DomainError):
    """Raised when the caller does not own the event."""

    def __init__(self, message: str = "Not authorized to publish this event") -> None:
        super().__init__(code=ErrorCode.FORBIDDEN, message=message)


class ConflictError(DomainError):
    """Raised when the event is not in the state the operation requires."""

    def __init__(self, message: str = "Event is already published") -> None:
        super().__init__(code=ErrorCode.CONFLICT, message=message)


class QuotaExceededError(DomainError):
    """Raised when the free publish allotment is used up."""

    def __init__(self, published_count: int) -> None:
        super().__init__(
            code=ErrorCode.QUOTA_EXCEEDED,
            message="Free publish limit reached",
        )
        self.published_count = published_count


class UpstreamFailureError(DomainError):
    """Raised when the payment processor rejects or fails a request."""

    def __init__(self, message: str = "Payment provider unavailable") -> None:
        super().__init__(code=ErrorCode.UPSTREAM_FAILURE, message=message)


class SignatureInvalidError(DomainError):
    """Raised when a webhook fails its authenticity check."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SIGNATURE_INVALID,
            message="Invalid signature",
        )


class InvalidPayloadError(DomainError):
    """Raised when an authenticated webhook body cannot be interpreted."""

    def __init__(self, message: str = "Malformed webhook payload") -> None:
        super().__init__(code=ErrorCode.INVALID_PAYLOAD, message=message)
