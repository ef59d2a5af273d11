"""Domain error codes for the accounts module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    DELIVERY_FAILED = "DELIVERY_FAILED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class AuthenticationFailedError(DomainError):
    """Raised for any failed code verification.

    The message is identical whether the code was missing, wrong or expired.
    """

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.AUTHENTICATION_FAILED,
            message="Invalid or expired code",
        )


class DeliveryFailedError(DomainError):
    """Raised when the sign-in email could not be handed to the mail service."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DELIVERY_FAILED,
            message="Failed to send verification email",
        )
