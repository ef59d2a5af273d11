"""Outbound delivery of sign-in codes."""

import logging
import smtplib
from abc import ABC, abstractmethod

from django.core.mail import send_mail

from accounts.domain.errors import DeliveryFailedError

logger = logging.getLogger(__name__)

SUBJECT = "Your BeatBookingsLive verification code"


class OtpNotifier(ABC):
    @abstractmethod
    def send_code(self, email: str, code: str, ttl_minutes: int) -> None:
        """Deliver a plaintext code to its owner.

        Raises:
            DeliveryFailedError: If the message could not be handed off.
        """
        ...


class DjangoMailNotifier(OtpNotifier):
    """Sends the code through Django's configured email backend."""

    def __init__(self, from_email: str | None = None) -> None:
        self._from_email = from_email

    def send_code(self, email: str, code: str, ttl_minutes: int) -> None:
        text = f"Your verification code is: {code}\n\nThis code expires in {ttl_minutes} minutes."
        html = (
            "<p>Your verification code is:</p>"
            f'<h1 style="letter-spacing:3px">{code}</h1>'
            f"<p>This code expires in {ttl_minutes} minutes.</p>"
        )
        try:
            send_mail(
                SUBJECT,
                text,
                self._from_email,
                [email],
                html_message=html,
                fail_silently=False,
            )
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send verification email to %s: %s", email, e)
            raise DeliveryFailedError() from e
