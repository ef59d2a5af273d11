"""Mapping of domain errors to HTTP responses."""

from rest_framework import status
from rest_framework.response import Response

from events.domain.errors import DomainError, ErrorCode, QuotaExceededError

STATUS_BY_CODE = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.QUOTA_EXCEEDED: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCode.UPSTREAM_FAILURE: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.SIGNATURE_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PAYLOAD: status.HTTP_400_BAD_REQUEST,
}


def error_response(error: DomainError) -> Response:
    body: dict = {"error": {"code": error.code.value, "message": error.message}}
    if isinstance(error, QuotaExceededError):
        body["requires_payment"] = True
        body["published_count"] = error.published_count
    return Response(body, status=STATUS_BY_CODE[error.code])
