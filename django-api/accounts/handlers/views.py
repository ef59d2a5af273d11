"""HTTP handlers (views) for passwordless sign-in.

Verification failures all map to the same 401 body so a caller cannot tell
a wrong code from an expired or missing one.
"""

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from accounts.domain.errors import DomainError, ErrorCode
from accounts.handlers import dependencies
from accounts.handlers.serializers import (
    OtpRequestSerializer,
    OtpVerifySerializer,
    SignInSerializer,
)

STATUS_BY_CODE = {
    ErrorCode.AUTHENTICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.DELIVERY_FAILED: status.HTTP_502_BAD_GATEWAY,
}

NO_STORE = {"Cache-Control": "no-store"}


def error_response(error: DomainError) -> Response:
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=STATUS_BY_CODE[error.code],
        headers=NO_STORE,
    )


class OtpRequestView(APIView):
    """Handler for POST /api/auth/otp/request"""

    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "otp"

    def post(self, request: Request) -> Response:
        serializer = OtpRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            dependencies.get_otp_issuer().issue(serializer.validated_data["email"])
        except DomainError as e:
            return error_response(e)
        return Response({"ok": True}, headers=NO_STORE)


class OtpVerifyView(APIView):
    """Handler for POST /api/auth/otp/verify"""

    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "otp"

    def post(self, request: Request) -> Response:
        serializer = OtpVerifySerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            sign_in = dependencies.get_otp_verifier().verify(
                serializer.validated_data["email"], serializer.validated_data["otp"]
            )
        except DomainError as e:
            return error_response(e)
        return Response(SignInSerializer(sign_in).data, headers=NO_STORE)
