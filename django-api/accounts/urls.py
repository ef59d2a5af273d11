from django.urls import path

from accounts.handlers import OtpRequestView, OtpVerifyView

urlpatterns = [
    path("auth/otp/request", OtpRequestView.as_view(), name="otp-request"),
    path("auth/otp/verify", OtpVerifyView.as_view(), name="otp-verify"),
]
