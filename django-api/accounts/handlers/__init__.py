from accounts.handlers.views import OtpRequestView, OtpVerifyView

__all__ = ["OtpRequestView", "OtpVerifyView"]
