from accounts.domain.models import IssuedSession, OneTimeCode, SignIn, UserIdentity

__all__ = [
    "OneTimeCode",
    "UserIdentity",
    "IssuedSession",
    "SignIn",
]
