"""Use cases for managing accounts and their sessions."""

from .create_user import create_user
from .session import SignInResult, SignInStatus, sign_in, sign_out

__all__ = [
    "SignInResult",
    "SignInStatus",
    "create_user",
    "sign_in",
    "sign_out",
]
