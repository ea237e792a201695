"""Aggregate application use cases."""

from .users import create_user, sign_in, sign_out

__all__ = [
    "create_user",
    "sign_in",
    "sign_out",
]
