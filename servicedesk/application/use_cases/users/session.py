"""Use cases opening and closing a service desk session."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto

from sqlalchemy.orm import Session

from servicedesk.application.use_cases.notifications.events import (
    notify_user_logged_in,
    notify_user_logged_out,
)
from servicedesk.domain.entities import User, Viewer
from servicedesk.infrastructure.repositories import UserRepository
from servicedesk.infrastructure.security import verify_password

logger = logging.getLogger(__name__)


class SignInStatus(Enum):
    SIGNED_IN = auto()
    INVALID_CREDENTIALS = auto()
    INACTIVE = auto()


@dataclass(frozen=True)
class SignInResult:
    """Outcome of a sign-in attempt.

    ``user`` is only set once the password matched, so an inactive account is
    reported without leaking whether an email is registered.
    """

    status: SignInStatus
    user: User | None = None

    @property
    def viewer(self) -> Viewer | None:
        if self.status is not SignInStatus.SIGNED_IN or self.user is None:
            return None
        return self.user.as_viewer()


def sign_in(session: Session, email: str, password: str) -> SignInResult:
    """Check the credentials and announce the new session to the feed.

    A successful sign-in records a "System Access" notification stamped with
    the account, which every viewer allowed to see that account's activity
    receives.
    """

    user = UserRepository(session).get_by_email(email)
    if user is None or not verify_password(password, user.password):
        logger.info("Rejected sign-in for %s", email.strip().lower())
        return SignInResult(SignInStatus.INVALID_CREDENTIALS)

    if not user.is_active:
        return SignInResult(SignInStatus.INACTIVE, user)

    notify_user_logged_in(session, user=user)
    return SignInResult(SignInStatus.SIGNED_IN, user)


def sign_out(session: Session, user: User) -> None:
    """Announce the end of ``user``'s session; tokens expire on their own."""

    notify_user_logged_out(session, user=user)


__all__ = ["SignInResult", "SignInStatus", "sign_in", "sign_out"]
