"""Endpoints for authentication and session activity."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from servicedesk.application.use_cases.users import SignInStatus, sign_in, sign_out
from servicedesk.domain.entities import User
from servicedesk.infrastructure.database import get_db
from servicedesk.infrastructure.security import create_access_token
from servicedesk.interfaces.api.dependencies import get_current_active_user
from servicedesk.interfaces.api.schemas import Token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and return a bearer JWT."""

    result = sign_in(db, form_data.username, form_data.password)

    if result.status is SignInStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if result.status is SignInStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
            headers={"WWW-Authenticate": "Bearer"},
        )

    viewer = result.viewer
    access_token = create_access_token(data={"sub": viewer.id, "role": viewer.role})
    return {"access_token": access_token, "token_type": "bearer", "role": viewer.role}


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    sign_out(db, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
