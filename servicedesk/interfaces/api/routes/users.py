"""Routes to manage service desk accounts."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from servicedesk.application.use_cases.users import create_user as create_user_uc
from servicedesk.domain.entities import User
from servicedesk.infrastructure.database import get_db
from servicedesk.interfaces.api.dependencies import get_current_active_user, require_admin
from servicedesk.interfaces.api.schemas import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Create a new account able to sign in."""

    try:
        user = create_user_uc(
            db,
            name=user_in.name,
            email=user_in.email,
            role=user_in.role,
            password=user_in.password,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    """Return the authenticated account."""

    return _to_read_model(current_user)
