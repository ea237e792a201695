"""User schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

RoleName = Literal["SUPER_ADMIN", "ADMIN", "MANAGER", "TECHNICIAN", "CUSTOMER"]


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr


class UserCreate(UserBase):
    role: RoleName
    password: str = Field(..., min_length=8)


class UserRead(UserBase):
    id: str
    role: str
    is_active: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
