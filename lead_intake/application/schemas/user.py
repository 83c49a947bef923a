"""Pydantic DTOs for users and user administration."""

import re
from datetime import datetime

from pydantic import Field, StrictBool, field_validator
from pydantic_core import PydanticCustomError

from lead_intake.application.schemas.buyer import CamelModel
from lead_intake.domain.entities import UserRole

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserCreate(CamelModel):
    """Schema for registering a user. New accounts always start as plain users."""

    name: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., max_length=255)

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, value: str) -> str:
        value = value.strip().lower()
        if not _EMAIL_RE.match(value):
            raise PydanticCustomError("email_format", "Invalid email format")
        return value


class UserUpdate(CamelModel):
    """Admin-side changes to an account: all fields optional."""

    role: UserRole | None = None
    is_active: StrictBool | None = None


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserListResponse(CamelModel):
    users: list[UserResponse]
    total: int


class UserUpdateResponse(CamelModel):
    success: bool = True
    user: UserResponse


class UserDeleteResponse(CamelModel):
    success: bool = True
    deleted_user: UserResponse
    transferred_buyers: int
    message: str
