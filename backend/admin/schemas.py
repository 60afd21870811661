# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the admin endpoints."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from auth.schemas import PASSWORD_MIN, USERNAME_MAX, USERNAME_MIN, normalize_email

Role = Literal["user", "admin"]


# -- Requests --------------------------------------------------------------


class CreateUserRequest(BaseModel):
    username: str = Field(min_length=USERNAME_MIN, max_length=USERNAME_MAX)
    email: str
    password: str = Field(min_length=PASSWORD_MIN)
    role: Role = "user"

    @field_validator("username", mode="before")
    @classmethod
    def _strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return normalize_email(v)


class UpdateUserRequest(BaseModel):
    # Omitted or empty fields keep their stored value.
    username: Optional[str] = Field(None, max_length=USERNAME_MAX)
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Role] = None

    @field_validator("username")
    @classmethod
    def _check_username(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v.strip()) < USERNAME_MIN:
            raise ValueError(f"Username must be at least {USERNAME_MIN} characters long")
        return v.strip() if v else None

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: Optional[str]) -> Optional[str]:
        return normalize_email(v) if v else None

    @field_validator("password")
    @classmethod
    def _check_password(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < PASSWORD_MIN:
            raise ValueError(f"Password must be at least {PASSWORD_MIN} characters")
        return v or None


# -- Responses -------------------------------------------------------------


class UserRow(BaseModel):
    id: int
    username: str
    email: str
    role: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserPage(BaseModel):
    users: List[UserRow]
    page: int
    pages: int
    total: int


class CategoryCount(BaseModel):
    name: str
    count: int


class DashboardStats(BaseModel):
    total_posts: int
    total_users: int
    categories: List[CategoryCount]
