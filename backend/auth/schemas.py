# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth endpoints."""

import re

from pydantic import BaseModel, Field, field_validator

# Same shape the signup form has always accepted.
EMAIL_RE = re.compile(r"^[\w-]+(?:\.[\w-]+)*@(?:[\w-]+\.)+[a-zA-Z]{2,7}$")

USERNAME_MIN = 3
USERNAME_MAX = 50
PASSWORD_MIN = 6


def normalize_email(value: str) -> str:
    """Trim and lowercase, then check the address shape."""
    value = value.strip().lower()
    if not EMAIL_RE.match(value):
        raise ValueError("Please include a valid email")
    return value


# -- Requests --------------------------------------------------------------


class SignupRequest(BaseModel):
    username: str = Field(min_length=USERNAME_MIN, max_length=USERNAME_MAX)
    email: str
    password: str = Field(min_length=PASSWORD_MIN)

    @field_validator("username", mode="before")
    @classmethod
    def _strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return normalize_email(v)


class SigninRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return normalize_email(v)


# -- Responses -------------------------------------------------------------


class UserPublic(BaseModel):
    id: int
    username: str
    email: str
    role: str

    model_config = {"from_attributes": True}


class AuthResponse(UserPublic):
    token: str
