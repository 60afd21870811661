# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – signup, signin, current-user info.

Security notes
--------------
* Signin returns the *same* error message whether the email doesn't exist or
  the password is wrong.  This prevents user-enumeration attacks.
* Passwords are only ever stored as pbkdf2_sha256 hashes and never echoed
  back in a response.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from core.errors import AuthenticationError, ConflictError
from core.logger import logger
from core.security import (
    get_current_user,
    hash_password,
    token_for_user,
    verify_password,
)
from models.user import User
from auth.schemas import AuthResponse, SigninRequest, SignupRequest, UserPublic

router = APIRouter(prefix="/api/auth", tags=["auth"])

# Generic message used for both "no such email" and "wrong password"
_LOGIN_FAIL = "Invalid email or password"


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        token=token_for_user(user),
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
    )


# ---------------------------------------------------------------------------
# POST /api/auth/signup
# ---------------------------------------------------------------------------


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    """Register a ``user``-role account and return a signed token."""
    existing = (
        db.query(User)
        .filter(or_(User.email == body.email, User.username == body.username))
        .first()
    )
    if existing:
        raise ConflictError("User already exists")

    user = User(
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password),
        role="user",
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User already exists")
    db.refresh(user)

    logger.info("signup user_id=%d", user.id)
    return _auth_response(user)


# ---------------------------------------------------------------------------
# POST /api/auth/signin
# ---------------------------------------------------------------------------


@router.post("/signin", response_model=AuthResponse)
def signin(body: SigninRequest, db: Session = Depends(get_db)):
    """Authenticate and return a signed JWT."""
    user = db.query(User).filter(User.email == body.email).first()

    # Unified failure path – no information leaks about whether the email exists
    if not user or not verify_password(body.password, user.password_hash):
        logger.info("signin failed")
        raise AuthenticationError(_LOGIN_FAIL)

    logger.info("signin user_id=%d", user.id)
    return _auth_response(user)


# ---------------------------------------------------------------------------
# GET /api/auth/me
# ---------------------------------------------------------------------------


@router.get("/me", response_model=UserPublic)
def me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user's public profile (no secrets)."""
    return current_user
