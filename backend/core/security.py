# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Central security module.  Password hashing, token handling and the auth
guards live here.  No other module should touch raw crypto directly.

Responsibilities
----------------
1. Password hashing / verification          (passlib pbkdf2_sha256)
2. JWT creation / decoding                  (PyJWT / HS256)
3. FastAPI dependency guards                (get_current_user, require_admin)
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt as _jwt        # PyJWT
from passlib.hash import pbkdf2_sha256 as _pbkdf2  # pure Python, no binary deps
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from core.config import settings
from core.errors import AuthenticationError, AuthorizationError
from database import get_db

# ---------------------------------------------------------------------------
# 1.  pbkdf2_sha256 – password hashing
# ---------------------------------------------------------------------------
# passlib embeds the salt and the round count in the hash string, so a single
# column is enough and old hashes keep verifying after the rounds change.
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """
    Hash a plaintext password with PBKDF2-SHA256.

    Returns the full passlib hash string, e.g. ``"$pbkdf2-sha256$600000$..."``.
    """
    return _pbkdf2.using(rounds=settings.password_hash_rounds).hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of a plaintext password against a hash
    produced by :func:`hash_password`.  Anything that is not a pbkdf2_sha256
    hash (e.g. a legacy plain-text value) never verifies.
    """
    if not stored_hash or not _pbkdf2.identify(stored_hash):
        return False
    return _pbkdf2.verify(plain, stored_hash)


# ---------------------------------------------------------------------------
# 2.  JWT – access tokens
# ---------------------------------------------------------------------------


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a JWT with HS256.

    *data* should contain at minimum: sub (user id as string), id, role.
    An ``exp`` claim is added automatically.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode["exp"] = expire
    return _jwt.encode(to_encode, settings.secret_key, algorithm="HS256")


def token_for_user(user) -> str:
    """Issue an access token carrying the identity of *user*."""
    return create_access_token(
        {"sub": str(user.id), "id": user.id, "role": user.role, "username": user.username}
    )


def decode_access_token(token: str) -> dict:
    """
    Decode and verify a JWT.  Fails closed: any failure (expired, bad
    signature, malformed, no ``id`` claim) raises AuthenticationError.
    """
    try:
        payload = _jwt.decode(token, settings.secret_key, algorithms=["HS256"])
    except _jwt.InvalidTokenError:
        raise AuthenticationError("Invalid or expired token")
    if not isinstance(payload.get("id"), int):
        raise AuthenticationError("Invalid or expired token")
    return payload


# ---------------------------------------------------------------------------
# 3.  FastAPI dependency guards
# ---------------------------------------------------------------------------

# The tokenUrl here is only used by the auto-generated OpenAPI docs.
# auto_error is off so a missing header goes through our own 401.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/signin", auto_error=False)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db=Depends(get_db),
):
    """
    Dependency: decode the JWT and load the User row.  Returns the User ORM
    instance, whose ``id`` and ``role`` are the request identity.

    Raises 401 if the token is missing or invalid, or the user is gone.
    """
    if not token:
        raise AuthenticationError("Not authorized, no token")

    payload = decode_access_token(token)

    # Lazy import to avoid circular dependency at module load time
    from models.user import User  # noqa: E402

    user = db.get(User, payload["id"])
    if not user:
        raise AuthenticationError("User not found")
    return user


def require_admin(current_user=Depends(get_current_user)):
    """
    Dependency: wraps :func:`get_current_user` and additionally asserts
    ``role == 'admin'``.  Raises 403 otherwise.
    """
    if current_user.role != "admin":
        raise AuthorizationError("Admin access required")
    return current_user
