# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Error taxonomy shared by every router.

Each class is an ``HTTPException`` with a fixed status code, so handlers
raise them exactly like a plain ``HTTPException`` and FastAPI turns them
into JSON responses.

    ValidationError      400  malformed / missing input, per-field list
    ConflictError        400  uniqueness violation (email, username, slug)
    AuthenticationError  401  missing / invalid token, bad credentials
    AuthorizationError   403  valid identity without role or ownership
    NotFoundError        404  id does not resolve to a record
    ServerFault          500  unexpected persistence / runtime error
"""

from typing import Dict, List, Optional

from fastapi import HTTPException, status


class AppError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Server error"

    def __init__(self, detail: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation failed"

    def __init__(self, errors: List[Dict[str, str]], detail: Optional[str] = None):
        super().__init__(detail)
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, msg: str) -> "ValidationError":
        return cls([{"field": field, "msg": msg}])


class ConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Resource already exists"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ServerFault(AppError):
    pass
