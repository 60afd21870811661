# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Admin endpoints – user lifecycle and blog moderation.

Every endpoint in this router is guarded by ``require_admin``.  A request
that carries a valid JWT but belongs to a ``user`` role will receive 403
before any business logic runs.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import MAX_ROW_ID, get_db
from core.errors import ConflictError, NotFoundError
from core.logger import logger
from core.pagination import paginate, parse_positive_int
from core.security import hash_password, require_admin
from models.blog import CATEGORIES, Blog
from models.user import User
from admin.schemas import (
    CategoryCount,
    CreateUserRequest,
    DashboardStats,
    UpdateUserRequest,
    UserPage,
    UserRow,
)
from blogs.router import get_blog_or_404, list_page
from blogs.schemas import BlogPage, MessageResponse

router = APIRouter(prefix="/api/admin", tags=["admin"])

ADMIN_PAGE_SIZE = 5


def _page_param(
    page: Optional[str] = Query(None),
    pageNumber: Optional[str] = Query(None),  # noqa: N803 – legacy client param
) -> int:
    """``page`` wins; the older ``pageNumber`` is still honoured."""
    return parse_positive_int(page if page is not None else pageNumber, 1)


def _get_user_or_404(user_id: int, db: Session) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def _ensure_unique(db: Session, username: Optional[str], email: Optional[str], exclude_id: Optional[int] = None):
    """Raise 400 if another account already uses *username* or *email*."""
    clauses = []
    if username:
        clauses.append(User.username == username)
    if email:
        clauses.append(User.email == email)
    if not clauses:
        return
    q = db.query(User).filter(or_(*clauses))
    if exclude_id is not None:
        q = q.filter(User.id != exclude_id)
    if q.first():
        raise ConflictError("User already exists")


def _commit_user(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User already exists")


# ---------------------------------------------------------------------------
# GET /api/admin/users  – paginated user list
# ---------------------------------------------------------------------------


@router.get("/users", response_model=UserPage)
def list_users(
    page: int = Depends(_page_param),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Return one page of users (no password data – handled by the schema)."""
    users, total, pages = paginate(db.query(User).order_by(User.id), page, ADMIN_PAGE_SIZE)
    return UserPage(users=users, page=page, pages=pages, total=total)


# ---------------------------------------------------------------------------
# POST /api/admin/users  – create a user with any role
# ---------------------------------------------------------------------------


@router.post("/users", response_model=UserRow, status_code=status.HTTP_201_CREATED)
def create_user(
    body: CreateUserRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create an account.  Unlike self-signup the caller picks the role."""
    _ensure_unique(db, body.username, body.email)

    user = User(
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password),
        role=body.role,
    )
    db.add(user)
    _commit_user(db)
    db.refresh(user)

    logger.info("admin_create_user admin_id=%d user_id=%d role=%s", admin.id, user.id, user.role)
    return user


# ---------------------------------------------------------------------------
# PUT /api/admin/users/{id}  – partial update
# ---------------------------------------------------------------------------


@router.put("/users/{user_id}", response_model=UserRow)
def update_user(
    body: UpdateUserRequest,
    user_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Overwrite the provided fields.  A non-empty ``password`` replaces the
    stored hash; an empty one leaves it alone.
    """
    target = _get_user_or_404(user_id, db)
    _ensure_unique(db, body.username, body.email, exclude_id=target.id)

    if body.username:
        target.username = body.username
    if body.email:
        target.email = body.email
    if body.role:
        target.role = body.role
    if body.password:
        target.password_hash = hash_password(body.password)

    _commit_user(db)
    db.refresh(target)

    logger.info("admin_update_user admin_id=%d user_id=%d", admin.id, target.id)
    return target


# ---------------------------------------------------------------------------
# DELETE /api/admin/users/{id}
# ---------------------------------------------------------------------------


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Remove the account.  Its posts stay published but lose their owner, so
    from then on only an admin can change them.
    """
    target = _get_user_or_404(user_id, db)

    db.query(Blog).filter(Blog.user_id == target.id).update(
        {Blog.user_id: None}, synchronize_session=False
    )
    db.delete(target)
    db.commit()

    logger.info("admin_delete_user admin_id=%d user_id=%d", admin.id, user_id)
    return MessageResponse(msg="User removed")


# ---------------------------------------------------------------------------
# GET /api/admin/blogs  – paginated blog list
# ---------------------------------------------------------------------------


@router.get("/blogs", response_model=BlogPage)
def list_blogs(
    page: int = Depends(_page_param),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return list_page(db, page, ADMIN_PAGE_SIZE)


# ---------------------------------------------------------------------------
# DELETE /api/admin/blogs/{id}  – moderation delete, no ownership check
# ---------------------------------------------------------------------------


@router.delete("/blogs/{blog_id}", response_model=MessageResponse)
def delete_blog(
    blog_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    blog = get_blog_or_404(blog_id, db)
    db.delete(blog)
    db.commit()

    logger.info("admin_delete_blog admin_id=%d blog_id=%d", admin.id, blog_id)
    return MessageResponse(msg="Blog removed")


# ---------------------------------------------------------------------------
# GET /api/admin/dashboard-stats
# ---------------------------------------------------------------------------


@router.get("/dashboard-stats", response_model=DashboardStats)
def dashboard_stats(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Totals for the dashboard cards plus a per-category post count.  Every
    category is listed, busiest first, ties broken by name.
    """
    counts = dict(
        db.query(Blog.category, func.count(Blog.id)).group_by(Blog.category).all()
    )
    categories = sorted(
        (CategoryCount(name=name, count=counts.get(name, 0)) for name in CATEGORIES),
        key=lambda c: (-c.count, c.name),
    )
    return DashboardStats(
        total_posts=db.query(Blog).count(),
        total_users=db.query(User).count(),
        categories=categories,
    )
