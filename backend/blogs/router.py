# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Blog endpoints – public reads, authenticated writes.

Security invariants enforced by every mutating handler
-------------------------------------------------------
* JWT is required (via ``get_current_user``).
* The post is loaded first (404 if absent), then ``_authorize_mutation``
  checks ownership: the owning user or an admin may proceed, anyone else
  gets 403 and the row is left untouched.
* Legacy posts without an owning user can only be changed by an admin.
  An admin update claims the post for that admin.
* The ``author`` byline is display data and plays no part in the check.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import MAX_ROW_ID, get_db
from core.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from core.logger import logger
from core.pagination import MAX_LIMIT, paginate, parse_positive_int
from core.security import get_current_user
from models.blog import Blog
from models.user import User
from blogs.schemas import (
    BlogCreate,
    BlogPage,
    BlogResponse,
    BlogUpdate,
    MessageResponse,
    author_from_input,
)
from blogs.slug import slugify

router = APIRouter(prefix="/api/blogs", tags=["blogs"])

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_SLUG_TAKEN = "A blog with this title already exists"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def get_blog_or_404(blog_id: int, db: Session) -> Blog:
    blog = db.get(Blog, blog_id)
    if not blog:
        raise NotFoundError("Blog not found")
    return blog


def _authorize_mutation(blog: Blog, user: User) -> None:
    """
    Raise 403 unless *user* may change or delete *blog*.

    Owned post   → the owner or any admin.
    Owner-less   → admins only.
    """
    if user.role == "admin":
        return
    if blog.user_id is None or blog.user_id != user.id:
        raise AuthorizationError("Not authorized to modify this blog")


def _slug_for(title: str, db: Session, exclude_id: Optional[int] = None) -> str:
    """Derive the slug for *title* and make sure no other post holds it."""
    slug = slugify(title)
    if not slug:
        raise ValidationError.for_field("title", "Title must contain at least one letter or digit")
    q = db.query(Blog.id).filter(Blog.slug == slug)
    if exclude_id is not None:
        q = q.filter(Blog.id != exclude_id)
    if q.first():
        raise ConflictError(_SLUG_TAKEN)
    return slug


def _commit(db: Session) -> None:
    """Commit, turning a unique-constraint race on the slug into 400."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(_SLUG_TAKEN)


def list_page(db: Session, page: int, limit: int) -> BlogPage:
    """Newest-first page of posts.  Shared with the admin listing."""
    query = db.query(Blog).order_by(Blog.published_at.desc(), Blog.id.desc())
    blogs, total, pages = paginate(query, page, limit)
    return BlogPage(blogs=blogs, page=page, pages=pages, total=total)


# ---------------------------------------------------------------------------
# POST /api/blogs  – create a post owned by the caller
# ---------------------------------------------------------------------------


@router.post("", response_model=BlogResponse, status_code=status.HTTP_201_CREATED)
def create_blog(
    body: BlogCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Persist a new post.  The owning user is always the caller, whatever
    byline the body carries.
    """
    blog = Blog(
        title=body.title,
        slug=_slug_for(body.title, db),
        content=body.content,
        excerpt=body.excerpt,
        category=body.category,
        featured_image=body.image,
        author=author_from_input(body.author),
        read_time=body.read_time,
        user_id=current_user.id,
    )
    db.add(blog)
    _commit(db)
    db.refresh(blog)

    logger.info("blog_create blog_id=%d user_id=%d", blog.id, current_user.id)
    return blog


# ---------------------------------------------------------------------------
# GET /api/blogs  – public, paginated, newest first
# ---------------------------------------------------------------------------


@router.get("", response_model=BlogPage)
def list_blogs(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Return one page of posts.  ``page`` is 1-indexed.  Values that are not
    positive integers, or are out of range, fall back to the defaults
    (page 1, limit 10).
    """
    return list_page(
        db,
        parse_positive_int(page, DEFAULT_PAGE),
        parse_positive_int(limit, DEFAULT_LIMIT, maximum=MAX_LIMIT),
    )


# ---------------------------------------------------------------------------
# GET /api/blogs/slug/{slug}
# ---------------------------------------------------------------------------


@router.get("/slug/{slug}", response_model=BlogResponse)
def get_blog_by_slug(slug: str, db: Session = Depends(get_db)):
    blog = db.query(Blog).filter(Blog.slug == slug).first()
    if not blog:
        raise NotFoundError("Blog not found")
    return blog


# ---------------------------------------------------------------------------
# GET /api/blogs/{id}
# ---------------------------------------------------------------------------


@router.get("/{blog_id}", response_model=BlogResponse)
def get_blog(
    blog_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    return get_blog_or_404(blog_id, db)


# ---------------------------------------------------------------------------
# PUT /api/blogs/{id}  – partial update by owner or admin
# ---------------------------------------------------------------------------


@router.put("/{blog_id}", response_model=BlogResponse)
def update_blog(
    body: BlogUpdate,
    blog_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Partial update.  Only fields that are explicitly provided (non-None) are
    changed.  A new title regenerates the slug.
    """
    blog = get_blog_or_404(blog_id, db)
    _authorize_mutation(blog, current_user)

    if body.title is not None and body.title != blog.title:
        blog.slug = _slug_for(body.title, db, exclude_id=blog.id)
        blog.title = body.title
    if body.content is not None:
        blog.content = body.content
    if body.category is not None:
        blog.category = body.category
    if body.image is not None:
        blog.featured_image = body.image
    if body.excerpt is not None:
        blog.excerpt = body.excerpt
    if body.author is not None:
        # JSON columns are not mutation-tracked; assign a fresh dict.
        blog.author = author_from_input(body.author)
    if body.read_time is not None:
        blog.read_time = body.read_time

    if blog.user_id is None:
        # Legacy post: only an admin got this far, and now owns it.
        blog.user_id = current_user.id
        logger.info("blog_claim blog_id=%d admin_id=%d", blog.id, current_user.id)

    _commit(db)
    db.refresh(blog)

    logger.info("blog_update blog_id=%d user_id=%d", blog.id, current_user.id)
    return blog


# ---------------------------------------------------------------------------
# DELETE /api/blogs/{id}  – remove by owner or admin
# ---------------------------------------------------------------------------


@router.delete("/{blog_id}", response_model=MessageResponse)
def delete_blog(
    blog_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Permanently delete a post.  Ownership is verified first."""
    blog = get_blog_or_404(blog_id, db)
    _authorize_mutation(blog, current_user)

    db.delete(blog)
    db.commit()

    logger.info("blog_delete blog_id=%d user_id=%d", blog_id, current_user.id)
    return MessageResponse(msg="Blog removed")
