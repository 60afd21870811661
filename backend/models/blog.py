# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Blog ORM model."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from database import Base

CATEGORIES = (
    "Development",
    "Design",
    "Technology",
    "Artificial Intelligence",
    "Web Development",
    "Machine Learning",
    "Uncategorized",
)

SOCIAL_PLATFORMS = ("twitter", "github", "linkedin")

DEFAULT_AUTHOR = {
    "name": "Anonymous",
    "avatar": "/src/assets/images/daxmore.jpg",
    "bio": "Information about this author is not available.",
    "social_links": [],
}

DEFAULT_READ_TIME = "5 min read"


def _utcnow() -> datetime:
    # Python-side so rows created within the same second still sort.
    return datetime.now(timezone.utc)


class Blog(Base):
    __tablename__ = "blogs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(150), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    # HTML produced by the rich-text editor, stored as-is.
    content = Column(Text, nullable=False)
    excerpt = Column(String(300), nullable=False, default="")
    category = Column(String(32), nullable=False, default="Uncategorized", index=True)
    # URL or data: URI
    featured_image = Column(Text, nullable=True)
    # Display byline only.  Access control goes through user_id.
    author = Column(JSON, nullable=False, default=lambda: dict(DEFAULT_AUTHOR))
    # Owning user.  NULL for legacy rows and for rows whose owner was deleted;
    # only an admin may mutate those.
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    read_time = Column(String(32), nullable=False, default=DEFAULT_READ_TIME)
    published_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
