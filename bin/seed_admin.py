# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Bootstrap script – creates the first admin user.

Run once after the initial migration:
    python bin/seed_admin.py

The script reads FIRST_ADMIN_USERNAME, FIRST_ADMIN_EMAIL and
FIRST_ADMIN_PASSWORD from etc/app.conf.  After the row is inserted those
values are no longer used by the application.  Further admins are created
through POST /api/admin/users.
"""

import sys
import os

# ---------------------------------------------------------------------------
# Path setup so backend modules are importable
# ---------------------------------------------------------------------------
# bin/seed_admin.py  →  ../  →  project root
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_BACKEND_DIR  = os.path.join(_PROJECT_ROOT, "backend")
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from sqlalchemy import or_                # noqa: E402

from core.config import settings          # noqa: E402
from core.logger import logger            # noqa: E402
from core.security import hash_password   # noqa: E402
from database import SessionLocal         # noqa: E402
from models.user import User              # noqa: E402


def seed(session_factory=SessionLocal) -> bool:
    """Insert the admin row.  Returns True if a row was created."""
    if not settings.first_admin_email or not settings.first_admin_password:
        logger.warning("seed_admin: FIRST_ADMIN_EMAIL or FIRST_ADMIN_PASSWORD not set in etc/app.conf – nothing to do")
        return False

    email = settings.first_admin_email.strip().lower()
    db = session_factory()
    try:
        existing = (
            db.query(User)
            .filter(or_(User.email == email, User.username == settings.first_admin_username))
            .first()
        )
        if existing:
            logger.info("seed_admin: user '%s' already exists – skipping", existing.username)
            return False

        admin = User(
            username=settings.first_admin_username,
            email=email,
            password_hash=hash_password(settings.first_admin_password),
            role="admin",
        )
        db.add(admin)
        db.commit()
        logger.info("seed_admin: admin '%s' created", admin.username)
        return True
    finally:
        db.close()


if __name__ == "__main__":
    seed()
