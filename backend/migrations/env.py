# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Alembic environment for the blog schema.

Online runs reuse ``database.engine``, so migrations see the same URL and
connection hooks as the application.  On SQLite, operations are rendered in
batch mode: SQLite cannot ALTER most column properties in place, and batch
mode rebuilds the table instead.

    alembic upgrade head
    alembic revision --autogenerate -m "add blog tags"
"""

import os
import sys

# alembic.ini already prepends backend/; this covers running env.py from
# elsewhere (e.g. an IDE).
_BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from alembic import context  # noqa: E402

from core.config import settings  # noqa: E402
from database import Base, engine  # noqa: E402

# Models register their tables on Base.metadata when imported.
import models.user  # noqa: F401, E402
import models.blog  # noqa: F401, E402

_BATCH = settings.database_url.startswith("sqlite")


def run_migrations_online():
    with engine.connect() as conn:
        context.configure(
            connection=conn,
            target_metadata=Base.metadata,
            render_as_batch=_BATCH,
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()


def run_migrations_offline():
    """Emit SQL to stdout instead of touching a database (``--sql``)."""
    context.configure(
        url=settings.database_url,
        target_metadata=Base.metadata,
        literal_binds=True,
        render_as_batch=_BATCH,
    )
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
