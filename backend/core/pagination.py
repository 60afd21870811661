"""Page/limit parsing and query slicing shared by the public and admin lists."""

import math
from typing import Any, List, Optional, Tuple

from sqlalchemy.orm import Query

# Keeps (page - 1) * limit inside a signed 64-bit OFFSET.
MAX_PAGE = 1_000_000
MAX_LIMIT = 100


def parse_positive_int(raw: Optional[str], default: int, maximum: int = MAX_PAGE) -> int:
    """
    Return *raw* as an int in ``1..maximum``, or *default* for anything else
    (missing, non-numeric, zero, negative, too large).  Never raises.
    """
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if 0 < value <= maximum else default


def paginate(query: Query, page: int, limit: int) -> Tuple[List[Any], int, int]:
    """
    Slice an ordered query.  Returns ``(items, total, pages)`` where
    ``pages = ceil(total / limit)``.  A page past the end yields no items.
    """
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    pages = math.ceil(total / limit)
    return items, total, pages
