"""
pagination.py — Fixed-size page slicing for listing endpoints.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict

from sqlalchemy.orm import Query

from app.core.config import settings


def paginate(
    query: Query,
    page: int = 1,
    serializer: Callable[[Any], Dict[str, Any]] = None,
    per_page: int = None,
) -> Dict[str, Any]:
    """
    Return one page of `query` results as a plain dict.

    Pages are 1-based; anything below 1 is treated as the first page.
    A page past the end is returned empty, never as an error.
    """
    per_page = per_page or settings.PAGE_SIZE
    page = max(int(page or 1), 1)

    total = query.order_by(None).count()
    offset = (page - 1) * per_page

    # Past the end there is nothing to fetch; huge offsets also overflow the driver
    rows = query.offset(offset).limit(per_page).all() if offset < total else []

    return {
        "current_page": page,
        "per_page": per_page,
        "total": total,
        "last_page": max(math.ceil(total / per_page), 1),
        "data": [serializer(row) if serializer else row for row in rows],
    }
