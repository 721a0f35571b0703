"""
Pagination Utility Module

Offset pagination for management listings (SQLAlchemy queries) and for
in-memory lists such as generated mock collections.
"""
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select


MAX_PAGE_SIZE = 100


async def paginate(
    db: AsyncSession,
    query: Select,
    page: int = 1,
    page_size: int = 10,
    count_query: Optional[Select] = None
) -> dict:
    """
    Apply pagination to a SQLAlchemy query.

    Args:
        db: Database session
        query: Base SQLAlchemy query
        page: Page number (1-indexed)
        page_size: Items per page
        count_query: Optional custom count query

    Returns:
        Dictionary with items, total, page, page_size, total_pages, has_next, has_previous
    """
    page = max(1, page)
    page_size = max(1, min(MAX_PAGE_SIZE, page_size))

    offset = (page - 1) * page_size

    if count_query is None:
        count_query = select(func.count()).select_from(query.subquery())
    count_result = await db.execute(count_query)
    total = count_result.scalar() or 0

    result = await db.execute(query.offset(offset).limit(page_size))
    items = result.scalars().all()

    return create_paginated_response(list(items), total, page, page_size)


def create_paginated_response(
    items: List[Any],
    total: int,
    page: int,
    page_size: int
) -> dict:
    """
    Create a paginated response dictionary.

    Args:
        items: List of items for current page
        total: Total count of all items
        page: Current page number
        page_size: Items per page
    """
    total_pages = (total + page_size - 1) // page_size if total > 0 else 1

    return {
        "items": items,
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_previous": page > 1
    }


def paginate_items(items: Sequence[Any], page: int, limit: int) -> Tuple[List[Any], Dict[str, int]]:
    """
    Slice an in-memory list. Pages past the end yield an empty slice.

    Returns the page slice and ``{page, limit, total, totalPages}``.
    """
    page = max(1, page)
    limit = max(1, limit)
    start = (page - 1) * limit
    total = len(items)

    return list(items[start:start + limit]), {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": math.ceil(total / limit),
    }
