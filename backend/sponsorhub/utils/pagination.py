"""
Pagination Utility Module

Standardized page/limit pagination for list endpoints.
"""
from typing import Any, List, Optional, Tuple
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

MAX_PAGE_SIZE = 100


def build_pagination(total: int, page: int, limit: int) -> dict:
    """Pagination block returned alongside list data"""
    pages = (total + limit - 1) // limit if total > 0 else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": pages,
    }


async def paginate(
    db: AsyncSession,
    query: Select,
    page: int = 1,
    limit: int = 20,
    count_query: Optional[Select] = None
) -> Tuple[List[Any], dict]:
    """
    Apply pagination to a SQLAlchemy query.

    Args:
        db: Database session
        query: Base SQLAlchemy query (ordering already applied)
        page: Page number (1-indexed)
        limit: Items per page, capped at MAX_PAGE_SIZE
        count_query: Optional custom count query

    Returns:
        (items, pagination) where pagination is {page, limit, total, pages}
    """
    page = max(1, page)
    limit = max(1, min(MAX_PAGE_SIZE, limit))
    offset = (page - 1) * limit

    if count_query is None:
        count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await db.execute(count_query)).scalar() or 0

    result = await db.execute(query.offset(offset).limit(limit))
    items = list(result.scalars().all())

    return items, build_pagination(total, page, limit)
