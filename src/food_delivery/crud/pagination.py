from typing import Any, List, Tuple

from sqlalchemy import Select, select, func
from sqlalchemy.ext.asyncio import AsyncSession


async def paginate(
    db: AsyncSession,
    stmt: Select,
    page: int,
    limit: int,
    *options: Any,
) -> Tuple[List[Any], int]:
    """
    Возвращает страницу объектов и общее количество строк.
    Опции загрузки (selectinload) применяются только к выборке страницы.
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = await db.scalar(count_stmt)

    page_stmt = stmt.options(*options).limit(limit).offset((page - 1) * limit)
    result = await db.execute(page_stmt)
    return result.scalars().unique().all(), total or 0
