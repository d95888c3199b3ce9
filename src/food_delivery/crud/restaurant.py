import json
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple

from sqlalchemy import select, cast, String
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.exceptions import NotFoundError
from food_delivery.models import MenuItem, Restaurant, User
from food_delivery.schemas.restaurant import RestaurantCreate, RestaurantUpdate
from food_delivery.crud.pagination import paginate

logger = logging.getLogger(__name__)

# nullable-поля, которые можно очистить явным null
CLEARABLE_FIELDS = {"description", "image"}


def average_rating(total: int, count: int) -> float:
    """
    Средняя оценка с округлением до одного знака (половина вверх).
    """
    if count <= 0:
        return 0.0
    average = (Decimal(total) / Decimal(count)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(average)


async def create_restaurant(db: AsyncSession, owner: User, restaurant_in: RestaurantCreate) -> Restaurant:
    restaurant = Restaurant(
        **restaurant_in.model_dump(),
        owner_id=owner.id,
        is_active=True,
        rating_average=0.0,
        rating_count=0,
        rating_total=0,
    )
    db.add(restaurant)
    await db.commit()
    await db.refresh(restaurant)

    logger.info("Restaurant id=%s created by owner id=%s", restaurant.id, owner.id)
    return restaurant


async def get_restaurants(
    db: AsyncSession,
    cuisine: Optional[str] = None,
    city: Optional[str] = None,
    is_open: Optional[bool] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Restaurant], int]:
    """
    Возвращает активные рестораны с фильтрацией по кухне, городу и статусу "открыт".
    Сортируем по рейтингу (лучшие первыми).
    """
    stmt = (
        select(Restaurant)
        .where(Restaurant.is_active.is_(True))
        .order_by(Restaurant.rating_average.desc(), Restaurant.id)
    )

    if cuisine:
        # cuisine_types хранится как JSON-массив строк, ищем элемент целиком в кавычках
        element = json.dumps(cuisine, ensure_ascii=False)
        stmt = stmt.where(cast(Restaurant.cuisine_types, String).contains(element, autoescape=True))
    if city:
        stmt = stmt.where(Restaurant.address["city"].as_string().icontains(city, autoescape=True))
    if is_open is not None:
        stmt = stmt.where(Restaurant.is_open.is_(is_open))

    return await paginate(db, stmt, page, limit)


async def get_restaurant_by_id(db: AsyncSession, restaurant_id: int) -> Optional[Restaurant]:
    return await db.get(Restaurant, restaurant_id)


async def update_restaurant(db: AsyncSession, restaurant: Restaurant, restaurant_in: RestaurantUpdate) -> Restaurant:
    """
    Частичное обновление. Владелец и рейтинг через этот путь не меняются.
    """
    update_data = restaurant_in.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        if value is not None or key in CLEARABLE_FIELDS:
            setattr(restaurant, key, value)

    await db.commit()
    await db.refresh(restaurant)
    return restaurant


async def get_restaurant_menu(
    db: AsyncSession,
    restaurant_id: int,
    category: Optional[str] = None,
    is_available: Optional[bool] = None,
) -> List[MenuItem]:
    stmt = (
        select(MenuItem)
        .where(MenuItem.restaurant_id == restaurant_id)
        .order_by(MenuItem.category, MenuItem.name)
    )
    if category:
        stmt = stmt.where(MenuItem.category == category)
    if is_available is not None:
        stmt = stmt.where(MenuItem.is_available.is_(is_available))

    result = await db.execute(stmt)
    return result.scalars().all()


async def apply_rating_change(db: AsyncSession, restaurant_id: int, rating_delta: int, count_delta: int) -> Restaurant:
    """
    Инкрементально меняет агрегат рейтинга ресторана под блокировкой строки.
    Коммит делает вызывающий код, вместе с изменением отзыва.
    """
    stmt = (
        select(Restaurant)
        .where(Restaurant.id == restaurant_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    restaurant = (await db.execute(stmt)).scalars().first()
    if not restaurant:
        raise NotFoundError("Restaurant not found")

    restaurant.rating_total += rating_delta
    restaurant.rating_count += count_delta
    restaurant.rating_average = average_rating(restaurant.rating_total, restaurant.rating_count)
    return restaurant
