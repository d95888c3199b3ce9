from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.api.deps import PageParams, ensure_restaurant_owner, get_page_params, require_roles
from food_delivery.crud.restaurant import (
    create_restaurant,
    get_restaurant_by_id,
    get_restaurant_menu,
    get_restaurants,
    update_restaurant,
)
from food_delivery.db.session import get_async_session
from food_delivery.exceptions import NotFoundError
from food_delivery.models import RoleEnum, User
from food_delivery.schemas.common import Page
from food_delivery.schemas.menu_item import MenuItemRead
from food_delivery.schemas.restaurant import RestaurantCreate, RestaurantRead, RestaurantUpdate


router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.post("", response_model=RestaurantRead, status_code=201)
async def create_restaurant_endpoint(
    restaurant_in: RestaurantCreate,
    owner: User = Depends(require_roles(RoleEnum.restaurant_owner)),
    db: AsyncSession = Depends(get_async_session),
):
    restaurant = await create_restaurant(db, owner, restaurant_in)
    return RestaurantRead.from_orm_with_rating(restaurant)


@router.get("", response_model=Page[RestaurantRead])
async def list_restaurants(
    cuisine: Optional[str] = Query(None, description="Фильтр по кухне"),
    city: Optional[str] = Query(None, description="Фильтр по городу (подстрока)"),
    is_open: Optional[bool] = Query(None, description="Только открытые/закрытые"),
    page_params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Возвращает активные рестораны, лучшие по рейтингу первыми.
    """
    restaurants, total = await get_restaurants(
        db,
        cuisine=cuisine,
        city=city,
        is_open=is_open,
        page=page_params.page,
        limit=page_params.limit,
    )
    return Page[RestaurantRead].build(
        [RestaurantRead.from_orm_with_rating(r) for r in restaurants],
        total,
        page_params.page,
        page_params.limit,
    )


@router.get("/{restaurant_id}", response_model=RestaurantRead)
async def get_restaurant(
    restaurant_id: int = Path(..., description="ID ресторана"),
    db: AsyncSession = Depends(get_async_session),
):
    restaurant = await get_restaurant_by_id(db, restaurant_id)
    if not restaurant or not restaurant.is_active:
        raise NotFoundError("Restaurant not found")
    return RestaurantRead.from_orm_with_rating(restaurant)


@router.put("/{restaurant_id}", response_model=RestaurantRead)
async def update_restaurant_endpoint(
    restaurant_id: int,
    restaurant_in: RestaurantUpdate,
    owner: User = Depends(require_roles(RoleEnum.restaurant_owner)),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Частичное обновление ресторана (только его владелец).
    """
    restaurant = await get_restaurant_by_id(db, restaurant_id)
    if not restaurant:
        raise NotFoundError("Restaurant not found")
    ensure_restaurant_owner(restaurant, owner)

    restaurant = await update_restaurant(db, restaurant, restaurant_in)
    return RestaurantRead.from_orm_with_rating(restaurant)


@router.get("/{restaurant_id}/menu", response_model=List[MenuItemRead])
async def list_restaurant_menu(
    restaurant_id: int,
    category: Optional[str] = Query(None, description="Фильтр по категории"),
    is_available: Optional[bool] = Query(None, description="Фильтр по доступности"),
    db: AsyncSession = Depends(get_async_session),
):
    restaurant = await get_restaurant_by_id(db, restaurant_id)
    if not restaurant:
        raise NotFoundError("Restaurant not found")
    return await get_restaurant_menu(db, restaurant_id, category=category, is_available=is_available)
