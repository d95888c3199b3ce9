from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.api.deps import ensure_restaurant_owner, require_roles
from food_delivery.crud.menu_item import create_menu_item, delete_menu_item, get_menu_item_by_id, update_menu_item
from food_delivery.crud.restaurant import get_restaurant_by_id
from food_delivery.db.session import get_async_session
from food_delivery.exceptions import NotFoundError
from food_delivery.models import RoleEnum, User
from food_delivery.schemas.common import MessageResponse
from food_delivery.schemas.menu_item import MenuItemCreate, MenuItemRead, MenuItemUpdate


router = APIRouter(prefix="/menu", tags=["menu"])

owner_only = require_roles(RoleEnum.restaurant_owner)


async def get_owned_menu_item(db: AsyncSession, menu_item_id: int, owner: User):
    menu_item = await get_menu_item_by_id(db, menu_item_id)
    if not menu_item:
        raise NotFoundError("Menu item not found")
    ensure_restaurant_owner(menu_item.restaurant, owner)
    return menu_item


@router.post("", response_model=MenuItemRead, status_code=201)
async def create_menu_item_endpoint(
    item_in: MenuItemCreate,
    owner: User = Depends(owner_only),
    db: AsyncSession = Depends(get_async_session),
):
    restaurant = await get_restaurant_by_id(db, item_in.restaurant_id)
    if not restaurant:
        raise NotFoundError("Restaurant not found")
    ensure_restaurant_owner(restaurant, owner)

    return await create_menu_item(db, restaurant, item_in)


@router.put("/{menu_item_id}", response_model=MenuItemRead)
async def update_menu_item_endpoint(
    menu_item_id: int,
    item_in: MenuItemUpdate,
    owner: User = Depends(owner_only),
    db: AsyncSession = Depends(get_async_session),
):
    menu_item = await get_owned_menu_item(db, menu_item_id, owner)
    return await update_menu_item(db, menu_item, item_in)


@router.delete("/{menu_item_id}", response_model=MessageResponse)
async def delete_menu_item_endpoint(
    menu_item_id: int,
    owner: User = Depends(owner_only),
    db: AsyncSession = Depends(get_async_session),
):
    menu_item = await get_owned_menu_item(db, menu_item_id, owner)
    await delete_menu_item(db, menu_item)
    return MessageResponse(message="Menu item deleted successfully")
