import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from food_delivery.models import Cart, CartItem, MenuItem, OrderItem, Restaurant
from food_delivery.schemas.menu_item import MenuItemCreate, MenuItemUpdate

logger = logging.getLogger(__name__)

# nullable-поля, которые можно очистить явным null
CLEARABLE_FIELDS = {"image", "nutritional_info"}


async def get_menu_item_by_id(db: AsyncSession, menu_item_id: int) -> Optional[MenuItem]:
    """
    Возвращает позицию меню вместе с рестораном (нужен владелец для проверки прав).
    """
    stmt = (
        select(MenuItem)
        .where(MenuItem.id == menu_item_id)
        .options(selectinload(MenuItem.restaurant))
    )
    result = await db.execute(stmt)
    return result.scalars().first()


async def create_menu_item(db: AsyncSession, restaurant: Restaurant, item_in: MenuItemCreate) -> MenuItem:
    menu_item = MenuItem(
        **item_in.model_dump(exclude={"restaurant_id"}),
        restaurant_id=restaurant.id,
    )
    db.add(menu_item)
    await db.commit()
    await db.refresh(menu_item)

    logger.info("Menu item id=%s added to restaurant id=%s", menu_item.id, restaurant.id)
    return menu_item


async def update_menu_item(db: AsyncSession, menu_item: MenuItem, item_in: MenuItemUpdate) -> MenuItem:
    """
    Частичное обновление позиции. Цены в корзинах и заказах не меняются.
    """
    update_data = item_in.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        if value is not None or key in CLEARABLE_FIELDS:
            setattr(menu_item, key, value)

    await db.commit()
    await db.refresh(menu_item)
    return menu_item


async def delete_menu_item(db: AsyncSession, menu_item: MenuItem) -> None:
    """
    Удаляет позицию меню.
    Убирает её из всех корзин; опустевшие корзины теряют привязку к ресторану.
    Снимки в заказах сохраняют название и цену, ссылка на позицию обнуляется.
    """
    stmt = (
        select(Cart)
        .join(Cart.items)
        .where(CartItem.menu_item_id == menu_item.id)
        .options(selectinload(Cart.items))
    )
    carts = (await db.execute(stmt)).scalars().unique().all()
    for cart in carts:
        cart.items = [item for item in cart.items if item.menu_item_id != menu_item.id]
        if not cart.items:
            cart.restaurant_id = None
        cart.recalculate_total()

    await db.execute(
        update(OrderItem)
        .where(OrderItem.menu_item_id == menu_item.id)
        .values(menu_item_id=None)
    )
    await db.delete(menu_item)
    await db.commit()

    logger.info("Menu item id=%s deleted, removed from %s cart(s)", menu_item.id, len(carts))
