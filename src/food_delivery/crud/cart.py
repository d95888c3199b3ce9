import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from food_delivery.exceptions import BusinessRuleError, NotFoundError
from food_delivery.models import Cart, CartItem, MenuItem

logger = logging.getLogger(__name__)


async def get_cart(db: AsyncSession, customer_id: int, refresh: bool = False) -> Optional[Cart]:
    """
    Возвращает корзину покупателя с позициями, позициями меню и рестораном.
    refresh=True перечитывает уже загруженные в сессию объекты.
    """
    stmt = (
        select(Cart)
        .where(Cart.customer_id == customer_id)
        .options(
            selectinload(Cart.items).selectinload(CartItem.menu_item),
            selectinload(Cart.restaurant),
        )
    )
    if refresh:
        stmt = stmt.execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalars().unique().first()


async def add_item(db: AsyncSession, customer_id: int, menu_item_id: int, quantity: int = 1) -> Cart:
    """
    Добавляет позицию в корзину.
    В корзине могут быть позиции только одного ресторана.
    Цена фиксируется на момент добавления.
    """
    if quantity < 1:
        raise BusinessRuleError("Quantity must be greater than 0")

    stmt = select(MenuItem).where(MenuItem.id == menu_item_id).options(selectinload(MenuItem.restaurant))
    menu_item = (await db.execute(stmt)).scalars().first()
    if not menu_item:
        raise NotFoundError("Menu item not found")
    if not menu_item.is_available or not menu_item.restaurant.is_active:
        raise BusinessRuleError("Menu item not available")

    cart = await get_cart(db, customer_id)
    if cart is None:
        cart = Cart(customer_id=customer_id, restaurant_id=menu_item.restaurant_id, items=[])
        db.add(cart)
    elif cart.restaurant_id is not None and cart.restaurant_id != menu_item.restaurant_id:
        logger.warning(
            "Customer id=%s tried to mix restaurants %s and %s in cart",
            customer_id, cart.restaurant_id, menu_item.restaurant_id,
        )
        raise BusinessRuleError(
            "You can only add items from one restaurant at a time. "
            "Clear cart to add from different restaurant."
        )

    existing = next((item for item in cart.items if item.menu_item_id == menu_item.id), None)
    if existing:
        existing.quantity += quantity
    else:
        cart.items.append(CartItem(menu_item_id=menu_item.id, quantity=quantity, price=menu_item.price))

    cart.restaurant_id = menu_item.restaurant_id
    cart.recalculate_total()
    await db.commit()

    return await get_cart(db, customer_id, refresh=True)


async def update_item_quantity(db: AsyncSession, customer_id: int, menu_item_id: int, quantity: int) -> Cart:
    if quantity < 1:
        raise BusinessRuleError("Quantity must be greater than 0")

    cart = await get_cart(db, customer_id)
    if not cart:
        raise NotFoundError("Cart not found")

    item = next((item for item in cart.items if item.menu_item_id == menu_item_id), None)
    if not item:
        raise NotFoundError("Item not found in cart")

    item.quantity = quantity
    cart.recalculate_total()
    await db.commit()

    return await get_cart(db, customer_id, refresh=True)


async def remove_item(db: AsyncSession, customer_id: int, menu_item_id: int) -> Cart:
    """
    Удаляет позицию. Опустевшая корзина остаётся, но без ресторана.
    """
    cart = await get_cart(db, customer_id)
    if not cart:
        raise NotFoundError("Cart not found")

    item = next((item for item in cart.items if item.menu_item_id == menu_item_id), None)
    if not item:
        raise NotFoundError("Item not found in cart")

    cart.items.remove(item)
    if not cart.items:
        cart.restaurant_id = None
    cart.recalculate_total()
    await db.commit()

    return await get_cart(db, customer_id, refresh=True)


async def clear_cart(db: AsyncSession, customer_id: int) -> None:
    cart = await get_cart(db, customer_id)
    if cart:
        await db.delete(cart)
        await db.commit()
