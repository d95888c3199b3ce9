from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.api.deps import require_roles
from food_delivery.crud import cart as cart_crud
from food_delivery.db.session import get_async_session
from food_delivery.models import RoleEnum, User
from food_delivery.schemas.cart import CartItemAdd, CartItemUpdate, CartRead
from food_delivery.schemas.common import MessageResponse


router = APIRouter(prefix="/cart", tags=["cart"])

customer_only = require_roles(RoleEnum.customer)


@router.get("", response_model=CartRead)
async def read_cart(
    customer: User = Depends(customer_only),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Корзина покупателя. Если корзины нет, возвращается пустая с нулевой суммой.
    """
    cart = await cart_crud.get_cart(db, customer.id)
    if not cart:
        return CartRead.empty()
    return CartRead.from_orm_with_names(cart)


@router.post("", response_model=CartRead)
async def add_to_cart(
    item_in: CartItemAdd,
    customer: User = Depends(customer_only),
    db: AsyncSession = Depends(get_async_session),
):
    cart = await cart_crud.add_item(db, customer.id, item_in.menu_item_id, item_in.quantity)
    return CartRead.from_orm_with_names(cart)


# /clear объявлен раньше /{menu_item_id}
@router.delete("/clear", response_model=MessageResponse)
async def clear_cart(
    customer: User = Depends(customer_only),
    db: AsyncSession = Depends(get_async_session),
):
    await cart_crud.clear_cart(db, customer.id)
    return MessageResponse(message="Cart cleared successfully")


@router.put("/{menu_item_id}", response_model=CartRead)
async def update_cart_item(
    menu_item_id: int,
    item_in: CartItemUpdate,
    customer: User = Depends(customer_only),
    db: AsyncSession = Depends(get_async_session),
):
    cart = await cart_crud.update_item_quantity(db, customer.id, menu_item_id, item_in.quantity)
    return CartRead.from_orm_with_names(cart)


@router.delete("/{menu_item_id}", response_model=CartRead)
async def remove_cart_item(
    menu_item_id: int,
    customer: User = Depends(customer_only),
    db: AsyncSession = Depends(get_async_session),
):
    cart = await cart_crud.remove_item(db, customer.id, menu_item_id)
    return CartRead.from_orm_with_names(cart)
