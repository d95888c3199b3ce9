from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.api.deps import (
    PageParams,
    ensure_order_access,
    ensure_restaurant_owner,
    get_current_user,
    get_page_params,
    require_roles,
)
from food_delivery.core.permissions import check_status_capability
from food_delivery.crud.order import assign_delivery_agent, get_order_by_id, get_orders, place_order, update_order_status
from food_delivery.db.session import get_async_session
from food_delivery.exceptions import AccessDeniedError, NotFoundError
from food_delivery.models import OrderStatusEnum, RoleEnum, User
from food_delivery.schemas.common import Page
from food_delivery.schemas.order import OrderAssign, OrderCreate, OrderRead, OrderStatusUpdate


router = APIRouter(prefix="/orders", tags=["orders"])


async def get_order_or_404(db: AsyncSession, order_id: int):
    order = await get_order_by_id(db, order_id)
    if not order:
        raise NotFoundError("Order not found")
    return order


@router.post("", response_model=OrderRead, status_code=201)
async def create_order_endpoint(
    order_in: OrderCreate,
    customer: User = Depends(require_roles(RoleEnum.customer)),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Оформляет заказ из текущей корзины покупателя.
    """
    order = await place_order(db, customer, order_in)
    return OrderRead.from_orm_with_names(order)


@router.get("", response_model=Page[OrderRead])
async def list_orders(
    status: Optional[OrderStatusEnum] = Query(None, description="Фильтр по статусу"),
    page_params: PageParams = Depends(get_page_params),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Возвращает список заказов в зависимости от роли пользователя.
    """
    orders, total = await get_orders(db, user, status=status, page=page_params.page, limit=page_params.limit)
    return Page[OrderRead].build(
        [OrderRead.from_orm_with_names(o) for o in orders],
        total,
        page_params.page,
        page_params.limit,
    )


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(
    order_id: int = Path(..., description="ID заказа"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Возвращает детализацию заказа по id.
    Доступ: покупатель заказа, назначенный курьер, владелец ресторана, админ.
    """
    order = await get_order_or_404(db, order_id)
    ensure_order_access(order, user)
    return OrderRead.from_orm_with_names(order)


@router.put("/{order_id}/status", response_model=OrderRead)
async def update_order_status_endpoint(
    order_id: int,
    payload: OrderStatusUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Смена статуса заказа.
    Владелец ресторана: accepted, preparing, ready.
    Назначенный курьер: picked_up, delivered.
    """
    order = await get_order_or_404(db, order_id)
    check_status_capability(user.role, payload.status)

    if user.role == RoleEnum.restaurant_owner:
        ensure_restaurant_owner(order.restaurant, user)
    elif order.delivery_agent_id != user.id:
        raise AccessDeniedError()

    order = await update_order_status(db, order, payload.status)
    return OrderRead.from_orm_with_names(order)


@router.put("/{order_id}/assign", response_model=OrderRead)
async def assign_order_endpoint(
    order_id: int,
    payload: OrderAssign,
    user: User = Depends(require_roles(RoleEnum.restaurant_owner, RoleEnum.admin)),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Назначение курьера на заказ (владелец ресторана заказа или админ).
    """
    order = await get_order_or_404(db, order_id)
    if user.role == RoleEnum.restaurant_owner:
        ensure_restaurant_owner(order.restaurant, user)

    order = await assign_delivery_agent(db, order, payload.delivery_agent_id)
    return OrderRead.from_orm_with_names(order)
