from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.api.deps import PageParams, get_page_params, require_roles
from food_delivery.crud.order import get_orders
from food_delivery.crud.user import get_available_agents, update_agent_status
from food_delivery.db.session import get_async_session
from food_delivery.models import OrderStatusEnum, RoleEnum, User
from food_delivery.schemas.common import Page
from food_delivery.schemas.order import OrderRead
from food_delivery.schemas.user import AgentOut, AgentStatusUpdate, UserOut


router = APIRouter(prefix="/agents", tags=["delivery agents"])

agent_only = require_roles(RoleEnum.delivery_agent)


@router.get("/me/orders", response_model=Page[OrderRead])
async def list_my_orders(
    status: Optional[OrderStatusEnum] = Query(None, description="Фильтр по статусу"),
    page_params: PageParams = Depends(get_page_params),
    agent: User = Depends(agent_only),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Заказы, назначенные текущему курьеру.
    """
    orders, total = await get_orders(db, agent, status=status, page=page_params.page, limit=page_params.limit)
    return Page[OrderRead].build(
        [OrderRead.from_orm_with_names(o) for o in orders],
        total,
        page_params.page,
        page_params.limit,
    )


@router.put("/me/status", response_model=UserOut)
async def update_my_status(
    status_in: AgentStatusUpdate,
    agent: User = Depends(agent_only),
    db: AsyncSession = Depends(get_async_session),
):
    return await update_agent_status(db, agent, status_in)


@router.get("/available", response_model=List[AgentOut])
async def list_available_agents(
    user: User = Depends(require_roles(RoleEnum.restaurant_owner, RoleEnum.admin)),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Свободные курьеры для назначения на заказ.
    """
    return await get_available_agents(db)
