from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.config import settings
from food_delivery.core.security import decode_access_token
from food_delivery.db.session import get_async_session
from food_delivery.exceptions import AccessDeniedError, AuthenticationError
from food_delivery.models import Order, Restaurant, RoleEnum, User

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Достаёт пользователя из Bearer-токена. Деактивированные аккаунты не пускаем.
    """
    if credentials is None:
        raise AuthenticationError("No token, authorization denied")

    payload = decode_access_token(credentials.credentials)
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError("Token is not valid")

    user = await db.get(User, user_id)
    if not user or not user.is_active:
        raise AuthenticationError("Token is not valid")
    return user


def require_roles(*roles: RoleEnum):
    """
    Depends(require_roles(RoleEnum.customer)) пропускает только указанные роли.
    """
    async def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise AccessDeniedError()
        return user

    return dependency


def ensure_restaurant_owner(restaurant: Restaurant, user: User) -> None:
    if restaurant.owner_id != user.id:
        raise AccessDeniedError()


def ensure_order_access(order: Order, user: User) -> None:
    if user.role == RoleEnum.admin:
        return
    if user.role == RoleEnum.restaurant_owner:
        ensure_restaurant_owner(order.restaurant, user)
        return
    if order.customer_id != user.id and order.delivery_agent_id != user.id:
        raise AccessDeniedError()


@dataclass
class PageParams:
    page: int
    limit: int


def get_page_params(
    page: int = Query(1, ge=1, description="Номер страницы"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Записей на странице"),
) -> PageParams:
    return PageParams(page=page, limit=limit)
