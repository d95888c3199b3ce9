from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_async_session
from ..schemas.user import UserOut, UserUpdate, UserActiveUpdate
from ..models.user import User, RoleEnum
from ..crud.user import update_user, set_user_active
from .deps import get_current_user, require_roles

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/me", response_model=UserOut)
async def read_me(user: User = Depends(get_current_user)):
    return user


@router.put("/me", response_model=UserOut)
async def update_me(
    user_in: UserUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Обновление профиля: full_name, mobile, addresses.
    """
    return await update_user(db, user, user_in)


@router.put("/{user_id}/active", response_model=UserOut)
async def update_user_active(
    user_id: int,
    payload: UserActiveUpdate,
    admin: User = Depends(require_roles(RoleEnum.admin)),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Мягкая деактивация/активация аккаунта (только админ).
    """
    return await set_user_active(db, user_id, payload.is_active)
