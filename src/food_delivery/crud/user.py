import logging
from typing import List, Optional

from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.core.security import hash_password, verify_password
from food_delivery.exceptions import AccessDeniedError, BusinessRuleError, NotFoundError
from food_delivery.models import User, RoleEnum
from food_delivery.schemas.user import AgentStatusUpdate, UserRegister, UserUpdate

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalars().first()


async def create_user(db: AsyncSession, user_in: UserRegister) -> User:
    """
    Регистрирует пользователя. Email и телефон должны быть уникальны.
    """
    email = user_in.email.lower()
    stmt = select(User).where(or_(User.email == email, User.mobile == user_in.mobile))
    if (await db.execute(stmt)).scalars().first():
        raise BusinessRuleError("User already exists with this email or mobile")

    user = User(
        full_name=user_in.full_name,
        email=email,
        password_hash=hash_password(user_in.password),
        mobile=user_in.mobile,
        role=user_in.role,
        is_active=True,
        addresses=[],
        is_available=False,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise BusinessRuleError("User already exists with this email or mobile")
    await db.refresh(user)

    logger.info("Registered user id=%s role=%s", user.id, user.role.value)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise BusinessRuleError("Invalid credentials")
    if not user.is_active:
        raise AccessDeniedError("Account is deactivated")
    return user


async def update_user(db: AsyncSession, user: User, user_in: UserUpdate) -> User:
    """
    Частичное обновление профиля: имя, телефон, адреса.
    """
    update_data = user_in.model_dump(exclude_unset=True)

    if "mobile" in update_data and update_data["mobile"] != user.mobile:
        stmt = select(User.id).where(User.mobile == update_data["mobile"], User.id != user.id)
        if (await db.execute(stmt)).first():
            raise BusinessRuleError("Mobile number is already in use")

    for key, value in update_data.items():
        if value is not None:
            setattr(user, key, value)

    await db.commit()
    await db.refresh(user)
    return user


async def set_user_active(db: AsyncSession, user_id: int, is_active: bool) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")

    user.is_active = is_active
    if not is_active:
        user.is_available = False
    await db.commit()
    await db.refresh(user)

    logger.info("User id=%s is_active=%s", user.id, is_active)
    return user


async def update_agent_status(db: AsyncSession, agent: User, status_in: AgentStatusUpdate) -> User:
    update_data = status_in.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(agent, key, value)

    await db.commit()
    await db.refresh(agent)
    return agent


async def get_available_agents(db: AsyncSession) -> List[User]:
    stmt = (
        select(User)
        .where(
            User.role == RoleEnum.delivery_agent,
            User.is_available.is_(True),
            User.is_active.is_(True),
        )
        .order_by(User.id)
    )
    result = await db.execute(stmt)
    return result.scalars().all()
