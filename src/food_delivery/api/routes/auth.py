from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.core.security import create_access_token
from food_delivery.crud.user import authenticate, create_user
from food_delivery.db.session import get_async_session
from food_delivery.schemas.user import TokenResponse, UserLogin, UserOut, UserRegister

router = APIRouter(prefix="/auth", tags=["auth"])


def token_response(user) -> TokenResponse:
    return TokenResponse(
        token=create_access_token(user.id, user.role.value),
        user=UserOut.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(user_in: UserRegister, db: AsyncSession = Depends(get_async_session)):
    """
    Регистрация покупателя, владельца ресторана или курьера.
    """
    user = await create_user(db, user_in)
    return token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(credentials: UserLogin, db: AsyncSession = Depends(get_async_session)):
    user = await authenticate(db, credentials.email, credentials.password)
    return token_response(user)
