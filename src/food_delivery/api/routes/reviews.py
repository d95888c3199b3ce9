from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.api.deps import PageParams, get_page_params, require_roles
from food_delivery.crud.review import create_review, get_restaurant_reviews, set_review_visibility
from food_delivery.db.session import get_async_session
from food_delivery.models import RoleEnum, User
from food_delivery.schemas.common import Page
from food_delivery.schemas.review import ReviewCreate, ReviewRead, ReviewVisibilityUpdate


router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("", response_model=ReviewRead, status_code=201)
async def create_review_endpoint(
    review_in: ReviewCreate,
    customer: User = Depends(require_roles(RoleEnum.customer)),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Отзыв на доставленный заказ. Пересчитывает рейтинг ресторана.
    """
    review = await create_review(db, customer, review_in)
    return ReviewRead.from_orm_with_name(review)


@router.get("/restaurant/{restaurant_id}", response_model=Page[ReviewRead])
async def list_restaurant_reviews(
    restaurant_id: int,
    page_params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_async_session),
):
    reviews, total = await get_restaurant_reviews(db, restaurant_id, page=page_params.page, limit=page_params.limit)
    return Page[ReviewRead].build(
        [ReviewRead.from_orm_with_name(r) for r in reviews],
        total,
        page_params.page,
        page_params.limit,
    )


@router.put("/{review_id}/visibility", response_model=ReviewRead)
async def update_review_visibility(
    review_id: int,
    payload: ReviewVisibilityUpdate,
    admin: User = Depends(require_roles(RoleEnum.admin)),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Модерация отзыва (только админ).
    """
    review = await set_review_visibility(db, review_id, payload.is_visible)
    return ReviewRead.from_orm_with_name(review)
