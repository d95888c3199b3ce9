import logging
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from food_delivery.crud.pagination import paginate
from food_delivery.crud.restaurant import apply_rating_change
from food_delivery.exceptions import AccessDeniedError, BusinessRuleError, NotFoundError
from food_delivery.models import Order, OrderStatusEnum, Review, User
from food_delivery.schemas.review import ReviewCreate

logger = logging.getLogger(__name__)

DUPLICATE_REVIEW_MESSAGE = "Review already exists for this order"


async def get_review_by_id(db: AsyncSession, review_id: int, refresh: bool = False) -> Optional[Review]:
    stmt = select(Review).where(Review.id == review_id).options(selectinload(Review.customer))
    if refresh:
        stmt = stmt.execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalars().first()


async def create_review(db: AsyncSession, customer: User, review_in: ReviewCreate) -> Review:
    """
    Создаёт отзыв на доставленный заказ и обновляет рейтинг ресторана
    в одной транзакции.
    """
    order = await db.get(Order, review_in.order_id)
    if not order:
        raise NotFoundError("Order not found")
    if order.customer_id != customer.id:
        raise AccessDeniedError()
    if order.status != OrderStatusEnum.delivered:
        raise BusinessRuleError("Can only review delivered orders")

    stmt = select(Review.id).where(Review.customer_id == customer.id, Review.order_id == order.id)
    if (await db.execute(stmt)).first():
        raise BusinessRuleError(DUPLICATE_REVIEW_MESSAGE)

    review = Review(
        customer_id=customer.id,
        restaurant_id=order.restaurant_id,
        order_id=order.id,
        restaurant_rating=review_in.restaurant_rating,
        delivery_rating=review_in.delivery_rating,
        restaurant_comment=review_in.restaurant_comment,
        delivery_comment=review_in.delivery_comment,
        is_visible=True,
    )
    db.add(review)
    try:
        await db.flush()
    except IntegrityError:
        # параллельный запрос успел создать отзыв раньше
        await db.rollback()
        raise BusinessRuleError(DUPLICATE_REVIEW_MESSAGE)

    restaurant = await apply_rating_change(db, order.restaurant_id, review.restaurant_rating, 1)
    await db.commit()

    logger.info(
        "Review id=%s for order id=%s, restaurant id=%s rating now %s (%s reviews)",
        review.id, order.id, restaurant.id, restaurant.rating_average, restaurant.rating_count,
    )
    return await get_review_by_id(db, review.id, refresh=True)


async def get_restaurant_reviews(
    db: AsyncSession,
    restaurant_id: int,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Review], int]:
    stmt = (
        select(Review)
        .where(Review.restaurant_id == restaurant_id, Review.is_visible.is_(True))
        .order_by(Review.created_at.desc(), Review.id.desc())
    )
    return await paginate(db, stmt, page, limit, selectinload(Review.customer))


async def set_review_visibility(db: AsyncSession, review_id: int, is_visible: bool) -> Review:
    """
    Модерация: скрытый отзыв исключается из рейтинга ресторана,
    повторно показанный возвращается в него.
    """
    review = await get_review_by_id(db, review_id)
    if not review:
        raise NotFoundError("Review not found")

    if review.is_visible != is_visible:
        review.is_visible = is_visible
        sign = 1 if is_visible else -1
        await apply_rating_change(db, review.restaurant_id, sign * review.restaurant_rating, sign)
        await db.commit()
        logger.info("Review id=%s visibility set to %s", review.id, is_visible)

    return await get_review_by_id(db, review.id, refresh=True)
