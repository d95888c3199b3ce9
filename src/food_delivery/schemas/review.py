from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    order_id: int
    restaurant_rating: int = Field(..., ge=1, le=5)
    delivery_rating: Optional[int] = Field(None, ge=1, le=5)
    restaurant_comment: Optional[str] = None
    delivery_comment: Optional[str] = None


class ReviewVisibilityUpdate(BaseModel):
    is_visible: bool


class ReviewRead(BaseModel):
    id: int
    customer_id: int
    customer_name: Optional[str] = None
    restaurant_id: int
    order_id: int
    restaurant_rating: int
    delivery_rating: Optional[int] = None
    restaurant_comment: Optional[str] = None
    delivery_comment: Optional[str] = None
    is_visible: bool
    created_at: datetime

    @classmethod
    def from_orm_with_name(cls, review):
        return cls(
            id=review.id,
            customer_id=review.customer_id,
            customer_name=review.customer.full_name if review.customer else None,
            restaurant_id=review.restaurant_id,
            order_id=review.order_id,
            restaurant_rating=review.restaurant_rating,
            delivery_rating=review.delivery_rating,
            restaurant_comment=review.restaurant_comment,
            delivery_comment=review.delivery_comment,
            is_visible=review.is_visible,
            created_at=review.created_at,
        )
