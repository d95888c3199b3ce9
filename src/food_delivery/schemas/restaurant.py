from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from food_delivery.schemas.common import Address
from food_delivery.schemas.user import MOBILE_PATTERN


class Contact(BaseModel):
    phone: str = Field(..., pattern=MOBILE_PATTERN)
    email: Optional[EmailStr] = None


class Hours(BaseModel):
    opening: str = Field(..., min_length=1)
    closing: str = Field(..., min_length=1)


class Rating(BaseModel):
    average: float
    count: int


class RestaurantCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = None
    address: Address
    contact: Contact
    cuisine_types: List[str] = Field(..., min_length=1)
    hours: Hours
    image: Optional[str] = None
    is_open: bool = True
    delivery_time: int = Field(30, ge=1)
    minimum_order: Decimal = Field(Decimal("0"), ge=0)


class RestaurantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = None
    address: Optional[Address] = None
    contact: Optional[Contact] = None
    cuisine_types: Optional[List[str]] = Field(None, min_length=1)
    hours: Optional[Hours] = None
    image: Optional[str] = None
    is_open: Optional[bool] = None
    is_active: Optional[bool] = None
    delivery_time: Optional[int] = Field(None, ge=1)
    minimum_order: Optional[Decimal] = Field(None, ge=0)

    class Config:
        extra = "forbid"


class RestaurantRead(BaseModel):
    id: int
    owner_id: int
    name: str
    description: Optional[str] = None
    address: Address
    contact: Contact
    cuisine_types: List[str]
    hours: Hours
    image: Optional[str] = None
    is_active: bool
    is_open: bool
    rating: Rating
    delivery_time: int
    minimum_order: Decimal
    created_at: datetime

    @classmethod
    def from_orm_with_rating(cls, restaurant):
        return cls(
            id=restaurant.id,
            owner_id=restaurant.owner_id,
            name=restaurant.name,
            description=restaurant.description,
            address=restaurant.address,
            contact=restaurant.contact,
            cuisine_types=restaurant.cuisine_types,
            hours=restaurant.hours,
            image=restaurant.image,
            is_active=restaurant.is_active,
            is_open=restaurant.is_open,
            rating=Rating(average=restaurant.rating_average, count=restaurant.rating_count),
            delivery_time=restaurant.delivery_time,
            minimum_order=restaurant.minimum_order,
            created_at=restaurant.created_at,
        )
