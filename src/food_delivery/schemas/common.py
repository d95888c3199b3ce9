import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Coordinates(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class Address(BaseModel):
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    coordinates: Optional[Coordinates] = None


class Pagination(BaseModel):
    current: int
    pages: int
    total: int


class Page(BaseModel, Generic[T]):
    items: List[T]
    pagination: Pagination

    @classmethod
    def build(cls, items, total: int, page: int, limit: int):
        return cls(
            items=items,
            pagination=Pagination(current=page, pages=math.ceil(total / limit), total=total),
        )


class MessageResponse(BaseModel):
    message: str
