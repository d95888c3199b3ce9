from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class NutritionalInfo(BaseModel):
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None


class MenuItemCreate(BaseModel):
    restaurant_id: int
    name: str = Field(..., min_length=2, max_length=100)
    description: str = Field(..., min_length=10, max_length=500)
    category: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    image: Optional[str] = None
    is_available: bool = True
    is_vegetarian: bool = False
    tags: List[str] = []
    nutritional_info: Optional[NutritionalInfo] = None


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=500)
    category: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, ge=0)
    image: Optional[str] = None
    is_available: Optional[bool] = None
    is_vegetarian: Optional[bool] = None
    tags: Optional[List[str]] = None
    nutritional_info: Optional[NutritionalInfo] = None

    class Config:
        extra = "forbid"


class MenuItemRead(BaseModel):
    id: int
    restaurant_id: int
    name: str
    description: str
    category: str
    price: Decimal
    image: Optional[str] = None
    is_available: bool
    is_vegetarian: bool
    tags: List[str] = []
    nutritional_info: Optional[NutritionalInfo] = None
    created_at: datetime

    class Config:
        from_attributes = True
