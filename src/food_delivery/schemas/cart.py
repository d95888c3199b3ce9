from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class CartItemAdd(BaseModel):
    menu_item_id: int
    quantity: int = Field(1, ge=1)


class CartItemUpdate(BaseModel):
    quantity: int


class CartItemRead(BaseModel):
    menu_item_id: int
    name: Optional[str] = None
    quantity: int
    price: Decimal
    subtotal: Decimal


class CartRead(BaseModel):
    id: Optional[int] = None
    restaurant_id: Optional[int] = None
    restaurant_name: Optional[str] = None
    items: List[CartItemRead] = []
    total_amount: Decimal = Decimal("0")

    @classmethod
    def empty(cls):
        return cls()

    @classmethod
    def from_orm_with_names(cls, cart):
        items = [
            CartItemRead(
                menu_item_id=item.menu_item_id,
                name=item.menu_item.name if item.menu_item else None,
                quantity=item.quantity,
                price=item.price,
                subtotal=item.price * item.quantity,
            )
            for item in cart.items
        ]
        return cls(
            id=cart.id,
            restaurant_id=cart.restaurant_id,
            restaurant_name=cart.restaurant.name if cart.restaurant else None,
            items=items,
            total_amount=cart.total_amount,
        )
