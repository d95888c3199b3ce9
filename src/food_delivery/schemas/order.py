from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from food_delivery.models.order import OrderStatusEnum, PaymentMethodEnum, PaymentStatusEnum
from food_delivery.schemas.common import Address


class OrderItemRead(BaseModel):
    id: int
    menu_item_id: Optional[int] = None
    name: str
    quantity: int
    price: Decimal

    class Config:
        from_attributes = True


class OrderRead(BaseModel):
    id: int
    customer_id: int
    customer_name: Optional[str] = None
    restaurant_id: int
    restaurant_name: Optional[str] = None
    delivery_agent_id: Optional[int] = None
    delivery_agent_name: Optional[str] = None
    items: List[OrderItemRead] = []
    delivery_address: Address
    total_amount: Decimal
    delivery_fee: Decimal
    tax: Decimal
    final_amount: Decimal
    payment_method: PaymentMethodEnum
    payment_status: PaymentStatusEnum
    status: OrderStatusEnum
    notes: Optional[str] = None
    estimated_delivery_time: Optional[datetime] = None
    actual_delivery_time: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_orm_with_names(cls, order):
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer.full_name if order.customer else None,
            restaurant_id=order.restaurant_id,
            restaurant_name=order.restaurant.name if order.restaurant else None,
            delivery_agent_id=order.delivery_agent_id,
            delivery_agent_name=order.delivery_agent.full_name if order.delivery_agent else None,
            items=[OrderItemRead.model_validate(i) for i in order.items],
            delivery_address=order.delivery_address,
            total_amount=order.total_amount,
            delivery_fee=order.delivery_fee,
            tax=order.tax,
            final_amount=order.final_amount,
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            status=order.status,
            notes=order.notes,
            estimated_delivery_time=order.estimated_delivery_time,
            actual_delivery_time=order.actual_delivery_time,
            created_at=order.created_at,
        )


class OrderCreate(BaseModel):
    delivery_address: Optional[Address] = None
    payment_method: PaymentMethodEnum = PaymentMethodEnum.cash
    notes: Optional[str] = None

    class Config:
        extra = "forbid"


class OrderStatusUpdate(BaseModel):
    status: OrderStatusEnum


class OrderAssign(BaseModel):
    delivery_agent_id: int
