import enum
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, JSON, ForeignKey, Enum as SAEnum, func
from sqlalchemy.orm import relationship
from ..db.base import Base


class OrderStatusEnum(str, enum.Enum):
    placed = "placed"
    accepted = "accepted"
    preparing = "preparing"
    ready = "ready"
    picked_up = "picked_up"
    delivered = "delivered"


class PaymentStatusEnum(str, enum.Enum):
    pending = "pending"
    paid = "paid"


class PaymentMethodEnum(str, enum.Enum):
    cash = "cash"
    card = "card"
    upi = "upi"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    delivery_agent_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    delivery_address = Column(JSON, nullable=False)

    total_amount = Column(Numeric(10, 2), nullable=False)  # сумма позиций
    delivery_fee = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    final_amount = Column(Numeric(10, 2), nullable=False)

    payment_method = Column(SAEnum(PaymentMethodEnum, name="payment_method"), nullable=False, default=PaymentMethodEnum.cash)
    payment_status = Column(SAEnum(PaymentStatusEnum, name="payment_status"), nullable=False, default=PaymentStatusEnum.pending)
    status = Column(SAEnum(OrderStatusEnum, name="order_status"), nullable=False, default=OrderStatusEnum.placed)
    notes = Column(Text, nullable=True)

    estimated_delivery_time = Column(DateTime(timezone=True), nullable=True)
    actual_delivery_time = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # связи
    customer = relationship("User", foreign_keys=[customer_id])
    delivery_agent = relationship("User", foreign_keys=[delivery_agent_id])
    restaurant = relationship("Restaurant")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id")
