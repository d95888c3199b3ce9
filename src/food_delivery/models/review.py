from sqlalchemy import Column, Integer, Text, Boolean, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from ..db.base import Base


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        # один отзыв на заказ от покупателя
        UniqueConstraint("customer_id", "order_id", name="uq_reviews_customer_order"),
    )

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    restaurant_rating = Column(Integer, nullable=False)  # 1..5
    delivery_rating = Column(Integer, nullable=True)  # 1..5
    restaurant_comment = Column(Text, nullable=True)
    delivery_comment = Column(Text, nullable=True)
    is_visible = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # связи
    customer = relationship("User")
