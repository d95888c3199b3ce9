from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, JSON, ForeignKey, func
from sqlalchemy.orm import relationship
from ..db.base import Base


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(64), nullable=False)  # закуски, горячее, десерты и т.д.
    price = Column(Numeric(10, 2), nullable=False)  # цена
    image = Column(String(255), nullable=True)
    is_available = Column(Boolean, default=True, nullable=False)
    is_vegetarian = Column(Boolean, default=False, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    nutritional_info = Column(JSON, nullable=True)  # {calories, protein, carbs, fat}
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # связи
    restaurant = relationship("Restaurant", back_populates="menu_items")
