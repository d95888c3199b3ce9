from sqlalchemy import Column, Integer, String, Text, Numeric, Float, Boolean, DateTime, JSON, ForeignKey, func
from sqlalchemy.orm import relationship
from ..db.base import Base


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    address = Column(JSON, nullable=False)  # {street, city, state, zip_code, coordinates}
    contact = Column(JSON, nullable=False)  # {phone, email}
    cuisine_types = Column(JSON, nullable=False, default=list)
    hours = Column(JSON, nullable=False)  # {opening, closing}
    image = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_open = Column(Boolean, default=True, nullable=False)

    # агрегат рейтинга, обновляется при создании/модерации отзывов
    rating_average = Column(Float, default=0, nullable=False)
    rating_count = Column(Integer, default=0, nullable=False)
    rating_total = Column(Integer, default=0, nullable=False)

    delivery_time = Column(Integer, default=30, nullable=False)  # минуты
    minimum_order = Column(Numeric(10, 2), default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # связи
    owner = relationship("User", back_populates="restaurants")
    menu_items = relationship("MenuItem", back_populates="restaurant", cascade="all, delete-orphan")
