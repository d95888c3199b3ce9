import enum
from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON, func, Enum
from sqlalchemy.orm import relationship
from ..db.base import Base


class RoleEnum(str, enum.Enum):
    customer = "customer"
    restaurant_owner = "restaurant_owner"
    delivery_agent = "delivery_agent"
    admin = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    mobile = Column(String(10), nullable=False, unique=True)
    role = Column(Enum(RoleEnum, name="user_role"), nullable=False, default=RoleEnum.customer)
    is_active = Column(Boolean, default=True, nullable=False)
    addresses = Column(JSON, nullable=False, default=list)  # [{street, city, state, zip_code, is_default}]

    # только для курьеров
    is_available = Column(Boolean, default=False, nullable=False)
    current_location = Column(JSON, nullable=True)  # {latitude, longitude}

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # связи
    restaurants = relationship("Restaurant", back_populates="owner")

    @property
    def default_address(self):
        for address in self.addresses or []:
            if address.get("is_default"):
                return address
        return None
