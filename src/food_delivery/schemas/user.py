from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from food_delivery.models.user import RoleEnum
from food_delivery.schemas.common import Address, Coordinates

MOBILE_PATTERN = r"^[0-9]{10}$"


class UserAddress(Address):
    is_default: bool = False


def normalize_addresses(addresses: List[UserAddress]) -> List[UserAddress]:
    """
    Не больше одного адреса по умолчанию.
    Если ни один не отмечен, адресом по умолчанию становится первый.
    """
    defaults = [a for a in addresses if a.is_default]
    if len(defaults) > 1:
        raise ValueError("Only one address can be marked as default")
    if addresses and not defaults:
        addresses[0].is_default = True
    return addresses


class UserRegister(BaseModel):
    full_name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)
    mobile: str = Field(..., pattern=MOBILE_PATTERN)
    role: RoleEnum = RoleEnum.customer

    @field_validator("role")
    @classmethod
    def role_is_self_assignable(cls, value: RoleEnum) -> RoleEnum:
        if value == RoleEnum.admin:
            raise ValueError("Role must be one of customer, restaurant_owner, delivery_agent")
        return value


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=2, max_length=50)
    mobile: Optional[str] = Field(None, pattern=MOBILE_PATTERN)
    addresses: Optional[List[UserAddress]] = None

    @field_validator("addresses")
    @classmethod
    def single_default_address(cls, value):
        if value is None:
            return value
        return normalize_addresses(value)

    class Config:
        extra = "forbid"


class UserActiveUpdate(BaseModel):
    is_active: bool


class AgentStatusUpdate(BaseModel):
    is_available: Optional[bool] = None
    current_location: Optional[Coordinates] = None


class UserOut(BaseModel):
    id: int
    full_name: str
    email: str
    mobile: str
    role: RoleEnum
    is_active: bool
    addresses: List[UserAddress] = []
    is_available: bool
    current_location: Optional[Coordinates] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UserBrief(BaseModel):
    id: int
    full_name: str
    mobile: str

    class Config:
        from_attributes = True


class AgentOut(UserBrief):
    current_location: Optional[Coordinates] = None


class TokenResponse(BaseModel):
    token: str
    user: UserOut
