from .user import User, RoleEnum
from .restaurant import Restaurant
from .menu_item import MenuItem
from .cart import Cart, CartItem
from .order import Order, OrderStatusEnum, PaymentStatusEnum, PaymentMethodEnum
from .order_item import OrderItem
from .review import Review

__all__ = [
    "User",
    "RoleEnum",
    "Restaurant",
    "MenuItem",
    "Cart",
    "CartItem",
    "Order",
    "OrderStatusEnum",
    "PaymentStatusEnum",
    "PaymentMethodEnum",
    "OrderItem",
    "Review",
]
