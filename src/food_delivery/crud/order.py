import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from food_delivery.config import settings
from food_delivery.core.permissions import check_transition
from food_delivery.crud.cart import get_cart
from food_delivery.crud.pagination import paginate
from food_delivery.exceptions import BusinessRuleError
from food_delivery.models import (
    Order,
    OrderItem,
    OrderStatusEnum,
    PaymentStatusEnum,
    Restaurant,
    RoleEnum,
    User,
)
from food_delivery.schemas.order import OrderCreate

logger = logging.getLogger(__name__)

ORDER_LOAD_OPTIONS = (
    selectinload(Order.items),
    selectinload(Order.customer),
    selectinload(Order.restaurant),
    selectinload(Order.delivery_agent),
)

# после забора заказа курьера уже не меняем
LOCKED_ASSIGNMENT_STATUSES = {OrderStatusEnum.picked_up, OrderStatusEnum.delivered}


def calculate_charges(subtotal: Decimal) -> Tuple[Decimal, Decimal, Decimal]:
    """
    Возвращает (delivery_fee, tax, final_amount).
    Налог округляется до целого (половина вверх).
    """
    delivery_fee = settings.DELIVERY_FEE
    tax = (subtotal * settings.TAX_RATE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return delivery_fee, tax, subtotal + delivery_fee + tax


async def get_order_by_id(db: AsyncSession, order_id: int, refresh: bool = False) -> Optional[Order]:
    """
    Возвращает заказ по ID с подгруженными items, покупателем, рестораном и курьером.
    Предотвращает MissingGreenlet при сериализации.
    """
    stmt = select(Order).where(Order.id == order_id).options(*ORDER_LOAD_OPTIONS)
    if refresh:
        stmt = stmt.execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalars().unique().first()


async def get_orders(
    db: AsyncSession,
    user: User,
    status: Optional[OrderStatusEnum] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Order], int]:
    """
    Возвращает заказы, видимые пользователю:
    - покупатель: свои заказы
    - владелец: заказы своих ресторанов
    - курьер: назначенные ему
    - админ: все
    Сортируем по created_at (новые первыми).
    """
    stmt = select(Order).order_by(Order.created_at.desc(), Order.id.desc())

    if user.role == RoleEnum.customer:
        stmt = stmt.where(Order.customer_id == user.id)
    elif user.role == RoleEnum.restaurant_owner:
        owned = select(Restaurant.id).where(Restaurant.owner_id == user.id)
        stmt = stmt.where(Order.restaurant_id.in_(owned))
    elif user.role == RoleEnum.delivery_agent:
        stmt = stmt.where(Order.delivery_agent_id == user.id)

    if status:
        stmt = stmt.where(Order.status == status)

    return await paginate(db, stmt, page, limit, *ORDER_LOAD_OPTIONS)


async def place_order(db: AsyncSession, customer: User, order_in: OrderCreate) -> Order:
    """
    Оформляет заказ из корзины покупателя.
    Позиции копируются в заказ (название, количество, цена), корзина удаляется
    в той же транзакции, что и создаётся заказ.
    """
    cart = await get_cart(db, customer.id)
    if not cart or not cart.items:
        raise BusinessRuleError("Cart is empty")

    if order_in.delivery_address is not None:
        delivery_address = order_in.delivery_address.model_dump()
    elif customer.default_address is not None:
        delivery_address = {k: v for k, v in customer.default_address.items() if k != "is_default"}
    else:
        raise BusinessRuleError("Delivery address is required")

    subtotal = sum((item.price * item.quantity for item in cart.items), Decimal("0"))
    restaurant = cart.restaurant
    if restaurant.minimum_order and subtotal < restaurant.minimum_order:
        raise BusinessRuleError(f"Minimum order amount for this restaurant is {restaurant.minimum_order}")

    delivery_fee, tax, final_amount = calculate_charges(subtotal)

    order = Order(
        customer_id=customer.id,
        restaurant_id=cart.restaurant_id,
        delivery_address=delivery_address,
        total_amount=subtotal,
        delivery_fee=delivery_fee,
        tax=tax,
        final_amount=final_amount,
        payment_method=order_in.payment_method,
        payment_status=PaymentStatusEnum.pending,
        status=OrderStatusEnum.placed,
        notes=order_in.notes,
        estimated_delivery_time=datetime.now(timezone.utc) + timedelta(minutes=settings.ESTIMATED_DELIVERY_MINUTES),
        items=[
            OrderItem(
                menu_item_id=item.menu_item_id,
                name=item.menu_item.name,
                quantity=item.quantity,
                price=item.price,
            )
            for item in cart.items
        ],
    )
    db.add(order)
    await db.delete(cart)
    await db.commit()

    logger.info(
        "Order id=%s placed by customer id=%s, restaurant id=%s, final amount %s",
        order.id, customer.id, order.restaurant_id, final_amount,
    )
    return await get_order_by_id(db, order.id, refresh=True)


async def update_order_status(db: AsyncSession, order: Order, status: OrderStatusEnum) -> Order:
    """
    Меняет статус по таблице переходов.
    delivered: фиксируем фактическое время доставки и отмечаем оплату.
    """
    previous = order.status
    check_transition(previous, status)

    order.status = status
    if status == OrderStatusEnum.delivered:
        order.actual_delivery_time = datetime.now(timezone.utc)
        order.payment_status = PaymentStatusEnum.paid

    await db.commit()

    logger.info("Order id=%s status %s -> %s", order.id, previous.value, status.value)
    return await get_order_by_id(db, order.id, refresh=True)


async def assign_delivery_agent(db: AsyncSession, order: Order, agent_id: int) -> Order:
    if order.status in LOCKED_ASSIGNMENT_STATUSES:
        raise BusinessRuleError("Delivery agent cannot be changed after pickup")

    agent = await db.get(User, agent_id)
    if not agent or agent.role != RoleEnum.delivery_agent or not agent.is_active:
        raise BusinessRuleError("Invalid delivery agent")

    order.delivery_agent_id = agent.id
    await db.commit()

    logger.info("Order id=%s assigned to delivery agent id=%s", order.id, agent.id)
    return await get_order_by_id(db, order.id, refresh=True)
