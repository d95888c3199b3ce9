"""
Таблицы прав на смену статуса заказа.

STATUS_CAPABILITIES: какие целевые статусы может выставлять каждая роль.
ALLOWED_TRANSITIONS: допустимые переходы state machine заказа.
"""
from typing import Dict, FrozenSet

from food_delivery.exceptions import AccessDeniedError, BusinessRuleError
from food_delivery.models.order import OrderStatusEnum
from food_delivery.models.user import RoleEnum


STATUS_CAPABILITIES: Dict[RoleEnum, FrozenSet[OrderStatusEnum]] = {
    RoleEnum.restaurant_owner: frozenset({
        OrderStatusEnum.accepted,
        OrderStatusEnum.preparing,
        OrderStatusEnum.ready,
    }),
    RoleEnum.delivery_agent: frozenset({
        OrderStatusEnum.picked_up,
        OrderStatusEnum.delivered,
    }),
}

ALLOWED_TRANSITIONS: Dict[OrderStatusEnum, FrozenSet[OrderStatusEnum]] = {
    OrderStatusEnum.placed: frozenset({OrderStatusEnum.accepted}),
    OrderStatusEnum.accepted: frozenset({OrderStatusEnum.preparing}),
    OrderStatusEnum.preparing: frozenset({OrderStatusEnum.ready}),
    OrderStatusEnum.ready: frozenset({OrderStatusEnum.picked_up}),
    OrderStatusEnum.picked_up: frozenset({OrderStatusEnum.delivered}),
    OrderStatusEnum.delivered: frozenset(),
}


def check_status_capability(role: RoleEnum, status: OrderStatusEnum) -> None:
    allowed = STATUS_CAPABILITIES.get(role)
    if allowed is None:
        raise AccessDeniedError()
    if status not in allowed:
        raise BusinessRuleError(f"Invalid status for {role.value}")


def check_transition(current: OrderStatusEnum, target: OrderStatusEnum) -> None:
    if target not in ALLOWED_TRANSITIONS[current]:
        raise BusinessRuleError(
            f"Cannot change order status from {current.value} to {target.value}"
        )
