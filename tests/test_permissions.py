import pytest

from food_delivery.core.permissions import check_status_capability, check_transition
from food_delivery.exceptions import AccessDeniedError, BusinessRuleError
from food_delivery.models import OrderStatusEnum as S, RoleEnum


@pytest.mark.parametrize("status", [S.accepted, S.preparing, S.ready])
def test_owner_statuses(status):
    check_status_capability(RoleEnum.restaurant_owner, status)


@pytest.mark.parametrize("status", [S.picked_up, S.delivered])
def test_agent_statuses(status):
    check_status_capability(RoleEnum.delivery_agent, status)


@pytest.mark.parametrize(
    "role, status",
    [
        (RoleEnum.restaurant_owner, S.picked_up),
        (RoleEnum.restaurant_owner, S.delivered),
        (RoleEnum.restaurant_owner, S.placed),
        (RoleEnum.delivery_agent, S.accepted),
        (RoleEnum.delivery_agent, S.ready),
    ],
)
def test_status_outside_role(role, status):
    with pytest.raises(BusinessRuleError, match=f"Invalid status for {role.value}"):
        check_status_capability(role, status)


@pytest.mark.parametrize("role", [RoleEnum.customer, RoleEnum.admin])
def test_roles_without_status_rights(role):
    with pytest.raises(AccessDeniedError):
        check_status_capability(role, S.accepted)


def test_linear_progression():
    chain = [S.placed, S.accepted, S.preparing, S.ready, S.picked_up, S.delivered]
    for current, target in zip(chain, chain[1:]):
        check_transition(current, target)


@pytest.mark.parametrize(
    "current, target",
    [
        (S.placed, S.ready),
        (S.accepted, S.placed),
        (S.ready, S.ready),
        (S.delivered, S.picked_up),
    ],
)
def test_invalid_transitions(current, target):
    with pytest.raises(BusinessRuleError, match=f"from {current.value} to {target.value}"):
        check_transition(current, target)
