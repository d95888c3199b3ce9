import asyncio
import itertools
import os
from types import SimpleNamespace

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from food_delivery.core.security import hash_password
from food_delivery.db.base import Base
from food_delivery.db.session import get_async_session, json_serializer
from food_delivery.main import app
from food_delivery.models import RoleEnum, User

PASSWORD = "secret123"

ADDRESS = {"street": "1 Main St", "city": "Pune", "state": "MH", "zip_code": "411001"}


@pytest.fixture
def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
        json_serializer=json_serializer,
    )

    async def create_all():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_all())
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def client(session_factory):
    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth(actor):
    return {"Authorization": f"Bearer {actor.token}"}


@pytest.fixture
def make_user(client):
    """
    Регистрирует пользователя с нужной ролью и возвращает
    SimpleNamespace(id, token, headers, email).
    """
    counter = itertools.count(1)

    def _make(role="customer", **overrides):
        n = next(counter)
        payload = {
            "full_name": f"{role.title()} {n}",
            "email": f"{role}{n}@fooddelivery.io",
            "password": PASSWORD,
            "mobile": f"98{n:08d}",
            "role": role,
        }
        payload.update(overrides)
        r = client.post("/api/auth/register", json=payload)
        assert r.status_code == 201, r.text
        body = r.json()
        actor = SimpleNamespace(id=body["user"]["id"], token=body["token"], email=payload["email"])
        actor.headers = auth(actor)
        return actor

    return _make


@pytest.fixture
def customer(make_user):
    return make_user("customer")


@pytest.fixture
def owner(make_user):
    return make_user("restaurant_owner")


@pytest.fixture
def agent(make_user):
    return make_user("delivery_agent")


@pytest.fixture
def admin(client, session_factory):
    # админ не может зарегистрироваться через API
    async def create():
        async with session_factory() as session:
            session.add(User(
                full_name="Admin",
                email="admin@fooddelivery.io",
                password_hash=hash_password(PASSWORD),
                mobile="9000000000",
                role=RoleEnum.admin,
                is_active=True,
                addresses=[],
                is_available=False,
            ))
            await session.commit()

    asyncio.run(create())
    r = client.post("/api/auth/login", json={"email": "admin@fooddelivery.io", "password": PASSWORD})
    assert r.status_code == 200, r.text
    body = r.json()
    actor = SimpleNamespace(id=body["user"]["id"], token=body["token"], email="admin@fooddelivery.io")
    actor.headers = auth(actor)
    return actor


@pytest.fixture
def make_restaurant(client):
    def _make(owner, **overrides):
        payload = {
            "name": "Spice Garden",
            "address": dict(ADDRESS),
            "contact": {"phone": "9123456789", "email": "hello@spicegarden.io"},
            "cuisine_types": ["Indian"],
            "hours": {"opening": "10:00", "closing": "22:00"},
        }
        payload.update(overrides)
        r = client.post("/api/restaurants", json=payload, headers=owner.headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def make_menu_item(client):
    def _make(owner, restaurant_id, **overrides):
        payload = {
            "restaurant_id": restaurant_id,
            "name": "Paneer Tikka",
            "description": "Grilled cottage cheese with spices",
            "category": "Starters",
            "price": 100,
        }
        payload.update(overrides)
        r = client.post("/api/menu", json=payload, headers=owner.headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def place_order(client):
    """
    Кладёт позиции в корзину покупателя и оформляет заказ.
    items: список (menu_item_id, quantity).
    """
    def _place(customer, items, **overrides):
        for menu_item_id, quantity in items:
            r = client.post("/api/cart", json={"menu_item_id": menu_item_id, "quantity": quantity}, headers=customer.headers)
            assert r.status_code == 200, r.text
        payload = {"delivery_address": dict(ADDRESS), "payment_method": "cash"}
        payload.update(overrides)
        r = client.post("/api/orders", json=payload, headers=customer.headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _place


@pytest.fixture
def deliver_order(client):
    """
    Проводит заказ по всем статусам до delivered.
    """
    def _deliver(order_id, owner, agent):
        r = client.put(f"/api/orders/{order_id}/assign", json={"delivery_agent_id": agent.id}, headers=owner.headers)
        assert r.status_code == 200, r.text
        for actor, status in (
            (owner, "accepted"),
            (owner, "preparing"),
            (owner, "ready"),
            (agent, "picked_up"),
            (agent, "delivered"),
        ):
            r = client.put(f"/api/orders/{order_id}/status", json={"status": status}, headers=actor.headers)
            assert r.status_code == 200, r.text
        return r.json()

    return _deliver
