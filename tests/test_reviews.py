import pytest


@pytest.fixture
def restaurant(owner, make_restaurant):
    return make_restaurant(owner)


@pytest.fixture
def dish(owner, restaurant, make_menu_item):
    return make_menu_item(owner, restaurant["id"])


@pytest.fixture
def delivered(customer, owner, agent, dish, place_order, deliver_order):
    """
    Возвращает функцию, которая оформляет и доставляет новый заказ покупателя.
    """
    def _delivered():
        order = place_order(customer, [(dish["id"], 1)])
        return deliver_order(order["id"], owner, agent)

    return _delivered


def review(client, actor, order_id, rating, **extra):
    payload = {"order_id": order_id, "restaurant_rating": rating}
    payload.update(extra)
    return client.post("/api/reviews", json=payload, headers=actor.headers)


def restaurant_rating(client, restaurant_id):
    return client.get(f"/api/restaurants/{restaurant_id}").json()["rating"]


def test_only_delivered_orders_can_be_reviewed(client, customer, dish, place_order):
    order = place_order(customer, [(dish["id"], 1)])
    r = review(client, customer, order["id"], 5)
    assert r.status_code == 400
    assert r.json()["message"] == "Can only review delivered orders"


def test_review_updates_rating(client, customer, restaurant, delivered):
    order = delivered()
    r = review(client, customer, order["id"], 5, delivery_rating=4, restaurant_comment="Great food")
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["restaurant_id"] == restaurant["id"]
    assert body["customer_name"] is not None
    assert body["is_visible"] is True

    assert restaurant_rating(client, restaurant["id"]) == {"average": 5.0, "count": 1}


def test_rating_average_is_rounded(client, customer, restaurant, delivered):
    for rating in (5, 4):
        assert review(client, customer, delivered()["id"], rating).status_code == 201
    assert restaurant_rating(client, restaurant["id"]) == {"average": 4.5, "count": 2}

    assert review(client, customer, delivered()["id"], 4).status_code == 201
    assert restaurant_rating(client, restaurant["id"]) == {"average": 4.3, "count": 3}


def test_second_review_for_order_rejected(client, customer, restaurant, delivered):
    order = delivered()
    assert review(client, customer, order["id"], 5).status_code == 201

    r = review(client, customer, order["id"], 1)
    assert r.status_code == 400
    assert r.json()["message"] == "Review already exists for this order"
    assert restaurant_rating(client, restaurant["id"]) == {"average": 5.0, "count": 1}


def test_review_requires_order_owner(client, make_user, owner, agent, delivered):
    order = delivered()
    stranger = make_user("customer")

    assert review(client, stranger, order["id"], 5).status_code == 403
    assert review(client, owner, order["id"], 5).status_code == 403
    assert review(client, stranger, 999, 5).status_code == 404


def test_rating_bounds(client, customer, delivered):
    order = delivered()
    assert review(client, customer, order["id"], 0).status_code == 400
    assert review(client, customer, order["id"], 6).status_code == 400
    assert review(client, customer, order["id"], 3, delivery_rating=7).status_code == 400


def test_list_visible_reviews(client, customer, restaurant, delivered):
    for rating in (3, 4, 5):
        review(client, customer, delivered()["id"], rating)

    r = client.get(f"/api/reviews/restaurant/{restaurant['id']}", params={"limit": 2})
    assert r.status_code == 200
    body = r.json()
    assert body["pagination"] == {"current": 1, "pages": 2, "total": 3}
    # новые первыми
    assert [item["restaurant_rating"] for item in body["items"]] == [5, 4]


def test_hidden_review_leaves_rating(client, admin, customer, restaurant, delivered):
    first = review(client, customer, delivered()["id"], 5).json()
    review(client, customer, delivered()["id"], 4)
    url = f"/api/reviews/{first['id']}/visibility"

    assert client.put(url, json={"is_visible": False}, headers=customer.headers).status_code == 403

    r = client.put(url, json={"is_visible": False}, headers=admin.headers)
    assert r.status_code == 200
    assert r.json()["is_visible"] is False
    assert restaurant_rating(client, restaurant["id"]) == {"average": 4.0, "count": 1}

    listed = client.get(f"/api/reviews/restaurant/{restaurant['id']}").json()
    assert first["id"] not in [item["id"] for item in listed["items"]]
    assert listed["pagination"]["total"] == 1

    # повторное скрытие ничего не меняет
    client.put(url, json={"is_visible": False}, headers=admin.headers)
    assert restaurant_rating(client, restaurant["id"]) == {"average": 4.0, "count": 1}

    client.put(url, json={"is_visible": True}, headers=admin.headers)
    assert restaurant_rating(client, restaurant["id"]) == {"average": 4.5, "count": 2}


def test_moderating_unknown_review(client, admin):
    r = client.put("/api/reviews/999/visibility", json={"is_visible": False}, headers=admin.headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Review not found"
