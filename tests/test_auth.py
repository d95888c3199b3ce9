from conftest import PASSWORD


def test_register_returns_token_and_user(client):
    r = client.post("/api/auth/register", json={
        "full_name": "Asha Rao",
        "email": "Asha@FoodDelivery.io",
        "password": PASSWORD,
        "mobile": "9876543210",
    })
    assert r.status_code == 201
    body = r.json()
    assert body["token"]
    assert body["user"]["email"] == "asha@fooddelivery.io"
    assert body["user"]["role"] == "customer"
    assert "password_hash" not in body["user"]


def test_register_rejects_admin_role(client):
    r = client.post("/api/auth/register", json={
        "full_name": "Mallory",
        "email": "mallory@fooddelivery.io",
        "password": PASSWORD,
        "mobile": "9876543211",
        "role": "admin",
    })
    assert r.status_code == 400
    assert "role" in r.json()["message"]


def test_register_rejects_duplicate_email(client, customer):
    r = client.post("/api/auth/register", json={
        "full_name": "Copy Cat",
        "email": customer.email,
        "password": PASSWORD,
        "mobile": "9111111111",
    })
    assert r.status_code == 400
    assert r.json()["message"] == "User already exists with this email or mobile"


def test_register_validates_mobile(client):
    r = client.post("/api/auth/register", json={
        "full_name": "Short Phone",
        "email": "short@fooddelivery.io",
        "password": PASSWORD,
        "mobile": "12345",
    })
    assert r.status_code == 400


def test_login(client, customer):
    r = client.post("/api/auth/login", json={"email": customer.email, "password": PASSWORD})
    assert r.status_code == 200
    assert r.json()["user"]["id"] == customer.id

    r = client.post("/api/auth/login", json={"email": customer.email, "password": "wrong-password"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid credentials"


def test_protected_route_requires_token(client):
    r = client.get("/api/users/me")
    assert r.status_code == 401
    assert "message" in r.json()

    r = client.get("/api/users/me", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401


def test_profile_update_sets_single_default_address(client, customer):
    addresses = [
        {"street": "1 Main St", "city": "Pune", "state": "MH", "zip_code": "411001"},
        {"street": "2 Side St", "city": "Pune", "state": "MH", "zip_code": "411002"},
    ]
    r = client.put("/api/users/me", json={"full_name": "New Name", "addresses": addresses}, headers=customer.headers)
    assert r.status_code == 200
    body = r.json()
    assert body["full_name"] == "New Name"
    assert [a["is_default"] for a in body["addresses"]] == [True, False]

    addresses[0]["is_default"] = True
    addresses[1]["is_default"] = True
    r = client.put("/api/users/me", json={"addresses": addresses}, headers=customer.headers)
    assert r.status_code == 400


def test_admin_deactivates_account(client, admin, customer):
    r = client.put(f"/api/users/{customer.id}/active", json={"is_active": False}, headers=customer.headers)
    assert r.status_code == 403

    r = client.put(f"/api/users/{customer.id}/active", json={"is_active": False}, headers=admin.headers)
    assert r.status_code == 200
    assert r.json()["is_active"] is False

    # деактивированный аккаунт не проходит ни по токену, ни по логину
    assert client.get("/api/users/me", headers=customer.headers).status_code == 401
    r = client.post("/api/auth/login", json={"email": customer.email, "password": PASSWORD})
    assert r.status_code == 403
