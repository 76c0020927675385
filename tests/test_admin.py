import pytest

from security import create_token


def token_for(role, user_id="64b000000000000000000001"):
    return create_token({"id": user_id, "firstName": "Store", "lastName": "Admin", "phoneNumber": "1", "role": role})


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.parametrize("path", ["/admin/orders", "/admin/users"])
def test_requires_token(client, path):
    response = client.get(path)
    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized", "result": {}}


@pytest.mark.parametrize("path", ["/admin/orders", "/admin/users"])
def test_rejects_garbage_token(client, path):
    assert client.get(path, headers=auth("not.a.jwt")).status_code == 401


@pytest.mark.parametrize("path", ["/admin/orders", "/admin/users"])
def test_requires_admin_role(client, path):
    response = client.get(path, headers=auth(token_for("customer")))
    assert response.status_code == 403
    assert response.json()["message"] == "Admin access required"


def test_all_orders(client, user_id, product_id):
    client.post(
        "/orders",
        json={
            "userId": user_id,
            "items": [{"productId": product_id, "quantity": 1, "price": 100, "unit": "kg"}],
            "address": "12 Station Road",
            "phoneNumber": "9000000001",
            "expectedDeliveryDate": "2026-11-01",
        },
    )
    response = client.get("/admin/orders", headers=auth(token_for("admin")))
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "All orders fetched successfully"
    assert body["result"]["pagination"]["total"] == 1
    assert body["result"]["orders"][0]["userId"]["id"] == user_id


def test_all_users_embed_orders_without_passwords(client, user_id, product_id):
    order = client.post(
        "/orders",
        json={
            "userId": user_id,
            "items": [{"productId": product_id, "quantity": 2, "price": 100, "unit": "kg"}],
            "address": "12 Station Road",
            "phoneNumber": "9000000001",
            "expectedDeliveryDate": "2026-11-01",
        },
    ).json()["result"]["order"]

    response = client.get("/admin/users", headers=auth(token_for("admin")))
    assert response.status_code == 200
    users = response.json()["result"]["users"]
    assert len(users) == 1
    assert "password" not in users[0]
    assert users[0]["orders"][0]["id"] == order["id"]
    assert users[0]["orders"][0]["totalAmount"] == 200
    assert users[0]["totalPurchaseAmount"] == 200


def test_all_products_is_open(client, product_id):
    response = client.get("/admin/products", params={"limit": "500"})
    assert response.status_code == 200
    result = response.json()["result"]
    assert [p["id"] for p in result["products"]] == [product_id]
    assert result["pagination"]["limit"] == 100
