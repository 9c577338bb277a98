import pytest


@pytest.fixture
def order(client, user, make_product):
    product = make_product(price="10.00", stock=5)
    response = client.post("/api/orders", json={
        "user_id": user.id,
        "items": [{"product_id": product.id, "quantity": 1}]
    })
    return response.json()["data"]


def test_payment_lifecycle(client, order):
    response = client.post("/api/payments", json={
        "order_id": order["id"], "amount": "10.00", "method": "pix", "transaction_id": "tx-42"
    })
    assert response.status_code == 201
    payment = response.json()["data"]
    assert payment["method"] == "Pix"
    assert payment["status"] == "Pending"
    assert payment["completed_at"] is None

    response = client.put(f"/api/payments/{payment['id']}", json={
        "amount": "10.00", "method": "Pix", "status": "Completed", "transaction_id": "tx-42"
    })
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "Completed"
    assert response.json()["data"]["completed_at"] is not None

    by_order = client.get(f"/api/payments/order/{order['id']}").json()["data"]
    assert by_order["id"] == payment["id"]
    assert len(client.get("/api/payments", params={"order_id": order["id"]}).json()["data"]) == 1

    assert client.delete(f"/api/payments/{payment['id']}").status_code == 204
    assert client.get(f"/api/payments/{payment['id']}").status_code == 404


def test_one_payment_per_order(client, order):
    body = {"order_id": order["id"], "amount": "10.00", "transaction_id": "tx-1"}
    assert client.post("/api/payments", json=body).status_code == 201

    assert client.post("/api/payments", json=body).status_code == 400


def test_payment_for_unknown_order(client):
    response = client.post("/api/payments", json={"order_id": "missing", "amount": "1.00", "transaction_id": "tx"})

    assert response.status_code == 404


def test_shipping_for_order(client, order):
    response = client.post("/api/shipping", json={
        "order_id": order["id"], "address": "Rua 2", "city": "Olinda", "shipping_cost": "5.00"
    })
    assert response.status_code == 201
    shipping = response.json()["data"]
    assert shipping["status"] == "Preparing"

    response = client.put(f"/api/shipping/{shipping['id']}", json={"status": "shipped", "tracking_number": "BR123"})
    shipped = response.json()["data"]
    assert shipped["status"] == "Shipped"
    assert shipped["tracking_number"] == "BR123"
    assert shipped["shipped_date"] is not None
    assert shipped["delivered_date"] is None

    response = client.put(f"/api/shipping/{shipping['id']}", json={"status": "Delivered", "tracking_number": ""})
    delivered = response.json()["data"]
    assert delivered["tracking_number"] == "BR123"
    assert delivered["delivered_date"] is not None

    assert client.get(f"/api/shipping/order/{order['id']}").json()["data"]["status"] == "Delivered"
    # Стоимость доставки после создания заказа не меняет его сумму
    assert float(client.get(f"/api/orders/{order['id']}").json()["data"]["total_price"]) == 10.0


def test_second_shipping_is_rejected(client, order):
    body = {"order_id": order["id"], "address": "Rua 2"}
    assert client.post("/api/shipping", json=body).status_code == 201

    assert client.post("/api/shipping", json=body).status_code == 400


def test_unknown_shipping_status_is_rejected(client, order):
    shipping = client.post("/api/shipping", json={"order_id": order["id"]}).json()["data"]

    response = client.put(f"/api/shipping/{shipping['id']}", json={"status": "teleported"})

    assert response.status_code == 400


def test_delete_shipping(client, order):
    shipping = client.post("/api/shipping", json={"order_id": order["id"]}).json()["data"]

    assert client.delete(f"/api/shipping/{shipping['id']}").status_code == 204
    assert client.get(f"/api/shipping/{shipping['id']}").status_code == 404
    assert client.get("/api/shipping").json()["data"] == []
