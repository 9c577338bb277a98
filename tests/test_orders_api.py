import asyncio

from card_market.application.payments import PaymentService, CreatePaymentDTO
from card_market.application.products import ProductService
from card_market.domain.models import PaymentStatus


def _create_order(client, user_id, product_id, quantity=2, shipping_cost="3.50"):
    return client.post("/api/orders", json={
        "user_id": user_id,
        "items": [{"product_id": product_id, "quantity": quantity}],
        "shipping": {"address": "Rua 1", "city": "Recife", "shipping_cost": shipping_cost}
    })


def test_create_order_returns_envelope(client, uow, user, make_product):
    product = make_product(price="10.00", stock=5)

    response = _create_order(client, user.id, product.id)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Заказ создан"
    assert float(body["data"]["total_price"]) == 23.5
    assert body["data"]["status"] == "pending"
    assert body["data"]["items"][0]["product_id"] == product.id
    assert body["data"]["shipping"]["status"] == "Preparing"
    assert asyncio.run(ProductService(uow).get(product.id)).stock_quantity == 3


def test_create_order_insufficient_stock(client, uow, user, make_product):
    product = make_product(stock=2)

    response = _create_order(client, user.id, product.id, quantity=3)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert product.id in body["message"]
    assert body["data"] is None
    assert asyncio.run(ProductService(uow).get(product.id)).stock_quantity == 2


def test_create_order_rejects_malformed_body(client, user):
    response = client.post("/api/orders", json={"user_id": user.id, "items": []})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_get_and_list_orders(client, user, make_product):
    product = make_product(stock=5)
    order_id = _create_order(client, user.id, product.id).json()["data"]["id"]

    response = client.get(f"/api/orders/{order_id}")
    assert response.status_code == 200
    assert response.json()["data"]["id"] == order_id

    response = client.get("/api/orders", params={"user_id": user.id})
    assert [o["id"] for o in response.json()["data"]] == [order_id]

    response = client.get("/api/orders", params={"user_id": "someone-else"})
    assert response.json()["data"] == []


def test_get_unknown_order(client):
    response = client.get("/api/orders/missing")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_update_status_no_content(client, user, make_product):
    product = make_product(stock=5)
    order_id = _create_order(client, user.id, product.id).json()["data"]["id"]

    response = client.put(f"/api/orders/{order_id}", json={"status": "processing"})

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"/api/orders/{order_id}").json()["data"]["status"] == "processing"


def test_update_status_completion_rejected(client, uow, user, make_product):
    product = make_product(stock=5)
    order = _create_order(client, user.id, product.id).json()["data"]
    asyncio.run(PaymentService(uow).create(CreatePaymentDTO(
        order_id=order["id"], amount=order["total_price"], status=PaymentStatus.PENDING, transaction_id="tx-1"
    )))
    client.put(f"/api/shipping/{order['shipping']['id']}", json={"status": "Delivered"})

    response = client.put(f"/api/orders/{order['id']}", json={"status": "completed"})

    assert response.status_code == 400
    assert "Pending" in response.json()["message"]
    assert client.get(f"/api/orders/{order['id']}").json()["data"]["status"] == "pending"


def test_update_status_completion_succeeds(client, user, make_product):
    product = make_product(stock=5)
    order = _create_order(client, user.id, product.id).json()["data"]
    client.post("/api/payments", json={
        "order_id": order["id"], "amount": order["total_price"], "status": "Completed", "transaction_id": "tx-1"
    })
    client.put(f"/api/shipping/{order['shipping']['id']}", json={"status": "Delivered"})

    response = client.put(f"/api/orders/{order['id']}", json={"status": "completed"})

    assert response.status_code == 204
    assert client.get(f"/api/orders/{order['id']}").json()["data"]["status"] == "completed"


def test_update_status_unknown_order(client):
    response = client.put("/api/orders/missing", json={"status": "processing"})

    assert response.status_code == 404


def test_update_status_rejects_empty_status(client, user, make_product):
    product = make_product(stock=5)
    order_id = _create_order(client, user.id, product.id).json()["data"]["id"]

    response = client.put(f"/api/orders/{order_id}", json={"status": ""})

    assert response.status_code == 400


def test_delete_order(client, user, make_product):
    product = make_product(stock=5)
    order_id = _create_order(client, user.id, product.id).json()["data"]["id"]

    assert client.delete(f"/api/orders/{order_id}").status_code == 204
    assert client.get(f"/api/orders/{order_id}").status_code == 404


def test_delete_paid_order_is_rejected(client, user, make_product):
    product = make_product(stock=5)
    order = _create_order(client, user.id, product.id).json()["data"]
    client.post("/api/payments", json={
        "order_id": order["id"], "amount": order["total_price"], "transaction_id": "tx-1"
    })

    response = client.delete(f"/api/orders/{order['id']}")

    assert response.status_code == 400
    assert client.get(f"/api/orders/{order['id']}").status_code == 200


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
