def test_cart_flow(client, user, make_product):
    product = make_product(stock=3)

    response = client.post(f"/api/carts/user/{user.id}")
    assert response.status_code == 201
    cart = response.json()["data"]
    assert cart["items"] == []

    response = client.post(f"/api/carts/{cart['id']}/items", json={"product_id": product.id, "quantity": 2})
    assert response.status_code == 201
    item = response.json()["data"]

    cart = client.get(f"/api/carts/user/{user.id}").json()["data"]
    assert [i["id"] for i in cart["items"]] == [item["id"]]

    assert client.delete(f"/api/carts/items/{item['id']}").status_code == 204
    assert client.get(f"/api/carts/user/{user.id}").json()["data"]["items"] == []


def test_cart_rejects_more_than_stock(client, user, make_product):
    product = make_product(stock=1)
    cart = client.post(f"/api/carts/user/{user.id}").json()["data"]

    response = client.post(f"/api/carts/{cart['id']}/items", json={"product_id": product.id, "quantity": 2})

    assert response.status_code == 400
    assert product.id in response.json()["message"]


def test_one_cart_per_user(client, user):
    assert client.post(f"/api/carts/user/{user.id}").status_code == 201
    assert client.post(f"/api/carts/user/{user.id}").status_code == 400


def test_cart_for_unknown_user(client):
    assert client.post("/api/carts/user/missing").status_code == 404
    assert client.get("/api/carts/user/missing").status_code == 404


def test_clear_cart(client, user, make_product):
    product = make_product(stock=5)
    cart = client.post(f"/api/carts/user/{user.id}").json()["data"]

    assert client.post(f"/api/carts/{cart['id']}/clear").status_code == 400

    client.post(f"/api/carts/{cart['id']}/items", json={"product_id": product.id, "quantity": 1})
    client.post(f"/api/carts/{cart['id']}/items", json={"product_id": product.id, "quantity": 2})

    assert client.post(f"/api/carts/{cart['id']}/clear").status_code == 204
    assert client.get(f"/api/carts/user/{user.id}").json()["data"]["items"] == []


def test_favorites(client, user, make_product):
    product = make_product()

    response = client.post("/api/favorites", json={"user_id": user.id, "product_id": product.id})
    assert response.status_code == 201
    favorite = response.json()["data"]

    assert client.post("/api/favorites", json={"user_id": user.id, "product_id": product.id}).status_code == 400
    assert client.get(f"/api/favorites/{favorite['id']}").json()["data"]["product_id"] == product.id
    assert len(client.get(f"/api/favorites/user/{user.id}").json()["data"]) == 1

    assert client.delete(f"/api/favorites/{favorite['id']}").status_code == 204
    assert client.delete(f"/api/favorites/{favorite['id']}").status_code == 404


def test_favorite_for_unknown_product(client, user):
    response = client.post("/api/favorites", json={"user_id": user.id, "product_id": "missing"})

    assert response.status_code == 404


def test_deleting_user_removes_cart_and_favorites(client, user, make_product):
    product = make_product()
    cart = client.post(f"/api/carts/user/{user.id}").json()["data"]
    client.post(f"/api/carts/{cart['id']}/items", json={"product_id": product.id, "quantity": 1})
    client.post("/api/favorites", json={"user_id": user.id, "product_id": product.id})

    assert client.delete(f"/api/users/{user.id}").status_code == 204
    assert client.get(f"/api/carts/user/{user.id}").status_code == 404
    assert client.get(f"/api/favorites/user/{user.id}").json()["data"] == []
