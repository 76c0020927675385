def product_body(category_id, **overrides):
    body = {"name": "Kaju Katli", "images": ["kaju.jpg"], "price": 100, "category": category_id}
    body.update(overrides)
    return body


def test_create_embeds_category(client, category_id):
    response = client.post("/products", json=product_body(category_id, description=" rich "))
    assert response.status_code == 201
    product = response.json()["result"]["product"]
    assert product["category"]["id"] == category_id
    assert product["category"]["name"] == "Mithai"
    assert product["description"] == "rich"


def test_create_rejects_rating_field(client, category_id):
    response = client.post("/products", json=product_body(category_id, rating=5))
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request body. Required fields: name, images, price, category"


def test_create_with_malformed_category_id(client):
    response = client.post("/products", json=product_body("sweets"))
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid category id"


def test_create_with_unknown_category(client, missing_id):
    response = client.post("/products", json=product_body(missing_id))
    assert response.status_code == 404
    assert response.json() == {"message": "Category not found", "result": {}}


def test_replace_requires_existing_category(client, product_id, missing_id):
    response = client.put(f"/products/{product_id}", json=product_body(missing_id))
    assert response.status_code == 404


def test_replace_missing_product(client, category_id, missing_id):
    response = client.put(f"/products/{missing_id}", json=product_body(category_id))
    assert response.status_code == 404
    assert response.json()["message"] == "Product not found"


def test_patch_checks_category_only_when_supplied(client, product_id, missing_id):
    assert client.patch(f"/products/{product_id}", json={"price": 120}).status_code == 200
    response = client.patch(f"/products/{product_id}", json={"category": missing_id})
    assert response.status_code == 404


def test_patch_price(client, product_id):
    response = client.patch(f"/products/{product_id}", json={"price": "80"})
    assert response.status_code == 200
    assert response.json()["result"]["product"]["price"] == 80


def test_list_filters_by_category(client, category_id, product_id):
    other = client.post("/categories", json={"name": "Namkeen"}).json()["result"]["category"]["id"]
    client.post("/products", json=product_body(other, name="Bhujia"))

    response = client.get("/products", params={"categoryId": category_id})
    products = response.json()["result"]["products"]
    assert [p["id"] for p in products] == [product_id]

    assert client.get("/products", params={"categoryId": "bad"}).status_code == 400


def test_list_sorted_by_price(client, product_id, second_product_id):
    response = client.get("/products", params={"sort": "price:asc"})
    assert [p["price"] for p in response.json()["result"]["products"]] == [50, 100]


def test_delete(client, product_id):
    assert client.delete(f"/products/{product_id}").status_code == 200
    assert client.get(f"/products/{product_id}").status_code == 404


def test_create_rejects_huge_price(client, category_id):
    response = client.post("/products", json=product_body(category_id, price=10**400))
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request body. Required fields: name, images, price, category"
