import pytest

SCARF = {
    "productId": "GLM-001",
    "name": "Silk Scarf",
    "price": 49.99,
    "category": "Accessories",
    "image": "https://cdn.example.com/scarf.jpg",
    "description": "Hand-printed mulberry silk",
}

BAG = {"productId": "GLM-002", "name": "Tote Bag", "price": 89}

ADD_FAILED = {"error": "Failed to add product. Ensure ProductID is unique."}


def test_list_is_empty_initially(client):
    response = client.get("/api/products")
    assert response.status_code == 200
    assert response.json() == []


def test_add_product_returns_stored_record(client):
    response = client.post("/api/products", json=SCARF)
    assert response.status_code == 201
    body = response.json()
    assert body["_id"]
    for key, value in SCARF.items():
        assert body[key] == value


def test_added_products_are_listed_in_insertion_order(client):
    client.post("/api/products", json=SCARF)
    client.post("/api/products", json=BAG)
    products = client.get("/api/products").json()
    assert [p["productId"] for p in products] == ["GLM-001", "GLM-002"]
    assert products[1]["category"] is None


def test_duplicate_product_id_is_rejected_without_change(client):
    client.post("/api/products", json=SCARF)
    response = client.post("/api/products", json={**SCARF, "name": "Impostor"})
    assert response.status_code == 400
    assert response.json() == ADD_FAILED
    products = client.get("/api/products").json()
    assert len(products) == 1
    assert products[0]["name"] == "Silk Scarf"


def test_missing_required_field_is_rejected(client):
    response = client.post("/api/products", json={"productId": "GLM-003", "name": "No price"})
    assert response.status_code == 400
    assert response.json() == ADD_FAILED
    assert client.get("/api/products").json() == []


def test_mistyped_price_is_rejected(client):
    response = client.post("/api/products", json={**BAG, "price": "cheap"})
    assert response.status_code == 400


def test_fields_are_coerced_and_unknown_fields_dropped(client):
    response = client.post(
        "/api/products",
        json={"productId": 17, "name": "Ring", "price": "12.50", "sku": "X"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["productId"] == "17"
    assert body["price"] == 12.5
    assert "sku" not in body


def test_list_failure_is_a_server_error(broken_client):
    response = broken_client.get("/api/products")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch products"}


def test_add_failure_is_a_bad_request(broken_client):
    response = broken_client.post("/api/products", json=SCARF)
    assert response.status_code == 400
    assert response.json() == ADD_FAILED


@pytest.mark.parametrize("field", ["productId", "name"])
def test_empty_required_text_is_rejected(client, field):
    response = client.post("/api/products", json={**BAG, field: ""})
    assert response.status_code == 400
    assert response.json() == ADD_FAILED
    assert client.get("/api/products").json() == []
