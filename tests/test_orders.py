ITEMS = [
    {"name": "Silk Scarf", "price": 49.99, "quantity": 2},
    {"name": "Tote Bag", "price": 89, "quantity": 1},
]


def place(client, email, **extra):
    body = {"userEmail": email, "items": ITEMS, "totalAmount": 188.98, **extra}
    return client.post("/api/orders", json=body)


def test_create_order_applies_server_defaults(client):
    response = place(client, "a@x.com")
    assert response.status_code == 201
    order = response.json()
    assert order["_id"]
    assert order["status"] == "Processing"
    assert order["createdAt"]
    assert order["items"] == ITEMS
    assert order["totalAmount"] == 188.98


def test_total_is_stored_as_supplied(client):
    order = place(client, "a@x.com", totalAmount=1).json()
    assert order["totalAmount"] == 1


def test_order_for_unregistered_email_is_accepted(client):
    assert place(client, "ghost@x.com").status_code == 201


def test_created_order_is_listed_for_its_user(client):
    created = place(client, "a@x.com").json()
    orders = client.get("/api/orders/a@x.com").json()
    assert [o["_id"] for o in orders] == [created["_id"]]


def test_orders_of_other_users_are_not_listed(client):
    place(client, "a@x.com")
    place(client, "b@x.com")
    orders = client.get("/api/orders/b@x.com").json()
    assert len(orders) == 1
    assert orders[0]["userEmail"] == "b@x.com"
    assert client.get("/api/orders/c@x.com").json() == []


def test_orders_are_listed_newest_first(client):
    place(client, "a@x.com", createdAt="2026-01-02T00:00:00Z")
    place(client, "a@x.com", createdAt="2026-03-01T09:30:00.250000Z")
    place(client, "a@x.com", createdAt="2026-01-01T12:00:00+02:00")
    orders = client.get("/api/orders/a@x.com").json()
    days = [o["createdAt"][:10] for o in orders]
    assert days == ["2026-03-01", "2026-01-02", "2026-01-01"]


def test_default_timestamps_sort_newest_first(client):
    first = place(client, "a@x.com").json()
    second = place(client, "a@x.com").json()
    orders = client.get("/api/orders/a@x.com").json()
    assert [o["_id"] for o in orders] == [second["_id"], first["_id"]]


def test_order_without_email_is_rejected(client):
    response = client.post("/api/orders", json={"items": ITEMS, "totalAmount": 10})
    assert response.status_code == 400
    assert response.json() == {"error": "Failed to place order"}


def test_create_failure_is_a_bad_request(broken_client):
    response = place(broken_client, "a@x.com")
    assert response.status_code == 400
    assert response.json() == {"error": "Failed to place order"}


def test_list_failure_is_a_server_error(broken_client):
    response = broken_client.get("/api/orders/a@x.com")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch orders"}


def test_line_items_are_stored_as_sent(client):
    items = ["sku-1", 3, {"name": "Ring"}, None]
    response = client.post("/api/orders", json={"userEmail": "a@x.com", "items": items, "totalAmount": 1})
    assert response.status_code == 201
    assert response.json()["items"] == items
    orders = client.get("/api/orders/a@x.com").json()
    assert orders[0]["items"] == items


def test_order_with_empty_email_is_rejected(client):
    response = client.post("/api/orders", json={"userEmail": "", "items": ITEMS})
    assert response.status_code == 400
    assert response.json() == {"error": "Failed to place order"}
