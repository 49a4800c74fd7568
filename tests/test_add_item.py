from inventory_api.routes.items import generate_sku


def test_add_item_generates_sku(client):
    r = client.post("/addItem", json={"name": "Desk lamp", "quantity": 3, "price": "19.5"})
    assert r.status_code == 200
    assert r.text == "Item added successfully"

    items = client.get("/items").json()
    assert len(items) == 1
    assert items[0]["sku"].startswith("DESK-LAMP-")
    assert items[0]["quantity"] == 3
    assert items[0]["price"] == 19.5
    assert items[0]["description"] == ""


def test_add_item_requires_name_and_quantity(client):
    for payload in ({"quantity": 1}, {"name": "Lamp"}, {"name": "Lamp", "quantity": ""}):
        r = client.post("/addItem", json=payload)
        assert r.status_code == 400, payload
        assert r.json() == {"error": "Name and quantity required"}


def test_add_item_rejects_negative_quantity(client):
    r = client.post("/addItem", json={"name": "Lamp", "quantity": -2})
    assert r.status_code == 400
    assert r.json() == {"error": "Quantity must be a non-negative number"}
    assert client.get("/items").json() == []


def test_generate_sku_collapses_whitespace():
    assert generate_sku("Desk  lamp\tXL", now_ms=1700000000000) == "DESK-LAMP-XL-1700000000000"


def test_generate_sku_uses_the_trimmed_name(client):
    r = client.post("/addItem", json={"name": "  Desk lamp  ", "quantity": 1})
    assert r.status_code == 200
    sku = client.get("/items").json()[0]["sku"]
    assert sku.startswith("DESK-LAMP-")
    assert not sku.startswith("-")


def test_add_item_rejects_quantity_beyond_column_range(client):
    r = client.post("/addItem", json={"name": "Lamp", "quantity": 10**20})
    assert r.status_code == 400
    assert r.json() == {"error": "quantity must be <= 2147483647"}
