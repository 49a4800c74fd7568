import pytest

CATALOG = [
    {"name": "Laptop", "sku": "LAPTOP-001", "quantity": 4, "description": "High performance laptop"},
    {"name": "Wireless Mouse", "sku": "MOUSE-001", "quantity": 20, "description": "Ergonomic wireless mouse"},
    {"name": "Gaming Mouse", "sku": "MOUSE-002", "quantity": 8, "description": "RGB gaming mouse"},
    {"name": "Keyboard", "sku": "KB-001", "quantity": 12, "description": "Mechanical keyboard"},
    {"name": "Shirt", "sku": "SH_01", "quantity": 3, "description": "100% cotton"},
]


@pytest.fixture
def catalog(create_item):
    return {item["sku"]: item["id"] for item in (create_item(**entry) for entry in CATALOG)}


def names(response):
    assert response.status_code == 200
    return [item["name"] for item in response.json()]


def test_list_is_empty_without_items(client):
    r = client.get("/items")
    assert r.status_code == 200
    assert r.json() == []


def test_empty_query_returns_all_newest_first(client, catalog):
    expected = sorted(catalog.values(), reverse=True)
    for params in ({}, {"query": ""}, {"query": "   "}, {"q": ""}):
        r = client.get("/items", params=params)
        assert [item["id"] for item in r.json()] == expected


def test_search_by_name_is_case_insensitive(client, catalog):
    assert names(client.get("/items", params={"query": "laptop"})) == ["Laptop"]
    assert names(client.get("/items", params={"query": "LAPTOP"})) == ["Laptop"]
    assert names(client.get("/items", params={"query": "  Laptop  "})) == ["Laptop"]


def test_search_by_sku(client, catalog):
    assert names(client.get("/items", params={"query": "kb-001"})) == ["Keyboard"]
    assert names(client.get("/items", params={"query": "MOUSE-00"})) == ["Gaming Mouse", "Wireless Mouse"]


def test_search_by_description_only(client, catalog):
    assert names(client.get("/items", params={"query": "ergonomic"})) == ["Wireless Mouse"]
    assert names(client.get("/items", params={"query": "mechanical"})) == ["Keyboard"]
    assert names(client.get("/items", params={"query": "performance"})) == ["Laptop"]


def test_search_matches_multiple_items_newest_first(client, catalog):
    r = client.get("/items", params={"query": "mouse"})
    ids = [item["id"] for item in r.json()]
    assert ids == [catalog["MOUSE-002"], catalog["MOUSE-001"]]


def test_search_with_no_match(client, catalog):
    assert names(client.get("/items", params={"query": "projector"})) == []


def test_wildcard_characters_match_literally(client, catalog):
    assert names(client.get("/items", params={"query": "100%"})) == ["Shirt"]
    assert names(client.get("/items", params={"query": "%"})) == ["Shirt"]
    assert names(client.get("/items", params={"query": "_"})) == ["Shirt"]


def test_q_is_an_alias_of_query(client, catalog):
    assert names(client.get("/items", params={"q": "keyboard"})) == ["Keyboard"]


def test_same_term_in_query_and_q_is_accepted(client, catalog):
    assert names(client.get("/items", params={"query": "Keyboard", "q": "keyboard"})) == ["Keyboard"]


def test_conflicting_query_and_q_is_rejected(client, catalog):
    r = client.get("/items", params={"query": "mouse", "q": "keyboard"})
    assert r.status_code == 400
    assert r.json() == {"error": "use either query or q, not both"}


def test_one_empty_parameter_defers_to_the_other(client, catalog):
    assert names(client.get("/items", params={"query": "", "q": "laptop"})) == ["Laptop"]


def test_search_folds_non_ascii_case(client, create_item):
    create_item(name="CAFÉ Mug", sku="MUG-1", description="Stoneware")
    create_item(name="Plain Mug", sku="MUG-2", description="ÜBERGRÖSSE")

    r = client.get("/items", params={"query": "café"})
    assert [item["sku"] for item in r.json()] == ["MUG-1"]

    r = client.get("/items", params={"query": "übergrö"})
    assert [item["sku"] for item in r.json()] == ["MUG-2"]
