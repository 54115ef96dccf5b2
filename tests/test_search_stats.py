# tests/test_search_stats.py
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.database import ProductStore
from catalog.main import create_app
from tests.conftest import AUTH, new_product


def test_search_requires_a_term(client):
    r = client.get("/api/products/search")
    assert r.status_code == 400
    assert r.json() == {
        "error": "Bad Request",
        "message": "Search query is required. Use ?q=searchterm or ?name=searchterm",
    }


def test_search_by_q(client):
    body = client.get("/api/products/search", params={"q": "LAP"}).json()
    assert body["query"] == "lap"
    assert body["count"] == 1
    assert body["results"][0]["name"] == "Laptop"
    assert body["message"] == 'Found 1 product(s) matching "lap"'


def test_search_by_name_only_matches_names(client):
    # "kitchen" is a category, not part of any name
    body = client.get("/api/products/search", params={"name": "kitchen"}).json()
    assert body["count"] == 0
    assert body["results"] == []


def test_stats_for_seed(client):
    body = client.get("/api/products/stats").json()
    assert body["overview"] == {
        "totalProducts": 3,
        "inStockCount": 2,
        "outOfStockCount": 1,
        "categories": 2,
    }
    assert body["categoryBreakdown"] == {
        "electronics": {"total": 2, "inStock": 2, "outOfStock": 0},
        "kitchen": {"total": 1, "inStock": 0, "outOfStock": 1},
    }
    assert body["priceStats"] == {"average": 683.33, "minimum": 50, "maximum": 1200}
    assert "generatedAt" in body


def test_stats_follow_mutations(client):
    client.post("/api/products", json=new_product(price=10.555, inStock=False), headers=AUTH)
    client.delete("/api/products/1", headers=AUTH)
    body = client.get("/api/products/stats").json()
    overview = body["overview"]
    assert overview["inStockCount"] + overview["outOfStockCount"] == overview["totalProducts"] == 3
    assert body["priceStats"]["average"] == 286.85
    assert body["priceStats"]["minimum"] == 10.555


def test_stats_on_empty_store():
    client = TestClient(create_app(Settings(), store=ProductStore(seed=False)))
    body = client.get("/api/products/stats").json()
    assert body["overview"]["totalProducts"] == 0
    assert body["categoryBreakdown"] == {}
    assert body["priceStats"] == {"average": 0, "minimum": 0, "maximum": 0}


def test_average_price_rounds_halves_up():
    store = ProductStore(seed=False)
    client = TestClient(create_app(Settings(), store=store))
    client.post("/api/products", json=new_product(name="Sticker", price=0.25), headers=AUTH)
    client.post("/api/products", json=new_product(name="Freebie", price=0), headers=AUTH)
    body = client.get("/api/products/stats").json()
    assert body["priceStats"] == {"average": 0.13, "minimum": 0, "maximum": 0.25}
