# tests/test_query.py
from datetime import datetime, timedelta, timezone

from catalog.core import ListQuery, parse_float, parse_int
from catalog.models import Product
from catalog.query import run_query
from tests.conftest import AUTH, new_product

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _p(pid, name, price, category="misc", in_stock=True, minutes=0):
    ts = T0 + timedelta(minutes=minutes)
    return Product(id=pid, name=name, description=f"{name} item", price=price,
                   category=category, in_stock=in_stock, created_at=ts, updated_at=ts)


def _names(result):
    return [p.name for p in result.products]


def test_parse_helpers():
    assert parse_int("2abc", 1) == 2
    assert parse_int("abc", 1) == 1
    assert parse_int("0", 1) == 1
    assert parse_int("-3", 10) == 10
    assert parse_int(None, 10) == 10
    assert parse_float("12.5usd") == 12.5
    assert parse_float("cheap") is None


def test_default_listing_uses_insertion_order(client):
    body = client.get("/api/products").json()
    assert [p["name"] for p in body["products"]] == ["Laptop", "Smartphone", "Coffee Maker"]
    assert body["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "totalProducts": 3,
        "hasNextPage": False,
        "hasPrevPage": False,
    }
    assert body["filters"] == {
        "search": None,
        "category": None,
        "inStock": None,
        "minPrice": None,
        "maxPrice": None,
        "sortBy": None,
        "sortOrder": "asc",
    }


def test_max_price_filter(client):
    body = client.get("/api/products", params={"maxPrice": "800"}).json()
    assert sorted(p["price"] for p in body["products"]) == [50, 800]
    assert body["pagination"]["totalProducts"] == 2
    assert body["filters"]["maxPrice"] == 800.0


def test_price_bounds_are_inclusive(client):
    for name, price in [("Below", 99.99), ("Exact", 100), ("Above", 100.01)]:
        client.post("/api/products", json=new_product(name=name, price=price), headers=AUTH)
    body = client.get("/api/products", params={"minPrice": "100", "maxPrice": "100"}).json()
    assert [p["name"] for p in body["products"]] == ["Exact"]


def test_non_numeric_price_bound_is_ignored(client):
    body = client.get("/api/products", params={"minPrice": "abc"}).json()
    assert body["pagination"]["totalProducts"] == 3
    assert body["filters"]["minPrice"] is None


def test_search_matches_name_description_or_category(client):
    by_category = client.get("/api/products", params={"search": "KITCHEN"}).json()
    assert [p["name"] for p in by_category["products"]] == ["Coffee Maker"]
    by_description = client.get("/api/products", params={"search": "128gb"}).json()
    assert [p["name"] for p in by_description["products"]] == ["Smartphone"]


def test_category_and_stock_filters(client):
    body = client.get("/api/products", params={"category": "Electronics", "inStock": "true"}).json()
    assert [p["name"] for p in body["products"]] == ["Laptop", "Smartphone"]
    assert body["filters"]["inStock"] is True

    # anything other than "true" means out of stock
    body = client.get("/api/products", params={"inStock": "yes"}).json()
    assert [p["name"] for p in body["products"]] == ["Coffee Maker"]
    assert body["filters"]["inStock"] is False


def test_sort_by_price_desc_is_non_increasing(client):
    body = client.get("/api/products", params={"sortBy": "price", "sortOrder": "desc"}).json()
    prices = [p["price"] for p in body["products"]]
    assert prices == sorted(prices, reverse=True)
    assert body["filters"]["sortBy"] == "price"
    assert body["filters"]["sortOrder"] == "desc"


def test_unknown_sort_key_keeps_order(client):
    body = client.get("/api/products", params={"sortBy": "color", "sortOrder": "desc"}).json()
    assert [p["name"] for p in body["products"]] == ["Laptop", "Smartphone", "Coffee Maker"]
    assert body["filters"]["sortBy"] is None


def test_second_page_of_three(client):
    body = client.get("/api/products", params={"sortBy": "price", "page": "2", "limit": "1"}).json()
    assert [p["name"] for p in body["products"]] == ["Smartphone"]
    assert body["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalProducts": 3,
        "hasNextPage": True,
        "hasPrevPage": True,
    }


def test_out_of_range_page_is_empty(client):
    body = client.get("/api/products", params={"page": "9"}).json()
    assert body["products"] == []
    assert body["pagination"]["hasNextPage"] is False
    assert body["pagination"]["hasPrevPage"] is True


def test_bad_page_and_limit_fall_back_to_defaults(client):
    body = client.get("/api/products", params={"page": "0", "limit": "-4"}).json()
    assert body["pagination"]["currentPage"] == 1
    assert len(body["products"]) == 3


def test_sort_name_is_case_insensitive():
    products = [_p("a", "banana", 1), _p("b", "Apple", 2), _p("c", "cherry", 3)]
    result = run_query(products, ListQuery(sortBy="name"))
    assert _names(result) == ["Apple", "banana", "cherry"]


def test_sort_is_stable_in_both_directions():
    products = [_p("a", "first", 5), _p("b", "second", 5), _p("c", "third", 1)]
    asc = run_query(products, ListQuery(sortBy="price"))
    desc = run_query(products, ListQuery(sortBy="price", sortOrder="desc"))
    assert _names(asc) == ["third", "first", "second"]
    assert _names(desc) == ["first", "second", "third"]


def test_sort_by_created_at():
    products = [_p("a", "late", 1, minutes=10), _p("b", "early", 1, minutes=1)]
    result = run_query(products, ListQuery(sortBy="createdAt"))
    assert _names(result) == ["early", "late"]


def test_filters_compose_before_pagination():
    products = [_p(str(i), f"gadget {i}", i * 10, category="tools" if i % 2 else "toys") for i in range(1, 8)]
    result = run_query(products, ListQuery(category="TOOLS", minPrice="20", sortBy="price",
                                           sortOrder="desc", limit="2"))
    assert _names(result) == ["gadget 7", "gadget 5"]
    assert result.pagination["totalProducts"] == 3
    assert result.pagination["totalPages"] == 2
