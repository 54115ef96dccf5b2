# catalog/handlers.py
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict

from .core import ListQuery, ProductIn, SearchQuery, apply_update, make_product
from .database import ProductStore
from .errors import BadRequestError, ConflictError, NotFoundError
from .query import DEFAULT_LIMIT, run_query

# This file contains the logic behind every product endpoint.

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _round_half_up(value: float) -> float:
    """Two-decimal rounding with halves going up, not to even."""
    return math.floor(value * 100 + 0.5) / 100


def _require(store: ProductStore, product_id: str):
    p = store.find_by_id(product_id)
    if p is None:
        raise NotFoundError(f"Product with ID {product_id} not found")
    return p


# Read endpoints
async def list_products_logic(store: ProductStore, query: ListQuery, default_limit: int = DEFAULT_LIMIT) -> Dict[str, Any]:
    return run_query(store.list(), query, default_limit).to_json()


async def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = _require(store, product_id)
    return {"product": p.to_json(), "message": "Product retrieved successfully"}


async def search_products_logic(store: ProductStore, query: SearchQuery) -> Dict[str, Any]:
    term = query.term
    if not term:
        raise BadRequestError("Search query is required. Use ?q=searchterm or ?name=searchterm")
    results = [p for p in store.list() if term in p.name.lower()]
    return {
        "query": term,
        "results": [p.to_json() for p in results],
        "count": len(results),
        "message": f'Found {len(results)} product(s) matching "{term}"',
    }


async def product_stats_logic(store: ProductStore) -> Dict[str, Any]:
    products = store.list()
    total = len(products)
    in_stock = sum(1 for p in products if p.in_stock)

    breakdown: Dict[str, Dict[str, int]] = {}
    for p in products:
        cat = breakdown.setdefault(p.category, {"total": 0, "inStock": 0, "outOfStock": 0})
        cat["total"] += 1
        if p.in_stock:
            cat["inStock"] += 1
        else:
            cat["outOfStock"] += 1

    prices = [p.price for p in products]
    average = sum(prices) / len(prices) if prices else 0
    return {
        "overview": {
            "totalProducts": total,
            "inStockCount": in_stock,
            "outOfStockCount": total - in_stock,
            "categories": len(breakdown),
        },
        "categoryBreakdown": breakdown,
        "priceStats": {
            "average": _round_half_up(average),
            "minimum": min(prices) if prices else 0,
            "maximum": max(prices) if prices else 0,
        },
        "generatedAt": _now().isoformat(),
    }


# Write endpoints
async def create_product_logic(store: ProductStore, payload: ProductIn) -> Dict[str, Any]:
    if store.find_by_name(payload.name.strip()) is not None:
        raise ConflictError("A product with this name already exists")
    product = store.insert(make_product(store.new_id(), payload, _now()))
    logger.info("Created product %s (%s)", product.id, product.name)
    return {"product": product.to_json(), "message": "Product created successfully"}


async def update_product_logic(store: ProductStore, product_id: str, payload: ProductIn) -> Dict[str, Any]:
    existing = _require(store, product_id)
    if store.find_by_name(payload.name.strip(), exclude_id=product_id) is not None:
        raise ConflictError("Another product with this name already exists")
    product = store.replace(product_id, apply_update(existing, payload, _now()))
    logger.info("Updated product %s", product_id)
    return {"product": product.to_json(), "message": "Product updated successfully"}


async def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    product = store.remove(product_id)
    logger.info("Deleted product %s", product_id)
    return {"product": product.to_json(), "message": "Product deleted successfully"}
