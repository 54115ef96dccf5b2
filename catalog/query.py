# catalog/query.py
"""
Listing pipeline: search, filter, sort and paginate a snapshot of the store.

Stages always run in the same order and each one works on the records the
previous stage kept. Sorting happens before pagination so pages are cut from
the ordered sequence.
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .core import ListQuery, parse_bool, parse_float, parse_int
from .models import Product

SORTABLE_FIELDS = {
    "name": "name",
    "price": "price",
    "category": "category",
    "createdAt": "created_at",
}
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass
class QueryResult:
    products: List[Product]
    pagination: Dict[str, Any]
    filters: Dict[str, Any]

    def to_json(self) -> Dict[str, Any]:
        return {
            "products": [p.to_json() for p in self.products],
            "pagination": self.pagination,
            "filters": self.filters,
        }


def search_products(products: List[Product], term: Optional[str]) -> List[Product]:
    if not term:
        return products
    needle = term.lower()
    return [
        p for p in products
        if needle in p.name.lower() or needle in p.description.lower() or needle in p.category.lower()
    ]


def filter_category(products: List[Product], category: Optional[str]) -> List[Product]:
    if not category:
        return products
    wanted = category.lower()
    return [p for p in products if p.category.lower() == wanted]


def filter_stock(products: List[Product], in_stock: Optional[str]) -> List[Product]:
    if in_stock is None:
        return products
    wanted = parse_bool(in_stock)
    return [p for p in products if p.in_stock == wanted]


def filter_price(products: List[Product], min_price: Optional[float], max_price: Optional[float]) -> List[Product]:
    if min_price is not None:
        products = [p for p in products if p.price >= min_price]
    if max_price is not None:
        products = [p for p in products if p.price <= max_price]
    return products


def sort_products(products: List[Product], sort_by: Optional[str], descending: bool) -> List[Product]:
    attr = SORTABLE_FIELDS.get(sort_by or "")
    if attr is None:
        return products

    def key(p: Product):
        value = getattr(p, attr)
        return value.lower() if isinstance(value, str) else value

    # sorted() stays stable with reverse=True: ties keep their prior order
    return sorted(products, key=key, reverse=descending)


def paginate(products: List[Product], page: int, limit: int) -> Dict[str, Any]:
    start = (page - 1) * limit
    end = start + limit
    total = len(products)
    return {
        "items": products[start:end],
        "pagination": {
            "currentPage": page,
            "totalPages": math.ceil(total / limit),
            "totalProducts": total,
            "hasNextPage": end < total,
            "hasPrevPage": page > 1,
        },
    }


def run_query(products: List[Product], query: ListQuery, default_limit: int = DEFAULT_LIMIT) -> QueryResult:
    min_price = parse_float(query.min_price)
    max_price = parse_float(query.max_price)
    descending = query.sort_order == "desc"
    sort_applied = query.sort_by in SORTABLE_FIELDS

    out = search_products(products, query.search)
    out = filter_category(out, query.category)
    out = filter_stock(out, query.in_stock)
    out = filter_price(out, min_price, max_price)
    out = sort_products(out, query.sort_by, descending)

    page = parse_int(query.page, DEFAULT_PAGE)
    limit = parse_int(query.limit, default_limit)
    paged = paginate(out, page, limit)

    filters = {
        "search": query.search or None,
        "category": query.category or None,
        "inStock": parse_bool(query.in_stock) if query.in_stock is not None else None,
        "minPrice": min_price,
        "maxPrice": max_price,
        "sortBy": query.sort_by if sort_applied else None,
        "sortOrder": "desc" if descending else "asc",
    }
    return QueryResult(products=paged["items"], pagination=paged["pagination"], filters=filters)
