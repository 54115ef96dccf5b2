# catalog/core.py
import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Product

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


# ---------------------------
# Request structs
# ---------------------------
class ProductIn(BaseModel):
    name: str
    description: str
    price: float
    category: str
    in_stock: Optional[bool] = None  # None means "not sent"


class ListQuery(BaseModel):
    """Raw query string values for the listing endpoint; parsing happens in the pipeline."""

    model_config = ConfigDict(populate_by_name=True)

    search: Optional[str] = None
    category: Optional[str] = None
    in_stock: Optional[str] = Field(default=None, alias="inStock")
    min_price: Optional[str] = Field(default=None, alias="minPrice")
    max_price: Optional[str] = Field(default=None, alias="maxPrice")
    sort_by: Optional[str] = Field(default=None, alias="sortBy")
    sort_order: Optional[str] = Field(default=None, alias="sortOrder")
    page: Optional[str] = None
    limit: Optional[str] = None


class SearchQuery(BaseModel):
    q: Optional[str] = None
    name: Optional[str] = None

    @property
    def term(self) -> str:
        return (self.q or self.name or "").lower()


# ---------------------------
# Value coercion
# ---------------------------
def parse_int(raw: Optional[str], default: int) -> int:
    """Leading-integer parse; unparsable, zero or negative values give ``default``."""
    if raw is None:
        return default
    m = _INT_PREFIX.match(raw)
    if not m:
        return default
    value = int(m.group(1))
    return value if value >= 1 else default


def parse_float(raw: Optional[str]) -> Optional[float]:
    """Leading-number parse; returns None when ``raw`` does not start with a number."""
    if raw is None:
        return None
    m = _FLOAT_PREFIX.match(raw)
    if not m:
        return None
    return float(m.group(1))


def parse_bool(raw: str) -> bool:
    return raw.lower() == "true"


# ---------------------------
# Record builders
# ---------------------------
def make_product(product_id: str, p: ProductIn, now: datetime) -> Product:
    return Product(
        id=product_id,
        name=p.name.strip(),
        description=p.description.strip(),
        price=float(p.price),
        category=p.category.strip().lower(),
        in_stock=True if p.in_stock is None else p.in_stock,
        created_at=now,
        updated_at=now,
    )


def apply_update(existing: Product, p: ProductIn, now: datetime) -> Product:
    return existing.model_copy(update={
        "name": p.name.strip(),
        "description": p.description.strip(),
        "price": float(p.price),
        "category": p.category.strip().lower(),
        "in_stock": existing.in_stock if p.in_stock is None else p.in_stock,
        "updated_at": now,
    })
