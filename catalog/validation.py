# catalog/validation.py
import json
import math
from typing import Any, List

from fastapi import Request

from .core import ProductIn
from .errors import BadRequestError, ValidationError


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def _non_negative_number(value: Any) -> bool:
    # bool is an int subclass but not a price
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        price = float(value)
    except OverflowError:
        return False
    return math.isfinite(price) and price >= 0


def _truthy(value: Any) -> bool:
    """JSON truthiness for inStock: empty lists and objects still count as true."""
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


def check_product(body: Any) -> List[str]:
    """Return every problem with a product payload, in field order."""
    if not isinstance(body, dict):
        body = {}
    errors = []
    if not _non_empty_string(body.get("name")):
        errors.append("Name is required and must be a non-empty string")
    if not _non_empty_string(body.get("description")):
        errors.append("Description is required and must be a non-empty string")
    if not _non_negative_number(body.get("price")):
        errors.append("Price is required and must be a non-negative number")
    if not _non_empty_string(body.get("category")):
        errors.append("Category is required and must be a non-empty string")
    return errors


async def validate_product(request: Request) -> ProductIn:
    raw = await request.body()
    try:
        body = json.loads(raw, parse_constant=_reject_constant) if raw else {}
    except ValueError:
        raise BadRequestError("Invalid JSON format in request body")

    errors = check_product(body)
    if errors:
        raise ValidationError("Invalid product data", errors)

    return ProductIn(
        name=body["name"],
        description=body["description"],
        price=body["price"],
        category=body["category"],
        in_stock=_truthy(body["inStock"]) if "inStock" in body else None,
    )
