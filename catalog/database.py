# catalog/database.py
import threading
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Set

from .errors import ConflictError, NotFoundError
from .models import Product

# This file holds the in-memory product store and its seed data.

SEED_PRODUCTS = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
]


class ProductStore:
    """Ordered in-memory collection of products, insertion order preserved.

    One lock guards every read and write so a snapshot never sees a half-applied mutation.
    """

    def __init__(self, seed: bool = True):
        self._products: List[Product] = []
        self._issued_ids: Set[str] = set()
        self._lock = threading.Lock()
        if seed:
            now = datetime.now(timezone.utc)
            for raw in SEED_PRODUCTS:
                self.insert(Product(**raw, createdAt=now, updatedAt=now))

    def __len__(self) -> int:
        return len(self._products)

    def new_id(self) -> str:
        with self._lock:
            pid = str(uuid.uuid4())
            while pid in self._issued_ids:
                pid = str(uuid.uuid4())
            self._issued_ids.add(pid)
            return pid

    def list(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def find_by_id(self, product_id: str) -> Optional[Product]:
        with self._lock:
            return self._find(product_id)

    def find_by_name(self, name: str, exclude_id: Optional[str] = None) -> Optional[Product]:
        with self._lock:
            return self._find_name(name, exclude_id)

    def insert(self, product: Product) -> Product:
        with self._lock:
            if self._find_name(product.name) is not None:
                raise ConflictError("A product with this name already exists")
            self._issued_ids.add(product.id)
            self._products.append(product)
            return product

    def replace(self, product_id: str, product: Product) -> Product:
        with self._lock:
            for idx, p in enumerate(self._products):
                if p.id == product_id:
                    self._products[idx] = product
                    return product
        raise NotFoundError(f"Product with ID {product_id} not found")

    def remove(self, product_id: str) -> Product:
        with self._lock:
            for idx, p in enumerate(self._products):
                if p.id == product_id:
                    return self._products.pop(idx)
        raise NotFoundError(f"Product with ID {product_id} not found")

    # helpers below expect the lock to be held
    def _find(self, product_id: str) -> Optional[Product]:
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def _find_name(self, name: str, exclude_id: Optional[str] = None) -> Optional[Product]:
        needle = name.lower()
        for p in self._products:
            if p.id != exclude_id and p.name.lower() == needle:
                return p
        return None
