# sdk/catalog_client.py
from typing import Any, Dict, List, Optional

import httpx
import requests


class CatalogAPIError(Exception):
    """Raised for any non-2xx response; carries the service's error envelope."""

    def __init__(self, status_code: int, error: str, message: str, details: Optional[List[str]] = None):
        super().__init__(f"{status_code} {error}: {message}")
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details or []

    @classmethod
    def from_response(cls, r) -> "CatalogAPIError":
        try:
            body = r.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return cls(
            r.status_code,
            body.get("error", "HTTP Error"),
            body.get("message", r.text),
            body.get("details"),
        )


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:8085", api_key: Optional[str] = None,
                 timeout: int = 10, session: Optional[requests.Session] = None,
                 async_transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.async_transport = async_transport
        if api_key:
            self.session.headers.update({"X-API-Key": api_key})

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _handle(self, r) -> Dict[str, Any]:
        if r.status_code >= 400:
            raise CatalogAPIError.from_response(r)
        return r.json()

    # Reads
    def list_products(self, **filters) -> Dict[str, Any]:
        """List products. Keyword names match the query string (``minPrice``, ``sortBy``, ...)."""
        params = {k: v for k, v in filters.items() if v is not None}
        r = self.session.get(self._url("/api/products"), params=params, timeout=self.timeout)
        return self._handle(r)

    def get_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.get(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        return self._handle(r)["product"]

    def search_products(self, term: str) -> List[Dict[str, Any]]:
        r = self.session.get(self._url("/api/products/search"), params={"q": term}, timeout=self.timeout)
        return self._handle(r)["results"]

    def stats(self) -> Dict[str, Any]:
        r = self.session.get(self._url("/api/products/stats"), timeout=self.timeout)
        return self._handle(r)

    # Writes (need an api key)
    def create_product(self, name: str, description: str, price: float, category: str,
                       in_stock: Optional[bool] = None) -> Dict[str, Any]:
        r = self.session.post(self._url("/api/products"),
                              json=self._payload(name, description, price, category, in_stock),
                              timeout=self.timeout)
        return self._handle(r)["product"]

    def update_product(self, product_id: str, name: str, description: str, price: float, category: str,
                       in_stock: Optional[bool] = None) -> Dict[str, Any]:
        r = self.session.put(self._url(f"/api/products/{product_id}"),
                             json=self._payload(name, description, price, category, in_stock),
                             timeout=self.timeout)
        return self._handle(r)["product"]

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.delete(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        return self._handle(r)["product"]

    @staticmethod
    def _payload(name, description, price, category, in_stock) -> Dict[str, Any]:
        payload = {"name": name, "description": description, "price": price, "category": category}
        if in_stock is not None:
            payload["inStock"] = in_stock
        return payload

    # Async listing (example)
    async def list_products_async(self, **filters) -> Dict[str, Any]:
        params = {k: v for k, v in filters.items() if v is not None}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.async_transport) as client:
            r = await client.get(self._url("/api/products"), params=params)
            return self._handle(r)
