# catalog/main.py
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware

from .auth import authenticate
from .config import Settings, settings as default_settings
from .core import ListQuery, ProductIn, SearchQuery
from .database import ProductStore
from .errors import AVAILABLE_ROUTES, register_error_handlers
from .handlers import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    list_products_logic,
    product_stats_logic,
    search_products_logic,
    update_product_logic,
)
from .log import configure_logging
from .validation import validate_product


# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def list_query(
    search: Optional[str] = None,
    category: Optional[str] = None,
    in_stock: Optional[str] = Query(None, alias="inStock"),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> ListQuery:
    return ListQuery(
        search=search,
        category=category,
        in_stock=in_stock,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )


def search_query(q: Optional[str] = None, name: Optional[str] = None) -> SearchQuery:
    return SearchQuery(q=q, name=name)


def create_app(config: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """Build the service with its own product store."""
    config = config or default_settings
    configure_logging(config.log_level, config.access_log)

    app = FastAPI(title=config.project_name, version=config.version)
    app.state.settings = config
    app.state.store = store if store is not None else ProductStore(seed=config.seed_products)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app, debug=config.is_development)

    # ---------------------------
    # Service endpoints
    # ---------------------------
    @app.get("/")
    async def index():
        return {
            "message": f"Welcome to the {config.project_name}",
            "version": config.version,
            "endpoints": AVAILABLE_ROUTES,
        }

    @app.get("/health")
    async def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    # ---------------------------
    # Product endpoints
    # /search and /stats must be registered before /{product_id}
    # ---------------------------
    @app.get("/api/products/search")
    async def search_products(query: SearchQuery = Depends(search_query), store: ProductStore = Depends(get_store)):
        return await search_products_logic(store, query)

    @app.get("/api/products/stats")
    async def product_stats(store: ProductStore = Depends(get_store)):
        return await product_stats_logic(store)

    @app.get("/api/products")
    async def list_products(query: ListQuery = Depends(list_query), store: ProductStore = Depends(get_store)):
        return await list_products_logic(store, query, config.default_page_size)

    @app.get("/api/products/{product_id}")
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return await get_product_logic(store, product_id)

    # auth runs before validation: dependencies resolve in parameter order
    @app.post("/api/products", status_code=201)
    async def create_product(
        user: Dict[str, Any] = Depends(authenticate),
        payload: ProductIn = Depends(validate_product),
        store: ProductStore = Depends(get_store),
    ):
        return await create_product_logic(store, payload)

    @app.put("/api/products/{product_id}")
    async def update_product(
        product_id: str,
        user: Dict[str, Any] = Depends(authenticate),
        payload: ProductIn = Depends(validate_product),
        store: ProductStore = Depends(get_store),
    ):
        return await update_product_logic(store, product_id, payload)

    @app.delete("/api/products/{product_id}")
    async def delete_product(
        product_id: str,
        user: Dict[str, Any] = Depends(authenticate),
        store: ProductStore = Depends(get_store),
    ):
        return await delete_product_logic(store, product_id)

    return app


app = create_app()
