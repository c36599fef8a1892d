"""
# `storefront/main.py` — Application entry point

## Overview
Builds the FastAPI application, wires CORS and routers, and creates the
application's stores exactly once:

- `app.state.cart` — `CartStore` (`cart` key)
- `app.state.wishlist` — `WishlistStore` (`wishlist` key)
- `app.state.recently_viewed` — `RecentlyViewed` (`recentlyViewed` key)
- `app.state.catalog` — `CatalogClient` for the read-only catalog API

All three stores share one `KeyValueStorage` picked by `STORAGE_BACKEND`.

## Routers
- `/cart`, `/wishlist`, `/variants`, `/products`, `/recently-viewed`
"""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.config import Settings, settings as default_settings
from storefront.core.storage import KeyValueStorage, build_storage
from storefront.integrations.catalog import CatalogClient
from storefront.routers import carts, products, variants, wishlist
from storefront.services.cart_store import CartStore
from storefront.services.recently_viewed import RecentlyViewed
from storefront.services.wishlist_store import WishlistStore

logger = logging.getLogger("storefront")


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
    catalog: Optional[CatalogClient] = None,
) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="Storefront API",
        description="Cart, wishlist and variant selection for the skins & apparel storefront.",
        version="1.0.0",
        redirect_slashes=False,
    )

    # Configure CORS (allow front-end domain or all origins as specified)
    allow_origins = [origin.strip() for origin in settings.allowed_origins.split(',')] if settings.allowed_origins else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if storage is None:
        storage = build_storage(settings.storage_backend, settings.storage_dir)
    app.state.cart = CartStore(storage)
    app.state.wishlist = WishlistStore(storage)
    app.state.recently_viewed = RecentlyViewed(storage, limit=settings.recently_viewed_limit)
    app.state.catalog = catalog or CatalogClient(settings.storefront_api_url, timeout=settings.catalog_timeout)

    app.include_router(carts.router)
    app.include_router(wishlist.router)
    app.include_router(variants.router)
    app.include_router(products.router)
    app.include_router(products.recent_router)

    logger.info(
        "Storefront ready: %s cart lines, %s wishlist entries",
        len(app.state.cart), app.state.wishlist.wishlist_count,
    )
    return app


logging.basicConfig(
    level=logging.DEBUG if default_settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

app = create_app()

# Run the app directly with uvicorn (for development)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=8000, reload=True)
