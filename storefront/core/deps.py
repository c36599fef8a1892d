"""
storefront/core/deps.py - FastAPI dependencies.

The stores are built once in `create_app` and kept on `app.state`; routers
receive them through `Depends(...)` instead of importing module globals.
"""
from fastapi import Request

from storefront.integrations.catalog import CatalogClient
from storefront.services.cart_store import CartStore
from storefront.services.recently_viewed import RecentlyViewed
from storefront.services.wishlist_store import WishlistStore


def get_cart(request: Request) -> CartStore:
    return request.app.state.cart


def get_wishlist(request: Request) -> WishlistStore:
    return request.app.state.wishlist


def get_recently_viewed(request: Request) -> RecentlyViewed:
    return request.app.state.recently_viewed


def get_catalog(request: Request) -> CatalogClient:
    return request.app.state.catalog
