"""
# `storefront/routers/products.py` — Product detail endpoints

## Overview
Product data comes from the catalog API (read-only); the cart, wishlist
and recently-viewed list are the application's local stores.

### `GET /products/{slug}`
1. Product is fetched by slug (`404` if the catalog does not know it).
2. Reviews are fetched; stats are summarized locally.
   Related products are fetched too. Either list degrades to empty when
   the catalog cannot serve it.
3. The product id is recorded as recently viewed.

### `POST /products/{slug}/cart`
Applies a selection (guided for device skins, flat otherwise) and adds
`quantity` of the product. An out-of-stock product or an incomplete
selection is refused with `400`
and the message the UI shows ("Please select a variant" /
"Please select your device model"); the cart is not touched.

### `POST /products/{slug}/wishlist`
Toggles the product in the wishlist.

### `GET /recently-viewed`
Recently viewed product ids, most recent first.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.core.deps import get_cart, get_catalog, get_recently_viewed, get_wishlist
from storefront.integrations.catalog import CatalogClient, CatalogError, ProductNotFound
from storefront.schemas.cart import CartLine
from storefront.schemas.product import Product
from storefront.schemas.variant import AddToCartIn
from storefront.services.cart_store import CartStore
from storefront.services.product_detail import ProductDetailSession, ProductUnavailable
from storefront.services.recently_viewed import RecentlyViewed
from storefront.services.reviews import summarize_reviews
from storefront.services.variant_composer import InvalidVariantChoice, VariantSelectionError
from storefront.services.wishlist_store import WishlistStore

logger = logging.getLogger("storefront.products")

router = APIRouter(prefix="/products", tags=["Products"])
recent_router = APIRouter(prefix="/recently-viewed", tags=["Products"])


def _fetch_product(catalog: CatalogClient, slug: str) -> Product:
    try:
        return catalog.get_product_by_slug(slug)
    except ProductNotFound:
        raise HTTPException(status_code=404, detail="Product not found")
    except CatalogError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/{slug}")
def product_detail(
    slug: str,
    catalog: CatalogClient = Depends(get_catalog),
    wishlist: WishlistStore = Depends(get_wishlist),
    recently_viewed: RecentlyViewed = Depends(get_recently_viewed),
):
    product = _fetch_product(catalog, slug)
    try:
        reviews = catalog.get_reviews(product.id)
    except CatalogError as e:
        # A product page without reviews is still a product page
        logger.warning("Reviews unavailable for %s: %s", product.id, e)
        reviews = []
    try:
        related = catalog.get_related_products(product.id)
    except CatalogError as e:
        logger.warning("Related products unavailable for %s: %s", product.id, e)
        related = []
    recently_viewed.record(product.id)
    return {
        "product": product.snapshot(),
        "reviews": [r.model_dump(by_alias=True, mode="json") for r in reviews],
        "review_stats": summarize_reviews(reviews).model_dump(by_alias=True),
        "related": [p.snapshot() for p in related],
        "in_wishlist": wishlist.is_in_wishlist(product.id),
    }


@router.post("/{slug}/cart", response_model=CartLine, status_code=201)
def add_product_to_cart(
    slug: str,
    payload: AddToCartIn,
    catalog: CatalogClient = Depends(get_catalog),
    cart: CartStore = Depends(get_cart),
    wishlist: WishlistStore = Depends(get_wishlist),
):
    product = _fetch_product(catalog, slug)
    session = ProductDetailSession(product, cart, wishlist)
    session.quantity = payload.quantity
    try:
        session.select(
            brand=payload.brand,
            model=payload.model,
            logo_option=payload.logo_option,
            coverage_option=payload.coverage_option,
            option=payload.option,
        )
        return session.add_to_cart()
    except (InvalidVariantChoice, VariantSelectionError, ProductUnavailable) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{slug}/wishlist")
def toggle_wishlist(
    slug: str,
    catalog: CatalogClient = Depends(get_catalog),
    cart: CartStore = Depends(get_cart),
    wishlist: WishlistStore = Depends(get_wishlist),
):
    product = _fetch_product(catalog, slug)
    in_wishlist = ProductDetailSession(product, cart, wishlist).toggle_wishlist()
    return {"id": product.id, "in_wishlist": in_wishlist}


@recent_router.get("", response_model=List[str])
def recently_viewed_ids(
    exclude: Optional[str] = Query(None, description="Product id to leave out (the one on screen)"),
    limit: Optional[int] = Query(None, ge=1),
    recently_viewed: RecentlyViewed = Depends(get_recently_viewed),
):
    return recently_viewed.ids(exclude=exclude, max_items=limit)
