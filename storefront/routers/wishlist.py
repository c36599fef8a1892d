# storefront/routers/wishlist.py — Wishlist endpoints (set semantics on product _id)

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from storefront.core.deps import get_wishlist
from storefront.schemas.product import Product
from storefront.services.wishlist_store import WishlistStore

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


def _wishlist_out(wishlist: WishlistStore) -> Dict[str, Any]:
    return {
        "items": [p.snapshot() for p in wishlist.items],
        "wishlist_count": wishlist.wishlist_count,
    }


@router.get("")
def get_wishlist_items(wishlist: WishlistStore = Depends(get_wishlist)):
    return _wishlist_out(wishlist)


@router.post("", status_code=status.HTTP_201_CREATED)
def add_to_wishlist(payload: Dict[str, Any], wishlist: WishlistStore = Depends(get_wishlist)):
    """Body is the full product record; adding one already present changes nothing."""
    try:
        product = Product.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    wishlist.add_to_wishlist(product)
    return _wishlist_out(wishlist)


@router.get("/{product_id}")
def is_in_wishlist(product_id: str, wishlist: WishlistStore = Depends(get_wishlist)):
    return {"id": product_id, "in_wishlist": wishlist.is_in_wishlist(product_id)}


@router.delete("/{product_id}")
def remove_from_wishlist(product_id: str, wishlist: WishlistStore = Depends(get_wishlist)):
    wishlist.remove_from_wishlist(product_id)
    return _wishlist_out(wishlist)
