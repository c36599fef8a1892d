"""
# `storefront/routers/carts.py` — Cart endpoints

## Overview
HTTP view of the application's `CartStore`. Lines merge on
`productId + variant`; totals are computed on every read.

| Method | Path                             | Behaviour |
|--------|----------------------------------|-----------|
| GET    | `/cart`                          | Lines + `total_items` + `total_price` |
| GET    | `/cart/total`                    | Totals only |
| POST   | `/cart/items`                    | Add (merge) a line; 422 on empty variant or quantity < 1 |
| PATCH  | `/cart/items/{line_id}`          | Set quantity; `<= 0` removes the line |
| DELETE | `/cart/items/{line_id}`          | Remove one line (no-op if absent) |
| DELETE | `/cart/products/{product_id}`    | Remove every line of a product |
| DELETE | `/cart`                          | Clear and purge the snapshot (204) |
"""
from fastapi import APIRouter, Depends, HTTPException, status

from storefront.core.deps import get_cart
from storefront.schemas.cart import AddItemBody, CartLine, CartOut, QuantityBody
from storefront.services.cart_store import CartStore

router = APIRouter(prefix="/cart", tags=["Cart"])


def _cart_out(cart: CartStore) -> CartOut:
    return CartOut(items=cart.items, total_items=cart.total_items, total_price=cart.total_price)


@router.get("", response_model=CartOut, response_model_by_alias=True)
def read_cart(cart: CartStore = Depends(get_cart)):
    return _cart_out(cart)


@router.get("/total")
def cart_total(cart: CartStore = Depends(get_cart)):
    return {"total_items": cart.total_items, "total_price": cart.total_price}


@router.post("/items", response_model=CartLine, status_code=status.HTTP_201_CREATED)
def add_to_cart(payload: AddItemBody, cart: CartStore = Depends(get_cart)):
    """Add a product+variant; an existing identical line gets its quantity increased."""
    return cart.add_item(payload.to_item())


@router.patch("/items/{line_id}", response_model=CartOut)
def update_quantity(line_id: str, payload: QuantityBody, cart: CartStore = Depends(get_cart)):
    if payload.quantity > 0 and cart.get(line_id) is None:
        raise HTTPException(status_code=404, detail="Item not found in cart.")
    cart.update_quantity(line_id, payload.quantity)
    return _cart_out(cart)


@router.delete("/items/{line_id}", response_model=CartOut)
def remove_cart_item(line_id: str, cart: CartStore = Depends(get_cart)):
    cart.remove_item(line_id)
    return _cart_out(cart)


@router.delete("/products/{product_id}", response_model=CartOut)
def remove_product(product_id: str, cart: CartStore = Depends(get_cart)):
    """Remove every line for the product, whatever its variant."""
    cart.remove_by_product_id(product_id)
    return _cart_out(cart)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(cart: CartStore = Depends(get_cart)):
    cart.clear_cart()
