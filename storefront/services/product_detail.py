"""
storefront/services/product_detail.py
State behind a product detail view: quantity, variant selector, and the
add-to-cart / wishlist actions.

A session lives as long as the view shows one product; a new product
gets a new session (and a fresh selector).
"""
import logging
from typing import Optional

from storefront.schemas.cart import CartItem, CartLine
from storefront.schemas.product import Product
from storefront.services.cart_store import CartStore
from storefront.services.recently_viewed import RecentlyViewed
from storefront.services.variant_composer import (
    OnChange,
    VariantComposer,
    VariantSelector,
    require_variant,
    selector_for_product,
)
from storefront.services.wishlist_store import WishlistStore

logger = logging.getLogger("storefront.product_detail")

MIN_QUANTITY = 1
MAX_QUANTITY = 99


class ProductUnavailable(ValueError):
    """Add-to-cart attempted on a product that is not in stock. Message is user-facing."""


class ProductDetailSession:
    def __init__(
        self,
        product: Product,
        cart: CartStore,
        wishlist: WishlistStore,
        recently_viewed: Optional[RecentlyViewed] = None,
        on_variant_change: Optional[OnChange] = None,
    ):
        self.product = product
        self.cart = cart
        self.wishlist = wishlist
        self.selector: VariantSelector = selector_for_product(product, on_change=on_variant_change)
        self._quantity = MIN_QUANTITY
        if recently_viewed is not None:
            recently_viewed.record(product.id)

    @property
    def quantity(self) -> int:
        return self._quantity

    @quantity.setter
    def quantity(self, value: int) -> None:
        self._quantity = min(max(int(value), MIN_QUANTITY), MAX_QUANTITY)

    def increment(self) -> None:
        self.quantity = self._quantity + 1

    def decrement(self) -> None:
        self.quantity = self._quantity - 1

    def select(
        self,
        brand: Optional[str] = None,
        model: Optional[str] = None,
        logo_option: Optional[str] = None,
        coverage_option: Optional[str] = None,
        option: Optional[str] = None,
    ) -> Optional[str]:
        """Apply a whole selection in step order; returns the resulting variant (or None)."""
        if isinstance(self.selector, VariantComposer):
            if brand:
                self.selector.choose_brand(brand)
            if model:
                self.selector.choose_model(model)
            if logo_option:
                self.selector.choose_logo_option(logo_option)
            if coverage_option:
                self.selector.choose_coverage_option(coverage_option)
        elif option:
            self.selector.choose(option)
        return self.selector.variant

    @property
    def is_in_stock(self) -> bool:
        return self.product.stock_status == "In Stock"

    @property
    def is_wishlisted(self) -> bool:
        return self.wishlist.is_in_wishlist(self.product.id)

    def add_to_cart(self) -> CartLine:
        """
        Raises ProductUnavailable when the product is out of stock and
        VariantSelectionError while the selection is incomplete; the cart
        is untouched in both cases.
        """
        if not self.is_in_stock:
            raise ProductUnavailable("This product is out of stock")
        variant = require_variant(self.selector)
        device_model = self.selector.model if isinstance(self.selector, VariantComposer) else None
        line = self.cart.add_item(
            CartItem(
                product_id=self.product.id,
                name=self.product.title,
                price=self.product.price,
                quantity=self._quantity,
                image=self.product.main_image,
                variant=variant,
                device_model=device_model,
            )
        )
        logger.info("Added %s %s (%s) to cart", self._quantity, self.product.title, variant)
        return line

    def toggle_wishlist(self) -> bool:
        return self.wishlist.toggle(self.product)
