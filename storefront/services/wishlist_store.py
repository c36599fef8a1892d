"""
storefront/services/wishlist_store.py
Client-side wishlist: full product snapshots with set semantics on `_id`.

- add_to_wishlist on a product already present changes nothing: no write,
  no listener call.
- Rehydration replays every persisted entry through the add path, so a
  snapshot with duplicate ids collapses to one entry per id.
- Entries are deep copies going in and coming out; callers never share
  objects with the store. Reads and mutations hold the store lock.
"""
import logging
import threading
from typing import Any, Dict, List, Union

from pydantic import ValidationError

from storefront.core.observable import Observable
from storefront.core.storage import KeyValueStorage, read_json_list, write_json_list
from storefront.schemas.product import Product

logger = logging.getLogger("storefront.wishlist")

WISHLIST_KEY = "wishlist"


class WishlistStore(Observable):
    def __init__(self, storage: KeyValueStorage, key: str = WISHLIST_KEY):
        super().__init__()
        self._storage = storage
        self._key = key
        self._lock = threading.RLock()
        self._items: List[Product] = []
        self._rehydrate()

    def _rehydrate(self) -> None:
        data = read_json_list(self._storage, self._key)
        if data is None:
            return
        try:
            products = [Product.model_validate(row) for row in data]
        except ValidationError as exc:
            logger.warning("Discarding invalid %r snapshot: %s", self._key, exc)
            return
        for product in products:
            self._add(product)

    def _add(self, product: Product) -> bool:
        if self.is_in_wishlist(product.id):
            return False
        self._items.append(product.model_copy(deep=True))
        return True

    def _commit(self) -> None:
        write_json_list(self._storage, self._key, [p.snapshot() for p in self._items])
        self._notify()

    @property
    def items(self) -> List[Product]:
        with self._lock:
            return [p.model_copy(deep=True) for p in self._items]

    @property
    def wishlist_count(self) -> int:
        with self._lock:
            return len(self._items)

    def is_in_wishlist(self, product_id: str) -> bool:
        with self._lock:
            return any(p.id == product_id for p in self._items)

    def add_to_wishlist(self, product: Union[Product, Dict[str, Any]]) -> None:
        if not isinstance(product, Product):
            product = Product.model_validate(product)
        with self._lock:
            if self._add(product):
                logger.debug("Wishlisted %s", product.id)
                self._commit()

    def remove_from_wishlist(self, product_id: str) -> None:
        with self._lock:
            self._items = [p for p in self._items if p.id != product_id]
            self._commit()

    def toggle(self, product: Union[Product, Dict[str, Any]]) -> bool:
        """Add or remove; returns the new membership."""
        if not isinstance(product, Product):
            product = Product.model_validate(product)
        with self._lock:
            if self.is_in_wishlist(product.id):
                self.remove_from_wishlist(product.id)
                return False
            self.add_to_wishlist(product)
            return True
