"""
storefront/services/cart_store.py
Client-side cart: line items keyed by a synthetic id, merged by (product, variant).

Behavior
- add_item merges into the existing line for the same productId + variant,
  otherwise appends a new line with a fresh uuid4 id.
- update_quantity with 0 or below removes the line.
- Every mutation writes the full line list under the `cart` key;
  clear_cart purges the key instead.
- Totals are recomputed on every read; money is summed as Decimal.

Notes
- The snapshot is read once, in the constructor. A missing or corrupt
  snapshot starts an empty cart.
- Input is not validated here (quantity/price are taken as given); the
  HTTP layer validates its own bodies.
- FastAPI runs sync endpoints in a threadpool, so every read and mutation
  holds the store's lock.
"""
import logging
import threading
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union
from uuid import uuid4

from pydantic import ValidationError

from storefront.core.observable import Observable
from storefront.core.storage import KeyValueStorage, read_json_list, write_json_list
from storefront.schemas.cart import CartItem, CartLine

logger = logging.getLogger("storefront.cart")

CART_KEY = "cart"


def _new_line_id() -> str:
    return uuid4().hex


def _money(value: float) -> Decimal:
    return Decimal(str(value))


class CartStore(Observable):
    def __init__(self, storage: KeyValueStorage, key: str = CART_KEY):
        super().__init__()
        self._storage = storage
        self._key = key
        self._lock = threading.RLock()
        self._lines: List[CartLine] = self._load()

    # ---------- persistence ----------
    def _load(self) -> List[CartLine]:
        data = read_json_list(self._storage, self._key)
        if data is None:
            return []
        try:
            return [CartLine.model_validate(row) for row in data]
        except ValidationError as exc:
            logger.warning("Discarding invalid %r snapshot: %s", self._key, exc)
            return []

    def _save(self) -> None:
        write_json_list(
            self._storage,
            self._key,
            [line.model_dump(by_alias=True, mode="json") for line in self._lines],
        )

    def _commit(self) -> None:
        self._save()
        self._notify()

    # ---------- queries ----------
    @property
    def items(self) -> List[CartLine]:
        with self._lock:
            return [line.model_copy() for line in self._lines]

    @property
    def total_items(self) -> int:
        with self._lock:
            return sum(line.quantity for line in self._lines)

    @property
    def total_price(self) -> float:
        with self._lock:
            total = sum((_money(line.price) * line.quantity for line in self._lines), Decimal("0"))
        return float(total)

    def get(self, line_id: str) -> Optional[CartLine]:
        with self._lock:
            for line in self._lines:
                if line.id == line_id:
                    return line.model_copy()
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    # ---------- mutations ----------
    def add_item(self, item: Union[CartItem, Dict[str, Any]]) -> CartLine:
        """Add a product+variant; returns the line that now holds it."""
        if not isinstance(item, CartItem):
            item = CartItem.model_validate(item)

        with self._lock:
            for line in self._lines:
                if line.product_id == item.product_id and line.variant == item.variant:
                    line.quantity += item.quantity
                    logger.debug("Merged %s x%s into line %s", item.product_id, item.quantity, line.id)
                    result = line
                    break
            else:
                result = CartLine(id=_new_line_id(), **item.model_dump(exclude={"id"}))
                self._lines.append(result)
                logger.debug("New cart line %s for %s (%s)", result.id, item.product_id, item.variant)

            self._commit()
            return result.model_copy()

    def remove_item(self, line_id: str) -> None:
        with self._lock:
            self._lines = [line for line in self._lines if line.id != line_id]
            self._commit()

    def remove_by_product_id(self, product_id: str) -> None:
        with self._lock:
            self._lines = [line for line in self._lines if line.product_id != product_id]
            self._commit()

    def update_quantity(self, line_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(line_id)
            return
        with self._lock:
            for line in self._lines:
                if line.id == line_id:
                    line.quantity = quantity
            self._commit()

    def clear_cart(self) -> None:
        with self._lock:
            self._lines = []
            self._storage.remove_item(self._key)
            self._notify()
