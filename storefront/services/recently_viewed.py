# storefront/services/recently_viewed.py
import logging
from typing import List, Optional

from storefront.core.storage import KeyValueStorage, read_json_list, write_json_list

logger = logging.getLogger("storefront.recently_viewed")

RECENTLY_VIEWED_KEY = "recentlyViewed"
DEFAULT_LIMIT = 8


class RecentlyViewed:
    """Product ids, most recent first, capped at `limit`."""

    def __init__(self, storage: KeyValueStorage, limit: int = DEFAULT_LIMIT, key: str = RECENTLY_VIEWED_KEY):
        self._storage = storage
        self._key = key
        self.limit = limit

    def _read(self) -> List[str]:
        data = read_json_list(self._storage, self._key) or []
        return [str(pid) for pid in data if isinstance(pid, str) and pid]

    def record(self, product_id: str) -> List[str]:
        ids = [pid for pid in self._read() if pid != product_id]
        ids.insert(0, product_id)
        ids = ids[: self.limit]
        write_json_list(self._storage, self._key, ids)
        return ids

    def ids(self, exclude: Optional[str] = None, max_items: Optional[int] = None) -> List[str]:
        ids = [pid for pid in self._read() if pid != exclude]
        if max_items is not None:
            ids = ids[:max_items]
        return ids
