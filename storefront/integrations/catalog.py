"""
# `storefront/integrations/catalog.py` — Catalog REST client

Read-only access to the storefront API. Every response uses the envelope
`{"success": bool, "data": ..., "message"?: str}`.

| Method                  | Endpoint                              |
|-------------------------|---------------------------------------|
| `list_products`         | `GET /api/products[?categoryId=]`     |
| `get_product`           | `GET /api/products/{id}`              |
| `get_product_by_slug`   | `GET /api/products/slug/{slug}`       |
| `get_related_products`  | `GET /api/products/related/{id}`      |
| `get_reviews`           | `GET /api/reviews/product/{id}`       |
| `get_review_stats`      | `GET /api/reviews/stats/{id}`         |

404 raises `ProductNotFound`; anything else that goes wrong, including a
record that does not fit the schema, raises `CatalogError`. No write
endpoint is ever called.
"""
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from storefront.schemas.product import Product
from storefront.schemas.review import Review, ReviewStats

logger = logging.getLogger("storefront.catalog")

M = TypeVar("M", bound=BaseModel)


class CatalogError(Exception):
    """The catalog API could not be reached or answered with an error."""


class ProductNotFound(CatalogError):
    pass


class CatalogClient:
    def __init__(self, base_url: str, timeout: float = 5, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}/api{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Catalog request failed: %s %s", url, e)
            raise CatalogError(f"Catalog unreachable: {e}") from e

        if resp.status_code == 404:
            raise ProductNotFound(f"Not found: {path}")
        try:
            resp.raise_for_status()
            body = resp.json()
        except (requests.HTTPError, ValueError) as e:
            logger.warning("Catalog error: %s %s", resp.status_code, resp.text)
            raise CatalogError(f"Catalog error for {path}: {e}") from e

        if isinstance(body, dict) and "data" in body:
            if body.get("success") is False:
                raise CatalogError(body.get("message") or f"Catalog refused {path}")
            return body["data"]
        return body

    def _parse(self, model: Type[M], data: Any, path: str) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning("Catalog sent an invalid %s from %s: %s", model.__name__, path, e)
            raise CatalogError(f"Invalid {model.__name__} from {path}") from e

    def _parse_list(self, model: Type[M], data: Any, path: str) -> List[M]:
        if not isinstance(data, list):
            raise CatalogError(f"Expected a list from {path}")
        return [self._parse(model, row, path) for row in data]

    def list_products(self, category_id: Optional[str] = None) -> List[Product]:
        params = {"categoryId": category_id} if category_id else None
        return self._parse_list(Product, self._get("/products", params=params) or [], "/products")

    def get_product(self, product_id: str) -> Product:
        path = f"/products/{product_id}"
        return self._parse(Product, self._get(path), path)

    def get_product_by_slug(self, slug: str) -> Product:
        path = f"/products/slug/{slug}"
        return self._parse(Product, self._get(path), path)

    def get_related_products(self, product_id: str) -> List[Product]:
        path = f"/products/related/{product_id}"
        return self._parse_list(Product, self._get(path) or [], path)

    def get_reviews(self, product_id: str) -> List[Review]:
        path = f"/reviews/product/{product_id}"
        return self._parse_list(Review, self._get(path) or [], path)

    def get_review_stats(self, product_id: str) -> ReviewStats:
        path = f"/reviews/stats/{product_id}"
        return self._parse(ReviewStats, self._get(path) or {}, path)
