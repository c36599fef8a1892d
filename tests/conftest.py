from typing import Any, Dict, Optional

import pytest
import requests
from fastapi.testclient import TestClient

from storefront.config import Settings
from storefront.core.storage import MemoryStorage
from storefront.integrations.catalog import CatalogClient
from storefront.main import create_app
from storefront.schemas.product import Product
from storefront.services.cart_store import CartStore
from storefront.services.wishlist_store import WishlistStore

API = "http://catalog.test"


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Routes GET urls to canned responses; unknown urls answer 404."""

    def __init__(self, routes: Optional[Dict[str, FakeResponse]] = None):
        self.routes = routes or {}
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        resp = self.routes.get(url)
        if isinstance(resp, Exception):
            raise resp
        return resp or FakeResponse(404, {"success": False, "message": "Product not found"})


def ok(data: Any) -> FakeResponse:
    return FakeResponse(200, {"success": True, "data": data})


@pytest.fixture
def skin_doc() -> Dict[str, Any]:
    return {
        "_id": "p-skin",
        "title": "Carbon Black Skin",
        "slug": "carbon-black-skin",
        "price": 499,
        "images": ["https://cdn.test/skin-1.jpg", "https://cdn.test/skin-2.jpg"],
        "categoryId": {"_id": "c1", "name": "Phone Skins", "imageUrl": "https://cdn.test/c1.jpg"},
        "variants": {"type": "mobileModel", "options": ["Apple iPhone", "Samsung"]},
        "stockStatus": "In Stock",
    }


@pytest.fixture
def tee_doc() -> Dict[str, Any]:
    return {
        "_id": "p-tee",
        "title": "Oversized Tee",
        "slug": "oversized-tee",
        "price": 799,
        "images": ["https://cdn.test/tee.jpg"],
        "categoryId": "c2",
        "variants": {"type": "clothingSize", "options": ["S", "M", "L"]},
    }


@pytest.fixture
def skin(skin_doc) -> Product:
    return Product.model_validate(skin_doc)


@pytest.fixture
def tee(tee_doc) -> Product:
    return Product.model_validate(tee_doc)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def cart(storage) -> CartStore:
    return CartStore(storage)


@pytest.fixture
def wishlist(storage) -> WishlistStore:
    return WishlistStore(storage)


@pytest.fixture
def catalog_session(skin_doc, tee_doc) -> FakeSession:
    review = {
        "_id": "r1", "productId": "p-skin", "reviewerName": "Asha",
        "rating": 5, "comment": "Fits perfectly", "images": [],
    }
    return FakeSession({
        f"{API}/api/products/slug/carbon-black-skin": ok(skin_doc),
        f"{API}/api/products/slug/oversized-tee": ok(tee_doc),
        f"{API}/api/products/slug/sold-out-tee": ok(
            dict(tee_doc, _id="p-sold-out", slug="sold-out-tee", stockStatus="Out of Stock")
        ),
        f"{API}/api/products/slug/no-id": ok({"title": "Record without an id", "price": 10}),
        f"{API}/api/products/p-skin": ok(skin_doc),
        f"{API}/api/products/related/p-skin": ok([tee_doc]),
        f"{API}/api/reviews/product/p-skin": ok([review, dict(review, _id="r2", rating=3)]),
        f"{API}/api/reviews/product/p-tee": ok([]),
    })


@pytest.fixture
def client(storage, catalog_session) -> TestClient:
    app = create_app(
        settings=Settings(storefront_api_url=API),
        storage=storage,
        catalog=CatalogClient(API, session=catalog_session),
    )
    return TestClient(app)
