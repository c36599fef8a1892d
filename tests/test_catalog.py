import pytest
import requests

from conftest import API, FakeResponse, FakeSession, ok
from storefront.integrations.catalog import CatalogClient, CatalogError, ProductNotFound
from storefront.schemas.review import Review
from storefront.services.reviews import summarize_reviews


def test_get_product_by_slug(catalog_session):
    client = CatalogClient(API + "/", timeout=3, session=catalog_session)
    product = client.get_product_by_slug("carbon-black-skin")
    assert product.id == "p-skin"
    assert product.is_device_skin
    assert product.category_id.name == "Phone Skins"
    assert catalog_session.calls[-1] == (f"{API}/api/products/slug/carbon-black-skin", None, 3)


def test_get_product_by_id(catalog_session):
    product = CatalogClient(API, session=catalog_session).get_product("p-skin")
    assert product.main_image == "https://cdn.test/skin-1.jpg"


def test_missing_product_raises_not_found(catalog_session):
    with pytest.raises(ProductNotFound):
        CatalogClient(API, session=catalog_session).get_product("nope")


def test_list_products_passes_category_filter(tee_doc):
    session = FakeSession({f"{API}/api/products": ok([tee_doc])})
    products = CatalogClient(API, session=session).list_products(category_id="c2")
    assert [p.slug for p in products] == ["oversized-tee"]
    assert session.calls[0][1] == {"categoryId": "c2"}


def test_network_and_server_errors_become_catalog_errors():
    session = FakeSession({
        f"{API}/api/products/a": requests.ConnectionError("refused"),
        f"{API}/api/products/b": FakeResponse(500, text="boom"),
        f"{API}/api/products/c": FakeResponse(200, {"success": False, "data": None, "message": "down"}),
    })
    client = CatalogClient(API, session=session)
    for pid in ("a", "b", "c"):
        with pytest.raises(CatalogError):
            client.get_product(pid)


def test_reviews_and_stats(catalog_session):
    client = CatalogClient(API, session=catalog_session)
    reviews = client.get_reviews("p-skin")
    assert [r.rating for r in reviews] == [5, 3]

    stats = summarize_reviews(reviews)
    assert stats.total_reviews == 2
    assert stats.rating_counts == {5: 1, 3: 1}
    assert stats.average_rating == 4


def test_review_stats_endpoint():
    session = FakeSession({
        f"{API}/api/reviews/stats/p1": ok({"totalReviews": 3, "ratingCounts": {"5": 2, "4": 1}, "averageRating": 4.67}),
    })
    stats = CatalogClient(API, session=session).get_review_stats("p1")
    assert stats.total_reviews == 3
    assert stats.rating_counts == {5: 2, 4: 1}


def test_summarize_no_reviews():
    stats = summarize_reviews([])
    assert stats.total_reviews == 0
    assert stats.average_rating == 0


def test_summarize_orders_counts_by_rating():
    reviews = [
        Review.model_validate({"_id": str(i), "productId": "p", "reviewerName": "n", "rating": r})
        for i, r in enumerate([1, 5, 5, 3])
    ]
    assert list(summarize_reviews(reviews).rating_counts) == [5, 3, 1]


def test_related_products(catalog_session):
    related = CatalogClient(API, session=catalog_session).get_related_products("p-skin")
    assert [p.id for p in related] == ["p-tee"]


def test_records_that_do_not_fit_the_schema_become_catalog_errors(tee_doc):
    session = FakeSession({
        f"{API}/api/products/p1": ok({"title": "no id"}),
        f"{API}/api/products": ok([tee_doc, {"_id": "p2"}]),
        f"{API}/api/products/related/p1": ok({"_id": "p3", "title": "not a list"}),
        f"{API}/api/reviews/product/p1": ok([{"_id": "r1", "rating": 9}]),
    })
    client = CatalogClient(API, session=session)
    with pytest.raises(CatalogError):
        client.get_product("p1")
    with pytest.raises(CatalogError):
        client.list_products()
    with pytest.raises(CatalogError):
        client.get_related_products("p1")
    with pytest.raises(CatalogError):
        client.get_reviews("p1")
