import json
import threading

from storefront.core.storage import MemoryStorage
from storefront.schemas.cart import CartItem
from storefront.services.cart_store import CART_KEY, CartStore


def _item(product_id="X", variant="iPhone 14", price=100.0, quantity=1, **extra):
    return CartItem(
        product_id=product_id, name=f"Product {product_id}", price=price,
        quantity=quantity, image="img.jpg", variant=variant, **extra,
    )


def test_same_product_and_variant_merges_into_one_line(cart):
    cart.add_item(_item())
    cart.add_item(_item())
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 2


def test_different_variants_are_separate_lines(cart):
    first = cart.add_item(_item(variant="iPhone 14"))
    second = cart.add_item(_item(variant="iPhone 15"))
    assert len(cart.items) == 2
    assert first.id != second.id


def test_add_item_accepts_wire_dict(cart):
    line = cart.add_item({
        "productId": "X", "name": "Skin", "price": 10, "quantity": 3,
        "image": "a.jpg", "variant": "M",
    })
    assert line.product_id == "X"
    assert cart.total_items == 3


def test_remove_by_product_id_removes_every_variant(cart):
    cart.add_item(_item(variant="iPhone 14"))
    cart.add_item(_item(variant="iPhone 15"))
    cart.add_item(_item(product_id="Y", variant="M"))
    cart.remove_by_product_id("X")
    assert [line.product_id for line in cart.items] == ["Y"]


def test_remove_item_removes_only_that_line(cart):
    a = cart.add_item(_item(variant="iPhone 14"))
    b = cart.add_item(_item(variant="iPhone 15"))
    cart.remove_item(a.id)
    assert [line.id for line in cart.items] == [b.id]


def test_remove_unknown_id_is_a_noop(cart):
    cart.add_item(_item())
    cart.remove_item("does-not-exist")
    assert len(cart.items) == 1


def test_update_quantity_zero_or_negative_removes_line(cart):
    a = cart.add_item(_item(variant="A"))
    b = cart.add_item(_item(variant="B"))
    cart.update_quantity(a.id, 0)
    cart.update_quantity(b.id, -5)
    assert cart.items == []


def test_update_quantity_sets_exact_value(cart):
    line = cart.add_item(_item(quantity=2))
    cart.update_quantity(line.id, 7)
    assert cart.get(line.id).quantity == 7


def test_totals(cart):
    cart.add_item(_item(product_id="A", price=100, quantity=2))
    cart.add_item(_item(product_id="B", price=50, quantity=3))
    assert cart.total_items == 5
    assert cart.total_price == 350


def test_empty_cart_totals(cart):
    assert cart.total_items == 0
    assert cart.total_price == 0


def test_snapshot_round_trip(storage):
    cart = CartStore(storage)
    a = cart.add_item(_item(variant="A", quantity=2))
    cart.add_item(_item(variant="B"))
    cart.add_item(_item(product_id="Y", variant="M", device_model="iPhone 14"))
    cart.update_quantity(a.id, 4)
    cart.remove_by_product_id("Y")

    restored = CartStore(storage)
    assert [l.model_dump() for l in restored.items] == [l.model_dump() for l in cart.items]


def test_snapshot_uses_camel_case_keys(cart, storage):
    cart.add_item(_item(device_model="iPhone 14"))
    saved = json.loads(storage.get_item(CART_KEY))
    assert saved[0]["productId"] == "X"
    assert saved[0]["deviceModel"] == "iPhone 14"
    assert set(saved[0]) >= {"id", "name", "price", "quantity", "image", "variant"}


def test_clear_cart_purges_snapshot(cart, storage):
    cart.add_item(_item())
    cart.clear_cart()
    assert cart.items == []
    assert CART_KEY not in storage


def test_corrupt_snapshot_starts_empty():
    for raw in ("{not json", '{"a": 1}', '[{"productId": "X"}]'):
        cart = CartStore(MemoryStorage({CART_KEY: raw}))
        assert cart.items == []


def test_ids_are_not_reused(cart):
    seen = set()
    for _ in range(50):
        line = cart.add_item(_item())
        cart.remove_item(line.id)
        assert line.id not in seen
        seen.add(line.id)


def test_listeners_run_after_each_mutation(cart):
    calls = []
    unsubscribe = cart.subscribe(lambda: calls.append(cart.total_items))
    line = cart.add_item(_item())
    cart.update_quantity(line.id, 3)
    cart.clear_cart()
    assert calls == [1, 3, 0]

    unsubscribe()
    cart.add_item(_item())
    assert calls == [1, 3, 0]


def test_failing_listener_does_not_break_mutation(cart):
    def boom():
        raise RuntimeError("listener bug")

    cart.subscribe(boom)
    cart.add_item(_item())
    assert cart.total_items == 1


def test_returned_lines_are_copies(cart):
    line = cart.add_item(_item())
    line.quantity = 99
    cart.items[0].quantity = 42
    assert cart.get(line.id).quantity == 1


def test_fractional_prices_total_exactly(cart):
    cart.add_item(_item(price=0.1, quantity=3))
    cart.add_item(_item(product_id="Y", price=0.2, quantity=1))
    assert cart.total_price == 0.5


def test_concurrent_adds_merge_without_losing_quantity(cart, storage):
    workers = 16
    start = threading.Barrier(workers)

    def add():
        start.wait()
        for _ in range(25):
            cart.add_item(_item())

    threads = [threading.Thread(target=add) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cart.items) == 1
    assert cart.items[0].quantity == workers * 25
    assert json.loads(storage.get_item(CART_KEY))[0]["quantity"] == workers * 25
