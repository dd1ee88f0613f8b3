from __future__ import annotations

import threading

from ordermgt.app.models.order import Order, OrderChanges
from ordermgt.app.services.order_store import OrderStore


def test_get_missing_returns_none():
    store = OrderStore()
    assert store.get("x") is None
    assert len(store) == 0


def test_put_upserts():
    store = OrderStore()
    store.put("1", Order(id="1", name="a"))
    store.put("1", Order(id="1", name="b"))
    assert store.get("1").name == "b"
    assert len(store) == 1


def test_delete_absent_is_noop():
    store = OrderStore()
    store.delete("ghost")
    store.put("1", Order(id="1"))
    store.delete("1")
    store.delete("1")
    assert "1" not in store


def test_update_merges_name_and_description_only():
    store = OrderStore()
    store.put("1", Order(id="1", name="a", description="d"))
    merged = store.update("1", OrderChanges(id="zzz", name="b"))
    assert merged == Order(id="1", name="b", description="d")
    assert store.get("1") == merged


def test_update_absent_writes_nothing():
    store = OrderStore()
    assert store.update("1", OrderChanges(name="x")) is None
    assert "1" not in store


def test_stored_orders_are_not_mutated_by_update():
    store = OrderStore()
    store.put("1", Order(id="1", name="a", description="d"))
    before = store.get("1")
    store.update("1", OrderChanges(name="b", description="e"))
    assert before.name == "a" and before.description == "d"


def test_concurrent_updates_do_not_lose_writes():
    store = OrderStore()
    store.put("1", Order(id="1", name="start", description="start"))
    n_threads, per_thread = 8, 200
    barrier = threading.Barrier(n_threads)

    def worker(idx: int) -> None:
        barrier.wait()
        for i in range(per_thread):
            val = f"w{idx}-{i}"
            store.update("1", OrderChanges(name=val, description=val))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    final = store.get("1")
    assert final.id == "1"
    # both fields always come from the same write
    assert final.name == final.description
    assert final.name.endswith(f"-{per_thread - 1}")


def test_clear_empties_store():
    store = OrderStore()
    store.put("1", Order(id="1"))
    store.put("2", Order(id="2"))
    store.clear()
    assert len(store) == 0
