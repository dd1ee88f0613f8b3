from fastapi.testclient import TestClient

from ordermgt.app.core.metrics import MetricsRegistry, order_ops
from ordermgt.main import create_app


def test_order_ops_are_counted_and_exposed():
    client = TestClient(create_app())
    before = order_ops.value({"op": "create", "result": "ok"})
    missing_before = order_ops.value({"op": "retrieve", "result": "not_found"})

    client.post("/ordermgt/order", json={"Order": {"ID": "m1"}})
    client.get("/ordermgt/order/nope")

    assert order_ops.value({"op": "create", "result": "ok"}) == before + 1
    assert order_ops.value({"op": "retrieve", "result": "not_found"}) == missing_before + 1

    r = client.get("/metrics")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert 'ordermgt_order_ops_total{op="create",result="ok"}' in r.text
    assert "ordermgt_order_op_duration_seconds_count" in r.text


def test_histogram_buckets_are_cumulative():
    reg = MetricsRegistry()
    h = reg.histogram("t_seconds", "test", buckets=[0.1, 1])
    h.observe(0.05)
    h.observe(0.5)
    h.observe(5)
    text = reg.render_prometheus()
    assert 't_seconds_bucket{le="0.1"} 1.0' in text
    assert 't_seconds_bucket{le="1"} 2.0' in text
    assert 't_seconds_bucket{le="+Inf"} 3.0' in text
    assert "t_seconds_count 3.0" in text


def test_stored_gauge_reflects_the_scraped_app():
    busy = TestClient(create_app())
    idle = TestClient(create_app())
    busy.post("/ordermgt/order", json={"Order": {"ID": "g1"}})
    busy.post("/ordermgt/order", json={"Order": {"ID": "g2"}})

    assert "ordermgt_orders_stored 2" in busy.get("/metrics").text
    assert "ordermgt_orders_stored 0" in idle.get("/metrics").text
