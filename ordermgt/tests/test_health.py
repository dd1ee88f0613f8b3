from fastapi.testclient import TestClient

from ordermgt.main import app, create_app

client = TestClient(app)


def test_health_ok():
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data.get("status") == "ok"
    assert data.get("base_path") == "/ordermgt"
    assert isinstance(data.get("orders"), int)


def test_health_counts_orders():
    c = TestClient(create_app())
    assert c.get("/health").json()["orders"] == 0
    c.post("/ordermgt/order", json={"Order": {"ID": "1"}})
    assert c.get("/health").json()["orders"] == 1


def test_root_lists_routes():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["tips"]["create"] == "POST /ordermgt/order"
