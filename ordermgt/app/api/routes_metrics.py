from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from ordermgt.app.api.deps import get_order_store
from ordermgt.app.core.metrics import REGISTRY, orders_stored
from ordermgt.app.services.order_store import OrderStore

router = APIRouter(tags=["metrics"])

PROMETHEUS_MEDIA_TYPE = "text/plain; version=0.0.4; charset=utf-8"


@router.get("/metrics")
def metrics(store: OrderStore = Depends(get_order_store)) -> Response:
    """Prometheus text exposition of the in-process registry."""
    # sampled from this app's store at scrape time
    orders_stored.set(len(store))
    return Response(content=REGISTRY.render_prometheus(), media_type=PROMETHEUS_MEDIA_TYPE)
