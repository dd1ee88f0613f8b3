# ordermgt/app/api/routes_orders.py
from __future__ import annotations

import logging
from typing import Callable, List, Tuple
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, Response

from ordermgt.app.api.deps import get_order_store, get_app_settings
from ordermgt.app.api.responses import build_response
from ordermgt.app.core.config import Settings
from ordermgt.app.core.metrics import order_op_duration, order_ops
from ordermgt.app.services.codec import MalformedPayload, decode_order
from ordermgt.app.services.order_store import OrderStore

log = logging.getLogger(__name__)

ORDER_CREATED = "Order Created."


def not_found_message(order_id: str) -> str:
    return f"Order : {order_id} cannot be found."


def removed_message(order_id: str) -> str:
    return f"Order : {order_id} removed."


def order_location(request: Request, settings: Settings, order_id: str) -> str:
    """<base-url>/order/<id>, preferring the configured public base URL."""
    base = settings.public_base_url or (str(request.base_url).rstrip("/") + settings.base_path)
    return f"{base}/order/{quote(order_id, safe='')}"


def _malformed(op: str, exc: MalformedPayload) -> Response:
    log.info("%s rejected: %s", op, exc)
    order_ops.inc({"op": op, "result": "malformed"})
    return build_response(400, {"detail": str(exc)})


def _not_found(op: str, order_id: str, settings: Settings) -> Response:
    order_ops.inc({"op": op, "result": "not_found"})
    return build_response(settings.not_found_status, not_found_message(order_id))


# -----------------------------------------------------------------------------
# Handlers
# -----------------------------------------------------------------------------

async def create_order(
    request: Request,
    store: OrderStore = Depends(get_order_store),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """Create (or overwrite) an order from {"Order": {"ID", "Name", "Description"}}."""
    stop = order_op_duration.timer({"op": "create"})
    try:
        try:
            payload = decode_order(await request.body(), require_id=True)
        except MalformedPayload as e:
            return _malformed("create", e)

        order = payload.to_order()
        store.put(order.id, order)
        order_ops.inc({"op": "create", "result": "ok"})
        log.info("order %s created", order.id)
        return build_response(
            201,
            {"status": ORDER_CREATED, "orderId": order.id},
            headers={"Location": order_location(request, settings, order.id)},
        )
    finally:
        stop()


async def retrieve_order(
    order_id: str,
    store: OrderStore = Depends(get_order_store),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    stop = order_op_duration.timer({"op": "retrieve"})
    try:
        order = store.get(order_id)
        if order is None:
            return _not_found("retrieve", order_id, settings)
        order_ops.inc({"op": "retrieve", "result": "ok"})
        return build_response(200, order)
    finally:
        stop()


async def update_order(
    order_id: str,
    request: Request,
    store: OrderStore = Depends(get_order_store),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """Replace Name/Description of an existing order. The ID in the path wins; a body ID is ignored."""
    stop = order_op_duration.timer({"op": "update"})
    try:
        try:
            changes = decode_order(await request.body(), require_id=False)
        except MalformedPayload as e:
            return _malformed("update", e)

        merged = store.update(order_id, changes)
        if merged is None:
            return _not_found("update", order_id, settings)
        order_ops.inc({"op": "update", "result": "ok"})
        log.info("order %s updated", order_id)
        return build_response(200, merged)
    finally:
        stop()


async def delete_order(
    order_id: str,
    store: OrderStore = Depends(get_order_store),
) -> Response:
    stop = order_op_duration.timer({"op": "delete"})
    try:
        store.delete(order_id)
        order_ops.inc({"op": "delete", "result": "ok"})
        log.info("order %s removed", order_id)
        return build_response(200, removed_message(order_id))
    finally:
        stop()


# -----------------------------------------------------------------------------
# Route table
# -----------------------------------------------------------------------------

Route = Tuple[str, str, Callable[..., object], str]

ROUTES: List[Route] = [
    ("POST", "/order", create_order, "create_order"),
    ("GET", "/order/{order_id}", retrieve_order, "retrieve_order"),
    ("PUT", "/order/{order_id}", update_order, "update_order"),
    ("DELETE", "/order/{order_id}", delete_order, "delete_order"),
]


def build_orders_router(base_path: str) -> APIRouter:
    router = APIRouter(prefix=base_path, tags=["orders"])
    for method, path, endpoint, name in ROUTES:
        router.add_api_route(path, endpoint, methods=[method], name=name)
    return router
