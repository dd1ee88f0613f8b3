# ordermgt/app/services/codec.py
from __future__ import annotations

import json
from typing import Any, Union

from pydantic import BaseModel, ValidationError

from ordermgt.app.models.order import Order, OrderChanges, OrderRequest


class MalformedPayload(ValueError):
    """Request body is not JSON or does not carry a usable Order object."""


def _first_error(exc: ValidationError) -> str:
    errs = exc.errors()
    if not errs:
        return "invalid order payload"
    err = errs[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    return f"{loc}: {err.get('msg', 'invalid value')}" if loc else err.get("msg", "invalid value")


def decode_order(raw: bytes, *, require_id: bool = True) -> OrderChanges:
    """
    Parse a request body of the shape {"Order": {"ID", "Name", "Description"}}.

    Raises MalformedPayload when:
      - the body is empty, not UTF-8 or not JSON
      - the top level is not an object / lacks an "Order" object
      - Name/Description are present but not strings
      - require_id is set and Order.ID is missing or not a string

    Without require_id, an Order.ID in the body is dropped unchecked.
    """
    if not raw or not raw.strip():
        raise MalformedPayload("request body is empty")
    try:
        data = json.loads(raw)
    # ValueError covers bad UTF-8, bad JSON and over-long integer literals
    except (ValueError, RecursionError) as e:
        raise MalformedPayload(f"request body is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedPayload("request body must be a JSON object")
    if not isinstance(data.get("Order"), dict):
        raise MalformedPayload("Order object is required")
    if not require_id:
        data = {"Order": {k: v for k, v in data["Order"].items() if k != "ID"}}

    try:
        req = OrderRequest.model_validate(data)
    except ValidationError as e:
        raise MalformedPayload(_first_error(e)) from e

    if require_id and not req.order.id:
        raise MalformedPayload("Order.ID is required")
    return req.order


def encode(value: Union[Order, BaseModel, dict, list, str, None]) -> bytes:
    """
    Serialize a response body to compact UTF-8 JSON.
    Orders are wrapped in their {"Order": {...}} envelope; plain strings
    are emitted as JSON string literals, not objects.
    """
    payload: Any
    if isinstance(value, Order):
        payload = value.to_wire()
    elif isinstance(value, BaseModel):
        payload = value.model_dump(by_alias=True)
    else:
        payload = value
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
