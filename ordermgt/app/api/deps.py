from __future__ import annotations

from fastapi import Request

from ordermgt.app.core.config import Settings
from ordermgt.app.services.order_store import OrderStore


def get_order_store(request: Request) -> OrderStore:
    """The store created with the app; see ordermgt.main.create_app."""
    return request.app.state.order_store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
