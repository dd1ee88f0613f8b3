from __future__ import annotations

from fastapi import APIRouter, Depends

from ordermgt.app.api.deps import get_app_settings, get_order_store
from ordermgt.app.core.config import Settings
from ordermgt.app.services.order_store import OrderStore

router = APIRouter(tags=["health"])


@router.get("/health")
def health(
    store: OrderStore = Depends(get_order_store),
    settings: Settings = Depends(get_app_settings),
):
    return {
        "status": "ok",
        "service": settings.service_name,
        "version": settings.version,
        "environment": settings.environment,
        "base_path": settings.base_path,
        "orders": len(store),
    }
