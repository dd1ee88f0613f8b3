# ordermgt/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ordermgt.app.core.logging import setup_logging
from ordermgt.app.core.config import Settings, get_settings

from ordermgt.app.api.routes_health import router as health_router
from ordermgt.app.api.routes_metrics import router as metrics_router
from ordermgt.app.api.routes_orders import build_orders_router
from ordermgt.app.services.order_store import OrderStore

log = logging.getLogger("ordermgt")


def create_app(settings: Optional[Settings] = None, store: Optional[OrderStore] = None) -> FastAPI:
    settings = settings or get_settings()
    # Initialize logging early so all imports use correct handlers/levels
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info(
            "%s %s starting (env=%s, base_path=%s)",
            settings.service_name, settings.version, settings.environment, settings.base_path,
        )
        yield
        log.info("%s shutting down; dropping %d order(s)", settings.service_name, len(app.state.order_store))
        app.state.order_store.clear()

    app = FastAPI(
        title=settings.service_name,
        version=settings.version,
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.order_store = store if store is not None else OrderStore()

    # --- Global JSON error handler: unexpected errors become a generic 500; details stay in the log ---
    @app.exception_handler(Exception)
    async def _unhandled_exc_to_json(request: Request, exc: Exception):
        log.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "detail": "internal server error",
                "path": str(request.url),
                "method": request.method,
            },
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins or ["*"],
        allow_credentials=True,
        allow_methods=settings.cors_allow_methods or ["*"],
        allow_headers=settings.cors_allow_headers or ["*"],
    )

    # Routes
    app.include_router(build_orders_router(settings.base_path))
    app.include_router(health_router)
    app.include_router(metrics_router)

    # Friendly root
    @app.get("/")
    def root():
        base = settings.base_path
        return {
            "service": settings.service_name,
            "version": settings.version,
            "environment": settings.environment,
            "docs": "/docs",
            "openapi": "/openapi.json",
            "tips": {
                "create": f"POST {base}/order",
                "retrieve": f"GET {base}/order/<id>",
                "update": f"PUT {base}/order/<id>",
                "delete": f"DELETE {base}/order/<id>",
                "health": "/health",
                "metrics": "/metrics",
            },
        }

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured host/port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


app = create_app()


if __name__ == "__main__":
    run()
