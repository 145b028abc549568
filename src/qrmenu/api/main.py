from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qrmenu.api.error_handling import register_exception_handlers
from qrmenu.api.middleware.request_context import REQUEST_ID_HEADER, RequestContextMiddleware
from qrmenu.api.routes.health import router as health_router
from qrmenu.api.routes.menu import router as menu_router
from qrmenu.api.routes.metrics import router as metrics_router
from qrmenu.api.routes.orders import router as orders_router
from qrmenu.api.routes.sessions import router as sessions_router
from qrmenu.api.services import OrderingServices
from qrmenu.application.display import load_category_display
from qrmenu.application.ports.backend import MenuBackend
from qrmenu.application.ports.cache import CacheStore
from qrmenu.infrastructure.backends import build_menu_backend
from qrmenu.infrastructure.cache.redis_cache import RedisCacheStore
from qrmenu.infrastructure.observability.logging_config import configure_logging
from qrmenu.infrastructure.observability.otel import configure_otel
from qrmenu.infrastructure.settings import (
    catalog_cache_ttl_seconds,
    category_display_file,
    cors_allow_origins,
    max_table_count,
    session_idle_ttl_seconds,
)


def build_services(
    backend: MenuBackend | None = None,
    cache: CacheStore | None = None,
) -> OrderingServices:
    return OrderingServices(
        backend=backend or build_menu_backend(),
        cache=cache or RedisCacheStore(),
        display=load_category_display(category_display_file()),
        max_tables=max_table_count(),
        catalog_ttl_seconds=catalog_cache_ttl_seconds(),
        session_idle_ttl_seconds=session_idle_ttl_seconds(),
    )


def create_app(
    backend: MenuBackend | None = None,
    cache: CacheStore | None = None,
) -> FastAPI:
    """Build the ordering API. Tests pass their own backend and cache."""
    configure_logging()

    app = FastAPI(title="QR Menu Ordering", version="0.1.0")
    app.state.services = build_services(backend=backend, cache=cache)

    register_exception_handlers(app)
    for router in (health_router, metrics_router, menu_router, sessions_router, orders_router):
        app.include_router(router)

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
        expose_headers=["ETag", REQUEST_ID_HEADER],
    )

    configure_otel(app)
    return app


app = create_app()
