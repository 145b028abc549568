from __future__ import annotations

import threading
from collections.abc import Mapping

from fastapi import Request

from qrmenu.application.ports.backend import MenuBackend
from qrmenu.application.ports.cache import CacheStore
from qrmenu.application.session.registry import SessionRegistry
from qrmenu.application.use_cases.load_catalog import LoadCatalog
from qrmenu.application.use_cases.open_session import OpenSession
from qrmenu.application.use_cases.submit_order import SubmitOrder
from qrmenu.domain.menu.catalog import CatalogSnapshot, CatalogStore
from qrmenu.domain.menu.category_index import CategoryDisplay


class OrderingServices:
    """Process-wide state shared by all requests: backend, catalog and sessions.

    The catalog is loaded on first use. A load that failed is retried by
    the next caller, the way reloading the page would.
    """

    def __init__(
        self,
        backend: MenuBackend,
        cache: CacheStore,
        display: Mapping[str, CategoryDisplay],
        max_tables: int,
        catalog_ttl_seconds: int = 300,
        session_idle_ttl_seconds: int = 3600,
    ) -> None:
        self.backend = backend
        self.cache = cache
        self.display = display
        self.max_tables = max_tables
        self.catalog = CatalogStore()
        self.sessions = SessionRegistry(idle_ttl_seconds=session_idle_ttl_seconds)
        self._catalog_ttl_seconds = catalog_ttl_seconds
        self._catalog_loaded = False
        self._catalog_lock = threading.Lock()

    def _load_catalog(self, use_cache: bool) -> CatalogSnapshot:
        snapshot = LoadCatalog(
            backend=self.backend,
            cache=self.cache,
            display=self.display,
            ttl_seconds=self._catalog_ttl_seconds,
        ).execute(use_cache=use_cache)
        self.catalog.replace(snapshot)
        self._catalog_loaded = snapshot.load_error is None
        return snapshot

    def ensure_catalog(self) -> CatalogStore:
        if self._catalog_loaded:
            return self.catalog
        with self._catalog_lock:
            if not self._catalog_loaded:
                self._load_catalog(use_cache=True)
        return self.catalog

    def refresh_catalog(self) -> CatalogSnapshot:
        with self._catalog_lock:
            return self._load_catalog(use_cache=False)

    def open_session_use_case(self) -> OpenSession:
        return OpenSession(
            registry=self.sessions,
            catalog=self.ensure_catalog(),
            max_tables=self.max_tables,
        )

    def submit_order_use_case(self) -> SubmitOrder:
        return SubmitOrder(backend=self.backend)


def get_services(request: Request) -> OrderingServices:
    return request.app.state.services
