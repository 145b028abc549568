from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import ValidationError

from qrmenu.application.dto.cache import CachedCatalog
from qrmenu.application.mappers.catalog_mapper import from_cached_catalog, to_cached_catalog
from qrmenu.application.metrics.ordering import record_catalog_load, record_category_fallback
from qrmenu.application.ports.backend import BackendError, MenuBackend
from qrmenu.application.ports.cache import CacheStore
from qrmenu.domain.menu.catalog import CatalogSnapshot, sort_catalog
from qrmenu.domain.menu.category_index import CategoryDisplay, build_category_index
from qrmenu.domain.menu.entities import Category, MenuItem

logger = logging.getLogger(__name__)

CATALOG_CACHE_KEY = "catalog:v1"
CATALOG_LOAD_FAILED = "CATALOG_LOAD_FAILED"

# Row mapping errors a backend lets through are treated like an outage.
_LOAD_ERRORS = (BackendError, ArithmeticError, TypeError, ValueError)


class CategoryLoadFailedError(Exception):
    pass


class LoadCatalog:
    """Fetch items and categories and build a sorted catalog snapshot.

    An item fetch failure yields an empty snapshot carrying
    ``CATALOG_LOAD_FAILED``; a category failure falls back to categories
    derived from the items. Only complete loads are cached.
    """

    def __init__(
        self,
        backend: MenuBackend,
        cache: CacheStore,
        display: Mapping[str, CategoryDisplay],
        ttl_seconds: int = 300,
    ) -> None:
        self._backend = backend
        self._cache = cache
        self._display = display
        self._ttl_seconds = ttl_seconds

    def _cache_get(self) -> CachedCatalog | None:
        try:
            payload = self._cache.get(CATALOG_CACHE_KEY)
        except Exception:
            return None
        if not payload:
            return None
        try:
            return CachedCatalog.model_validate_json(payload)
        except ValidationError:
            return None

    def _cache_set(self, items: list[MenuItem], categories: list[Category]) -> None:
        try:
            self._cache.set(
                CATALOG_CACHE_KEY,
                to_cached_catalog(items, categories).model_dump_json(),
                ttl_seconds=self._ttl_seconds,
            )
        except Exception:
            return

    def _fetch_categories(self) -> list[Category]:
        try:
            return self._backend.fetch_categories()
        except _LOAD_ERRORS as exc:
            raise CategoryLoadFailedError(str(exc)) from exc

    def _build(self, items: list[MenuItem], categories: list[Category]) -> CatalogSnapshot:
        sorted_items = sort_catalog(items)
        entries, source = build_category_index(categories, sorted_items, self._display)
        return CatalogSnapshot(
            items=tuple(sorted_items),
            categories=entries,
            category_source=source,
        )

    def execute(self, use_cache: bool = True) -> CatalogSnapshot:
        if use_cache:
            cached = self._cache_get()
            if cached is not None:
                items, categories = from_cached_catalog(cached)
                snapshot = self._build(items, categories)
                record_catalog_load("cache", len(snapshot.items))
                return snapshot

        try:
            items = self._backend.fetch_items()
        except _LOAD_ERRORS:
            logger.exception("catalog_load_failed")
            record_catalog_load("failed", 0)
            return CatalogSnapshot(load_error=CATALOG_LOAD_FAILED)

        cacheable = True
        try:
            categories = self._fetch_categories()
        except CategoryLoadFailedError:
            logger.warning("category_load_failed_using_fallback", exc_info=True)
            record_category_fallback("error")
            categories = []
            cacheable = False
        else:
            if not categories:
                record_category_fallback("empty")

        snapshot = self._build(items, categories)
        if cacheable:
            self._cache_set(items, categories)
        record_catalog_load("backend", len(snapshot.items))
        logger.info(
            "catalog_loaded",
            extra={
                "item_count": len(snapshot.items),
                "category_count": len(snapshot.categories),
                "category_source": snapshot.category_source,
            },
        )
        return snapshot
