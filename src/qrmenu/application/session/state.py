from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from qrmenu.domain.cart.selection import CartLine, SelectionCart, SelectionChanged
from qrmenu.domain.common.ids import SessionId
from qrmenu.domain.menu.catalog import CatalogStore
from qrmenu.domain.menu.entities import MenuItem
from qrmenu.domain.menu.view import ALL_CATEGORIES, project_items
from qrmenu.domain.table.entities import TableContext


class SubmissionInProgressError(Exception):
    pass


class OrderingSession:
    """State of one opened menu page.

    The cart, active view and table context are only changed through the
    methods below. ``revision`` grows with every visible change, including
    catalog refreshes, so it can back an ETag.
    """

    def __init__(
        self,
        session_id: SessionId,
        catalog: CatalogStore,
        table: TableContext,
        now: datetime,
    ) -> None:
        self.session_id = session_id
        self.catalog = catalog
        self.table = table
        self.cart = SelectionCart(lookup=catalog.find)
        self.active_category = ALL_CATEGORIES
        self.search: str | None = None
        self.opened_at = now
        self.last_seen_at = now
        self._changes = 0
        self._lock = threading.RLock()
        self._submission_lock = threading.Lock()
        self.cart.subscribe(self._on_selection_changed)

    def _on_selection_changed(self, _: SelectionChanged) -> None:
        self._changes += 1

    @property
    def revision(self) -> int:
        return self._changes + self.catalog.revision

    @property
    def etag(self) -> str:
        return f'"session-{self.session_id}-r{self.revision}"'

    def touch(self, now: datetime) -> None:
        self.last_seen_at = now

    def select_view(self, category: str | None, search: str | None) -> None:
        normalized_category = (category or ALL_CATEGORIES).strip().lower() or ALL_CATEGORIES
        normalized_search = (search or "").strip() or None
        with self._lock:
            if (normalized_category, normalized_search) == (self.active_category, self.search):
                return
            self.active_category = normalized_category
            self.search = normalized_search
            self._changes += 1

    def visible_items(self) -> list[MenuItem]:
        return project_items(self.catalog.items, self.active_category, self.search)

    def toggle(self, item_id: str) -> bool:
        with self._lock:
            return self.cart.toggle(item_id)

    def change_quantity(self, item_id: str, delta: int) -> CartLine | None:
        with self._lock:
            return self.cart.change_quantity(item_id, delta)

    def clear_cart(self) -> None:
        with self._lock:
            self.cart.clear()

    @contextmanager
    def submission(self) -> Iterator[None]:
        """Hold the session's single submission slot.

        A second submission while one is in flight is rejected instead of
        queued.
        """
        if not self._submission_lock.acquire(blocking=False):
            raise SubmissionInProgressError(
                f"an order submission is already in progress for session {self.session_id}"
            )
        try:
            with self._lock:
                yield
        finally:
            self._submission_lock.release()
