from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrmenu.application.session.registry import SessionNotFoundError, SessionRegistry
from qrmenu.application.session.state import SubmissionInProgressError
from qrmenu.domain.menu.catalog import CatalogSnapshot, CatalogStore
from qrmenu.domain.table.entities import TableContext


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def catalog(sample_items) -> CatalogStore:
    return CatalogStore(CatalogSnapshot(items=tuple(sample_items)))


def test_open_and_get_session(catalog) -> None:
    registry = SessionRegistry()
    session = registry.open(catalog=catalog, table=TableContext(auto_detected=3))

    assert str(session.session_id).startswith("ses_")
    assert registry.get(str(session.session_id)) is session
    assert len(registry) == 1


def test_unknown_session_raises(catalog) -> None:
    with pytest.raises(SessionNotFoundError):
        SessionRegistry().get("ses_missing")


def test_idle_sessions_expire(catalog) -> None:
    clock = FakeClock()
    registry = SessionRegistry(idle_ttl_seconds=60, clock=clock)
    stale = registry.open(catalog=catalog, table=TableContext())
    fresh = registry.open(catalog=catalog, table=TableContext())

    clock.advance(45)
    registry.get(str(fresh.session_id))
    clock.advance(30)

    assert registry.evict_idle() == 1
    with pytest.raises(SessionNotFoundError):
        registry.get(str(stale.session_id))
    assert registry.get(str(fresh.session_id)) is fresh


def test_revision_tracks_cart_view_and_catalog_changes(catalog) -> None:
    session = SessionRegistry().open(catalog=catalog, table=TableContext())
    start = session.revision
    etag = session.etag

    session.toggle("1")
    session.select_view(category="Burger", search="  beef ")
    session.select_view(category="burger", search="beef")
    catalog.replace(catalog.snapshot)

    assert session.revision == start + 3
    assert session.etag != etag
    assert session.active_category == "burger"
    assert session.search == "beef"
    assert [str(item.item_id) for item in session.visible_items()] == ["1"]


def test_noop_actions_keep_revision(catalog) -> None:
    session = SessionRegistry().open(catalog=catalog, table=TableContext())
    start = session.revision

    session.toggle("missing")
    session.change_quantity("1", -1)
    session.clear_cart()
    session.select_view(category="all", search="")

    assert session.revision == start


def test_second_submission_is_rejected_while_first_runs(catalog) -> None:
    session = SessionRegistry().open(catalog=catalog, table=TableContext())

    with session.submission():
        with pytest.raises(SubmissionInProgressError):
            with session.submission():
                pass

    with session.submission():
        pass
