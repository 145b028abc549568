from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from qrmenu.application.metrics.ordering import record_active_sessions
from qrmenu.application.session.state import OrderingSession
from qrmenu.domain.common.ids import SessionId
from qrmenu.domain.menu.catalog import CatalogStore
from qrmenu.domain.table.entities import TableContext

logger = logging.getLogger(__name__)


class SessionNotFoundError(Exception):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionRegistry:
    def __init__(
        self,
        idle_ttl_seconds: int = 3600,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._sessions: dict[str, OrderingSession] = {}
        self._idle_ttl = timedelta(seconds=idle_ttl_seconds)
        self._clock = clock
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def open(self, catalog: CatalogStore, table: TableContext) -> OrderingSession:
        now = self._clock()
        session = OrderingSession(
            session_id=SessionId(f"ses_{uuid4().hex[:16]}"),
            catalog=catalog,
            table=table,
            now=now,
        )
        with self._lock:
            self._evict_idle_locked(now)
            self._sessions[str(session.session_id)] = session
            count = len(self._sessions)
        record_active_sessions(count)
        return session

    def get(self, session_id: str) -> OrderingSession:
        now = self._clock()
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None and now - session.last_seen_at > self._idle_ttl:
                self._sessions.pop(session_id, None)
                session = None
        if session is None:
            raise SessionNotFoundError(f"session not found: {session_id}")
        session.touch(now)
        return session

    def evict_idle(self) -> int:
        with self._lock:
            evicted = self._evict_idle_locked(self._clock())
            count = len(self._sessions)
        record_active_sessions(count)
        return evicted

    def _evict_idle_locked(self, now: datetime) -> int:
        stale = [
            session_id
            for session_id, session in self._sessions.items()
            if now - session.last_seen_at > self._idle_ttl
        ]
        for session_id in stale:
            del self._sessions[session_id]
        if stale:
            logger.info("sessions_evicted", extra={"evicted": len(stale)})
        return len(stale)
