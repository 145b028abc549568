from __future__ import annotations

import os
from functools import lru_cache
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError


def database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set")
    return url


def _engine_options(url: str, connect_timeout: int) -> dict[str, Any]:
    backend = make_url(url).get_backend_name()
    if backend == "postgresql":
        return {"pool_pre_ping": True, "connect_args": {"connect_timeout": connect_timeout}}
    if backend == "sqlite":
        # Request handlers run in the threadpool.
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


@lru_cache(maxsize=8)
def _engine_for(url: str, connect_timeout: int) -> Engine:
    return create_engine(url, **_engine_options(url, connect_timeout))


def get_engine(timeout_seconds: float = 1.0) -> Engine:
    return _engine_for(database_url(), max(1, int(timeout_seconds)))


def ping_database(engine: Engine | None = None, timeout_seconds: float = 1.0) -> bool:
    try:
        target = engine or get_engine(timeout_seconds)
        with target.connect() as connection:
            connection.execute(text("SELECT 1"))
    except (SQLAlchemyError, RuntimeError):
        return False
    return True
