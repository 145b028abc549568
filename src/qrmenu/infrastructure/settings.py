from __future__ import annotations

import os
from pathlib import Path

from qrmenu.domain.table.entities import DEFAULT_MAX_TABLES

BACKEND_SUPABASE = "supabase"
BACKEND_SQL = "sql"


def _int_env(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum}, got {value}")
    return value


def app_env() -> str:
    return os.getenv("APP_ENV", "dev").lower()


def max_table_count() -> int:
    return _int_env("MAX_TABLES", DEFAULT_MAX_TABLES)


def catalog_cache_ttl_seconds() -> int:
    return _int_env("CATALOG_CACHE_TTL_SECONDS", 300)


def session_idle_ttl_seconds() -> int:
    return _int_env("SESSION_IDLE_TTL_SECONDS", 3600)


def category_display_file() -> Path | None:
    raw = os.getenv("CATEGORY_DISPLAY_FILE")
    if not raw:
        return None
    return Path(raw)


def menu_backend_kind() -> str:
    kind = os.getenv("MENU_BACKEND", BACKEND_SUPABASE).lower()
    if kind not in {BACKEND_SUPABASE, BACKEND_SQL}:
        raise RuntimeError(f"MENU_BACKEND must be one of supabase, sql; got {kind!r}")
    return kind


def cors_allow_origins() -> list[str]:
    # Dev/test: unblock everything (no credentials allowed)
    if app_env() in {"dev", "test"}:
        return ["*"]

    raw_value = os.getenv("CORS_ALLOW_ORIGINS", "https://menu.example.com")
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]
