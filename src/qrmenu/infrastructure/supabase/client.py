from __future__ import annotations

import os
from functools import lru_cache

import httpx


def _supabase_url() -> str:
    url = os.getenv("SUPABASE_URL")
    if not url:
        raise RuntimeError("SUPABASE_URL is not set")
    return url.rstrip("/")


def _supabase_key() -> str:
    key = os.getenv("SUPABASE_ANON_KEY")
    if not key:
        raise RuntimeError("SUPABASE_ANON_KEY is not set")
    return key


def build_client(
    base_url: str,
    api_key: str,
    timeout_seconds: float = 5.0,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    return httpx.Client(
        base_url=f"{base_url.rstrip('/')}/rest/v1",
        headers={
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        },
        timeout=timeout_seconds,
        transport=transport,
    )


@lru_cache(maxsize=8)
def _build_client(base_url: str, api_key: str, timeout_seconds: float) -> httpx.Client:
    return build_client(base_url, api_key, timeout_seconds)


def get_supabase_client(timeout_seconds: float = 5.0) -> httpx.Client:
    return _build_client(_supabase_url(), _supabase_key(), timeout_seconds)
