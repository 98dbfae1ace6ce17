from __future__ import annotations

import os
from typing import Any

import httpx

DEFAULT_TIMEOUT_SECONDS = 10.0


def get_default_timeout_seconds() -> float:
    raw = os.getenv("HTTP_CLIENT_TIMEOUT_SECONDS")
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS


def make_timeout(seconds: float | None = None) -> httpx.Timeout:
    return httpx.Timeout(seconds if seconds is not None else get_default_timeout_seconds())


def new_async_httpx_client(*, timeout_seconds: float | None = None, **kwargs: Any) -> httpx.AsyncClient:
    kwargs.setdefault("timeout", make_timeout(timeout_seconds))
    return httpx.AsyncClient(**kwargs)
