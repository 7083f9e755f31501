"""Helpers for running the async client in tests."""

from __future__ import annotations

import asyncio
import contextlib
from typing import Any, AsyncIterator

import httpx

from drupal_fetch import DrupalFetch

BASE_URL = "http://drupal.test"


def run(coro: Any) -> Any:
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


@contextlib.asynccontextmanager
async def drupal_client(
    transport: httpx.AsyncBaseTransport, **kwargs: Any
) -> AsyncIterator[DrupalFetch]:
    """Yield a client whose requests go through ``transport``."""
    async with httpx.AsyncClient(transport=transport) as http_client:
        yield DrupalFetch(BASE_URL, http_client=http_client, **kwargs)


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        json=payload,
        headers={"Content-Type": "application/vnd.api+json"},
    )


INDEX = {
    "jsonapi": {"version": "1.0"},
    "data": [],
    "links": {
        "self": {"href": "https://drupal.test/jsonapi"},
        "node--article": {"href": "https://drupal.test/jsonapi/node/article"},
        "node--page": {"href": "https://drupal.test/jsonapi/node/page"},
    },
}
