"""URL construction for JSON:API requests."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import urlsplit, urlunsplit

from drupal_fetch.core.errors import InvalidUrl

from .params import DrupalJsonApiParams
from .query_params import encode_query

SECURE_SCHEME = "https"


def build_url(
    path: Any,
    base: str,
    params: DrupalJsonApiParams | Mapping[str, Any] | None = None,
) -> str:
    """Combine ``base`` and ``path`` into an absolute https URL.

    Paths starting with ``/`` are appended to ``base``, anything else must
    already be absolute. When ``params`` is given it replaces the query.
    """
    if not isinstance(path, str) or not path:
        raise InvalidUrl(f"Cannot build a URL from path {path!r}.")

    raw = f"{base}{path}" if path.startswith("/") else path
    try:
        split = urlsplit(raw)
    except ValueError as exc:
        raise InvalidUrl(f"Invalid URL '{raw}': {exc}") from exc
    if not split.netloc:
        raise InvalidUrl(f"Invalid URL '{raw}': no host.")

    query = split.query
    if params is not None:
        if isinstance(params, DrupalJsonApiParams):
            params = params.get_query_object()
        query = encode_query(params)

    return urlunsplit((SECURE_SCHEME, split.netloc, split.path, query, split.fragment))
