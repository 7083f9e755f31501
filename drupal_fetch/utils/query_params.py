"""Helpers for nested JSON:API query strings.

Structured parameters are flattened into bracketed keys the way Drupal's
JSON:API module expects them::

    {"filter": {"title": {"condition": {"path": "title", "value": "x"}}}}
    -> filter[title][condition][path]=title&filter[title][condition][value]=x
"""

from __future__ import annotations

import re
from typing import Any, Mapping
from urllib.parse import parse_qsl, quote

_KEY_PATTERN = re.compile(r"^([^\[\]]*)((?:\[[^\[\]]*\])*)$")
_SEGMENT_PATTERN = re.compile(r"\[([^\[\]]*)\]")


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _flatten(prefix: str, value: Any, pairs: list[tuple[str, str]]) -> None:
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]" if prefix else str(key), item, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
    else:
        pairs.append((prefix, _scalar(value)))


def flatten_query(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Return ``(bracketed_key, value)`` pairs for a nested mapping."""
    pairs: list[tuple[str, str]] = []
    _flatten("", params, pairs)
    return pairs


def encode_query(params: Mapping[str, Any]) -> str:
    """Encode a nested mapping into a query string (without the leading ``?``)."""
    return "&".join(
        f"{quote(key, safe='[]')}={quote(value, safe=',')}"
        for key, value in flatten_query(params)
    )


def _split_key(key: str) -> list[str]:
    match = _KEY_PATTERN.match(key)
    if not match or not match.group(1):
        return [key]
    return [match.group(1), *_SEGMENT_PATTERN.findall(match.group(2))]


def _assign(target: dict[str, Any], segments: list[str], value: str) -> None:
    head, rest = segments[0], segments[1:]
    if head == "":
        head = str(len(target))
    if not rest:
        target[head] = value
        return
    child = target.get(head)
    if not isinstance(child, dict):
        child = {}
        target[head] = child
    _assign(child, rest, value)


def _listify(value: Any) -> Any:
    if not isinstance(value, dict):
        return value
    converted = {key: _listify(item) for key, item in value.items()}
    indices = [str(index) for index in range(len(converted))]
    if converted and set(converted) == set(indices):
        return [converted[index] for index in indices]
    return converted


def parse_query_string(query: str) -> dict[str, Any]:
    """Rebuild the nested structure of a bracketed query string.

    Dicts whose keys are exactly ``"0".."n-1"`` come back as lists; scalar
    values stay strings.
    """
    result: dict[str, Any] = {}
    for key, value in parse_qsl(query.lstrip("?"), keep_blank_values=True):
        _assign(result, _split_key(key), value)
    return {key: _listify(value) for key, value in result.items()}


def _split_csv(value: str) -> list[str]:
    return [item for item in (part.strip() for part in value.split(",")) if item]


def parse_query_params(params: Mapping[str, Any] | str) -> dict[str, Any]:
    """Normalize the JSON:API parameter families of a flat query.

    ``params`` is either a raw query string or a mapping of bracketed keys to
    values as they appear on the wire (``fields[node--article]=title,path``).
    ``filter[...]`` keys are rebuilt into the nested filter structure; keys
    outside the known families end up under ``custom``.
    """
    if isinstance(params, str):
        pairs = parse_qsl(params.lstrip("?"), keep_blank_values=True)
    else:
        pairs = list(params.items())

    normalized: dict[str, Any] = {
        "include": [],
        "fields": {},
        "sort": [],
        "page": {},
        "filter": {},
        "custom": {},
    }
    filters: dict[str, Any] = {}
    custom: dict[str, Any] = {}

    for key, value in pairs:
        if value is None:
            continue
        raw_value = str(value)
        segments = _split_key(key)
        family = segments[0]
        if key == "include":
            normalized["include"] = _split_csv(raw_value)
        elif family == "fields" and len(segments) == 2:
            normalized["fields"][segments[1]] = _split_csv(raw_value)
        elif key == "sort":
            normalized["sort"] = [
                {"field": field.lstrip("-"), "direction": "desc" if field.startswith("-") else "asc"}
                for field in _split_csv(raw_value)
            ]
        elif family == "page" and len(segments) == 2:
            try:
                normalized["page"][segments[1]] = int(raw_value)
            except ValueError:
                normalized["page"][segments[1]] = raw_value
        elif family == "filter" and len(segments) > 1:
            _assign(filters, segments[1:], raw_value)
        else:
            _assign(custom, segments, raw_value)

    normalized["filter"] = {key: _listify(value) for key, value in filters.items()}
    normalized["custom"] = {key: _listify(value) for key, value in custom.items()}
    return normalized
