"""Query encoding and URL helpers."""

from .query_params import encode_query, flatten_query, parse_query_params, parse_query_string
from .params import DrupalJsonApiParams
from .urls import build_url

__all__ = [
    "DrupalJsonApiParams",
    "build_url",
    "encode_query",
    "flatten_query",
    "parse_query_params",
    "parse_query_string",
]
