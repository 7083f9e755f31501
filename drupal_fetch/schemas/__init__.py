"""Pydantic schemas for JSON:API and Drupal payloads."""

from .resource import (
    JSONAPIDocument,
    JSONAPIErrorObject,
    JSONAPIIndexDocument,
    JSONAPIResource,
)
from .drupal import DrupalMenuItem, DrupalPathData, DrupalView, JsonApiOptions, PathAlias

__all__ = [
    "DrupalMenuItem",
    "DrupalPathData",
    "DrupalView",
    "JSONAPIDocument",
    "JSONAPIErrorObject",
    "JSONAPIIndexDocument",
    "JSONAPIResource",
    "JsonApiOptions",
    "PathAlias",
]
