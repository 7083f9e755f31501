"""Async client for Drupal JSON:API backends."""

from .client.base import DrupalFetch
from .core.config import DrupalFetchConfig
from .core.errors import (
    ConfigurationError,
    DrupalFetchError,
    EndpointNotFound,
    HttpError,
    IndexFetchFailure,
    InvalidUrl,
    MenuCycleError,
)
from .schemas.drupal import DrupalMenuItem, DrupalPathData, DrupalView, JsonApiOptions
from .serializers.base import JSONAPIDeserializer, Resource
from .menus.tree import build_menu_tree
from .utils.params import DrupalJsonApiParams

__all__ = [
    "ConfigurationError",
    "DrupalFetch",
    "DrupalFetchConfig",
    "DrupalFetchError",
    "DrupalJsonApiParams",
    "DrupalMenuItem",
    "DrupalPathData",
    "DrupalView",
    "EndpointNotFound",
    "HttpError",
    "IndexFetchFailure",
    "InvalidUrl",
    "JSONAPIDeserializer",
    "JsonApiOptions",
    "MenuCycleError",
    "Resource",
    "build_menu_tree",
]
