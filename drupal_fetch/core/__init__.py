"""Configuration, errors and failure policies."""

from .errors import (
    ConfigurationError,
    DrupalFetchError,
    EndpointNotFound,
    HttpError,
    IndexFetchFailure,
    InvalidUrl,
    MenuCycleError,
)
from .config import DrupalFetchConfig
from .classifier import ErrorClassifier, ErrorPolicy

__all__ = [
    "ConfigurationError",
    "DrupalFetchConfig",
    "DrupalFetchError",
    "EndpointNotFound",
    "ErrorClassifier",
    "ErrorPolicy",
    "HttpError",
    "IndexFetchFailure",
    "InvalidUrl",
    "MenuCycleError",
]
