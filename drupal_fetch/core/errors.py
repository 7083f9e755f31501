"""Exceptions raised (or caught and logged) by the Drupal JSON:API client."""

from __future__ import annotations

from typing import Any


class DrupalFetchError(Exception):
    """Base class for every error raised by the client."""


class ConfigurationError(DrupalFetchError):
    """The client was constructed with an invalid configuration."""


class InvalidUrl(DrupalFetchError):
    """A path and base origin could not be combined into an absolute URL."""


class EndpointNotFound(DrupalFetchError):
    """The JSON:API index has no link registered for a resource type."""

    def __init__(self, resource_type: str, locale: str | None = None) -> None:
        self.resource_type = resource_type
        self.locale = locale
        super().__init__(
            f"Resource of type '{resource_type}' and locale {locale} not found."
        )


class IndexFetchFailure(DrupalFetchError):
    """The JSON:API index document could not be fetched or decoded."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch JSON:API index at {url} - {reason}")


class HttpError(DrupalFetchError):
    """A resource endpoint answered with a failure.

    ``str(error)`` is the status text of the response, the parsed JSON:API
    error objects (if the body carried any) are available on ``errors``.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
        errors: list[Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.url = url
        self.errors = errors or []
        super().__init__(message)


class MenuCycleError(DrupalFetchError):
    """A menu item was found again on its own ancestor path."""

    def __init__(self, item_id: str, path: list[str]) -> None:
        self.item_id = item_id
        self.path = path
        chain = " -> ".join([*path, item_id])
        super().__init__(f"Menu item '{item_id}' is its own ancestor: {chain}")
