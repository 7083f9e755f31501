"""Immutable client configuration."""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict

from .errors import ConfigurationError

DEFAULT_API_PREFIX = "/jsonapi"


class DrupalFetchConfig(BaseModel):
    """Settings fixed when a client is created and never reassigned."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    api_prefix: str = DEFAULT_API_PREFIX
    debug: bool = False

    @classmethod
    def create(
        cls,
        base_url: Any,
        *,
        api_prefix: str | None = None,
        debug: bool = False,
    ) -> "DrupalFetchConfig":
        """Validate the base URL and build a config value."""
        if not base_url or not isinstance(base_url, str):
            raise ConfigurationError("The 'base_url' param is required.")
        return cls(
            base_url=base_url.rstrip("/"),
            api_prefix=api_prefix or DEFAULT_API_PREFIX,
            debug=debug,
        )

    @classmethod
    def from_env(cls) -> "DrupalFetchConfig":
        """Build a config from DRUPAL_BASE_URL, DRUPAL_API_PREFIX and DRUPAL_DEBUG."""
        debug = os.getenv("DRUPAL_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}
        return cls.create(
            os.getenv("DRUPAL_BASE_URL"),
            api_prefix=os.getenv("DRUPAL_API_PREFIX"),
            debug=debug,
        )
