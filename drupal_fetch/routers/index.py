"""Resolve JSON:API resource types to endpoints via the server index."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from drupal_fetch.core.classifier import ErrorClassifier
from drupal_fetch.core.config import DrupalFetchConfig
from drupal_fetch.core.errors import EndpointNotFound, IndexFetchFailure
from drupal_fetch.schemas.resource import JSONAPIIndexDocument
from drupal_fetch.utils.urls import build_url

logger = logging.getLogger(__name__)


class JSONAPIIndexRouter:
    """Look up resource endpoints in the JSON:API entry point document.

    The index is fetched again for every lookup; endpoint links are never
    cached between calls.
    """

    def __init__(
        self,
        config: DrupalFetchConfig,
        http_client: httpx.AsyncClient,
        classifier: ErrorClassifier | None = None,
    ) -> None:
        self.config = config
        self.http_client = http_client
        self.classifier = classifier or ErrorClassifier()

    @property
    def index_url(self) -> str:
        return build_url(self.config.api_prefix, self.config.base_url)

    async def get_index(self) -> JSONAPIIndexDocument | None:
        """Fetch the index, returning None (and logging) on any failure."""
        url = self.index_url
        try:
            return await self._fetch_index(url)
        except IndexFetchFailure as exc:
            logger.error("%s", exc)
            return None

    async def _fetch_index(self, url: str) -> JSONAPIIndexDocument:
        try:
            response = await self.http_client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise IndexFetchFailure(url, str(exc) or type(exc).__name__) from exc

        if not self.classifier.check("index", response):
            raise IndexFetchFailure(url, f"{response.status_code} {response.reason_phrase}")

        try:
            return JSONAPIIndexDocument.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise IndexFetchFailure(url, str(exc)) from exc

    def lookup(
        self,
        index: JSONAPIIndexDocument | None,
        resource_type: str,
        locale: str | None = None,
    ) -> str:
        """Return the endpoint of ``resource_type`` or raise ``EndpointNotFound``."""
        href = index.href(resource_type) if index is not None else None
        if href is None:
            raise EndpointNotFound(resource_type, locale)
        return href

    async def resolve_endpoint(
        self, resource_type: str, locale: str | None = None
    ) -> str | None:
        """Return the endpoint URL for ``resource_type``, or None if unknown.

        A missing endpoint is logged rather than raised; building a URL from
        the None result fails with ``InvalidUrl``.
        """
        index = await self.get_index()
        try:
            return self.lookup(index, resource_type, locale)
        except EndpointNotFound as exc:
            logger.error("%s", exc)
            return None
