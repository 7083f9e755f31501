"""Async client for fetching JSON:API resources from a Drupal site."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Sequence

import httpx

from drupal_fetch.core.classifier import ErrorClassifier
from drupal_fetch.core.config import DrupalFetchConfig
from drupal_fetch.menus.tree import build_menu_tree
from drupal_fetch.routers.index import JSONAPIIndexRouter
from drupal_fetch.schemas.drupal import (
    DrupalMenuItem,
    DrupalPathData,
    DrupalView,
    JsonApiOptions,
    PathAlias,
)
from drupal_fetch.schemas.resource import JSONAPIDocument, JSONAPIIndexDocument
from drupal_fetch.serializers.base import JSONAPIDeserializer, Resource
from drupal_fetch.utils.params import DrupalJsonApiParams
from drupal_fetch.utils.urls import build_url

logger = logging.getLogger(__name__)

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"
TRANSLATE_PATH = "/router/translate-path"
DEFAULT_VIEW_DISPLAY = "default"

Options = JsonApiOptions | Mapping[str, Any] | None
Params = DrupalJsonApiParams | Mapping[str, Any]


class DrupalFetch:
    """Fetch resources, menus, views and path data from a Drupal JSON:API.

    Usage::

        async with DrupalFetch("https://admin.example.com") as drupal:
            article = await drupal.get_resource("node--article", uuid)
            menu = await drupal.get_menu("main")

    Endpoints of resource types are looked up in the JSON:API index on every
    call. Nothing fetched is cached between calls.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_prefix: str | None = None,
        debug: bool = False,
        http_client: httpx.AsyncClient | None = None,
        classifier: ErrorClassifier | None = None,
    ) -> None:
        """Validate the configuration and set up the HTTP client.

        A client passed as ``http_client`` belongs to the caller and is not
        closed by ``aclose()``.
        """
        self.config = DrupalFetchConfig.create(base_url, api_prefix=api_prefix, debug=debug)
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            headers={"Accept": JSONAPI_MEDIA_TYPE}
        )
        self.classifier = classifier or ErrorClassifier()
        self.deserializer = JSONAPIDeserializer()
        self.router = JSONAPIIndexRouter(self.config, self.http_client, self.classifier)

        self._debug("Debug mode is on.")

    @classmethod
    def from_env(cls, **kwargs: Any) -> "DrupalFetch":
        """Create a client from DRUPAL_BASE_URL / DRUPAL_API_PREFIX / DRUPAL_DEBUG."""
        config = DrupalFetchConfig.from_env()
        return cls(config.base_url, api_prefix=config.api_prefix, debug=config.debug, **kwargs)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def __aenter__(self) -> "DrupalFetch":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def get_resource(
        self, resource_type: str, uuid: str, options: Options = None
    ) -> Any:
        """Fetch a single resource of ``resource_type`` by UUID.

        When both ``params`` and ``version`` are set the version is sent as
        ``resourceVersion``.
        """
        options = self._options(options)
        api_path = await self.get_resource_endpoint(resource_type, options.locale)

        params = options.params
        if params is not None and options.version:
            params = self._with_version(params, options.version)

        url = self.build_url(f"{api_path}/{uuid}" if api_path else api_path, params)

        self._debug(f"Fetching resource {resource_type} with id {uuid}.")
        self._debug(url)

        document = await self._get_document("resource", url, options)
        return self.deserialize(document)

    async def get_resource_collection(
        self, resource_type: str, options: Options = None
    ) -> Any:
        """Fetch the collection of ``resource_type``."""
        options = self._options(options)
        api_path = await self.get_resource_endpoint(resource_type, options.locale)

        url = self.build_url(api_path, options.params)

        self._debug(f"Fetching resource collection of type {resource_type}")
        self._debug(url)

        document = await self._get_document("collection", url, options)
        return self.deserialize(document)

    async def get_static_paths(self, types: str | Sequence[str]) -> list[list[str]]:
        """Return the path alias segments of every resource of ``types``.

        One collection request per type is made concurrently; the groups are
        flattened in the order of ``types``.
        """
        if isinstance(types, str):
            types = [types]

        groups = await asyncio.gather(*(self._static_paths(t) for t in types))
        return [segments for group in groups for segments in group]

    async def _static_paths(self, resource_type: str) -> list[list[str]]:
        params = DrupalJsonApiParams().add_fields(resource_type, ["path"])
        resources = await self.get_resource_collection(
            resource_type, JsonApiOptions(params=params)
        )
        if isinstance(resources, Resource):
            resources = [resources]

        paths: list[list[str]] = []
        for resource in resources or []:
            path = PathAlias.model_validate(resource.get_typed("path", dict) or {})
            if not path.alias:
                self._debug(f"Skipping {resource!r}: no path alias.")
                continue
            paths.append(path.alias[1:].split("/"))
        return paths

    async def get_path_data(
        self, path: str, options: Options = None
    ) -> DrupalPathData | None:
        """Translate a path alias; returns None when Drupal cannot resolve it."""
        options = self._options(options)
        params = DrupalJsonApiParams().add_custom_param({"path": path})
        url = self.build_url(TRANSLATE_PATH, params)

        self._debug(f"Translating path {path}.")

        response = await self.http_client.get(url, **options.fetch_options)

        # Left to the app to handle, e.g. by rendering a not found page.
        if not self.classifier.check("path_data", response):
            return None

        try:
            return DrupalPathData.model_validate(response.json())
        except ValueError as exc:
            logger.warning("Unreadable path data for %s: %s", path, exc)
            return None

    async def get_index(self) -> JSONAPIIndexDocument | None:
        """Fetch the JSON:API index, or None if it cannot be retrieved."""
        return await self.router.get_index()

    async def get_menu(self, name: str, options: Options = None) -> list[DrupalMenuItem]:
        """Fetch the items of menu ``name`` as a tree."""
        options = self._options(options)
        url = self.build_url(f"{self.config.api_prefix}/menu_items/{name}", options.params)

        self._debug(f"Fetching menu items for {name}.")
        self._debug(url)

        document = await self._get_document("menu", url, options)
        items = self.deserialize(document)
        if isinstance(items, Resource):
            items = [items]
        return build_menu_tree(
            [DrupalMenuItem.model_validate(item.to_dict()) for item in items or []]
        )

    async def get_view(self, name: str, options: Options = None) -> DrupalView:
        """Fetch the results of a view given as ``"<view_id>--<display_id>"``."""
        options = self._options(options)
        view_id, _, display_id = name.partition("--")
        display_id = display_id or DEFAULT_VIEW_DISPLAY
        url = self.build_url(
            f"{self.config.api_prefix}/views/{view_id}/{display_id}", options.params
        )

        self._debug(f"Fetching view {view_id} display {display_id}.")
        self._debug(url)

        document = await self._get_document("view", url, options) or {}
        envelope = JSONAPIDocument.model_validate(document)
        return DrupalView(
            id=name,
            results=self.deserialize(document),
            meta=envelope.meta,
            links=envelope.links,
        )

    async def get_resource_endpoint(
        self, resource_type: str, locale: str | None = None
    ) -> str | None:
        """Look up the endpoint of ``resource_type`` in a freshly fetched index."""
        return await self.router.resolve_endpoint(resource_type, locale)

    def build_url(self, path: Any, params: Params | None = None) -> str:
        return build_url(path, self.config.base_url, params)

    def deserialize(self, body: Any) -> Any:
        return self.deserializer.deserialize(body)

    async def _get_document(
        self, operation: str, url: str, options: JsonApiOptions
    ) -> dict[str, Any] | None:
        response = await self.http_client.get(url, **options.fetch_options)
        document = response.json() if response.is_success and response.content else None
        self.classifier.check(operation, response, document)
        return document

    def _options(self, options: Options) -> JsonApiOptions:
        if options is None:
            return JsonApiOptions()
        if isinstance(options, JsonApiOptions):
            return options
        return JsonApiOptions.model_validate(dict(options))

    def _with_version(self, params: Params, version: str) -> Params:
        # Copy so the caller's params are not modified.
        if isinstance(params, DrupalJsonApiParams):
            return params.copy().add_custom_param({"resourceVersion": version})
        return {**params, "resourceVersion": version}

    def _debug(self, message: str) -> None:
        if not self.config.debug:
            return
        logger.debug("[debug]  %s", message)
