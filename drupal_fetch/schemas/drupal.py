"""Pydantic schemas for Drupal specific payloads and per-call options."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from drupal_fetch.utils.params import DrupalJsonApiParams


class PathAlias(BaseModel):
    """The ``path`` field of a routable entity."""

    model_config = ConfigDict(extra="allow")

    alias: Optional[str] = None
    pid: Optional[int] = None
    langcode: Optional[str] = None


class MenuRoute(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = ""
    parameters: Union[Dict[str, Any], List[Any]] = Field(default_factory=dict)


class DrupalMenuItem(BaseModel):
    """A menu link as exposed by the ``menu_items`` endpoint.

    ``parent`` references another item's ``id`` (empty for top level links).
    ``items`` only holds children once the flat list has been assembled into
    a tree.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    parent: str = ""
    title: str = ""
    description: Optional[str] = None
    enabled: bool = True
    expanded: bool = False
    menu_name: Optional[str] = None
    meta: Union[Dict[str, Any], List[Any]] = Field(default_factory=dict)
    options: Union[Dict[str, Any], List[Any]] = Field(default_factory=dict)
    provider: Optional[str] = None
    route: Optional[MenuRoute] = None
    type: Optional[str] = None
    url: Optional[str] = None
    weight: Optional[Union[str, int]] = None
    items: List["DrupalMenuItem"] = Field(default_factory=list)

    @field_validator("parent", mode="before")
    @classmethod
    def _root_parent(cls, value: Any) -> Any:
        return "" if value is None else value


class _CamelModel(BaseModel):
    model_config = ConfigDict(extra="allow", alias_generator=to_camel, populate_by_name=True)


class PathEntity(_CamelModel):
    canonical: Optional[str] = None
    type: Optional[str] = None
    bundle: Optional[str] = None
    id: Optional[str] = None
    uuid: Optional[str] = None
    langcode: Optional[str] = None
    path: Optional[str] = None


class PathJsonApi(_CamelModel):
    individual: Optional[str] = None
    resource_name: Optional[str] = None
    base_path: Optional[str] = None
    entry_point: Optional[str] = None


class DrupalPathData(_CamelModel):
    """Response of ``/router/translate-path``."""

    resolved: Optional[str] = None
    is_home_path: bool = False
    entity: Optional[PathEntity] = None
    label: Optional[str] = None
    jsonapi: Optional[PathJsonApi] = None


class DrupalView(BaseModel):
    """Deserialized view results with the enclosing document's meta and links."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    results: Any = None
    meta: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None


class JsonApiOptions(BaseModel):
    """Per-call options.

    ``fetch_options`` is handed untouched to ``httpx.AsyncClient.get``
    (``headers``, ``timeout``, ``extensions``, ...).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    params: Optional[Union[DrupalJsonApiParams, Mapping[str, Any]]] = None
    fetch_options: Dict[str, Any] = Field(default_factory=dict)
    locale: Optional[str] = None
    version: Optional[str] = None
