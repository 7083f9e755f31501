"""Pydantic schemas for JSON:API v1.1 documents as returned by Drupal."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict


class JSONAPIResource(BaseModel):
    """Resource object with attributes and relationships."""

    model_config = ConfigDict(extra="allow")

    type: str
    id: Optional[str] = None
    attributes: Optional[Dict[str, Any]] = None
    relationships: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None


class JSONAPIErrorObject(BaseModel):
    """Error object: https://jsonapi.org/format/#error-objects"""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    status: Optional[str] = None
    code: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None


class JSONAPIDocument(BaseModel):
    """Top-level JSON:API document."""

    model_config = ConfigDict(extra="allow")

    jsonapi: Optional[Dict[str, Any]] = None
    data: Optional[Union[JSONAPIResource, List[JSONAPIResource]]] = None
    included: Optional[List[JSONAPIResource]] = None
    errors: Optional[List[JSONAPIErrorObject]] = None
    meta: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None


class JSONAPIIndexDocument(BaseModel):
    """The JSON:API entry point: resource type name -> collection link."""

    model_config = ConfigDict(extra="allow")

    jsonapi: Optional[Dict[str, Any]] = None
    data: Optional[Any] = None
    meta: Optional[Dict[str, Any]] = None
    links: Dict[str, Any] = {}

    def href(self, resource_type: str) -> Optional[str]:
        """Return the endpoint registered for ``resource_type``, if any."""
        link = self.links.get(resource_type)
        if isinstance(link, dict):
            href = link.get("href")
        else:
            href = link
        return href if isinstance(href, str) and href else None
