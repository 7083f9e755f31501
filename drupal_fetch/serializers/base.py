"""Deserialize JSON:API compound documents into a resource graph."""

from __future__ import annotations

import json
from typing import Any, Iterator, Mapping, TypeVar

T = TypeVar("T")

ResourceKey = tuple[str, str]

_OWN_FIELDS = frozenset(
    {"attributes", "relationships", "relationship_meta", "relationship_links", "links", "meta"}
)


class Resource:
    """A JSON:API resource with its relationships resolved to other resources.

    Attributes and relationships share one flat namespace, so
    ``article["title"]``, ``article.title`` and ``article.uid.name`` all work.
    Attributes take precedence on a name clash. Two resources are equal when
    they have the same ``(type, id)``.
    """

    def __init__(
        self,
        type: str,
        id: str,
        attributes: Mapping[str, Any] | None = None,
        *,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
        is_stub: bool = False,
    ) -> None:
        self.type = type
        self.id = id
        self.attributes: dict[str, Any] = dict(attributes or {})
        self.relationships: dict[str, Resource | list[Resource] | None] = {}
        self.relationship_meta: dict[str, Any] = {}
        self.relationship_links: dict[str, Any] = {}
        self.links: dict[str, Any] = dict(links or {})
        self.meta: dict[str, Any] = dict(meta or {})
        self.is_stub = is_stub

    @property
    def key(self) -> ResourceKey:
        return (self.type, self.id)

    def __getitem__(self, name: str) -> Any:
        if name == "id":
            return self.id
        if name == "type":
            return self.type
        if name in self.attributes:
            return self.attributes[name]
        if name in self.relationships:
            return self.relationships[name]
        raise KeyError(name)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not real instance attributes.
        if name.startswith("_") or name in _OWN_FIELDS:
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(
                f"{self.type} resource has no field '{name}'"
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in ("id", "type") or name in self.attributes or name in self.relationships

    def __iter__(self) -> Iterator[str]:
        yield "id"
        yield "type"
        yield from self.attributes
        yield from (name for name in self.relationships if name not in self.attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        stub = " stub" if self.is_stub else ""
        return f"<Resource{stub} {self.type}:{self.id}>"

    def get(self, name: str, default: Any = None) -> Any:
        try:
            return self[name]
        except KeyError:
            return default

    def get_typed(self, name: str, expected_type: type[T], default: T | None = None) -> T | None:
        """Return ``name`` only if it is an instance of ``expected_type``."""
        value = self.get(name)
        return value if isinstance(value, expected_type) else default

    def merge(self, other: "Resource") -> None:
        """Fill in fields from another copy of the same resource."""
        for name, value in other.attributes.items():
            self.attributes.setdefault(name, value)
        for name, value in other.links.items():
            self.links.setdefault(name, value)
        for name, value in other.meta.items():
            self.meta.setdefault(name, value)
        if self.is_stub and not other.is_stub:
            self.is_stub = False

    def to_dict(self) -> dict[str, Any]:
        """Return a flat, acyclic mapping; related resources become identifiers."""
        data: dict[str, Any] = {"id": self.id, "type": self.type}
        for name, related in self.relationships.items():
            if isinstance(related, list):
                data[name] = [item.identifier() for item in related]
            elif related is not None:
                data[name] = related.identifier()
            else:
                data[name] = None
        data.update(self.attributes)
        if self.links:
            data.setdefault("links", dict(self.links))
        if self.meta:
            data.setdefault("meta", dict(self.meta))
        return data

    def identifier(self) -> dict[str, str]:
        return {"type": self.type, "id": self.id}


class JSONAPIDeserializer:
    """Turn a compound document into connected ``Resource`` objects.

    Every ``(type, id)`` found in ``data`` or ``included`` becomes exactly one
    object, and every relationship points at that object. Relationship
    targets missing from the document are kept as stub resources.
    """

    def deserialize(self, document: Any) -> Resource | list[Resource] | None:
        if not document:
            return None
        if isinstance(document, (str, bytes, bytearray)):
            document = json.loads(document)
        if not isinstance(document, Mapping):
            raise TypeError(f"Expected a JSON:API document, got {type(document).__name__}.")

        data = document.get("data")
        included = document.get("included") or []
        registry: dict[ResourceKey, Resource] = {}

        primary = [data] if isinstance(data, Mapping) else list(data or [])
        raw_by_key: dict[ResourceKey, list[Mapping[str, Any]]] = {}
        for raw in [*primary, *included]:
            resource = self._register(registry, raw)
            if resource is not None:
                raw_by_key.setdefault(resource.key, []).append(raw)

        for key, raws in raw_by_key.items():
            for raw in raws:
                self._link(registry, registry[key], raw.get("relationships") or {})

        if data is None:
            return None
        if isinstance(data, Mapping):
            return registry.get(self._key(data))
        return [
            registry[self._key(raw)]
            for raw in data
            if isinstance(raw, Mapping) and self._key(raw) in registry
        ]

    def _key(self, raw: Mapping[str, Any]) -> ResourceKey:
        return (str(raw.get("type", "")), str(raw.get("id", "")))

    def _register(
        self, registry: dict[ResourceKey, Resource], raw: Any
    ) -> Resource | None:
        if not isinstance(raw, Mapping) or "type" not in raw:
            return None
        resource = Resource(
            str(raw["type"]),
            str(raw.get("id", "")),
            raw.get("attributes"),
            links=raw.get("links"),
            meta=raw.get("meta"),
        )
        existing = registry.get(resource.key)
        if existing is None:
            registry[resource.key] = resource
            return resource
        existing.merge(resource)
        return existing

    def _resolve(
        self, registry: dict[ResourceKey, Resource], identifier: Any
    ) -> Resource | None:
        if not isinstance(identifier, Mapping) or "type" not in identifier:
            return None
        key = self._key(identifier)
        resource = registry.get(key)
        if resource is None:
            resource = Resource(key[0], key[1], is_stub=True)
            registry[key] = resource
        return resource

    def _link(
        self,
        registry: dict[ResourceKey, Resource],
        resource: Resource,
        relationships: Mapping[str, Any],
    ) -> None:
        for name, relationship in relationships.items():
            if not isinstance(relationship, Mapping):
                continue
            if relationship.get("links"):
                resource.relationship_links[name] = relationship["links"]
            if "data" not in relationship:
                continue
            linkage = relationship["data"]
            if isinstance(linkage, list):
                targets = [self._resolve(registry, item) for item in linkage]
                resource.relationships[name] = [item for item in targets if item is not None]
                metas = [item.get("meta") for item in linkage if isinstance(item, Mapping)]
                if any(metas):
                    resource.relationship_meta[name] = metas
            else:
                resource.relationships[name] = self._resolve(registry, linkage)
                if isinstance(linkage, Mapping) and linkage.get("meta"):
                    resource.relationship_meta[name] = linkage["meta"]
