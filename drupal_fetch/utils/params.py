"""Chainable builder for Drupal JSON:API query parameters."""

from __future__ import annotations

import copy
from typing import Any, Iterable, Mapping

from .query_params import encode_query, parse_query_params

NULL_OPERATORS = {"IS NULL", "IS NOT NULL"}
LIST_OPERATORS = {"IN", "NOT IN", "BETWEEN", "NOT BETWEEN"}


class DrupalJsonApiParams:
    """Collect filters, includes, sorts, sparse fieldsets and paging.

    Every ``add_*`` method returns ``self``::

        params = (
            DrupalJsonApiParams()
            .add_filter("status", "1")
            .add_include(["field_image", "uid"])
            .add_sort("created", "DESC")
            .add_page_limit(10)
        )
        params.get_query_string()
    """

    def __init__(self) -> None:
        self._filter: dict[str, Any] = {}
        self._include: list[str] = []
        self._sort: list[str] = []
        self._page: dict[str, int] = {}
        self._fields: dict[str, list[str]] = {}
        self._custom: dict[str, Any] = {}

    @classmethod
    def from_query_string(cls, query: str) -> "DrupalJsonApiParams":
        """Rebuild a params object from a query string it (or Drupal) produced."""
        parsed = parse_query_params(query)
        params = cls()
        params._filter = parsed["filter"]
        params.add_include(parsed["include"])
        for page_key, value in parsed["page"].items():
            params._page[page_key] = value
        for sort in parsed["sort"]:
            params.add_sort(sort["field"], sort["direction"])
        for resource_type, fields in parsed["fields"].items():
            params.add_fields(resource_type, fields)
        params.add_custom_param(parsed["custom"])
        return params

    def _key_for(self, proposed: str) -> str:
        if proposed not in self._filter:
            return proposed
        index = 1
        while f"{proposed}--{index}" in self._filter:
            index += 1
        return f"{proposed}--{index}"

    def add_filter(
        self,
        path: str,
        value: Any = None,
        operator: str = "=",
        member_of: str | None = None,
    ) -> "DrupalJsonApiParams":
        """Add a filter condition on ``path``.

        A plain ``=`` condition outside of any group uses the short
        ``filter[path]=value`` form.
        """
        operator = operator.upper()
        if value is None and operator not in NULL_OPERATORS:
            raise ValueError(f"Operator '{operator}' requires a value.")
        if operator in LIST_OPERATORS and not isinstance(value, (list, tuple)):
            raise ValueError(f"Operator '{operator}' requires a list of values.")

        key = self._key_for(path)
        if operator == "=" and member_of is None and key == path:
            self._filter[key] = value
            return self

        condition: dict[str, Any] = {"path": path}
        if operator not in NULL_OPERATORS:
            condition["value"] = list(value) if isinstance(value, tuple) else value
        condition["operator"] = operator
        if member_of is not None:
            condition["memberOf"] = member_of
        self._filter[key] = {"condition": condition}
        return self

    def add_group(
        self, name: str, conjunction: str = "OR", member_of: str | None = None
    ) -> "DrupalJsonApiParams":
        """Add a condition group other filters can join with ``member_of``."""
        group: dict[str, Any] = {"conjunction": conjunction.upper()}
        if member_of is not None:
            group["memberOf"] = member_of
        self._filter[self._key_for(name)] = {"group": group}
        return self

    def add_include(self, paths: str | Iterable[str]) -> "DrupalJsonApiParams":
        if isinstance(paths, str):
            paths = [paths]
        for path in paths:
            if path and path not in self._include:
                self._include.append(path)
        return self

    def add_sort(self, path: str, direction: str = "ASC") -> "DrupalJsonApiParams":
        prefix = "-" if direction.upper() == "DESC" else ""
        self._sort.append(f"{prefix}{path}")
        return self

    def add_page_limit(self, limit: int) -> "DrupalJsonApiParams":
        self._page["limit"] = int(limit)
        return self

    def add_page_offset(self, offset: int) -> "DrupalJsonApiParams":
        self._page["offset"] = int(offset)
        return self

    def add_fields(self, resource_type: str, fields: Iterable[str]) -> "DrupalJsonApiParams":
        """Restrict ``resource_type`` to a sparse fieldset."""
        self._fields[resource_type] = list(fields)
        return self

    def add_custom_param(self, params: Mapping[str, Any]) -> "DrupalJsonApiParams":
        """Merge arbitrary top-level parameters (e.g. ``resourceVersion``)."""
        self._custom.update(params)
        return self

    def copy(self) -> "DrupalJsonApiParams":
        return copy.deepcopy(self)

    def get_query_object(self) -> dict[str, Any]:
        """Return the nested parameter mapping."""
        query: dict[str, Any] = {}
        if self._filter:
            query["filter"] = copy.deepcopy(self._filter)
        if self._include:
            query["include"] = ",".join(self._include)
        if self._page:
            query["page"] = dict(self._page)
        if self._sort:
            query["sort"] = ",".join(self._sort)
        if self._fields:
            query["fields"] = {
                resource_type: ",".join(fields)
                for resource_type, fields in self._fields.items()
            }
        query.update(copy.deepcopy(self._custom))
        return query

    def get_query_string(self) -> str:
        return encode_query(self.get_query_object())
