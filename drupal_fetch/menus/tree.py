"""Assemble flat, parent-linked menu items into a nested tree."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from drupal_fetch.core.errors import MenuCycleError
from drupal_fetch.schemas.drupal import DrupalMenuItem

logger = logging.getLogger(__name__)


def _as_menu_item(item: DrupalMenuItem | Mapping[str, Any]) -> DrupalMenuItem:
    if isinstance(item, DrupalMenuItem):
        return item
    return DrupalMenuItem.model_validate(dict(item))


def index_children(items: Iterable[DrupalMenuItem]) -> dict[str, list[DrupalMenuItem]]:
    """Group items by parent id, keeping input order within each group."""
    children: dict[str, list[DrupalMenuItem]] = {}
    for item in items:
        children.setdefault(item.parent, []).append(item)
    return children


def _assemble(
    children: dict[str, list[DrupalMenuItem]],
    parent: str,
    ancestors: list[str],
    strict: bool,
) -> list[DrupalMenuItem]:
    tree: list[DrupalMenuItem] = []
    for item in children.get(parent, []):
        if item.id in ancestors:
            error = MenuCycleError(item.id, list(ancestors))
            if strict:
                raise error
            logger.warning("Dropping menu branch: %s", error)
            continue
        ancestors.append(item.id)
        try:
            subtree = _assemble(children, item.id, ancestors, strict)
        finally:
            ancestors.pop()
        tree.append(item.model_copy(update={"items": subtree}))
    return tree


def build_menu_tree(
    items: Iterable[DrupalMenuItem | Mapping[str, Any]] | None,
    parent: str = "",
    *,
    strict: bool = False,
) -> list[DrupalMenuItem]:
    """Return the children of ``parent`` with their subtrees under ``items``.

    Sibling order follows the input. Items whose parent is not in the list
    never get attached and are left out. Input items are not modified, each
    node in the result is a copy.

    A parent cycle is dropped and logged, or raised as ``MenuCycleError``
    when ``strict`` is set.
    """
    if not items:
        return []
    children = index_children(_as_menu_item(item) for item in items)
    return _assemble(children, parent, [parent] if parent else [], strict)
