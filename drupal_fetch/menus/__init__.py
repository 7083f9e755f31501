"""Menu tree assembly."""

from .tree import build_menu_tree, index_children

__all__ = ["build_menu_tree", "index_children"]
