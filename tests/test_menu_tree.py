"""
Tests for assembling flat menu items into a tree.
"""

import logging

import pytest

from drupal_fetch import DrupalMenuItem, MenuCycleError, build_menu_tree


def ids(tree):
    return [(item.id, ids(item.items)) for item in tree]


class TestBuildMenuTree:
    """Test cases for build_menu_tree."""

    def test_chain(self):
        tree = build_menu_tree(
            [
                {"id": "A", "parent": ""},
                {"id": "B", "parent": "A"},
                {"id": "C", "parent": "B"},
            ]
        )
        assert len(tree) == 1
        assert tree[0].id == "A"
        assert tree[0].items[0].id == "B"
        assert tree[0].items[0].items[0].id == "C"
        assert tree[0].items[0].items[0].items == []

    def test_empty(self):
        assert build_menu_tree([]) == []
        assert build_menu_tree(None) == []

    def test_orphan_is_dropped(self):
        assert build_menu_tree([{"id": "X", "parent": "missing"}]) == []

    def test_sibling_order_is_preserved(self):
        tree = build_menu_tree(
            [
                {"id": "b", "parent": "", "weight": "5"},
                {"id": "a", "parent": "", "weight": "1"},
                {"id": "b2", "parent": "b"},
                {"id": "b1", "parent": "b"},
            ]
        )
        assert ids(tree) == [("b", [("b2", []), ("b1", [])]), ("a", [])]

    def test_children_listed_before_parent(self):
        tree = build_menu_tree([{"id": "child", "parent": "root"}, {"id": "root", "parent": ""}])
        assert ids(tree) == [("root", [("child", [])])]

    def test_custom_root_parent(self):
        items = [{"id": "A", "parent": ""}, {"id": "B", "parent": "A"}, {"id": "C", "parent": "B"}]
        assert ids(build_menu_tree(items, "A")) == [("B", [("C", [])])]

    def test_input_is_not_modified(self):
        items = [DrupalMenuItem(id="A"), DrupalMenuItem(id="B", parent="A")]
        tree = build_menu_tree(items)
        assert items[0].items == []
        assert tree[0] is not items[0]
        assert tree[0].items[0].id == "B"

    def test_extra_fields_are_kept(self):
        tree = build_menu_tree([{"id": "A", "parent": "", "title": "Home", "field_icon": "house"}])
        assert tree[0].title == "Home"
        assert tree[0].model_extra == {"field_icon": "house"}

    def test_null_parent_is_root(self):
        assert ids(build_menu_tree([{"id": "A", "parent": None}])) == [("A", [])]

    def test_mutual_parents_terminate(self):
        assert build_menu_tree([{"id": "A", "parent": "B"}, {"id": "B", "parent": "A"}]) == []

    def test_cycle_through_duplicate_ids_is_dropped(self, caplog):
        items = [
            {"id": "A", "parent": ""},
            {"id": "B", "parent": "A"},
            {"id": "A", "parent": "B"},
        ]
        with caplog.at_level(logging.WARNING, logger="drupal_fetch.menus.tree"):
            tree = build_menu_tree(items)

        assert ids(tree) == [("A", [("B", [])])]
        assert "is its own ancestor" in caplog.text

    def test_cycle_raises_in_strict_mode(self):
        items = [
            {"id": "A", "parent": ""},
            {"id": "B", "parent": "A"},
            {"id": "A", "parent": "B"},
        ]
        with pytest.raises(MenuCycleError) as exc_info:
            build_menu_tree(items, strict=True)
        assert exc_info.value.item_id == "A"
        assert exc_info.value.path == ["A", "B"]
