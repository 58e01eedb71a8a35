# -*- coding: utf-8 -*-
"""
Tests for the LayoutTree facade.

Tests cover:
- construction, copy and equality
- queries delegated to the path and constraint helpers
- edits returning new trees (scenarios for the empty tree, removal,
  serialization and resizing)
- defaults taken from layout settings
"""
import json

import pytest

from splitlayout.core.config import config_manager
from splitlayout.layout import (
    DeserializationError,
    EmptyTreeError,
    InvalidNodeError,
    InvalidPercentageError,
    LayoutBranch,
    LayoutDirection,
    LayoutParent,
    LayoutTree,
    PathNotFoundError,
    RegionConstraints,
    TreeNotEmptyError,
)


# =============================================================================
# Construction
# =============================================================================

class TestConstruction:
    """Tests for building and comparing trees."""

    def test_empty(self):
        tree = LayoutTree()
        assert tree.is_empty()
        assert tree.get_root() is None
        assert tree.get_panel_count() == 0
        assert tree.get_depth() == -1

    def test_from_mapping(self, simple_tree):
        assert simple_tree.get_root() == LayoutParent(direction="row", leading="panel1", trailing="panel2")

    def test_invalid_mapping(self):
        with pytest.raises(DeserializationError):
            LayoutTree({"direction": "row", "leading": "a"})

    @pytest.mark.parametrize("root", [3.5, [1, 2], True, object()])
    def test_invalid_root_rejected(self, root):
        with pytest.raises(InvalidNodeError):
            LayoutTree(root)

    def test_integer_panel_root(self):
        tree = LayoutTree(7)
        assert LayoutTree.deserialize(tree.serialize()) == tree

    def test_handle_is_immutable(self, simple_tree):
        with pytest.raises(AttributeError):
            simple_tree.root = "other"

    def test_copy_is_distinct_but_equal(self, nested_tree):
        copied = nested_tree.copy()
        assert copied is not nested_tree
        assert copied.equals(nested_tree)
        assert copied == nested_tree
        assert hash(copied) == hash(nested_tree)

    def test_equals_rejects_other_types(self, simple_tree):
        assert not simple_tree.equals(simple_tree.get_root())
        assert simple_tree != "panel1"

    def test_explicit_default_percentage_is_equal(self, simple_tree):
        assert simple_tree == simple_tree.resize_region([], 50)
        assert simple_tree != simple_tree.resize_region([], 0)

    def test_from_panels(self):
        tree = LayoutTree.from_panels(["a", "b", "c"])
        assert tree.get_panel_ids() == ["a", "b", "c"]
        assert tree.get_root().direction is LayoutDirection.ROW
        assert LayoutTree.from_panels([]).is_empty()

    def test_repr(self):
        assert repr(LayoutTree("solo")) == "LayoutTree('solo')"


# =============================================================================
# Queries
# =============================================================================

class TestQueries:
    """Tests for read-only queries."""

    def test_panels(self, nested_tree):
        assert nested_tree.get_panel_ids() == ["panel1", "panel2", "panel3", "panel4"]
        assert nested_tree.get_panel_count() == 4
        assert nested_tree.has_panel("panel3")
        assert not nested_tree.has_panel("panel9")

    def test_find_and_navigate(self, nested_tree):
        path = nested_tree.find_panel_path("panel3")
        assert path == [LayoutBranch.TRAILING, LayoutBranch.TRAILING, LayoutBranch.LEADING]
        assert nested_tree.get_node_at_path(path) == "panel3"
        assert nested_tree.get_node_at_path_safe(path) == "panel3"

    def test_safe_navigation_errors(self, nested_tree):
        with pytest.raises(PathNotFoundError):
            nested_tree.get_node_at_path_safe(["leading", "leading"])
        with pytest.raises(EmptyTreeError):
            LayoutTree().get_node_at_path_safe([])

    def test_all_paths_respects_settings(self, nested_tree):
        assert len(nested_tree.get_all_paths()) == 7
        config_manager.update("layout", "max_path_depth", 1)
        assert nested_tree.get_all_paths() == [[]]
        assert len(nested_tree.get_all_paths(max_depth=3)) == 5

    def test_constraint_queries(self, constrained_tree):
        assert constrained_tree.is_region_locked(["leading"])
        assert not constrained_tree.is_region_collapsible(["trailing"])
        assert constrained_tree.get_region_constraints(["leading"]) == RegionConstraints(min_size=200, locked=True)
        assert not constrained_tree.can_resize([])
        assert constrained_tree.can_resize(["trailing"], 30)


# =============================================================================
# Edits
# =============================================================================

class TestEdits:
    """Edits return new trees and leave the receiver untouched."""

    def test_split_empty_tree_duplicates_panel(self):
        tree = LayoutTree(None).split_region([], "p1", "row")
        assert tree.get_root() == LayoutParent(
            direction="row", leading="p1", trailing="p1", split_percentage=50
        )

    def test_insert_first_panel(self):
        tree = LayoutTree().insert_first_panel("p1")
        assert tree.get_root() == "p1"
        with pytest.raises(TreeNotEmptyError):
            tree.insert_first_panel("p2")

    def test_split_keeps_node_as_leading(self, nested_tree):
        node = nested_tree.get_node_at_path(["trailing", "trailing"])
        split = nested_tree.split_region(["trailing", "trailing"], "panel5", "column")
        assert split.get_node_at_path(["trailing", "trailing", "leading"]) is node
        assert split.get_node_at_path(["trailing", "trailing", "trailing"]) == "panel5"
        assert nested_tree.get_panel_count() == 4

    def test_remove_promotes_sibling(self):
        tree = LayoutTree({"direction": "row", "leading": "A", "trailing": "B"})
        assert tree.remove_region(["leading"]).get_root() == "B"
        assert tree.get_root().leading == "A"

    def test_resize_rejects_out_of_range(self, simple_tree):
        for value in (-5, 150):
            with pytest.raises(InvalidPercentageError):
                simple_tree.resize_region([], value)

    def test_constraint_edits(self, simple_tree):
        tree = (
            simple_tree.lock_region(["leading"], True)
            .set_min_size(["leading"], 120)
            .set_max_size(["trailing"], 900)
            .set_collapsible(["trailing"], True)
        )
        assert tree.get_region_constraints(["leading"]) == RegionConstraints(min_size=120, locked=True)
        assert tree.get_region_constraints(["trailing"]) == RegionConstraints(max_size=900, collapsible=True)
        assert not tree.can_resize([])
        assert simple_tree.can_resize([])

    def test_move_panel(self, simple_tree):
        # removing panel1 leaves panel2 alone at the root
        with pytest.raises(PathNotFoundError):
            simple_tree.move_panel(["leading"], ["trailing"], "after")
        moved = simple_tree.move_panel(["leading"], [], "after")
        assert moved.get_panel_ids() == ["panel2", "panel1"]


class TestSettingsDefaults:
    """Omitted arguments come from the layout settings."""

    def test_split_defaults(self):
        config_manager.update("layout", "default_direction", "column")
        config_manager.update("layout", "default_split_percentage", 30)
        root = LayoutTree("a").split_region([], "b").get_root()
        assert root.direction is LayoutDirection.COLUMN
        assert root.split_percentage == 30

    def test_default_percentage_serializes_as_integer(self):
        data = LayoutTree("a").split_region([], "b").serialize()
        assert data["tree"]["splitPercentage"] == 50
        assert isinstance(data["tree"]["splitPercentage"], int)
        assert '"splitPercentage": 50}' in LayoutTree("a").split_region([], "b").to_json()

    def test_explicit_arguments_win(self):
        config_manager.update("layout", "default_direction", "column")
        root = LayoutTree("a").split_region([], "b", "row", 40).get_root()
        assert root.direction is LayoutDirection.ROW
        assert root.split_percentage == 40

    def test_json_indent(self, simple_tree):
        assert "\n" not in simple_tree.to_json()
        config_manager.update("layout", "json_indent", 2)
        assert "\n  " in simple_tree.to_json()


# =============================================================================
# Serialization
# =============================================================================

class TestTreeSerialization:
    """Facade round trips."""

    def test_round_trip(self, constrained_tree):
        data = constrained_tree.serialize()
        restored = LayoutTree.deserialize(data)
        assert restored.equals(constrained_tree)
        assert restored.serialize() == data

    def test_json_round_trip(self, nested_tree):
        text = nested_tree.to_json()
        assert json.loads(text)["version"] == "0.2.0"
        assert LayoutTree.from_json(text) == nested_tree

    def test_rejects_unknown_version(self):
        with pytest.raises(DeserializationError, match="9.9.9"):
            LayoutTree.deserialize({"version": "9.9.9", "tree": None})
        assert not LayoutTree.is_valid_serialized_tree({"version": "9.9.9", "tree": None})

    def test_rejects_bad_json(self):
        with pytest.raises(DeserializationError, match="Invalid JSON"):
            LayoutTree.from_json("[")

    def test_clone_is_deep(self, constrained_tree):
        copied = constrained_tree.clone()
        assert copied == constrained_tree
        assert copied.get_root() is not constrained_tree.get_root()
        assert copied.get_region_constraints(["leading"]) is not constrained_tree.get_region_constraints(["leading"])
