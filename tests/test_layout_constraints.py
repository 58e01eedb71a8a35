# -*- coding: utf-8 -*-
"""
Tests for region constraint reads and the constraint value types.
"""
import pytest

from splitlayout.layout.constraints import (
    get_region_constraints,
    is_region_collapsible,
    is_region_locked,
    is_split_locked,
    merge_branch_constraints,
    resolve_region,
)
from splitlayout.layout.errors import InvalidNodeError
from splitlayout.layout.types import (
    LayoutBranch,
    LayoutParent,
    RegionConstraints,
    SplitConstraints,
)


@pytest.fixture
def root(constrained_tree):
    return constrained_tree.get_root()


class TestRegionLookup:
    """Constraints are read from the parent of the addressed node."""

    def test_resolve_region(self, root):
        parent, branch = resolve_region(root, ["leading"])
        assert parent is root
        assert branch is LayoutBranch.LEADING

    def test_resolve_region_misses(self, root):
        assert resolve_region(root, []) is None
        assert resolve_region(root, ["sideways"]) is None
        assert resolve_region(root, ["leading", "leading"]) is None
        assert resolve_region(None, ["leading"]) is None

    def test_get_region_constraints(self, root):
        assert get_region_constraints(root, ["leading"]) == RegionConstraints(min_size=200, locked=True)
        assert get_region_constraints(root, ["trailing"]) == RegionConstraints(collapsible=False)

    def test_unconstrained_regions(self, root):
        assert get_region_constraints(root, []) is None
        assert get_region_constraints(root, ["trailing", "leading"]) is None

    def test_locked_and_collapsible(self, root):
        assert is_region_locked(root, ["leading"])
        assert not is_region_locked(root, ["trailing"])
        assert not is_region_locked(root, [])
        assert not is_region_collapsible(root, ["trailing"])
        assert not is_region_collapsible(None, ["leading"])


class TestSplitLocking:
    """Tests for is_split_locked and merge_branch_constraints."""

    def test_is_split_locked(self, root):
        assert is_split_locked(root)
        assert not is_split_locked(root.trailing)

    def test_merge_creates_constraints(self):
        parent = LayoutParent(direction="row", leading="a", trailing="b")
        merged = merge_branch_constraints(parent, LayoutBranch.TRAILING, max_size=300)
        assert merged.constraints == SplitConstraints(trailing=RegionConstraints(max_size=300))
        assert parent.constraints is None

    def test_merge_keeps_other_fields(self, root):
        merged = merge_branch_constraints(root, LayoutBranch.LEADING, locked=False)
        assert merged.constraints.leading == RegionConstraints(min_size=200, locked=False)
        assert merged.constraints.trailing is root.constraints.trailing


# =============================================================================
# Value types
# =============================================================================

class TestConstraintTypes:
    """Equality rules of the constraint value types."""

    def test_absent_equals_empty(self):
        assert SplitConstraints() == SplitConstraints(leading=RegionConstraints())
        assert hash(SplitConstraints()) == hash(SplitConstraints(trailing=RegionConstraints()))

    def test_parent_equality_ignores_missing_constraints(self):
        bare = LayoutParent(direction="row", leading="a", trailing="b")
        empty = LayoutParent(direction="row", leading="a", trailing="b", constraints=SplitConstraints())
        assert bare == empty

    def test_parent_equality_sees_constraints(self):
        bare = LayoutParent(direction="row", leading="a", trailing="b")
        locked = LayoutParent(
            direction="row", leading="a", trailing="b",
            constraints=SplitConstraints(leading=RegionConstraints(locked=True)),
        )
        assert bare != locked

    def test_default_percentage_equals_fifty(self):
        implicit = LayoutParent(direction="row", leading="a", trailing="b")
        explicit = LayoutParent(direction="row", leading="a", trailing="b", split_percentage=50)
        assert implicit == explicit
        assert hash(implicit) == hash(explicit)
        assert implicit != LayoutParent(direction="row", leading="a", trailing="b", split_percentage=0)

    def test_region_flags(self):
        assert not RegionConstraints().is_locked
        assert RegionConstraints(locked=True).is_locked
        assert RegionConstraints(collapsible=True).is_collapsible
        assert RegionConstraints().is_empty()
        assert not RegionConstraints(min_size=0).is_empty()

    def test_split_constraints_type_checked(self):
        with pytest.raises(InvalidNodeError):
            SplitConstraints(leading={"locked": True})
