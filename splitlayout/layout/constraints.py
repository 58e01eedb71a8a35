"""
Per-branch region constraints.

Constraints are not kept in a separate table: each split stores the
constraints of its two children, so a path's constraints are read from the
parent of the addressed node. The root region has no parent and is never
constrained.
"""
from dataclasses import replace
from typing import Optional, Tuple

from .paths import as_branch, get_node_at_path
from .types import (
    LayoutBranch,
    LayoutNode,
    LayoutParent,
    LayoutPath,
    RegionConstraints,
    SplitConstraints,
    is_parent,
)


def resolve_region(root: Optional[LayoutNode], path: LayoutPath) -> Optional[Tuple[LayoutParent, LayoutBranch]]:
    """Return the owning split and branch of the region at ``path``, or None."""
    if not path:
        return None
    branch = as_branch(path[-1])
    if branch is None:
        return None
    parent = get_node_at_path(root, path[:-1])
    if not is_parent(parent):
        return None
    return parent, branch


def get_region_constraints(root: Optional[LayoutNode], path: LayoutPath) -> Optional[RegionConstraints]:
    region = resolve_region(root, path)
    if region is None:
        return None
    parent, branch = region
    return parent.branch_constraints(branch)


def is_region_locked(root: Optional[LayoutNode], path: LayoutPath) -> bool:
    constraints = get_region_constraints(root, path)
    return constraints.is_locked if constraints else False


def is_region_collapsible(root: Optional[LayoutNode], path: LayoutPath) -> bool:
    constraints = get_region_constraints(root, path)
    return constraints.is_collapsible if constraints else False


def is_split_locked(parent: LayoutParent) -> bool:
    """True when either branch of ``parent`` is locked."""
    return any(
        (parent.branch_constraints(branch) or RegionConstraints()).is_locked
        for branch in LayoutBranch
    )


def merge_branch_constraints(parent: LayoutParent, branch: LayoutBranch, **changes) -> LayoutParent:
    """
    Return a copy of ``parent`` with ``changes`` merged into one branch's constraints.

    Fields not named in ``changes`` keep their current values.
    """
    current = parent.branch_constraints(branch) or RegionConstraints()
    split_constraints = (parent.constraints or SplitConstraints()).with_branch(
        branch, current.merge(**changes)
    )
    return replace(parent, constraints=split_constraints)


__all__ = [
    "resolve_region",
    "get_region_constraints",
    "is_region_locked",
    "is_region_collapsible",
    "is_split_locked",
    "merge_branch_constraints",
]
