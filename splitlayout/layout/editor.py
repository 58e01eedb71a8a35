"""
Copy-on-write edits of layout trees.

Every function takes a root node (or None for an empty tree) and returns a
new root. Nodes along the edited path are rebuilt bottom-up; everything else
is shared with the input, which is never modified. Validation happens before
any node is built, so a failed edit leaves nothing behind.
"""
from dataclasses import replace
import math
from typing import Any, List, Optional, Union

from loguru import logger

from .constraints import is_split_locked, merge_branch_constraints
from .errors import (
    EmptyTreeError,
    InvalidConstraintError,
    InvalidNodeError,
    InvalidPercentageError,
    InvalidPositionError,
    NotAPanelError,
    NotAParentError,
    PathNotFoundError,
    RootRegionError,
    SiblingNotFoundError,
    TreeNotEmptyError,
)
from .paths import (
    as_branch,
    get_node_at_path,
    get_other_branch,
    is_valid_path,
    path_to_str,
)
from .types import (
    DEFAULT_SPLIT_PERCENTAGE,
    InsertPosition,
    LayoutBranch,
    LayoutDirection,
    LayoutNode,
    LayoutParent,
    LayoutPath,
    PanelId,
    is_panel_id,
    is_parent,
    is_valid_split_percentage,
)


# =============================================================================
# Helpers
# =============================================================================

def _to_branches(path: LayoutPath) -> List[LayoutBranch]:
    branches = []
    for index, token in enumerate(path):
        branch = as_branch(token)
        if branch is None:
            raise PathNotFoundError(
                f"Invalid branch {token!r} at position {index} of path {path_to_str(path)}",
                list(path[: index + 1]),
            )
        branches.append(branch)
    return branches


def _check_percentage(percentage: Any) -> None:
    if not is_valid_split_percentage(percentage):
        raise InvalidPercentageError(percentage)


def _check_size(size: Any, name: str) -> None:
    if isinstance(size, bool) or not isinstance(size, (int, float)) or not math.isfinite(size) or size < 0:
        raise InvalidConstraintError(f"{name} must be a non-negative finite number, got {size!r}")


def replace_node_at_path(root: LayoutNode, path: LayoutPath, replacement: LayoutNode) -> LayoutNode:
    """
    Return a new tree with the node at ``path`` swapped for ``replacement``.

    Only the splits along ``path`` are rebuilt.
    """
    if not path:
        return replacement
    if not is_parent(root):
        raise PathNotFoundError(f"Cannot navigate path {path_to_str(path)} on a panel", list(path))
    branch = as_branch(path[0])
    if branch is None:
        raise PathNotFoundError(f"Invalid branch {path[0]!r}", list(path))
    updated_child = replace_node_at_path(root.child(branch), path[1:], replacement)
    return root.with_child(branch, updated_child)


# =============================================================================
# Structural edits
# =============================================================================

def split_region(
    root: Optional[LayoutNode],
    path: LayoutPath,
    new_panel_id: PanelId,
    direction: Union[LayoutDirection, str] = LayoutDirection.ROW,
    split_percentage: float = DEFAULT_SPLIT_PERCENTAGE,
) -> LayoutNode:
    """
    Replace the node at ``path`` with a split of that node and ``new_panel_id``.

    The existing node becomes the leading child. Splitting an empty tree at the
    root yields a split whose both children are ``new_panel_id``.

    Raises:
        InvalidPercentageError: ``split_percentage`` outside [0, 100]
        EmptyTreeError: the tree is empty and ``path`` is not the root
        PathNotFoundError: ``path`` does not resolve
    """
    _check_percentage(split_percentage)

    if root is None:
        if path:
            raise EmptyTreeError(f"Cannot split: path {path_to_str(path)} does not exist in an empty tree")
        logger.debug(f"Split empty tree with panel {new_panel_id!r}")
        return LayoutParent(
            direction=direction,
            leading=new_panel_id,
            trailing=new_panel_id,
            split_percentage=split_percentage,
        )

    node = get_node_at_path(root, path)
    if node is None:
        raise PathNotFoundError(f"Cannot split: path {path_to_str(path)} does not exist", list(path))

    new_parent = LayoutParent(
        direction=direction,
        leading=node,
        trailing=new_panel_id,
        split_percentage=split_percentage,
    )
    logger.debug(f"Split region {path_to_str(path) or '<root>'} {new_parent.direction.value} with panel {new_panel_id!r}")
    return replace_node_at_path(root, path, new_parent)


def insert_first_panel(root: Optional[LayoutNode], panel_id: PanelId) -> LayoutNode:
    """Place ``panel_id`` as the single panel of an empty tree."""
    if root is not None:
        raise TreeNotEmptyError("Cannot insert first panel: tree is not empty")
    if not is_panel_id(panel_id):
        raise InvalidNodeError(f"Invalid panel id: {panel_id!r}")
    return panel_id


def remove_region(root: Optional[LayoutNode], path: LayoutPath) -> Optional[LayoutNode]:
    """
    Remove the node at ``path``; its sibling takes the parent's place.

    Removing the root (or anything from an empty tree) leaves an empty tree.

    Raises:
        PathNotFoundError: ``path`` contains a token that is not a branch
        SiblingNotFoundError: the sibling of the removed node does not exist,
            i.e. ``path`` is inconsistent with the tree
    """
    if root is None or not path:
        logger.debug("Removed root region; tree is now empty")
        return None

    branches = _to_branches(path)
    parent_path = branches[:-1]
    sibling_path = parent_path + [get_other_branch(branches[-1])]
    sibling = get_node_at_path(root, sibling_path)
    if sibling is None:
        raise SiblingNotFoundError(
            f"Cannot remove: sibling at path {path_to_str(sibling_path)} not found",
            sibling_path,
        )

    logger.debug(f"Removed region {path_to_str(branches)}, promoted {path_to_str(sibling_path)}")
    return replace_node_at_path(root, parent_path, sibling)


def resize_region(root: Optional[LayoutNode], path: LayoutPath, percentage: float) -> LayoutNode:
    """
    Set the split percentage of the split at ``path``.

    Raises:
        InvalidPercentageError: ``percentage`` is not a finite number in [0, 100]
        EmptyTreeError: the tree is empty
        PathNotFoundError: ``path`` does not resolve
        NotAParentError: ``path`` addresses a panel
    """
    _check_percentage(percentage)

    if root is None:
        raise EmptyTreeError("Cannot resize: tree is empty")

    node = get_node_at_path(root, path)
    if node is None:
        raise PathNotFoundError(f"Cannot resize: path {path_to_str(path)} does not exist", list(path))
    if not is_parent(node):
        raise NotAParentError(
            f"Cannot resize: path {path_to_str(path)} does not point to a parent node", list(path)
        )

    logger.debug(f"Resized region {path_to_str(path) or '<root>'} to {percentage}%")
    return replace_node_at_path(root, path, replace(node, split_percentage=percentage))


def move_panel(
    root: Optional[LayoutNode],
    from_path: LayoutPath,
    to_path: LayoutPath,
    position: Union[InsertPosition, str],
    direction: Union[LayoutDirection, str] = LayoutDirection.ROW,
) -> LayoutNode:
    """
    Move the panel at ``from_path`` next to, or in place of, the node at ``to_path``.

    The panel is removed first (sibling promotion), then ``to_path`` is
    resolved against the resulting tree. ``before`` makes the panel the
    leading child of a new split with the target; ``after`` makes it the
    trailing child; ``replace`` drops the target.

    Raises:
        InvalidPositionError: unknown ``position``
        NotAPanelError: ``from_path`` does not address a panel
        PathNotFoundError: ``to_path`` does not resolve after the removal
        EmptyTreeError: the removal emptied the tree and ``to_path`` is not the root
    """
    try:
        position = InsertPosition(position)
    except ValueError:
        raise InvalidPositionError(position) from None

    panel = get_node_at_path(root, from_path)
    if panel is None or is_parent(panel):
        raise NotAPanelError(
            f"Cannot move: path {path_to_str(from_path)} does not point to a panel", list(from_path)
        )

    remaining = remove_region(root, from_path)
    if remaining is None:
        if to_path:
            raise EmptyTreeError(
                f"Cannot move: target path {path_to_str(to_path)} does not exist once the panel is removed"
            )
        return panel

    target = get_node_at_path(remaining, to_path)
    if target is None:
        raise PathNotFoundError(f"Cannot move: target path {path_to_str(to_path)} does not exist", list(to_path))

    if position is InsertPosition.REPLACE:
        moved = panel
    elif position is InsertPosition.BEFORE:
        moved = LayoutParent(direction=direction, leading=panel, trailing=target,
                             split_percentage=DEFAULT_SPLIT_PERCENTAGE)
    else:
        moved = LayoutParent(direction=direction, leading=target, trailing=panel,
                             split_percentage=DEFAULT_SPLIT_PERCENTAGE)

    logger.debug(
        f"Moved panel {panel!r} from {path_to_str(from_path)} to {path_to_str(to_path) or '<root>'} ({position.value})"
    )
    return replace_node_at_path(remaining, to_path, moved)


# =============================================================================
# Constraint edits
# =============================================================================

def _update_constraints(root: Optional[LayoutNode], path: LayoutPath, action: str, **changes) -> LayoutNode:
    if not path:
        raise RootRegionError(f"Cannot {action}: the root region has no constraints")

    parent_path = list(path[:-1])
    parent = get_node_at_path(root, parent_path)
    if not is_parent(parent):
        raise NotAParentError(
            f"Cannot {action}: parent at path {path_to_str(parent_path)} is not a parent node",
            parent_path,
        )
    branch = as_branch(path[-1])
    if branch is None:
        raise PathNotFoundError(f"Cannot {action}: path {path_to_str(path)} does not exist", list(path))

    logger.debug(f"{action.capitalize()} at {path_to_str(path)}: {changes}")
    updated = merge_branch_constraints(parent, branch, **changes)
    return replace_node_at_path(root, parent_path, updated)


def lock_region(root: Optional[LayoutNode], path: LayoutPath, locked: bool) -> LayoutNode:
    """
    Lock or unlock the region at ``path``.

    Raises:
        RootRegionError: ``path`` is the root
        NotAParentError: the parent of ``path`` is not a split
    """
    if not isinstance(locked, bool):
        raise InvalidConstraintError(f"locked must be a boolean, got {locked!r}")
    return _update_constraints(root, path, "lock", locked=locked)


def set_min_size(root: Optional[LayoutNode], path: LayoutPath, size: float) -> LayoutNode:
    """Set the minimum size of the region at ``path``, keeping its other constraints."""
    _check_size(size, "min_size")
    return _update_constraints(root, path, "set min size", min_size=size)


def set_max_size(root: Optional[LayoutNode], path: LayoutPath, size: float) -> LayoutNode:
    _check_size(size, "max_size")
    return _update_constraints(root, path, "set max size", max_size=size)


def set_collapsible(root: Optional[LayoutNode], path: LayoutPath, collapsible: bool) -> LayoutNode:
    if not isinstance(collapsible, bool):
        raise InvalidConstraintError(f"collapsible must be a boolean, got {collapsible!r}")
    return _update_constraints(root, path, "set collapsible", collapsible=collapsible)


def can_resize(root: Optional[LayoutNode], path: LayoutPath, percentage: Optional[float] = None) -> bool:
    """
    True when ``path`` addresses a split that no locked branch pins down.

    Never raises. A ``percentage``, when given, must also be a valid split
    percentage.
    """
    if percentage is not None and not is_valid_split_percentage(percentage):
        return False
    if not is_valid_path(path):
        return False
    node = get_node_at_path(root, path)
    return is_parent(node) and not is_split_locked(node)


__all__ = [
    "replace_node_at_path",
    "split_region",
    "insert_first_panel",
    "remove_region",
    "resize_region",
    "move_panel",
    "lock_region",
    "set_min_size",
    "set_max_size",
    "set_collapsible",
    "can_resize",
]
