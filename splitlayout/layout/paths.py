"""
Read-only path navigation over layout trees.

A path is a sequence of branches from the root; the empty path is the root
itself. None of these functions modify the tree.
"""
import math
from typing import Any, List, Optional, Sequence, Union

from .errors import EmptyTreeError, PathNotFoundError
from .types import (
    DEFAULT_SPLIT_PERCENTAGE,
    LayoutBranch,
    LayoutDirection,
    LayoutNode,
    LayoutParent,
    LayoutPath,
    PanelId,
    is_parent,
)


def as_branch(token: Any) -> Optional[LayoutBranch]:
    """Coerce a path token to a branch, or None if it is not one."""
    if isinstance(token, LayoutBranch):
        return token
    if isinstance(token, str):
        try:
            return LayoutBranch(token)
        except ValueError:
            return None
    return None


def is_valid_path(path: Any) -> bool:
    """True if ``path`` is a sequence made only of branch tokens."""
    if isinstance(path, (str, bytes)) or not isinstance(path, Sequence):
        return False
    return all(as_branch(token) is not None for token in path)


def path_to_str(path: LayoutPath) -> str:
    return "/".join(str(getattr(token, "value", token)) for token in path)


def get_other_branch(branch: Union[LayoutBranch, str]) -> LayoutBranch:
    return LayoutBranch.TRAILING if LayoutBranch(branch) is LayoutBranch.LEADING else LayoutBranch.LEADING


def get_other_direction(direction: Union[LayoutDirection, str]) -> LayoutDirection:
    return LayoutDirection.COLUMN if LayoutDirection(direction) is LayoutDirection.ROW else LayoutDirection.ROW


def get_node_at_path(root: Optional[LayoutNode], path: LayoutPath) -> Optional[LayoutNode]:
    """
    Walk ``path`` from ``root``.

    Returns None when the root is None, a token is not a branch, or the path
    runs past a leaf. Never raises.
    """
    node = root
    for token in path:
        if node is None or not is_parent(node):
            return None
        branch = as_branch(token)
        if branch is None:
            return None
        node = node.child(branch)
    return node


def get_node_at_path_safe(root: Optional[LayoutNode], path: LayoutPath) -> LayoutNode:
    """
    Like ``get_node_at_path`` but raises instead of returning None.

    Raises:
        EmptyTreeError: the tree is empty
        PathNotFoundError: a segment of ``path`` does not exist; the message
            names the first sub-path that failed
    """
    if root is None:
        raise EmptyTreeError(f"Cannot navigate path {path_to_str(path)}: tree is empty")

    node = root
    for index, token in enumerate(path):
        branch = as_branch(token)
        if branch is None or not is_parent(node):
            failed = list(path[: index + 1])
            raise PathNotFoundError(
                f"Path {path_to_str(path)} does not exist in the tree "
                f"(no node at {path_to_str(failed)})",
                failed,
            )
        node = node.child(branch)
    return node


def find_panel_path(root: Optional[LayoutNode], panel_id: PanelId) -> Optional[List[LayoutBranch]]:
    """Depth-first search (leading before trailing) for the first leaf equal to ``panel_id``."""
    if root is None:
        return None
    if not is_parent(root):
        return [] if root == panel_id else None

    for branch in (LayoutBranch.LEADING, LayoutBranch.TRAILING):
        sub_path = find_panel_path(root.child(branch), panel_id)
        if sub_path is not None:
            return [branch] + sub_path
    return None


def get_leaves(root: Optional[LayoutNode]) -> List[PanelId]:
    """All panel ids in depth-first order."""
    if root is None:
        return []
    if is_parent(root):
        return get_leaves(root.leading) + get_leaves(root.trailing)
    return [root]


def get_all_paths(root: Optional[LayoutNode], max_depth: int = 10) -> List[List[LayoutBranch]]:
    """
    Pre-order list of every path shorter than ``max_depth``.

    The root's empty path comes first; ``max_depth == 0`` yields nothing.
    """
    paths: List[List[LayoutBranch]] = []
    _collect_paths(root, [], paths, max_depth)
    return paths


def _collect_paths(node, current: List[LayoutBranch], paths: List[List[LayoutBranch]], max_depth: int):
    if node is None or len(current) >= max_depth:
        return
    paths.append(list(current))
    if is_parent(node):
        _collect_paths(node.leading, current + [LayoutBranch.LEADING], paths, max_depth)
        _collect_paths(node.trailing, current + [LayoutBranch.TRAILING], paths, max_depth)


def get_tree_depth(root: Optional[LayoutNode]) -> int:
    """-1 for an empty tree, 0 for a single panel, else the longest branch count."""
    if root is None:
        return -1
    if not is_parent(root):
        return 0
    return 1 + max(get_tree_depth(root.leading), get_tree_depth(root.trailing))


def create_balanced_tree(
    panels: Sequence[PanelId],
    direction: Union[LayoutDirection, str] = LayoutDirection.ROW,
) -> Optional[LayoutNode]:
    """
    Arrange ``panels`` in a tree of minimal depth, keeping their order.

    The leading half receives ``ceil(n / 2)`` panels.
    """
    if not panels:
        return None
    if len(panels) == 1:
        return panels[0]

    midpoint = math.ceil(len(panels) / 2)
    return LayoutParent(
        direction=direction,
        leading=create_balanced_tree(panels[:midpoint], direction),
        trailing=create_balanced_tree(panels[midpoint:], direction),
        split_percentage=DEFAULT_SPLIT_PERCENTAGE,
    )


__all__ = [
    "as_branch",
    "is_valid_path",
    "path_to_str",
    "get_other_branch",
    "get_other_direction",
    "get_node_at_path",
    "get_node_at_path_safe",
    "find_panel_path",
    "get_leaves",
    "get_all_paths",
    "get_tree_depth",
    "create_balanced_tree",
]
