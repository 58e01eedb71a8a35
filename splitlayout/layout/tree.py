"""
LayoutTree - immutable handle over a binary layout tree.

A LayoutTree wraps a root node (or None for an empty tree). Reads answer
questions about the tree; edits return a brand-new LayoutTree and leave this
one untouched.

Example:
    tree = LayoutTree("editor")
    tree = tree.split_region([], "terminal", "column")
    tree = tree.resize_region([], 70)

    # Save
    text = tree.to_json(indent=2)

    # Restore
    restored = LayoutTree.from_json(text)
    assert restored == tree
"""
from typing import Any, List, Mapping, Optional, Sequence, Union

from loguru import logger

from ..core.config import get_settings
from . import constraints as _constraints
from . import editor as _editor
from . import paths as _paths
from . import serialization as _serialization
from .errors import DeserializationError, InvalidNodeError
from .types import (
    InsertPosition,
    LayoutBranch,
    LayoutDirection,
    LayoutNode,
    LayoutPath,
    PanelId,
    RegionConstraints,
    is_panel_id,
    is_parent,
)


class LayoutTree:
    """
    Immutable binary tree of panels.

    Every edit allocates new splits along the edited path and shares the rest
    of the tree with this instance, so handles are safe to keep and to read
    from several threads.

    Attributes:
        root: Root node, or None for an empty tree
    """

    __slots__ = ("_root",)

    def __init__(self, root: Union[LayoutNode, Mapping[str, Any], None] = None):
        """
        Create a tree.

        Args:
            root: A panel id, a LayoutParent, a wire-format mapping
                (``{"direction": ..., "leading": ..., "trailing": ...}``),
                or None for an empty tree

        Raises:
            DeserializationError: ``root`` is a mapping that is not a valid node
            InvalidNodeError: ``root`` is neither a panel id, a LayoutParent nor None
        """
        if isinstance(root, Mapping):
            root = _serialization.node_from_dict(root)
        elif root is not None and not is_panel_id(root) and not is_parent(root):
            raise InvalidNodeError(
                f"Invalid root node: expected a panel id or LayoutParent, got {type(root).__name__}"
            )
        object.__setattr__(self, "_root", root)

    def __setattr__(self, name, value):
        raise AttributeError("LayoutTree is immutable")

    @property
    def root(self) -> Optional[LayoutNode]:
        return self._root

    def _with_root(self, root: Optional[LayoutNode]) -> "LayoutTree":
        return LayoutTree(root)

    # =========================================================================
    # Basic queries
    # =========================================================================

    def get_root(self) -> Optional[LayoutNode]:
        return self._root

    def is_empty(self) -> bool:
        return self._root is None

    def copy(self) -> "LayoutTree":
        """New handle over the same root; not a deep clone."""
        return LayoutTree(self._root)

    def equals(self, other: "LayoutTree") -> bool:
        """
        Structural comparison.

        An absent split percentage counts as 50, absent constraints as
        unconstrained.
        """
        if not isinstance(other, LayoutTree):
            return False
        return self._root == other._root

    def __eq__(self, other) -> bool:
        if not isinstance(other, LayoutTree):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self._root)

    def __repr__(self) -> str:
        return f"LayoutTree({self._root!r})"

    def get_panel_ids(self) -> List[PanelId]:
        """All panel ids, depth-first, leading before trailing."""
        return _paths.get_leaves(self._root)

    def has_panel(self, panel_id: PanelId) -> bool:
        return self.find_panel_path(panel_id) is not None

    def get_panel_count(self) -> int:
        return len(self.get_panel_ids())

    def find_panel_path(self, panel_id: PanelId) -> Optional[List[LayoutBranch]]:
        return _paths.find_panel_path(self._root, panel_id)

    def get_node_at_path(self, path: LayoutPath) -> Optional[LayoutNode]:
        return _paths.get_node_at_path(self._root, path)

    def get_node_at_path_safe(self, path: LayoutPath) -> LayoutNode:
        """
        Node at ``path``.

        Raises:
            EmptyTreeError: the tree is empty
            PathNotFoundError: ``path`` does not exist
        """
        return _paths.get_node_at_path_safe(self._root, path)

    def get_all_paths(self, max_depth: Optional[int] = None) -> List[List[LayoutBranch]]:
        if max_depth is None:
            max_depth = get_settings().max_path_depth
        return _paths.get_all_paths(self._root, max_depth)

    def get_depth(self) -> int:
        return _paths.get_tree_depth(self._root)

    # =========================================================================
    # Constraints
    # =========================================================================

    def is_region_locked(self, path: LayoutPath) -> bool:
        return _constraints.is_region_locked(self._root, path)

    def is_region_collapsible(self, path: LayoutPath) -> bool:
        return _constraints.is_region_collapsible(self._root, path)

    def get_region_constraints(self, path: LayoutPath) -> Optional[RegionConstraints]:
        return _constraints.get_region_constraints(self._root, path)

    def can_resize(self, path: LayoutPath, percentage: Optional[float] = None) -> bool:
        return _editor.can_resize(self._root, path, percentage)

    # =========================================================================
    # Edits
    # =========================================================================

    def split_region(
        self,
        path: LayoutPath,
        new_panel_id: PanelId,
        direction: Union[LayoutDirection, str, None] = None,
        split_percentage: Optional[float] = None,
    ) -> "LayoutTree":
        """
        Split the node at ``path``; it becomes the leading child and
        ``new_panel_id`` the trailing one.

        Direction and percentage default to the configured layout settings
        (``row`` and 50 unless changed).
        """
        settings = get_settings()
        if direction is None:
            direction = settings.default_direction
        if split_percentage is None:
            split_percentage = settings.default_split_percentage
        return self._with_root(
            _editor.split_region(self._root, path, new_panel_id, direction, split_percentage)
        )

    def insert_first_panel(self, panel_id: PanelId) -> "LayoutTree":
        """Tree holding only ``panel_id``; this tree must be empty."""
        return self._with_root(_editor.insert_first_panel(self._root, panel_id))

    def remove_region(self, path: LayoutPath) -> "LayoutTree":
        return self._with_root(_editor.remove_region(self._root, path))

    def resize_region(self, path: LayoutPath, percentage: float) -> "LayoutTree":
        return self._with_root(_editor.resize_region(self._root, path, percentage))

    def lock_region(self, path: LayoutPath, locked: bool) -> "LayoutTree":
        return self._with_root(_editor.lock_region(self._root, path, locked))

    def set_min_size(self, path: LayoutPath, size: float) -> "LayoutTree":
        return self._with_root(_editor.set_min_size(self._root, path, size))

    def set_max_size(self, path: LayoutPath, size: float) -> "LayoutTree":
        return self._with_root(_editor.set_max_size(self._root, path, size))

    def set_collapsible(self, path: LayoutPath, collapsible: bool) -> "LayoutTree":
        return self._with_root(_editor.set_collapsible(self._root, path, collapsible))

    def move_panel(
        self,
        from_path: LayoutPath,
        to_path: LayoutPath,
        position: Union[InsertPosition, str],
        direction: Union[LayoutDirection, str, None] = None,
    ) -> "LayoutTree":
        if direction is None:
            direction = get_settings().default_direction
        return self._with_root(_editor.move_panel(self._root, from_path, to_path, position, direction))

    # =========================================================================
    # Serialization
    # =========================================================================

    def serialize(self) -> dict:
        return _serialization.serialize(self._root)

    def to_json(self, indent: Optional[int] = None) -> str:
        if indent is None:
            indent = get_settings().json_indent
        return _serialization.to_json(self._root, indent)

    def clone(self) -> "LayoutTree":
        """Deep copy sharing no nodes with this tree."""
        return LayoutTree(_serialization.clone(self._root))

    @classmethod
    def deserialize(cls, data: Any) -> "LayoutTree":
        """
        Rebuild a tree from a serialized envelope.

        Raises:
            DeserializationError: the envelope or its tree is invalid
        """
        try:
            return cls(_serialization.deserialize(data))
        except DeserializationError as e:
            logger.warning(f"Rejected serialized layout: {e}")
            raise

    @classmethod
    def from_json(cls, text: str) -> "LayoutTree":
        try:
            return cls(_serialization.from_json(text))
        except DeserializationError as e:
            logger.warning(f"Rejected layout JSON: {e}")
            raise

    @staticmethod
    def is_valid_serialized_tree(data: Any) -> bool:
        return _serialization.is_valid_serialized_tree(data)

    @classmethod
    def from_panels(
        cls,
        panels: Sequence[PanelId],
        direction: Union[LayoutDirection, str, None] = None,
    ) -> "LayoutTree":
        """Balanced tree over ``panels``, keeping their order."""
        if direction is None:
            direction = get_settings().default_direction
        return cls(_paths.create_balanced_tree(list(panels), direction))


__all__ = ["LayoutTree"]
