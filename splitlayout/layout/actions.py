"""
Higher-level layout actions built on LayoutTree.

``LayoutActions`` binds a tree and the path of one panel to a callback so a
UI can offer "split this panel", "close this panel" and so on without
handling paths itself. The remaining helpers answer planning questions
(where can a panel go, what would a removal affect) without raising.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union
import uuid

from loguru import logger

from .errors import LayoutError
from .paths import path_to_str
from .tree import LayoutTree
from .types import (
    InsertPosition,
    LayoutBranch,
    LayoutDirection,
    LayoutPath,
    PanelId,
    is_parent,
)
from .validation import ValidationResult

DEFAULT_EXPAND_PERCENTAGE = 80


def generate_panel_id() -> str:
    return f"panel_{uuid.uuid4().hex[:9]}"


class LayoutActions:
    """
    Actions on the panel at ``panel_path`` of ``tree``.

    Each action computes a new tree and hands it to ``on_tree_change``; the
    bound tree itself never changes.
    """

    def __init__(
        self,
        tree: LayoutTree,
        panel_path: LayoutPath,
        on_tree_change: Callable[[LayoutTree], None],
    ):
        self.tree = tree
        self.panel_path = list(panel_path)
        self._on_tree_change = on_tree_change

    def _emit(self, new_tree: LayoutTree) -> None:
        self._on_tree_change(new_tree)

    def split_current_region(
        self,
        direction: Union[LayoutDirection, str],
        new_panel_id: Optional[PanelId] = None,
    ) -> PanelId:
        """Split the bound panel; returns the id of the new panel."""
        panel_id = new_panel_id if new_panel_id is not None else generate_panel_id()
        self._emit(self.tree.split_region(self.panel_path, panel_id, direction))
        return panel_id

    def remove_current_region(self) -> None:
        self._emit(self.tree.remove_region(self.panel_path))

    def resize_current_region(self, percentage: float) -> None:
        self._emit(self.tree.resize_region(self.panel_path, percentage))

    def expand_current_region(self, percentage: Optional[float] = None) -> None:
        target = DEFAULT_EXPAND_PERCENTAGE if percentage is None else percentage
        self._emit(self.tree.resize_region(self.panel_path, target))

    def lock_current_region(self, locked: bool) -> None:
        self._emit(self.tree.lock_region(self.panel_path, locked))

    def move_panel(self, target_path: LayoutPath, position: Union[InsertPosition, str]) -> None:
        self._emit(self.tree.move_panel(self.panel_path, target_path, position))


def get_best_split_direction(width: float, height: float) -> LayoutDirection:
    """Split along the longer dimension."""
    return LayoutDirection.ROW if width > height else LayoutDirection.COLUMN


def calculate_optimal_split(leading_min_size: float, trailing_min_size: float, total_size: float) -> float:
    """
    Split percentage honouring both minimum sizes.

    When the minimums do not fit, the trailing branch keeps its minimum and
    the result is clamped to [0, 100]; otherwise space is shared in
    proportion to the minimums, clamped to [10, 90].
    """
    total_min_size = leading_min_size + trailing_min_size

    if total_min_size >= total_size:
        if total_size <= 0:
            return 0.0
        return max(0.0, min(100.0, (total_size - trailing_min_size) / total_size * 100))

    leading_ratio = leading_min_size / total_min_size
    return max(10.0, min(90.0, leading_ratio * 100))


def can_split_region(tree: LayoutTree, path: LayoutPath) -> bool:
    """True when ``path`` addresses a panel."""
    try:
        node = tree.get_node_at_path_safe(path)
    except LayoutError:
        return False
    return not is_parent(node)


def find_resizable_parent(tree: LayoutTree, path: LayoutPath) -> Optional[List[LayoutBranch]]:
    """Nearest proper ancestor of ``path`` that can be resized, or None."""
    for length in range(len(path) - 1, -1, -1):
        parent_path = list(path[:length])
        if tree.can_resize(parent_path):
            return parent_path
    return None


def get_insertion_positions(tree: LayoutTree, target_path: LayoutPath) -> List[InsertPosition]:
    positions = [InsertPosition.REPLACE]
    if can_split_region(tree, target_path):
        positions.extend([InsertPosition.BEFORE, InsertPosition.AFTER])
    return positions


@dataclass
class RemovalImpact:
    affected_panels: List[PanelId] = field(default_factory=list)
    sibling_will_expand: bool = False
    new_tree_depth: int = -1


def calculate_removal_impact(tree: LayoutTree, path: LayoutPath) -> RemovalImpact:
    """Describe what ``remove_region(path)`` would do, without raising."""
    original_panels = tree.get_panel_ids()

    try:
        new_tree = tree.remove_region(path)
    except LayoutError as e:
        logger.debug(f"Removal of {path_to_str(path)} would fail: {e}")
        return RemovalImpact(new_tree_depth=tree.get_depth())

    new_panels = new_tree.get_panel_ids()
    return RemovalImpact(
        affected_panels=[panel for panel in original_panels if panel not in new_panels],
        sibling_will_expand=len(new_panels) == len(original_panels) - 1,
        new_tree_depth=new_tree.get_depth(),
    )


def validate_layout_action(tree: LayoutTree, action: str, path: LayoutPath, *args: Any) -> ValidationResult:
    """
    Check whether ``action`` (a ``LayoutActions`` method name) makes sense
    for the panel at ``path``.
    """
    if action == "split_current_region":
        if not can_split_region(tree, path):
            return ValidationResult(False, ["Region cannot be split"])

    elif action == "remove_current_region":
        if tree.get_panel_count() <= 1:
            return ValidationResult(False, ["Cannot remove the last panel"])

    elif action in ("resize_current_region", "expand_current_region"):
        percentage = args[0] if args else None
        if not tree.can_resize(path, percentage):
            return ValidationResult(False, ["Region cannot be resized to this percentage"])

    elif action == "lock_current_region":
        pass

    elif action == "move_panel":
        target_path = args[0] if args else None
        if target_path is not None and _values(target_path) == _values(path):
            return ValidationResult(False, ["Cannot move panel to itself"])

    else:
        return ValidationResult(False, ["Unknown action"])

    return ValidationResult(True)


def _values(path: LayoutPath) -> List[Any]:
    return [getattr(token, "value", token) for token in path]


__all__ = [
    "LayoutActions",
    "RemovalImpact",
    "DEFAULT_EXPAND_PERCENTAGE",
    "generate_panel_id",
    "get_best_split_direction",
    "calculate_optimal_split",
    "can_split_region",
    "find_resizable_parent",
    "get_insertion_positions",
    "calculate_removal_impact",
    "validate_layout_action",
]
