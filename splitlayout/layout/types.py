"""
Node model for binary layout trees.

A layout node is either a panel id (leaf) or a ``LayoutParent`` that splits
its space between a ``leading`` and a ``trailing`` child. All node types are
frozen; edits build new nodes and share untouched subtrees.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Sequence, Tuple, Union
import math

from .errors import InvalidNodeError

PanelId = Union[str, int]

DEFAULT_SPLIT_PERCENTAGE = 50


class LayoutDirection(str, Enum):
    """Split direction: ``row`` places children side by side, ``column`` stacks them."""
    ROW = "row"
    COLUMN = "column"


class LayoutBranch(str, Enum):
    """One of the two children of a split."""
    LEADING = "leading"
    TRAILING = "trailing"


class InsertPosition(str, Enum):
    """Where a moved panel lands relative to the target node."""
    REPLACE = "replace"
    BEFORE = "before"
    AFTER = "after"


LayoutPath = Sequence[Union[LayoutBranch, str]]


def is_panel_id(value: Any) -> bool:
    """Panel ids are strings or integers (booleans excluded)."""
    return isinstance(value, (str, int)) and not isinstance(value, bool)


def is_valid_split_percentage(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and 0 <= value <= 100


def normalize_split_percentage(value: Optional[float]) -> float:
    return DEFAULT_SPLIT_PERCENTAGE if value is None else value


@dataclass(frozen=True)
class RegionConstraints:
    """
    Editing constraints of one branch of a split.

    Unset fields mean "unconstrained"; unset flags read as False.
    """
    min_size: Optional[float] = None
    max_size: Optional[float] = None
    locked: Optional[bool] = None
    collapsible: Optional[bool] = None

    @property
    def is_locked(self) -> bool:
        return bool(self.locked)

    @property
    def is_collapsible(self) -> bool:
        return bool(self.collapsible)

    def merge(self, **changes) -> "RegionConstraints":
        """Return a copy with ``changes`` applied and every other field kept."""
        return replace(self, **changes)

    def is_empty(self) -> bool:
        return self == RegionConstraints()


_UNCONSTRAINED = RegionConstraints()


@dataclass(frozen=True, eq=False)
class SplitConstraints:
    """Per-branch constraints stored on the owning split."""
    leading: Optional[RegionConstraints] = None
    trailing: Optional[RegionConstraints] = None

    def __post_init__(self):
        for name in ("leading", "trailing"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, RegionConstraints):
                raise InvalidNodeError(
                    f"Invalid {name} constraints: expected RegionConstraints, got {type(value).__name__}"
                )

    def for_branch(self, branch: Union[LayoutBranch, str]) -> Optional[RegionConstraints]:
        return getattr(self, LayoutBranch(branch).value)

    def with_branch(
        self, branch: Union[LayoutBranch, str], constraints: Optional[RegionConstraints]
    ) -> "SplitConstraints":
        return replace(self, **{LayoutBranch(branch).value: constraints})

    def _normalized(self) -> Tuple[RegionConstraints, RegionConstraints]:
        return (self.leading or _UNCONSTRAINED, self.trailing or _UNCONSTRAINED)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SplitConstraints):
            return NotImplemented
        return self._normalized() == other._normalized()

    def __hash__(self) -> int:
        return hash(self._normalized())


_NO_CONSTRAINTS = SplitConstraints()


@dataclass(frozen=True, eq=False)
class LayoutParent:
    """
    Internal node of a layout tree.

    Both children are mandatory. ``split_percentage`` is the share of space
    given to ``leading``; ``None`` means the default of 50 and compares equal
    to an explicit 50.
    """
    direction: LayoutDirection
    leading: "LayoutNode"
    trailing: "LayoutNode"
    split_percentage: Optional[float] = None
    constraints: Optional[SplitConstraints] = None

    def __post_init__(self):
        try:
            direction = LayoutDirection(self.direction)
        except ValueError:
            raise InvalidNodeError(
                f"Invalid direction: {self.direction!r}. Must be 'row' or 'column'"
            ) from None
        object.__setattr__(self, "direction", direction)

        for name in ("leading", "trailing"):
            child = getattr(self, name)
            if child is None:
                raise InvalidNodeError(f"Invalid parent node: {name} child is missing")
            if not isinstance(child, LayoutParent) and not is_panel_id(child):
                raise InvalidNodeError(
                    f"Invalid {name} child: expected a panel id or LayoutParent, got {type(child).__name__}"
                )

        if self.split_percentage is not None and not is_valid_split_percentage(self.split_percentage):
            raise InvalidNodeError(
                f"Invalid split percentage: {self.split_percentage}. Must be between 0 and 100"
            )

        if self.constraints is not None and not isinstance(self.constraints, SplitConstraints):
            raise InvalidNodeError(
                f"Invalid constraints: expected SplitConstraints, got {type(self.constraints).__name__}"
            )

    @property
    def effective_split_percentage(self) -> float:
        return normalize_split_percentage(self.split_percentage)

    def child(self, branch: Union[LayoutBranch, str]) -> "LayoutNode":
        return getattr(self, LayoutBranch(branch).value)

    def with_child(self, branch: Union[LayoutBranch, str], node: "LayoutNode") -> "LayoutParent":
        return replace(self, **{LayoutBranch(branch).value: node})

    def branch_constraints(self, branch: Union[LayoutBranch, str]) -> Optional[RegionConstraints]:
        if self.constraints is None:
            return None
        return self.constraints.for_branch(branch)

    def _key(self) -> tuple:
        return (
            self.direction,
            self.effective_split_percentage,
            self.constraints or _NO_CONSTRAINTS,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, LayoutParent):
            return NotImplemented
        return (
            self._key() == other._key()
            and self.leading == other.leading
            and self.trailing == other.trailing
        )

    def __hash__(self) -> int:
        return hash((self._key(), self.leading, self.trailing))


LayoutNode = Union[PanelId, LayoutParent]


def is_parent(node: Any) -> bool:
    """Single discriminant between the two node variants."""
    return isinstance(node, LayoutParent)


__all__ = [
    "PanelId",
    "LayoutNode",
    "LayoutPath",
    "LayoutDirection",
    "LayoutBranch",
    "InsertPosition",
    "RegionConstraints",
    "SplitConstraints",
    "LayoutParent",
    "DEFAULT_SPLIT_PERCENTAGE",
    "is_parent",
    "is_panel_id",
    "is_valid_split_percentage",
    "normalize_split_percentage",
]
