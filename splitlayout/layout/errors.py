"""
Exceptions raised by the layout engine.

Every failure is synchronous and local. An edit either returns a complete new
tree or raises one of these; the source tree is never touched.
"""
from typing import Any, Optional, Sequence


class LayoutError(Exception):
    """Base class for all layout tree errors."""
    pass


class PathNotFoundError(LayoutError, LookupError):
    """A path segment does not exist in the tree."""

    def __init__(self, message: str, path: Optional[Sequence[Any]] = None):
        super().__init__(message)
        self.path = list(path) if path is not None else None


class SiblingNotFoundError(LayoutError, LookupError):
    """
    Removal could not locate the sibling of the removed node.

    Only reachable when the path is inconsistent with the tree, e.g. the
    parent segment addresses a leaf.
    """

    def __init__(self, message: str, path: Optional[Sequence[Any]] = None):
        super().__init__(message)
        self.path = list(path) if path is not None else None


class InvalidPercentageError(LayoutError, ValueError):
    """Split percentage is not a finite number in [0, 100]."""

    def __init__(self, value: Any):
        super().__init__(f"Invalid split percentage: {value}. Must be between 0 and 100.")
        self.value = value


class EmptyTreeError(LayoutError):
    """The operation needs a root node but the tree is empty."""
    pass


class NotAParentError(LayoutError, TypeError):
    """The addressed node is a panel where a split was required."""

    def __init__(self, message: str, path: Optional[Sequence[Any]] = None):
        super().__init__(message)
        self.path = list(path) if path is not None else None


class RootRegionError(LayoutError, ValueError):
    """The root region carries no constraints."""
    pass


class NotAPanelError(LayoutError, TypeError):
    """The addressed node is a split where a panel was required."""

    def __init__(self, message: str, path: Optional[Sequence[Any]] = None):
        super().__init__(message)
        self.path = list(path) if path is not None else None


class InvalidPositionError(LayoutError, ValueError):
    """Unknown insert position token."""

    def __init__(self, position: Any):
        super().__init__(f"Invalid insert position: {getattr(position, 'value', position)}")
        self.position = position


class DeserializationError(LayoutError, ValueError):
    """Malformed envelope, unsupported version or invalid node structure."""
    pass


class InvalidNodeError(LayoutError, ValueError):
    """A split node was constructed with missing or invalid fields."""
    pass


class InvalidConstraintError(LayoutError, ValueError):
    """A constraint value is out of range."""
    pass


class TreeNotEmptyError(LayoutError):
    """The first panel can only be inserted into an empty tree."""
    pass


__all__ = [
    "LayoutError",
    "PathNotFoundError",
    "SiblingNotFoundError",
    "InvalidPercentageError",
    "EmptyTreeError",
    "NotAParentError",
    "RootRegionError",
    "NotAPanelError",
    "InvalidPositionError",
    "DeserializationError",
    "InvalidNodeError",
    "InvalidConstraintError",
    "TreeNotEmptyError",
]
