"""
Binary layout trees.

Panels are arranged in an immutable binary split tree that can be edited
(split, remove, resize, lock, move) without mutating earlier states, and
saved to or restored from a versioned JSON envelope.

Usage:
    from splitlayout.layout import LayoutTree

    tree = LayoutTree.from_panels(["files", "editor", "terminal"])
    tree = tree.lock_region(["leading"], True)
    saved = tree.to_json()
"""
from .types import (
    PanelId,
    LayoutNode,
    LayoutPath,
    LayoutDirection,
    LayoutBranch,
    InsertPosition,
    RegionConstraints,
    SplitConstraints,
    LayoutParent,
    DEFAULT_SPLIT_PERCENTAGE,
    is_parent,
)
from .errors import (
    LayoutError,
    PathNotFoundError,
    SiblingNotFoundError,
    InvalidPercentageError,
    EmptyTreeError,
    NotAParentError,
    RootRegionError,
    NotAPanelError,
    InvalidPositionError,
    DeserializationError,
    InvalidNodeError,
    InvalidConstraintError,
    TreeNotEmptyError,
)
from .paths import (
    get_node_at_path,
    get_node_at_path_safe,
    find_panel_path,
    get_all_paths,
    get_tree_depth,
    get_leaves,
    create_balanced_tree,
)
from .constraints import (
    get_region_constraints,
    is_region_locked,
    is_region_collapsible,
)
from .serialization import (
    SERIALIZATION_VERSION,
    serialize,
    deserialize,
    is_valid_serialized_tree,
    clone,
    to_json,
    from_json,
)
from .tree import LayoutTree
from .actions import LayoutActions, validate_layout_action
from .validation import ValidationResult

__all__ = [
    # Model
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

    # Errors
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

    # Paths
    "get_node_at_path",
    "get_node_at_path_safe",
    "find_panel_path",
    "get_all_paths",
    "get_tree_depth",
    "get_leaves",
    "create_balanced_tree",

    # Constraints
    "get_region_constraints",
    "is_region_locked",
    "is_region_collapsible",

    # Serialization
    "SERIALIZATION_VERSION",
    "serialize",
    "deserialize",
    "is_valid_serialized_tree",
    "clone",
    "to_json",
    "from_json",

    # Facade
    "LayoutTree",
    "LayoutActions",
    "validate_layout_action",
    "ValidationResult",
]
