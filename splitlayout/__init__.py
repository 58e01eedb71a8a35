"""
splitlayout - Immutable Binary Layout Trees

Tiling layout engine for resizable workspaces: panels live in a binary
split tree that is edited copy-on-write and persisted through a versioned
JSON envelope.
"""

# Core systems
from splitlayout.core.config import (
    ConfigManager,
    AppConfig,
    GeneralSettings,
    LayoutSettings,
    config_manager,
    get_settings,
)
from splitlayout.core.logging import setup_logging

# Layout
from splitlayout.layout import (
    LayoutTree,
    LayoutParent,
    LayoutDirection,
    LayoutBranch,
    InsertPosition,
    RegionConstraints,
    SplitConstraints,
    LayoutActions,
    SERIALIZATION_VERSION,
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
)

__version__ = "0.2.0"

__all__ = [
    # Core
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "LayoutSettings",
    "config_manager",
    "get_settings",
    "setup_logging",

    # Layout
    "LayoutTree",
    "LayoutParent",
    "LayoutDirection",
    "LayoutBranch",
    "InsertPosition",
    "RegionConstraints",
    "SplitConstraints",
    "LayoutActions",
    "SERIALIZATION_VERSION",

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
]
