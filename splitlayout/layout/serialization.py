"""
Versioned wire format for layout trees.

Envelope::

    {"version": "0.2.0", "tree": <node or null>}

Panels serialize as their id; splits as ``{"direction", "leading",
"trailing"}`` plus ``"splitPercentage"`` and ``"constraints"`` when set.
The version must match exactly; there is no migration between versions.
"""
import json
import math
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger

from .errors import DeserializationError
from .paths import path_to_str
from .types import (
    LayoutBranch,
    LayoutNode,
    LayoutParent,
    RegionConstraints,
    SplitConstraints,
    is_panel_id,
    is_parent,
    is_valid_split_percentage,
)

SERIALIZATION_VERSION = "0.2.0"

# (attribute, wire key)
_SIZE_FIELDS = (("min_size", "minSize"), ("max_size", "maxSize"))
_FLAG_FIELDS = (("locked", "locked"), ("collapsible", "collapsible"))
_CONSTRAINT_FIELDS = _SIZE_FIELDS + _FLAG_FIELDS


# =============================================================================
# Serialize
# =============================================================================

def serialize(root: Optional[LayoutNode]) -> Dict[str, Any]:
    """Wrap a pre-order copy of ``root`` in a versioned envelope."""
    return {
        "version": SERIALIZATION_VERSION,
        "tree": serialize_node(root),
    }


def serialize_node(node: Optional[LayoutNode]) -> Any:
    if node is None:
        return None
    if not is_parent(node):
        return node

    data: Dict[str, Any] = {
        "direction": node.direction.value,
        "leading": serialize_node(node.leading),
        "trailing": serialize_node(node.trailing),
    }
    if node.split_percentage is not None:
        data["splitPercentage"] = node.split_percentage
    if node.constraints is not None:
        data["constraints"] = _serialize_split_constraints(node.constraints)
    return data


def _serialize_split_constraints(constraints: SplitConstraints) -> Dict[str, Any]:
    data = {}
    for branch in LayoutBranch:
        region = constraints.for_branch(branch)
        if region is not None:
            data[branch.value] = {
                wire: getattr(region, attr)
                for attr, wire in _CONSTRAINT_FIELDS
                if getattr(region, attr) is not None
            }
    return data


# =============================================================================
# Deserialize
# =============================================================================

def deserialize(data: Any) -> Optional[LayoutNode]:
    """
    Validate an envelope and rebuild its tree.

    Checks, in order: the envelope is an object, ``version`` is present and
    matches ``SERIALIZATION_VERSION``, ``tree`` is present, and every node is
    well formed.

    Raises:
        DeserializationError: describing the first violation found
    """
    if not isinstance(data, Mapping):
        raise DeserializationError("Invalid serialized data: must be an object")

    version = data.get("version")
    if version is None or version == "":
        raise DeserializationError("Invalid serialized data: missing version")

    if version != SERIALIZATION_VERSION:
        raise DeserializationError(
            f"Unsupported serialization version: {version}. Expected: {SERIALIZATION_VERSION}."
        )

    if "tree" not in data:
        raise DeserializationError("Invalid serialized data: missing tree property")

    return node_from_dict(data["tree"])


def node_from_dict(data: Any) -> Optional[LayoutNode]:
    """Rebuild a bare wire-format node (no envelope)."""
    try:
        return _parse_node(data, [])
    except RecursionError:
        raise DeserializationError("Invalid serialized data: tree nesting too deep") from None


def _where(path: List[LayoutBranch]) -> str:
    return path_to_str(path) or "<root>"


def _parse_node(data: Any, path: List[LayoutBranch]) -> Optional[LayoutNode]:
    if data is None:
        return None
    if is_panel_id(data):
        return data
    if not isinstance(data, Mapping):
        raise DeserializationError(
            f"Invalid node at {_where(path)}: expected a panel id or an object, got {type(data).__name__}"
        )

    missing = [key for key in ("direction", "leading", "trailing") if key not in data]
    if missing:
        raise DeserializationError(
            f"Invalid parent node at {_where(path)}: missing required properties {', '.join(missing)}"
        )

    direction = data["direction"]
    if not isinstance(direction, str) or direction not in ("row", "column"):
        raise DeserializationError(
            f"Invalid direction at {_where(path)}: {direction!r}. Must be 'row' or 'column'"
        )

    if data["leading"] is None or data["trailing"] is None:
        raise DeserializationError(f"Invalid parent node at {_where(path)}: children cannot be null")

    split_percentage = data.get("splitPercentage")
    if "splitPercentage" in data and not is_valid_split_percentage(split_percentage):
        raise DeserializationError(
            f"Invalid split percentage at {_where(path)}: {split_percentage}. Must be between 0 and 100"
        )

    return LayoutParent(
        direction=direction,
        leading=_parse_node(data["leading"], path + [LayoutBranch.LEADING]),
        trailing=_parse_node(data["trailing"], path + [LayoutBranch.TRAILING]),
        split_percentage=split_percentage,
        constraints=_parse_split_constraints(data.get("constraints"), path),
    )


def _parse_split_constraints(data: Any, path: List[LayoutBranch]) -> Optional[SplitConstraints]:
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise DeserializationError(f"Invalid constraints at {_where(path)}: must be an object")

    unknown = [key for key in data if key not in ("leading", "trailing")]
    if unknown:
        raise DeserializationError(
            f"Invalid constraints at {_where(path)}: unknown branches {', '.join(map(str, unknown))}"
        )

    regions = {}
    for branch in LayoutBranch:
        raw = data.get(branch.value)
        regions[branch.value] = None if raw is None else _parse_region_constraints(raw, path, branch)
    return SplitConstraints(**regions)


def _parse_region_constraints(data: Any, path: List[LayoutBranch], branch: LayoutBranch) -> RegionConstraints:
    where = f"{_where(path)} ({branch.value})"
    if not isinstance(data, Mapping):
        raise DeserializationError(f"Invalid constraints at {where}: must be an object")

    known = {wire for _, wire in _CONSTRAINT_FIELDS}
    ignored = [key for key in data if key not in known]
    if ignored:
        logger.warning(f"Ignoring unknown constraint fields at {where}: {', '.join(map(str, ignored))}")

    values = {}
    for attr, wire in _SIZE_FIELDS:
        value = data.get(wire)
        if value is not None and (
            isinstance(value, bool) or not isinstance(value, (int, float))
            or not math.isfinite(value) or value < 0
        ):
            raise DeserializationError(f"Invalid {wire} at {where}: must be a non-negative number")
        values[attr] = value
    for attr, wire in _FLAG_FIELDS:
        value = data.get(wire)
        if value is not None and not isinstance(value, bool):
            raise DeserializationError(f"Invalid {wire} at {where}: must be a boolean")
        values[attr] = value
    return RegionConstraints(**values)


def is_valid_serialized_tree(data: Any) -> bool:
    """Same checks as ``deserialize``, reported as a boolean."""
    try:
        deserialize(data)
    except DeserializationError:
        return False
    return True


# =============================================================================
# Helpers
# =============================================================================

def clone(root: Optional[LayoutNode]) -> Optional[LayoutNode]:
    """Deep copy through a full serialize/deserialize round trip."""
    return deserialize(serialize(root))


def to_json(root: Optional[LayoutNode], indent: Optional[int] = None) -> str:
    return json.dumps(serialize(root), indent=indent)


def from_json(text: str) -> Optional[LayoutNode]:
    """
    Parse JSON text and deserialize it.

    Raises:
        DeserializationError: the text is not valid JSON or not a valid tree
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise DeserializationError(f"Invalid JSON: {e}") from e
    return deserialize(data)


__all__ = [
    "SERIALIZATION_VERSION",
    "serialize",
    "serialize_node",
    "deserialize",
    "node_from_dict",
    "is_valid_serialized_tree",
    "clone",
    "to_json",
    "from_json",
]
