"""
Standalone validators for layout values.

These never raise; each returns a ``ValidationResult`` (or a bool for the
simple type guards) so callers can check input before editing a tree.
"""
from dataclasses import dataclass, field
import math
from typing import Any, List, Optional

from .paths import is_valid_path
from .types import LayoutDirection, RegionConstraints, SplitConstraints, is_panel_id


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)

    @property
    def reason(self) -> Optional[str]:
        """First error, if any."""
        return self.errors[0] if self.errors else None

    def __bool__(self) -> bool:
        return self.valid


def _result(errors: List[str]) -> ValidationResult:
    return ValidationResult(valid=not errors, errors=errors)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_region_constraints(constraints: RegionConstraints) -> ValidationResult:
    errors = []

    if constraints.min_size is not None:
        if not _is_number(constraints.min_size) or constraints.min_size < 0:
            errors.append("min_size must be a non-negative number")

    if constraints.max_size is not None:
        if not _is_number(constraints.max_size) or constraints.max_size < 0:
            errors.append("max_size must be a non-negative number")
        elif _is_number(constraints.min_size) and constraints.max_size < constraints.min_size:
            errors.append("max_size must be greater than or equal to min_size")

    if constraints.locked is not None and not isinstance(constraints.locked, bool):
        errors.append("locked must be a boolean")

    if constraints.collapsible is not None and not isinstance(constraints.collapsible, bool):
        errors.append("collapsible must be a boolean")

    return _result(errors)


def validate_split_constraints(constraints: SplitConstraints) -> ValidationResult:
    errors = []
    for name in ("leading", "trailing"):
        region = getattr(constraints, name)
        if region is not None:
            errors.extend(f"{name}: {error}" for error in validate_region_constraints(region).errors)
    return _result(errors)


def validate_split_percentage(percentage: Any) -> ValidationResult:
    if not _is_number(percentage) or not math.isfinite(percentage):
        return _result(["Split percentage must be a finite number"])
    if percentage < 0 or percentage > 100:
        return _result(["Split percentage must be between 0 and 100"])
    return _result([])


def validate_layout_direction(direction: Any) -> bool:
    return direction in (LayoutDirection.ROW, LayoutDirection.COLUMN) and isinstance(direction, str)


def validate_layout_path(path: Any) -> bool:
    return isinstance(path, (list, tuple)) and is_valid_path(path)


def validate_panel_id(panel_id: Any) -> bool:
    return is_panel_id(panel_id)


def validate_resize(
    constraints: Optional[SplitConstraints],
    new_percentage: float,
    total_size: float,
) -> ValidationResult:
    """
    Check a resize of a split against its branch constraints.

    ``total_size`` is the length of the split along its direction; the
    leading branch receives ``new_percentage`` of it. Leading constraints are
    checked before trailing ones and the first failure is reported.
    """
    if constraints is None:
        return _result([])

    leading_size = (new_percentage / 100) * total_size
    sizes = (("leading", "Leading", leading_size), ("trailing", "Trailing", total_size - leading_size))

    for name, label, size in sizes:
        region = getattr(constraints, name)
        if region is None:
            continue
        if region.is_locked:
            return _result([f"{label} region is locked"])
        if region.min_size and size < region.min_size:
            return _result([f"{label} region would be smaller than minimum size"])
        if region.max_size and size > region.max_size:
            return _result([f"{label} region would be larger than maximum size"])

    return _result([])


__all__ = [
    "ValidationResult",
    "validate_region_constraints",
    "validate_split_constraints",
    "validate_split_percentage",
    "validate_layout_direction",
    "validate_layout_path",
    "validate_panel_id",
    "validate_resize",
]
