"""
Configuration validation checks.

Validates intersection inputs before any geometry is built:
- Positive site size (CFG-001)
- Non-negative curb profiles (CFG-002)
- Positive corner sizes (CFG-003)
- Positive footpath depths (CFG-004)
- Finite values everywhere (CFG-005)
"""

import math
from typing import List, Optional

from junction_mesher.generators.intersection.intersection_model import IntersectionParameters
from junction_mesher.generators.intersection.topology import CornerId, Side
from junction_mesher.generators.profiles.geometry_config import CurbGutter

from ..core import ValidationIssue, ValidationResult, ValidationStage
from ..rules import CFG_001, CFG_002, CFG_003, CFG_004, CFG_005

_CURB_FIELDS = ('skirt_out', 'skirt_down', 'gutter_depth', 'gutter_width')


def _finite(value: float, field: str, location: Optional[str]) -> List[ValidationIssue]:
    if math.isfinite(value):
        return []
    return [CFG_005.issue(location=location, field=field, value=value)]


def check_site_size(size_x: float, size_z: float) -> List[ValidationIssue]:
    """Both site extents must be finite and strictly positive."""
    issues = []
    for axis, value in (('size_x', size_x), ('size_z', size_z)):
        finite = _finite(value, axis, 'site')
        if finite:
            issues.extend(finite)
        elif value <= 0.0:
            issues.append(CFG_001.issue(location='site', axis=axis, value=value))
    return issues


def check_curb(curb: CurbGutter, location: str) -> List[ValidationIssue]:
    """Every curb/gutter value must be finite and non-negative.

    Args:
        curb: Profile to check
        location: Where the profile is used (e.g. "shared", "corner SW")
    """
    issues = []
    for name in _CURB_FIELDS:
        value = getattr(curb, name)
        finite = _finite(value, name, location)
        if finite:
            issues.extend(finite)
        elif value < 0.0:
            issues.append(CFG_002.issue(location=location, field=name, value=value))
    return issues


def validate_parameters(params: IntersectionParameters) -> ValidationResult:
    """Run all configuration checks on intersection inputs.

    Args:
        params: Intersection inputs

    Returns:
        ValidationResult at the CONFIG stage
    """
    result = ValidationResult(stage=ValidationStage.CONFIG)
    geometry = params.geometry

    for issue in check_site_size(params.size_x, params.size_z):
        result.add_issue(issue)
    for issue in _finite(params.road_height, 'road_height', 'site'):
        result.add_issue(issue)

    for issue in check_curb(geometry.curb, 'shared'):
        result.add_issue(issue)
    for corner, curb in geometry.corners.curb_overrides.items():
        for issue in check_curb(curb, f"corner {corner.name}"):
            result.add_issue(issue)
    for side, curb in geometry.footpaths.curb_overrides.items():
        for issue in check_curb(curb, f"footpath {side.name}"):
            result.add_issue(issue)

    for corner in CornerId:
        size = geometry.corners.sizes.get(corner)
        location = f"corner {corner.name}"
        for axis, value in (('x_size', size.x_size), ('z_size', size.z_size)):
            finite = _finite(value, axis, location)
            if finite:
                result.merge(ValidationResult(issues=finite))
            elif value <= 0.0:
                result.add_issue(CFG_003.issue(location=location, axis=axis, value=value))

    for side in Side:
        depth = geometry.footpaths.depths.get(side)
        location = f"footpath {side.name}"
        finite = _finite(depth, 'depth', location)
        if finite:
            result.merge(ValidationResult(issues=finite))
        elif depth <= 0.0:
            result.add_issue(CFG_004.issue(location=location, value=depth))

    return result
