"""
Intersection generator.

Ties the pieces together: validate the inputs, derive the model, emit
corners, footpaths and road fill, validate the emitted faces, then hand
them to the caller's sink.

Emission order is fixed so identical inputs always give identical output:
    corners   SW, SE, NE, NW   (existing only)
    footpaths S, E, N, W       (existing only)
    road fill core, then arms S, N, W, E

Faces are collected first and replayed into the sink only after the build
has been validated, so a fail-fast build never leaves a half-written mesh.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from junction_mesher.conversion.mesh_sink import (
    EmittedFace, FaceCollector, MeshSink, SurfaceTag, emit_faces,
)
from junction_mesher.generators.intersection.corner_builder import build_corner
from junction_mesher.generators.intersection.footpath_builder import (
    build_footpath, footpath_span,
)
from junction_mesher.generators.intersection.intersection_model import (
    IntersectionModel, IntersectionParameters, build_model,
)
from junction_mesher.generators.intersection.road_fill_builder import (
    build_road_fill, core_bounds,
)
from junction_mesher.generators.intersection.topology import Side
from junction_mesher.generators.profiles.geometry_config import (
    GEOMETRY_PARAMETER_SCHEMA,
    IntersectionGeometryConfig,
    RoadSystemDefaults,
    apply_geometry_params,
)
from junction_mesher.validation.core import (
    Severity, ValidationError, ValidationResult, ValidationStage,
)
from junction_mesher.validation.rules import FILL_001, FILL_002
from junction_mesher.validation.unified_validator import UnifiedValidator

logger = logging.getLogger(__name__)

SPAN_EPSILON = 1e-6


@dataclass
class BuildResult:
    """Outcome of one intersection build.

    Attributes:
        model: Derived model, or None when the inputs failed validation
        faces: Emitted faces in order (empty when nothing was built)
        validation: All issues from every stage of this build
    """
    model: Optional[IntersectionModel]
    faces: List[EmittedFace] = field(default_factory=list)
    validation: ValidationResult = field(default_factory=ValidationResult)

    @property
    def face_count(self) -> int:
        return len(self.faces)

    def faces_with_tag(self, tag: SurfaceTag) -> List[EmittedFace]:
        return [f for f in self.faces if f.tag == tag]


def _log_issues(result: ValidationResult) -> None:
    for issue in result.issues:
        if issue.severity == Severity.FAIL:
            logger.error(str(issue))
        elif issue.severity == Severity.WARN:
            logger.warning(str(issue))


def build_intersection(
    params: IntersectionParameters,
    sink: Optional[MeshSink] = None,
    fail_fast: bool = False,
    validator: Optional[UnifiedValidator] = None,
) -> BuildResult:
    """Build one intersection.

    Args:
        params: Intersection inputs
        sink: Receives the faces once the build is validated (optional)
        fail_fast: Raise ValidationError instead of returning a failed result
        validator: Validator to use; a fresh default one when omitted

    Returns:
        BuildResult with model, faces and validation issues

    Raises:
        ValidationError: If fail_fast is set and any FAIL issue was found
    """
    validator = validator or UnifiedValidator()

    config_result = validator.validate_config(params)
    if config_result.failed:
        _log_issues(config_result)
        if fail_fast:
            raise ValidationError(config_result)
        return BuildResult(model=None, validation=config_result)

    model = build_model(params)
    collector = FaceCollector()
    fill_result = ValidationResult(stage=ValidationStage.GENERATION)

    for corner in model.existing_corners():
        build_corner(corner, model.size_x, model.size_z, model.road_height, collector)

    for footpath in model.existing_footpaths():
        x_left, x_right = footpath_span(footpath)
        if x_right - x_left <= SPAN_EPSILON:
            issue = FILL_002.issue(location=f"footpath {footpath.side.name}", x=x_left)
            logger.warning(str(issue))
            fill_result.add_issue(issue)
            continue
        build_footpath(footpath, model.size_x, model.size_z, model.road_height, collector)

    bounds = core_bounds(model)
    if bounds.is_degenerate:
        fill_result.add_issue(FILL_001.issue(
            location="road core",
            x_left=bounds.x_left, x_right=bounds.x_right,
            z_bottom=bounds.z_bottom, z_top=bounds.z_top,
        ))
    build_road_fill(model, collector)
    validator.apply_policy(fill_result)

    geometry_result = validator.validate_generation(collector.faces)
    _log_issues(geometry_result)

    validation = ValidationResult(stage=ValidationStage.GENERATION)
    validation.merge(config_result).merge(fill_result).merge(geometry_result)

    if validation.failed and fail_fast:
        raise ValidationError(validation)

    if sink is not None:
        emit_faces(sink, collector.faces)

    logger.debug(
        "Built %s intersection: %d faces, %d corners, %d footpaths, %d issue(s)",
        model.topology.name, len(collector.faces),
        len(model.existing_corners()), len(model.existing_footpaths()),
        len(validation.issues),
    )
    return BuildResult(model=model, faces=list(collector.faces), validation=validation)


# ---------------------------------------------------------------------------
# Parameter-driven wrapper
# ---------------------------------------------------------------------------

class ProceduralIntersection:
    """Parameter-schema driven intersection.

    Holds the current IntersectionParameters and rebuilds from them on
    demand. Parameters arrive as flat dicts (from a UI, a CLI or a saved
    scene) and are validated only when the intersection is built.
    """

    def __init__(self, params: Optional[IntersectionParameters] = None):
        self.params = params or IntersectionParameters()

    @classmethod
    def get_display_name(cls) -> str:
        return "Intersection"

    @classmethod
    def get_category(cls) -> str:
        return "Roads"

    @classmethod
    def get_parameter_schema(cls) -> Dict[str, Dict[str, Any]]:
        defaults = IntersectionParameters()
        schema = {
            "size_x": {
                "type": "float", "default": defaults.size_x, "min": 1.0, "max": 500.0,
                "label": "Size X", "description": "Site extent along X (east)",
            },
            "size_z": {
                "type": "float", "default": defaults.size_z, "min": 1.0, "max": 500.0,
                "label": "Size Z", "description": "Site extent along Z (north)",
            },
            "road_height": {
                "type": "float", "default": defaults.road_height, "min": -10.0, "max": 10.0,
                "label": "Road Height", "description": "Absolute height of the road surface",
            },
        }
        for side in (Side.NORTH, Side.EAST, Side.SOUTH, Side.WEST):
            schema[f"connect_{side.value}"] = {
                "type": "bool", "default": False,
                "label": f"Connect {side.name.title()}",
                "description": f"A road meets the {side.value} side",
            }
        schema.update(GEOMETRY_PARAMETER_SCHEMA)
        return schema

    def apply_params(self, params: Dict[str, Any]) -> None:
        """Apply a dict of parameter values; unknown keys are ignored."""
        schema = self.get_parameter_schema()
        direct = {}
        for key, value in params.items():
            if key not in schema or key in GEOMETRY_PARAMETER_SCHEMA:
                continue
            direct[key] = bool(value) if schema[key]["type"] == "bool" else float(value)

        geometry = apply_geometry_params(self.params.geometry, params)
        self.params = replace(self.params, geometry=geometry, **direct)

    def apply_shared_defaults(self, defaults: RoadSystemDefaults) -> None:
        """Adopt a road system's shared size, height and geometry.

        Connection flags are kept.
        """
        self.params = IntersectionParameters.from_defaults(
            defaults,
            connect_north=self.params.connect_north,
            connect_east=self.params.connect_east,
            connect_south=self.params.connect_south,
            connect_west=self.params.connect_west,
        )

    def set_connected(self, side: Side, connected: bool) -> None:
        self.params = replace(self.params, **{f"connect_{side.value}": connected})

    def build_model(self) -> IntersectionModel:
        return build_model(self.params)

    def set_geometry(self, geometry: IntersectionGeometryConfig) -> None:
        self.params = replace(self.params, geometry=geometry)

    def build(
        self,
        sink: Optional[MeshSink] = None,
        fail_fast: bool = False,
        validator: Optional[UnifiedValidator] = None,
    ) -> BuildResult:
        """Build with the current parameters."""
        return build_intersection(self.params, sink=sink, fail_fast=fail_fast,
                                  validator=validator)
