"""
Geometry configuration for procedural intersections.

All values are plain frozen dataclasses passed by value into the model
builder. Nothing here is global: a road system hands its shared defaults to
each intersection explicitly (see RoadSystemDefaults).

Cross-section of a closed side, from the site edge inward:

    footpath slab (depth) -> curb skirt (skirt_out, drops skirt_down)
    -> gutter apron (drops gutter_depth) -> gutter run (gutter_width,
    rises or falls to the road surface)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from junction_mesher.generators.intersection.topology import CornerId, Side


# Default cross-section values (metres)
DEFAULT_SKIRT_OUT = 0.35
DEFAULT_SKIRT_DOWN = 0.05
DEFAULT_GUTTER_DEPTH = 0.5
DEFAULT_GUTTER_WIDTH = 0.5

DEFAULT_CORNER_SIZE = 3.0
DEFAULT_FOOTPATH_DEPTH = 3.0
DEFAULT_INTERSECTION_SIZE: Tuple[float, float] = (30.0, 30.0)


@dataclass(frozen=True)
class CurbGutter:
    """Curb and gutter cross-section profile.

    Attributes:
        skirt_out: Horizontal step of the curb face away from the footpath
        skirt_down: Vertical drop of the curb face
        gutter_depth: Vertical drop of the gutter apron below the curb
        gutter_width: Horizontal run of the gutter to the road surface
    """
    skirt_out: float = DEFAULT_SKIRT_OUT
    skirt_down: float = DEFAULT_SKIRT_DOWN
    gutter_depth: float = DEFAULT_GUTTER_DEPTH
    gutter_width: float = DEFAULT_GUTTER_WIDTH

    @property
    def join_offset(self) -> float:
        """Horizontal distance from footpath edge to the road surface."""
        return self.skirt_out + self.gutter_width

    @classmethod
    def default(cls) -> 'CurbGutter':
        return cls()


@dataclass(frozen=True)
class CornerSize:
    """Footprint of one corner pad along X and Z (in the corner's frame)."""
    x_size: float = DEFAULT_CORNER_SIZE
    z_size: float = DEFAULT_CORNER_SIZE


@dataclass(frozen=True)
class CornerSizeSet:
    """Per-corner pad sizes."""
    sw: CornerSize = field(default_factory=CornerSize)
    se: CornerSize = field(default_factory=CornerSize)
    ne: CornerSize = field(default_factory=CornerSize)
    nw: CornerSize = field(default_factory=CornerSize)

    def get(self, corner: CornerId) -> CornerSize:
        return getattr(self, corner.value)

    def with_corner(self, corner: CornerId, size: CornerSize) -> 'CornerSizeSet':
        """Return a copy with one corner replaced."""
        return replace(self, **{corner.value: size})

    @classmethod
    def from_single(cls, size: CornerSize) -> 'CornerSizeSet':
        return cls(sw=size, se=size, ne=size, nw=size)


@dataclass(frozen=True)
class FootpathDepthSet:
    """Per-side footpath depths measured inward from the site edge."""
    south: float = DEFAULT_FOOTPATH_DEPTH
    east: float = DEFAULT_FOOTPATH_DEPTH
    north: float = DEFAULT_FOOTPATH_DEPTH
    west: float = DEFAULT_FOOTPATH_DEPTH

    def get(self, side: Side) -> float:
        return getattr(self, side.value)

    def with_side(self, side: Side, depth: float) -> 'FootpathDepthSet':
        """Return a copy with one side replaced."""
        return replace(self, **{side.value: depth})

    @classmethod
    def from_single(cls, depth: float) -> 'FootpathDepthSet':
        return cls(south=depth, east=depth, north=depth, west=depth)


def frozen_mapping(mapping: Mapping) -> Mapping:
    """Read-only copy of ``mapping``; later changes to the source do not leak in."""
    return MappingProxyType(dict(mapping))


def mapping_hash(mapping: Mapping) -> int:
    return hash(frozenset(mapping.items()))


@dataclass(frozen=True)
class CornerGeometryConfig:
    """Corner pad sizes plus optional per-corner curb profiles.

    Corners without an override use the intersection's shared curb.
    """
    sizes: CornerSizeSet = field(default_factory=CornerSizeSet)
    curb_overrides: Mapping[CornerId, CurbGutter] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "curb_overrides", frozen_mapping(self.curb_overrides))

    def __hash__(self) -> int:
        return hash((self.sizes, mapping_hash(self.curb_overrides)))

    def curb_for(self, corner: CornerId, shared: CurbGutter) -> CurbGutter:
        return self.curb_overrides.get(corner, shared)


@dataclass(frozen=True)
class FootpathGeometryConfig:
    """Footpath depths plus optional per-side curb profiles."""
    depths: FootpathDepthSet = field(default_factory=FootpathDepthSet)
    curb_overrides: Mapping[Side, CurbGutter] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "curb_overrides", frozen_mapping(self.curb_overrides))

    def __hash__(self) -> int:
        return hash((self.depths, mapping_hash(self.curb_overrides)))

    def curb_for(self, side: Side, shared: CurbGutter) -> CurbGutter:
        return self.curb_overrides.get(side, shared)


@dataclass(frozen=True)
class IntersectionGeometryConfig:
    """Complete geometry configuration for one intersection.

    Attributes:
        name: Display name, also used as the storage key
        curb: Shared curb/gutter profile
        corners: Corner sizes and curb overrides
        footpaths: Footpath depths and curb overrides
    """
    name: str = "Default"
    curb: CurbGutter = field(default_factory=CurbGutter)
    corners: CornerGeometryConfig = field(default_factory=CornerGeometryConfig)
    footpaths: FootpathGeometryConfig = field(default_factory=FootpathGeometryConfig)

    def corner_curb(self, corner: CornerId) -> CurbGutter:
        return self.corners.curb_for(corner, self.curb)

    def footpath_curb(self, side: Side) -> CurbGutter:
        return self.footpaths.curb_for(side, self.curb)

    @classmethod
    def default(cls) -> 'IntersectionGeometryConfig':
        return cls()

    @classmethod
    def uniform(
        cls,
        corner_size: float = DEFAULT_CORNER_SIZE,
        footpath_depth: float = DEFAULT_FOOTPATH_DEPTH,
        curb: Optional[CurbGutter] = None,
        name: str = "Default",
    ) -> 'IntersectionGeometryConfig':
        """Build a config with the same corner size and depth everywhere."""
        return cls(
            name=name,
            curb=curb or CurbGutter(),
            corners=CornerGeometryConfig(
                sizes=CornerSizeSet.from_single(CornerSize(corner_size, corner_size)),
            ),
            footpaths=FootpathGeometryConfig(
                depths=FootpathDepthSet.from_single(footpath_depth),
            ),
        )


@dataclass(frozen=True)
class RoadSystemDefaults:
    """Shared defaults a road system pushes down to its intersections."""
    road_height: float = 0.0
    intersection_size: Tuple[float, float] = DEFAULT_INTERSECTION_SIZE
    geometry: IntersectionGeometryConfig = field(default_factory=IntersectionGeometryConfig)


# ==============================================================================
# Parameter schema
# ==============================================================================

# Flat, UI-friendly view of the scalar parameters. Per-corner and per-side
# values are edited through the uniform corner_size / footpath_depth keys.
GEOMETRY_PARAMETER_SCHEMA: Dict[str, Dict[str, Any]] = {
    'skirt_out': {
        'type': 'float', 'default': DEFAULT_SKIRT_OUT, 'min': 0.0, 'max': 5.0,
        'label': 'Curb Skirt Out',
        'description': 'Horizontal step of the curb face',
    },
    'skirt_down': {
        'type': 'float', 'default': DEFAULT_SKIRT_DOWN, 'min': 0.0, 'max': 5.0,
        'label': 'Curb Skirt Down',
        'description': 'Vertical drop of the curb face',
    },
    'gutter_depth': {
        'type': 'float', 'default': DEFAULT_GUTTER_DEPTH, 'min': 0.0, 'max': 5.0,
        'label': 'Gutter Depth',
        'description': 'Vertical drop of the gutter apron',
    },
    'gutter_width': {
        'type': 'float', 'default': DEFAULT_GUTTER_WIDTH, 'min': 0.0, 'max': 5.0,
        'label': 'Gutter Width',
        'description': 'Horizontal run of the gutter to the road',
    },
    'corner_size': {
        'type': 'float', 'default': DEFAULT_CORNER_SIZE, 'min': 0.1, 'max': 50.0,
        'label': 'Corner Size',
        'description': 'Pad size applied to every corner on both axes',
    },
    'footpath_depth': {
        'type': 'float', 'default': DEFAULT_FOOTPATH_DEPTH, 'min': 0.1, 'max': 50.0,
        'label': 'Footpath Depth',
        'description': 'Depth applied to every closed side',
    },
}


def apply_geometry_params(
    config: IntersectionGeometryConfig,
    params: Dict[str, Any],
) -> IntersectionGeometryConfig:
    """Return a copy of ``config`` with flat schema parameters applied.

    Unknown keys are ignored. Per-corner curb overrides survive; the
    uniform keys replace every corner size or footpath depth.
    """
    curb_fields = {k: float(params[k]) for k in
                   ('skirt_out', 'skirt_down', 'gutter_depth', 'gutter_width')
                   if k in params}
    result = config
    if curb_fields:
        result = replace(result, curb=replace(result.curb, **curb_fields))

    if 'corner_size' in params:
        size = float(params['corner_size'])
        result = replace(result, corners=replace(
            result.corners, sizes=CornerSizeSet.from_single(CornerSize(size, size))))

    if 'footpath_depth' in params:
        depth = float(params['footpath_depth'])
        result = replace(result, footpaths=replace(
            result.footpaths, depths=FootpathDepthSet.from_single(depth)))

    return result
