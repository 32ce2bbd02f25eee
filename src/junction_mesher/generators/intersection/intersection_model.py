"""
Immutable intersection model.

The model is derived purely from the inputs: site size, road height, the
four connection flags and the geometry configuration. Builders only read
it. Changing any input means building a new model.

Coordinates are in the rectangle frame: origin at the SW corner, +X east,
+Z north, y up. Builders recenter to the site pivot on output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from junction_mesher.generators.intersection.corners import (
    CornerGeometry, CornerModel, make_corner,
)
from junction_mesher.generators.intersection.footpaths import (
    FootpathGeometry, FootpathModel, make_footpath,
)
from junction_mesher.generators.intersection.topology import (
    CornerId, RoadTopology, Side, adjacent_of, classify,
)
from junction_mesher.generators.profiles.geometry_config import (
    DEFAULT_INTERSECTION_SIZE,
    IntersectionGeometryConfig,
    RoadSystemDefaults,
    frozen_mapping,
    mapping_hash,
)

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]

# Emission order used by the generator
CORNER_ORDER: Tuple[CornerId, ...] = (CornerId.SW, CornerId.SE, CornerId.NE, CornerId.NW)
SIDE_ORDER: Tuple[Side, ...] = (Side.SOUTH, Side.EAST, Side.NORTH, Side.WEST)


@dataclass(frozen=True)
class IntersectionParameters:
    """Inputs of one intersection build.

    Attributes:
        size_x: Site extent along X (must be > 0)
        size_z: Site extent along Z (must be > 0)
        road_height: Absolute y of the road surface
        connect_north/east/south/west: Whether a road meets that side
        geometry: Cross-section, corner and footpath configuration
    """
    size_x: float = DEFAULT_INTERSECTION_SIZE[0]
    size_z: float = DEFAULT_INTERSECTION_SIZE[1]
    road_height: float = 0.0
    connect_north: bool = False
    connect_east: bool = False
    connect_south: bool = False
    connect_west: bool = False
    geometry: IntersectionGeometryConfig = field(default_factory=IntersectionGeometryConfig)

    def is_connected(self, side: Side) -> bool:
        return getattr(self, f"connect_{side.value}")

    @classmethod
    def from_defaults(cls, defaults: RoadSystemDefaults, **overrides) -> 'IntersectionParameters':
        """Create parameters from a road system's shared defaults."""
        values = {
            'size_x': defaults.intersection_size[0],
            'size_z': defaults.intersection_size[1],
            'road_height': defaults.road_height,
            'geometry': defaults.geometry,
        }
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class IntersectionModel:
    """Derived description of an intersection; read-only for builders."""
    size_x: float
    size_z: float
    road_height: float
    connected: Mapping[Side, bool]
    topology: RoadTopology
    corners: Mapping[CornerId, CornerModel]
    footpaths: Mapping[Side, FootpathModel]
    geometry: IntersectionGeometryConfig

    def __post_init__(self):
        for name in ("connected", "corners", "footpaths"):
            object.__setattr__(self, name, frozen_mapping(getattr(self, name)))

    def __hash__(self) -> int:
        return hash((
            self.size_x, self.size_z, self.road_height, self.topology, self.geometry,
            mapping_hash(self.connected),
            mapping_hash(self.corners),
            mapping_hash(self.footpaths),
        ))

    def is_connected(self, side: Side) -> bool:
        return self.connected[side]

    def corner(self, corner: CornerId) -> CornerModel:
        return self.corners[corner]

    def footpath(self, side: Side) -> FootpathModel:
        return self.footpaths[side]

    def existing_corners(self) -> List[CornerModel]:
        """Corners that produce geometry, in emission order."""
        return [self.corners[c] for c in CORNER_ORDER if self.corners[c].exists]

    def existing_footpaths(self) -> List[FootpathModel]:
        """Footpaths that produce geometry, in emission order."""
        return [self.footpaths[s] for s in SIDE_ORDER if self.footpaths[s].exists]

    @property
    def center_offset(self) -> Vec3:
        """Translation from the rectangle frame to the pivot-centered frame."""
        return (-self.size_x * 0.5, 0.0, -self.size_z * 0.5)

    def side_midpoint(self, side: Side) -> Vec3:
        """Midpoint of a site edge at road height, pivot-centered."""
        hx = self.size_x * 0.5
        hz = self.size_z * 0.5
        y = self.road_height
        if side == Side.SOUTH:
            return (0.0, y, -hz)
        if side == Side.NORTH:
            return (0.0, y, hz)
        if side == Side.EAST:
            return (hx, y, 0.0)
        return (-hx, y, 0.0)

    def find_side_at(self, point: Vec3, epsilon: float) -> Optional[Side]:
        """Return the side whose midpoint lies within ``epsilon`` of ``point``.

        ``point`` is in the pivot-centered frame. Sides are tried in
        emission order; None when no side matches.
        """
        eps2 = epsilon * epsilon
        for side in SIDE_ORDER:
            mid = self.side_midpoint(side)
            d2 = sum((point[i] - mid[i]) ** 2 for i in range(3))
            if d2 <= eps2:
                return side
        return None


# ------------------------------------------------------------------
# Model construction
# ------------------------------------------------------------------

def _corner_origins(size_x: float, size_z: float) -> Dict[CornerId, Vec3]:
    return {
        CornerId.SW: (0.0, 0.0, 0.0),
        CornerId.SE: (size_x, 0.0, 0.0),
        CornerId.NE: (size_x, 0.0, size_z),
        CornerId.NW: (0.0, 0.0, size_z),
    }


def build_model(params: IntersectionParameters) -> IntersectionModel:
    """Derive the intersection model from its parameters.

    No validation happens here; callers that accept user input should run
    the configuration checks first (the generator does).

    Args:
        params: Intersection inputs

    Returns:
        A new immutable IntersectionModel
    """
    geometry = params.geometry
    connected = {side: params.is_connected(side) for side in Side}

    origins = _corner_origins(params.size_x, params.size_z)
    corners: Dict[CornerId, CornerModel] = {}
    for corner_id in CORNER_ORDER:
        size = geometry.corners.sizes.get(corner_id)
        adj_a, adj_b = adjacent_of(corner_id)
        corners[corner_id] = make_corner(
            corner_id,
            origins[corner_id],
            connected[adj_a],
            connected[adj_b],
            CornerGeometry(size.x_size, size.z_size, geometry.corner_curb(corner_id)),
            params.road_height,
        )

    unresolved = {
        side: make_footpath(
            side,
            connected[side],
            FootpathGeometry(geometry.footpaths.depths.get(side), geometry.footpath_curb(side)),
            params.size_x,
            params.size_z,
            corners,
        )
        for side in SIDE_ORDER
    }
    footpaths = {side: fp.with_adjacency(unresolved) for side, fp in unresolved.items()}

    topology = classify(
        connected[Side.NORTH], connected[Side.EAST],
        connected[Side.SOUTH], connected[Side.WEST],
    )
    logger.debug(
        "Built intersection model %.2fx%.2f topology=%s",
        params.size_x, params.size_z, topology.name,
    )

    return IntersectionModel(
        size_x=params.size_x,
        size_z=params.size_z,
        road_height=params.road_height,
        connected=connected,
        topology=topology,
        corners=corners,
        footpaths=footpaths,
        geometry=geometry,
    )
