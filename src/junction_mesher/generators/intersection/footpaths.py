"""
Footpath model for procedural intersections.

Each closed side carries a footpath laid along its edge. The footpath is
described in an edge frame: ``edge_origin`` is where the edge starts,
``edge_right`` runs along it and ``edge_inward`` points into the site.
Walking a side from ``edge_origin`` the left end touches ``left_corner``
and the right end touches ``right_corner``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, NamedTuple, Tuple

from junction_mesher.generators.intersection.corners import CornerModel
from junction_mesher.generators.intersection.topology import CornerId, Side
from junction_mesher.generators.profiles.geometry_config import CurbGutter

Vec3 = Tuple[float, float, float]


class EdgeFrame(NamedTuple):
    """Frame of one site edge in rectangle coordinates."""
    origin: Vec3
    right: Vec3
    inward: Vec3
    length: float
    left_corner: CornerId
    right_corner: CornerId
    left_adj_side: Side
    right_adj_side: Side


def edge_frame(side: Side, size_x: float, size_z: float) -> EdgeFrame:
    """Return the edge frame for ``side`` of a size_x by size_z site."""
    if side == Side.SOUTH:
        return EdgeFrame((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, 1.0), size_x,
                         CornerId.SW, CornerId.SE, Side.WEST, Side.EAST)
    if side == Side.EAST:
        return EdgeFrame((size_x, 0.0, 0.0), (0.0, 0.0, 1.0), (-1.0, 0.0, 0.0), size_z,
                         CornerId.SE, CornerId.NE, Side.SOUTH, Side.NORTH)
    if side == Side.NORTH:
        return EdgeFrame((size_x, 0.0, size_z), (-1.0, 0.0, 0.0), (0.0, 0.0, -1.0), size_x,
                         CornerId.NE, CornerId.NW, Side.EAST, Side.WEST)
    return EdgeFrame((0.0, 0.0, size_z), (0.0, 0.0, -1.0), (1.0, 0.0, 0.0), size_z,
                     CornerId.NW, CornerId.SW, Side.NORTH, Side.SOUTH)


@dataclass(frozen=True)
class FootpathGeometry:
    """Resolved depth and curb profile for one footpath."""
    depth: float
    curb: CurbGutter


@dataclass(frozen=True)
class FootpathModel:
    """Footpath along one side of an intersection.

    ``left_adj_exists`` / ``right_adj_exists`` record whether the footpath
    on the perpendicular neighbouring side exists; they are filled in once
    every side has been modelled.
    """
    side: Side
    exists: bool
    geometry: FootpathGeometry
    edge_origin: Vec3
    edge_right: Vec3
    edge_inward: Vec3
    edge_length: float
    left_corner: CornerModel
    right_corner: CornerModel
    left_adj_side: Side
    right_adj_side: Side
    left_adj_exists: bool = False
    right_adj_exists: bool = False

    @property
    def edge_mid(self) -> float:
        return self.edge_length * 0.5

    def with_adjacency(self, footpaths: Dict[Side, 'FootpathModel']) -> 'FootpathModel':
        """Return a copy with the neighbour existence flags resolved."""
        return replace(
            self,
            left_adj_exists=footpaths[self.left_adj_side].exists,
            right_adj_exists=footpaths[self.right_adj_side].exists,
        )


def make_footpath(
    side: Side,
    connected: bool,
    geometry: FootpathGeometry,
    size_x: float,
    size_z: float,
    corners: Dict[CornerId, CornerModel],
) -> FootpathModel:
    """Build a footpath model for one side (adjacency flags unresolved)."""
    frame = edge_frame(side, size_x, size_z)
    return FootpathModel(
        side=side,
        exists=not connected,
        geometry=geometry,
        edge_origin=frame.origin,
        edge_right=frame.right,
        edge_inward=frame.inward,
        edge_length=frame.length,
        left_corner=corners[frame.left_corner],
        right_corner=corners[frame.right_corner],
        left_adj_side=frame.left_adj_side,
        right_adj_side=frame.right_adj_side,
    )
