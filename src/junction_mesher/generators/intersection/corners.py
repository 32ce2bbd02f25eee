"""
Corner model for procedural intersections.

A corner exists only when its two adjacent sides agree: both connected
gives a concave (inward-facing) island corner, both closed gives a convex
(outward-facing) footpath corner. A corner between one road and one
footpath is left to the footpath, which runs the full edge.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from junction_mesher.generators.intersection.corner_math import compute_apex
from junction_mesher.generators.intersection.topology import (
    CornerId, CornerType, Side, adjacent_of,
)
from junction_mesher.generators.profiles.geometry_config import CurbGutter

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class CornerGeometry:
    """Resolved size and curb profile for one corner."""
    x_size: float
    z_size: float
    curb: CurbGutter

    @property
    def apex_offsets(self) -> Tuple[float, float]:
        """(x, z) distance from the rectangle corner to the apex."""
        return (
            self.x_size + self.curb.skirt_out + self.curb.gutter_width,
            self.z_size + self.curb.skirt_out + self.curb.gutter_width,
        )


@dataclass(frozen=True)
class CornerModel:
    """One corner of an intersection.

    Attributes:
        id: Which corner
        exists: Whether a corner wedge is built here
        type: Inward or outward facing (INWARD_FACING when absent)
        origin: Rectangle corner position at y=0
        apex: Road-surface point where the corner meets the road fill
        adj_a: Horizontal adjacent side
        adj_b: Vertical adjacent side
        geometry: Resolved sizes and curb
    """
    id: CornerId
    exists: bool
    type: CornerType
    origin: Vec3
    apex: Vec3
    adj_a: Side
    adj_b: Side
    geometry: CornerGeometry


def corner_state(connected_a: bool, connected_b: bool) -> Tuple[bool, CornerType]:
    """Return (exists, type) for a corner from its sides' connection flags."""
    if connected_a and connected_b:
        return True, CornerType.INWARD_FACING
    if not connected_a and not connected_b:
        return True, CornerType.OUTWARD_FACING
    return False, CornerType.INWARD_FACING


def make_corner(
    corner: CornerId,
    origin: Vec3,
    connected_a: bool,
    connected_b: bool,
    geometry: CornerGeometry,
    road_height: float,
) -> CornerModel:
    """Build a corner model from its adjacent sides' flags."""
    exists, corner_type = corner_state(connected_a, connected_b)
    adj_a, adj_b = adjacent_of(corner)
    return CornerModel(
        id=corner,
        exists=exists,
        type=corner_type,
        origin=origin,
        apex=compute_apex(corner, origin, geometry.apex_offsets, road_height),
        adj_a=adj_a,
        adj_b=adj_b,
        geometry=geometry,
    )
