"""
Road surface infill.

The road core is the largest axis-aligned rectangle bounded by the four
corner apexes. Each connected side adds an arm band from the core out to
the site boundary, limited to the core's cross extent. Everything sits at
road height and is tagged ROAD.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from junction_mesher.conversion.mesh_sink import MeshSink, SurfaceTag, Winding
from junction_mesher.generators.intersection.intersection_model import IntersectionModel
from junction_mesher.generators.intersection.placement import recenter_points
from junction_mesher.generators.intersection.topology import CornerId, Side

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class CoreBounds:
    """Road core rectangle in the rectangle frame."""
    x_left: float
    x_right: float
    z_bottom: float
    z_top: float

    @property
    def is_degenerate(self) -> bool:
        return self.x_left >= self.x_right or self.z_bottom >= self.z_top

    @property
    def area(self) -> float:
        if self.is_degenerate:
            return 0.0
        return (self.x_right - self.x_left) * (self.z_top - self.z_bottom)


def core_bounds(model: IntersectionModel) -> CoreBounds:
    """Intersect the four corner apexes into the road core rectangle."""
    sw = model.corner(CornerId.SW).apex
    se = model.corner(CornerId.SE).apex
    ne = model.corner(CornerId.NE).apex
    nw = model.corner(CornerId.NW).apex
    return CoreBounds(
        x_left=max(sw[0], nw[0]),
        x_right=min(se[0], ne[0]),
        z_bottom=max(sw[2], se[2]),
        z_top=min(nw[2], ne[2]),
    )


def quad_xz(x0: float, x1: float, z0: float, z1: float, y: float) -> List[Vec3]:
    """Horizontal quad ordered NE, NW, SW, SE (up-facing under CW)."""
    return [(x1, y, z1), (x0, y, z1), (x0, y, z0), (x1, y, z0)]


def road_fill_quads(model: IntersectionModel, bounds: CoreBounds) -> List[List[Vec3]]:
    """Core quad followed by one band per connected side (S, N, W, E)."""
    y = model.road_height
    xl, xr = bounds.x_left, bounds.x_right
    zb, zt = bounds.z_bottom, bounds.z_top

    quads = [quad_xz(xl, xr, zb, zt, y)]
    if model.is_connected(Side.SOUTH):
        quads.append(quad_xz(xl, xr, 0.0, zb, y))
    if model.is_connected(Side.NORTH):
        quads.append(quad_xz(xl, xr, zt, model.size_z, y))
    if model.is_connected(Side.WEST):
        quads.append(quad_xz(0.0, xl, zb, zt, y))
    if model.is_connected(Side.EAST):
        quads.append(quad_xz(xr, model.size_x, zb, zt, y))
    return quads


def build_road_fill(model: IntersectionModel, sink: MeshSink) -> int:
    """Emit the road core and arm bands.

    A degenerate core (corners meeting or overlapping) is skipped with a
    warning; the caller keeps building the rest of the intersection.

    Returns:
        Number of faces emitted (0 when the core is degenerate)
    """
    bounds = core_bounds(model)
    if bounds.is_degenerate:
        logger.warning(
            "Road fill skipped: degenerate core x=[%.3f, %.3f] z=[%.3f, %.3f]",
            bounds.x_left, bounds.x_right, bounds.z_bottom, bounds.z_top,
        )
        return 0

    quads = road_fill_quads(model, bounds)
    for quad in quads:
        a, b, c, d = recenter_points(quad, model.size_x, model.size_z)
        sink.add_quad_face(a, b, c, d, Winding.CW, SurfaceTag.ROAD)
    return len(quads)
