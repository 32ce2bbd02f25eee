"""
Corner apex math.

The apex of a corner is the point on the road surface where the corner's
gutter run ends. Every corner builder and the road fill agree on it, which
is what keeps the road wedge and the road core seamless.
"""

from __future__ import annotations

from typing import Dict, Tuple

from junction_mesher.generators.intersection.topology import CornerId

Vec3 = Tuple[float, float, float]

# Unit signs pointing from each corner into the site (x, z)
INWARD_SIGNS: Dict[CornerId, Tuple[float, float]] = {
    CornerId.SW: (1.0, 1.0),
    CornerId.SE: (-1.0, 1.0),
    CornerId.NE: (-1.0, -1.0),
    CornerId.NW: (1.0, -1.0),
}


def inward_signs(corner: CornerId) -> Tuple[float, float]:
    """Return the (x, z) signs that point from ``corner`` into the site."""
    return INWARD_SIGNS[corner]


def compute_apex(
    corner: CornerId,
    origin: Vec3,
    offsets: Tuple[float, float],
    road_height: float,
) -> Vec3:
    """Place the apex of a corner in the rectangle frame.

    Args:
        corner: Which corner the apex belongs to
        origin: Rectangle corner position (y ignored)
        offsets: (x, z) apex offsets from the corner geometry
        road_height: Absolute y of the road surface

    Returns:
        Apex position with y at road height
    """
    sx, sz = INWARD_SIGNS[corner]
    ax, az = offsets
    return (origin[0] + sx * ax, road_height, origin[2] + sz * az)
