"""
Placement of locally built pieces into the intersection.

Corners and footpaths are constructed in a local frame whose +X/+Z point
into the site, then rotated by a yaw about +Y, moved to their rectangle
position and recentered so the site pivot sits at its middle.

Yaw convention: x' = x cos(yaw) + z sin(yaw), z' = -x sin(yaw) + z cos(yaw).
The four quarter-turn matrices are spelled out exactly so that seams
shared by neighbouring pieces land on identical coordinates.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import numpy as np

from junction_mesher.generators.intersection.topology import CornerId, Side

Vec3 = Tuple[float, float, float]

YAW_BY_CORNER: Dict[CornerId, int] = {
    CornerId.SW: 0,
    CornerId.SE: -90,
    CornerId.NE: -180,
    CornerId.NW: -270,
}

YAW_BY_SIDE: Dict[Side, int] = {
    Side.SOUTH: 0,
    Side.EAST: -90,
    Side.NORTH: -180,
    Side.WEST: -270,
}

_ROTATIONS: Dict[int, np.ndarray] = {
    0: np.eye(3),
    -90: np.array([[0.0, 0.0, -1.0],
                   [0.0, 1.0, 0.0],
                   [1.0, 0.0, 0.0]]),
    -180: np.array([[-1.0, 0.0, 0.0],
                    [0.0, 1.0, 0.0],
                    [0.0, 0.0, -1.0]]),
    -270: np.array([[0.0, 0.0, 1.0],
                    [0.0, 1.0, 0.0],
                    [-1.0, 0.0, 0.0]]),
}


def rotation_matrix(yaw: int) -> np.ndarray:
    """Return the exact 3x3 rotation for a quarter-turn yaw in degrees."""
    try:
        return _ROTATIONS[yaw]
    except KeyError:
        raise ValueError(f"Unsupported yaw {yaw}; expected 0, -90, -180 or -270") from None


def corner_translation(corner: CornerId, size_x: float, size_z: float) -> Vec3:
    """Rectangle position of a corner's local origin."""
    return {
        CornerId.SW: (0.0, 0.0, 0.0),
        CornerId.SE: (size_x, 0.0, 0.0),
        CornerId.NE: (size_x, 0.0, size_z),
        CornerId.NW: (0.0, 0.0, size_z),
    }[corner]


def side_translation(side: Side, size_x: float, size_z: float) -> Vec3:
    """Rectangle position of a footpath's local origin (its edge origin)."""
    return {
        Side.SOUTH: (0.0, 0.0, 0.0),
        Side.EAST: (size_x, 0.0, 0.0),
        Side.NORTH: (size_x, 0.0, size_z),
        Side.WEST: (0.0, 0.0, size_z),
    }[side]


def local_corner_extents(corner: CornerId, x_size: float, z_size: float) -> Tuple[float, float]:
    """Local (sx, sz) pad extents; SE and NW swap axes under their yaw."""
    if corner in (CornerId.SE, CornerId.NW):
        return z_size, x_size
    return x_size, z_size


def place_points(
    points: Sequence[Vec3],
    yaw: int,
    translation: Vec3,
    size_x: float,
    size_z: float,
) -> List[Vec3]:
    """Rotate, translate and recenter local points.

    Args:
        points: Local-frame vertices
        yaw: Quarter-turn yaw in degrees
        translation: Rectangle-frame position of the local origin
        size_x: Site extent along X
        size_z: Site extent along Z

    Returns:
        Pivot-centered world vertices as float tuples
    """
    local = np.asarray(points, dtype=float).reshape(-1, 3)
    offset = np.array([
        translation[0] - size_x * 0.5,
        translation[1],
        translation[2] - size_z * 0.5,
    ])
    world = local @ rotation_matrix(yaw).T + offset
    return [(float(p[0]), float(p[1]), float(p[2])) for p in world]


def recenter_points(points: Sequence[Vec3], size_x: float, size_z: float) -> List[Vec3]:
    """Move rectangle-frame points into the pivot-centered frame."""
    return place_points(points, 0, (0.0, 0.0, 0.0), size_x, size_z)
