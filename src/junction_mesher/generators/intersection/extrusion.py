"""
Edge extrusion helpers.

Each helper takes an edge (a -> b) and produces the quad swept from it by
a horizontal step along ``outward`` plus a vertical move. Returned vertex
order for CW winding is [a, a2, b2, b]; for CCW it is [a, b, b2, a2].
"""

from __future__ import annotations

import math
from typing import List, Tuple

from junction_mesher.conversion.mesh_sink import Winding

Vec3 = Tuple[float, float, float]

EPSILON = 1e-6


def _add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _scale(v: Vec3, s: float) -> Vec3:
    return (v[0] * s, v[1] * s, v[2] * s)


def _horizontal_dir(outward: Vec3) -> Vec3:
    """Project ``outward`` onto the XZ plane and normalize it."""
    x, z = outward[0], outward[2]
    ln = math.sqrt(x * x + z * z)
    if ln < EPSILON:
        raise ValueError("Outward direction must have a horizontal component")
    return (x / ln, 0.0, z / ln)


def _check_edge(a: Vec3, b: Vec3) -> None:
    if a == b:
        raise ValueError(f"Degenerate edge: both ends at {a}")


def _ordered(a: Vec3, b: Vec3, a2: Vec3, b2: Vec3, winding: Winding) -> List[Vec3]:
    if winding == Winding.CW:
        return [a, a2, b2, b]
    return [a, b, b2, a2]


def extrude_edge_out_and_vertical(
    a: Vec3,
    b: Vec3,
    outward: Vec3,
    out_amount: float,
    vertical_amount: float,
    winding: Winding = Winding.CW,
) -> List[Vec3]:
    """Sweep an edge outward and by a signed vertical amount.

    Raises:
        ValueError: If the edge is degenerate or ``outward`` is vertical
    """
    _check_edge(a, b)
    offset = _add(_scale(_horizontal_dir(outward), out_amount), (0.0, vertical_amount, 0.0))
    return _ordered(a, b, _add(a, offset), _add(b, offset), winding)


def extrude_edge_out_down(
    a: Vec3,
    b: Vec3,
    outward: Vec3,
    out_amount: float,
    down_amount: float,
    winding: Winding = Winding.CW,
) -> List[Vec3]:
    """Sweep an edge outward and down.

    Raises:
        ValueError: If ``down_amount`` is negative, or the edge is degenerate
    """
    if down_amount < 0.0:
        raise ValueError(
            f"down_amount must be non-negative (got {down_amount}); "
            "use extrude_edge_out_and_vertical for signed moves"
        )
    return extrude_edge_out_and_vertical(a, b, outward, out_amount, -down_amount, winding)


def extrude_edge_out_to_world_y(
    a: Vec3,
    b: Vec3,
    outward: Vec3,
    out_amount: float,
    target_y: float,
    winding: Winding = Winding.CW,
) -> List[Vec3]:
    """Sweep an edge outward so that its far edge lands at ``target_y``.

    The far edge is level even when a and b differ in height.
    """
    _check_edge(a, b)
    step = _scale(_horizontal_dir(outward), out_amount)
    a2 = (a[0] + step[0], target_y, a[2] + step[2])
    b2 = (b[0] + step[0], target_y, b[2] + step[2])
    return _ordered(a, b, a2, b2, winding)
