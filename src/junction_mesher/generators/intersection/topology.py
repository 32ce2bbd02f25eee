"""
Topology primitives for procedural road intersections.

An intersection site is a rectangle with four edges (sides) and four
corners. Each side either connects to a road or is closed off by a
footpath. Everything the builders emit is driven by those four booleans:

- Side / CornerId: the named edges and corners of the site
- CornerType: concave (inward) vs convex (outward) corner wedges
- RoadTopology: advisory classification of the junction shape

Side/corner adjacency:
    SW <-> (South, West)    SE <-> (South, East)
    NE <-> (North, East)    NW <-> (North, West)
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


# ==============================================================================
# Exceptions
# ==============================================================================

class GeometryPreconditionError(ValueError):
    """Raised when a builder is handed a model element it cannot build."""
    pass


# ==============================================================================
# Enumerations
# ==============================================================================

class Side(Enum):
    """Edge of the intersection rectangle (+X east, +Z north)."""
    SOUTH = "south"
    EAST = "east"
    NORTH = "north"
    WEST = "west"

    def opposite(self) -> 'Side':
        """Return the side across the site."""
        return _OPPOSITES[self]

    @property
    def is_vertical(self) -> bool:
        """East and West edges run along Z."""
        return self in (Side.EAST, Side.WEST)

    @property
    def is_horizontal(self) -> bool:
        """North and South edges run along X."""
        return self in (Side.NORTH, Side.SOUTH)


class CornerId(Enum):
    """Corner of the intersection rectangle."""
    SW = "sw"
    SE = "se"
    NE = "ne"
    NW = "nw"


class CornerType(Enum):
    """Corner wedge shape.

    INWARD_FACING: both adjacent sides connect to roads; the road wraps
        around a concave corner island.
    OUTWARD_FACING: neither adjacent side connects; two footpaths meet at
        a convex corner.
    """
    INWARD_FACING = "inward"
    OUTWARD_FACING = "outward"


class RoadTopology(Enum):
    """Junction shape derived from the connection flags."""
    PLAZA = "plaza"        # no roads
    DEAD_END = "dead_end"  # one road
    I = "i"                # two opposite roads
    L = "l"                # two perpendicular roads
    T = "t"                # three roads
    X = "x"                # four roads


_OPPOSITES: Dict[Side, Side] = {
    Side.NORTH: Side.SOUTH,
    Side.SOUTH: Side.NORTH,
    Side.EAST: Side.WEST,
    Side.WEST: Side.EAST,
}

# Keyed by (vertical side, horizontal side)
_CORNER_BY_SIDES: Dict[Tuple[Side, Side], CornerId] = {
    (Side.WEST, Side.SOUTH): CornerId.SW,
    (Side.WEST, Side.NORTH): CornerId.NW,
    (Side.EAST, Side.SOUTH): CornerId.SE,
    (Side.EAST, Side.NORTH): CornerId.NE,
}

_SIDES_BY_CORNER: Dict[CornerId, Tuple[Side, Side]] = {
    CornerId.SW: (Side.SOUTH, Side.WEST),
    CornerId.SE: (Side.SOUTH, Side.EAST),
    CornerId.NE: (Side.NORTH, Side.EAST),
    CornerId.NW: (Side.NORTH, Side.WEST),
}


# ==============================================================================
# Side / corner relations
# ==============================================================================

def opposite(side: Side) -> Side:
    """Return the side opposite to ``side``."""
    return _OPPOSITES[side]


def are_adjacent(a: Side, b: Side) -> bool:
    """True when two sides are perpendicular neighbours sharing a corner."""
    return a != b and a != _OPPOSITES[b]


def corner_of(a: Side, b: Side) -> CornerId:
    """Return the corner shared by two perpendicular sides.

    Argument order does not matter.

    Raises:
        ValueError: If the sides are equal or opposite.
    """
    if not are_adjacent(a, b):
        raise ValueError(f"Sides {a.name} and {b.name} do not share a corner")

    vertical, horizontal = (a, b) if a.is_vertical else (b, a)
    return _CORNER_BY_SIDES[(vertical, horizontal)]


def adjacent_of(corner: CornerId) -> Tuple[Side, Side]:
    """Return the (horizontal, vertical) sides meeting at ``corner``."""
    return _SIDES_BY_CORNER[corner]


def classify(north: bool, east: bool, south: bool, west: bool) -> RoadTopology:
    """Classify a junction from its four connection flags."""
    count = sum(1 for flag in (north, east, south, west) if flag)

    if count == 4:
        return RoadTopology.X
    if count == 0:
        return RoadTopology.PLAZA
    if count == 1:
        return RoadTopology.DEAD_END
    if count == 2:
        straight = (north and south) or (east and west)
        return RoadTopology.I if straight else RoadTopology.L
    return RoadTopology.T
