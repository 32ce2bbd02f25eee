"""
Footpath builder.

A footpath runs along a closed side between the apexes of its two corners.
It is built in the side's edge frame (x along the edge, z into the site)
as a slab, a curb skirt, a gutter apron and a gutter run rising or falling
to the road surface, then placed with the side's yaw.

Where a perpendicular footpath also exists, an outward-facing corner fills
the wedge between the two; that end of the slab is pushed back by the curb
and gutter width so the slab meets the corner's footpath cap.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from junction_mesher.conversion.mesh_sink import MeshSink, SurfaceTag, Winding
from junction_mesher.generators.intersection.extrusion import (
    extrude_edge_out_down,
    extrude_edge_out_to_world_y,
)
from junction_mesher.generators.intersection.footpaths import FootpathModel
from junction_mesher.generators.intersection.placement import (
    YAW_BY_SIDE,
    place_points,
    side_translation,
)
from junction_mesher.generators.intersection.topology import GeometryPreconditionError

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]
LocalFace = Tuple[List[Vec3], SurfaceTag]

_POS_Z: Vec3 = (0.0, 0.0, 1.0)


def _edge_param(footpath: FootpathModel, point: Vec3) -> float:
    """Position of ``point`` along the edge, clamped to [0, edge_length]."""
    o, r = footpath.edge_origin, footpath.edge_right
    t = (point[0] - o[0]) * r[0] + (point[1] - o[1]) * r[1] + (point[2] - o[2]) * r[2]
    return min(max(t, 0.0), footpath.edge_length)


def footpath_span(footpath: FootpathModel) -> Tuple[float, float]:
    """Return the (x_left, x_right) span of the footpath's curb line.

    Each end stops at its corner's apex when that corner (or the
    neighbouring footpath) exists, and runs to the edge end otherwise.
    """
    length = footpath.edge_length
    mid = footpath.edge_mid

    if footpath.left_corner.exists or footpath.left_adj_exists:
        t_left = _edge_param(footpath, footpath.left_corner.apex)
    else:
        t_left = 0.0

    if footpath.right_corner.exists or footpath.right_adj_exists:
        t_right = _edge_param(footpath, footpath.right_corner.apex)
    else:
        t_right = length

    x_left = mid - max(0.0, mid - t_left)
    x_right = mid + max(0.0, t_right - mid)
    return x_left, x_right


def footpath_faces(footpath: FootpathModel, road_height: float) -> List[LocalFace]:
    """Edge-frame faces of a footpath, in emission order.

    Raises:
        ValueError: If the span has collapsed to zero width
    """
    curb = footpath.geometry.curb
    depth = footpath.geometry.depth
    length = footpath.edge_length
    x_left, x_right = footpath_span(footpath)

    path_base = [
        (x_left, 0.0, 0.0),
        (x_right, 0.0, 0.0),
        (x_right, 0.0, depth),
        (x_left, 0.0, depth),
    ]
    skirt = extrude_edge_out_down(path_base[2], path_base[3], _POS_Z,
                                  curb.skirt_out, curb.skirt_down)
    apron = extrude_edge_out_down(skirt[1], skirt[2], _POS_Z, 0.0, curb.gutter_depth)
    run = extrude_edge_out_to_world_y(apron[1], apron[2], _POS_Z,
                                      curb.gutter_width, road_height)

    # Slab only; the curb line keeps its apex-to-apex span
    join = curb.join_offset
    slab = list(path_base)
    if footpath.left_adj_exists:
        slab[0] = (max(0.0, slab[0][0] - join), 0.0, slab[0][2])
        slab[3] = (max(0.0, slab[3][0] - join), 0.0, slab[3][2])
    if footpath.right_adj_exists:
        slab[1] = (min(length, slab[1][0] + join), 0.0, slab[1][2])
        slab[2] = (min(length, slab[2][0] + join), 0.0, slab[2][2])

    return [
        (slab, SurfaceTag.FOOTPATH),
        (skirt, SurfaceTag.CURB_FACE),
        (apron, SurfaceTag.GUTTER_DROP),
        (run, SurfaceTag.GUTTER_RUN),
    ]


def build_footpath(
    footpath: FootpathModel,
    size_x: float,
    size_z: float,
    road_height: float,
    sink: MeshSink,
) -> int:
    """Emit one footpath's faces into ``sink``.

    Returns:
        Number of faces emitted

    Raises:
        GeometryPreconditionError: If the footpath does not exist
        ValueError: If the footpath span has collapsed to zero width
    """
    if not footpath.exists:
        raise GeometryPreconditionError(
            f"Footpath {footpath.side.name} does not exist; the side connects to a road"
        )

    faces = footpath_faces(footpath, road_height)
    yaw = YAW_BY_SIDE[footpath.side]
    translation = side_translation(footpath.side, size_x, size_z)
    for points, tag in faces:
        placed = place_points(points, yaw, translation, size_x, size_z)
        sink.add_quad_face(placed[0], placed[1], placed[2], placed[3], Winding.CW, tag)

    logger.debug("Footpath %s: %d faces", footpath.side.name, len(faces))
    return len(faces)
