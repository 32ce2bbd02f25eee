"""
Corner wedge builder.

Builds the geometry of one existing corner in a local frame (corner at the
origin, +X and +Z pointing into the site), then places it with the
corner's yaw.

Inward-facing corners (road on both adjacent sides) get a square footpath
island whose curb, gutter and gutter run wrap around its inner corner and
close off with a road wedge that ends at the apex:

    pad -> skirt X/Z -> footpath wedge -> apron X/Z -> apron cap
        -> run X/Z -> run cap -> road wedge

Outward-facing corners (footpath on both adjacent sides) get the pad, a
footpath cap triangle filling the gap between the two footpath ends, and a
diagonal curb, gutter apron and gutter cap stepping down to the apex.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from junction_mesher.conversion.mesh_sink import MeshSink, SurfaceTag, Winding
from junction_mesher.generators.intersection.corners import CornerModel
from junction_mesher.generators.intersection.extrusion import (
    extrude_edge_out_down,
    extrude_edge_out_to_world_y,
)
from junction_mesher.generators.intersection.placement import (
    YAW_BY_CORNER,
    corner_translation,
    local_corner_extents,
    place_points,
    recenter_points,
)
from junction_mesher.generators.intersection.topology import (
    CornerType,
    GeometryPreconditionError,
)
from junction_mesher.generators.profiles.geometry_config import CurbGutter

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]
LocalFace = Tuple[List[Vec3], SurfaceTag]

_POS_X: Vec3 = (1.0, 0.0, 0.0)
_POS_Z: Vec3 = (0.0, 0.0, 1.0)


def _pad(sx: float, sz: float) -> List[Vec3]:
    return [(0.0, 0.0, 0.0), (sx, 0.0, 0.0), (sx, 0.0, sz), (0.0, 0.0, sz)]


def _lower(p: Vec3, amount: float) -> Vec3:
    return (p[0], p[1] - amount, p[2])


def inward_corner_faces(sx: float, sz: float, curb: CurbGutter,
                        road_height: float) -> List[LocalFace]:
    """Local-frame faces of an inward-facing corner, in emission order."""
    so, sd = curb.skirt_out, curb.skirt_down
    gd, gw = curb.gutter_depth, curb.gutter_width
    join = so + gw

    q = _pad(sx, sz)
    skirt_x = extrude_edge_out_down(q[1], q[2], _POS_X, so, sd)
    skirt_z = extrude_edge_out_down(q[2], q[3], _POS_Z, so, sd)
    wedge = [q[2], skirt_x[2], skirt_z[1]]

    apron_x = extrude_edge_out_down(skirt_x[1], skirt_x[2], _POS_X, 0.0, gd)
    apron_z = extrude_edge_out_down(skirt_z[1], skirt_z[2], _POS_Z, 0.0, gd)
    apron_cap = [wedge[2], wedge[1], apron_x[2], apron_z[1]]

    run_x = extrude_edge_out_to_world_y(apron_x[1], apron_x[2], _POS_X, gw, road_height)
    run_z = extrude_edge_out_to_world_y(apron_z[1], apron_z[2], _POS_Z, gw, road_height)
    run_cap = [run_x[3], run_x[2], run_z[1], run_z[0]]

    apex = (q[2][0] + join, road_height, q[2][2] + join)
    road_wedge = [run_cap[2], run_cap[1], apex]

    return [
        (q, SurfaceTag.FOOTPATH),
        (skirt_x, SurfaceTag.CURB_FACE),
        (skirt_z, SurfaceTag.CURB_FACE),
        (wedge, SurfaceTag.FOOTPATH),
        (apron_x, SurfaceTag.GUTTER_DROP),
        (apron_z, SurfaceTag.GUTTER_DROP),
        (apron_cap, SurfaceTag.GUTTER_DROP),
        (run_x, SurfaceTag.GUTTER_RUN),
        (run_z, SurfaceTag.GUTTER_RUN),
        (run_cap, SurfaceTag.GUTTER_RUN),
        (road_wedge, SurfaceTag.ROAD),
    ]


def outward_corner_faces(sx: float, sz: float, curb: CurbGutter,
                         road_height: float) -> List[LocalFace]:
    """Local-frame faces of an outward-facing corner, in emission order."""
    so, sd = curb.skirt_out, curb.skirt_down
    gd = curb.gutter_depth
    join = so + curb.gutter_width

    pad = _pad(sx, sz)
    corner = pad[2]
    foot_cap = [
        corner,
        (corner[0] + join, 0.0, corner[2]),
        (corner[0], 0.0, corner[2] + join),
    ]

    fc1, fc2 = foot_cap[1], foot_cap[2]
    curb_skirt = [
        (fc1[0], -sd, fc1[2] + so),
        (fc2[0] + so, -sd, fc2[2]),
        fc2,
        fc1,
    ]
    gutter_apron = [
        curb_skirt[0],
        _lower(curb_skirt[0], gd),
        _lower(curb_skirt[1], gd),
        curb_skirt[1],
    ]
    apex = (corner[0] + join, road_height, corner[2] + join)
    gutter_cap = [gutter_apron[2], gutter_apron[1], apex]

    return [
        (pad, SurfaceTag.FOOTPATH),
        (foot_cap, SurfaceTag.FOOTPATH),
        (curb_skirt, SurfaceTag.CURB_FACE),
        (gutter_apron, SurfaceTag.GUTTER_DROP),
        (gutter_cap, SurfaceTag.GUTTER_RUN),
    ]


def build_corner(
    corner: CornerModel,
    size_x: float,
    size_z: float,
    road_height: float,
    sink: MeshSink,
) -> int:
    """Emit one corner's faces into ``sink``.

    Args:
        corner: Corner model; must exist
        size_x: Site extent along X
        size_z: Site extent along Z
        road_height: Absolute y of the road surface
        sink: Face receiver

    Returns:
        Number of faces emitted

    Raises:
        GeometryPreconditionError: If the corner does not exist
    """
    if not corner.exists:
        raise GeometryPreconditionError(
            f"Corner {corner.id.name} does not exist; "
            "exactly one of its sides connects to a road"
        )

    geometry = corner.geometry
    sx, sz = local_corner_extents(corner.id, geometry.x_size, geometry.z_size)

    if corner.type == CornerType.INWARD_FACING:
        faces = inward_corner_faces(sx, sz, geometry.curb, road_height)
    else:
        faces = outward_corner_faces(sx, sz, geometry.curb, road_height)

    yaw = YAW_BY_CORNER[corner.id]
    translation = corner_translation(corner.id, size_x, size_z)
    # Closing face ends exactly at the model apex, as the road core does
    apex = recenter_points([corner.apex], size_x, size_z)[0]
    last = len(faces) - 1
    for index, (points, tag) in enumerate(faces):
        placed = place_points(points, yaw, translation, size_x, size_z)
        if index == last:
            placed[2] = apex
        if len(placed) == 4:
            sink.add_quad_face(placed[0], placed[1], placed[2], placed[3], Winding.CW, tag)
        else:
            sink.add_triangle_face(placed[0], placed[1], placed[2], Winding.CW, tag)

    logger.debug("Corner %s (%s): %d faces", corner.id.name, corner.type.name, len(faces))
    return len(faces)
