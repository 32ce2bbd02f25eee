"""
Welding mesh builder.

A MeshSink that turns emitted faces into indexed vertex buffers. Vertices
are shared between faces only when they sit at the same position (within
``weld_epsilon``), carry the same surface tag and have normals within
``normal_tolerance_deg`` of each other, so hard creases such as the curb
edge stay sharp while coplanar seams are merged.

Output triangles are counter-clockwise about their front normal, whatever
winding the face arrived with.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from junction_mesher.conversion.mesh_sink import (
    MeshSink, SurfaceTag, Winding, emit_faces, face_normal,
)
from junction_mesher.conversion.surface_masks import tag_to_color

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]

DEFAULT_WELD_EPSILON = 1e-5
DEFAULT_NORMAL_TOLERANCE_DEG = 5.0
DEGENERATE_EPSILON = 1e-12


@dataclass
class RenderMesh:
    """Indexed triangle mesh."""
    positions: np.ndarray  # Shape: (N, 3), dtype=float32
    normals: np.ndarray    # Shape: (N, 3), dtype=float32
    uvs: np.ndarray        # Shape: (N, 2), dtype=float32
    colors: np.ndarray     # Shape: (N, 4), dtype=float32, red channel = surface tag
    indices: np.ndarray    # Shape: (M, 3), dtype=uint32
    triangle_tags: np.ndarray  # Shape: (M,), dtype=uint8, SurfaceTag values
    bounds_min: Tuple[float, float, float]
    bounds_max: Tuple[float, float, float]

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices)

    @property
    def is_empty(self) -> bool:
        return len(self.positions) == 0

    def triangles_with_tag(self, tag: SurfaceTag) -> np.ndarray:
        """Index rows of the triangles carrying ``tag``."""
        return self.indices[self.triangle_tags == tag.value]


def _normalize(v: Vec3) -> Optional[Vec3]:
    ln = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if ln < DEGENERATE_EPSILON:
        return None
    return (v[0] / ln, v[1] / ln, v[2] / ln)


def _compute_uv(vertex: Vec3, normal: Vec3, uv_scale: float) -> Vec2:
    """Planar projection along the dominant normal axis (y up)."""
    x, y, z = vertex
    ax, ay, az = abs(normal[0]), abs(normal[1]), abs(normal[2])

    if ay >= ax and ay >= az:
        u, v = x, z      # road, footpath, caps
    elif ax >= az:
        u, v = z, y      # faces looking along X
    else:
        u, v = x, y      # faces looking along Z

    return (u / uv_scale, v / uv_scale)


class WeldingMeshBuilder(MeshSink):
    """Accumulates faces and welds them into a RenderMesh."""

    def __init__(
        self,
        weld_epsilon: float = DEFAULT_WELD_EPSILON,
        normal_tolerance_deg: float = DEFAULT_NORMAL_TOLERANCE_DEG,
        uv_scale: float = 1.0,
    ):
        self.weld_epsilon = weld_epsilon
        self.normal_cos = math.cos(math.radians(normal_tolerance_deg))
        self.uv_scale = uv_scale
        self.clear()

    def clear(self):
        """Clear all mesh data."""
        self._positions: List[Vec3] = []
        self._normal_sums: List[List[float]] = []
        self._first_normals: List[Vec3] = []
        self._tags: List[SurfaceTag] = []
        self._indices: List[Tuple[int, int, int]] = []
        self._triangle_tags: List[int] = []
        self._grid: Dict[Tuple[SurfaceTag, int, int, int], List[int]] = {}
        self.degenerate_faces = 0

    # ------------------------------------------------------------------
    # MeshSink
    # ------------------------------------------------------------------

    def add_triangle_face(self, a, b, c, winding, tag):
        normal = self._face_normal(a, b, c, winding, tag)
        i0, i1, i2 = (self._weld(p, normal, tag) for p in (a, b, c))
        self._add_triangle(i0, i1, i2, winding, tag)

    def add_quad_face(self, a, b, c, d, winding, tag):
        normal = self._face_normal(a, b, c, winding, tag)
        i0, i1, i2, i3 = (self._weld(p, normal, tag) for p in (a, b, c, d))
        # Split along the 0-2 diagonal
        self._add_triangle(i0, i1, i2, winding, tag)
        self._add_triangle(i0, i2, i3, winding, tag)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _face_normal(self, a: Vec3, b: Vec3, c: Vec3,
                     winding: Winding, tag: SurfaceTag) -> Vec3:
        normal = _normalize(face_normal(a, b, c, winding))
        if normal is None:
            self.degenerate_faces += 1
            logger.warning("Degenerate %s face at %s; using up normal", tag.label, a)
            return (0.0, 1.0, 0.0)
        return normal

    def _cell(self, p: Vec3) -> Tuple[int, int, int]:
        eps = self.weld_epsilon
        return (int(math.floor(p[0] / eps)), int(math.floor(p[1] / eps)),
                int(math.floor(p[2] / eps)))

    def _weld(self, p: Vec3, normal: Vec3, tag: SurfaceTag) -> int:
        """Return an existing compatible vertex index or add a new vertex."""
        cx, cy, cz = self._cell(p)
        eps2 = self.weld_epsilon * self.weld_epsilon
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for dz in (-1, 0, 1):
                    for idx in self._grid.get((tag, cx + dx, cy + dy, cz + dz), ()):
                        q = self._positions[idx]
                        d2 = (p[0] - q[0]) ** 2 + (p[1] - q[1]) ** 2 + (p[2] - q[2]) ** 2
                        if d2 > eps2:
                            continue
                        n = self._first_normals[idx]
                        if n[0] * normal[0] + n[1] * normal[1] + n[2] * normal[2] < self.normal_cos:
                            continue
                        sums = self._normal_sums[idx]
                        for k in range(3):
                            sums[k] += normal[k]
                        return idx

        idx = len(self._positions)
        self._positions.append((float(p[0]), float(p[1]), float(p[2])))
        self._normal_sums.append(list(normal))
        self._first_normals.append(normal)
        self._tags.append(tag)
        self._grid.setdefault((tag, cx, cy, cz), []).append(idx)
        return idx

    def _add_triangle(self, i0: int, i1: int, i2: int,
                      winding: Winding, tag: SurfaceTag) -> None:
        if winding == Winding.CW:
            self._indices.append((i0, i2, i1))
        else:
            self._indices.append((i0, i1, i2))
        self._triangle_tags.append(tag.value)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    @property
    def vertex_count(self) -> int:
        return len(self._positions)

    @property
    def triangle_count(self) -> int:
        return len(self._indices)

    def build(self) -> RenderMesh:
        """Build the final indexed mesh."""
        if not self._positions:
            return RenderMesh(
                positions=np.zeros((0, 3), dtype=np.float32),
                normals=np.zeros((0, 3), dtype=np.float32),
                uvs=np.zeros((0, 2), dtype=np.float32),
                colors=np.zeros((0, 4), dtype=np.float32),
                indices=np.zeros((0, 3), dtype=np.uint32),
                triangle_tags=np.zeros((0,), dtype=np.uint8),
                bounds_min=(0.0, 0.0, 0.0),
                bounds_max=(0.0, 0.0, 0.0),
            )

        positions = np.array(self._positions, dtype=np.float64)
        sums = np.array(self._normal_sums, dtype=np.float64)
        lengths = np.linalg.norm(sums, axis=1, keepdims=True)
        fallback = np.array(self._first_normals, dtype=np.float64)
        normals = np.where(lengths > DEGENERATE_EPSILON,
                           sums / np.maximum(lengths, DEGENERATE_EPSILON), fallback)

        uvs = [_compute_uv(tuple(p), tuple(n), self.uv_scale)
               for p, n in zip(positions, normals)]
        colors = [tag_to_color(tag) for tag in self._tags]

        return RenderMesh(
            positions=positions.astype(np.float32),
            normals=normals.astype(np.float32),
            uvs=np.array(uvs, dtype=np.float32),
            colors=np.array(colors, dtype=np.float32),
            indices=np.array(self._indices, dtype=np.uint32).reshape(-1, 3),
            triangle_tags=np.array(self._triangle_tags, dtype=np.uint8),
            bounds_min=tuple(float(v) for v in positions.min(axis=0)),
            bounds_max=tuple(float(v) for v in positions.max(axis=0)),
        )


def build_render_mesh(faces, **kwargs) -> RenderMesh:
    """Convenience function: weld a sequence of EmittedFace into a RenderMesh."""
    builder = WeldingMeshBuilder(**kwargs)
    emit_faces(builder, faces)
    return builder.build()
