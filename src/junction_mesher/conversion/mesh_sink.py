"""
Mesh sink contract.

Geometry builders never build index buffers themselves. They push
independent faces (triangles and quads) into a MeshSink, each with an
explicit winding and a surface tag. The sink decides how to weld, index
and texture them.

Winding convention (y up):
    CW  front normal = -cross(b - a, c - a)
    CCW front normal = +cross(b - a, c - a)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

Vec3 = Tuple[float, float, float]

EPSILON = 1e-9


class Winding(Enum):
    """Vertex order of an emitted face when seen from its front."""
    CW = "cw"
    CCW = "ccw"


class SurfaceTag(Enum):
    """Logical surface category, stable integer ids."""
    ROAD = 1
    FOOTPATH = 2
    CURB_FACE = 3
    GUTTER_DROP = 4
    GUTTER_RUN = 5

    @property
    def label(self) -> str:
        return self.name.lower()


# ---------------------------------------------------------------------------
# Vector helpers
# ---------------------------------------------------------------------------

def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def face_normal(a: Vec3, b: Vec3, c: Vec3, winding: Winding) -> Vec3:
    """Unnormalized front normal of triangle (a, b, c) for ``winding``."""
    n = _cross(_sub(b, a), _sub(c, a))
    if winding == Winding.CW:
        return (-n[0], -n[1], -n[2])
    return n


def unit_face_normal(a: Vec3, b: Vec3, c: Vec3, winding: Winding) -> Vec3:
    """Unit front normal, or (0, 1, 0) for a degenerate triangle."""
    n = face_normal(a, b, c, winding)
    ln = math.sqrt(n[0] * n[0] + n[1] * n[1] + n[2] * n[2])
    if ln < EPSILON:
        return (0.0, 1.0, 0.0)
    return (n[0] / ln, n[1] / ln, n[2] / ln)


# ---------------------------------------------------------------------------
# Sink contract
# ---------------------------------------------------------------------------

class MeshSink(ABC):
    """Receiver of faces emitted by the geometry builders."""

    @abstractmethod
    def add_triangle_face(self, a: Vec3, b: Vec3, c: Vec3,
                          winding: Winding, tag: SurfaceTag) -> None:
        """Add one triangle."""

    @abstractmethod
    def add_quad_face(self, a: Vec3, b: Vec3, c: Vec3, d: Vec3,
                      winding: Winding, tag: SurfaceTag) -> None:
        """Add one planar quad; vertices in perimeter order."""


@dataclass(frozen=True)
class EmittedFace:
    """A face as handed to a sink."""
    vertices: Tuple[Vec3, ...]
    winding: Winding
    tag: SurfaceTag

    @property
    def is_quad(self) -> bool:
        return len(self.vertices) == 4

    def normal(self) -> Vec3:
        """Unit front normal from the first three vertices."""
        a, b, c = self.vertices[:3]
        return unit_face_normal(a, b, c, self.winding)

    def area(self) -> float:
        """Face area (quads split along the 0-2 diagonal)."""
        v = self.vertices
        total = _tri_area(v[0], v[1], v[2])
        if len(v) == 4:
            total += _tri_area(v[0], v[2], v[3])
        return total


def _tri_area(a: Vec3, b: Vec3, c: Vec3) -> float:
    n = _cross(_sub(b, a), _sub(c, a))
    return 0.5 * math.sqrt(n[0] * n[0] + n[1] * n[1] + n[2] * n[2])


class FaceCollector(MeshSink):
    """Sink that records faces in emission order."""

    def __init__(self):
        self.faces: List[EmittedFace] = []

    def add_triangle_face(self, a, b, c, winding, tag):
        self.faces.append(EmittedFace((a, b, c), winding, tag))

    def add_quad_face(self, a, b, c, d, winding, tag):
        self.faces.append(EmittedFace((a, b, c, d), winding, tag))

    def clear(self) -> None:
        self.faces = []

    def faces_with_tag(self, tag: SurfaceTag) -> List[EmittedFace]:
        return [f for f in self.faces if f.tag == tag]

    def __len__(self) -> int:
        return len(self.faces)


def emit_faces(sink: MeshSink, faces: Iterable[EmittedFace]) -> int:
    """Replay recorded faces into another sink.

    Returns:
        Number of faces emitted
    """
    count = 0
    for face in faces:
        if face.is_quad:
            sink.add_quad_face(*face.vertices, face.winding, face.tag)
        else:
            sink.add_triangle_face(*face.vertices, face.winding, face.tag)
        count += 1
    return count
