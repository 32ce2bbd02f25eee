"""
Wavefront OBJ export for intersection geometry.

ObjWriter is itself a MeshSink: faces are recorded as they arrive and
written grouped by surface tag, one placeholder material per tag. OBJ
treats counter-clockwise faces as front facing, so clockwise faces are
written in reverse order. Coincident corners are merged; a quad that
loses one corner is written as a triangle and anything smaller is dropped.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple

from junction_mesher.conversion.mesh_sink import MeshSink, SurfaceTag, Winding
from junction_mesher.conversion.surface_masks import tag_to_color

Vec3 = Tuple[float, float, float]

# Decimal places written for coordinates; also the vertex dedup key
COORD_PRECISION = 5


class ObjWriter(MeshSink):
    """Write emitted faces as Wavefront OBJ + optional MTL."""

    def __init__(self, object_name: str = "intersection"):
        self.object_name = object_name
        self._vertices: List[Vec3] = []
        self._vertex_index: Dict[Tuple[float, float, float], int] = {}
        self._faces: List[Tuple[List[int], SurfaceTag]] = []  # (1-based indices, tag)

    def _index_of(self, v: Vec3) -> int:
        key = (round(v[0], COORD_PRECISION), round(v[1], COORD_PRECISION),
               round(v[2], COORD_PRECISION))
        idx = self._vertex_index.get(key)
        if idx is None:
            self._vertices.append(v)
            idx = len(self._vertices)  # 1-based
            self._vertex_index[key] = idx
        return idx

    def _add_face(self, verts: List[Vec3], winding: Winding, tag: SurfaceTag) -> None:
        if winding == Winding.CW:
            verts = list(reversed(verts))
        indices: List[int] = []
        for v in verts:
            idx = self._index_of(v)
            if not indices or indices[-1] != idx:
                indices.append(idx)
        # Zero-length edges (e.g. curb skirts over a zero-width gutter) collapse
        if len(indices) > 1 and indices[-1] == indices[0]:
            indices.pop()
        if len(indices) >= 3:
            self._faces.append((indices, tag))

    def add_triangle_face(self, a, b, c, winding, tag):
        self._add_face([a, b, c], winding, tag)

    def add_quad_face(self, a, b, c, d, winding, tag):
        self._add_face([a, b, c, d], winding, tag)

    def write(self, obj_path: str, write_mtl: bool = True) -> None:
        """Write .obj (and optionally .mtl) files."""
        obj_p = Path(obj_path)
        mtl_name = obj_p.stem + ".mtl"

        lines = [
            "# junction_mesher OBJ export",
            f"# {len(self._vertices)} vertices, {len(self._faces)} faces",
        ]
        if write_mtl:
            lines.append(f"mtllib {mtl_name}")
        lines.append(f"o {self.object_name}")
        lines.append("")

        for v in self._vertices:
            lines.append(f"v {v[0]:.{COORD_PRECISION}f} {v[1]:.{COORD_PRECISION}f} "
                         f"{v[2]:.{COORD_PRECISION}f}")
        lines.append("")

        # Emission order is kept within each tag
        for tag in SurfaceTag:
            tagged = [indices for indices, t in self._faces if t == tag]
            if not tagged:
                continue
            lines.append(f"g {tag.label}")
            lines.append(f"usemtl {tag.label}")
            for indices in tagged:
                lines.append("f " + " ".join(str(i) for i in indices))

        obj_p.write_text("\n".join(lines) + "\n")

        if write_mtl:
            self._write_mtl(str(obj_p.parent / mtl_name))

    def _write_mtl(self, mtl_path: str) -> None:
        lines = ["# junction_mesher MTL", ""]
        for tag in self.used_tags():
            r, g, b, _ = tag_to_color(tag)
            lines.append(f"newmtl {tag.label}")
            lines.append(f"Kd {r:.6f} {g:.6f} {b:.6f}")
            lines.append("d 1.0")
            lines.append("")
        Path(mtl_path).write_text("\n".join(lines) + "\n")

    def used_tags(self) -> List[SurfaceTag]:
        """Surface tags present, in tag id order."""
        present = {t for _, t in self._faces}
        return [tag for tag in SurfaceTag if tag in present]

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def face_count(self) -> int:
        return len(self._faces)
