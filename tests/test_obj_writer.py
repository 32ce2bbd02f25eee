"""Tests for Wavefront OBJ export."""

from junction_mesher.conversion.mesh_sink import SurfaceTag, Winding
from junction_mesher.conversion.obj_writer import ObjWriter
from junction_mesher.generators.intersection.generator import build_intersection
from junction_mesher.generators.intersection.intersection_model import IntersectionParameters
from junction_mesher.generators.profiles.geometry_config import (
    CurbGutter, IntersectionGeometryConfig,
)


def _parse(obj_path):
    vertices, faces, materials = [], [], []
    material = None
    for line in obj_path.read_text().splitlines():
        parts = line.split()
        if not parts:
            continue
        if parts[0] == "v":
            vertices.append(tuple(float(p) for p in parts[1:]))
        elif parts[0] == "usemtl":
            material = parts[1]
            materials.append(material)
        elif parts[0] == "f":
            faces.append(([int(p) for p in parts[1:]], material))
    return vertices, faces, materials


def _cross_y(a, b, c):
    ux, uz = b[0] - a[0], b[2] - a[2]
    vx, vz = c[0] - a[0], c[2] - a[2]
    return uz * vx - ux * vz


class TestObjWriter:

    def test_clockwise_faces_are_reversed(self, tmp_path):
        writer = ObjWriter()
        writer.add_quad_face((0, 0, 0), (1, 0, 0), (1, 0, 1), (0, 0, 1),
                             Winding.CW, SurfaceTag.ROAD)
        path = tmp_path / "quad.obj"
        writer.write(str(path), write_mtl=False)

        vertices, faces, _ = _parse(path)
        indices, material = faces[0]
        a, b, c = (vertices[i - 1] for i in indices[:3])
        assert _cross_y(a, b, c) > 0.0
        assert material == "road"
        assert not (tmp_path / "quad.mtl").exists()

    def test_counter_clockwise_faces_kept(self):
        writer = ObjWriter()
        writer.add_triangle_face((0, 0, 0), (0, 0, 1), (1, 0, 0),
                                 Winding.CCW, SurfaceTag.FOOTPATH)
        writer.add_triangle_face((0, 0, 0), (1, 0, 0), (0, 0, 1),
                                 Winding.CW, SurfaceTag.FOOTPATH)
        assert writer.vertex_count == 3
        assert writer.face_count == 2

    def test_intersection_export(self, tmp_path, plaza_params):
        writer = ObjWriter(object_name="plaza")
        result = build_intersection(plaza_params, sink=writer)
        path = tmp_path / "plaza.obj"
        writer.write(str(path))

        text = path.read_text()
        assert "mtllib plaza.mtl" in text
        assert "o plaza" in text

        vertices, faces, materials = _parse(path)
        assert len(faces) == result.face_count
        assert len(vertices) == writer.vertex_count
        assert materials == [tag.label for tag in writer.used_tags()]
        assert len(set(vertices)) == len(vertices)
        assert all(1 <= i <= len(vertices) for indices, _ in faces for i in indices)

        mtl = (tmp_path / "plaza.mtl").read_text()
        for tag in SurfaceTag:
            assert f"newmtl {tag.label}" in mtl
        assert "Kd 0.003922 0.000000 0.000000" in mtl

    def test_road_and_footpath_face_up(self, tmp_path, cross_params):
        writer = ObjWriter()
        build_intersection(cross_params, sink=writer)
        path = tmp_path / "cross.obj"
        writer.write(str(path), write_mtl=False)

        vertices, faces, _ = _parse(path)
        for indices, material in faces:
            if material not in ("road", "footpath"):
                continue
            a, b, c = (vertices[i - 1] for i in indices[:3])
            assert _cross_y(a, b, c) > 0.0

    def test_used_tags_in_id_order(self):
        writer = ObjWriter()
        writer.add_triangle_face((0, 0, 0), (1, 0, 0), (0, 0, 1),
                                 Winding.CW, SurfaceTag.GUTTER_RUN)
        writer.add_triangle_face((0, 1, 0), (1, 1, 0), (0, 1, 1),
                                 Winding.CW, SurfaceTag.ROAD)
        assert writer.used_tags() == [SurfaceTag.ROAD, SurfaceTag.GUTTER_RUN]

    def test_collapsed_quad_written_as_triangle(self, tmp_path):
        writer = ObjWriter()
        writer.add_quad_face((0, 0, 0), (1, 0, 0), (1, 0, 0), (0, -1, 0),
                             Winding.CW, SurfaceTag.CURB_FACE)
        writer.add_quad_face((0, 0, 0), (1, 0, 0), (0, -1, 0), (0, 0, 0),
                             Winding.CCW, SurfaceTag.CURB_FACE)
        path = tmp_path / "skirt.obj"
        writer.write(str(path), write_mtl=False)

        _, faces, _ = _parse(path)
        assert [indices for indices, _ in faces] == [[1, 2, 3], [3, 2, 1]]

    def test_fully_collapsed_face_skipped(self):
        writer = ObjWriter()
        writer.add_quad_face((0, 0, 0), (1, 0, 0), (1, 0, 0), (0, 0, 0),
                             Winding.CW, SurfaceTag.CURB_FACE)
        writer.add_triangle_face((2, 0, 0), (2, 0, 0), (2, 0, 0),
                                 Winding.CCW, SurfaceTag.GUTTER_DROP)
        assert writer.face_count == 0
        assert writer.used_tags() == []

    def test_zero_width_gutter_has_no_repeated_indices(self, tmp_path):
        geometry = IntersectionGeometryConfig.uniform(curb=CurbGutter(gutter_width=0.0))
        writer = ObjWriter()
        build_intersection(IntersectionParameters(geometry=geometry), sink=writer)
        path = tmp_path / "no_gutter.obj"
        writer.write(str(path), write_mtl=False)

        _, faces, _ = _parse(path)
        assert faces
        for indices, _ in faces:
            assert len(indices) >= 3
            assert len(set(indices)) == len(indices)
