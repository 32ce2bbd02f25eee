"""Tests for the intersection generator and its parameter wrapper."""

import pytest

from junction_mesher.conversion.mesh_sink import FaceCollector, SurfaceTag
from junction_mesher.generators.intersection.generator import (
    ProceduralIntersection,
    build_intersection,
)
from junction_mesher.generators.intersection.intersection_model import (
    IntersectionParameters, build_model,
)
from junction_mesher.generators.intersection.road_fill_builder import core_bounds
from junction_mesher.generators.intersection.topology import (
    CornerId, CornerType, RoadTopology, Side,
)
from junction_mesher.generators.profiles.geometry_config import (
    CornerGeometryConfig,
    CornerSize,
    CornerSizeSet,
    CurbGutter,
    IntersectionGeometryConfig,
    RoadSystemDefaults,
)
from junction_mesher.validation import Severity, UnifiedValidator, ValidationError

from conftest import SITE, contains_point, make_params


def _vertices(faces):
    return [v for f in faces for v in f.vertices]


class TestScenarios:

    def test_cross(self, cross_params):
        result = build_intersection(cross_params)
        assert result.validation.passed
        assert result.model.topology == RoadTopology.X
        assert all(c.type == CornerType.INWARD_FACING for c in result.model.existing_corners())
        assert result.model.existing_footpaths() == []
        assert result.face_count == 4 * 11 + 5
        assert len(result.faces_with_tag(SurfaceTag.ROAD)) == 4 + 5

    def test_plaza(self, plaza_params):
        result = build_intersection(plaza_params)
        assert result.validation.passed
        assert not result.validation.issues
        assert all(c.type == CornerType.OUTWARD_FACING for c in result.model.existing_corners())
        assert len(result.model.existing_footpaths()) == 4
        assert result.face_count == 4 * 5 + 4 * 4 + 1
        assert len(result.faces_with_tag(SurfaceTag.ROAD)) == 1

    def test_tee(self):
        result = build_intersection(make_params(north=True, east=True, south=True))
        assert result.model.topology == RoadTopology.T
        # SE and NE inward; west footpath; core plus three arms
        assert result.face_count == 2 * 11 + 4 + 4

    @pytest.mark.parametrize("flags", [
        dict(north=True, east=True, south=True, west=True),
        dict(),
        dict(north=True, east=True),
        dict(east=True, west=True),
    ])
    def test_identical_inputs_give_identical_faces(self, flags):
        first = build_intersection(make_params(**flags))
        second = build_intersection(make_params(**flags))
        assert first.model == second.model
        assert first.faces == second.faces

    def test_sink_receives_faces_in_order(self, plaza_params):
        sink = FaceCollector()
        result = build_intersection(plaza_params, sink=sink)
        assert sink.faces == result.faces

    def test_pivot_centered(self, plaza_params):
        result = build_intersection(plaza_params)
        xs = [v[0] for v in _vertices(result.faces)]
        zs = [v[2] for v in _vertices(result.faces)]
        assert min(xs) == pytest.approx(-SITE / 2)
        assert max(xs) == pytest.approx(SITE / 2)
        assert min(zs) == pytest.approx(-SITE / 2)
        assert max(zs) == pytest.approx(SITE / 2)


class TestSeams:

    def test_footpath_runs_meet_road_core(self, plaza_params):
        result = build_intersection(plaza_params)
        core = result.faces_with_tag(SurfaceTag.ROAD)[0].vertices
        footpath_runs = result.faces[20:][3::4]
        assert all(f.tag == SurfaceTag.GUTTER_RUN for f in footpath_runs)
        for run in footpath_runs:
            assert contains_point(core, run.vertices[1])
            assert contains_point(core, run.vertices[2])

    def test_footpath_curbs_meet_corner_curbs(self, plaza_params):
        result = build_intersection(plaza_params)
        corner_curbs = _vertices(f for f in result.faces[:20] if f.tag == SurfaceTag.CURB_FACE)
        footpath_curbs = [f for f in result.faces[20:] if f.tag == SurfaceTag.CURB_FACE]
        assert len(footpath_curbs) == 4
        for skirt in footpath_curbs:
            assert contains_point(corner_curbs, skirt.vertices[0])
            assert contains_point(corner_curbs, skirt.vertices[3])

    def test_inward_wedges_meet_road_core(self, cross_params):
        result = build_intersection(cross_params)
        roads = result.faces_with_tag(SurfaceTag.ROAD)
        wedges, core = roads[:4], roads[4]
        for wedge in wedges:
            assert contains_point(core.vertices, wedge.vertices[2])

    @pytest.mark.parametrize("size", [(12.0, 12.0), (20.0, 14.0)])
    @pytest.mark.parametrize("corner_size", [2.5, 3.0])
    @pytest.mark.parametrize("skirt_out, gutter_width", [(0.35, 0.5), (0.2, 0.75), (0.1, 0.3)])
    def test_wedge_apexes_are_exact_core_vertices(self, size, corner_size, skirt_out,
                                                  gutter_width):
        geometry = IntersectionGeometryConfig.uniform(
            corner_size=corner_size,
            curb=CurbGutter(skirt_out=skirt_out, gutter_width=gutter_width))
        params = IntersectionParameters(
            size_x=size[0], size_z=size[1], geometry=geometry,
            connect_north=True, connect_east=True, connect_south=True, connect_west=True)
        roads = build_intersection(params).faces_with_tag(SurfaceTag.ROAD)
        wedges, core = roads[:4], roads[4]
        for wedge in wedges:
            assert wedge.vertices[2] in core.vertices

    def test_gutter_caps_end_exactly_on_core(self, plaza_params):
        result = build_intersection(plaza_params)
        core = result.faces_with_tag(SurfaceTag.ROAD)[0]
        gutter_caps = result.faces[:20][4::5]
        assert all(f.tag == SurfaceTag.GUTTER_RUN for f in gutter_caps)
        for cap in gutter_caps:
            assert cap.vertices[2] in core.vertices

    def test_road_faces_at_road_height(self):
        result = build_intersection(make_params(east=True, west=True, road_height=-0.3))
        for face in result.faces_with_tag(SurfaceTag.ROAD):
            assert all(v[1] == pytest.approx(-0.3) for v in face.vertices)


class TestCoreArea:

    def test_shrinks_as_corners_grow(self):
        areas = [core_bounds(build_model(make_params(corner_size=s))).area
                 for s in (1.0, 2.0, 3.0, 4.0)]
        assert areas == sorted(areas, reverse=True)
        assert len(set(areas)) == len(areas)

    def test_shrinks_as_curb_widens(self):
        def area(skirt_out):
            geometry = IntersectionGeometryConfig.uniform(curb=CurbGutter(skirt_out=skirt_out))
            params = IntersectionParameters(size_x=SITE, size_z=SITE, geometry=geometry)
            return core_bounds(build_model(params)).area

        assert area(0.2) > area(0.35) > area(0.6)

    def test_shrinks_as_gutter_widens(self):
        def area(gutter_width):
            geometry = IntersectionGeometryConfig.uniform(
                curb=CurbGutter(gutter_width=gutter_width))
            params = IntersectionParameters(size_x=SITE, size_z=SITE, geometry=geometry)
            return core_bounds(build_model(params)).area

        assert area(0.0) > area(0.5) > area(1.0)

    @pytest.mark.parametrize("corner_id", list(CornerId))
    def test_single_corner_never_grows_core(self, corner_id):
        def area(x_size, z_size):
            sizes = CornerSizeSet().with_corner(corner_id, CornerSize(x_size, z_size))
            geometry = IntersectionGeometryConfig(corners=CornerGeometryConfig(sizes=sizes))
            params = IntersectionParameters(size_x=SITE, size_z=SITE, geometry=geometry)
            return core_bounds(build_model(params)).area

        assert area(3.0, 3.0) >= area(3.5, 3.0) >= area(4.5, 3.0)
        assert area(3.0, 3.0) > area(4.5, 3.0)
        assert area(3.0, 3.0) >= area(3.0, 4.0) >= area(3.0, 5.0)
        assert area(3.0, 3.0) > area(3.0, 5.0)


class TestDegenerate:

    def test_oversized_corners_warn(self):
        result = build_intersection(make_params(corner_size=6.0))
        assert result.validation.passed
        codes = result.validation.codes()
        assert codes.count("FILL-002") == 4
        assert codes.count("FILL-001") == 1
        assert result.faces_with_tag(SurfaceTag.ROAD) == []
        assert result.face_count == 4 * 5

    def test_strict_mode_fails_on_warnings(self):
        validator = UnifiedValidator(strict_mode=True)
        result = build_intersection(make_params(corner_size=6.0), validator=validator)
        assert result.validation.failed
        assert all(i.severity == Severity.FAIL for i in result.validation.issues)

    def test_strict_fail_fast_writes_nothing(self):
        sink = FaceCollector()
        with pytest.raises(ValidationError):
            build_intersection(make_params(corner_size=6.0), sink=sink, fail_fast=True,
                               validator=UnifiedValidator(strict_mode=True))
        assert len(sink) == 0

    def test_invalid_size_returns_no_model(self):
        result = build_intersection(make_params(size=(0.0, SITE)))
        assert result.model is None
        assert result.faces == []
        assert result.validation.codes() == ["CFG-001"]

    def test_invalid_depth_fail_fast(self):
        sink = FaceCollector()
        with pytest.raises(ValidationError) as exc_info:
            build_intersection(make_params(depth=-1.0), sink=sink, fail_fast=True)
        assert "CFG-004" in exc_info.value.result.codes()
        assert len(sink) == 0

    def test_validator_history(self, cross_params):
        validator = UnifiedValidator()
        build_intersection(cross_params, validator=validator)
        assert len(validator.get_history()) == 2


class TestProceduralIntersection:

    def test_schema(self):
        schema = ProceduralIntersection.get_parameter_schema()
        for key in ("size_x", "size_z", "road_height", "connect_north", "connect_west",
                    "skirt_out", "gutter_width", "corner_size", "footpath_depth"):
            assert key in schema
        assert schema["connect_east"]["type"] == "bool"
        assert ProceduralIntersection.get_display_name() == "Intersection"
        assert ProceduralIntersection.get_category() == "Roads"

    def test_apply_params(self):
        intersection = ProceduralIntersection()
        intersection.apply_params({
            "size_x": 20, "connect_north": 1, "corner_size": 4.0,
            "gutter_width": 0.25, "unknown": "ignored",
        })
        params = intersection.params
        assert params.size_x == 20.0
        assert params.connect_north is True
        assert params.geometry.corners.sizes.ne.x_size == 4.0
        assert params.geometry.curb.gutter_width == 0.25

    def test_shared_defaults_keep_connections(self):
        intersection = ProceduralIntersection()
        intersection.set_connected(Side.EAST, True)
        intersection.apply_shared_defaults(
            RoadSystemDefaults(road_height=1.0, intersection_size=(16.0, 16.0)))
        assert intersection.params.connect_east
        assert intersection.params.size_x == 16.0
        assert intersection.params.road_height == 1.0

    def test_build(self):
        intersection = ProceduralIntersection(make_params())
        intersection.set_connected(Side.SOUTH, True)
        sink = FaceCollector()
        result = intersection.build(sink=sink)
        assert result.model.topology == RoadTopology.DEAD_END
        assert len(sink) == result.face_count
        assert intersection.build_model() == result.model
