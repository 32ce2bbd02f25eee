"""Tests for validation results, rules, checks and the unified validator."""

import math

import pytest

from junction_mesher.conversion.mesh_sink import EmittedFace, SurfaceTag, Winding
from junction_mesher.generators.intersection.intersection_model import IntersectionParameters
from junction_mesher.generators.intersection.topology import CornerId
from junction_mesher.generators.profiles.geometry_config import (
    CornerGeometryConfig,
    CurbGutter,
    IntersectionGeometryConfig,
)
from junction_mesher.validation import (
    Severity,
    UnifiedValidator,
    ValidationError,
    ValidationIssue,
    ValidationResult,
    ValidationStage,
)
from junction_mesher.validation.checks import (
    check_curb,
    check_face,
    check_site_size,
    validate_faces,
    validate_parameters,
)
from junction_mesher.validation.rules import CFG_001, FILL_001, FILL_002, GEOM_002

from conftest import make_params

UP_QUAD = ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 0.0, 1.0), (0.0, 0.0, 1.0))


def _issue(severity, code="X-001"):
    return ValidationIssue(severity=severity, code=code, message="msg", rule_reference="ref")


class TestIssueAndResult:

    def test_format(self):
        issue = ValidationIssue(
            severity=Severity.WARN, code="FILL-002", message="collapsed",
            rule_reference="span", remediation="shrink corners", location="footpath SOUTH",
        )
        assert issue.format() == (
            "[WARN] FILL-002 at=footpath SOUTH :: collapsed :: fix=shrink corners")
        assert str(issue) == issue.format()

    def test_format_without_location(self):
        assert _issue(Severity.FAIL).format() == "[FAIL] X-001 at=- :: msg :: fix=N/A"

    def test_pass_fail(self):
        result = ValidationResult()
        assert result.passed
        result.add_issue(_issue(Severity.WARN))
        result.add_issue(_issue(Severity.INFO))
        assert result.passed
        result.add_issue(_issue(Severity.FAIL))
        assert result.failed
        assert (len(result.errors), len(result.warnings), len(result.infos)) == (1, 1, 1)

    def test_merge_chains(self):
        a = ValidationResult(issues=[_issue(Severity.WARN, "A")])
        b = ValidationResult(issues=[_issue(Severity.FAIL, "B")])
        assert a.merge(b).merge(ValidationResult()) is a
        assert a.codes() == ["A", "B"]

    def test_report(self):
        assert ValidationResult().report() == "Validation passed: No issues found"
        result = ValidationResult(stage=ValidationStage.CONFIG)
        result.add_issue(_issue(Severity.WARN, "W"))
        result.add_issue(_issue(Severity.FAIL, "F"))
        report = result.report()
        assert report.startswith("Validation FAILED (config): 2 issue(s)")
        assert report.index("FAIL (1)") < report.index("WARN (1)")

    def test_to_dict(self):
        result = ValidationResult(stage=ValidationStage.GENERATION)
        result.add_issue(_issue(Severity.WARN))
        data = result.to_dict()
        assert data["passed"] is True
        assert data["stage"] == "generation"
        assert data["warn_count"] == 1
        assert data["issues"][0]["severity"] == "WARN"

    def test_error_carries_result(self):
        result = ValidationResult(issues=[_issue(Severity.FAIL, "F")])
        error = ValidationError(result)
        assert error.result is result
        assert "F" in str(error)


class TestRules:

    def test_issue_from_rule(self):
        issue = FILL_002.issue(location="footpath EAST", x=6.0)
        assert issue.severity == Severity.WARN
        assert issue.code == "FILL-002"
        assert issue.message == "Footpath span collapsed at x=6.000; footpath skipped"
        assert issue.location == "footpath EAST"
        assert issue.remediation

    def test_templates(self):
        assert CFG_001.format_message(axis="size_x", value=0.0) == (
            "Intersection size size_x=0.0 must be > 0")
        message = FILL_001.format_message(x_left=6.85, x_right=5.15, z_bottom=6.85, z_top=5.15)
        assert "x=[6.850, 5.150]" in message


class TestConfigChecks:

    def test_site_size(self):
        codes = [i.code for i in check_site_size(math.inf, -1.0)]
        assert codes == ["CFG-005", "CFG-001"]
        assert check_site_size(1.0, 1.0) == []

    def test_curb(self):
        issues = check_curb(CurbGutter(skirt_out=-0.1, gutter_width=math.nan), "shared")
        assert [i.code for i in issues] == ["CFG-002", "CFG-005"]
        assert all(i.location == "shared" for i in issues)
        assert check_curb(CurbGutter(skirt_out=0.0, skirt_down=0.0), "shared") == []

    def test_valid_parameters(self, cross_params):
        result = validate_parameters(cross_params)
        assert result.passed
        assert result.stage == ValidationStage.CONFIG
        assert not result.issues

    def test_corner_curb_override_checked(self):
        geometry = IntersectionGeometryConfig(corners=CornerGeometryConfig(
            curb_overrides={CornerId.NE: CurbGutter(gutter_depth=-1.0)}))
        result = validate_parameters(IntersectionParameters(geometry=geometry))
        assert result.codes() == ["CFG-002"]
        assert result.issues[0].location == "corner NE"

    def test_sizes_and_depths(self):
        result = validate_parameters(make_params(corner_size=0.0, depth=math.nan))
        assert result.codes().count("CFG-003") == 8
        assert result.codes().count("CFG-005") == 4
        assert result.failed

    def test_road_height_must_be_finite(self):
        result = validate_parameters(make_params(road_height=math.inf))
        assert result.codes() == ["CFG-005"]


class TestGeometryChecks:

    def test_up_facing_face_passes(self):
        assert check_face(EmittedFace(UP_QUAD, Winding.CW, SurfaceTag.ROAD), 0) == []

    def test_down_facing_level_face(self):
        issues = check_face(EmittedFace(UP_QUAD, Winding.CCW, SurfaceTag.FOOTPATH), 3)
        assert [i.code for i in issues] == ["GEOM-003"]
        assert issues[0].location == "face 3"

    def test_vertical_face_passes(self):
        wall = ((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, -1.0, 1.0), (0.0, -1.0, 0.0))
        assert check_face(EmittedFace(wall, Winding.CCW, SurfaceTag.CURB_FACE), 0) == []

    def test_degenerate_face(self):
        flat = ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0))
        issues = check_face(EmittedFace(flat, Winding.CW, SurfaceTag.GUTTER_DROP), 0)
        assert [i.code for i in issues] == [GEOM_002.code]
        assert "gutter_drop" in issues[0].message

    def test_non_finite_vertex(self):
        bad = ((0.0, math.nan, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, 1.0))
        issues = check_face(EmittedFace(bad, Winding.CW, SurfaceTag.ROAD), 0)
        assert [i.code for i in issues] == ["GEOM-001"]
        assert issues[0].severity == Severity.FAIL

    def test_validate_faces(self):
        faces = [
            EmittedFace(UP_QUAD, Winding.CW, SurfaceTag.ROAD),
            EmittedFace(UP_QUAD, Winding.CCW, SurfaceTag.ROAD),
        ]
        result = validate_faces(faces)
        assert result.stage == ValidationStage.GENERATION
        assert result.codes() == ["GEOM-003"]
        assert result.issues[0].location == "face 1"


class TestUnifiedValidator:

    def test_strict_mode_promotes_warnings(self):
        validator = UnifiedValidator(strict_mode=True)
        flat = ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0))
        result = validator.validate_generation([EmittedFace(flat, Winding.CW, SurfaceTag.ROAD)])
        assert result.failed
        assert result.issues[0].severity == Severity.FAIL

    def test_apply_policy(self):
        result = ValidationResult(issues=[_issue(Severity.WARN), _issue(Severity.INFO)])
        UnifiedValidator(strict_mode=True).apply_policy(result)
        assert [i.severity for i in result.issues] == [Severity.FAIL, Severity.INFO]
        relaxed = ValidationResult(issues=[_issue(Severity.WARN)])
        UnifiedValidator().apply_policy(relaxed)
        assert relaxed.passed

    def test_disabled(self):
        validator = UnifiedValidator(enabled=False)
        assert validator.validate_config(make_params(size=(-1.0, -1.0))).passed
        assert validator.get_history() == []

    def test_history(self, cross_params):
        validator = UnifiedValidator()
        validator.validate_config(cross_params)
        validator.validate_config(make_params(size=(0.0, 1.0)))
        history = validator.get_history()
        assert [r.passed for r in history] == [True, False]
        validator.clear_history()
        assert validator.get_history() == []


@pytest.mark.parametrize("severity, expected", [
    (Severity.INFO, "INFO"),
    (Severity.WARN, "WARN"),
    (Severity.FAIL, "FAIL"),
])
def test_severity_str(severity, expected):
    assert str(severity) == expected
