"""
Geometry validation checks.

Validates emitted faces:
- Finite vertex coordinates (GEOM-001)
- Degenerate (zero-area) faces (GEOM-002)
- Up-facing horizontal surfaces (GEOM-003)
"""

import math
from typing import List, Sequence

from junction_mesher.conversion.mesh_sink import EmittedFace

from ..core import ValidationIssue, ValidationResult, ValidationStage
from ..rules import GEOM_001, GEOM_002, GEOM_003

AREA_EPSILON = 1e-9
LEVEL_EPSILON = 1e-9


def _is_level(face: EmittedFace) -> bool:
    y0 = face.vertices[0][1]
    return all(abs(v[1] - y0) <= LEVEL_EPSILON for v in face.vertices)


def check_face(face: EmittedFace, index: int) -> List[ValidationIssue]:
    """Check one face; later checks are skipped once a face fails an earlier one."""
    location = f"face {index}"

    for vertex in face.vertices:
        if not all(math.isfinite(c) for c in vertex):
            return [GEOM_001.issue(location=location, vertex=vertex)]

    area = face.area()
    if area < AREA_EPSILON:
        return [GEOM_002.issue(location=location, tag=face.tag.label, area=area)]

    if _is_level(face):
        ny = face.normal()[1]
        if ny <= 0.0:
            return [GEOM_003.issue(location=location, tag=face.tag.label, ny=ny)]

    return []


def validate_faces(faces: Sequence[EmittedFace]) -> ValidationResult:
    """Run geometry checks over emitted faces.

    Returns:
        ValidationResult at the GENERATION stage
    """
    result = ValidationResult(stage=ValidationStage.GENERATION)
    for index, face in enumerate(faces):
        for issue in check_face(face, index):
            result.add_issue(issue)
    return result
