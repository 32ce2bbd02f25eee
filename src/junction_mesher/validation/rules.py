"""
Validation rule definitions.

Each rule has:
- Code: Unique identifier (e.g., "CFG-001")
- Severity: FAIL, WARN, or INFO
- Rule reference: Short rule name
- Message template: Human-readable description
- Remediation: Suggested fix

Rules are organized by category:
- CFG: Input configuration
- FILL: Road fill and footpath span coverage
- GEOM: Emitted face geometry
"""

from dataclasses import dataclass
from typing import Optional

from .core import Severity, ValidationIssue


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule.

    Attributes:
        code: Unique rule code (e.g., "CFG-001")
        severity: Default severity for this rule
        rule_reference: Short rule name
        message_template: Template for the message (use {placeholders})
        remediation_template: Template for the suggested fix
        description: Full description of the rule
    """
    code: str
    severity: Severity
    rule_reference: str
    message_template: str
    remediation_template: Optional[str] = None
    description: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def format_remediation(self, **kwargs) -> Optional[str]:
        if self.remediation_template:
            return self.remediation_template.format(**kwargs)
        return None

    def issue(self, location: Optional[str] = None, **kwargs) -> ValidationIssue:
        """Create an issue for this rule, filling both templates from kwargs."""
        return ValidationIssue(
            severity=self.severity,
            code=self.code,
            message=self.format_message(**kwargs),
            rule_reference=self.rule_reference,
            remediation=self.format_remediation(**kwargs),
            location=location,
        )


# =============================================================================
# CONFIGURATION RULES (CFG)
# =============================================================================

CFG_001 = ValidationRule(
    code="CFG-001",
    severity=Severity.FAIL,
    rule_reference="Site size must be positive",
    message_template="Intersection size {axis}={value} must be > 0",
    remediation_template="Set {axis} to a positive extent",
    description="Both site extents must be strictly positive",
)

CFG_002 = ValidationRule(
    code="CFG-002",
    severity=Severity.FAIL,
    rule_reference="Curb profile must be non-negative",
    message_template="Curb value {field}={value} is negative",
    remediation_template="Set {field} to 0 or more",
    description="skirt_out, skirt_down, gutter_depth and gutter_width are all >= 0",
)

CFG_003 = ValidationRule(
    code="CFG-003",
    severity=Severity.FAIL,
    rule_reference="Corner size must be positive",
    message_template="Corner size {axis}={value} must be > 0",
    remediation_template="Set the corner {axis} to a positive size",
    description="Every corner pad needs a positive footprint on both axes",
)

CFG_004 = ValidationRule(
    code="CFG-004",
    severity=Severity.FAIL,
    rule_reference="Footpath depth must be positive",
    message_template="Footpath depth {value} must be > 0",
    remediation_template="Set the footpath depth to a positive value",
    description="Every footpath slab needs a positive depth",
)

CFG_005 = ValidationRule(
    code="CFG-005",
    severity=Severity.FAIL,
    rule_reference="Inputs must be finite",
    message_template="Non-finite value {field}={value}",
    remediation_template="Replace {field} with a finite number",
    description="NaN or infinite values cannot produce geometry",
)


# =============================================================================
# FILL / SPAN RULES (FILL)
# =============================================================================

FILL_001 = ValidationRule(
    code="FILL-001",
    severity=Severity.WARN,
    rule_reference="Road core must have positive area",
    message_template="Degenerate road core x=[{x_left:.3f}, {x_right:.3f}] z=[{z_bottom:.3f}, {z_top:.3f}]; road fill skipped",
    remediation_template="Reduce corner sizes, skirt_out or gutter_width, or enlarge the site",
    description="Corner apexes meet or cross, leaving no road core",
)

FILL_002 = ValidationRule(
    code="FILL-002",
    severity=Severity.WARN,
    rule_reference="Footpath span must have positive width",
    message_template="Footpath span collapsed at x={x:.3f}; footpath skipped",
    remediation_template="Reduce the sizes of the corners on this side",
    description="The corner apexes on both ends of a footpath pass its midpoint",
)


# =============================================================================
# GEOMETRY RULES (GEOM)
# =============================================================================

GEOM_001 = ValidationRule(
    code="GEOM-001",
    severity=Severity.FAIL,
    rule_reference="Vertices must be finite",
    message_template="Non-finite vertex {vertex}",
    remediation_template="Check the inputs for NaN or infinite values",
    description="Every emitted vertex coordinate must be finite",
)

GEOM_002 = ValidationRule(
    code="GEOM-002",
    severity=Severity.WARN,
    rule_reference="Faces should have area",
    message_template="Degenerate {tag} face (area={area:.2e})",
    remediation_template="A zero curb or gutter dimension collapses this face",
    description="Zero-area faces are harmless but add no surface",
)

GEOM_003 = ValidationRule(
    code="GEOM-003",
    severity=Severity.FAIL,
    rule_reference="Horizontal surfaces must face up",
    message_template="Horizontal {tag} face points down (normal y={ny:.3f})",
    remediation_template="Emit the face clockwise when seen from above",
    description="Footpath, road and cap faces are seen from above",
)
