"""
Unified validator orchestrator.

Central class that runs the configuration and geometry checks for an
intersection build and keeps a history of results.
"""

import logging
from typing import List, Sequence

from junction_mesher.conversion.mesh_sink import EmittedFace
from junction_mesher.generators.intersection.intersection_model import IntersectionParameters

from .core import ValidationResult, ValidationStage, Severity
from .checks.config_checks import validate_parameters
from .checks.geometry_checks import validate_faces

logger = logging.getLogger(__name__)


class UnifiedValidator:
    """Runs validation at each build stage.

    - CONFIG: Raw inputs, before the model is derived
    - GENERATION: Emitted faces

    Attributes:
        strict_mode: If True, treat WARN as FAIL
        enabled: If False, skip all validation
    """

    def __init__(self, strict_mode: bool = False, enabled: bool = True):
        self.strict_mode = strict_mode
        self.enabled = enabled
        self._validation_history: List[ValidationResult] = []

    def validate_config(self, params: IntersectionParameters) -> ValidationResult:
        """Validate intersection inputs.

        Stage: CONFIG

        Args:
            params: Intersection inputs

        Returns:
            ValidationResult with any configuration issues
        """
        if not self.enabled:
            return ValidationResult(stage=ValidationStage.CONFIG)

        result = validate_parameters(params)
        self._apply_strict_mode(result)
        self._record_result(result)
        return result

    def validate_generation(self, faces: Sequence[EmittedFace]) -> ValidationResult:
        """Validate emitted faces.

        Stage: GENERATION

        Args:
            faces: Faces in emission order

        Returns:
            ValidationResult with any geometry issues
        """
        if not self.enabled:
            return ValidationResult(stage=ValidationStage.GENERATION)

        result = validate_faces(faces)
        self._apply_strict_mode(result)
        self._record_result(result)
        return result

    def apply_policy(self, result: ValidationResult) -> ValidationResult:
        """Apply strict mode to an externally produced result."""
        self._apply_strict_mode(result)
        return result

    def get_history(self) -> List[ValidationResult]:
        """Get all recorded results, oldest first."""
        return list(self._validation_history)

    def clear_history(self) -> None:
        self._validation_history.clear()

    def _apply_strict_mode(self, result: ValidationResult) -> None:
        """Promote WARN to FAIL in strict mode."""
        if self.strict_mode:
            for issue in result.issues:
                if issue.severity == Severity.WARN:
                    issue.severity = Severity.FAIL

    def _record_result(self, result: ValidationResult) -> None:
        self._validation_history.append(result)
        if result.failed:
            logger.debug("Validation failed at %s with %d error(s)",
                         result.stage, len(result.errors))
