"""
Core data structures for the validation system.

Defines the fundamental types used throughout the validation package:
- Severity: Issue severity levels (INFO, WARN, FAIL)
- ValidationStage: Build stages where validation occurs
- ValidationIssue: Individual validation finding
- ValidationResult: Collection of issues with pass/fail status
- ValidationError: Exception raised when validation fails
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class Severity(Enum):
    """Validation issue severity levels.

    - INFO: Informational, logged but doesn't affect pass/fail
    - WARN: A region was skipped or looks suspicious; the build continues
    - FAIL: The inputs cannot be built
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


class ValidationStage(Enum):
    """Build stages where validation occurs.

    - CONFIG: Before the model is built, on the raw inputs
    - GENERATION: While and after faces are emitted
    """
    CONFIG = "config"
    GENERATION = "generation"

    def __str__(self) -> str:
        return self.value


@dataclass
class ValidationIssue:
    """A single validation finding.

    Attributes:
        severity: Issue severity (INFO, WARN, FAIL)
        code: Rule code (e.g., "CFG-001")
        message: Human-readable description
        rule_reference: Short name of the rule that fired
        remediation: Optional suggested fix
        location: Optional element name (corner, side, face index)
    """
    severity: Severity
    code: str
    message: str
    rule_reference: str
    remediation: Optional[str] = None
    location: Optional[str] = None

    def format(self) -> str:
        """Format issue for display.

        Returns:
            [SEVERITY] CODE at=LOCATION :: message :: fix=FIX
        """
        location = self.location or '-'
        fix = self.remediation or 'N/A'
        return f"[{self.severity}] {self.code} at={location} :: {self.message} :: fix={fix}"

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Collection of validation issues with pass/fail determination.

    Properties:
        passed: True if no FAIL severity issues
        failed: True if any FAIL severity issues
        warnings / errors / infos: Issues filtered by severity
    """
    issues: List[ValidationIssue] = field(default_factory=list)
    stage: Optional[ValidationStage] = None

    @property
    def passed(self) -> bool:
        return not self.failed

    @property
    def failed(self) -> bool:
        return any(i.severity == Severity.FAIL for i in self.issues)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARN]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.FAIL]

    @property
    def infos(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    def add_issue(self, issue: ValidationIssue) -> None:
        """Add an issue to the result."""
        self.issues.append(issue)

    def codes(self) -> List[str]:
        """Rule codes of all issues, in order."""
        return [i.code for i in self.issues]

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Merge another result into this one.

        Returns:
            Self for chaining
        """
        self.issues.extend(other.issues)
        return self

    def report(self) -> str:
        """Generate a multi-line report of all issues, grouped by severity."""
        if not self.issues:
            return "Validation passed: No issues found"

        stage_str = f" ({self.stage})" if self.stage else ""
        status = "PASSED" if self.passed else "FAILED"
        lines = [
            f"Validation {status}{stage_str}: {len(self.issues)} issue(s)",
            "-" * 60,
        ]

        for severity in (Severity.FAIL, Severity.WARN, Severity.INFO):
            severity_issues = [i for i in self.issues if i.severity == severity]
            if severity_issues:
                lines.append(f"\n{severity.name} ({len(severity_issues)}):")
                lines.extend(issue.format() for issue in severity_issues)

        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'passed': self.passed,
            'stage': str(self.stage) if self.stage else None,
            'fail_count': len(self.errors),
            'warn_count': len(self.warnings),
            'info_count': len(self.infos),
            'issues': [
                {
                    'severity': str(issue.severity),
                    'code': issue.code,
                    'message': issue.message,
                    'rule_reference': issue.rule_reference,
                    'remediation': issue.remediation,
                    'location': issue.location,
                }
                for issue in self.issues
            ],
        }


class ValidationError(Exception):
    """Raised when validation finds FAIL issues and the caller asked to fail fast.

    Attributes:
        result: The ValidationResult that caused the failure
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.report())
