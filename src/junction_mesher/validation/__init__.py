"""
Validation package for junction_mesher.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - ValidationStage: Build stage enumeration
    - ValidationRule: Rule definition with message templates
    - UnifiedValidator: Orchestrator for configuration and geometry checks
    - ValidationError: Exception raised on FAIL issues when fail_fast=True
"""

from .core import (
    Severity,
    ValidationStage,
    ValidationIssue,
    ValidationResult,
    ValidationError,
)
from .rules import ValidationRule
from .unified_validator import UnifiedValidator

__all__ = [
    'Severity',
    'ValidationStage',
    'ValidationIssue',
    'ValidationResult',
    'ValidationError',
    'ValidationRule',
    'UnifiedValidator',
]
