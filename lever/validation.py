# lever/validation.py
"""
Form-level input checks for a presentation layer.

Unlike build_body_model() these never raise: each returns the issues found
so a form can show them next to the right field.
"""

import math
import numbers
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from .config import DEFAULT_LIMITS, ValidationLimits


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: Tuple[ValidationIssue, ...] = field(default_factory=tuple)


def _bad_number(value) -> bool:
    return (
        not isinstance(value, numbers.Real)
        or isinstance(value, bool)
        or not math.isfinite(value)
    )


def validate_height(height: float, limits: ValidationLimits = DEFAULT_LIMITS) -> Optional[ValidationIssue]:
    if _bad_number(height) or height <= 0:
        return ValidationIssue("height", "Height must be a positive number")
    if height < limits.min_height:
        return ValidationIssue("height", f"Height must be at least {limits.min_height}m")
    if height > limits.max_height:
        return ValidationIssue("height", f"Height must be at most {limits.max_height}m")
    return None


def validate_weight(weight: float, limits: ValidationLimits = DEFAULT_LIMITS) -> Optional[ValidationIssue]:
    if _bad_number(weight) or weight <= 0:
        return ValidationIssue("weight", "Weight must be a positive number")
    if weight < limits.min_mass:
        return ValidationIssue("weight", f"Weight must be at least {limits.min_mass:g}kg")
    if weight > limits.max_mass:
        return ValidationIssue("weight", f"Weight must be at most {limits.max_mass:g}kg")
    return None


def validate_load(load: float, limits: ValidationLimits = DEFAULT_LIMITS) -> Optional[ValidationIssue]:
    if _bad_number(load) or load < 0:
        return ValidationIssue("load", "Load must be a non-negative number")
    if load > limits.max_load:
        return ValidationIssue("load", f"Load must be at most {limits.max_load:g}kg")
    return None


def validate_reps(reps: int, limits: ValidationLimits = DEFAULT_LIMITS) -> Optional[ValidationIssue]:
    if _bad_number(reps) or reps < limits.min_reps:
        return ValidationIssue("reps", f"Reps must be at least {limits.min_reps}")
    if reps > limits.max_reps:
        return ValidationIssue("reps", f"Reps must be at most {limits.max_reps}")
    return None


def _collect(issues: Iterable[Optional[ValidationIssue]]) -> ValidationResult:
    found = tuple(i for i in issues if i is not None)
    return ValidationResult(valid=not found, errors=found)


def validate_lifter_inputs(
    height: float,
    weight: float,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> ValidationResult:
    return _collect([validate_height(height, limits), validate_weight(weight, limits)])


def validate_lift_inputs(
    load: float,
    reps: int,
    needs_load: bool = True,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> ValidationResult:
    """Bodyweight movements pass needs_load=False to skip the load check."""
    issues = [validate_reps(reps, limits)]
    if needs_load:
        issues.insert(0, validate_load(load, limits))
    return _collect(issues)


def error_message(issues: Iterable[ValidationIssue]) -> str:
    issues = list(issues)
    if not issues:
        return ""
    if len(issues) == 1:
        return issues[0].message
    return "Multiple errors: " + ", ".join(i.message for i in issues)
