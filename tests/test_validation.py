# File: tests/test_validation.py
"""
Test the form-level validators.

These never raise; they return issues keyed by field so a form can show
each one next to its input.
"""

import pytest

from lever import ValidationLimits
from lever.validation import (
    ValidationIssue,
    error_message,
    validate_height,
    validate_lift_inputs,
    validate_lifter_inputs,
    validate_load,
    validate_reps,
    validate_weight,
)


@pytest.mark.parametrize("height", [0.5, 1.8, 10.0])
def test_height_ok(height):
    assert validate_height(height) is None


@pytest.mark.parametrize("height,fragment", [
    (0.0, "positive"), (-1.8, "positive"), (float("nan"), "positive"),
    (0.3, "at least"), (11.0, "at most"),
])
def test_height_bad(height, fragment):
    issue = validate_height(height)
    assert issue.field == "height"
    assert fragment in issue.message


def test_weight_bounds():
    assert validate_weight(80) is None
    assert "at least 10kg" in validate_weight(5).message
    assert "at most 1000kg" in validate_weight(1200).message


def test_load_and_reps():
    assert validate_load(0) is None
    assert validate_load(-5).field == "load"
    assert "500kg" in validate_load(600).message
    assert validate_reps(1) is None
    assert validate_reps(0).field == "reps"
    assert "100" in validate_reps(101).message


def test_custom_limits():
    strict = ValidationLimits(max_load=200.0)
    assert validate_load(250) is None
    assert validate_load(250, strict) is not None


def test_lifter_inputs_collects_everything():
    result = validate_lifter_inputs(0.3, 5000)

    assert not result.valid
    assert [i.field for i in result.errors] == ["height", "weight"]


def test_bodyweight_lift_skips_load():
    assert validate_lift_inputs(-10, 5, needs_load=False).valid
    result = validate_lift_inputs(-10, 5)
    assert not result.valid
    assert result.errors[0].field == "load"


def test_error_message():
    one = [ValidationIssue("height", "Height must be at least 0.5m")]
    two = one + [ValidationIssue("reps", "Reps must be at least 1")]

    assert error_message([]) == ""
    assert error_message(one) == "Height must be at least 0.5m"
    assert error_message(two) == "Multiple errors: Height must be at least 0.5m, Reps must be at least 1"
