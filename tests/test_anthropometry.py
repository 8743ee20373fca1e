# File: tests/test_anthropometry.py
"""
Test the body model builder.

WHY THESE TESTS?
---------------
1. The segment table is the root of every number downstream
2. Simple mode must NOT stretch the body to full stature
3. Advanced mode must land the stacked chain on the stature exactly
4. Bad inputs must fail loudly, with every message at once
"""

import dataclasses

import numpy as np
import pytest

from lever import (
    BodyModel,
    InputValidationError,
    MobilityProfile,
    SDModifiers,
    Sex,
    build_body_model,
    derive_metrics,
    normalize_to_height,
    validate_body_model,
)
from lever.anthropometry import baseline_segments


def test_reference_male_segments():
    """
    WHAT IS THIS TEST?
    ==================
    A 1.80 m male in simple mode gets femur = 0.441 m and a total arm
    (upper arm + forearm + hand) of 0.792 m.

    WHY DOES THIS MATTER?
    ====================
    These two lengths drive squat depth and deadlift lockout height.
    If the ratio table drifts, every comparison drifts with it.
    """
    body = build_body_model(1.8, 80, "male")

    assert np.isclose(body.segments.femur, 0.441, atol=1e-9)
    assert np.isclose(body.derived.total_arm, 0.792, atol=1e-9)
    assert body.sex is Sex.MALE
    print(f"✓ femur = {body.segments.femur:.3f} m, total arm = {body.derived.total_arm:.3f} m")


def test_simple_mode_keeps_ratio_shortfall():
    """The stacked ratios sum to 0.948; simple mode leaves it that way."""
    body = build_body_model(1.8, 80, "male")

    assert np.isclose(body.segments.stacked_sum(), 0.948 * 1.8)
    assert body.mode.value == "simple"


def test_zero_modifiers_normalize_to_height():
    """
    Passing modifiers (even all zeros) switches on normalization:
    the stacked chain equals the stature, and head/neck is untouched.
    """
    simple = build_body_model(1.8, 80, "male")
    advanced = build_body_model(1.8, 80, "male", SDModifiers())

    assert advanced.mode.value == "advanced"
    assert np.isclose(advanced.segments.stacked_sum(), 1.8, rtol=1e-12)
    assert advanced.segments.head_neck == simple.segments.head_neck
    # Arms are outside the stacked chain
    assert advanced.segments.upper_arm == simple.segments.upper_arm
    assert advanced.segments.femur > simple.segments.femur
    print("✓ Advanced mode normalizes the stacked chain to stature")


def test_modifiers_scale_limb_groups():
    """+1 SD arms = 4.5% longer arms; arms are not renormalized."""
    base = build_body_model(1.75, 75, "female", SDModifiers())
    long_arms = build_body_model(1.75, 75, "female", SDModifiers(arms=1.0))

    assert np.isclose(long_arms.segments.upper_arm / base.segments.upper_arm, 1.045)
    assert np.isclose(long_arms.segments.forearm / base.segments.forearm, 1.045)
    assert np.isclose(long_arms.segments.hand / base.segments.hand, 1.045)
    assert np.isclose(long_arms.segments.femur, base.segments.femur)


def test_opposing_modifiers_keep_head_and_hit_height():
    body = build_body_model(1.8, 80, "male", SDModifiers(legs=2.0, torso=-2.0))

    assert np.isclose(body.segments.head_neck, 0.13 * 1.8)
    assert np.isclose(body.segments.stacked_sum(), 1.8)
    # Long legs, short torso survive the common rescale
    assert body.segments.femur / body.segments.torso > 0.441 / 0.5184


def test_normalize_within_tolerance_is_identity():
    seg = baseline_segments(1.8, Sex.MALE)
    scaled = dataclasses.replace(seg, height=seg.stacked_sum() * 1.01)

    assert normalize_to_height(scaled) is scaled


def test_derived_metrics():
    seg = baseline_segments(1.8, Sex.MALE)
    d = derive_metrics(seg)

    assert np.isclose(d.total_leg, seg.femur + seg.tibia + seg.foot_height)
    assert np.isclose(d.crural_index, seg.tibia / seg.femur)
    assert np.isclose(d.femur_torso_ratio, seg.femur / seg.torso)
    assert np.isclose(d.acromion_height, d.total_leg + seg.torso)
    assert d.hip_height == d.total_leg
    assert np.isclose(d.ape_index, (2 * d.total_arm + 0.36 * seg.torso) / 1.8)


def test_female_ratios_differ():
    male = build_body_model(1.7, 65, "male")
    female = build_body_model(1.7, 65, "female")

    assert female.segments.torso < male.segments.torso
    assert female.derived.total_arm < male.derived.total_arm
    assert female.segments.femur == male.segments.femur


@pytest.mark.parametrize("height", [0.49, 10.01, -1.0, 0.0, float("nan"), float("inf")])
def test_height_out_of_bounds_fails(height):
    with pytest.raises(InputValidationError):
        build_body_model(height, 80, "male")


@pytest.mark.parametrize("mass", [9.99, 1000.01, 0.0, float("nan")])
def test_mass_out_of_bounds_fails(mass):
    with pytest.raises(InputValidationError):
        build_body_model(1.8, mass, "male")


@pytest.mark.parametrize("height,mass", [
    (0.5, 10), (10.0, 1000), (1.8, 80), (1.5, 45), (2.1, 140),
])
def test_in_bounds_never_fails(height, mass):
    for sex in ("male", "female"):
        body = build_body_model(height, mass, sex)
        assert isinstance(body, BodyModel)


def test_all_errors_reported_together():
    """Bad height AND bad mass: both messages, one exception."""
    with pytest.raises(InputValidationError) as exc:
        build_body_model(0.2, 5000, "male")

    assert len(exc.value.errors) == 2
    assert any("Height" in e for e in exc.value.errors)
    assert any("Mass" in e for e in exc.value.errors)
    print(f"✓ Errors: {exc.value.errors}")


def test_modifier_out_of_range_fails():
    with pytest.raises(InputValidationError) as exc:
        build_body_model(1.8, 80, "male", SDModifiers(legs=3.5))
    assert "Legs" in exc.value.errors[0]


def test_unknown_sex_fails():
    with pytest.raises(InputValidationError) as exc:
        build_body_model(1.8, 80, "other")
    assert "male, female" in str(exc.value)


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        build_body_model(20.0, 80, "male")


def test_mobility_defaults_and_override():
    default = build_body_model(1.8, 80, "male")
    assert default.mobility == MobilityProfile(30.0, 130.0, 165.0)

    stiff = build_body_model(1.8, 80, "male", mobility=MobilityProfile(max_ankle_dorsiflexion=20.0))
    assert stiff.mobility.max_ankle_dorsiflexion == 20.0


@pytest.mark.parametrize("mobility,label", [
    (MobilityProfile(max_ankle_dorsiflexion=390.0), "Ankle"),
    (MobilityProfile(max_ankle_dorsiflexion=-5.0), "Ankle"),
    (MobilityProfile(max_ankle_dorsiflexion=float("nan")), "Ankle"),
    (MobilityProfile(max_hip_flexion=200.0), "Hip"),
    (MobilityProfile(max_shoulder_flexion=float("inf")), "Shoulder"),
])
def test_mobility_out_of_range_fails(mobility, label):
    """
    WHAT IS THIS TEST?
    ==================
    Joint ranges outside 0-90° (ankle) or 0-180° (hip, shoulder).

    WHY DOES THIS MATTER?
    ====================
    The squat search starts at the ankle limit. A 390° ankle is a full
    turn plus 30°, and the solver would happily report it as a valid squat.
    """
    with pytest.raises(InputValidationError) as exc:
        build_body_model(1.8, 80, "male", mobility=mobility)
    assert exc.value.errors[0].startswith(label)


def test_stiff_but_valid_mobility_accepted():
    stiff = build_body_model(1.8, 80, "male", mobility=MobilityProfile(5.0, 0.0, 180.0))
    assert stiff.mobility.max_ankle_dorsiflexion == 5.0
    assert validate_body_model(stiff) == []


def test_body_model_is_immutable():
    body = build_body_model(1.8, 80, "male")
    with pytest.raises(dataclasses.FrozenInstanceError):
        body.mass = 90.0
