# lever/anthropometry.py
"""
ANTHROPOMETRY: HEIGHT/MASS/SEX → RIGID-SEGMENT BODY MODEL
=========================================================

PURPOSE:
--------
Turns a handful of numbers a lifter knows about themselves into the segment
lengths every other module works with.

TWO MODES:
----------
1. Simple (no modifiers): segment = height × population ratio. The stacked
   ratios sum to ~0.948, and that shortfall is kept on purpose; the body is
   NOT stretched to fill the full stature.

2. Advanced (SD modifiers given, even all-zero): each limb group is scaled by
   1 + SD × 0.045. If the stacked chain then misses the stature by more than
   2%, every stacked segment except head/neck is rescaled by one common factor
   so the chain sums to the stature exactly. Head/neck is the anchor.

VALIDATION:
-----------
All problems are collected and raised together as InputValidationError.
"""

import logging
import math
import numbers
from typing import List, Optional, Union

from .config import DEFAULT_LIMITS, ValidationLimits
from .constants import (
    APE_INDEX_SHOULDER_SHARE,
    HEIGHT_NORMALIZATION_TOLERANCE,
    SD_MULTIPLIER_COEFFICIENT,
    SEGMENT_RATIOS,
)
from .errors import InputValidationError
from .model import (
    BodyMode,
    BodyModel,
    DerivedMetrics,
    MobilityProfile,
    SDModifiers,
    SegmentLengths,
    Sex,
)

logger = logging.getLogger(__name__)


def parse_sex(sex: Union[str, Sex]) -> Sex:
    try:
        return Sex(sex)
    except ValueError:
        valid = ", ".join(s.value for s in Sex)
        raise InputValidationError([f"Unknown sex '{sex}'. Expected one of: {valid}"]) from None


def baseline_segments(height: float, sex: Sex) -> SegmentLengths:
    """Population-ratio segments for a given stature (no normalization)."""
    r = SEGMENT_RATIOS[sex]
    return SegmentLengths(
        height=height,
        head_neck=height * r.head_neck,
        torso=height * r.torso,
        upper_arm=height * r.upper_arm,
        forearm=height * r.forearm,
        hand=height * r.hand,
        femur=height * r.femur,
        tibia=height * r.tibia,
        foot_height=height * r.foot_height,
    )


def apply_modifiers(segments: SegmentLengths, modifiers: SDModifiers) -> SegmentLengths:
    """Scale arms, legs and torso by 1 + SD × 0.045; head/neck untouched."""
    arm = 1.0 + modifiers.arms * SD_MULTIPLIER_COEFFICIENT
    leg = 1.0 + modifiers.legs * SD_MULTIPLIER_COEFFICIENT
    trunk = 1.0 + modifiers.torso * SD_MULTIPLIER_COEFFICIENT
    return SegmentLengths(
        height=segments.height,
        head_neck=segments.head_neck,
        torso=segments.torso * trunk,
        upper_arm=segments.upper_arm * arm,
        forearm=segments.forearm * arm,
        hand=segments.hand * arm,
        femur=segments.femur * leg,
        tibia=segments.tibia * leg,
        foot_height=segments.foot_height * leg,
    )


def normalize_to_height(
    segments: SegmentLengths,
    tolerance: float = HEIGHT_NORMALIZATION_TOLERANCE,
) -> SegmentLengths:
    """
    Rescale torso, femur, tibia and foot height so the stacked chain equals
    the stature, if it is currently off by more than `tolerance` (fraction).

    Arms are not part of the stacked chain and are left alone.
    """
    height = segments.height
    total = segments.stacked_sum()
    if abs(total - height) <= tolerance * height:
        return segments

    scalable = segments.torso + segments.femur + segments.tibia + segments.foot_height
    scale = (height - segments.head_neck) / scalable
    logger.debug(
        "Normalizing segments: stacked sum %.4f m vs height %.4f m, scale %.4f",
        total, height, scale,
    )
    return SegmentLengths(
        height=height,
        head_neck=segments.head_neck,
        torso=segments.torso * scale,
        upper_arm=segments.upper_arm,
        forearm=segments.forearm,
        hand=segments.hand,
        femur=segments.femur * scale,
        tibia=segments.tibia * scale,
        foot_height=segments.foot_height * scale,
    )


def derive_metrics(segments: SegmentLengths) -> DerivedMetrics:
    total_arm = segments.upper_arm + segments.forearm + segments.hand
    total_leg = segments.femur + segments.tibia + segments.foot_height
    return DerivedMetrics(
        total_arm=total_arm,
        total_leg=total_leg,
        crural_index=segments.tibia / segments.femur,
        femur_torso_ratio=segments.femur / segments.torso,
        ape_index=(2 * total_arm + APE_INDEX_SHOULDER_SHARE * segments.torso) / segments.height,
        acromion_height=total_leg + segments.torso,
        hip_height=total_leg,
    )


def check_inputs(
    height_m: float,
    mass_kg: float,
    modifiers: Optional[SDModifiers] = None,
    limits: ValidationLimits = DEFAULT_LIMITS,
    mobility: Optional[MobilityProfile] = None,
) -> List[str]:
    """Range checks on the raw inputs. Returns a list of messages (empty = OK)."""
    errors = []

    if not _is_number(height_m):
        errors.append("Height must be a finite number")
    elif not limits.min_height <= height_m <= limits.max_height:
        errors.append(
            f"Height must be between {limits.min_height}m and {limits.max_height}m (got {height_m}m)"
        )

    if not _is_number(mass_kg):
        errors.append("Mass must be a finite number")
    elif not limits.min_mass <= mass_kg <= limits.max_mass:
        errors.append(
            f"Mass must be between {limits.min_mass}kg and {limits.max_mass}kg (got {mass_kg}kg)"
        )

    if modifiers is not None:
        for group in ("arms", "legs", "torso"):
            value = getattr(modifiers, group)
            if not _is_number(value):
                errors.append(f"{group.capitalize()} modifier must be a finite number")
            elif abs(value) > limits.max_abs_sd:
                errors.append(
                    f"{group.capitalize()} modifier must be within ±{limits.max_abs_sd} SD (got {value})"
                )

    if mobility is not None:
        for field, label in (
            ("max_ankle_dorsiflexion", "Ankle dorsiflexion"),
            ("max_hip_flexion", "Hip flexion"),
            ("max_shoulder_flexion", "Shoulder flexion"),
        ):
            value = getattr(mobility, field)
            upper = getattr(limits, field)
            if not _is_number(value):
                errors.append(f"{label} must be a finite number")
            elif not 0.0 <= value <= upper:
                errors.append(f"{label} must be between 0° and {upper}° (got {value}°)")

    return errors


def validate_body_model(body: BodyModel, limits: ValidationLimits = DEFAULT_LIMITS) -> List[str]:
    """
    Post-construction checks. Returns a list of human-readable messages.

    The stacked chain must land within `segment_sum_tolerance` of the stature.
    """
    errors = check_inputs(body.segments.height, body.mass, limits=limits, mobility=body.mobility)
    if errors:
        return errors

    segments = body.segments
    for name in ("head_neck", "torso", "upper_arm", "forearm", "hand", "femur", "tibia", "foot_height"):
        if getattr(segments, name) <= 0:
            errors.append(f"Segment {name} must be positive")

    deviation = abs(segments.stacked_sum() - segments.height) / segments.height
    if deviation > limits.segment_sum_tolerance:
        errors.append(
            f"Segment lengths sum to {segments.stacked_sum():.3f}m, "
            f"{deviation * 100:.1f}% away from height {segments.height:.3f}m "
            f"(max {limits.segment_sum_tolerance * 100:.0f}%)"
        )
    return errors


def build_body_model(
    height_m: float,
    mass_kg: float,
    sex: Union[str, Sex],
    modifiers: Optional[SDModifiers] = None,
    mobility: Optional[MobilityProfile] = None,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> BodyModel:
    """
    Build an immutable body model.

    Args:
        height_m: Standing height (m)
        mass_kg: Body mass (kg)
        sex: "male" / "female" (or Sex)
        modifiers: SD deviations per limb group; None = simple mode
        mobility: Joint range limits; None = population defaults
        limits: Accepted input ranges

    Returns:
        BodyModel

    Raises:
        InputValidationError: With every problem found
    """
    sex = parse_sex(sex)

    errors = check_inputs(height_m, mass_kg, modifiers, limits, mobility)
    if errors:
        raise InputValidationError(errors)

    segments = baseline_segments(float(height_m), sex)
    mode = BodyMode.SIMPLE
    if modifiers is not None:
        segments = normalize_to_height(apply_modifiers(segments, modifiers))
        mode = BodyMode.ADVANCED

    body = BodyModel(
        sex=sex,
        mass=float(mass_kg),
        segments=segments,
        derived=derive_metrics(segments),
        mobility=mobility if mobility is not None else MobilityProfile(),
        mode=mode,
    )

    errors = validate_body_model(body, limits)
    if errors:
        raise InputValidationError(errors)
    return body


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)
