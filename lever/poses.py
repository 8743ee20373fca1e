# lever/poses.py
"""
POSES: FORWARD KINEMATICS OVER A NORMALIZED PHASE
=================================================

PURPOSE:
--------
Produces full-body stick poses for any phase t ∈ [0, 1] of a rep
(0 = bottom of the rep, 1 = top). This is the geometry an animation layer
draws; it never feeds back into work or comparison numbers.

HOW:
----
Every pose is built joint by joint from the ankle (placed at (0, foot_height),
floor at y = 0) with segment angles, and arms are placed with a two-link IK
that clamps unreachable targets. Each adjacent-joint distance is therefore a
segment length by construction; validate_segment_lengths() checks it anyway
(1 mm tolerance) and any violation makes the result invalid.

    squat     bottom from the squat solver, angles interpolated to standing
    deadlift  bar rises from the start height to lockout, hips hinge via IK
    bench     lifter supine on the bench, bar pressed over the shoulder
    ohp       standing, bar pressed from the shoulders to overhead
    pullup    hanging from a fixed bar, shoulders rise by the pull-up ROM
    pushup    rigid plank pivoting on the toes, hands on the floor
    thruster  first half front squat, second half press
"""

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from .config import DEFAULT_SOLVER_POLICY, SolverPolicy
from .constants import BAR_OFFSETS, BENCH_GRIP_ANGLES
from .errors import InputValidationError
from .kinematics import solve_kinematics
from .kinematics.geometry import endpoint, interior_angle, rotate_trunk_offset, two_link_ik
from .kinematics.squat import solve_squat
from .kinematics.variants import parse_bench_variant, parse_movement, parse_squat_variant
from .model import (
    DEFAULT_MOVEMENT_OPTIONS,
    BodyModel,
    Movement,
    MovementOptions,
    Point2D,
    SegmentLengths,
    SquatVariant,
    Variant,
)

SEGMENT_TOLERANCE = 0.001   # m
STANDARD_PHASES = (0.0, 0.1, 0.25, 0.5, 0.75, 0.9, 1.0)

# Shin lean at the start of a deadlift (deg from vertical)
DEADLIFT_START_SHIN_ANGLE = 15.0
# Press lockout reach as a fraction of upper arm + forearm
PRESS_TOP_REACH = 0.99
# Clearance between the hanging feet and the floor at the bottom of a pull-up
PULLUP_FOOT_CLEARANCE = 0.05
# Trunk lean used when the squat could not be balanced (deg from vertical)
FALLBACK_TRUNK_ANGLE = 45.0


@dataclass(frozen=True)
class PoseAngles:
    """Degrees. Flexion angles are 0 when the segments are in line."""
    knee: float
    hip: float
    elbow: float
    trunk: float


@dataclass(frozen=True)
class Pose:
    ankle: Point2D
    knee: Point2D
    hip: Point2D
    shoulder: Point2D
    elbow: Point2D
    wrist: Point2D
    bar: Optional[Point2D]
    angles: PoseAngles


@dataclass(frozen=True)
class PoseResult:
    pose: Pose
    phase: float
    valid: bool
    errors: Tuple[str, ...] = field(default_factory=tuple)
    warnings: Tuple[str, ...] = field(default_factory=tuple)


# =============================================================================
# Public API
# =============================================================================

def solve_pose(
    body: BodyModel,
    movement: Union[str, Movement],
    variant: Variant = None,
    t: float = 0.0,
    options: Optional[MovementOptions] = None,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> PoseResult:
    """
    Pose at phase `t` (0 = bottom, 1 = top).

    Raises:
        InputValidationError: t outside [0, 1], bad movement or variant
    """
    if not isinstance(t, (int, float)) or not 0.0 <= t <= 1.0:
        raise InputValidationError([f"Phase must be between 0 and 1 (got {t})"])

    movement = parse_movement(movement)
    options = options or DEFAULT_MOVEMENT_OPTIONS
    builder = _BUILDERS[movement]
    pose, errors, warnings = builder(body, variant, float(t), options, policy)

    errors = list(errors) + validate_segment_lengths(pose, body.segments)
    return PoseResult(
        pose=pose,
        phase=float(t),
        valid=not errors,
        errors=tuple(errors),
        warnings=tuple(warnings),
    )


def sample_poses(
    body: BodyModel,
    movement: Union[str, Movement],
    variant: Variant = None,
    phases: Iterable[float] = STANDARD_PHASES,
    options: Optional[MovementOptions] = None,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> Tuple[PoseResult, ...]:
    return tuple(solve_pose(body, movement, variant, t, options, policy) for t in phases)


def validate_segment_lengths(
    pose: Pose,
    segments: SegmentLengths,
    tolerance: float = SEGMENT_TOLERANCE,
) -> List[str]:
    """Every adjacent joint pair must sit exactly one segment length apart."""
    checks = (
        ("tibia", pose.ankle, pose.knee, segments.tibia),
        ("femur", pose.knee, pose.hip, segments.femur),
        ("torso", pose.hip, pose.shoulder, segments.torso),
        ("upper_arm", pose.shoulder, pose.elbow, segments.upper_arm),
        ("forearm", pose.elbow, pose.wrist, segments.forearm),
    )
    errors = []
    for name, a, b, expected in checks:
        actual = a.distance_to(b)
        if abs(actual - expected) > tolerance:
            errors.append(
                f"{name} length {actual * 1000:.1f}mm differs from {expected * 1000:.1f}mm "
                f"by more than {tolerance * 1000:.0f}mm"
            )
    return errors


# =============================================================================
# Shared construction
# =============================================================================

def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _leg_chain(seg: SegmentLengths, shin: float, thigh: float, trunk: float):
    """Ankle → knee → hip → shoulder; angles in rad from +x."""
    ankle = np.array([0.0, seg.foot_height])
    knee = endpoint(ankle, seg.tibia, shin)
    hip = endpoint(knee, seg.femur, thigh)
    shoulder = endpoint(hip, seg.torso, trunk)
    return ankle, knee, hip, shoulder


def _standing_chain(seg: SegmentLengths):
    up = math.pi / 2
    return _leg_chain(seg, up, up, up)


def _assemble(ankle, knee, hip, shoulder, elbow, wrist, bar) -> Pose:
    trunk = math.degrees(math.atan2(shoulder[0] - hip[0], shoulder[1] - hip[1]))
    angles = PoseAngles(
        knee=180.0 - interior_angle(ankle, knee, hip),
        hip=180.0 - interior_angle(knee, hip, shoulder),
        elbow=180.0 - interior_angle(shoulder, elbow, wrist),
        trunk=trunk,
    )
    pt = Point2D.from_array
    return Pose(
        ankle=pt(ankle), knee=pt(knee), hip=pt(hip), shoulder=pt(shoulder),
        elbow=pt(elbow), wrist=pt(wrist),
        bar=pt(bar) if bar is not None else None,
        angles=angles,
    )


# =============================================================================
# Movement builders: (body, variant, t, options, policy) -> (pose, errors, warnings)
# =============================================================================

def _squat_pose(body, variant, t, options, policy, racked_variant: Optional[SquatVariant] = None):
    seg = body.segments
    variant = racked_variant or parse_squat_variant(variant)
    solution = solve_squat(body, variant, options, policy)
    errors, warnings = [], []

    if solution.valid:
        alpha = solution.angles.ankle
        theta = solution.angles.trunk
        if solution.mobility_limited:
            warnings.append(f"Ankle mobility limited the bottom position to {alpha:.0f}° dorsiflexion")
    else:
        alpha = policy.min_ankle_dorsiflexion
        theta = FALLBACK_TRUNK_ANGLE
        errors.append("Squat bottom position could not be balanced; pose is an estimate")

    up = 90.0
    shin = math.radians(_lerp(up - alpha, up, t))
    thigh = math.radians(_lerp(180.0 + policy.femur_angle_at_depth, up, t))
    trunk_from_vertical = _lerp(theta, 0.0, t)
    trunk = math.radians(up - trunk_from_vertical)

    ankle, knee, hip, shoulder = _leg_chain(seg, shin, thigh, trunk)
    offset = BAR_OFFSETS[variant]
    bar = shoulder + rotate_trunk_offset(offset.horizontal, offset.vertical, math.radians(trunk_from_vertical))
    elbow, wrist = two_link_ik(shoulder, bar, seg.upper_arm, seg.forearm, bend=-1.0)
    return _assemble(ankle, knee, hip, shoulder, elbow, wrist, bar), errors, warnings


def _deadlift_pose(body, variant, t, options, policy):
    seg = body.segments
    displacement = solve_kinematics(body, Movement.DEADLIFT, variant, options, policy).displacement
    lockout = body.derived.acromion_height - body.derived.total_arm
    bar_y = lockout - (1.0 - t) * displacement

    beta = math.radians(_lerp(DEADLIFT_START_SHIN_ANGLE, 0.0, t))
    ankle = np.array([0.0, seg.foot_height])
    knee = ankle + seg.tibia * np.array([math.sin(beta), math.cos(beta)])

    # Shoulders over the bar, arms hanging straight, bar in the hands
    shoulder_target = np.array([0.0, bar_y + body.derived.total_arm])
    hip, shoulder = two_link_ik(knee, shoulder_target, seg.femur, seg.torso, bend=1.0)
    elbow = shoulder - np.array([0.0, seg.upper_arm])
    wrist = elbow - np.array([0.0, seg.forearm])
    bar = wrist - np.array([0.0, seg.hand])
    return _assemble(ankle, knee, hip, shoulder, elbow, wrist, bar), [], []


def _bench_pose(body, variant, t, options, policy):
    seg = body.segments
    setup = parse_bench_variant(variant)
    displacement = solve_kinematics(body, Movement.BENCH, setup, options, policy).displacement

    # Supine: shins vertical to the floor, thighs and torso along the bench
    bench_y = seg.foot_height + seg.tibia
    hip = np.array([0.0, bench_y])
    knee = np.array([-seg.femur, bench_y])
    ankle = np.array([-seg.femur, seg.foot_height])
    shoulder = np.array([seg.torso, bench_y])

    reach = (seg.upper_arm + seg.forearm) * math.cos(math.radians(BENCH_GRIP_ANGLES[setup.grip]))
    target = shoulder + np.array([0.0, reach - (1.0 - t) * displacement])
    elbow, wrist = two_link_ik(shoulder, target, seg.upper_arm, seg.forearm, bend=1.0)
    return _assemble(ankle, knee, hip, shoulder, elbow, wrist, wrist), [], []


def _ohp_pose(body, variant, t, options, policy):
    seg = body.segments
    displacement = solve_kinematics(body, Movement.OHP, variant, options, policy).displacement
    ankle, knee, hip, shoulder = _standing_chain(seg)

    top = (seg.upper_arm + seg.forearm) * PRESS_TOP_REACH
    target = shoulder + np.array([0.0, top - (1.0 - t) * displacement])
    elbow, wrist = two_link_ik(shoulder, target, seg.upper_arm, seg.forearm, bend=-1.0)
    return _assemble(ankle, knee, hip, shoulder, elbow, wrist, wrist), [], []


def _pullup_pose(body, variant, t, options, policy):
    seg = body.segments
    displacement = solve_kinematics(body, Movement.PULLUP, variant, options, policy).displacement
    arm = seg.upper_arm + seg.forearm
    bar = np.array([0.0, body.derived.acromion_height + arm + PULLUP_FOOT_CLEARANCE])

    shoulder = bar - np.array([0.0, arm * PRESS_TOP_REACH]) + np.array([0.0, t * displacement])
    hip = shoulder - np.array([0.0, seg.torso])
    knee = hip - np.array([0.0, seg.femur])
    ankle = knee - np.array([0.0, seg.tibia])
    elbow, wrist = two_link_ik(shoulder, bar, seg.upper_arm, seg.forearm, bend=-1.0)
    return _assemble(ankle, knee, hip, shoulder, elbow, wrist, bar), [], []


def _pushup_pose(body, variant, t, options, policy):
    seg = body.segments
    displacement = solve_kinematics(body, Movement.PUSHUP, variant, options, policy).displacement
    body_length = seg.tibia + seg.femur + seg.torso

    # Toes fixed; the straight body pivots so the shoulders rise by the ROM
    ankle = np.array([-body_length, seg.foot_height])
    shoulder_y = (seg.upper_arm + seg.forearm) - (1.0 - t) * displacement
    rise = shoulder_y - seg.foot_height
    run = math.sqrt(max(body_length ** 2 - rise ** 2, 0.0))
    direction = np.array([run, rise]) / body_length

    knee = ankle + seg.tibia * direction
    hip = knee + seg.femur * direction
    shoulder = hip + seg.torso * direction
    hand = np.array([shoulder[0], 0.0])
    elbow, wrist = two_link_ik(shoulder, hand, seg.upper_arm, seg.forearm, bend=1.0)
    return _assemble(ankle, knee, hip, shoulder, elbow, wrist, None), [], []


def _thruster_pose(body, variant, t, options, policy):
    if t < 0.5:
        return _squat_pose(body, None, 2.0 * t, options, policy, racked_variant=SquatVariant.FRONT)
    return _ohp_pose(body, None, 2.0 * t - 1.0, options, policy)


_BUILDERS: Dict[Movement, Callable] = {
    Movement.SQUAT: _squat_pose,
    Movement.DEADLIFT: _deadlift_pose,
    Movement.BENCH: _bench_pose,
    Movement.OHP: _ohp_pose,
    Movement.PULLUP: _pullup_pose,
    Movement.PUSHUP: _pushup_pose,
    Movement.THRUSTER: _thruster_pose,
}
