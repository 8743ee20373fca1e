# lever/kinematics/barbell.py
"""
Closed-form barbell lifts: deadlift, bench press, overhead press, thruster.

No search is needed for these. Positions are reported for the standing
reference chain (ankle at the origin, same frame as the squat, floor at
y = -foot_height) with the bar at the start of the concentric stroke.
"""

import dataclasses
import math

from ..config import DEFAULT_SOLVER_POLICY, SolverPolicy
from ..constants import (
    AVERAGE_CHEST_DEPTH,
    BENCH_ARCH_HEIGHTS,
    BENCH_GRIP_ANGLES,
    DEADLIFT_HIP_MOMENT_ARM,
    LOCKOUT_REACH_FACTOR,
    MIN_BENCH_DISPLACEMENT,
    MIN_DEADLIFT_DISPLACEMENT,
    STANDARD_PLATE_RADIUS,
    SUMO_STANCE_FACTORS,
)
from ..errors import InputValidationError
from ..model import (
    DEFAULT_MOVEMENT_OPTIONS,
    BodyModel,
    DeadliftVariant,
    JointAngles,
    JointPositions,
    KinematicSolution,
    MomentArms,
    MovementOptions,
    Point2D,
    SquatVariant,
    SumoStance,
    Variant,
)
from .squat import solve_squat
from .variants import coerce_enum, parse_bench_variant, parse_deadlift_variant


def reference_solution(
    body: BodyModel,
    bar_y: float,
    displacement: float,
    moment_arms: MomentArms = MomentArms(0.0, 0.0),
) -> KinematicSolution:
    """Standing chain over the origin with the resistance point at (0, bar_y)."""
    seg = body.segments
    knee_y = seg.tibia
    hip_y = knee_y + seg.femur
    shoulder_y = hip_y + seg.torso
    return KinematicSolution(
        positions=JointPositions(
            ankle=Point2D(0.0, 0.0),
            knee=Point2D(0.0, knee_y),
            hip=Point2D(0.0, hip_y),
            shoulder=Point2D(0.0, shoulder_y),
            bar=Point2D(0.0, bar_y),
        ),
        angles=JointAngles(ankle=0.0, knee=0.0, hip=0.0, trunk=0.0),
        moment_arms=moment_arms,
        displacement=float(displacement),
    )


# =============================================================================
# Deadlift
# =============================================================================

def deadlift_start_height(options: MovementOptions) -> float:
    """Bar height off the floor at the start of the pull (plate radius + offset)."""
    offset = options.bar_offset_m
    if not math.isfinite(offset):
        raise InputValidationError(["Bar offset must be a finite number"])
    start = STANDARD_PLATE_RADIUS + offset
    if start <= 0:
        raise InputValidationError([
            f"Bar offset {offset:+.3f}m puts the bar at or below the floor "
            f"(minimum {-STANDARD_PLATE_RADIUS:+.3f}m)"
        ])
    return start


def deadlift_range_of_motion(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> float:
    """
    Lockout bar height (arms hanging from the acromion) minus start height.

    Sumo shortens the pull by a stance factor. Blocks high enough to leave
    less than a 5 cm pull are rejected rather than clamped, so a higher
    start always means a shorter pull.

    Raises:
        InputValidationError: Start at or below the floor, or pull under 5 cm
    """
    variant = parse_deadlift_variant(variant)
    lockout = body.derived.acromion_height - body.derived.total_arm
    displacement = lockout - deadlift_start_height(options)
    if variant is DeadliftVariant.SUMO:
        stance = coerce_enum(SumoStance, options.sumo_stance, "sumo stance")
        displacement *= SUMO_STANCE_FACTORS[stance]
    if displacement < MIN_DEADLIFT_DISPLACEMENT:
        raise InputValidationError([
            f"Bar offset {options.bar_offset_m:+.3f}m leaves a {displacement * 100:.1f}cm pull "
            f"(minimum {MIN_DEADLIFT_DISPLACEMENT * 100:.0f}cm)"
        ])
    return displacement


def solve_deadlift(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> KinematicSolution:
    displacement = deadlift_range_of_motion(body, variant, options, policy)
    start = deadlift_start_height(options)
    # A lower start means more hip flexion and a longer lever
    hip_arm = DEADLIFT_HIP_MOMENT_ARM * STANDARD_PLATE_RADIUS / start
    return reference_solution(
        body,
        bar_y=start - body.segments.foot_height,
        displacement=displacement,
        moment_arms=MomentArms(hip=hip_arm, knee=hip_arm / 2),
    )


# =============================================================================
# Bench press
# =============================================================================

def bench_range_of_motion(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> float:
    """Arm length projected under the grip angle, minus chest depth and arch."""
    setup = parse_bench_variant(variant)
    seg = body.segments
    reach = (seg.upper_arm + seg.forearm) * math.cos(math.radians(BENCH_GRIP_ANGLES[setup.grip]))
    displacement = reach - AVERAGE_CHEST_DEPTH - BENCH_ARCH_HEIGHTS[setup.arch]
    return max(displacement, MIN_BENCH_DISPLACEMENT)


def solve_bench(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> KinematicSolution:
    setup = parse_bench_variant(variant)
    displacement = bench_range_of_motion(body, setup, options, policy)
    # Bar touches the chest: chest depth + arch above the shoulder joint line
    shoulder_y = body.segments.tibia + body.segments.femur + body.segments.torso
    touch = AVERAGE_CHEST_DEPTH + BENCH_ARCH_HEIGHTS[setup.arch]
    return reference_solution(body, bar_y=shoulder_y + touch, displacement=displacement)


# =============================================================================
# Overhead press / thruster
# =============================================================================

def ohp_range_of_motion(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> float:
    seg = body.segments
    return (seg.upper_arm + seg.forearm) * LOCKOUT_REACH_FACTOR


def solve_ohp(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> KinematicSolution:
    # Bar starts racked at shoulder height
    shoulder_y = body.segments.tibia + body.segments.femur + body.segments.torso
    return reference_solution(body, bar_y=shoulder_y, displacement=ohp_range_of_motion(body))


def solve_thruster(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> KinematicSolution:
    """Front squat out of the hole, then press: the bottom position is the squat's."""
    squat = solve_squat(body, SquatVariant.FRONT, options, policy)
    return dataclasses.replace(squat, displacement=squat.displacement + ohp_range_of_motion(body))


def thruster_range_of_motion(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> float:
    return solve_thruster(body, variant, options, policy).displacement
