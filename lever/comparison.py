# lever/comparison.py
"""
COMPARISON: WHAT WOULD LIFTER B NEED TO MATCH LIFTER A?
=======================================================

PURPOSE:
--------
Runs the solver and work calculator for two body + movement setups and turns
the difference into numbers people can act on:

- equivalent load:  load_A × (demand_A / demand_B) × (bodyweight work_A / bodyweight work_B)
- equivalent reps:  ceil(total work_A / work per rep_B)
- ratios (B / A):   work, demand, displacement
- advantage:        (demand ratio − 1) × 100, labelled neutral inside ±1%

A ratio > 1 means the lift is harder for B, i.e. A has the advantage.

Squats with different bar positions additionally get a capacity-adjusted
view, because people simply lift more low-bar than high-bar.

Everything is a single pass; an unsolved squat degrades to its fallback
displacement instead of failing the comparison.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Union

from .config import (
    DEFAULT_COMPARISON_POLICY,
    DEFAULT_SOLVER_POLICY,
    ComparisonPolicy,
    SolverPolicy,
)
from .constants import SQUAT_CAPACITY_FACTORS
from .kinematics import solve_kinematics
from .kinematics.variants import parse_movement, parse_squat_variant, variant_key
from .model import (
    DEFAULT_MOVEMENT_OPTIONS,
    Advantage,
    BodyModel,
    CapacityAdjustment,
    ComparisonResult,
    Explanation,
    KinematicSolution,
    Lifter,
    LifterOutcome,
    LiftMetrics,
    Movement,
    MovementOptions,
    Performance,
    Variant,
)
from .physics import check_performance, metrics_from_solution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonOptions:
    """Per-lifter setup plus the policies used for solving and labelling."""
    lifter_a: MovementOptions = DEFAULT_MOVEMENT_OPTIONS
    lifter_b: MovementOptions = DEFAULT_MOVEMENT_OPTIONS
    solver: SolverPolicy = DEFAULT_SOLVER_POLICY
    policy: ComparisonPolicy = DEFAULT_COMPARISON_POLICY


@dataclass(frozen=True)
class CrossLiftResult:
    conversion_factor: float
    equivalent_load: float


def safe_ratio(numerator: float, denominator: float, eps: float = 1e-12) -> float:
    """numerator / denominator, or 1.0 when the denominator is degenerate."""
    if abs(denominator) <= eps:
        return 1.0
    return numerator / denominator


def advantage_direction(
    advantage_pct: float,
    demand_ratio: float,
    policy: ComparisonPolicy = DEFAULT_COMPARISON_POLICY,
) -> Advantage:
    if abs(advantage_pct) < policy.neutral_threshold_pct:
        return Advantage.NEUTRAL
    if demand_ratio > 1:
        return Advantage.ADVANTAGE_A
    return Advantage.ADVANTAGE_B


def compare_lifters(
    lifter_a: Lifter,
    lifter_b: Lifter,
    movement: Union[str, Movement],
    variant_a: Variant,
    variant_b: Variant,
    perf_a: Performance,
    perf_b: Optional[Performance] = None,
    options: Optional[ComparisonOptions] = None,
) -> ComparisonResult:
    """
    Compare two lifters on the same movement family.

    Args:
        lifter_a, lifter_b: Bodies (and display names)
        movement: Movement family
        variant_a, variant_b: Variant per lifter (None = family default)
        perf_a: A's load and reps
        perf_b: B's load and reps (defaults to A's)
        options: Per-lifter setup and policies

    Returns:
        ComparisonResult

    Raises:
        InputValidationError: Bad movement, malformed variant, negative load, reps < 1
    """
    options = options or ComparisonOptions()
    policy = options.policy
    eps = policy.degenerate_epsilon
    movement = parse_movement(movement)
    perf_b = perf_b or perf_a

    # Validate everything up front: no partial results
    key_a = variant_key(movement, variant_a)
    key_b = variant_key(movement, variant_b)
    check_performance(perf_a.load_kg, perf_a.reps)
    check_performance(perf_b.load_kg, perf_b.reps)

    body_a, body_b = lifter_a.body, lifter_b.body
    kin_a = solve_kinematics(body_a, movement, variant_a, options.lifter_a, options.solver)
    kin_b = solve_kinematics(body_b, movement, variant_b, options.lifter_b, options.solver)

    metrics_a = metrics_from_solution(body_a, movement, variant_a, kin_a, perf_a.load_kg, perf_a.reps)
    metrics_b = metrics_from_solution(body_b, movement, variant_b, kin_b, perf_b.load_kg, perf_b.reps)

    # Leverage (geometry only) and pure body-mass scaling (no bar)
    demand_a = metrics_a.demand_factor
    demand_b = metrics_b.demand_factor
    bodyweight_a = metrics_from_solution(body_a, movement, variant_a, kin_a, 0.0, 1).work_per_rep
    bodyweight_b = metrics_from_solution(body_b, movement, variant_b, kin_b, 0.0, 1).work_per_rep

    equivalent_load = (
        perf_a.load_kg
        * safe_ratio(demand_a, demand_b, eps)
        * safe_ratio(bodyweight_a, bodyweight_b, eps)
    )

    if metrics_b.work_per_rep > eps:
        # round() keeps an exact identity (5 reps vs 5 reps) from ceil-ing to 6
        equivalent_reps = math.ceil(round(metrics_a.total_work / metrics_b.work_per_rep, 9))
    else:
        equivalent_reps = 0

    work_ratio = safe_ratio(metrics_b.work_per_rep, metrics_a.work_per_rep, eps)
    demand_ratio = safe_ratio(demand_b, demand_a, eps)
    displacement_ratio = safe_ratio(metrics_b.displacement, metrics_a.displacement, eps)
    advantage_pct = (demand_ratio - 1) * 100
    direction = advantage_direction(advantage_pct, demand_ratio, policy)

    name_a = lifter_a.name or "Lifter A"
    name_b = lifter_b.name or "Lifter B"

    capacity = None
    if movement is Movement.SQUAT and key_a != key_b:
        capacity = capacity_adjustment(
            key_a, key_b, perf_a.load_kg, demand_ratio, name_a, name_b, policy
        )

    explanations = generate_explanations(
        movement, body_a, body_b, kin_a, kin_b, metrics_a, metrics_b,
        displacement_ratio, demand_ratio, advantage_pct, name_a, name_b, policy,
    )

    logger.debug(
        "Compared %s: demand ratio %.4f, work ratio %.4f, equivalent load %.2f kg (%s)",
        movement.value, demand_ratio, work_ratio, equivalent_load, direction.value,
    )

    return ComparisonResult(
        lifter_a=LifterOutcome(name_a, body_a, metrics_a, kin_a),
        lifter_b=LifterOutcome(name_b, body_b, metrics_b, kin_b),
        equivalent_load=equivalent_load,
        equivalent_reps=equivalent_reps,
        work_ratio=work_ratio,
        demand_ratio=demand_ratio,
        displacement_ratio=displacement_ratio,
        advantage_percentage=advantage_pct,
        advantage_direction=direction,
        explanations=tuple(explanations),
        capacity_adjusted=capacity,
    )


def capacity_adjustment(
    variant_a: Variant,
    variant_b: Variant,
    load_kg: float,
    demand_ratio: float,
    name_a: str = "Lifter A",
    name_b: str = "Lifter B",
    policy: ComparisonPolicy = DEFAULT_COMPARISON_POLICY,
) -> CapacityAdjustment:
    """
    Re-derive the advantage after normalizing for how much load each squat
    variant typically allows (low bar ≈ 7.5% more than high bar).
    """
    va, vb = parse_squat_variant(variant_a), parse_squat_variant(variant_b)
    factor_a = SQUAT_CAPACITY_FACTORS[va]
    factor_b = SQUAT_CAPACITY_FACTORS[vb]

    adjusted_load_a = load_kg / factor_a
    adjusted_load_b = load_kg / factor_b
    # Higher capacity factor = easier variant, so it counts for less
    adjusted_ratio = demand_ratio * (factor_b / factor_a)
    adjusted_pct = (adjusted_ratio - 1) * 100

    explanation = ""
    if factor_a != factor_b:
        a_higher = factor_a > factor_b
        stronger_variant = va if a_higher else vb
        stronger_name = name_a if a_higher else name_b
        diff_pct = abs(factor_a - factor_b) / min(factor_a, factor_b) * 100
        explanation = (
            f"The {stronger_variant.value} squat typically allows ~{diff_pct:.1f}% more load. "
            f"Adjusting for this, {stronger_name}'s {load_kg:g}kg is equivalent to "
            f"{max(adjusted_load_a, adjusted_load_b):.1f}kg in difficulty, which favours "
            f"the lifter using the lower-capacity variant."
        )

    return CapacityAdjustment(
        factor_a=factor_a,
        factor_b=factor_b,
        adjusted_load_a=adjusted_load_a,
        adjusted_load_b=adjusted_load_b,
        adjusted_demand_ratio=adjusted_ratio,
        adjusted_advantage_percentage=adjusted_pct,
        adjusted_advantage_direction=advantage_direction(adjusted_pct, adjusted_ratio, policy),
        explanation=explanation,
    )


# =============================================================================
# Explanations
# =============================================================================

def generate_explanations(
    movement: Movement,
    body_a: BodyModel,
    body_b: BodyModel,
    kin_a: KinematicSolution,
    kin_b: KinematicSolution,
    metrics_a: LiftMetrics,
    metrics_b: LiftMetrics,
    displacement_ratio: float,
    demand_ratio: float,
    advantage_pct: float,
    name_a: str = "Lifter A",
    name_b: str = "Lifter B",
    policy: ComparisonPolicy = DEFAULT_COMPARISON_POLICY,
) -> List[Explanation]:
    """
    Fixed, ordered rules; each fires only past its materiality threshold.
    The last entry is always exactly one "summary".
    """
    explanations = []

    # 1. Range of motion
    diff_pct = abs(displacement_ratio - 1) * 100
    if diff_pct > policy.displacement_threshold_pct:
        b_longer = displacement_ratio > 1
        longer, shorter = (name_b, name_a) if b_longer else (name_a, name_b)
        cm = abs(metrics_b.displacement - metrics_a.displacement) * 100
        explanations.append(Explanation(
            type="displacement",
            impact=Advantage.ADVANTAGE_A if b_longer else Advantage.ADVANTAGE_B,
            message=(
                f"{longer} moves the bar {diff_pct:.1f}% further ({cm:.1f}cm more ROM). "
                f"{longer} does more work per rep, while {shorter} can move more weight "
                f"for less fatigue per rep."
            ),
        ))

    if movement is Movement.SQUAT:
        # 2. Hip moment arm
        ratio = safe_ratio(kin_b.moment_arms.hip, kin_a.moment_arms.hip, policy.degenerate_epsilon)
        diff_pct = abs(ratio - 1) * 100
        if diff_pct > policy.moment_arm_threshold_pct:
            b_larger = ratio > 1
            larger, smaller = (name_b, name_a) if b_larger else (name_a, name_b)
            explanations.append(Explanation(
                type="moment_arm",
                impact=Advantage.ADVANTAGE_A if b_larger else Advantage.ADVANTAGE_B,
                message=(
                    f"{larger} has a {diff_pct:.1f}% longer hip moment arm, so the same bar "
                    f"costs more hip extensor torque. {smaller} has the better leverage."
                ),
            ))

        # 3. Trunk angle (only meaningful when both positions were solved)
        if kin_a.valid and kin_b.valid:
            diff_deg = abs(kin_b.angles.trunk - kin_a.angles.trunk)
            if diff_deg > policy.trunk_angle_threshold_deg:
                b_upright = kin_b.angles.trunk < kin_a.angles.trunk
                upright, leaning = (name_b, name_a) if b_upright else (name_a, name_b)
                explanations.append(Explanation(
                    type="trunk_angle",
                    impact=Advantage.NEUTRAL,
                    message=(
                        f"{upright} squats {diff_deg:.0f}° more upright, which shifts work "
                        f"toward the quads. {leaning}'s forward lean loads the hips and lower "
                        f"back more. Neither is better in itself."
                    ),
                ))

    if movement is Movement.DEADLIFT:
        # 4. Arm length
        diff_m = body_b.derived.total_arm - body_a.derived.total_arm
        if abs(diff_m) > policy.arm_length_threshold_m:
            b_longer = diff_m > 0
            longer, shorter = (name_b, name_a) if b_longer else (name_a, name_b)
            explanations.append(Explanation(
                type="arm_length",
                impact=Advantage.ADVANTAGE_B if b_longer else Advantage.ADVANTAGE_A,
                message=(
                    f"{longer} has {abs(diff_m) * 100:.1f}cm longer arms, which raises the "
                    f"lockout height and shortens the pull. {shorter} pulls through more "
                    f"range and may prefer a sumo stance."
                ),
            ))

    explanations.append(_summary(demand_ratio, advantage_pct, name_a, name_b, policy))
    return explanations


def _summary(demand_ratio, advantage_pct, name_a, name_b, policy) -> Explanation:
    level = abs(advantage_pct)
    if level < policy.neutral_threshold_pct:
        return Explanation(
            type="summary",
            impact=Advantage.NEUTRAL,
            message=(
                "Both lifters have nearly identical mechanical demands. Performance "
                "differences come down to strength, training and technique."
            ),
        )

    a_favoured = demand_ratio > 1
    favoured, other = (name_a, name_b) if a_favoured else (name_b, name_a)
    if level > policy.substantial_advantage_pct:
        band = "This is a substantial difference that will clearly affect relative performance."
    elif level > policy.notable_advantage_pct:
        band = "This is a notable difference that explains much of a performance gap."
    else:
        band = "This is a modest difference, likely smaller than training and technique effects."
    return Explanation(
        type="summary",
        impact=Advantage.ADVANTAGE_A if a_favoured else Advantage.ADVANTAGE_B,
        message=(
            f"Bottom line: {favoured} has a {level:.1f}% mechanical advantage. {band} "
            f"{other} should use the equivalent load for a fair comparison."
        ),
    )


def compare_cross_lift(
    body: BodyModel,
    movement: Union[str, Movement],
    variant_a: Variant,
    variant_b: Variant,
    load_kg: float,
    options_a: Optional[MovementOptions] = None,
    options_b: Optional[MovementOptions] = None,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> CrossLiftResult:
    """
    One lifter, two variants: what load on variant B matches `load_kg` on A?

    e.g. 140kg low-bar ≈ ? high-bar for the same body.
    """
    check_performance(load_kg, 1)
    movement = parse_movement(movement)
    kin_a = solve_kinematics(body, movement, variant_a, options_a, policy)
    kin_b = solve_kinematics(body, movement, variant_b, options_b, policy)
    demand_a = metrics_from_solution(body, movement, variant_a, kin_a, load_kg, 1).demand_factor
    demand_b = metrics_from_solution(body, movement, variant_b, kin_b, 0.0, 1).demand_factor
    factor = safe_ratio(demand_a, demand_b)
    return CrossLiftResult(conversion_factor=factor, equivalent_load=load_kg * factor)
