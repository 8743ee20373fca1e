# lever/kinematics/bodyweight.py
"""Closed-form bodyweight lifts: pull-up and push-up."""

from ..config import DEFAULT_SOLVER_POLICY, SolverPolicy
from ..constants import LOCKOUT_REACH_FACTOR
from ..model import (
    DEFAULT_MOVEMENT_OPTIONS,
    BodyModel,
    KinematicSolution,
    MovementOptions,
    Variant,
)
from .barbell import reference_solution
from .variants import parse_pullup_grip


def pullup_range_of_motion(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> float:
    """Dead hang to chin over the bar: ~95% of the full arm."""
    parse_pullup_grip(variant)
    return body.derived.total_arm * LOCKOUT_REACH_FACTOR


def solve_pullup(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> KinematicSolution:
    seg = body.segments
    # The body is the resistance; track the shoulder, which starts a full arm below the bar
    shoulder_y = seg.tibia + seg.femur + seg.torso
    return reference_solution(
        body,
        bar_y=shoulder_y,
        displacement=pullup_range_of_motion(body, variant, options, policy),
    )


def pushup_range_of_motion(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> float:
    seg = body.segments
    return seg.upper_arm + seg.forearm


def solve_pushup(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> KinematicSolution:
    seg = body.segments
    return reference_solution(
        body,
        bar_y=seg.tibia + seg.femur + seg.torso,
        displacement=pushup_range_of_motion(body),
    )
