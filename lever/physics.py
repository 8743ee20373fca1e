# lever/physics.py
"""
PHYSICS: WORK AND DEMAND
========================

    effective mass = load + fraction[movement][sex] × body mass
    work per rep   = g · displacement · effective mass
    total work     = work per rep × reps

The demand factor is pure geometry (no load): it is what makes two bodies
comparable. For squats it is hip moment arm × √displacement; for pull-ups
displacement × grip factor; for everything else the displacement itself.

Pound-for-pound scores divide by mass^0.67 (allometric scaling).
"""

import math
import numbers
from typing import Optional, Union

from .config import DEFAULT_SOLVER_POLICY, SolverPolicy
from .constants import (
    ALLOMETRIC_EXPONENT,
    BODY_MASS_FRACTIONS,
    GRAVITY,
    PULLUP_GRIP_FACTORS,
)
from .errors import InputValidationError
from .kinematics import solve_kinematics
from .kinematics.variants import parse_movement, parse_pullup_grip
from .model import (
    BodyModel,
    KinematicSolution,
    LiftMetrics,
    Movement,
    MovementOptions,
    Variant,
)


def effective_mass(body: BodyModel, movement: Movement, load_kg: float) -> float:
    """Mass that travels the bar path (kg)."""
    return load_kg + BODY_MASS_FRACTIONS[movement][body.sex] * body.mass


def demand_factor(movement: Movement, variant: Variant, solution: KinematicSolution) -> float:
    if movement is Movement.SQUAT:
        return solution.moment_arms.hip * math.sqrt(solution.displacement)
    if movement is Movement.PULLUP:
        return solution.displacement * PULLUP_GRIP_FACTORS[parse_pullup_grip(variant)]
    return solution.displacement


def check_performance(load_kg: float, reps: int) -> None:
    errors = []
    if not isinstance(load_kg, numbers.Real) or isinstance(load_kg, bool) or not math.isfinite(load_kg):
        errors.append("Load must be a finite number")
    elif load_kg < 0:
        errors.append(f"Load must be non-negative (got {load_kg}kg)")
    if not isinstance(reps, numbers.Integral) or isinstance(reps, bool) or reps < 1:
        errors.append(f"Reps must be a whole number of at least 1 (got {reps})")
    if errors:
        raise InputValidationError(errors)


def metrics_from_solution(
    body: BodyModel,
    movement: Union[str, Movement],
    variant: Variant,
    solution: KinematicSolution,
    load_kg: float,
    reps: int,
) -> LiftMetrics:
    """LiftMetrics for an already solved movement (avoids solving twice)."""
    movement = parse_movement(movement)
    check_performance(load_kg, reps)

    m_eff = effective_mass(body, movement, load_kg)
    work_per_rep = GRAVITY * solution.displacement * m_eff
    total_work = work_per_rep * reps
    allometric_mass = body.mass ** ALLOMETRIC_EXPONENT

    vpi = None
    if movement is Movement.PULLUP:
        grip = PULLUP_GRIP_FACTORS[parse_pullup_grip(variant)]
        vpi = (body.mass + load_kg) * grip / allometric_mass

    return LiftMetrics(
        displacement=solution.displacement,
        effective_mass=m_eff,
        work_per_rep=work_per_rep,
        total_work=total_work,
        demand_factor=demand_factor(movement, variant, solution),
        score_p4p=total_work / allometric_mass,
        vpi=vpi,
    )


def compute_lift_metrics(
    body: BodyModel,
    movement: Union[str, Movement],
    variant: Variant = None,
    load_kg: float = 0.0,
    reps: int = 1,
    options: Optional[MovementOptions] = None,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> LiftMetrics:
    """
    Work and demand for one set.

    Args:
        body: Body model
        movement: Movement family
        variant: Family-specific variant (None = default)
        load_kg: External load; for push-ups and pull-ups, added weight
        reps: Repetitions (>= 1)
        options: Stance / bar offset
        policy: Squat search bounds

    Raises:
        InputValidationError: Negative load, reps < 1, bad movement/variant
    """
    check_performance(load_kg, reps)
    solution = solve_kinematics(body, movement, variant, options, policy)
    return metrics_from_solution(body, movement, variant, solution, load_kg, reps)
