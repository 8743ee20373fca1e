# lever/kinematics - Movement solvers
"""
KINEMATICS: ONE SOLVER PER MOVEMENT FAMILY
==========================================

Every family exposes the same pair of pure functions,

    solve(body, variant, options, policy) -> KinematicSolution
    rom(body, variant, options, policy)   -> float (displacement, m)

and MOVEMENTS maps each Movement to that pair. solve_kinematics() is the
single entry point the rest of the package uses.

    squat.py        iterative equilibrium search (bar over midfoot)
    barbell.py      deadlift, bench, overhead press, thruster (closed form)
    bodyweight.py   pull-up, push-up (closed form)
    variants.py     variant strings → typed setups
    geometry.py     2D helpers (trunk-frame rotation, two-link IK)
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Optional, Union

from ..config import DEFAULT_SOLVER_POLICY, SolverPolicy
from ..model import (
    DEFAULT_MOVEMENT_OPTIONS,
    BodyModel,
    KinematicSolution,
    Movement,
    MovementOptions,
    Variant,
)
from .barbell import (
    bench_range_of_motion,
    deadlift_range_of_motion,
    ohp_range_of_motion,
    solve_bench,
    solve_deadlift,
    solve_ohp,
    solve_thruster,
    thruster_range_of_motion,
)
from .bodyweight import (
    pullup_range_of_motion,
    pushup_range_of_motion,
    solve_pullup,
    solve_pushup,
)
from .squat import solve_squat, squat_range_of_motion
from .variants import (
    DEFAULT_VARIANTS,
    BenchSetup,
    parse_bench_variant,
    parse_movement,
    variant_key,
)


@dataclass(frozen=True)
class MovementSolver:
    solve: Callable[..., KinematicSolution]
    rom: Callable[..., float]


MOVEMENTS = MappingProxyType({
    Movement.SQUAT: MovementSolver(solve_squat, squat_range_of_motion),
    Movement.DEADLIFT: MovementSolver(solve_deadlift, deadlift_range_of_motion),
    Movement.BENCH: MovementSolver(solve_bench, bench_range_of_motion),
    Movement.PULLUP: MovementSolver(solve_pullup, pullup_range_of_motion),
    Movement.PUSHUP: MovementSolver(solve_pushup, pushup_range_of_motion),
    Movement.OHP: MovementSolver(solve_ohp, ohp_range_of_motion),
    Movement.THRUSTER: MovementSolver(solve_thruster, thruster_range_of_motion),
})


def solve_kinematics(
    body: BodyModel,
    movement: Union[str, Movement],
    variant: Variant = None,
    options: Optional[MovementOptions] = None,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> KinematicSolution:
    """
    Solve a movement's limiting position for one body.

    Deterministic: the same inputs always give a bit-identical result.

    Raises:
        InputValidationError: Unknown movement or malformed variant
    """
    solver = MOVEMENTS[parse_movement(movement)]
    return solver.solve(body, variant, options or DEFAULT_MOVEMENT_OPTIONS, policy)


def range_of_motion(
    body: BodyModel,
    movement: Union[str, Movement],
    variant: Variant = None,
    options: Optional[MovementOptions] = None,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> float:
    solver = MOVEMENTS[parse_movement(movement)]
    return solver.rom(body, variant, options or DEFAULT_MOVEMENT_OPTIONS, policy)


__all__ = [
    'MovementSolver',
    'MOVEMENTS',
    'DEFAULT_VARIANTS',
    'BenchSetup',
    'solve_kinematics',
    'range_of_motion',
    'solve_squat',
    'solve_deadlift',
    'solve_bench',
    'solve_ohp',
    'solve_thruster',
    'solve_pullup',
    'solve_pushup',
    'parse_bench_variant',
    'parse_movement',
    'variant_key',
]
