# lever - Segment-based lifting biomechanics
"""
LEVER: WHO HAS THE BETTER LEVERS?
=================================

This package provides:
- Body models from height / mass / sex (+ optional limb-length deviations)
- A closed-chain squat solver and closed-form solvers for six other lifts
- Work, demand and pound-for-pound scores for a set
- Cross-body comparison: equivalent load, equivalent reps, explanations

ARCHITECTURE:
-------------
    constants.py      Reference tables (read-only)
    config.py         Solver / comparison / validation policy
    model.py          Frozen records and enums
    anthropometry.py  build_body_model()
    kinematics/       One solver per movement family + dispatch table
    physics.py        compute_lift_metrics()
    comparison.py     compare_lifters(), compare_cross_lift()
    poses.py          Forward-kinematics poses over a rep (t = 0..1)
    validation.py     Form-level input checks
    explore.py        pandas sweeps and tables
"""

from .anthropometry import build_body_model, derive_metrics, normalize_to_height, validate_body_model
from .comparison import ComparisonOptions, CrossLiftResult, compare_cross_lift, compare_lifters
from .config import (
    DEFAULT_COMPARISON_POLICY,
    DEFAULT_LIMITS,
    DEFAULT_SOLVER_POLICY,
    ComparisonPolicy,
    SolverPolicy,
    ValidationLimits,
)
from .errors import InputValidationError, LeverError
from .kinematics import MOVEMENTS, range_of_motion, solve_kinematics
from .model import (
    Advantage,
    BenchArch,
    BenchGrip,
    BodyModel,
    ComparisonResult,
    DeadliftVariant,
    KinematicSolution,
    Lifter,
    LiftMetrics,
    MobilityProfile,
    Movement,
    MovementOptions,
    Performance,
    PullupGrip,
    SDModifiers,
    Sex,
    SquatStance,
    SquatVariant,
    SumoStance,
)
from .physics import compute_lift_metrics
from .poses import sample_poses, solve_pose, validate_segment_lengths

# Version
__version__ = "0.1.0"

__all__ = [
    # Core API
    'build_body_model',
    'solve_kinematics',
    'compute_lift_metrics',
    'compare_lifters',
    'compare_cross_lift',
    'range_of_motion',
    'MOVEMENTS',
    # Body helpers
    'derive_metrics',
    'normalize_to_height',
    'validate_body_model',
    # Poses
    'solve_pose',
    'sample_poses',
    'validate_segment_lengths',
    # Records
    'BodyModel',
    'KinematicSolution',
    'LiftMetrics',
    'ComparisonResult',
    'CrossLiftResult',
    'Lifter',
    'Performance',
    'MobilityProfile',
    'SDModifiers',
    'MovementOptions',
    'ComparisonOptions',
    # Enums
    'Sex',
    'Movement',
    'SquatVariant',
    'SquatStance',
    'DeadliftVariant',
    'SumoStance',
    'BenchGrip',
    'BenchArch',
    'PullupGrip',
    'Advantage',
    # Policy
    'SolverPolicy',
    'ComparisonPolicy',
    'ValidationLimits',
    'DEFAULT_SOLVER_POLICY',
    'DEFAULT_COMPARISON_POLICY',
    'DEFAULT_LIMITS',
    # Errors
    'LeverError',
    'InputValidationError',
]
