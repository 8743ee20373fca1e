# lever/config.py
"""
Tuning policy for the solver, the comparison engine and input validation.

None of these numbers is physical law: they are thresholds and search bounds
that callers may override by passing their own instance. The module-level
defaults are what every public function uses when no policy is given.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverPolicy:
    """Bounds for the squat equilibrium search."""

    # Ankle search: start at the body's max dorsiflexion, walk down to here
    min_ankle_dorsiflexion: float = 10.0   # deg
    ankle_step: float = 2.0                # deg

    # Accepted trunk band (deg from vertical); stance can widen the upper bound
    min_trunk_angle: float = 20.0
    max_trunk_angle: float = 80.0

    # Thigh angle below horizontal at depth (0 = parallel)
    femur_angle_at_depth: float = 0.0

    # Unsolvable case
    fallback_displacement_ratio: float = 0.37   # × height
    fallback_moment_arm_ratio: float = 0.5      # × femur

    # Guard against a step/range combination that never terminates
    max_iterations: int = 1000


@dataclass(frozen=True)
class ComparisonPolicy:
    """Thresholds used to label and explain a comparison."""

    neutral_threshold_pct: float = 1.0

    # Explanation materiality
    displacement_threshold_pct: float = 2.0
    moment_arm_threshold_pct: float = 2.0
    trunk_angle_threshold_deg: float = 3.0
    arm_length_threshold_m: float = 0.02

    # Summary wording bands (|advantage| in %)
    substantial_advantage_pct: float = 15.0
    notable_advantage_pct: float = 8.0

    # Ratios whose denominator is below this fall back to 1.0
    degenerate_epsilon: float = 1e-12


@dataclass(frozen=True)
class ValidationLimits:
    """Accepted input ranges."""

    min_height: float = 0.5     # m
    max_height: float = 10.0
    min_mass: float = 10.0      # kg
    max_mass: float = 1000.0
    max_abs_sd: float = 3.0
    segment_sum_tolerance: float = 0.06
    max_ankle_dorsiflexion: float = 90.0    # degrees
    max_hip_flexion: float = 180.0
    max_shoulder_flexion: float = 180.0

    # Form-level bounds (presentation layer)
    max_load: float = 500.0     # kg
    min_reps: int = 1
    max_reps: int = 100


# Global default instances
DEFAULT_SOLVER_POLICY = SolverPolicy()
DEFAULT_COMPARISON_POLICY = ComparisonPolicy()
DEFAULT_LIMITS = ValidationLimits()
