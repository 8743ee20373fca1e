# lever/model.py
"""
MODEL: BODY, MOVEMENT AND RESULT RECORDS
========================================

PURPOSE:
--------
Every value that flows between the builder, the solver, the work calculator
and the comparison engine is defined here as a frozen dataclass. Nothing in
the package mutates one of these after construction; each operation returns
freshly built records.

CONVENTIONS:
------------
- Lengths in metres, masses in kilograms, angles in degrees, work in joules.
- 2D sagittal plane: +x forward (the way the lifter faces), +y up.
- Origin at the base of support (midfoot / ankle), so "balanced" means the
  resistance point sits on x = 0.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np


# =============================================================================
# Enumerations (values are the wire strings used by the HTTP layer)
# =============================================================================

class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class Movement(str, Enum):
    SQUAT = "squat"
    DEADLIFT = "deadlift"
    BENCH = "bench"
    PULLUP = "pullup"
    PUSHUP = "pushup"
    OHP = "ohp"
    THRUSTER = "thruster"


class SquatVariant(str, Enum):
    HIGH_BAR = "highBar"
    LOW_BAR = "lowBar"
    FRONT = "front"


class SquatStance(str, Enum):
    NARROW = "narrow"
    NORMAL = "normal"
    WIDE = "wide"
    ULTRA_WIDE = "ultraWide"


class DeadliftVariant(str, Enum):
    CONVENTIONAL = "conventional"
    SUMO = "sumo"


class SumoStance(str, Enum):
    HYBRID = "hybrid"
    NORMAL = "normal"
    WIDE = "wide"
    ULTRA_WIDE = "ultraWide"


class BenchGrip(str, Enum):
    NARROW = "narrow"
    MEDIUM = "medium"
    WIDE = "wide"


class BenchArch(str, Enum):
    FLAT = "flat"
    MODERATE = "moderate"
    COMPETITIVE = "competitive"
    EXTREME = "extreme"


class PullupGrip(str, Enum):
    SUPINATED = "supinated"
    NEUTRAL = "neutral"
    PRONATED = "pronated"


class Advantage(str, Enum):
    ADVANTAGE_A = "advantage_A"
    ADVANTAGE_B = "advantage_B"
    NEUTRAL = "neutral"


class BodyMode(str, Enum):
    SIMPLE = "simple"       # ratio table only
    ADVANCED = "advanced"   # SD modifiers applied (and normalized)


# =============================================================================
# Geometry
# =============================================================================

@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    @classmethod
    def from_array(cls, v) -> "Point2D":
        return cls(float(v[0]), float(v[1]))

    def distance_to(self, other: "Point2D") -> float:
        return float(np.hypot(other.x - self.x, other.y - self.y))


ORIGIN = Point2D(0.0, 0.0)


# =============================================================================
# Body
# =============================================================================

@dataclass(frozen=True)
class SegmentLengths:
    """
    Rigid segment lengths (m) plus the stature they were built from.

    The stacked chain {head_neck, torso, femur, tibia, foot_height} is the
    standing height; arms hang off the shoulder and are not part of it.
    """
    height: float
    head_neck: float
    torso: float
    upper_arm: float
    forearm: float
    hand: float
    femur: float
    tibia: float
    foot_height: float

    def stacked_sum(self) -> float:
        return self.head_neck + self.torso + self.femur + self.tibia + self.foot_height


@dataclass(frozen=True)
class DerivedMetrics:
    """Proportions computed from SegmentLengths (see anthropometry.derive_metrics)."""
    total_arm: float
    total_leg: float
    crural_index: float
    femur_torso_ratio: float
    ape_index: float
    acromion_height: float
    hip_height: float


@dataclass(frozen=True)
class MobilityProfile:
    """Per-joint maximum range of motion (degrees)."""
    max_ankle_dorsiflexion: float = 30.0
    max_hip_flexion: float = 130.0
    max_shoulder_flexion: float = 165.0


@dataclass(frozen=True)
class SDModifiers:
    """Limb-group deviations from the population ratio, in standard deviations."""
    arms: float = 0.0
    legs: float = 0.0
    torso: float = 0.0


@dataclass(frozen=True)
class BodyModel:
    sex: Sex
    mass: float
    segments: SegmentLengths
    derived: DerivedMetrics
    mobility: MobilityProfile
    mode: BodyMode = BodyMode.SIMPLE

    @property
    def height(self) -> float:
        return self.segments.height


# =============================================================================
# Kinematics
# =============================================================================

@dataclass(frozen=True)
class JointPositions:
    ankle: Point2D
    knee: Point2D
    hip: Point2D
    shoulder: Point2D
    bar: Point2D


@dataclass(frozen=True)
class JointAngles:
    """
    Degrees. trunk is measured from vertical; ankle is dorsiflexion.

    Squat solutions report knee as the shin angle from vertical (equal to
    the ankle angle) and hip as the trunk angle, since the thigh is
    horizontal at depth. Poses report flexion at every joint.
    """
    ankle: float
    knee: float
    hip: float
    trunk: float


@dataclass(frozen=True)
class MomentArms:
    hip: float
    knee: float


ZERO_POSITIONS = JointPositions(ORIGIN, ORIGIN, ORIGIN, ORIGIN, ORIGIN)
ZERO_ANGLES = JointAngles(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class KinematicSolution:
    """
    Joint configuration at the limiting position of a movement.

    valid=False means the squat search exhausted the ankle range; the
    displacement is then a conservative estimate and positions are zeroed.
    """
    positions: JointPositions
    angles: JointAngles
    moment_arms: MomentArms
    displacement: float
    valid: bool = True
    mobility_limited: bool = False


# =============================================================================
# Options
# =============================================================================

Variant = Union[str, Enum, None]


@dataclass(frozen=True)
class MovementOptions:
    """
    Per-lift setup beyond the variant itself.

    bar_offset_m is signed: negative = deficit (standing on a plate),
    positive = pulling from blocks. It only applies to deadlifts.
    """
    squat_stance: SquatStance = SquatStance.NORMAL
    sumo_stance: SumoStance = SumoStance.NORMAL
    bar_offset_m: float = 0.0


DEFAULT_MOVEMENT_OPTIONS = MovementOptions()


# =============================================================================
# Work / comparison
# =============================================================================

@dataclass(frozen=True)
class LiftMetrics:
    displacement: float
    effective_mass: float
    work_per_rep: float
    total_work: float
    demand_factor: float
    score_p4p: float
    vpi: Optional[float] = None


@dataclass(frozen=True)
class Performance:
    load_kg: float
    reps: int = 1


@dataclass(frozen=True)
class Lifter:
    body: BodyModel
    name: Optional[str] = None


@dataclass(frozen=True)
class Explanation:
    type: str
    impact: Advantage
    message: str


@dataclass(frozen=True)
class CapacityAdjustment:
    factor_a: float
    factor_b: float
    adjusted_load_a: float
    adjusted_load_b: float
    adjusted_demand_ratio: float
    adjusted_advantage_percentage: float
    adjusted_advantage_direction: Advantage
    explanation: str


@dataclass(frozen=True)
class LifterOutcome:
    name: str
    body: BodyModel
    metrics: LiftMetrics
    kinematics: KinematicSolution


@dataclass(frozen=True)
class ComparisonResult:
    lifter_a: LifterOutcome
    lifter_b: LifterOutcome
    equivalent_load: float
    equivalent_reps: int
    work_ratio: float
    demand_ratio: float
    displacement_ratio: float
    advantage_percentage: float
    advantage_direction: Advantage
    explanations: Tuple[Explanation, ...] = field(default_factory=tuple)
    capacity_adjusted: Optional[CapacityAdjustment] = None
