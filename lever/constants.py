# lever/constants.py
"""
CONSTANTS: REFERENCE TABLES
===========================

PURPOSE:
--------
Fixed coefficients the whole package reads: segment-length ratios, the share
of body mass that travels with each lift, bar offsets, grip and arch tables,
stance modifiers and the published variant load-capacity factors.

Every table is a read-only mapping (types.MappingProxyType) over frozen
dataclasses or floats, so nothing can patch a coefficient at runtime.

SOURCES:
--------
- Segment ratios: Winter, D.A. (2009) Biomechanics and Motor Control of
  Human Movement, 4th ed., Table 4.1. The stacked ratios sum to ~0.948;
  the rest of stature is soft tissue and posture and is deliberately not
  added back.
- Bar offsets: typical placements measured from the acromion in the trunk's
  local frame (horizontal, vertical).
- Capacity factors: low-bar squats are typically performed with ~5-10% more
  load than high-bar; front squats with ~15% less.
"""

from dataclasses import dataclass
from types import MappingProxyType

from .model import (
    BenchArch,
    BenchGrip,
    Movement,
    PullupGrip,
    Sex,
    SquatStance,
    SquatVariant,
    SumoStance,
)


GRAVITY = 9.81                      # m/s²
ALLOMETRIC_EXPONENT = 0.67          # strength scales with mass^(2/3)

SD_MULTIPLIER_COEFFICIENT = 0.045   # one SD of a limb group = 4.5% length
HEIGHT_NORMALIZATION_TOLERANCE = 0.02
APE_INDEX_SHOULDER_SHARE = 0.36     # biacromial width ≈ 0.36 × torso

STANDARD_PLATE_RADIUS = 0.225       # 450 mm competition plate
AVERAGE_CHEST_DEPTH = 0.23
MIN_BENCH_DISPLACEMENT = 0.05
MIN_DEADLIFT_DISPLACEMENT = 0.05
LOCKOUT_REACH_FACTOR = 0.95         # OHP / pull-up: arms never fully straight under load

# Deadlift start-position hip moment arm at standard plate height (m).
# Lower starts (deficit) lengthen it, blocks shorten it.
DEADLIFT_HIP_MOMENT_ARM = 0.09


@dataclass(frozen=True)
class SegmentRatios:
    head_neck: float
    torso: float
    upper_arm: float
    forearm: float
    hand: float
    femur: float
    tibia: float
    foot_height: float


SEGMENT_RATIOS = MappingProxyType({
    Sex.MALE: SegmentRatios(
        head_neck=0.130, torso=0.288, upper_arm=0.186, forearm=0.146,
        hand=0.108, femur=0.245, tibia=0.246, foot_height=0.039,
    ),
    Sex.FEMALE: SegmentRatios(
        head_neck=0.130, torso=0.285, upper_arm=0.183, forearm=0.143,
        hand=0.106, femur=0.245, tibia=0.246, foot_height=0.039,
    ),
})


# Share of body mass moved with the bar. Squat counts only the mass above the
# knees that actually travels the bar path; bench and press move the load only.
BODY_MASS_FRACTIONS = MappingProxyType({
    Movement.SQUAT: MappingProxyType({Sex.MALE: 0.50, Sex.FEMALE: 0.51}),
    Movement.DEADLIFT: MappingProxyType({Sex.MALE: 0.60, Sex.FEMALE: 0.608}),
    Movement.BENCH: MappingProxyType({Sex.MALE: 0.0, Sex.FEMALE: 0.0}),
    Movement.PULLUP: MappingProxyType({Sex.MALE: 1.0, Sex.FEMALE: 1.0}),
    Movement.PUSHUP: MappingProxyType({Sex.MALE: 0.72, Sex.FEMALE: 0.71}),
    Movement.OHP: MappingProxyType({Sex.MALE: 0.0, Sex.FEMALE: 0.0}),
    Movement.THRUSTER: MappingProxyType({Sex.MALE: 0.50, Sex.FEMALE: 0.50}),
})


@dataclass(frozen=True)
class BarOffset:
    """Bar position relative to the shoulder in the trunk frame (m)."""
    horizontal: float   # + in front of the shoulder
    vertical: float     # + above the shoulder (along the trunk)


BAR_OFFSETS = MappingProxyType({
    SquatVariant.HIGH_BAR: BarOffset(horizontal=-0.05, vertical=0.05),
    SquatVariant.LOW_BAR: BarOffset(horizontal=-0.12, vertical=-0.05),
    SquatVariant.FRONT: BarOffset(horizontal=0.08, vertical=0.08),
})

SQUAT_CAPACITY_FACTORS = MappingProxyType({
    SquatVariant.HIGH_BAR: 1.0,
    SquatVariant.LOW_BAR: 1.075,
    SquatVariant.FRONT: 0.85,
})


@dataclass(frozen=True)
class StanceModifier:
    femur_multiplier: float         # sagittal projection of the thigh
    rom_multiplier: float
    trunk_angle_adjustment: float   # degrees added to the upper trunk bound


SQUAT_STANCES = MappingProxyType({
    SquatStance.NARROW: StanceModifier(1.0, 1.02, -5.0),
    SquatStance.NORMAL: StanceModifier(1.0, 1.0, 0.0),
    SquatStance.WIDE: StanceModifier(0.95, 0.97, 3.0),
    SquatStance.ULTRA_WIDE: StanceModifier(0.90, 0.93, 5.0),
})

SUMO_STANCE_FACTORS = MappingProxyType({
    SumoStance.HYBRID: 0.90,
    SumoStance.NORMAL: 0.85,
    SumoStance.WIDE: 0.82,
    SumoStance.ULTRA_WIDE: 0.78,
})

BENCH_GRIP_ANGLES = MappingProxyType({      # forearm angle from vertical (deg)
    BenchGrip.NARROW: 5.0,
    BenchGrip.MEDIUM: 15.0,
    BenchGrip.WIDE: 25.0,
})

BENCH_ARCH_HEIGHTS = MappingProxyType({     # chest elevation (m)
    BenchArch.FLAT: 0.02,
    BenchArch.MODERATE: 0.05,
    BenchArch.COMPETITIVE: 0.08,
    BenchArch.EXTREME: 0.12,
})

PULLUP_GRIP_FACTORS = MappingProxyType({
    PullupGrip.SUPINATED: 1.0,
    PullupGrip.NEUTRAL: 1.08,
    PullupGrip.PRONATED: 1.15,
})
