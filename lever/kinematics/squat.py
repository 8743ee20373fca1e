# lever/kinematics/squat.py
"""
SQUAT: CLOSED-CHAIN EQUILIBRIUM SOLVER
======================================

PURPOSE:
--------
Find the trunk angle at parallel depth that keeps the bar over midfoot.

SETUP (ankle at the origin, +x forward, +y up):
-----------------------------------------------
    knee     = (tibia·sinα, tibia·cosα)          α = ankle dorsiflexion
    hip      = knee − femur·(cosφ, sinφ)         φ = thigh angle below horizontal
    shoulder = hip + torso·(sinθ, cosθ)          θ = trunk lean from vertical
    bar      = shoulder + R(θ)·(h, v)            (h, v) = bar offset in trunk frame

Balance requires bar.x = 0:

    hip.x + torso·sinθ + h·cosθ + v·sinθ = 0
    ⇒ A·sinθ + B·cosθ = C,   A = torso + v,  B = h,  C = −hip.x
    ⇒ θ = asin(C / √(A²+B²)) − atan2(B, A)

SEARCH:
-------
Start at the body's maximum ankle dorsiflexion. If there is no real solution,
or θ falls outside the accepted trunk band, give up some ankle range and try
again. Running out of ankle range is not an error: the solver returns
valid=False with a conservative displacement estimate.
"""

import logging
import math

import numpy as np

from ..config import DEFAULT_SOLVER_POLICY, SolverPolicy
from ..constants import BAR_OFFSETS, SQUAT_STANCES
from ..model import (
    DEFAULT_MOVEMENT_OPTIONS,
    JointAngles,
    JointPositions,
    KinematicSolution,
    MomentArms,
    MovementOptions,
    Point2D,
    SquatStance,
    Variant,
    ZERO_ANGLES,
    ZERO_POSITIONS,
    BodyModel,
)
from .geometry import rotate_trunk_offset
from .variants import coerce_enum, parse_squat_variant

logger = logging.getLogger(__name__)


def solve_squat(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> KinematicSolution:
    """
    Solve the squat at parallel depth.

    Args:
        body: Body model
        variant: highBar / lowBar / front (default highBar)
        options: Stance (femur projection, ROM and trunk-band adjustments)
        policy: Search bounds

    Returns:
        KinematicSolution (valid=False + fallback when no ankle angle works)
    """
    variant = parse_squat_variant(variant)
    stance = SQUAT_STANCES[coerce_enum(SquatStance, options.squat_stance, "squat stance")]
    offset = BAR_OFFSETS[variant]
    seg = body.segments

    femur = seg.femur * stance.femur_multiplier
    phi = math.radians(policy.femur_angle_at_depth)
    thigh = np.array([math.cos(phi), math.sin(phi)])
    max_trunk = policy.max_trunk_angle + stance.trunk_angle_adjustment

    A = seg.torso + offset.vertical
    B = offset.horizontal
    R = math.hypot(A, B)

    max_ankle = body.mobility.max_ankle_dorsiflexion
    alpha = max_ankle
    for _ in range(policy.max_iterations):
        if alpha < policy.min_ankle_dorsiflexion:
            break

        a = math.radians(alpha)
        knee = np.array([seg.tibia * math.sin(a), seg.tibia * math.cos(a)])
        hip = knee - femur * thigh

        ratio = -hip[0] / R
        if abs(ratio) <= 1.0:
            theta = math.asin(ratio) - math.atan2(B, A)
            theta_deg = math.degrees(theta)
            if policy.min_trunk_angle <= theta_deg <= max_trunk:
                return _solved(body, offset, stance.rom_multiplier, alpha, knee, hip, theta,
                               mobility_limited=alpha < max_ankle)

        alpha -= policy.ankle_step

    logger.info(
        "No balanced %s squat for height %.3f m within ankle range %.1f..%.1f deg; using fallback",
        variant.value, seg.height, policy.min_ankle_dorsiflexion, max_ankle,
    )
    return _fallback(body, policy)


def squat_range_of_motion(
    body: BodyModel,
    variant: Variant = None,
    options: MovementOptions = DEFAULT_MOVEMENT_OPTIONS,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> float:
    return solve_squat(body, variant, options, policy).displacement


def _solved(body, offset, rom_multiplier, alpha, knee, hip, theta, mobility_limited):
    seg = body.segments
    ankle = np.zeros(2)
    shoulder = hip + seg.torso * np.array([math.sin(theta), math.cos(theta)])
    bar = shoulder + rotate_trunk_offset(offset.horizontal, offset.vertical, theta)

    # Standing: trunk vertical, so the rotated offset is just (h, v)
    standing_bar_y = body.derived.hip_height + seg.torso + offset.vertical
    displacement = (standing_bar_y - bar[1]) * rom_multiplier

    angles = JointAngles(
        ankle=alpha,
        knee=math.degrees(math.atan2(knee[0], knee[1])),
        hip=math.degrees(theta),
        trunk=math.degrees(theta),
    )
    return KinematicSolution(
        positions=JointPositions(
            ankle=Point2D.from_array(ankle),
            knee=Point2D.from_array(knee),
            hip=Point2D.from_array(hip),
            shoulder=Point2D.from_array(shoulder),
            bar=Point2D.from_array(bar),
        ),
        angles=angles,
        moment_arms=MomentArms(
            hip=float(abs(bar[0] - hip[0])),
            knee=float(abs(bar[0] - knee[0])),
        ),
        displacement=float(displacement),
        valid=True,
        mobility_limited=bool(mobility_limited),
    )


def _fallback(body: BodyModel, policy: SolverPolicy) -> KinematicSolution:
    estimate = policy.fallback_moment_arm_ratio * body.segments.femur
    return KinematicSolution(
        positions=ZERO_POSITIONS,
        angles=ZERO_ANGLES,
        moment_arms=MomentArms(hip=estimate, knee=estimate),
        displacement=policy.fallback_displacement_ratio * body.segments.height,
        valid=False,
        mobility_limited=True,
    )
