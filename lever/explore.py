# lever/explore.py
"""
EXPLORE: TABLES OVER BODIES AND VARIANTS
========================================

PURPOSE:
--------
Thin pandas layer over the core API for "what if" questions: how does squat
ROM grow with height, which bench setup is shortest for this lifter, what
does a comparison look like as two rows side by side.

Rows are plain dicts of the input parameters plus the LiftMetrics fields,
so the frames can go straight to CSV or into a notebook.
"""

import logging
from dataclasses import asdict
from typing import Dict, Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from .anthropometry import build_body_model
from .config import DEFAULT_SOLVER_POLICY, SolverPolicy
from .kinematics import solve_kinematics
from .kinematics.variants import parse_movement, variant_key
from .model import (
    BodyModel,
    ComparisonResult,
    Movement,
    MovementOptions,
    SDModifiers,
    Sex,
    Variant,
)
from .physics import metrics_from_solution

logger = logging.getLogger(__name__)


def evaluate_lift(
    body: BodyModel,
    movement: Union[str, Movement],
    variant: Variant = None,
    load_kg: float = 0.0,
    reps: int = 1,
    options: Optional[MovementOptions] = None,
    policy: SolverPolicy = DEFAULT_SOLVER_POLICY,
) -> Dict:
    """One flat row: body, setup, kinematic summary and metrics."""
    movement = parse_movement(movement)
    solution = solve_kinematics(body, movement, variant, options, policy)
    metrics = metrics_from_solution(body, movement, variant, solution, load_kg, reps)
    row = {
        "height": body.height,
        "mass": body.mass,
        "sex": body.sex.value,
        "movement": movement.value,
        "variant": variant_key(movement, variant),
        "load_kg": load_kg,
        "reps": reps,
        "valid": solution.valid,
        "mobility_limited": solution.mobility_limited,
        "trunk_angle": solution.angles.trunk,
        "hip_moment_arm": solution.moment_arms.hip,
        "knee_moment_arm": solution.moment_arms.knee,
    }
    row.update(asdict(metrics))
    return row


def sweep_heights(
    heights: Iterable[float],
    movement: Union[str, Movement],
    variant: Variant = None,
    sex: Union[str, Sex] = Sex.MALE,
    bmi: float = 24.7,
    load_kg: float = 0.0,
    reps: int = 1,
    modifiers: Optional[SDModifiers] = None,
    options: Optional[MovementOptions] = None,
) -> pd.DataFrame:
    """
    Evaluate one lift across statures with proportional mass (mass = bmi × h²).

    Returns:
        DataFrame, one row per height (sorted by height)
    """
    rows = []
    for h in sorted(float(h) for h in heights):
        body = build_body_model(h, bmi * h ** 2, sex, modifiers)
        rows.append(evaluate_lift(body, movement, variant, load_kg, reps, options))
    logger.debug("Swept %d heights for %s", len(rows), movement)
    return pd.DataFrame(rows)


def variant_table(
    body: BodyModel,
    movement: Union[str, Movement],
    variants: Iterable[Variant],
    load_kg: float = 0.0,
    reps: int = 1,
    options: Optional[MovementOptions] = None,
) -> pd.DataFrame:
    """Same body, several variants; adds displacement relative to the first row."""
    df = pd.DataFrame([evaluate_lift(body, movement, v, load_kg, reps, options) for v in variants])
    if not df.empty:
        df["relative_displacement"] = df["displacement"] / df["displacement"].iloc[0]
    return df


def comparison_frame(result: ComparisonResult) -> pd.DataFrame:
    """Two rows (A, B) with the headline numbers of a comparison."""
    rows: List[Dict] = []
    for side, outcome in (("A", result.lifter_a), ("B", result.lifter_b)):
        row = {
            "side": side,
            "name": outcome.name,
            "height": outcome.body.height,
            "mass": outcome.body.mass,
            "valid": outcome.kinematics.valid,
            "hip_moment_arm": outcome.kinematics.moment_arms.hip,
        }
        row.update(asdict(outcome.metrics))
        rows.append(row)

    df = pd.DataFrame(rows).set_index("side")
    base = df.loc["A", "demand_factor"]
    df["demand_vs_A"] = df["demand_factor"] / base if base > 0 else np.nan
    return df
