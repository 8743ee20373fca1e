# File: tests/test_physics.py
"""
Test the work / demand calculator.

WHY THESE TESTS?
---------------
1. Work is g · d · m: check each factor lands where it should
2. Each family moves a different share of body mass
3. The demand factor must ignore load entirely
"""

import numpy as np
import pytest

from lever import (
    InputValidationError,
    build_body_model,
    compute_lift_metrics,
    range_of_motion,
    solve_kinematics,
)
from lever.constants import ALLOMETRIC_EXPONENT, GRAVITY


@pytest.fixture
def body():
    return build_body_model(1.8, 80, "male")


def test_squat_work(body):
    """
    WHAT IS THIS TEST?
    ==================
    100 kg × 5 high-bar squats for a 1.80 m / 80 kg male.

    effective mass = 100 + 0.50 × 80 = 140 kg
    work per rep   = 9.81 × displacement × 140
    total          = 5 × work per rep
    """
    m = compute_lift_metrics(body, "squat", "highBar", 100, 5)
    d = range_of_motion(body, "squat", "highBar")

    assert m.displacement == d
    assert m.effective_mass == pytest.approx(140.0)
    assert m.work_per_rep == pytest.approx(GRAVITY * d * 140.0)
    assert m.total_work == pytest.approx(5 * m.work_per_rep)
    assert m.score_p4p == pytest.approx(m.total_work / 80 ** ALLOMETRIC_EXPONENT)
    assert m.vpi is None
    print(f"✓ Squat: {m.work_per_rep:.1f} J/rep, {m.total_work:.1f} J total")


@pytest.mark.parametrize("movement,fraction", [
    ("squat", 0.50), ("deadlift", 0.60), ("bench", 0.0), ("ohp", 0.0),
    ("pullup", 1.0), ("pushup", 0.72), ("thruster", 0.50),
])
def test_effective_mass_by_family(body, movement, fraction):
    m = compute_lift_metrics(body, movement, None, 20, 1)
    assert m.effective_mass == pytest.approx(20 + fraction * 80)


def test_female_fractions():
    female = build_body_model(1.65, 60, "female")
    assert compute_lift_metrics(female, "deadlift", None, 0, 1).effective_mass == pytest.approx(0.608 * 60)
    assert compute_lift_metrics(female, "pushup", None, 0, 1).effective_mass == pytest.approx(0.71 * 60)


def test_squat_demand_is_leverage(body):
    sol = solve_kinematics(body, "squat", "lowBar")
    m = compute_lift_metrics(body, "squat", "lowBar", 140, 3)

    assert m.demand_factor == pytest.approx(sol.moment_arms.hip * np.sqrt(sol.displacement))


def test_demand_ignores_load(body):
    light = compute_lift_metrics(body, "squat", "highBar", 20, 1)
    heavy = compute_lift_metrics(body, "squat", "highBar", 200, 10)
    assert light.demand_factor == heavy.demand_factor


@pytest.mark.parametrize("movement,variant", [
    ("deadlift", "sumo"), ("bench", "narrow-flat"), ("ohp", None), ("pushup", None), ("thruster", None),
])
def test_demand_is_displacement(body, movement, variant):
    m = compute_lift_metrics(body, movement, variant, 50, 1)
    assert m.demand_factor == m.displacement


def test_pullup_grip_and_vpi(body):
    """Pronated grip is the hardest; VPI only exists for pull-ups."""
    sup = compute_lift_metrics(body, "pullup", "supinated", 10, 8)
    pro = compute_lift_metrics(body, "pullup", "pronated", 10, 8)

    assert pro.demand_factor == pytest.approx(sup.demand_factor * 1.15)
    assert sup.effective_mass == pytest.approx(90.0)
    assert pro.vpi == pytest.approx(90 * 1.15 / 80 ** 0.67)
    assert sup.vpi == pytest.approx(90 * 1.0 / 80 ** 0.67)


def test_bench_with_no_load_does_no_work(body):
    m = compute_lift_metrics(body, "bench", "medium-flat", 0, 1)
    assert m.work_per_rep == 0.0
    assert m.displacement > 0


def test_fallback_squat_still_has_demand():
    from lever import MobilityProfile

    stiff = build_body_model(1.8, 80, "male", mobility=MobilityProfile(max_ankle_dorsiflexion=5.0))
    m = compute_lift_metrics(stiff, "squat", "highBar", 100, 1)

    assert m.demand_factor > 0
    assert m.displacement == pytest.approx(0.37 * 1.8)


@pytest.mark.parametrize("load,reps", [(-1, 5), (100, 0), (100, 2.5), (float("nan"), 1)])
def test_bad_performance_rejected(body, load, reps):
    with pytest.raises(InputValidationError):
        compute_lift_metrics(body, "squat", "highBar", load, reps)


def test_metrics_do_not_mutate_body(body):
    before = body
    compute_lift_metrics(body, "deadlift", "sumo", 180, 3)
    assert body == before
