# File: tests/test_explore.py
"""
Test the explore.py tables.

WHY THESE TESTS?
---------------
1. Sweeps must produce one row per input, in height order
2. Trends the core guarantees (ROM grows with height) must show up in the frame
3. Frames must carry enough columns to go straight to CSV
"""

import numpy as np
import pandas as pd
import pytest

from lever import Lifter, Performance, build_body_model, compare_lifters
from lever.explore import comparison_frame, evaluate_lift, sweep_heights, variant_table


def test_evaluate_lift_row():
    body = build_body_model(1.8, 80, "male")
    row = evaluate_lift(body, "squat", None, 100, 5)

    assert row["variant"] == "highBar"
    assert row["movement"] == "squat"
    assert row["valid"]
    assert row["total_work"] == pytest.approx(5 * row["work_per_rep"])
    assert row["vpi"] is None


def test_sweep_heights_sorted_and_monotonic():
    """
    WHAT IS THIS TEST?
    ==================
    Sweep squat ROM over unsorted heights with proportional mass.

    WHY DOES THIS MATTER?
    ====================
    Tall lifters move the bar further: a sweep that does not show that
    means the body builder or the solver regressed.
    """
    df = sweep_heights([1.9, 1.6, 1.7, 2.0, 1.8], "squat", "highBar", load_kg=100, reps=5)

    assert isinstance(df, pd.DataFrame)
    assert len(df) == 5
    assert df["height"].is_monotonic_increasing
    assert df["displacement"].is_monotonic_increasing
    assert df["total_work"].is_monotonic_increasing
    assert np.allclose(df["mass"], 24.7 * df["height"] ** 2)
    print(df[["height", "displacement", "demand_factor"]])


def test_sweep_female_deadlift():
    df = sweep_heights([1.55, 1.65, 1.75], "deadlift", "sumo", sex="female", bmi=22.0)
    assert set(df["sex"]) == {"female"}
    assert set(df["variant"]) == {"sumo"}


def test_variant_table_relative_displacement():
    body = build_body_model(1.8, 80, "male")
    df = variant_table(body, "bench", ["narrow-flat", "medium-flat", "wide-extreme"], load_kg=100)

    assert list(df["variant"]) == ["narrow-flat", "medium-flat", "wide-extreme"]
    assert df["relative_displacement"].iloc[0] == 1.0
    assert df["relative_displacement"].is_monotonic_decreasing


def test_variant_table_empty():
    body = build_body_model(1.8, 80, "male")
    assert variant_table(body, "squat", []).empty


def test_comparison_frame():
    a = Lifter(build_body_model(1.7, 70, "male"), "Alex")
    b = Lifter(build_body_model(1.9, 90, "male"), "Blake")
    result = compare_lifters(a, b, "squat", "highBar", "highBar", Performance(100, 5))
    df = comparison_frame(result)

    assert list(df.index) == ["A", "B"]
    assert list(df["name"]) == ["Alex", "Blake"]
    assert df.loc["A", "demand_vs_A"] == 1.0
    assert df.loc["B", "demand_vs_A"] == pytest.approx(result.demand_ratio)
