# File: tests/test_api.py
"""
Smoke tests for the REST API.

The engine is tested directly elsewhere; these only check that requests are
translated, results serialize, and validation errors come back as 422.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


BODY = {"height_m": 1.8, "mass_kg": 80, "sex": "male"}


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_body(client):
    data = client.post("/api/body", json=BODY).json()

    assert data["sex"] == "male"
    assert data["mode"] == "simple"
    assert data["segments"]["femur"] == pytest.approx(0.441)


def test_advanced_body(client):
    payload = dict(BODY, modifiers={"legs": 1.0})
    data = client.post("/api/body", json=payload).json()
    assert data["mode"] == "advanced"


def test_kinematics(client):
    response = client.post("/api/kinematics", json={"body": BODY, "movement": "squat", "variant": "lowBar"})
    data = response.json()

    assert response.status_code == 200
    assert data["valid"]
    assert abs(data["positions"]["bar"]["x"]) < 1e-9


def test_metrics(client):
    payload = {"body": BODY, "movement": "pullup", "variant": "pronated", "load_kg": 10, "reps": 8}
    data = client.post("/api/metrics", json=payload).json()

    assert data["effective_mass"] == pytest.approx(90.0)
    assert data["vpi"] is not None


def test_compare(client):
    payload = {
        "lifter_a": {"height_m": 1.7, "mass_kg": 70},
        "lifter_b": {"height_m": 1.9, "mass_kg": 90},
        "name_b": "Blake",
        "movement": "squat",
        "variant_a": "highBar",
        "variant_b": "highBar",
        "load_a": 100,
        "reps_a": 5,
    }
    response = client.post("/api/compare", json=payload)
    data = response.json()

    assert response.status_code == 200
    assert data["advantage_direction"] == "advantage_A"
    assert data["equivalent_reps"] == 5
    assert data["lifter_b"]["name"] == "Blake"
    assert data["explanations"][-1]["type"] == "summary"
    assert data["capacity_adjusted"] is None


def test_cross_lift(client):
    payload = {"body": BODY, "movement": "deadlift", "variant_a": "conventional", "variant_b": "sumo", "load_kg": 200}
    data = client.post("/api/cross-lift", json=payload).json()
    assert data["equivalent_load"] == pytest.approx(200 / 0.85)


def test_poses(client):
    payload = {"body": BODY, "movement": "bench", "variant": "wide-competitive", "phases": [0.0, 1.0]}
    data = client.post("/api/poses", json=payload).json()

    assert len(data["poses"]) == 2
    assert all(p["valid"] for p in data["poses"])


def test_export_csv(client):
    payload = {"heights": [1.6, 1.8], "movement": "deadlift"}
    response = client.post("/api/export/csv", json=payload)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.strip().splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("height,")


def test_bad_bench_variant_is_422(client):
    response = client.post("/api/kinematics", json={"body": BODY, "movement": "bench", "variant": "wide"})

    assert response.status_code == 422
    assert "{grip}-{arch}" in response.json()["errors"][0]


def test_bad_height_is_422(client):
    payload = {"body": {"height_m": 0.3, "mass_kg": 80}, "movement": "squat"}
    response = client.post("/api/metrics", json=payload)

    assert response.status_code == 422
    assert any("Height" in e for e in response.json()["errors"])


def test_bad_stance_is_422(client):
    payload = {"body": BODY, "movement": "squat", "setup": {"squat_stance": "sideways"}}
    assert client.post("/api/kinematics", json=payload).status_code == 422


def test_bad_mobility_is_422(client):
    body = dict(BODY, mobility={"max_ankle_dorsiflexion": 390})
    response = client.post("/api/kinematics", json={"body": body, "movement": "squat"})

    assert response.status_code == 422
    assert "Ankle" in response.json()["errors"][0]
