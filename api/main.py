# api/main.py
"""
FastAPI backend for LEVER - exposes the lever engine as a REST API.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from dataclasses import asdict
import sys
from pathlib import Path
import io

# Add project root to path to import lever
sys.path.insert(0, str(Path(__file__).parent.parent))

from lever import (
    ComparisonOptions,
    InputValidationError,
    Lifter,
    MobilityProfile,
    MovementOptions,
    Performance,
    SDModifiers,
    SquatStance,
    SumoStance,
    build_body_model,
    compare_cross_lift,
    compare_lifters,
    compute_lift_metrics,
    sample_poses,
    solve_kinematics,
)
from lever.explore import sweep_heights
from lever.kinematics.variants import coerce_enum


app = FastAPI(
    title="LEVER API",
    description="Lifting biomechanics: body models, kinematics, work and comparisons",
    version="0.1.0"
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InputValidationError)
async def input_validation_handler(request: Request, exc: InputValidationError):
    return JSONResponse(status_code=422, content={"errors": list(exc.errors)})


# =============================================================================
# Request/Response Models
# =============================================================================

class ModifiersIn(BaseModel):
    """Limb-group deviations (SD)."""
    arms: float = 0.0
    legs: float = 0.0
    torso: float = 0.0


class MobilityIn(BaseModel):
    """Joint range limits (degrees)."""
    max_ankle_dorsiflexion: float = 30.0
    max_hip_flexion: float = 130.0
    max_shoulder_flexion: float = 165.0


class BodyIn(BaseModel):
    """Body inputs; range checks happen in the engine so every message is reported."""
    height_m: float = Field(..., description="Standing height (m)")
    mass_kg: float = Field(..., description="Body mass (kg)")
    sex: str = Field("male", description="male / female")
    modifiers: Optional[ModifiersIn] = Field(None, description="Omit for simple mode")
    mobility: Optional[MobilityIn] = None


class SetupIn(BaseModel):
    """Stance and bar height options."""
    squat_stance: str = "normal"
    sumo_stance: str = "normal"
    bar_offset_m: float = Field(0.0, description="Deadlift: negative = deficit, positive = blocks")


class LiftIn(BaseModel):
    body: BodyIn
    movement: str
    variant: Optional[str] = None
    load_kg: float = 0.0
    reps: int = 1
    setup: SetupIn = SetupIn()


class PoseIn(BaseModel):
    body: BodyIn
    movement: str
    variant: Optional[str] = None
    phases: List[float] = [0.0, 0.1, 0.25, 0.5, 0.75, 0.9, 1.0]
    setup: SetupIn = SetupIn()


class CompareIn(BaseModel):
    lifter_a: BodyIn
    lifter_b: BodyIn
    name_a: Optional[str] = None
    name_b: Optional[str] = None
    movement: str
    variant_a: Optional[str] = None
    variant_b: Optional[str] = None
    load_a: float = 0.0
    reps_a: int = 1
    load_b: Optional[float] = None
    reps_b: Optional[int] = None
    setup_a: SetupIn = SetupIn()
    setup_b: SetupIn = SetupIn()


class CrossLiftIn(BaseModel):
    body: BodyIn
    movement: str
    variant_a: Optional[str] = None
    variant_b: Optional[str] = None
    load_kg: float = 0.0


class SweepIn(BaseModel):
    heights: List[float] = Field(..., min_length=1)
    movement: str
    variant: Optional[str] = None
    sex: str = "male"
    load_kg: float = 0.0
    reps: int = 1


class MetricsOut(BaseModel):
    """Work and demand for one set."""
    displacement: float
    effective_mass: float
    work_per_rep: float
    total_work: float
    demand_factor: float
    score_p4p: float
    vpi: Optional[float] = None


# =============================================================================
# Conversion
# =============================================================================

def to_body(data: BodyIn):
    modifiers = SDModifiers(**data.modifiers.model_dump()) if data.modifiers else None
    mobility = MobilityProfile(**data.mobility.model_dump()) if data.mobility else None
    return build_body_model(data.height_m, data.mass_kg, data.sex, modifiers, mobility)


def to_options(data: SetupIn) -> MovementOptions:
    return MovementOptions(
        squat_stance=coerce_enum(SquatStance, data.squat_stance, "squat stance"),
        sumo_stance=coerce_enum(SumoStance, data.sumo_stance, "sumo stance"),
        bar_offset_m=data.bar_offset_m,
    )


def to_json(record) -> Dict[str, Any]:
    """Dataclass → JSON-ready dict (str enums serialize as their values)."""
    return asdict(record)


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "LEVER API"}


@app.post("/api/body")
async def body(data: BodyIn):
    """Build a body model."""
    return to_json(to_body(data))


@app.post("/api/kinematics")
async def kinematics(data: LiftIn):
    """Solve a movement's limiting position."""
    solution = solve_kinematics(to_body(data.body), data.movement, data.variant, to_options(data.setup))
    return to_json(solution)


@app.post("/api/metrics", response_model=MetricsOut)
async def metrics(data: LiftIn):
    """Work, demand and scores for one set."""
    result = compute_lift_metrics(
        to_body(data.body), data.movement, data.variant,
        data.load_kg, data.reps, to_options(data.setup),
    )
    return MetricsOut(**asdict(result))


@app.post("/api/compare")
async def compare(data: CompareIn):
    """Compare two lifters on one movement."""
    perf_a = Performance(data.load_a, data.reps_a)
    perf_b = None
    if data.load_b is not None or data.reps_b is not None:
        perf_b = Performance(
            data.load_a if data.load_b is None else data.load_b,
            data.reps_a if data.reps_b is None else data.reps_b,
        )
    result = compare_lifters(
        Lifter(to_body(data.lifter_a), data.name_a),
        Lifter(to_body(data.lifter_b), data.name_b),
        data.movement,
        data.variant_a,
        data.variant_b,
        perf_a,
        perf_b,
        ComparisonOptions(lifter_a=to_options(data.setup_a), lifter_b=to_options(data.setup_b)),
    )
    return to_json(result)


@app.post("/api/cross-lift")
async def cross_lift(data: CrossLiftIn):
    """Same lifter, two variants: equivalent load."""
    result = compare_cross_lift(
        to_body(data.body), data.movement, data.variant_a, data.variant_b, data.load_kg
    )
    return to_json(result)


@app.post("/api/poses")
async def poses(data: PoseIn):
    """Stick-figure poses across a rep."""
    results = sample_poses(
        to_body(data.body), data.movement, data.variant, data.phases, to_options(data.setup)
    )
    return {"poses": [to_json(r) for r in results]}


@app.post("/api/export/csv")
async def export_csv(data: SweepIn):
    """Export a height sweep as CSV."""
    df = sweep_heights(
        data.heights, data.movement, data.variant, sex=data.sex,
        load_kg=data.load_kg, reps=data.reps,
    )
    output = io.StringIO()
    df.to_csv(output, index=False)
    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=lever_sweep.csv"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
