from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Optional
from loguru import logger
import os

from physics.config import load_config
from physics.estimator import estimate
from physics.impact import resolve
from physics.models import ImpactResult, InvalidInputError, PixelObservation, TrajectorySample
from physics.predictor import predict
from decision.engine import DecisionEngine
from decision.models import DeliveryAnalysis, DeliveryReport, ExternalSummary

app = FastAPI(title="CricTrack 3D API", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# REQUEST MODELS
# ============================================================================

class PredictRequest(BaseModel):
    history: List[TrajectorySample]
    horizon: Optional[float] = Field(None, gt=0, description="Seconds to extrapolate")
    step: Optional[float] = Field(None, gt=0, description="Integration step in seconds")


class ResolveRequest(BaseModel):
    path: List[TrajectorySample]


class ReviewRequest(BaseModel):
    samples: List[TrajectorySample]


class ObservationsRequest(BaseModel):
    observations: List[PixelObservation]


class SimulateRequest(BaseModel):
    seed: Optional[int] = None


# ============================================================================
# API ENDPOINTS
# ============================================================================

config = load_config(os.environ.get("CRICTRACK_CONFIG", "crictrack.yaml"))
decision_engine = DecisionEngine(config)
target = config.target_volume()


@app.get("/")
async def root():
    return {
        "message": "CricTrack 3D API",
        "version": "1.0.0",
        "endpoints": [
            "/estimate", "/predict", "/resolve", "/review",
            "/review/observations", "/review/summary", "/simulate",
            "/report", "/health",
        ],
    }


@app.post("/estimate", response_model=TrajectorySample)
async def estimate_position(observation: PixelObservation):
    try:
        return estimate(
            observation.pixel_x, observation.pixel_y,
            observation.frame_width, observation.frame_height,
            observation.timestamp, config,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/predict", response_model=List[TrajectorySample])
async def predict_trajectory(request: PredictRequest):
    """Extrapolate a tracked ball; fewer than two samples give an empty list"""
    try:
        return predict(request.history, request.horizon, request.step, config)
    except Exception as e:
        logger.exception("Prediction failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/resolve", response_model=ImpactResult)
async def resolve_impact(request: ResolveRequest):
    try:
        return resolve(request.path, target)
    except Exception as e:
        logger.exception("Impact resolution failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/review", response_model=DeliveryAnalysis)
async def review_track(request: ReviewRequest):
    try:
        return decision_engine.review_track(request.samples)
    except Exception as e:
        logger.exception("Review failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/review/observations", response_model=DeliveryAnalysis)
async def review_observations(request: ObservationsRequest):
    try:
        return decision_engine.review_observations(request.observations)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception("Review failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/review/summary", response_model=DeliveryAnalysis)
async def review_summary(summary: ExternalSummary):
    try:
        return decision_engine.review_summary(summary)
    except Exception as e:
        logger.exception("Review of external summary failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/simulate", response_model=DeliveryAnalysis)
async def simulate_delivery(request: Optional[SimulateRequest] = None):
    """Random plausible delivery, used when no analysis is available"""
    try:
        seed = request.seed if request is not None else None
        return decision_engine.review_simulated(seed)
    except Exception as e:
        logger.exception("Simulation failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/report", response_model=DeliveryReport)
async def build_report(analysis: DeliveryAnalysis):
    try:
        return decision_engine.build_report(analysis)
    except Exception as e:
        logger.exception("Report failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/health")
async def health_check():
    return {"status": "healthy", "decision_engine": "operational"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
