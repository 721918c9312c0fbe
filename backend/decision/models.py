from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from physics.models import ImpactResult, TrajectorySample, Vector3


class PitchPoint(BaseModel):
    x: float = Field(..., description="Lateral position where the ball pitched (m)")
    z: float = Field(..., description="Distance down the pitch where the ball pitched (m)")


class Reference(BaseModel):
    title: str = "Reference"
    url: str


class ExternalSummary(BaseModel):
    """Verdict produced outside the engine, e.g. by a video analysis model."""
    model_config = ConfigDict(populate_by_name=True)

    is_hit: bool = Field(..., alias="isHit")
    part_hit: str = Field(..., alias="partHit", description="off, middle, leg, bails or missing")
    speed_kmh: float = Field(..., alias="speedKmh", gt=0)
    pitch: PitchPoint
    impact: Vector3
    reasoning: str = ""
    references: List[Reference] = Field(default_factory=list)


class AnalysisSource(str, Enum):
    TRACKED = "tracked"
    EXTERNAL = "external"
    SIMULATED = "simulated"


class DeliveryAnalysis(BaseModel):
    source: AnalysisSource
    observed: List[TrajectorySample]
    predicted: List[TrajectorySample]
    impact: ImpactResult
    speed_kmh: Optional[float] = None
    pitch_point: Optional[Vector3] = None
    reasoning: Dict[str, str] = Field(default_factory=dict)


class ReportMetadata(BaseModel):
    timestamp: str
    pitch_length: float
    speed_kmh: Optional[float]
    verdict: str
    zone: str
    part_hit: str
    impact_point: Optional[Vector3]
    source: AnalysisSource
    reasoning: Dict[str, str]


class DeliveryReport(BaseModel):
    metadata: ReportMetadata
    trajectory: List[TrajectorySample]
    predictions: List[TrajectorySample]
