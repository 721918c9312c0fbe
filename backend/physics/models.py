from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from dataclasses import dataclass
import numpy as np


class InvalidInputError(ValueError):
    """Raised when an observation cannot be turned into a finite sample."""


@dataclass
class BallState:
    x: float = 0; y: float = 0; z: float = 0
    vx: float = 0; vy: float = 0; vz: float = 0


class Vector3(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    x: float  # lateral (m), off side positive
    y: float  # height above ground (m)
    z: float  # distance from release along the pitch (m)

    def norm(self) -> float:
        return float(np.sqrt(self.x**2 + self.y**2 + self.z**2))


class TrajectorySample(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    x: float
    y: float
    z: float
    t: float  # seconds since release
    velocity: Optional[Vector3] = None

    @property
    def position(self) -> Vector3:
        return Vector3(x=self.x, y=self.y, z=self.z)


class PixelObservation(BaseModel):
    pixel_x: float
    pixel_y: float
    frame_width: float
    frame_height: float
    timestamp: float


class TargetVolume(BaseModel):
    """
    Axis-aligned box around the wicket, including the bails band on top.

    The box alone is not enough to classify a strike, so the volume also
    carries the stump radius (hit tolerance), the bails band height and the
    proximity tolerance used for stump classification.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    min: Vector3
    max: Vector3
    element_radius: float = Field(..., ge=0)
    clearance_height: float = Field(..., ge=0)
    zone_tolerance: float = Field(..., ge=0)

    @property
    def plane_z(self) -> float:
        return (self.min.z + self.max.z) / 2

    @property
    def center_x(self) -> float:
        return (self.min.x + self.max.x) / 2

    @property
    def half_width(self) -> float:
        return (self.max.x - self.min.x) / 2

    @property
    def physical_height(self) -> float:
        return self.max.y - self.clearance_height


class ImpactZone(str, Enum):
    LEFT = "Left"
    CENTER = "Center"
    RIGHT = "Right"
    TOP = "Top"
    NONE = "None"


class ImpactResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_hit: bool
    impact_point: Optional[Vector3] = None
    zone: ImpactZone = ImpactZone.NONE


class DeliveryParameters(BaseModel):
    """Inputs of the synthetic delivery generator."""
    speed_kmh: float = Field(..., gt=0, description="Delivery speed in km/h")
    release_x: float = Field(0, description="Lateral release position (m)")
    target_x: float = Field(0, description="Lateral position at the stumps (m)")
    pitch_z: float = Field(..., gt=0, description="Where the ball pitches along the pitch (m)")
