"""Physical constants and tuning values for the delivery engine."""
from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
import yaml

from .models import TargetVolume, Vector3


class PhysicsConfig(BaseModel):
    # Pitch and wicket geometry (meters)
    course_length: float = Field(20.12, gt=0, description="Release crease to stumps.")
    target_height: float = Field(0.711, gt=0, description="Stump height (28 inches).")
    target_width: float = Field(0.2286, gt=0, description="Outer width of the three stumps (9 inches).")
    element_radius: float = Field(0.019, ge=0, description="Stump radius, widens the hit area.")
    clearance_height: float = Field(0.013, ge=0, description="Bails band above the stumps.")
    target_depth: float = Field(0.04, gt=0, description="Depth of the wicket box along the pitch.")
    gravity: float = Field(9.81, gt=0, description="m/s^2")

    # Monocular position heuristic
    nominal_delivery_duration: float = Field(0.5, gt=0, description="Seconds for the ball to reach the stumps.")
    lateral_spread_factor: float = Field(0.1, description="Lateral spread per meter travelled.")
    height_offset: float = Field(0.5)
    height_scale: float = Field(2.0)

    # Bounce softness: continuing a tracked ball vs generating a plausible delivery
    prediction_restitution: float = Field(0.6, ge=0, le=1)
    synthetic_restitution: float = Field(0.75, ge=0, le=1)

    # Prediction
    default_horizon: float = Field(1.0, gt=0, description="Seconds to extrapolate.")
    default_step: float = Field(0.05, gt=0, description="Integration step in seconds.")
    overshoot_margin: float = Field(2.0, ge=0, description="Stop predicting this far past the stumps.")

    # Zone classification
    zone_tolerance_factor: float = Field(1.5, ge=0, description="Multiple of stump radius around each stump line.")

    # Synthetic deliveries
    release_height: float = Field(2.2, gt=0)
    synthetic_frames: int = Field(60, ge=2)
    fallback_delivery_duration: float = Field(0.8, gt=0)
    synthetic_prediction_horizon: float = Field(0.5, gt=0)
    min_pitch_distance: float = Field(1.0, gt=0, description="Shortest pitch length used to draw an external delivery.")

    pitch_ground_tolerance: float = Field(0.1, ge=0, description="Max height for a sample to count as the pitching point.")

    def target_volume(self) -> TargetVolume:
        half_width = self.target_width / 2
        half_depth = self.target_depth / 2
        return TargetVolume(
            min=Vector3(x=-half_width, y=0, z=self.course_length - half_depth),
            max=Vector3(
                x=half_width,
                y=self.target_height + self.clearance_height,
                z=self.course_length + half_depth,
            ),
            element_radius=self.element_radius,
            clearance_height=self.clearance_height,
            zone_tolerance=self.element_radius * self.zone_tolerance_factor,
        )


DEFAULT_CONFIG = PhysicsConfig()


def load_config(path: Path | str) -> PhysicsConfig:
    """Load configuration from YAML, falling back to defaults when missing."""

    cfg_path = Path(path)
    if not cfg_path.exists():
        return PhysicsConfig()
    data = yaml.safe_load(cfg_path.read_text()) or {}
    return PhysicsConfig.model_validate(data)
