"""Shared fixtures for the CricTrack test suite."""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import List

import pytest

_BACKEND = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND) not in sys.path:
    sys.path.insert(0, str(_BACKEND))

from physics.config import PhysicsConfig
from physics.models import TargetVolume, TrajectorySample


SUMMARY_JSON = json.dumps({
    "isHit": True,
    "partHit": "off",
    "speedKmh": 132.5,
    "pitch": {"x": 0.1, "z": 14.0},
    "impact": {"x": 0.09, "y": 0.45, "z": 20.12},
    "reasoning": "Pitched in line and straightened onto off stump.",
    "references": [{"title": "Laws of Cricket", "url": "https://www.lords.org/mcc/the-laws"}],
})


def sample(x: float, y: float, z: float, t: float) -> TrajectorySample:
    return TrajectorySample(x=x, y=y, z=z, t=t)


@pytest.fixture
def default_config() -> PhysicsConfig:
    return PhysicsConfig()


@pytest.fixture
def wicket(default_config: PhysicsConfig) -> TargetVolume:
    return default_config.target_volume()


@pytest.fixture
def release_history() -> List[TrajectorySample]:
    """Two samples just after release, moving 20 m/s down the pitch."""
    return [sample(0.0, 2.2, 0.0, 0.0), sample(0.02, 2.0, 1.0, 0.05)]


@pytest.fixture
def straight_history() -> List[TrajectorySample]:
    """A ball on middle stump that stays below stump height."""
    return [sample(0.0, 0.5, 0.0, 0.0), sample(0.0, 0.5, 1.0, 0.05)]
