"""
Projectile extrapolation of a tracked ball.

Velocity comes from the last two samples only. That keeps the model local and
cheap, but a single noisy detection shifts the whole prediction; smoothing is
left to whoever produces the samples.
"""
from typing import List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from .config import DEFAULT_CONFIG, PhysicsConfig
from .models import BallState, TrajectorySample, Vector3

# Absorbs float error so that horizon / step whole numbers emit exactly that many samples
_TIME_EPSILON = 1e-9


def bounce(y: float, vy: float, restitution: float) -> Tuple[float, float]:
    """Reflect a below-ground height and reverse-and-damp the vertical speed."""
    if y < 0:
        return -y * restitution, -vy * restitution
    return y, vy


def estimate_velocity(history: Sequence[TrajectorySample]) -> Optional[Vector3]:
    """Two-point finite difference between the last two samples."""
    if len(history) < 2:
        return None
    last, prev = history[-1], history[-2]
    dt = last.t - prev.t
    if dt <= 0:
        return None
    components = ((last.x - prev.x) / dt, (last.y - prev.y) / dt, (last.z - prev.z) / dt)
    if not np.all(np.isfinite(components)):
        return None
    vx, vy, vz = components
    return Vector3(x=vx, y=vy, z=vz)


def _strictly_increasing(history: Sequence[TrajectorySample]) -> bool:
    return all(b.t > a.t for a, b in zip(history, history[1:]))


def predict(
    history: Sequence[TrajectorySample],
    horizon: Optional[float] = None,
    step: Optional[float] = None,
    config: PhysicsConfig = DEFAULT_CONFIG,
    restitution: Optional[float] = None,
) -> List[TrajectorySample]:
    """
    Extrapolate the ball past the last observed sample.

    Returns a fresh list of samples strictly after ``history[-1].t``. Fewer
    than two samples, or timestamps that do not strictly increase, give an
    empty list.
    """
    history = list(history)
    horizon = config.default_horizon if horizon is None else horizon
    step = config.default_step if step is None else step
    restitution = config.prediction_restitution if restitution is None else restitution

    if len(history) < 2 or not _strictly_increasing(history):
        logger.debug("Cannot extrapolate from {} samples", len(history))
        return []
    if step <= 0 or horizon <= 0:
        return []

    velocity = estimate_velocity(history)
    if velocity is None:
        logger.debug("Velocity overflows, not extrapolating")
        return []
    last = history[-1]
    state = BallState(
        x=last.x, y=last.y, z=last.z,
        vx=velocity.x, vy=velocity.y, vz=velocity.z,
    )
    z_limit = config.course_length + config.overshoot_margin

    predictions: List[TrajectorySample] = []
    k = 0
    while state.z < z_limit:
        k += 1
        if k * step > horizon + _TIME_EPSILON:
            break

        state.x += state.vx * step
        state.z += state.vz * step

        # Vertical motion under gravity
        state.vy -= config.gravity * step
        state.y += state.vy * step
        state.y, state.vy = bounce(state.y, state.vy, restitution)

        t = last.t + k * step
        if not np.all(np.isfinite((state.x, state.y, state.z, state.vx, state.vy, state.vz, t))):
            break

        predictions.append(TrajectorySample(
            x=state.x, y=state.y, z=state.z,
            t=t,
            velocity=Vector3(x=state.vx, y=state.vy, z=state.vz),
        ))

    return predictions
