import numpy as np
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from .config import DEFAULT_CONFIG, PhysicsConfig
from .estimator import estimate
from .impact import find_pitch_point, resolve
from .models import (
    BallState,
    DeliveryParameters,
    ImpactResult,
    InvalidInputError,
    PixelObservation,
    TargetVolume,
    TrajectorySample,
    Vector3,
)
from .predictor import bounce, estimate_velocity, predict

KMH_PER_MS = 3.6


class PhysicsEngine:
    """Binds a pitch configuration to the estimator, predictor and resolver."""

    def __init__(self, config: PhysicsConfig = DEFAULT_CONFIG):
        self.config = config
        self.target: TargetVolume = config.target_volume()

    def reconstruct(self, observations: Sequence[PixelObservation]) -> List[TrajectorySample]:
        """Estimate every observation and return the samples ordered by time."""
        samples = sorted(
            (
                estimate(
                    obs.pixel_x, obs.pixel_y,
                    obs.frame_width, obs.frame_height,
                    obs.timestamp, self.config,
                )
                for obs in observations
            ),
            key=lambda s: s.t,
        )
        for a, b in zip(samples, samples[1:]):
            if a.t == b.t:
                raise InvalidInputError(f"Duplicate timestamp {a.t} in observations")
        return samples

    def predict(
        self,
        history: Sequence[TrajectorySample],
        horizon: Optional[float] = None,
        step: Optional[float] = None,
    ) -> List[TrajectorySample]:
        return predict(history, horizon, step, self.config)

    def resolve(self, path: Sequence[TrajectorySample]) -> ImpactResult:
        return resolve(path, self.target)

    def track(
        self,
        samples: Sequence[TrajectorySample],
        horizon: Optional[float] = None,
        step: Optional[float] = None,
    ) -> Tuple[List[TrajectorySample], ImpactResult]:
        """Extrapolate a tracked ball and resolve observed + predicted path."""
        observed = list(samples)
        predicted = self.predict(observed, horizon, step)
        return predicted, self.resolve(observed + predicted)

    def pitch_point(self, path: Sequence[TrajectorySample]) -> Optional[Vector3]:
        return find_pitch_point(path, self.target, self.config.pitch_ground_tolerance)

    def delivery_speed_kmh(self, samples: Sequence[TrajectorySample]) -> Optional[float]:
        velocity = estimate_velocity(list(samples))
        if velocity is None:
            return None
        return velocity.norm() * KMH_PER_MS

    def simulate_delivery(self, params: DeliveryParameters) -> List[TrajectorySample]:
        """
        Back-construct a full delivery from release to the stumps.

        The ball leaves the bowler's hand at ``release_height``, lands at
        ``pitch_z`` and reaches ``target_x`` at the stumps. Used to give an
        externally decided delivery a path to draw; it never feeds the verdict
        of that delivery.
        """
        cfg = self.config
        g = cfg.gravity

        # 1. Timing from delivery speed
        duration = cfg.course_length / (params.speed_kmh / KMH_PER_MS)
        frames = cfg.synthetic_frames
        dt = duration / frames

        # 2. Velocities that reach the stumps and pitch at pitch_z
        vz = cfg.course_length / duration
        vx = (params.target_x - params.release_x) / duration
        # 0 = h + vy*tb - 0.5*g*tb^2
        t_bounce = params.pitch_z / vz
        vy = (0.5 * g * t_bounce**2 - cfg.release_height) / t_bounce

        state = BallState(
            x=params.release_x, y=cfg.release_height, z=0,
            vx=vx, vy=vy, vz=vz,
        )

        trajectory = []
        for i in range(frames + 1):
            trajectory.append(TrajectorySample(x=state.x, y=state.y, z=state.z, t=i * dt))

            # 3. Explicit Euler step
            state.x += state.vx * dt
            state.z += state.vz * dt
            state.y += state.vy * dt
            state.vy -= g * dt

            if state.z < cfg.course_length:
                state.y, state.vy = bounce(state.y, state.vy, cfg.synthetic_restitution)

        return trajectory

    def sample_delivery_parameters(self, rng: Optional[np.random.Generator] = None) -> DeliveryParameters:
        """Random but plausible delivery for when no analysis is available."""
        rng = rng if rng is not None else np.random.default_rng()
        speed_kmh = self.config.course_length / self.config.fallback_delivery_duration * KMH_PER_MS

        params = DeliveryParameters(
            speed_kmh=float(speed_kmh),
            release_x=float(rng.uniform(-0.1, 0.1)),
            target_x=float(rng.uniform(-0.2, 0.2)),
            pitch_z=self.config.course_length * 0.6,
        )
        logger.debug("Sampled fallback delivery {}", params)
        return params
