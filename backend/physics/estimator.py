"""
Monocular 2D -> 3D position heuristic.

This is not a calibrated projective reconstruction. It assumes a camera behind
the bowler, a fixed pitch length and a fixed nominal delivery duration:
distance down the pitch comes from elapsed time alone, lateral spread grows
with that distance, and height is read straight off the vertical pixel offset.
A production system would replace it with camera calibration matrices.
"""
import numpy as np

from .config import DEFAULT_CONFIG, PhysicsConfig
from .models import InvalidInputError, TrajectorySample


def estimate(
    pixel_x: float,
    pixel_y: float,
    frame_width: float,
    frame_height: float,
    timestamp: float,
    config: PhysicsConfig = DEFAULT_CONFIG,
) -> TrajectorySample:
    values = (pixel_x, pixel_y, frame_width, frame_height, timestamp)
    if not np.all(np.isfinite(values)):
        raise InvalidInputError(f"Non-finite observation: {values}")
    if frame_width <= 0 or frame_height <= 0:
        raise InvalidInputError(f"Invalid frame size: {frame_width}x{frame_height}")
    if not (0 <= pixel_x <= frame_width and 0 <= pixel_y <= frame_height):
        raise InvalidInputError(
            f"Pixel ({pixel_x}, {pixel_y}) outside {frame_width}x{frame_height} frame"
        )
    if timestamp < 0:
        raise InvalidInputError(f"Invalid timestamp: {timestamp}. Must be non-negative.")

    # Normalized coordinates (-1 to 1), image rows grow downward
    nx = (pixel_x / frame_width) * 2 - 1
    ny = 1 - (pixel_y / frame_height) * 2

    z = (timestamp / config.nominal_delivery_duration) * config.course_length
    x = nx * (z * config.lateral_spread_factor)
    y = (ny + config.height_offset) * config.height_scale

    return TrajectorySample(x=float(x), y=float(y), z=float(z), t=float(timestamp))
