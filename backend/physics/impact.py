"""
Wicket impact resolution.

The wicket is treated as one box plus three reference lines (off, middle and
leg stump), not as three separate cylinders. A strike above the stumps but
inside the bails band is a bails hit; otherwise the strike is matched to the
off stump, then the leg stump, then the middle stump, and anything in
between counts as middle.
"""
from typing import Optional, Sequence

from loguru import logger

from .models import ImpactResult, ImpactZone, TargetVolume, TrajectorySample, Vector3

NO_IMPACT = ImpactResult(is_hit=False, impact_point=None, zone=ImpactZone.NONE)


def classify_zone(x: float, y: float, target: TargetVolume) -> ImpactZone:
    if y > target.physical_height:
        return ImpactZone.TOP

    off_stump_x = target.center_x + target.half_width
    leg_stump_x = target.center_x - target.half_width
    tol = target.zone_tolerance

    if abs(x - off_stump_x) <= tol:
        return ImpactZone.RIGHT
    elif abs(x - leg_stump_x) <= tol:
        return ImpactZone.LEFT
    elif abs(x - target.center_x) <= tol:
        return ImpactZone.CENTER
    return ImpactZone.CENTER  # between stumps


def _within_target(x: float, y: float, target: TargetVolume) -> bool:
    in_width = abs(x - target.center_x) <= target.half_width + target.element_radius
    in_height = target.min.y <= y <= target.max.y
    return in_width and in_height


def resolve(path: Sequence[TrajectorySample], target: TargetVolume) -> ImpactResult:
    """Find the first point where ``path`` crosses the stump plane inside the wicket."""
    path = list(path)
    plane = target.plane_z

    for p1, p2 in zip(path, path[1:]):
        crosses = (p1.z <= plane <= p2.z) or (p1.z >= plane >= p2.z)
        if not crosses:
            continue

        dz = p2.z - p1.z
        if dz == 0:
            logger.debug("Skipping zero-length segment at z={}", p1.z)
            continue

        ratio = abs(plane - p1.z) / abs(dz)
        impact_x = p1.x + (p2.x - p1.x) * ratio
        impact_y = p1.y + (p2.y - p1.y) * ratio

        if _within_target(impact_x, impact_y, target):
            return ImpactResult(
                is_hit=True,
                impact_point=Vector3(x=impact_x, y=impact_y, z=plane),
                zone=classify_zone(impact_x, impact_y, target),
            )

    return NO_IMPACT


def find_pitch_point(
    path: Sequence[TrajectorySample],
    target: TargetVolume,
    ground_tolerance: float,
) -> Optional[Vector3]:
    """Lowest sample short of the stumps, if it is close enough to the ground."""
    before_stumps = [s for s in path if s.z < target.plane_z]
    if not before_stumps:
        return None
    lowest = min(before_stumps, key=lambda s: s.y)
    if lowest.y > ground_tolerance:
        return None
    return Vector3(x=lowest.x, y=0.0, z=lowest.z)
