"""Tests for physics.impact."""
from __future__ import annotations

import pytest

from conftest import sample
from physics.config import PhysicsConfig
from physics.impact import NO_IMPACT, classify_zone, find_pitch_point, resolve
from physics.models import ImpactZone
from physics.predictor import predict


def _through_stumps(x: float, y: float):
    return [sample(x, y, 19.0, 0.0), sample(x, y, 21.0, 0.1)]


class TestResolveMisses:
    def test_never_reaches_stumps(self, wicket):
        path = [sample(0, 0.3, z, z / 20) for z in (0.0, 4.0, 8.0, 10.0)]
        result = resolve(path, wicket)
        assert result.is_hit is False
        assert result.zone == ImpactZone.NONE
        assert result.impact_point is None

    def test_empty_and_single(self, wicket):
        assert resolve([], wicket) == NO_IMPACT
        assert resolve([sample(0, 0.3, 20.12, 0)], wicket) == NO_IMPACT

    @pytest.mark.parametrize("x", [0.3, -0.3])
    def test_wide(self, wicket, x):
        assert resolve(_through_stumps(x, 0.3), wicket).is_hit is False

    def test_over_the_top(self, wicket):
        assert resolve(_through_stumps(0.0, 0.75), wicket) == NO_IMPACT

    def test_starts_beyond_stumps(self, wicket):
        assert resolve([sample(0, 0.3, 21.0, 0), sample(0, 0.3, 22.0, 0.1)], wicket) == NO_IMPACT

    def test_degenerate_segment_on_plane(self, wicket):
        p = wicket.plane_z
        assert resolve([sample(0, 0.3, p, 0.0), sample(0, 0.3, p, 0.1)], wicket) == NO_IMPACT


class TestResolveHits:
    def test_middle_stump(self, wicket):
        result = resolve(_through_stumps(0.0, 0.3), wicket)
        assert result.is_hit is True
        assert result.zone == ImpactZone.CENTER
        assert result.impact_point.x == pytest.approx(0.0)
        assert result.impact_point.y == pytest.approx(0.3)
        assert result.impact_point.z == pytest.approx(20.12)

    def test_bails_band(self, wicket):
        result = resolve(_through_stumps(0.0, 0.72), wicket)
        assert result.is_hit is True
        assert result.zone == ImpactZone.TOP

    def test_interpolates_crossing(self, wicket):
        path = [sample(0.0, 0.1, 20.0, 0.0), sample(0.1, 0.5, 20.24, 0.1)]
        result = resolve(path, wicket)
        assert result.impact_point.x == pytest.approx(0.05, abs=1e-6)
        assert result.impact_point.y == pytest.approx(0.3, abs=1e-6)

    def test_crossing_backwards(self, wicket):
        path = [sample(0.11, 0.3, 21.0, 0.0), sample(0.11, 0.3, 19.0, 0.1)]
        result = resolve(path, wicket)
        assert result.is_hit is True
        assert result.zone == ImpactZone.RIGHT

    def test_scans_past_degenerate_segment(self, wicket):
        p = wicket.plane_z
        path = [sample(0, 0.3, p, 0.0), sample(0, 0.3, p, 0.1), sample(0, 0.3, p + 1, 0.2)]
        result = resolve(path, wicket)
        assert result.is_hit is True
        assert result.impact_point.y == pytest.approx(0.3)

    def test_later_crossing_can_hit(self, wicket):
        path = [
            sample(0.3, 0.3, 19.0, 0.0),
            sample(0.3, 0.3, 21.0, 0.1),
            sample(0.0, 0.3, 21.5, 0.2),
            sample(0.0, 0.3, 19.0, 0.3),
        ]
        result = resolve(path, wicket)
        assert result.is_hit is True
        assert result.zone == ImpactZone.CENTER

    def test_wider_wicket(self):
        wide = PhysicsConfig(target_width=0.3).target_volume()
        assert resolve(_through_stumps(0.16, 0.3), wide).is_hit is True

    def test_first_crossing_stable_across_horizons(self, wicket, straight_history):
        short = predict(straight_history, horizon=1.0, step=0.05)
        long = predict(straight_history, horizon=1.5, step=0.05)
        assert long[: len(short)] == short

        first = resolve(straight_history + short, wicket)
        assert first.is_hit is True
        assert resolve(straight_history + long, wicket) == first


class TestClassifyZone:
    @pytest.mark.parametrize(
        "x, zone",
        [
            (0.0, ImpactZone.CENTER),
            (0.11, ImpactZone.RIGHT),
            (0.13, ImpactZone.RIGHT),
            (-0.12, ImpactZone.LEFT),
            (0.06, ImpactZone.CENTER),
            (-0.06, ImpactZone.CENTER),
        ],
    )
    def test_lateral(self, wicket, x, zone):
        assert classify_zone(x, 0.3, wicket) == zone

    def test_height_checked_first(self, wicket):
        assert classify_zone(0.11, 0.72, wicket) == ImpactZone.TOP

    def test_exactly_stump_height_is_not_top(self, wicket):
        assert classify_zone(0.0, wicket.physical_height, wicket) == ImpactZone.CENTER


class TestPitchPoint:
    def test_lowest_sample_before_stumps(self, wicket):
        path = [
            sample(0.0, 2.0, 0.0, 0.0),
            sample(0.05, 0.04, 12.0, 0.3),
            sample(0.08, 0.6, 18.0, 0.5),
        ]
        point = find_pitch_point(path, wicket, 0.1)
        assert point.z == 12.0
        assert point.x == 0.05
        assert point.y == 0.0

    def test_full_toss_has_no_pitch(self, wicket):
        path = [sample(0.0, 2.0, 0.0, 0.0), sample(0.0, 0.8, 18.0, 0.5)]
        assert find_pitch_point(path, wicket, 0.1) is None

    def test_ignores_samples_past_stumps(self, wicket):
        path = [sample(0.0, 1.0, 10.0, 0.0), sample(0.0, 0.0, 21.0, 0.5)]
        assert find_pitch_point(path, wicket, 0.1) is None
