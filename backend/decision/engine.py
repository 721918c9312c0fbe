from datetime import datetime, timezone
import numpy as np
from loguru import logger
from typing import Dict, Optional, Sequence
from physics.config import DEFAULT_CONFIG, PhysicsConfig
from physics.engine import PhysicsEngine
from physics.models import (
    DeliveryParameters,
    ImpactResult,
    ImpactZone,
    PixelObservation,
    TrajectorySample,
    Vector3,
)
from .models import (
    AnalysisSource,
    DeliveryAnalysis,
    DeliveryReport,
    ExternalSummary,
    ReportMetadata,
)

PART_TO_ZONE = {
    "off": ImpactZone.RIGHT,
    "middle": ImpactZone.CENTER,
    "leg": ImpactZone.LEFT,
    "bails": ImpactZone.TOP,
}
ZONE_TO_PART = {zone: part for part, zone in PART_TO_ZONE.items()}


def zone_from_part(part_hit: str) -> ImpactZone:
    """Map an analyser stump label to an impact zone."""
    label = part_hit.strip().lower()
    if label in PART_TO_ZONE:
        return PART_TO_ZONE[label]
    if label not in ("missing", "none", ""):
        logger.warning("Unknown stump label '{}', treating as no impact", part_hit)
    return ImpactZone.NONE


def part_from_zone(zone: ImpactZone) -> str:
    return ZONE_TO_PART.get(zone, "none")


def parse_summary(text: str) -> ExternalSummary:
    """Parse the JSON object returned by the video analyser."""
    return ExternalSummary.model_validate_json(text)


class DecisionEngine:
    """Turns tracked samples or an external summary into a delivery verdict"""

    def __init__(self, config: PhysicsConfig = DEFAULT_CONFIG):
        self.config = config
        self.physics = PhysicsEngine(config)
        logger.info(
            "Decision engine ready: pitch {:.2f} m, stumps {:.3f} m high",
            config.course_length, config.target_height,
        )

    def review_track(self, samples: Sequence[TrajectorySample]) -> DeliveryAnalysis:
        """
        Verdict from a tracked ball: extrapolate, then resolve the observed
        and predicted path against the wicket.
        """
        observed = list(samples)
        predicted, impact = self.physics.track(observed)
        speed = self.physics.delivery_speed_kmh(observed)

        analysis = DeliveryAnalysis(
            source=AnalysisSource.TRACKED,
            observed=observed,
            predicted=predicted,
            impact=impact,
            speed_kmh=speed,
            pitch_point=self.physics.pitch_point(observed + predicted),
            reasoning=self._generate_reasoning(impact, speed, len(observed), len(predicted)),
        )
        self._log_verdict(analysis)
        return analysis

    def review_observations(self, observations: Sequence[PixelObservation]) -> DeliveryAnalysis:
        return self.review_track(self.physics.reconstruct(observations))

    def review_summary(self, summary: ExternalSummary) -> DeliveryAnalysis:
        """
        Adopt an external verdict. The synthetic path only exists so the
        delivery can be drawn; verdict, zone, impact and speed are the
        summary's own.
        """
        # Summaries may pitch the ball at or behind the crease; only the drawn path is clamped
        pitch_z = min(max(summary.pitch.z, self.config.min_pitch_distance), self.config.course_length)
        params = DeliveryParameters(
            speed_kmh=summary.speed_kmh,
            release_x=summary.pitch.x * 0.5,
            target_x=summary.impact.x,
            pitch_z=pitch_z,
        )
        observed = self.physics.simulate_delivery(params)
        predicted = self.physics.predict(observed, self.config.synthetic_prediction_horizon)

        zone = zone_from_part(summary.part_hit) if summary.is_hit else ImpactZone.NONE
        impact = ImpactResult(
            is_hit=summary.is_hit,
            impact_point=summary.impact,
            zone=zone,
        )

        reasoning = {"summary": summary.reasoning} if summary.reasoning else {}
        if summary.references:
            reasoning["references"] = ", ".join(ref.url for ref in summary.references)

        analysis = DeliveryAnalysis(
            source=AnalysisSource.EXTERNAL,
            observed=observed,
            predicted=predicted,
            impact=impact,
            speed_kmh=summary.speed_kmh,
            pitch_point=Vector3(x=summary.pitch.x, y=0.0, z=summary.pitch.z),
            reasoning=reasoning,
        )
        self._log_verdict(analysis)
        return analysis

    def review_simulated(self, seed: Optional[int] = None) -> DeliveryAnalysis:
        """Fallback when no analysis is available: a random plausible delivery."""
        rng = np.random.default_rng(seed)
        params = self.physics.sample_delivery_parameters(rng)
        observed = self.physics.simulate_delivery(params)
        predicted, impact = self.physics.track(
            observed, horizon=self.config.synthetic_prediction_horizon
        )
        speed = params.speed_kmh

        analysis = DeliveryAnalysis(
            source=AnalysisSource.SIMULATED,
            observed=observed,
            predicted=predicted,
            impact=impact,
            speed_kmh=speed,
            pitch_point=self.physics.pitch_point(observed),
            reasoning=self._generate_reasoning(impact, speed, len(observed), len(predicted)),
        )
        self._log_verdict(analysis)
        return analysis

    def build_report(self, analysis: DeliveryAnalysis) -> DeliveryReport:
        """Snapshot of an analysis for export"""
        impact = analysis.impact
        metadata = ReportMetadata(
            timestamp=datetime.now(timezone.utc).isoformat(),
            pitch_length=self.config.course_length,
            speed_kmh=analysis.speed_kmh,
            verdict="OUT" if impact.is_hit else "NOT OUT",
            zone=impact.zone.value,
            part_hit=part_from_zone(impact.zone),
            impact_point=impact.impact_point,
            source=analysis.source,
            reasoning=analysis.reasoning,
        )
        return DeliveryReport(
            metadata=metadata,
            trajectory=analysis.observed,
            predictions=analysis.predicted,
        )

    def _generate_reasoning(
        self,
        impact: ImpactResult,
        speed: Optional[float],
        n_observed: int,
        n_predicted: int,
    ) -> Dict[str, str]:
        """Generate human-readable verdict reasoning"""
        reasoning = {}

        if n_predicted == 0:
            reasoning["prediction"] = (
                f"Only {n_observed} usable samples; the path was not extrapolated"
            )
        else:
            reasoning["prediction"] = (
                f"Extrapolated {n_predicted} points from {n_observed} tracked samples"
            )

        if impact.is_hit:
            point = impact.impact_point
            part = part_from_zone(impact.zone)
            reasoning["verdict"] = (
                f"Ball would hit {'the bails' if part == 'bails' else part + ' stump'} "
                f"at {point.y:.2f} m height, {point.x:+.3f} m from middle"
            )
        else:
            reasoning["verdict"] = "Ball would miss the stumps"

        if speed is not None:
            reasoning["speed"] = f"Estimated delivery speed {speed:.1f} km/h"

        return reasoning

    def _log_verdict(self, analysis: DeliveryAnalysis) -> None:
        impact = analysis.impact
        logger.info(
            "{} delivery: {} ({}), {} observed / {} predicted samples",
            analysis.source.value,
            "OUT" if impact.is_hit else "NOT OUT",
            impact.zone.value,
            len(analysis.observed),
            len(analysis.predicted),
        )
