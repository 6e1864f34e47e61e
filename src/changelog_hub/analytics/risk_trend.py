"""
Historical risk analysis.

Consumes the per-changelog risk scores of a history. A changelog's own
score always comes from :func:`changelog_hub.engine.risk.assess_risk`;
nothing here recomputes it from itself.
"""

import logging
from typing import Optional

from changelog_hub.analytics.trend import TrendAnalyzer
from changelog_hub.engine.risk import assess_risk
from changelog_hub.models.changelog import Changelog, RiskLevel
from changelog_hub.models.metrics import RiskDataPoint, RiskTrend, TrendDirection
from changelog_hub.scoring import clamp, round_half_up

logger = logging.getLogger(__name__)

RECENT_WINDOW = 3
RECENT_WEIGHT = 0.6
OVERALL_WEIGHT = 0.4
PROJECTION_STEP = 10


class RiskCalculator:
    """Risk scores, cumulative risk and risk trend over a changelog history."""

    def __init__(self, trend_analyzer: Optional[TrendAnalyzer] = None) -> None:
        self.trend_analyzer = trend_analyzer or TrendAnalyzer()

    @staticmethod
    def changelog_risk(changelog: Changelog) -> int:
        """Stored risk score, or a fresh assessment when none was attached."""
        if changelog.risk_assessment is not None:
            return changelog.risk_assessment.overall_score
        return assess_risk(list(changelog.changes)).overall_score

    def cumulative_risk(self, history: Optional[list[Changelog]]) -> int:
        """
        Recency-weighted mean risk of a history.

        60% weight on the mean of the three most recent changelogs and 40%
        on the mean of all of them. An empty history has no risk.
        """
        if not history:
            return 0

        ordered = sorted(history, key=lambda c: c.generated_at)
        scores = [self.changelog_risk(c) for c in ordered]
        recent = scores[-RECENT_WINDOW:]

        recent_avg = sum(recent) / len(recent)
        overall_avg = sum(scores) / len(scores)
        return int(clamp(round_half_up(RECENT_WEIGHT * recent_avg + OVERALL_WEIGHT * overall_avg)))

    def analyze_trend(
        self,
        history: Optional[list[Changelog]],
        api_name: Optional[str] = None,
    ) -> RiskTrend:
        """
        Direction of risk across a history.

        Rising risk is DEGRADING. The projected next score moves one step
        of 10 points in the direction of the trend.

        Args:
            history: Changelogs in any order.
            api_name: Name to stamp on the result.

        Returns:
            The risk trend. An empty history yields a STABLE trend at zero.
        """
        if not history:
            logger.debug("Empty history, reporting a stable risk trend")
            return RiskTrend(api_name=api_name)

        ordered = sorted(history, key=lambda c: c.generated_at)
        points = [
            RiskDataPoint(
                timestamp=c.generated_at,
                risk_score=self.changelog_risk(c),
                version=c.to_version,
                breaking_changes=len(c.breaking_changes),
            )
            for c in ordered
        ]
        scores = [p.risk_score for p in points]

        slope = self.trend_analyzer.slope(scores)
        direction = self.trend_analyzer.invert(self.trend_analyzer.analyze(scores))

        current = scores[-1]
        previous = scores[-2] if len(scores) > 1 else current
        if previous == 0:
            change_percentage = 0.0
        else:
            change_percentage = (current - previous) / previous * 100

        if direction == TrendDirection.DEGRADING:
            projected = current + PROJECTION_STEP
        elif direction == TrendDirection.IMPROVING:
            projected = current - PROJECTION_STEP
        else:
            projected = current
        projected = int(clamp(projected))

        return RiskTrend(
            api_name=api_name or ordered[-1].api_name,
            direction=direction,
            current_risk_score=current,
            previous_risk_score=previous,
            change_percentage=change_percentage,
            projected_next_score=projected,
            current_risk_level=RiskLevel.from_score(current),
            projected_risk_level=RiskLevel.from_score(projected),
            slope=slope,
            data_points=points,
            periods_analyzed=len(points),
        )
