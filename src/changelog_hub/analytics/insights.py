"""
Patterns, insights, recommendations and compliance checks.

Turns the numeric analytics of a history into ranked, human-readable
advice. Everything here reads metrics that were already computed; no
scorer is re-run.
"""

import logging
from collections import Counter
from datetime import timedelta
from typing import Optional

from changelog_hub.analytics.stability import StabilityScorer, mentions_deprecation
from changelog_hub.models.changelog import Changelog
from changelog_hub.models.insight import (
    CheckStatus,
    ComplianceCheck,
    ComplianceLevel,
    ComplianceState,
    ComplianceStatus,
    Insight,
    InsightType,
    Pattern,
    PatternType,
    Recommendation,
    RecommendationType,
)
from changelog_hub.models.metrics import (
    ChangeVelocity,
    ComplexityScore,
    RiskTrend,
    StabilityGrade,
    StabilityScore,
    TechnicalDebt,
    TrendDirection,
)
from changelog_hub.models.snapshot import Snapshot

logger = logging.getLogger(__name__)

MAX_INSIGHTS = 10
MAX_RECOMMENDATIONS = 10

MIN_RELEASES_FOR_PATTERNS = 3
FREQUENT_BREAKING_RATIO = 0.5
BURST_WINDOW = timedelta(hours=24)
BURST_RATIO = 0.3


def documentation_coverage(snapshot: Snapshot) -> float:
    """Share of endpoints with a description; 1.0 when there are none."""
    if not snapshot.endpoints:
        return 1.0
    documented = sum(1 for e in snapshot.endpoints if e.description)
    return documented / len(snapshot.endpoints)


def _ordered(history: Optional[list[Changelog]]) -> list[Changelog]:
    return sorted(history or [], key=lambda c: c.generated_at)


def _is_poor(stability: StabilityScore) -> bool:
    return stability.grade in (StabilityGrade.D, StabilityGrade.F)


class PatternDetector:
    """Find recurring release shapes in a changelog history."""

    def detect(self, history: Optional[list[Changelog]]) -> list[Pattern]:
        """
        Run every detector.

        Args:
            history: Changelogs in any order.

        Returns:
            The patterns found; empty for fewer than three changelogs.
        """
        ordered = _ordered(history)
        if len(ordered) < MIN_RELEASES_FOR_PATTERNS:
            return []

        found = [
            self.frequent_breaking_changes(ordered),
            self.seasonal_releases(ordered),
            self.weekly_pattern(ordered),
            self.burst_releases(ordered),
        ]
        patterns = [p for p in found if p is not None]
        logger.debug("Detected %d patterns in %d changelogs", len(patterns), len(ordered))
        return patterns

    @staticmethod
    def frequent_breaking_changes(history: list[Changelog]) -> Optional[Pattern]:
        """More than half of the releases break something."""
        if not history:
            return None
        with_breaking = sum(1 for c in history if c.has_breaking_changes)
        ratio = with_breaking / len(history)
        if ratio <= FREQUENT_BREAKING_RATIO:
            return None
        return Pattern(
            type=PatternType.FREQUENT_BREAKING_CHANGES,
            description=f"{ratio:.0%} of releases contain breaking changes",
            confidence=ratio,
            details={"release_count": len(history), "with_breaking_count": with_breaking},
        )

    @staticmethod
    def seasonal_releases(history: list[Changelog]) -> Optional[Pattern]:
        """One calendar month holds well over its share of releases."""
        if len(history) < 6:
            return None
        counts = Counter(c.generated_at.strftime("%B") for c in history)
        peak, peak_count = counts.most_common(1)[0]
        if peak_count > (len(history) // 12) * 2 and peak_count >= 3:
            return Pattern(
                type=PatternType.SEASONAL_RELEASES,
                description=f"Peak releases in {peak}",
                confidence=0.7,
                details={"peak_month": peak, "peak_count": peak_count},
            )
        return None

    @staticmethod
    def weekly_pattern(history: list[Changelog]) -> Optional[Pattern]:
        """Releases cluster on one day of the week."""
        if len(history) < 5:
            return None
        counts = Counter(c.generated_at.strftime("%A") for c in history)
        peak, peak_count = counts.most_common(1)[0]
        if peak_count > (len(history) // 7) * 2 and peak_count >= 3:
            return Pattern(
                type=PatternType.WEEKLY_PATTERN,
                description=f"Releases typically occur on {peak}",
                confidence=0.75,
                details={"peak_day": peak, "count": peak_count},
            )
        return None

    @staticmethod
    def burst_releases(history: list[Changelog]) -> Optional[Pattern]:
        """Many consecutive releases land within 24 hours of each other."""
        if len(history) < 4:
            return None
        ordered = _ordered(history)
        bursts = sum(
            1
            for earlier, later in zip(ordered, ordered[1:])
            if later.generated_at - earlier.generated_at < BURST_WINDOW
        )
        ratio = bursts / (len(ordered) - 1)
        if ratio > BURST_RATIO and bursts >= 2:
            return Pattern(
                type=PatternType.BURST_RELEASES,
                description=f"{ratio:.0%} of releases occur within 24 hours of each other",
                confidence=ratio,
                details={"burst_count": bursts},
            )
        return None


class InsightGenerator:
    """
    Derive ranked insights from history metrics.

    Insights are sorted by priority, highest first, and capped at
    ``max_insights``.
    """

    def __init__(self, max_insights: int = MAX_INSIGHTS) -> None:
        self.max_insights = max_insights

    def generate(
        self,
        history: Optional[list[Changelog]],
        stability: StabilityScore,
        velocity: ChangeVelocity,
        risk_trend: RiskTrend,
        snapshot: Optional[Snapshot] = None,
    ) -> list[Insight]:
        """
        Build the insights for one API.

        Args:
            history: Changelogs in any order.
            stability: Stability score of the history.
            velocity: Velocity of the history.
            risk_trend: Risk trend of the history.
            snapshot: Current snapshot, when known.

        Returns:
            Insights, highest priority first.
        """
        insights: list[Insight] = []
        ordered = _ordered(history)
        if ordered:
            insights.extend(self.breaking_change_insights(ordered))
            insights.extend(self.stability_insights(stability))
            insights.extend(self.velocity_insights(velocity))
            insights.extend(self.risk_insights(risk_trend))
        if snapshot is not None:
            insights.extend(self.snapshot_insights(snapshot))

        insights.sort(key=lambda i: i.priority, reverse=True)
        return insights[: self.max_insights]

    @staticmethod
    def breaking_change_insights(ordered: list[Changelog]) -> list[Insight]:
        total = sum(len(c.breaking_changes) for c in ordered)
        if total == 0:
            return [
                Insight(
                    type=InsightType.POSITIVE_TREND,
                    title="No Breaking Changes",
                    description="No breaking changes detected in the analyzed period",
                    priority=3,
                    confidence=1.0,
                )
            ]

        mid = len(ordered) // 2
        older = sum(len(c.breaking_changes) for c in ordered[:mid])
        recent = sum(len(c.breaking_changes) for c in ordered[mid:])
        if recent > older * 1.5:
            return [
                Insight(
                    type=InsightType.BREAKING_CHANGE_TREND,
                    title="Breaking Changes Increasing",
                    description=(
                        f"Breaking changes increased from {older} to {recent} in recent period"
                    ),
                    priority=8,
                    confidence=0.8,
                )
            ]
        return []

    @staticmethod
    def stability_insights(stability: StabilityScore) -> list[Insight]:
        if _is_poor(stability):
            return [
                Insight(
                    type=InsightType.STABILITY_ALERT,
                    title="Poor API Stability",
                    description=(
                        f"Stability score is {stability.score} ({stability.grade.value}). "
                        "Consider reducing breaking changes."
                    ),
                    priority=9,
                    confidence=0.9,
                )
            ]
        if stability.score < StabilityGrade.B.min_score:
            return [
                Insight(
                    type=InsightType.STABILITY_ALERT,
                    title="Moderate Stability Concerns",
                    description=f"Stability score is {stability.score}. Room for improvement.",
                    priority=5,
                    confidence=0.85,
                )
            ]
        return []

    @staticmethod
    def velocity_insights(velocity: ChangeVelocity) -> list[Insight]:
        insights = []
        if velocity.accelerating and velocity.acceleration_rate > 0.5:
            insights.append(
                Insight(
                    type=InsightType.VELOCITY_CHANGE,
                    title="Rapid Change Velocity",
                    description=(
                        f"Change velocity increased by {velocity.acceleration_rate:.0%}. "
                        "Consider slowing down."
                    ),
                    priority=6,
                    confidence=0.75,
                )
            )
        if velocity.breaking_changes_per_release > 2:
            insights.append(
                Insight(
                    type=InsightType.BREAKING_CHANGE_TREND,
                    title="High Breaking Changes Per Release",
                    description=(
                        f"Average {velocity.breaking_changes_per_release:.1f} breaking changes "
                        "per release. Consider batching changes."
                    ),
                    priority=7,
                    confidence=0.85,
                )
            )
        return insights

    @staticmethod
    def risk_insights(risk_trend: RiskTrend) -> list[Insight]:
        change = abs(risk_trend.change_percentage)
        if risk_trend.direction == TrendDirection.DEGRADING:
            return [
                Insight(
                    type=InsightType.RISK_INCREASE,
                    title="Increasing Risk Trend",
                    description=f"Risk score increased by {change:.1f}% recently",
                    priority=8,
                    confidence=0.8,
                )
            ]
        if risk_trend.direction == TrendDirection.IMPROVING:
            return [
                Insight(
                    type=InsightType.RISK_DECREASE,
                    title="Decreasing Risk Trend",
                    description=f"Risk score decreased by {change:.1f}%",
                    priority=4,
                    confidence=0.8,
                )
            ]
        return []

    @staticmethod
    def snapshot_insights(snapshot: Snapshot) -> list[Insight]:
        deprecated = sum(1 for e in snapshot.endpoints if e.deprecated)
        if not deprecated:
            return []
        return [
            Insight(
                type=InsightType.DEPRECATION_REMINDER,
                title="Deprecated Endpoints Present",
                description=f"{deprecated} deprecated endpoint(s) should be reviewed for removal",
                priority=6,
                confidence=1.0,
            )
        ]


class RecommendationEngine:
    """
    Suggest actions from stability, structure and compliance results.

    Recommendations are sorted by efficiency (impact per unit of effort),
    best first, and capped at ``max_recommendations``.
    """

    def __init__(self, max_recommendations: int = MAX_RECOMMENDATIONS) -> None:
        self.max_recommendations = max_recommendations

    def recommend(
        self,
        stability: Optional[StabilityScore] = None,
        complexity: Optional[ComplexityScore] = None,
        debt: Optional[TechnicalDebt] = None,
        compliance: Optional[ComplianceStatus] = None,
    ) -> list[Recommendation]:
        """Collect every applicable recommendation, most efficient first."""
        recommendations: list[Recommendation] = []
        if stability is not None:
            recommendations.extend(self.for_stability(stability))
        if complexity is not None and complexity.score > 70:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.PERFORMANCE,
                    title="Reduce API Complexity",
                    description=f"Complexity score is {complexity.score} (high)",
                    action="Consider splitting into smaller, focused APIs",
                    priority=6,
                    effort=8,
                    impact=7,
                )
            )
        if debt is not None:
            recommendations.extend(self.for_technical_debt(debt))
        if compliance is not None and compliance.failed_checks:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.COMPLIANCE,
                    title="Address Compliance Violations",
                    description=f"{len(compliance.failed_checks)} compliance check(s) failed",
                    action="Review and fix compliance issues",
                    priority=8,
                    effort=5,
                    impact=7,
                )
            )

        recommendations.sort(key=lambda r: r.efficiency_score, reverse=True)
        return recommendations[: self.max_recommendations]

    @staticmethod
    def for_stability(stability: StabilityScore) -> list[Recommendation]:
        recommendations = []
        if stability.grade == StabilityGrade.F:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.STABILITY_IMPROVEMENT,
                    title="Implement Change Freeze",
                    description="Consider a temporary change freeze to stabilize the API",
                    action="Halt non-critical changes and focus on stability",
                    priority=10,
                    effort=3,
                    impact=9,
                )
            )
            recommendations.append(
                Recommendation(
                    type=RecommendationType.VERSIONING,
                    title="Major Version Planning",
                    description="Plan a major version release to batch breaking changes",
                    action="Create a roadmap for the next major version",
                    priority=9,
                    effort=5,
                    impact=8,
                )
            )
        if _is_poor(stability):
            recommendations.append(
                Recommendation(
                    type=RecommendationType.DEPRECATION,
                    title="Improve Deprecation Policy",
                    description="Announce deprecations before breaking changes",
                    action="Implement a minimum 2-version deprecation period",
                    priority=8,
                    effort=4,
                    impact=7,
                )
            )
        if stability.breaking_change_ratio > 0.3:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.STABILITY_IMPROVEMENT,
                    title="Reduce Breaking Change Ratio",
                    description=f"{stability.breaking_change_ratio:.0%} of changes are breaking",
                    action="Review changes for backwards compatibility before release",
                    priority=8,
                    effort=2,
                    impact=7,
                )
            )
        return recommendations

    @staticmethod
    def for_technical_debt(debt: TechnicalDebt) -> list[Recommendation]:
        recommendations = []
        if debt.deprecated_endpoints_count:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.DEBT_REDUCTION,
                    title="Remove Deprecated Endpoints",
                    description=f"Remove {debt.deprecated_endpoints_count} deprecated endpoint(s)",
                    action="Plan removal in next major version",
                    priority=7,
                    effort=4,
                    impact=6,
                )
            )
        if debt.missing_documentation_count:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.DOCUMENTATION,
                    title="Improve Documentation Coverage",
                    description=f"{debt.missing_documentation_count} endpoint(s) lack documentation",
                    action="Add descriptions and examples to undocumented endpoints",
                    priority=5,
                    effort=3,
                    impact=5,
                )
            )
        if debt.inconsistent_naming_count:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.COMPLIANCE,
                    title="Fix Naming Inconsistencies",
                    description=f"{debt.inconsistent_naming_count} naming inconsistencies detected",
                    action="Standardize naming conventions",
                    priority=4,
                    effort=5,
                    impact=4,
                )
            )
        return recommendations


class ComplianceChecker:
    """Check an API's evolution against versioning and documentation practices."""

    def check(
        self,
        history: Optional[list[Changelog]],
        snapshot: Optional[Snapshot] = None,
        api_name: Optional[str] = None,
    ) -> ComplianceStatus:
        """
        Run the compliance checks.

        The version and name come from the snapshot when given, otherwise
        from the most recent changelog. Documentation is only checked
        against a snapshot.

        Args:
            history: Changelogs in any order.
            snapshot: Current snapshot, when known.
            api_name: Name to stamp on the result.

        Returns:
            The compliance status with every check result.
        """
        ordered = _ordered(history)
        latest = ordered[-1] if ordered else None

        if snapshot is not None:
            version, name = snapshot.version, snapshot.name
        else:
            version = latest.to_version if latest else None
            name = api_name or (latest.api_name if latest else None)

        checks = [
            ComplianceCheck(
                name="API Version",
                category="Versioning",
                status=CheckStatus.PASSED if version else CheckStatus.FAILED,
                message="API version is specified" if version else "API version is missing",
            ),
            ComplianceCheck(
                name="API Name",
                category="Documentation",
                status=CheckStatus.PASSED if name else CheckStatus.WARNING,
                message="API name is provided" if name else "API name is missing",
            ),
        ]

        if ordered:
            announced = all(
                mentions_deprecation(c) for c in ordered if c.has_breaking_changes
            )
            checks.append(
                ComplianceCheck(
                    name="Deprecation Policy",
                    category="Stability",
                    status=CheckStatus.PASSED if announced else CheckStatus.WARNING,
                    message=(
                        "Deprecation policy followed"
                        if announced
                        else "Breaking changes without deprecation detected"
                    ),
                )
            )

        semver_ok = StabilityScorer.semver_compliance_score(ordered) == 100
        checks.append(
            ComplianceCheck(
                name="Semantic Versioning",
                category="Versioning",
                status=CheckStatus.PASSED if semver_ok else CheckStatus.WARNING,
                message=(
                    "Semantic versioning is followed"
                    if semver_ok
                    else "Breaking changes released without a major version bump"
                ),
            )
        )

        if snapshot is not None:
            coverage = documentation_coverage(snapshot)
            if coverage >= 0.8:
                status = CheckStatus.PASSED
            elif coverage >= 0.5:
                status = CheckStatus.WARNING
            else:
                status = CheckStatus.FAILED
            checks.append(
                ComplianceCheck(
                    name="Endpoint Documentation",
                    category="Documentation",
                    status=status,
                    message=f"{coverage:.0%} of endpoints are documented",
                )
            )

        statuses = {c.status for c in checks}
        if CheckStatus.FAILED in statuses:
            state = ComplianceState.NON_COMPLIANT
        elif CheckStatus.WARNING in statuses:
            state = ComplianceState.PARTIAL
        else:
            state = ComplianceState.COMPLIANT

        passed = sum(1 for c in checks if c.status == CheckStatus.PASSED)
        score = passed * 100 // len(checks)

        return ComplianceStatus(
            api_name=api_name or name,
            state=state,
            score=score,
            level=ComplianceLevel.from_score(score),
            checks=checks,
        )
