"""
Unit tests for patterns, insights, recommendations and compliance checks.
"""

import pytest

from changelog_hub.analytics.insights import (
    ComplianceChecker,
    InsightGenerator,
    PatternDetector,
    RecommendationEngine,
    documentation_coverage,
)
from changelog_hub.models import (
    ChangeVelocity,
    CheckStatus,
    ComplexityScore,
    ComplianceCheck,
    ComplianceLevel,
    ComplianceState,
    ComplianceStatus,
    Endpoint,
    InsightType,
    PatternType,
    Recommendation,
    RecommendationType,
    RiskTrend,
    Snapshot,
    StabilityGrade,
    StabilityScore,
    TechnicalDebt,
    TrendDirection,
)


def _stability(score: int = 100, ratio: float = 0.0) -> StabilityScore:
    return StabilityScore(
        score=score,
        grade=StabilityGrade.from_score(score),
        breaking_change_ratio=ratio,
    )


@pytest.fixture
def generator() -> InsightGenerator:
    """Create an insight generator."""
    return InsightGenerator()


@pytest.fixture
def engine() -> RecommendationEngine:
    """Create a recommendation engine."""
    return RecommendationEngine()


class TestPatternDetector:
    """Tests for release pattern detection."""

    def test_too_short_history(self, make_changelog) -> None:
        """Test that fewer than three changelogs yield no patterns."""
        history = [make_changelog(breaking=1, day=0), make_changelog(breaking=1, day=1)]
        assert PatternDetector().detect(history) == []
        assert PatternDetector().detect(None) == []

    def test_frequent_breaking_changes(self, make_changelog) -> None:
        """Test that most releases breaking is a pattern."""
        history = [
            make_changelog(breaking=1, day=0),
            make_changelog(breaking=1, day=10),
            make_changelog(info=1, day=20),
        ]
        patterns = PatternDetector().detect(history)

        assert [p.type for p in patterns] == [PatternType.FREQUENT_BREAKING_CHANGES]
        assert patterns[0].confidence == pytest.approx(2 / 3)
        assert patterns[0].description == "67% of releases contain breaking changes"
        assert patterns[0].details == {"release_count": 3, "with_breaking_count": 2}

    def test_half_breaking_is_not_frequent(self, make_changelog) -> None:
        """Test that exactly half of the releases breaking is not enough."""
        history = [make_changelog(breaking=1, day=0), make_changelog(info=1, day=1)]
        assert PatternDetector.frequent_breaking_changes(history) is None

    def test_burst_releases(self, make_changelog) -> None:
        """Test releases landing within a day of each other."""
        history = [make_changelog(info=1, day=d) for d in (30, 0, 0.5, 0.25)]
        pattern = PatternDetector.burst_releases(history)

        assert pattern is not None
        assert pattern.type == PatternType.BURST_RELEASES
        assert pattern.details["burst_count"] == 2
        assert pattern.confidence == pytest.approx(2 / 3)

    def test_single_burst_is_not_a_pattern(self, make_changelog) -> None:
        """Test that one quick follow-up release is not a burst pattern."""
        history = [make_changelog(info=1, day=d) for d in (0, 0.5, 10, 20)]
        assert PatternDetector.burst_releases(history) is None

    def test_weekly_pattern(self, make_changelog) -> None:
        """Test releases that always happen on the same weekday."""
        history = [make_changelog(info=1, day=d) for d in (0, 7, 14, 21, 28)]
        pattern = PatternDetector.weekly_pattern(history)

        assert pattern is not None
        assert pattern.description == "Releases typically occur on Monday"
        assert pattern.details == {"peak_day": "Monday", "count": 5}

    def test_spread_weekdays(self, make_changelog) -> None:
        """Test that one release per weekday has no weekly pattern."""
        history = [make_changelog(info=1, day=d) for d in range(5)]
        assert PatternDetector.weekly_pattern(history) is None

    def test_seasonal_releases(self, make_changelog) -> None:
        """Test releases concentrated in one month."""
        history = [make_changelog(info=1, day=d) for d in (0, 7, 14, 21, 28, 35)]
        pattern = PatternDetector.seasonal_releases(history)

        assert pattern is not None
        assert pattern.details == {"peak_month": "January", "peak_count": 5}

    def test_detect_runs_every_detector(self, make_changelog) -> None:
        """Test that detect collects every matching pattern."""
        history = [make_changelog(breaking=1, day=d) for d in (0, 7, 14, 21, 28, 35)]
        types = {p.type for p in PatternDetector().detect(history)}
        assert types == {
            PatternType.FREQUENT_BREAKING_CHANGES,
            PatternType.SEASONAL_RELEASES,
            PatternType.WEEKLY_PATTERN,
        }


class TestInsightGenerator:
    """Tests for insight generation."""

    def test_no_breaking_changes(self, generator: InsightGenerator, make_changelog) -> None:
        """Test the positive insight for a clean history."""
        history = [make_changelog(info=1, day=0), make_changelog(info=1, day=1)]
        insights = generator.generate(history, _stability(), ChangeVelocity(), RiskTrend())

        assert len(insights) == 1
        assert insights[0].type == InsightType.POSITIVE_TREND
        assert insights[0].title == "No Breaking Changes"

    def test_breaking_changes_increasing(self, generator: InsightGenerator, make_changelog) -> None:
        """Test that more breaking changes in the later half are flagged."""
        history = [
            make_changelog(breaking=1, day=3),
            make_changelog(info=1, day=0),
            make_changelog(breaking=2, day=2),
            make_changelog(info=1, day=1),
        ]
        insights = generator.breaking_change_insights(sorted(history, key=lambda c: c.generated_at))

        assert len(insights) == 1
        assert insights[0].type == InsightType.BREAKING_CHANGE_TREND
        assert insights[0].description == "Breaking changes increased from 0 to 3 in recent period"

    def test_breaking_changes_steady(self, generator: InsightGenerator, make_changelog) -> None:
        """Test that an even spread of breaking changes is not flagged."""
        history = [make_changelog(breaking=1, day=d) for d in range(4)]
        assert generator.breaking_change_insights(history) == []

    @pytest.mark.parametrize(
        "score,title,priority",
        [(65, "Poor API Stability", 9), (40, "Poor API Stability", 9), (75, "Moderate Stability Concerns", 5)],
    )
    def test_stability_alerts(self, score: int, title: str, priority: int) -> None:
        """Test the stability alert bands."""
        insights = InsightGenerator.stability_insights(_stability(score))
        assert [(i.title, i.priority) for i in insights] == [(title, priority)]

    def test_stable_api_has_no_alert(self) -> None:
        """Test that grade B or better raises no alert."""
        assert InsightGenerator.stability_insights(_stability(85)) == []

    def test_velocity_insights(self) -> None:
        """Test acceleration and breaking-per-release insights."""
        velocity = ChangeVelocity(
            accelerating=True,
            acceleration_rate=0.8,
            breaking_changes_per_release=2.5,
        )
        insights = InsightGenerator.velocity_insights(velocity)

        assert [i.title for i in insights] == [
            "Rapid Change Velocity",
            "High Breaking Changes Per Release",
        ]
        assert "80%" in insights[0].description
        assert "2.5" in insights[1].description

    def test_mild_acceleration_ignored(self) -> None:
        """Test that acceleration of 50% or less is not an insight."""
        velocity = ChangeVelocity(accelerating=True, acceleration_rate=0.5)
        assert InsightGenerator.velocity_insights(velocity) == []

    def test_risk_insights(self) -> None:
        """Test rising and falling risk trends."""
        rising = InsightGenerator.risk_insights(
            RiskTrend(direction=TrendDirection.DEGRADING, change_percentage=25.0)
        )
        falling = InsightGenerator.risk_insights(
            RiskTrend(direction=TrendDirection.IMPROVING, change_percentage=-10.0)
        )

        assert rising[0].type == InsightType.RISK_INCREASE
        assert rising[0].description == "Risk score increased by 25.0% recently"
        assert rising[0].is_high_priority
        assert falling[0].type == InsightType.RISK_DECREASE
        assert "10.0%" in falling[0].description
        assert InsightGenerator.risk_insights(RiskTrend()) == []

    def test_deprecated_endpoints(self, generator: InsightGenerator, petstore_v2: Snapshot) -> None:
        """Test the reminder about deprecated endpoints in the snapshot."""
        insights = generator.generate([], _stability(), ChangeVelocity(), RiskTrend(), petstore_v2)

        assert len(insights) == 1
        assert insights[0].type == InsightType.DEPRECATION_REMINDER
        assert insights[0].description.startswith("1 deprecated endpoint(s)")

    def test_empty_history_without_snapshot(self, generator: InsightGenerator) -> None:
        """Test that no evidence gives no insights, even for a poor score."""
        assert generator.generate(None, _stability(40), ChangeVelocity(), RiskTrend()) == []

    def test_sorted_and_capped(self, make_changelog) -> None:
        """Test that the highest priorities are kept, in order."""
        history = [make_changelog(info=1, day=0), make_changelog(breaking=3, day=1)]
        velocity = ChangeVelocity(
            accelerating=True,
            acceleration_rate=1.0,
            breaking_changes_per_release=3.0,
        )
        risk = RiskTrend(direction=TrendDirection.DEGRADING, change_percentage=50.0)
        insights = InsightGenerator(max_insights=3).generate(history, _stability(40), velocity, risk)

        assert [i.priority for i in insights] == [9, 8, 8]
        assert insights[0].title == "Poor API Stability"


class TestRecommendationEngine:
    """Tests for recommendation generation."""

    def test_failing_stability(self, engine: RecommendationEngine) -> None:
        """Test the full set for a failing grade, ranked by efficiency."""
        recommendations = engine.recommend(_stability(40, ratio=0.5))

        assert [r.title for r in recommendations] == [
            "Reduce Breaking Change Ratio",
            "Implement Change Freeze",
            "Improve Deprecation Policy",
            "Major Version Planning",
        ]
        assert recommendations[1].is_quick_win

    def test_poor_stability(self, engine: RecommendationEngine) -> None:
        """Test that grade D only asks for a deprecation policy."""
        recommendations = engine.recommend(_stability(65, ratio=0.1))
        assert [r.type for r in recommendations] == [RecommendationType.DEPRECATION]

    def test_good_stability(self, engine: RecommendationEngine) -> None:
        """Test that a stable history needs nothing."""
        assert engine.recommend(_stability(95)) == []
        assert engine.recommend() == []

    def test_complexity(self, engine: RecommendationEngine) -> None:
        """Test that only complexity above 70 is flagged."""
        high = ComplexityScore(score=75, level="High", is_complex=True)
        moderate = ComplexityScore(score=70, level="Moderate", is_complex=True)

        assert [r.title for r in engine.recommend(complexity=high)] == ["Reduce API Complexity"]
        assert engine.recommend(complexity=moderate) == []

    def test_technical_debt(self, engine: RecommendationEngine) -> None:
        """Test one recommendation per kind of debt present."""
        debt = TechnicalDebt(deprecated_endpoints_count=1, missing_documentation_count=2)
        titles = {r.title for r in engine.recommend(debt=debt)}
        assert titles == {"Remove Deprecated Endpoints", "Improve Documentation Coverage"}

    def test_failed_compliance(self, engine: RecommendationEngine) -> None:
        """Test that failed checks ask for compliance fixes."""
        compliance = ComplianceStatus(
            checks=[ComplianceCheck(name="API Version", category="Versioning", status=CheckStatus.FAILED)],
        )
        recommendations = engine.recommend(compliance=compliance)

        assert [r.type for r in recommendations] == [RecommendationType.COMPLIANCE]
        assert recommendations[0].description == "1 compliance check(s) failed"

    def test_capped(self) -> None:
        """Test the recommendation limit."""
        recommendations = RecommendationEngine(max_recommendations=1).recommend(_stability(40, ratio=0.5))
        assert [r.title for r in recommendations] == ["Reduce Breaking Change Ratio"]

    def test_efficiency_score(self) -> None:
        """Test impact per effort, with zero effort scoring the raw impact."""
        rec = Recommendation(
            type=RecommendationType.DOCUMENTATION,
            title="Docs",
            description="d",
            action="a",
            priority=5,
            effort=0,
            impact=6,
        )
        assert rec.efficiency_score == 6
        assert not rec.is_quick_win
        assert not rec.is_high_priority


class TestComplianceChecker:
    """Tests for compliance checks."""

    def test_history_only(self, make_changelog) -> None:
        """Test the checks available without a snapshot."""
        history = [
            make_changelog(info=2, day=0, from_version="1.0.0", to_version="1.1.0"),
            make_changelog(breaking=1, info=1, day=10, from_version="1.1.0", to_version="2.0.0"),
            make_changelog(info=1, day=20, from_version="2.0.0", to_version="2.1.0"),
        ]
        status = ComplianceChecker().check(history)

        assert [c.name for c in status.checks] == [
            "API Version",
            "API Name",
            "Deprecation Policy",
            "Semantic Versioning",
        ]
        assert [c.status for c in status.checks] == [
            CheckStatus.PASSED,
            CheckStatus.PASSED,
            CheckStatus.WARNING,
            CheckStatus.PASSED,
        ]
        assert status.state == ComplianceState.PARTIAL
        assert status.score == 75
        assert status.level == ComplianceLevel.MOSTLY_COMPLIANT
        assert status.api_name == "Test API"
        assert status.passed_checks == 3

    def test_with_snapshot(self, make_changelog, petstore_v2: Snapshot) -> None:
        """Test that the snapshot adds a documentation check."""
        history = [make_changelog(info=1, from_version="1.0.0", to_version="2.0.0")]
        status = ComplianceChecker().check(history, petstore_v2)

        docs = status.checks[-1]
        assert docs.name == "Endpoint Documentation"
        assert docs.status == CheckStatus.WARNING
        assert docs.message == "67% of endpoints are documented"
        assert status.api_name == "Petstore"
        assert status.total_checks == 5
        assert status.score == 80

    def test_missing_version_fails(self, make_changelog) -> None:
        """Test that an unversioned API is non-compliant."""
        status = ComplianceChecker().check([make_changelog(info=1)])

        assert status.state == ComplianceState.NON_COMPLIANT
        assert [c.name for c in status.failed_checks] == ["API Version"]
        assert status.score == 75

    def test_undocumented_snapshot_fails(self) -> None:
        """Test that low documentation coverage fails."""
        snapshot = Snapshot(name="Bare", version="1.0.0", endpoints=[Endpoint(path="/a", method="GET")])
        status = ComplianceChecker().check([], snapshot)

        assert status.checks[-1].status == CheckStatus.FAILED
        assert status.state == ComplianceState.NON_COMPLIANT

    def test_no_evidence(self) -> None:
        """Test an empty history with nothing to name the API."""
        status = ComplianceChecker().check(None)

        assert [c.status for c in status.checks] == [
            CheckStatus.FAILED,
            CheckStatus.WARNING,
            CheckStatus.PASSED,
        ]
        assert status.score == 33
        assert status.level == ComplianceLevel.NON_COMPLIANT

    @pytest.mark.parametrize(
        "score,level,label",
        [
            (100, ComplianceLevel.FULLY_COMPLIANT, "Fully Compliant"),
            (70, ComplianceLevel.MOSTLY_COMPLIANT, "Mostly Compliant"),
            (50, ComplianceLevel.PARTIALLY_COMPLIANT, "Partially Compliant"),
            (49, ComplianceLevel.NON_COMPLIANT, "Non-Compliant"),
        ],
    )
    def test_levels(self, score: int, level: ComplianceLevel, label: str) -> None:
        """Test the compliance level bands."""
        assert ComplianceLevel.from_score(score) == level
        assert level.label == label

    def test_documentation_coverage(self, petstore_v2: Snapshot) -> None:
        """Test the share of documented endpoints."""
        assert documentation_coverage(petstore_v2) == pytest.approx(2 / 3)
        assert documentation_coverage(Snapshot(name="Empty")) == 1.0
