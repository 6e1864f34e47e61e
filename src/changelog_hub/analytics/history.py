"""
History analysis service.

Bundles the per-history analytics (stability, velocity, risk trend,
cumulative risk) and the advice derived from them (patterns, insights,
recommendations, compliance) with the per-snapshot analytics
(complexity, technical debt) into report objects.
"""

import logging
from typing import Optional

from changelog_hub.analytics.complexity import ComplexityAnalyzer
from changelog_hub.analytics.insights import (
    ComplianceChecker,
    InsightGenerator,
    PatternDetector,
    RecommendationEngine,
)
from changelog_hub.analytics.risk_trend import RiskCalculator
from changelog_hub.analytics.stability import StabilityScorer
from changelog_hub.analytics.trend import TrendAnalyzer
from changelog_hub.analytics.velocity import VelocityCalculator
from changelog_hub.config import Config
from changelog_hub.models.changelog import Changelog
from changelog_hub.models.report import HistoryReport, SnapshotReport
from changelog_hub.models.snapshot import Snapshot

logger = logging.getLogger(__name__)


class HistoryAnalyzer:
    """
    Run every analytic over a history or a snapshot.

    Each history is analyzed on its own; histories of different APIs
    share nothing.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        """
        Initialize the analyzer.

        Args:
            config: Configuration; defaults are used when None.
        """
        self.config = config or Config()
        trend = TrendAnalyzer(
            threshold=self.config.trend.threshold,
            min_data_points=self.config.trend.min_data_points,
            significant_change_ratio=self.config.trend.significant_change_ratio,
        )
        self.stability_scorer = StabilityScorer(self.config.stability)
        self.velocity_calculator = VelocityCalculator(
            acceleration_threshold=self.config.velocity.acceleration_threshold,
        )
        self.risk_calculator = RiskCalculator(trend)
        self.complexity_analyzer = ComplexityAnalyzer(trend)
        self.pattern_detector = PatternDetector()
        self.insight_generator = InsightGenerator()
        self.recommendation_engine = RecommendationEngine()
        self.compliance_checker = ComplianceChecker()

    def analyze(
        self,
        history: Optional[list[Changelog]],
        api_name: Optional[str] = None,
        snapshot: Optional[Snapshot] = None,
    ) -> HistoryReport:
        """
        Analyze one API's changelog history.

        Args:
            history: Changelogs in any order.
            api_name: Name to stamp on the report; defaults to the most
                recent changelog's API name.
            snapshot: Current snapshot of the API. When given, its
                structure feeds the insights, recommendations and
                compliance checks.

        Returns:
            The history report.
        """
        history = list(history or [])
        if api_name is None and history:
            api_name = max(history, key=lambda c: c.generated_at).api_name

        logger.debug("Analyzing %d changelogs for %s", len(history), api_name)

        stability = self.stability_scorer.score(history, api_name)
        velocity = self.velocity_calculator.calculate(history, api_name)
        risk_trend = self.risk_calculator.analyze_trend(history, api_name)
        compliance = self.compliance_checker.check(history, snapshot, api_name)

        complexity = debt = None
        if snapshot is not None:
            complexity = self.complexity_analyzer.analyze(snapshot)
            debt = self.complexity_analyzer.analyze_technical_debt(snapshot)

        return HistoryReport(
            api_name=api_name,
            periods_analyzed=len(history),
            stability=stability,
            velocity=velocity,
            risk_trend=risk_trend,
            cumulative_risk=self.risk_calculator.cumulative_risk(history),
            patterns=self.pattern_detector.detect(history),
            insights=self.insight_generator.generate(
                history, stability, velocity, risk_trend, snapshot
            ),
            recommendations=self.recommendation_engine.recommend(
                stability, complexity, debt, compliance
            ),
            compliance=compliance,
        )

    def analyze_many(self, histories: dict[str, list[Changelog]]) -> dict[str, HistoryReport]:
        """Analyze independent histories keyed by API name."""
        return {name: self.analyze(history, name) for name, history in histories.items()}

    def analyze_snapshot(self, snapshot: Snapshot) -> SnapshotReport:
        """
        Analyze the structure of a single snapshot.

        Args:
            snapshot: The snapshot to analyze.

        Returns:
            Complexity and technical debt of the snapshot.
        """
        return SnapshotReport(
            api_name=snapshot.name,
            version=snapshot.version,
            complexity=self.complexity_analyzer.analyze(snapshot),
            technical_debt=self.complexity_analyzer.analyze_technical_debt(snapshot),
        )
