"""
History analytics for Changelog Hub.

This package contains modules for:
- Generic trend classification of numeric series
- Historical risk trend and cumulative risk
- Stability scoring, velocity metrics
- Snapshot complexity and technical debt
- Release patterns, insights, recommendations and compliance checks
"""

from changelog_hub.analytics.complexity import ComplexityAnalyzer
from changelog_hub.analytics.history import HistoryAnalyzer
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

__all__ = [
    "ComplexityAnalyzer",
    "ComplianceChecker",
    "HistoryAnalyzer",
    "InsightGenerator",
    "PatternDetector",
    "RecommendationEngine",
    "RiskCalculator",
    "StabilityScorer",
    "TrendAnalyzer",
    "VelocityCalculator",
]
