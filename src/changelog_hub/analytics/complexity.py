"""
Structural complexity and technical debt of a single snapshot.
"""

import logging
import re
from typing import Optional

from changelog_hub.analytics.trend import TrendAnalyzer
from changelog_hub.models.metrics import (
    ComplexityScore,
    ComplexityTrend,
    DebtItem,
    DebtType,
    TechnicalDebt,
)
from changelog_hub.models.snapshot import Snapshot
from changelog_hub.scoring import to_score

logger = logging.getLogger(__name__)

ENDPOINT_WEIGHT = 0.30
PARAMETER_WEIGHT = 0.25
RESPONSE_WEIGHT = 0.20
SCHEMA_WEIGHT = 0.25

COMPLEX_THRESHOLD = 60

# Lowercase, digits, '/', '{}', '-' only.
NAMING_CONVENTION = re.compile(r"^[a-z0-9/{}-]*$")

_LEVELS = [
    (20, "Simple"),
    (40, "Low"),
    (60, "Moderate"),
    (80, "High"),
]


def complexity_level(score: int) -> str:
    """Label bucket of a complexity score."""
    for upper, label in _LEVELS:
        if score <= upper:
            return label
    return "Very High"


class ComplexityAnalyzer:
    """Score the structural complexity and technical debt of snapshots."""

    def __init__(self, trend_analyzer: Optional[TrendAnalyzer] = None) -> None:
        self.trend_analyzer = trend_analyzer or TrendAnalyzer()

    def analyze(self, snapshot: Optional[Snapshot]) -> ComplexityScore:
        """
        Compute the complexity of a snapshot.

        The composite is a 30/25/20/25 weighted blend of the endpoint,
        parameter, response and schema scores, rounded and capped at 100.
        A snapshot without endpoints scores 0.

        Args:
            snapshot: The snapshot to analyze.

        Returns:
            The complexity score with its components.
        """
        if snapshot is None or not snapshot.endpoints:
            return ComplexityScore(
                api_name=snapshot.name if snapshot else None,
                score=0,
                level=complexity_level(0),
                is_complex=False,
            )

        endpoint_score = self.endpoint_score(snapshot)
        parameter_score = self.parameter_score(snapshot)
        response_score = self.response_score(snapshot)
        schema_score = self.schema_score(snapshot)

        composite = to_score(
            endpoint_score * ENDPOINT_WEIGHT
            + parameter_score * PARAMETER_WEIGHT
            + response_score * RESPONSE_WEIGHT
            + schema_score * SCHEMA_WEIGHT
        )

        return ComplexityScore(
            api_name=snapshot.name,
            score=composite,
            level=complexity_level(composite),
            is_complex=composite > COMPLEX_THRESHOLD,
            endpoint_score=endpoint_score,
            parameter_score=parameter_score,
            response_score=response_score,
            schema_score=schema_score,
            endpoint_count=len(snapshot.endpoints),
        )

    @staticmethod
    def endpoint_score(snapshot: Snapshot) -> int:
        """0-30 up to 10 endpoints, 30-60 up to 50, then slowly to 100."""
        count = len(snapshot.endpoints)
        if count <= 10:
            return count * 3
        if count <= 50:
            return 30 + (count - 10) * 30 // 40
        return min(100, 60 + (count - 50) // 2)

    @staticmethod
    def parameter_score(snapshot: Snapshot) -> int:
        endpoints = snapshot.endpoints
        if not endpoints:
            return 0

        counts = [len(e.parameters) for e in endpoints]
        total = sum(counts)
        required = sum(1 for e in endpoints for p in e.parameters if p.required)
        avg = total / len(endpoints)

        avg_score = int(min(50, avg * 10))
        max_score = min(30, max(counts) * 3)
        required_score = int(required / total * 20) if total else 0
        return min(100, avg_score + max_score + required_score)

    @staticmethod
    def response_score(snapshot: Snapshot) -> int:
        endpoints = snapshot.endpoints
        if not endpoints:
            return 0

        avg = sum(len(e.responses) for e in endpoints) / len(endpoints)
        if avg <= 2:
            return int(avg * 15)
        if avg <= 5:
            return int(30 + (avg - 2) * 15)
        return min(100, int(75 + (avg - 5) * 5))

    @staticmethod
    def schema_score(snapshot: Snapshot) -> int:
        """Two points per estimated schema (responses plus request bodies)."""
        estimated = sum(
            len(e.responses) + (1 if e.request_body is not None else 0)
            for e in snapshot.endpoints
        )
        return min(100, estimated * 2)

    def analyze_technical_debt(self, snapshot: Optional[Snapshot]) -> TechnicalDebt:
        """
        Find deprecated, undocumented and inconsistently named endpoints.

        The debt score is the share of the 3-per-endpoint possible findings
        that were found, as a 0-100 integer.

        Args:
            snapshot: The snapshot to analyze.

        Returns:
            Counts, score and one DebtItem per finding.
        """
        if snapshot is None:
            return TechnicalDebt()

        items: list[DebtItem] = []
        deprecated = 0
        missing_docs = 0
        inconsistent = 0

        for endpoint in snapshot.endpoints:
            label = endpoint.display_name

            if endpoint.deprecated:
                deprecated += 1
                items.append(DebtItem(
                    type=DebtType.DEPRECATED_ENDPOINT,
                    path=label,
                    description=f"Endpoint {label} is deprecated",
                    recommendation="Plan removal and migrate consumers to a replacement",
                ))

            if not endpoint.description:
                missing_docs += 1
                items.append(DebtItem(
                    type=DebtType.MISSING_DOCUMENTATION,
                    path=label,
                    description=f"Endpoint {label} has no description",
                    recommendation="Add a description documenting the endpoint's behavior",
                ))

            if endpoint.path is not None and not NAMING_CONVENTION.match(endpoint.path):
                inconsistent += 1
                items.append(DebtItem(
                    type=DebtType.INCONSISTENT_NAMING,
                    path=label,
                    description=f"Path '{endpoint.path}' does not follow lowercase-hyphen naming",
                    recommendation="Use lowercase letters, digits and hyphens in paths",
                ))

        total_endpoints = len(snapshot.endpoints)
        if total_endpoints == 0:
            debt_score = 0
        else:
            ratio = (deprecated + missing_docs + inconsistent) / (total_endpoints * 3)
            debt_score = int(min(100, ratio * 100))

        return TechnicalDebt(
            api_name=snapshot.name,
            deprecated_endpoints_count=deprecated,
            missing_documentation_count=missing_docs,
            inconsistent_naming_count=inconsistent,
            debt_score=debt_score,
            items=items,
        )

    def analyze_trend(self, snapshots: list[Snapshot]) -> ComplexityTrend:
        """
        Complexity direction across snapshots ordered oldest to newest.

        Rising complexity is DEGRADING.
        """
        scores = [self.analyze(s).score for s in snapshots]
        if not scores:
            return ComplexityTrend()

        slope = self.trend_analyzer.slope(scores)
        direction = self.trend_analyzer.invert(self.trend_analyzer.analyze(scores))
        return ComplexityTrend(
            direction=direction,
            scores=scores,
            slope=slope,
            current_score=scores[-1],
            previous_score=scores[-2] if len(scores) > 1 else scores[-1],
        )
