"""
Report data models.

Aggregates handed to formatters and other consumers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from changelog_hub.models.insight import ComplianceStatus, Insight, Pattern, Recommendation
from changelog_hub.models.metrics import (
    ChangeVelocity,
    ComplexityScore,
    RiskTrend,
    StabilityScore,
    TechnicalDebt,
)


class HistoryReport(BaseModel):
    """Analytics over the changelog history of one API."""

    api_name: Optional[str] = Field(default=None)
    periods_analyzed: int = Field(default=0, description="Number of changelogs analyzed")
    stability: StabilityScore
    velocity: ChangeVelocity
    risk_trend: RiskTrend
    cumulative_risk: int = Field(default=0, ge=0, le=100)
    patterns: list[Pattern] = Field(default_factory=list)
    insights: list[Insight] = Field(default_factory=list, description="Highest priority first")
    recommendations: list[Recommendation] = Field(
        default_factory=list, description="Most efficient first"
    )
    compliance: Optional[ComplianceStatus] = Field(default=None)
    generated_at: datetime = Field(default_factory=datetime.now)

    class Config:
        frozen = True


class SnapshotReport(BaseModel):
    """Structural analysis of a single snapshot."""

    api_name: str
    version: Optional[str] = Field(default=None)
    complexity: ComplexityScore
    technical_debt: TechnicalDebt
    generated_at: datetime = Field(default_factory=datetime.now)

    class Config:
        frozen = True
