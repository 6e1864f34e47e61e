"""
Insight, recommendation and compliance models.

Advisory output derived from a changelog history and, optionally, the
current snapshot of the API.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class PatternType(str, Enum):
    """Kind of release pattern found in a history."""

    FREQUENT_BREAKING_CHANGES = "frequent_breaking_changes"
    SEASONAL_RELEASES = "seasonal_releases"
    WEEKLY_PATTERN = "weekly_pattern"
    BURST_RELEASES = "burst_releases"


class Pattern(BaseModel):
    """A recurring shape in when or how an API is released."""

    type: PatternType
    description: str
    confidence: float = Field(ge=0.0, le=1.0)
    details: dict[str, Any] = Field(default_factory=dict)

    class Config:
        frozen = True


class InsightType(str, Enum):
    """Subject of an insight."""

    BREAKING_CHANGE_TREND = "breaking_change_trend"
    STABILITY_ALERT = "stability_alert"
    DEPRECATION_REMINDER = "deprecation_reminder"
    VELOCITY_CHANGE = "velocity_change"
    RISK_INCREASE = "risk_increase"
    RISK_DECREASE = "risk_decrease"
    POSITIVE_TREND = "positive_trend"


class Insight(BaseModel):
    """An observation about an API's evolution, ranked by priority."""

    type: InsightType
    title: str
    description: str
    priority: int = Field(ge=0, le=10, description="Higher is more urgent")
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)

    class Config:
        frozen = True

    @property
    def is_high_priority(self) -> bool:
        return self.priority >= 8


class RecommendationType(str, Enum):
    """Area a recommendation improves."""

    STABILITY_IMPROVEMENT = "stability_improvement"
    DEBT_REDUCTION = "debt_reduction"
    DOCUMENTATION = "documentation"
    DEPRECATION = "deprecation"
    VERSIONING = "versioning"
    PERFORMANCE = "performance"
    COMPLIANCE = "compliance"


class Recommendation(BaseModel):
    """
    A suggested action.

    Effort and impact are both rated 1-10; recommendations are ranked
    by impact per unit of effort.
    """

    type: RecommendationType
    title: str
    description: str
    action: str
    priority: int = Field(ge=0, le=10)
    effort: int = Field(ge=0, le=10)
    impact: int = Field(ge=0, le=10)

    class Config:
        frozen = True

    @property
    def efficiency_score(self) -> float:
        if self.effort == 0:
            return float(self.impact)
        return self.impact / self.effort

    @property
    def is_quick_win(self) -> bool:
        """Cheap and valuable."""
        return self.effort <= 3 and self.impact >= 7

    @property
    def is_high_priority(self) -> bool:
        return self.priority >= 7


class CheckStatus(str, Enum):
    """Outcome of a single compliance check."""

    PASSED = "passed"
    WARNING = "warning"
    FAILED = "failed"


class ComplianceCheck(BaseModel):
    """One named check against API evolution practices."""

    name: str
    category: str
    status: CheckStatus
    message: str = ""

    class Config:
        frozen = True


class ComplianceState(str, Enum):
    """Overall compliance: any failure is non-compliant, any warning partial."""

    COMPLIANT = "compliant"
    PARTIAL = "partial"
    NON_COMPLIANT = "non_compliant"


class ComplianceLevel(str, Enum):
    """Band of a compliance score."""

    FULLY_COMPLIANT = "fully_compliant"
    MOSTLY_COMPLIANT = "mostly_compliant"
    PARTIALLY_COMPLIANT = "partially_compliant"
    NON_COMPLIANT = "non_compliant"

    @classmethod
    def from_score(cls, score: int) -> "ComplianceLevel":
        if score >= 90:
            return cls.FULLY_COMPLIANT
        if score >= 70:
            return cls.MOSTLY_COMPLIANT
        if score >= 50:
            return cls.PARTIALLY_COMPLIANT
        return cls.NON_COMPLIANT

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title().replace("Non ", "Non-")


class ComplianceStatus(BaseModel):
    """Result of running every compliance check on an API."""

    api_name: Optional[str] = None
    state: ComplianceState = ComplianceState.COMPLIANT
    score: int = Field(default=100, ge=0, le=100, description="Percentage of checks passed")
    level: ComplianceLevel = ComplianceLevel.FULLY_COMPLIANT
    checks: list[ComplianceCheck] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def total_checks(self) -> int:
        return len(self.checks)

    @property
    def passed_checks(self) -> int:
        return sum(1 for c in self.checks if c.status == CheckStatus.PASSED)

    @property
    def failed_checks(self) -> list[ComplianceCheck]:
        return [c for c in self.checks if c.status == CheckStatus.FAILED]
