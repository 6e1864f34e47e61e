"""
Derived metric models.

Read-only aggregates computed over one snapshot or over a changelog
history. None of them mutate their inputs.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from changelog_hub.models.changelog import RiskLevel


class TrendDirection(str, Enum):
    """Direction of a numeric series."""

    IMPROVING = "improving"
    STABLE = "stable"
    DEGRADING = "degrading"

    @classmethod
    def from_slope(cls, slope: float, threshold: float) -> "TrendDirection":
        """
        Classify a raw slope.

        The raw reading is "is the number going up": a rising series is
        IMPROVING. Series where lower is better must be inverted by the
        caller.
        """
        if slope > threshold:
            return cls.IMPROVING
        if slope < -threshold:
            return cls.DEGRADING
        return cls.STABLE

    def inverted(self) -> "TrendDirection":
        """Flip IMPROVING and DEGRADING; STABLE stays STABLE."""
        if self == TrendDirection.IMPROVING:
            return TrendDirection.DEGRADING
        if self == TrendDirection.DEGRADING:
            return TrendDirection.IMPROVING
        return TrendDirection.STABLE


class StabilityGrade(str, Enum):
    """Letter grade of a stability score."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    @property
    def label(self) -> str:
        return _GRADE_INFO[self][0]

    @property
    def min_score(self) -> int:
        return _GRADE_INFO[self][1]

    @property
    def max_score(self) -> int:
        return _GRADE_INFO[self][2]

    @property
    def description(self) -> str:
        return _GRADE_INFO[self][3]

    @classmethod
    def from_score(cls, score: int) -> "StabilityGrade":
        """Map a score onto a grade; out-of-range scores clamp to A or F."""
        for grade in (cls.A, cls.B, cls.C, cls.D):
            if score >= grade.min_score:
                return grade
        return cls.F


_GRADE_INFO = {
    StabilityGrade.A: ("Excellent", 90, 100, "Highly stable API with disciplined evolution"),
    StabilityGrade.B: ("Good", 80, 89, "Stable API with occasional breaking changes"),
    StabilityGrade.C: ("Fair", 70, 79, "Moderately stable API, review change practices"),
    StabilityGrade.D: ("Poor", 60, 69, "Unstable API with frequent breaking changes"),
    StabilityGrade.F: ("Failing", 0, 59, "Highly unstable API, consumers are at risk"),
}


class StabilityFactor(BaseModel):
    """One weighted input of the stability score."""

    name: str
    weight: float
    score: float
    description: str = ""

    class Config:
        frozen = True

    @property
    def contribution(self) -> float:
        """Weighted share of the composite score."""
        return self.weight * self.score


class StabilityScore(BaseModel):
    """How disciplined an API's historical evolution has been."""

    api_name: Optional[str] = None
    score: int = Field(ge=0, le=100)
    grade: StabilityGrade
    breaking_change_ratio: float = 0.0
    breaking_change_ratio_score: float = 100.0
    time_between_breaking_changes_score: float = 100.0
    deprecation_management_score: float = 100.0
    semver_compliance_score: float = 100.0
    total_changes_analyzed: int = 0
    breaking_changes_count: int = 0
    periods_analyzed: int = 0
    factors: list[StabilityFactor] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def is_stable(self) -> bool:
        """Grade B or better."""
        return self.score >= StabilityGrade.B.min_score


class ChangeVelocity(BaseModel):
    """Rate of change of an API over time."""

    api_name: Optional[str] = None
    changes_per_day: float = 0.0
    changes_per_week: float = 0.0
    changes_per_month: float = 0.0
    breaking_changes_per_release: float = 0.0
    average_time_between_releases: timedelta = Field(default_factory=timedelta)
    accelerating: bool = False
    acceleration_rate: float = 0.0
    total_releases: int = 0
    total_changes: int = 0
    total_breaking_changes: int = 0
    period_start: Optional[datetime] = None
    period_end: Optional[datetime] = None

    class Config:
        frozen = True


class RiskDataPoint(BaseModel):
    """Risk score of one changelog in a history."""

    timestamp: datetime
    risk_score: int
    version: Optional[str] = None
    breaking_changes: int = 0

    class Config:
        frozen = True


class RiskTrend(BaseModel):
    """Direction of risk across a changelog history."""

    api_name: Optional[str] = None
    direction: TrendDirection = TrendDirection.STABLE
    current_risk_score: int = 0
    previous_risk_score: int = 0
    change_percentage: float = 0.0
    projected_next_score: int = 0
    current_risk_level: RiskLevel = RiskLevel.LOW
    projected_risk_level: RiskLevel = RiskLevel.LOW
    slope: float = 0.0
    data_points: list[RiskDataPoint] = Field(default_factory=list)
    periods_analyzed: int = 0

    class Config:
        frozen = True


class ComplexityScore(BaseModel):
    """Structural complexity of a single snapshot."""

    api_name: Optional[str] = None
    score: int = Field(ge=0, le=100)
    level: str
    is_complex: bool
    endpoint_score: int = 0
    parameter_score: int = 0
    response_score: int = 0
    schema_score: int = 0
    endpoint_count: int = 0

    class Config:
        frozen = True


class ComplexityTrend(BaseModel):
    """Direction of complexity across a sequence of snapshots."""

    direction: TrendDirection = TrendDirection.STABLE
    scores: list[int] = Field(default_factory=list)
    slope: float = 0.0
    current_score: int = 0
    previous_score: int = 0

    class Config:
        frozen = True


class DebtType(str, Enum):
    """Kind of technical debt finding."""

    DEPRECATED_ENDPOINT = "deprecated_endpoint"
    MISSING_DOCUMENTATION = "missing_documentation"
    INCONSISTENT_NAMING = "inconsistent_naming"


class DebtItem(BaseModel):
    """A single technical debt finding."""

    type: DebtType
    path: str
    description: str
    recommendation: str = ""

    class Config:
        frozen = True


class TechnicalDebt(BaseModel):
    """Technical debt found in a single snapshot."""

    api_name: Optional[str] = None
    deprecated_endpoints_count: int = 0
    missing_documentation_count: int = 0
    inconsistent_naming_count: int = 0
    debt_score: int = Field(default=0, ge=0, le=100)
    items: list[DebtItem] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def total_issues(self) -> int:
        return (
            self.deprecated_endpoints_count
            + self.missing_documentation_count
            + self.inconsistent_naming_count
        )
