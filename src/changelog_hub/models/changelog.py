"""
Changelog data models.

A changelog is the structured diff between two snapshots plus its risk
assessment.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, computed_field

from changelog_hub.models.change import BreakingChange, Change, ChangeType, Severity


class RiskLevel(str, Enum):
    """Risk bucket derived from the overall score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_score(cls, score: int) -> "RiskLevel":
        """Map a 0-100 score onto a level."""
        if score >= 75:
            return cls.CRITICAL
        if score >= 50:
            return cls.HIGH
        if score >= 25:
            return cls.MEDIUM
        return cls.LOW


class SemverBump(str, Enum):
    """Minimum version bump implied by a changelog."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


class RiskAssessment(BaseModel):
    """Aggregate risk of a single change list."""

    overall_score: int = Field(ge=0, le=100)
    level: RiskLevel
    breaking_changes_count: int = Field(default=0)
    total_changes_count: int = Field(default=0)
    semver_recommendation: SemverBump = Field(default=SemverBump.PATCH)
    recommendation: str = Field(default="")
    changes_by_severity: dict[Severity, int] = Field(default_factory=dict)

    class Config:
        frozen = True


class Changelog(BaseModel):
    """Structured diff between two versions of an API."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    api_name: str = Field(default="Unknown")
    from_version: Optional[str] = Field(default=None)
    to_version: Optional[str] = Field(default=None)
    changes: list[Union[BreakingChange, Change]] = Field(
        default_factory=list,
        description="Changes ordered by severity",
    )
    risk_assessment: Optional[RiskAssessment] = Field(default=None)
    generated_at: datetime = Field(default_factory=datetime.now)

    class Config:
        frozen = True

    @computed_field  # type: ignore[misc]
    @property
    def breaking_changes(self) -> list[Union[BreakingChange, Change]]:
        """BREAKING subset of the changes, in the same order."""
        return [c for c in self.changes if c.severity == Severity.BREAKING]

    @property
    def has_breaking_changes(self) -> bool:
        """Check if there are any breaking changes."""
        return len(self.breaking_changes) > 0

    @property
    def total_changes(self) -> int:
        """Number of changes (breaking changes included once)."""
        return len(self.changes)

    def get_changes_by_severity(self, severity: Severity) -> list[Change]:
        """Get changes filtered by severity."""
        return [c for c in self.changes if c.severity == severity]

    def get_changes_by_type(self, change_type: ChangeType) -> list[Change]:
        """Get changes filtered by change type."""
        return [c for c in self.changes if c.type == change_type]
