"""
Data models for Changelog Hub.

This package contains Pydantic models for representing specification
snapshots, changes, changelogs, derived metrics and reports.
"""

from changelog_hub.models.snapshot import (
    Endpoint,
    Parameter,
    ParameterLocation,
    RequestBody,
    Response,
    SchemaField,
    SchemaKind,
    SchemaType,
    Snapshot,
    SourceType,
)
from changelog_hub.models.change import (
    BreakingChange,
    Change,
    ChangeCategory,
    ChangeType,
    Severity,
)
from changelog_hub.models.changelog import (
    Changelog,
    RiskAssessment,
    RiskLevel,
    SemverBump,
)
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
    ComplexityTrend,
    DebtItem,
    DebtType,
    RiskDataPoint,
    RiskTrend,
    StabilityFactor,
    StabilityGrade,
    StabilityScore,
    TechnicalDebt,
    TrendDirection,
)
from changelog_hub.models.report import HistoryReport, SnapshotReport

__all__ = [
    # Snapshot models
    "Endpoint",
    "Parameter",
    "ParameterLocation",
    "RequestBody",
    "Response",
    "SchemaField",
    "SchemaKind",
    "SchemaType",
    "Snapshot",
    "SourceType",
    # Change models
    "BreakingChange",
    "Change",
    "ChangeCategory",
    "ChangeType",
    "Severity",
    # Changelog models
    "Changelog",
    "RiskAssessment",
    "RiskLevel",
    "SemverBump",
    # Metric models
    "ChangeVelocity",
    "ComplexityScore",
    "ComplexityTrend",
    "DebtItem",
    "DebtType",
    "RiskDataPoint",
    "RiskTrend",
    "StabilityFactor",
    "StabilityGrade",
    "StabilityScore",
    "TechnicalDebt",
    "TrendDirection",
    # Insight models
    "CheckStatus",
    "ComplianceCheck",
    "ComplianceLevel",
    "ComplianceState",
    "ComplianceStatus",
    "Insight",
    "InsightType",
    "Pattern",
    "PatternType",
    "Recommendation",
    "RecommendationType",
    # Report models
    "HistoryReport",
    "SnapshotReport",
]
