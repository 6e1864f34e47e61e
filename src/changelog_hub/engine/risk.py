"""
Risk assessment of a single change list.
"""

from changelog_hub.engine.rules import MIN_BREAKING_IMPACT, impact_score
from changelog_hub.models.change import BreakingChange, Change, ChangeType, Severity
from changelog_hub.models.changelog import RiskAssessment, RiskLevel, SemverBump
from changelog_hub.scoring import to_score

BREAKING_COUNT_WEIGHT = 0.5
IMPACT_WEIGHT = 0.3
BREAKING_RATIO_WEIGHT = 0.2

# Points contributed by each breaking change before weighting.
POINTS_PER_BREAKING_CHANGE = 20


def _impact_of(change: Change) -> int:
    # Floored so a hand-built low-impact change cannot lower the average
    # by more than its own count contribution adds.
    if isinstance(change, BreakingChange):
        return max(change.impact_score, MIN_BREAKING_IMPACT)
    return max(impact_score(change), MIN_BREAKING_IMPACT)


def _semver_for(breaking_count: int, changes: list[Change]) -> SemverBump:
    if breaking_count > 0:
        return SemverBump.MAJOR
    if any(c.type == ChangeType.ADDED for c in changes):
        return SemverBump.MINOR
    return SemverBump.PATCH


def _recommendation_for(level: RiskLevel, breaking_count: int, total: int) -> str:
    if level == RiskLevel.CRITICAL:
        return (
            "Critical changes detected. Major version bump required. "
            f"{breaking_count} breaking change(s) out of {total} total."
        )
    if level == RiskLevel.HIGH:
        return "Significant changes detected. Consider a major version bump."
    if level == RiskLevel.MEDIUM:
        return "Moderate changes detected. Minor version bump suggested."
    return "Minor changes detected. Patch version bump suggested."


def assess_risk(changes: list[Change]) -> RiskAssessment:
    """
    Compute the aggregate risk of a change list.

    The overall score is
    ``round(breaking*20*0.5 + impact_avg*0.3 + breaking/total*100*0.2)``
    clamped to 0-100, and 0 for an empty list. Breaking impacts below
    MIN_BREAKING_IMPACT are raised to it, so adding a breaking change
    never lowers the score.

    Args:
        changes: Changes of one comparison, in any order.

    Returns:
        The risk assessment.
    """
    total = len(changes)
    breaking = [c for c in changes if c.severity == Severity.BREAKING]
    breaking_count = len(breaking)

    by_severity = {severity: 0 for severity in Severity}
    for change in changes:
        by_severity[change.severity] += 1

    if total == 0:
        score = 0
    else:
        impact_avg = (
            sum(_impact_of(c) for c in breaking) / breaking_count if breaking_count else 0.0
        )
        raw = (
            breaking_count * POINTS_PER_BREAKING_CHANGE * BREAKING_COUNT_WEIGHT
            + impact_avg * IMPACT_WEIGHT
            + (breaking_count / total) * 100 * BREAKING_RATIO_WEIGHT
        )
        score = to_score(raw)

    level = RiskLevel.from_score(score)
    return RiskAssessment(
        overall_score=score,
        level=level,
        breaking_changes_count=breaking_count,
        total_changes_count=total,
        semver_recommendation=_semver_for(breaking_count, changes),
        recommendation=_recommendation_for(level, breaking_count, total),
        changes_by_severity=by_severity,
    )
