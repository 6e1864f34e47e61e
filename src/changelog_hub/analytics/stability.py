"""
Stability scoring over a changelog history.

Four factors, each scored 0-100, are combined with configurable weights
into a composite score and a letter grade. An empty history scores 100:
there is no evidence of instability.
"""

import logging
from typing import Optional

from changelog_hub.config import StabilityWeights
from changelog_hub.models.change import ChangeType
from changelog_hub.models.changelog import Changelog
from changelog_hub.models.metrics import StabilityFactor, StabilityGrade, StabilityScore
from changelog_hub.scoring import clamp, to_score

logger = logging.getLogger(__name__)

# Average gap between breaking releases considered fully healthy.
HEALTHY_BREAKING_GAP_DAYS = 90.0


def mentions_deprecation(changelog: Changelog) -> bool:
    """Whether any change deprecates something or talks about deprecation."""
    for change in changelog.changes:
        if change.type == ChangeType.DEPRECATED:
            return True
        if "deprecat" in (change.description or "").lower():
            return True
    return False


def major_version(version: Optional[str]) -> Optional[int]:
    """
    Leading major component of a version string.

    ``"v2.1.0"`` gives 2. Anything unparsable gives None.
    """
    if not version:
        return None
    text = version.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    head = text.split(".", 1)[0]
    try:
        return int(head)
    except ValueError:
        return None


def is_major_bump(from_version: Optional[str], to_version: Optional[str]) -> bool:
    """Malformed versions never count as a major bump."""
    old_major = major_version(from_version)
    new_major = major_version(to_version)
    if old_major is None or new_major is None:
        return False
    return new_major > old_major


class StabilityScorer:
    """
    Score how disciplined an API's evolution has been.

    Args:
        weights: Factor weights. Defaults to 0.40/0.25/0.20/0.15.
    """

    def __init__(self, weights: Optional[StabilityWeights] = None) -> None:
        self.weights = weights or StabilityWeights()

    def score(
        self,
        history: Optional[list[Changelog]],
        api_name: Optional[str] = None,
    ) -> StabilityScore:
        """
        Compute the stability score of a history.

        Args:
            history: Changelogs in any order; sorted by generated_at here.
            api_name: Name to stamp on the result.

        Returns:
            The stability score with its factor breakdown.
        """
        if not history:
            logger.debug("Empty history, assuming perfect stability")
            return self._build(api_name, [], 100.0, 100.0, 100.0, 100.0, 0.0)

        ordered = sorted(history, key=lambda c: c.generated_at)

        total_changes = sum(len(c.changes) for c in ordered)
        breaking_changes = sum(len(c.breaking_changes) for c in ordered)
        ratio = breaking_changes / total_changes if total_changes else 0.0

        return self._build(
            api_name or ordered[-1].api_name,
            ordered,
            self.breaking_ratio_score(total_changes, breaking_changes),
            self.time_between_breaking_score(ordered),
            self.deprecation_score(ordered),
            self.semver_compliance_score(ordered),
            ratio,
            total_changes=total_changes,
            breaking_changes=breaking_changes,
        )

    @staticmethod
    def breaking_ratio_score(total_changes: int, breaking_changes: int) -> float:
        """100 with no changes, falling linearly to 0 at a 50% breaking ratio."""
        if total_changes == 0:
            return 100.0
        ratio = breaking_changes / total_changes
        return clamp(100.0 * (1 - 2 * ratio))

    @staticmethod
    def time_between_breaking_score(ordered: list[Changelog]) -> float:
        """Average gap in whole days between breaking releases, 90 or more scores 100."""
        timestamps = [c.generated_at for c in ordered if c.has_breaking_changes]
        if len(timestamps) < 2:
            return 100.0

        gaps = [
            (later - earlier).days
            for earlier, later in zip(timestamps, timestamps[1:])
        ]
        avg_days = sum(gaps) / len(gaps)
        if avg_days >= HEALTHY_BREAKING_GAP_DAYS:
            return 100.0
        return clamp(100.0 * avg_days / HEALTHY_BREAKING_GAP_DAYS)

    @staticmethod
    def deprecation_score(ordered: list[Changelog]) -> float:
        """
        Penalize breaking releases that do not announce a deprecation.

        The penalty is taken over every changelog, so one unannounced
        breaking release among four scores 75.
        """
        if not ordered:
            return 100.0
        bad = sum(
            1 for c in ordered
            if c.has_breaking_changes and not mentions_deprecation(c)
        )
        return 100.0 * (1 - bad / len(ordered))

    @staticmethod
    def semver_compliance_score(ordered: list[Changelog]) -> float:
        compliant = 0
        non_compliant = 0
        for changelog in ordered:
            if not changelog.from_version or not changelog.to_version:
                continue
            if not changelog.has_breaking_changes:
                compliant += 1
            elif is_major_bump(changelog.from_version, changelog.to_version):
                compliant += 1
            else:
                non_compliant += 1

        if compliant + non_compliant == 0:
            return 100.0
        return 100.0 * compliant / (compliant + non_compliant)

    def _build(
        self,
        api_name: Optional[str],
        ordered: list[Changelog],
        ratio_score: float,
        time_score: float,
        deprecation_score: float,
        semver_score: float,
        ratio: float,
        total_changes: int = 0,
        breaking_changes: int = 0,
    ) -> StabilityScore:
        w = self.weights
        factors = [
            StabilityFactor(
                name="breaking_change_ratio",
                weight=w.breaking_change_ratio,
                score=ratio_score,
                description="Share of changes that are breaking",
            ),
            StabilityFactor(
                name="time_between_breaking_changes",
                weight=w.time_between_breaking,
                score=time_score,
                description="Average gap between releases with breaking changes",
            ),
            StabilityFactor(
                name="deprecation_management",
                weight=w.deprecation_management,
                score=deprecation_score,
                description="Breaking releases that announce deprecations",
            ),
            StabilityFactor(
                name="semver_compliance",
                weight=w.semver_compliance,
                score=semver_score,
                description="Breaking releases that bump the major version",
            ),
        ]
        composite = to_score(sum(f.contribution for f in factors))

        return StabilityScore(
            api_name=api_name,
            score=composite,
            grade=StabilityGrade.from_score(composite),
            breaking_change_ratio=ratio,
            breaking_change_ratio_score=ratio_score,
            time_between_breaking_changes_score=time_score,
            deprecation_management_score=deprecation_score,
            semver_compliance_score=semver_score,
            total_changes_analyzed=total_changes,
            breaking_changes_count=breaking_changes,
            periods_analyzed=len(ordered),
            factors=factors,
        )
