"""
Change velocity over a changelog history.
"""

import logging
from datetime import timedelta
from typing import Optional

from changelog_hub.models.changelog import Changelog
from changelog_hub.models.metrics import ChangeVelocity

logger = logging.getLogger(__name__)

MIN_RELEASES_FOR_ACCELERATION = 4
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30


class VelocityCalculator:
    """
    Release frequency and acceleration of an API.

    Args:
        acceleration_threshold: Ratio of second-half to first-half change
            totals above which the history is accelerating.
    """

    def __init__(self, acceleration_threshold: float = 1.2) -> None:
        self.acceleration_threshold = acceleration_threshold

    def calculate(
        self,
        history: Optional[list[Changelog]],
        api_name: Optional[str] = None,
    ) -> ChangeVelocity:
        """
        Compute velocity metrics.

        Changes are counted once through each changelog's change list;
        breaking changes are already part of it.

        Args:
            history: Changelogs in any order; sorted by generated_at here.
            api_name: Name to stamp on the result.

        Returns:
            The velocity. An empty history yields all zeros.
        """
        if not history:
            logger.debug("Empty history, velocity is zero")
            return ChangeVelocity(api_name=api_name)

        ordered = sorted(history, key=lambda c: c.generated_at)
        first, last = ordered[0].generated_at, ordered[-1].generated_at

        total_changes = sum(len(c.changes) for c in ordered)
        total_breaking = sum(len(c.breaking_changes) for c in ordered)
        days = max(1, (last - first).days)
        per_day = total_changes / days

        accelerating, rate = self._acceleration(ordered)

        return ChangeVelocity(
            api_name=api_name or ordered[-1].api_name,
            changes_per_day=per_day,
            changes_per_week=per_day * DAYS_PER_WEEK,
            changes_per_month=per_day * DAYS_PER_MONTH,
            breaking_changes_per_release=total_breaking / len(ordered),
            average_time_between_releases=self._average_gap(ordered),
            accelerating=accelerating,
            acceleration_rate=rate,
            total_releases=len(ordered),
            total_changes=total_changes,
            total_breaking_changes=total_breaking,
            period_start=first,
            period_end=last,
        )

    @staticmethod
    def _average_gap(ordered: list[Changelog]) -> timedelta:
        if len(ordered) < 2:
            return timedelta()
        gaps = [
            later.generated_at - earlier.generated_at
            for earlier, later in zip(ordered, ordered[1:])
        ]
        return sum(gaps, timedelta()) / len(gaps)

    def _acceleration(self, ordered: list[Changelog]) -> tuple[bool, float]:
        """Compare the two halves of the history split at n // 2."""
        if len(ordered) < MIN_RELEASES_FOR_ACCELERATION:
            return False, 0.0

        mid = len(ordered) // 2
        first_half, second_half = ordered[:mid], ordered[mid:]
        first_sum = sum(len(c.changes) for c in first_half)
        second_sum = sum(len(c.changes) for c in second_half)

        if first_sum == 0:
            accelerating = second_sum > 0
        else:
            accelerating = second_sum / first_sum > self.acceleration_threshold

        first_avg = first_sum / len(first_half)
        second_avg = second_sum / len(second_half)
        if first_avg == 0:
            rate = 1.0 if second_avg > 0 else 0.0
        else:
            rate = (second_avg - first_avg) / first_avg

        return accelerating, rate

    @staticmethod
    def changes_per_period(history: Optional[list[Changelog]], period_days: int) -> float:
        """
        Average number of changes per period of the given length.

        Args:
            history: Changelogs in any order.
            period_days: Length of one period in days.

        Returns:
            Changes per period, 0.0 for an empty history.
        """
        if not history or period_days <= 0:
            return 0.0
        ordered = sorted(history, key=lambda c: c.generated_at)
        total = sum(len(c.changes) for c in ordered)
        days = max(1, (ordered[-1].generated_at - ordered[0].generated_at).days)
        return total / days * period_days
