"""
Generic trend analysis over ordered numeric series.

The raw direction answers "is the number going up": a rising series is
IMPROVING. Callers whose good direction is down (risk, complexity) must
invert the result with :meth:`TrendAnalyzer.invert`.
"""

import math
from typing import Sequence

from changelog_hub.models.metrics import TrendDirection

DEFAULT_THRESHOLD = 0.1
DEFAULT_MIN_DATA_POINTS = 3
DEFAULT_SIGNIFICANT_CHANGE_RATIO = 0.2


class TrendAnalyzer:
    """
    Least-squares trend classification of a series ordered oldest to newest.

    Args:
        threshold: Absolute slope below which a series is STABLE.
        min_data_points: Points needed before a non-STABLE direction is reported.
        significant_change_ratio: Relative last-step change considered significant.
    """

    def __init__(
        self,
        threshold: float = DEFAULT_THRESHOLD,
        min_data_points: int = DEFAULT_MIN_DATA_POINTS,
        significant_change_ratio: float = DEFAULT_SIGNIFICANT_CHANGE_RATIO,
    ) -> None:
        self.threshold = threshold
        self.min_data_points = min_data_points
        self.significant_change_ratio = significant_change_ratio

    @staticmethod
    def slope(values: Sequence[float]) -> float:
        """
        Ordinary least-squares slope of values against their index.

        Returns 0.0 for fewer than two points.
        """
        n = len(values)
        if n < 2:
            return 0.0

        mean_x = (n - 1) / 2
        mean_y = sum(values) / n
        numerator = 0.0
        denominator = 0.0
        for x, y in enumerate(values):
            numerator += (x - mean_x) * (y - mean_y)
            denominator += (x - mean_x) ** 2

        if denominator == 0:
            return 0.0
        return numerator / denominator

    def direction(self, slope: float) -> TrendDirection:
        """Classify a raw slope against the configured threshold."""
        return TrendDirection.from_slope(slope, self.threshold)

    def analyze(self, values: Sequence[float]) -> TrendDirection:
        """Raw direction of a series; STABLE below the minimum number of points."""
        if len(values) < self.min_data_points:
            return TrendDirection.STABLE
        return self.direction(self.slope(values))

    @staticmethod
    def invert(direction: TrendDirection) -> TrendDirection:
        """Flip a raw direction for series where lower is better."""
        return direction.inverted()

    @staticmethod
    def average(values: Sequence[float]) -> float:
        if not values:
            return 0.0
        return sum(values) / len(values)

    @classmethod
    def std_dev(cls, values: Sequence[float]) -> float:
        """Population standard deviation (n divisor)."""
        if not values:
            return 0.0
        mean = cls.average(values)
        variance = sum((v - mean) ** 2 for v in values) / len(values)
        return math.sqrt(variance)

    def has_significant_recent_change(self, values: Sequence[float]) -> bool:
        """
        Whether the last step moved by at least the configured ratio.

        A previous value of zero is significant iff the last value is positive.
        """
        if len(values) < 2:
            return False
        last, prev = values[-1], values[-2]
        if prev == 0:
            return last > 0
        return abs(last - prev) / abs(prev) >= self.significant_change_ratio

    def is_improving(self, values: Sequence[float]) -> bool:
        return self.analyze(values) == TrendDirection.IMPROVING

    def is_degrading(self, values: Sequence[float]) -> bool:
        return self.analyze(values) == TrendDirection.DEGRADING

    def is_stable(self, values: Sequence[float]) -> bool:
        return self.analyze(values) == TrendDirection.STABLE
