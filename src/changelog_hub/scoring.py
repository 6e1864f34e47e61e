"""
Numeric helpers shared by the risk and analytics scorers.
"""


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    """Clamp a value into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's built-in round() rounds halves to even, which makes
    boundary scores (e.g. 62.5) depend on parity.
    """
    if value < 0:
        return -int(-value + 0.5)
    return int(value + 0.5)


def to_score(value: float) -> int:
    """Round and clamp a raw value into a 0-100 score."""
    return int(clamp(round_half_up(value)))
