import math


def round_half_up(value: float) -> int:
    """Round .5 up, unlike the builtin round() which rounds to even."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
