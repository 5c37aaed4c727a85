"""Time-varying brightness ("sparkle") and colour helpers.

All functions are pure: the same id and timestamp give the same value.
"""

import math


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_alpha(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def _phase(item_id: str) -> float:
    # Empty ids behave like length 1
    return (len(item_id) or 1) * 0.1


def node_sparkle(node_id: str, now_millis: float) -> float:
    """Node twinkle factor in [0.6, 1]."""
    return clamp(0.8 + 0.2 * math.sin(now_millis * 0.003 + _phase(node_id)), 0.6, 1.0)


def link_sparkle(link_id: str, now_millis: float) -> float:
    """Link twinkle factor in [0.5, 1]."""
    return clamp(0.7 + 0.3 * math.sin(now_millis * 0.002 + _phase(link_id)), 0.5, 1.0)


def review_brightness(review_count: int | None) -> float:
    """More reviews, brighter node, saturating at 1."""
    return min(1.0, 0.3 + (review_count or 0) * 0.25)


def rgba(r: int, g: int, b: int, a: float) -> str:
    """Format a CSS rgba() colour.

    Raises:
        ValueError: If alpha is outside [0, 1]; callers clamp first
    """
    if not 0.0 <= a <= 1.0:
        raise ValueError(f"Alpha must be within [0, 1], got {a}")
    return f"rgba({r},{g},{b},{a:.3f})"
