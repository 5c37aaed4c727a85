"""Interaction state: click highlight, hover and the sparkle pulse."""

from constellation.interaction.highlight import (
    IDLE,
    HighlightController,
    HighlightState,
    compute_highlight,
)
from constellation.interaction.pulse import PulseTicker

__all__ = [
    "IDLE",
    "HighlightState",
    "HighlightController",
    "compute_highlight",
    "PulseTicker",
]
