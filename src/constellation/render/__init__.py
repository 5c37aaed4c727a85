"""Rendering: sparkle timing, draw commands and the camera."""

from constellation.render.camera import Bounds, Camera, ViewTransform
from constellation.render.painter import (
    DrawCommand,
    GradientStop,
    LinkStyle,
    NodeVisuals,
    RadialGradientCircle,
    Renderer,
    TextCommand,
    node_visuals,
)
from constellation.render.sparkle import (
    clamp_alpha,
    link_sparkle,
    node_sparkle,
    review_brightness,
    rgba,
)

__all__ = [
    # Camera
    "Camera",
    "Bounds",
    "ViewTransform",
    # Painter
    "Renderer",
    "DrawCommand",
    "GradientStop",
    "RadialGradientCircle",
    "TextCommand",
    "LinkStyle",
    "NodeVisuals",
    "node_visuals",
    # Sparkle
    "node_sparkle",
    "link_sparkle",
    "review_brightness",
    "clamp_alpha",
    "rgba",
]
