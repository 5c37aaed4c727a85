"""Node and link painting.

The painter produces backend-neutral draw commands (radial gradient
circles, text, link strokes) instead of drawing on a canvas, so paint
output can be inspected and replayed by any canvas implementation.
"""

import math
from dataclasses import dataclass

from constellation.interaction.highlight import HighlightState
from constellation.models import GraphNode, VisibleLink, VisibleNode
from constellation.render.sparkle import clamp_alpha, link_sparkle, node_sparkle, review_brightness, rgba

WORD_RGB = (255, 255, 255)
SENTENCE_RGB = (177, 156, 217)

BASE_RADIUS = 4.0
HIGHLIGHT_SCALE = 1.35
GLOW_SCALE = 2.5
FADED_GLOW_ALPHA = 0.3
HIT_RADIUS = 5.0 * 1.4

LABEL_MIN_SCALE = 0.8
LABEL_COLOR = "rgba(255,251,244,0.92)"
LABEL_FONT = "'Inter', sans-serif"
TRANSPARENT = "rgba(0,0,0,0)"


@dataclass(frozen=True)
class GradientStop:
    offset: float
    color: str


@dataclass(frozen=True)
class RadialGradientCircle:
    """Filled circle with a radial gradient from the centre outward."""

    x: float
    y: float
    radius: float
    stops: tuple[GradientStop, ...]


@dataclass(frozen=True)
class TextCommand:
    text: str
    x: float
    y: float
    font_size: float
    color: str = LABEL_COLOR
    font: str = LABEL_FONT
    align: str = "center"
    baseline: str = "top"


@dataclass(frozen=True)
class LinkStyle:
    color: str
    width: float


DrawCommand = RadialGradientCircle | TextCommand


@dataclass(frozen=True)
class NodeVisuals:
    """Colours of one node at one instant."""

    rgb: tuple[int, int, int]
    core_alpha: float
    glow_alpha: float
    highlight_alpha: float
    base_radius: float = BASE_RADIUS

    @property
    def core(self) -> str:
        return rgba(*self.rgb, self.core_alpha)

    @property
    def glow(self) -> str:
        return rgba(*self.rgb, self.glow_alpha)

    @property
    def faded_glow(self) -> str:
        return rgba(*self.rgb, FADED_GLOW_ALPHA)

    @property
    def highlight_glow(self) -> str:
        return rgba(*self.rgb, self.highlight_alpha)


def node_visuals(node: GraphNode, now_millis: float) -> NodeVisuals:
    """Sparkle-modulated colours; sentences also brighten with reviews."""
    sparkle = node_sparkle(node.id, now_millis)

    if node.kind == "word":
        return NodeVisuals(
            rgb=WORD_RGB,
            core_alpha=clamp_alpha(0.95 * sparkle),
            glow_alpha=clamp_alpha(0.6 * sparkle),
            highlight_alpha=clamp_alpha(0.98 * sparkle),
        )

    brightness = review_brightness(node.review_count)
    return NodeVisuals(
        rgb=SENTENCE_RGB,
        core_alpha=clamp_alpha((0.8 + 0.2 * brightness) * sparkle),
        glow_alpha=clamp_alpha((0.6 + 0.3 * brightness) * sparkle),
        highlight_alpha=clamp_alpha((brightness + 0.5) * sparkle),
    )


def label_font_size(global_scale: float) -> float:
    return max(3.0, min(12.0, 5.0 / math.sqrt(global_scale)))


class Renderer:
    """Turns visible nodes and links into draw commands."""

    def node_radius(self, node: VisibleNode, highlighted: bool, global_scale: float) -> float:
        radius = BASE_RADIUS * (HIGHLIGHT_SCALE if highlighted else 1.0)
        return radius / math.sqrt(global_scale)

    def paint_node(
        self,
        node: VisibleNode,
        x: float | None,
        y: float | None,
        highlight: HighlightState,
        now_millis: float,
        global_scale: float,
        hovered: bool = False,
    ) -> list[DrawCommand]:
        """
        Draw commands for one node: outer glow, core, optional label.

        Args:
            node: Node to paint
            x, y: Current position; nothing is painted without one
            highlight: Current highlight snapshot
            now_millis: Paint timestamp driving the sparkle
            global_scale: Camera zoom factor
            hovered: Whether the pointer is over the node

        Returns:
            Draw commands in paint order
        """
        if x is None or y is None:
            return []

        visuals = node_visuals(node.node, now_millis)
        highlighted = highlight.is_node_highlighted(node.id)
        radius = self.node_radius(node, highlighted, global_scale)

        glow = RadialGradientCircle(
            x=x,
            y=y,
            radius=radius * GLOW_SCALE,
            stops=(
                GradientStop(0.0, visuals.glow),
                GradientStop(0.3, visuals.faded_glow),
                GradientStop(1.0, TRANSPARENT),
            ),
        )
        core = RadialGradientCircle(
            x=x,
            y=y,
            radius=radius,
            stops=(
                GradientStop(0.0, visuals.core),
                GradientStop(0.4, visuals.highlight_glow if highlighted else visuals.core),
                GradientStop(0.8, visuals.highlight_glow if highlighted else visuals.glow),
                GradientStop(1.0, visuals.glow),
            ),
        )
        commands: list[DrawCommand] = [glow, core]

        if self.shows_label(node, global_scale, hovered):
            commands.append(
                TextCommand(
                    text=node.name,
                    x=x,
                    y=y + radius + 2 / global_scale,
                    font_size=label_font_size(global_scale),
                )
            )
        return commands

    def shows_label(self, node: VisibleNode, global_scale: float, hovered: bool) -> bool:
        # Words label when zoomed in, sentences only under the pointer
        if not node.name:
            return False
        if node.kind == "word":
            return global_scale > LABEL_MIN_SCALE
        return hovered

    def paint_link(self, link: VisibleLink, highlight: HighlightState, now_millis: float) -> LinkStyle:
        sparkle = link_sparkle(link.id, now_millis)
        if highlight.is_link_highlighted(link.id):
            return LinkStyle(rgba(255, 255, 255, clamp_alpha(0.6 * sparkle)), 1.8)
        return LinkStyle(rgba(255, 255, 255, clamp_alpha(0.15 * sparkle)), 0.6)

    def hit_test_radius(self, node: VisibleNode) -> float:
        return HIT_RADIUS

    def hit_test(self, node: VisibleNode, x: float | None, y: float | None, px: float, py: float) -> bool:
        """Whether world point (px, py) falls on a node drawn at (x, y)."""
        if x is None or y is None:
            return False
        return math.hypot(px - x, py - y) <= self.hit_test_radius(node)
