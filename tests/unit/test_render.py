"""Unit tests for sparkle, painting and the camera."""

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from conftest import sentence, word
from constellation.interaction import IDLE, HighlightState
from constellation.models import VisibleLink, VisibleNode
from constellation.render import (
    Bounds,
    Camera,
    RadialGradientCircle,
    Renderer,
    TextCommand,
    ViewTransform,
    clamp_alpha,
    link_sparkle,
    node_sparkle,
    node_visuals,
    review_brightness,
    rgba,
)


def highlighted(*node_ids: str, links: tuple[str, ...] = ()) -> HighlightState:
    return HighlightState(node_ids[0], frozenset(node_ids), frozenset(links))


class TestSparkle:
    """Tests for sparkle and brightness helpers."""

    @given(node_id=st.text(max_size=20), now=st.floats(min_value=0, max_value=1e12))
    def test_node_sparkle_range(self, node_id, now) -> None:
        assert 0.6 <= node_sparkle(node_id, now) <= 1.0

    @given(link_id=st.text(max_size=20), now=st.floats(min_value=0, max_value=1e12))
    def test_link_sparkle_range(self, link_id, now) -> None:
        assert 0.5 <= link_sparkle(link_id, now) <= 1.0

    def test_node_sparkle_formula(self) -> None:
        expected = 0.8 + 0.2 * math.sin(1000 * 0.003 + 2 * 0.1)
        assert node_sparkle("ab", 1000) == pytest.approx(max(0.6, min(1, expected)))

    def test_empty_id_behaves_like_length_one(self) -> None:
        assert node_sparkle("", 1234) == node_sparkle("x", 1234)
        assert link_sparkle("", 1234) == link_sparkle("x", 1234)

    def test_deterministic(self) -> None:
        assert node_sparkle("w1", 500.0) == node_sparkle("w1", 500.0)

    @pytest.mark.parametrize("count,expected", [(None, 0.3), (0, 0.3), (1, 0.55), (2, 0.8), (3, 1.0), (10, 1.0)])
    def test_review_brightness(self, count, expected) -> None:
        assert review_brightness(count) == pytest.approx(expected)

    def test_clamp_alpha(self) -> None:
        assert clamp_alpha(1.4) == 1.0
        assert clamp_alpha(-0.1) == 0.0
        assert clamp_alpha(0.5) == 0.5

    def test_rgba_format(self) -> None:
        assert rgba(255, 255, 255, 0.5) == "rgba(255,255,255,0.500)"

    @pytest.mark.parametrize("alpha", [-0.01, 1.01])
    def test_rgba_rejects_out_of_range(self, alpha) -> None:
        with pytest.raises(ValueError):
            rgba(0, 0, 0, alpha)


class TestNodeVisuals:
    """Tests for per-kind colours."""

    def test_word_is_white(self) -> None:
        visuals = node_visuals(word("w1"), 0)
        assert visuals.rgb == (255, 255, 255)
        assert visuals.core.startswith("rgba(255,255,255,")

    def test_sentence_is_lavender(self) -> None:
        visuals = node_visuals(sentence("s1", review_count=5), 0)
        assert visuals.rgb == (177, 156, 217)

    @given(reviews=st.integers(min_value=0, max_value=1000), now=st.floats(min_value=0, max_value=1e12))
    def test_alphas_always_valid(self, reviews, now) -> None:
        """Test heavily reviewed sentences still format valid colours."""
        visuals = node_visuals(sentence("s1", review_count=reviews), now)
        for alpha in (visuals.core_alpha, visuals.glow_alpha, visuals.highlight_alpha):
            assert 0.0 <= alpha <= 1.0
        assert visuals.highlight_glow.startswith("rgba(177,156,217,")

    def test_faded_glow_alpha(self) -> None:
        assert node_visuals(word("w1"), 0).faded_glow == "rgba(255,255,255,0.300)"


class TestRenderer:
    """Tests for node/link draw commands and hit testing."""

    @pytest.fixture
    def renderer(self) -> Renderer:
        return Renderer()

    @pytest.fixture
    def apple(self) -> VisibleNode:
        return VisibleNode.from_node(word("w1", "apple"))

    @pytest.fixture
    def phrase(self) -> VisibleNode:
        return VisibleNode.from_node(sentence("s1", "I like apples."))

    def test_no_position_paints_nothing(self, renderer, apple) -> None:
        assert renderer.paint_node(apple, None, 3.0, IDLE, 0, 1.0) == []

    def test_glow_and_core(self, renderer, apple) -> None:
        commands = renderer.paint_node(apple, 10.0, 20.0, IDLE, 0, 1.0)
        glow, core = commands[0], commands[1]

        assert isinstance(glow, RadialGradientCircle)
        assert glow.radius == pytest.approx(4.0 * 2.5)
        assert [s.offset for s in glow.stops] == [0.0, 0.3, 1.0]
        assert glow.stops[-1].color == "rgba(0,0,0,0)"

        assert core.radius == pytest.approx(4.0)
        assert [s.offset for s in core.stops] == [0.0, 0.4, 0.8, 1.0]
        assert (core.x, core.y) == (10.0, 20.0)

    def test_radius_scales_with_zoom(self, renderer, apple) -> None:
        core = renderer.paint_node(apple, 0, 0, IDLE, 0, 4.0)[1]
        assert core.radius == pytest.approx(2.0)

    def test_highlighted_node_is_larger(self, renderer, apple) -> None:
        core = renderer.paint_node(apple, 0, 0, highlighted("w1"), 0, 1.0)[1]
        assert core.radius == pytest.approx(4.0 * 1.35)
        visuals = node_visuals(apple.node, 0)
        assert core.stops[1].color == visuals.highlight_glow

    def test_word_label_when_zoomed_in(self, renderer, apple) -> None:
        commands = renderer.paint_node(apple, 0, 0, IDLE, 0, 1.0)
        label = commands[-1]
        assert isinstance(label, TextCommand)
        assert label.text == "apple"
        assert label.font_size == pytest.approx(5.0)
        assert label.y == pytest.approx(4.0 + 2.0)
        assert label.color == "rgba(255,251,244,0.92)"

    def test_word_label_hidden_when_zoomed_out(self, renderer, apple) -> None:
        commands = renderer.paint_node(apple, 0, 0, IDLE, 0, 0.8)
        assert not any(isinstance(c, TextCommand) for c in commands)

    @pytest.mark.parametrize("scale,expected", [(0.01, 12.0), (1.0, 5.0), (4.0, 3.0)])
    def test_label_font_size_clamped(self, renderer, scale, expected) -> None:
        node = VisibleNode.from_node(sentence("s1", "x"))
        label = renderer.paint_node(node, 0, 0, IDLE, 0, scale, hovered=True)[-1]
        assert label.font_size == pytest.approx(expected)

    def test_sentence_label_only_on_hover(self, renderer, phrase) -> None:
        assert len(renderer.paint_node(phrase, 0, 0, IDLE, 0, 2.0)) == 2
        commands = renderer.paint_node(phrase, 0, 0, IDLE, 0, 2.0, hovered=True)
        assert commands[-1].text == "I like apples."

    def test_link_styles(self, renderer) -> None:
        link = VisibleLink(id="w1->s1", source="w1", target="s1")
        normal = renderer.paint_link(link, IDLE, 0)
        strong = renderer.paint_link(link, highlighted("w1", links=("w1->s1",)), 0)

        assert normal.width == 0.6
        assert strong.width == 1.8
        s = link_sparkle(link.id, 0)
        assert normal.color == rgba(255, 255, 255, 0.15 * s)
        assert strong.color == rgba(255, 255, 255, 0.6 * s)

    def test_hit_test(self, renderer, apple) -> None:
        assert renderer.hit_test_radius(apple) == pytest.approx(7.0)
        assert renderer.hit_test(apple, 0, 0, 6.9, 0)
        assert not renderer.hit_test(apple, 0, 0, 5, 5.1)
        assert not renderer.hit_test(apple, None, None, 0, 0)


class TestCamera:
    """Tests for the pan/zoom camera."""

    def test_bounds_from_points(self) -> None:
        bounds = Bounds.from_points([(0, 0), (10, -4), (-2, 6)])
        assert (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y) == (-2, -4, 10, 6)
        assert bounds.center == (4, 1)
        assert Bounds.from_points([]) is None

    def test_zoom_to_fit_animates(self) -> None:
        camera = Camera(width=1000, height=1000, min_zoom=0.2, max_zoom=4)
        target = camera.zoom_to_fit(Bounds(0, 0, 450, 90), 50, 400, now_millis=1000)
        assert target == ViewTransform(225, 45, 2.0)

        halfway = camera.at(1200)
        assert 1.0 < halfway.k < 2.0
        assert camera.at(1400) == target
        assert camera.at(5000) == target

    def test_zoom_clamped(self) -> None:
        camera = Camera(width=1000, height=1000, min_zoom=0.2, max_zoom=4)
        assert camera.zoom_to_fit(Bounds(0, 0, 1, 1), 50, 0, 0).k == 4
        assert camera.zoom_to_fit(Bounds(0, 0, 1e6, 1e6), 50, 0, 0).k == 0.2

    def test_single_point_uses_max_zoom(self) -> None:
        camera = Camera(width=800, height=600, min_zoom=0.2, max_zoom=4)
        assert camera.zoom_to_fit(Bounds(5, 5, 5, 5), 50, 0, 0) == ViewTransform(5, 5, 4)

    def test_no_bounds_keeps_transform(self) -> None:
        camera = Camera()
        assert camera.zoom_to_fit(None, 50, 400, 0) == ViewTransform()

    def test_screen_world_round_trip(self) -> None:
        camera = Camera(width=800, height=600)
        camera.move_to(ViewTransform(100, -50, 2.0), 0, 0)
        assert camera.world_to_screen(100, -50, 0) == (400, 300)
        x, y = camera.screen_to_world(*camera.world_to_screen(130, 10, 0), 0)
        assert (x, y) == pytest.approx((130, 10))
