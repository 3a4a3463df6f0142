import pytest

from conftest import CyclingRandomSource, FakeMetrics
from degraded_type.configs.base_config import RenderSettings, StyleConfig
from degraded_type.core.common import Color, CommandType, PathCommand, RenderContext
from degraded_type.core.registry import MissingGlyphError
from degraded_type.core.renderer import TextRenderer, render_text
from degraded_type.core.score_mapper import score_to_color
from degraded_type.core.surface import ClearSurface, FillPath, RecordingSurface, SetBackground, SetBlur
from degraded_type.utils.random_source import NumpyRandomSource


@pytest.fixture
def style():
    return StyleConfig(
        font_size_px=100,
        letter_spacing_px=2,
        line_height_factor=1.2,
        canvas_width=1000,
        canvas_height=500,
    )


def test_absent_metrics_sets_only_background_and_blur(style, mid_random):
    surface = RecordingSurface()
    result = render_text("hello", 0.2, style, None, surface, mid_random)

    assert surface.fills == []
    assert len(surface.backgrounds) == 1
    assert len(surface.blurs) == 1
    assert surface.background == score_to_color(0.2)
    assert surface.blur_px == pytest.approx(0.8 * 4)
    assert result.glyphs_drawn == 0
    assert result.lines == []


def test_instruction_order(style, metrics, mid_random):
    surface = RecordingSurface()
    render_text("AB", 1.0, style, metrics, surface, mid_random)
    kinds = [type(i) for i in surface.instructions]
    assert kinds == [ClearSurface, SetBackground, SetBlur, FillPath, FillPath]


def test_absent_score_uses_neutral_default(style, metrics, mid_random):
    surface = RecordingSurface()
    result = render_text("AB", None, style, metrics, surface, mid_random)
    assert result.score == 0.5
    assert result.distortion == 0.5
    assert surface.background == Color(120, 125, 80)
    assert surface.blur_px == pytest.approx(2.0)


@pytest.mark.parametrize("text", ["", "   ", "\n"])
def test_empty_text_renders_placeholder(style, metrics, mid_random, text):
    surface = RecordingSurface()
    result = render_text(text, 1.0, style, metrics, surface, mid_random)
    assert result.text == "font"
    assert [line.text for line in result.lines] == ["font"]
    assert len(surface.fills) == 4


def test_clean_render_centers_line(style, metrics, mid_random):
    surface = RecordingSurface()
    result = render_text("AB", 1.0, style, metrics, surface, mid_random)

    assert result.distortion == 0.0
    assert surface.blur_px == 0.0
    first, second = surface.fills
    # Line width 114 is centered in 1000; one line of height 120 is centered in 500
    assert first.path[0] == PathCommand.move_to(443, 290)
    assert second.path[0].x == pytest.approx(443 + 62)
    assert second.path[0].y == pytest.approx(290)
    assert first.color == Color(0, 0, 0)
    assert len(first.path) == 5


def test_spaces_are_drawn_as_empty_outlines(style, metrics, mid_random):
    surface = RecordingSurface()
    result = render_text("AB  AB", 1.0, style, metrics, surface, mid_random)
    assert [line.text for line in result.lines] == ["AB AB"]
    assert len(surface.fills) == 5
    assert surface.fills[2].path == []


def test_full_distortion_subdivides_every_glyph_segment(style, metrics):
    surface = RecordingSurface()
    render_text("A", 0.0, style, metrics, surface, NumpyRandomSource.seeded(0))
    (fill,) = surface.fills
    # Move + 3 lines with 10 interior points each + close
    assert len(fill.path) == 1 + 3 * 11 + 1
    assert fill.path[0].type == CommandType.MOVE_TO
    assert fill.path[-1].type == CommandType.CLOSE
    assert surface.blur_px == pytest.approx(4.0)


def test_wrapped_lines_are_centered_block(metrics, mid_random):
    style = StyleConfig(font_size_px=100, letter_spacing_px=2, line_height_factor=1.5, canvas_width=300, canvas_height=800)
    surface = RecordingSurface()
    # max line width is 300 * 0.8 = 240, so "AB AB" (255) must wrap
    result = render_text("AB AB", 1.0, style, metrics, surface, mid_random)

    assert [line.text for line in result.lines] == ["AB", "AB"]
    starts = [fill.path[0] for fill in surface.fills if fill.path]
    total_height = 2 * 100 * 1.5
    first_y = (800 - total_height) / 2 + 100
    assert starts[0].x == pytest.approx((300 - 114) / 2)
    assert starts[0].y == pytest.approx(first_y)
    assert starts[2].x == pytest.approx((300 - 114) / 2)
    assert starts[2].y == pytest.approx(first_y + 150)


def test_max_line_width_override(metrics, mid_random):
    style = StyleConfig(font_size_px=100, letter_spacing_px=2, canvas_width=10000, canvas_height=800, max_line_width_px=120)
    result = render_text("AB AB", 1.0, style, metrics, RecordingSurface(), mid_random)
    assert len(result.lines) == 2


def test_units_per_em_drives_scale(style, mid_random):
    surface = RecordingSurface()
    render_text("AB", 1.0, style, FakeMetrics(units_per_em=2000), surface, mid_random)
    first, second = surface.fills
    assert second.path[0].x - first.path[0].x == pytest.approx(600 * 0.05 + 2)


def test_rerender_clears_previous_instructions(style, metrics, mid_random):
    surface = RecordingSurface()
    render_text("AB", 1.0, style, metrics, surface, mid_random)
    render_text("A", 0.0, style, None, surface, mid_random)
    assert surface.fills == []
    assert len(surface.backgrounds) == 1
    assert surface.background == Color(220, 40, 40)


def test_same_seed_is_reproducible(style, metrics):
    first, second = RecordingSurface(), RecordingSurface()
    render_text("AB", 0.3, style, metrics, first, NumpyRandomSource.seeded(11))
    render_text("AB", 0.3, style, metrics, second, NumpyRandomSource.seeded(11))
    assert first.instructions == second.instructions


def test_missing_glyph_skip_policy(style, metrics, mid_random):
    result = render_text("A€B", 1.0, style, metrics, RecordingSurface(), mid_random)
    assert result.skipped_chars == ["€"]
    assert result.glyphs_drawn == 2


def test_missing_glyph_box_policy(style, metrics, mid_random):
    surface = RecordingSurface()
    settings = RenderSettings(missing_glyph_policy="box")
    result = render_text("A€", 1.0, style, metrics, surface, mid_random, settings)
    assert result.glyphs_drawn == 2
    box = surface.fills[1].path
    assert [cmd.type for cmd in box] == [CommandType.MOVE_TO] + [CommandType.LINE_TO] * 3 + [CommandType.CLOSE]


def test_missing_glyph_raise_policy(style, metrics, mid_random):
    settings = RenderSettings(missing_glyph_policy="raise")
    with pytest.raises(MissingGlyphError):
        render_text("A€", 1.0, style, metrics, RecordingSurface(), mid_random, settings)


def test_unknown_policy_is_rejected():
    with pytest.raises(ValueError):
        TextRenderer(RenderSettings(missing_glyph_policy="nope"))


def test_render_context(style, metrics, mid_random):
    renderer = TextRenderer()
    context = RenderContext(text="AB", entity="Norway", year=2020, score=0.9)
    surface = RecordingSurface()
    result = renderer.render_context(context, style, metrics, surface, mid_random)
    assert result.score == 0.9
    assert surface.background == score_to_color(0.9)
    assert len(surface.fills) == 2


def test_custom_glyph_color(style, metrics, mid_random):
    surface = RecordingSurface()
    render_text("A", 1.0, style, metrics, surface, mid_random, RenderSettings(glyph_color=(10, 20, 30)))
    assert surface.fills[0].color == Color(10, 20, 30)
