# /degraded_type/core/renderer.py

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from degraded_type.configs.base_config import RenderSettings, StyleConfig
from degraded_type.core.common import Color, GlyphMetrics, LayoutLine, RandomSource, RenderContext
from degraded_type.core.path_distorter import distort_path
from degraded_type.core.registry import get_glyph_fallback
from degraded_type.core.score_mapper import derive_visual_params
from degraded_type.core.surface import DrawingSurface
from degraded_type.core.text_layout import glyph_advance, layout_text_into_lines, measure_line_width, resolve_glyph
# Imported for its side effect of registering the built-in policies
from degraded_type.core import glyph_fallbacks  # noqa: F401

DEFAULT_UNITS_PER_EM = 1000

@dataclass
class RenderResult:
    """What a render call decided, for callers that report on it."""
    text: str
    score: float
    distortion: float
    color: Color
    blur_px: float
    lines: List[LayoutLine] = field(default_factory=list)
    glyphs_drawn: int = 0
    skipped_chars: List[str] = field(default_factory=list)

class TextRenderer:
    """Turns text and a score into drawing instructions on a surface."""

    def __init__(self, settings: Optional[RenderSettings] = None):
        self.settings = settings or RenderSettings()
        self.fallback = get_glyph_fallback(self.settings.missing_glyph_policy)
        self.glyph_color = Color(*self.settings.glyph_color)

    def render(
        self,
        text: str,
        score: Optional[float],
        style: StyleConfig,
        metrics: Optional[GlyphMetrics],
        surface: DrawingSurface,
        random_source: RandomSource,
    ) -> RenderResult:
        """
        Fully redraws `surface`. The background color and blur are always set;
        glyphs are only drawn when a metrics provider is available.
        """
        text = text.strip() or self.settings.placeholder_text

        if score is None:
            logging.debug(f"No score available; using default {self.settings.default_score}.")
            score = self.settings.default_score
        params = derive_visual_params(score, self.settings.max_blur_px)

        result = RenderResult(
            text=text,
            score=params.score,
            distortion=params.distortion,
            color=params.color,
            blur_px=params.blur_px,
        )

        # 1. Side-channels: background + blur
        surface.clear()
        surface.set_background(params.color)
        surface.set_blur(params.blur_px)

        if metrics is None:
            logging.debug("No glyph metrics available; updated background and blur only.")
            return result

        # 2. Layout
        font_size = style.font_size_px
        letter_spacing = style.letter_spacing_px
        line_height = font_size * style.line_height_factor
        scale = font_size / (getattr(metrics, 'units_per_em', None) or DEFAULT_UNITS_PER_EM)

        max_line_width = style.max_line_width_px
        if max_line_width is None:
            max_line_width = style.canvas_width * self.settings.max_width_ratio
        lines = layout_text_into_lines(text, max_line_width, metrics, scale, letter_spacing, self.fallback)
        result.lines = lines

        # 3. Draw, centering the block vertically and each line horizontally
        total_height = len(lines) * line_height
        y = (style.canvas_height - total_height) / 2 + font_size

        for line in lines:
            line_text = line.text
            line_width = measure_line_width(line_text, metrics, scale, letter_spacing, self.fallback)
            x = (style.canvas_width - line_width) / 2

            for ch in line_text:
                glyph = resolve_glyph(ch, metrics, self.fallback)
                if glyph is None:
                    result.skipped_chars.append(ch)
                    continue

                glyph_path = glyph.get_outline(x, y, font_size)
                glyph_path = distort_path(glyph_path, params.distortion, self.settings.max_extra_points, random_source)
                surface.fill_path(glyph_path, self.glyph_color)
                result.glyphs_drawn += 1

                x += glyph_advance(glyph, scale, letter_spacing)

            y += line_height

        return result

    def render_context(
        self,
        context: RenderContext,
        style: StyleConfig,
        metrics: Optional[GlyphMetrics],
        surface: DrawingSurface,
        random_source: RandomSource,
    ) -> RenderResult:
        return self.render(context.text, context.score, style, metrics, surface, random_source)

def render_text(
    text: str,
    score: Optional[float],
    style: StyleConfig,
    metrics: Optional[GlyphMetrics],
    surface: DrawingSurface,
    random_source: RandomSource,
    settings: Optional[RenderSettings] = None,
) -> RenderResult:
    """Convenience wrapper around TextRenderer.render."""
    return TextRenderer(settings).render(text, score, style, metrics, surface, random_source)
