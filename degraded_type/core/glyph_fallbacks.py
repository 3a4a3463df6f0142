# /degraded_type/core/glyph_fallbacks.py

import logging
from typing import Optional

from degraded_type.core.common import Glyph, GlyphMetrics, PathCommand
from degraded_type.core.registry import MissingGlyphError, register_glyph_fallback

# Box glyph proportions, in em.
BOX_ADVANCE = 0.6
BOX_LEFT = 0.05
BOX_RIGHT = 0.55
BOX_HEIGHT = 0.7

@register_glyph_fallback("skip")
def skip_missing_glyph(char: str, metrics: GlyphMetrics) -> Optional[Glyph]:
    """Drops the character: it takes no space and draws nothing."""
    logging.debug(f"Skipping character {char!r} with no glyph.")
    return None

@register_glyph_fallback("box")
def box_missing_glyph(char: str, metrics: GlyphMetrics) -> Optional[Glyph]:
    """Substitutes a filled rectangle, like a font's .notdef glyph."""
    units_per_em = getattr(metrics, 'units_per_em', None) or 1000

    def outline(x: float, y: float, font_size: float):
        left, right = x + BOX_LEFT * font_size, x + BOX_RIGHT * font_size
        top = y - BOX_HEIGHT * font_size
        return [
            PathCommand.move_to(left, y),
            PathCommand.line_to(right, y),
            PathCommand.line_to(right, top),
            PathCommand.line_to(left, top),
            PathCommand.close(),
        ]

    return Glyph(advance_width=BOX_ADVANCE * units_per_em, outline=outline)

@register_glyph_fallback("raise")
def raise_missing_glyph(char: str, metrics: GlyphMetrics) -> Optional[Glyph]:
    raise MissingGlyphError(char)
