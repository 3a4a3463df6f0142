# /degraded_type/core/text_layout.py

from typing import Callable, List, Optional

from degraded_type.core.common import Glyph, GlyphMetrics, LayoutLine
from degraded_type.core.registry import MissingGlyphError

GlyphFallback = Callable[[str, GlyphMetrics], Optional[Glyph]]

def resolve_glyph(char: str, metrics: GlyphMetrics, fallback: Optional[GlyphFallback] = None) -> Optional[Glyph]:
    """
    Looks up the glyph for `char`. When the font has none, the fallback policy
    decides (a substitute glyph, None to skip, or an exception); without a
    policy the condition is raised as MissingGlyphError.
    """
    glyph = metrics.char_to_glyph(char)
    if glyph is not None:
        return glyph
    if fallback is None:
        raise MissingGlyphError(char)
    return fallback(char, metrics)

def glyph_advance(glyph: Optional[Glyph], scale: float, letter_spacing: float) -> float:
    """Horizontal distance from this character's origin to the next one's."""
    if glyph is None:
        return 0.0
    return glyph.advance_width * scale + letter_spacing

def measure_line_width(
    line: str,
    metrics: GlyphMetrics,
    scale: float,
    letter_spacing: float,
    fallback: Optional[GlyphFallback] = None,
) -> float:
    """
    Width of a string in canvas space: advance widths plus letter spacing.
    Spacing is counted after every character, including the last one.
    """
    width = 0.0
    for ch in line:
        width += glyph_advance(resolve_glyph(ch, metrics, fallback), scale, letter_spacing)
    return width

def layout_text_into_lines(
    text: str,
    max_width: float,
    metrics: GlyphMetrics,
    scale: float,
    letter_spacing: float,
    fallback: Optional[GlyphFallback] = None,
) -> List[LayoutLine]:
    """
    Greedy word wrap. Words are packed left to right until the next one would
    push the line past `max_width`. A word wider than `max_width` gets a line
    of its own and overflows; words are never split.
    """
    words = text.split()
    lines = []
    current_words: List[str] = []
    current_width = 0.0

    for word in words:
        test_words = current_words + [word]
        test_width = measure_line_width(" ".join(test_words), metrics, scale, letter_spacing, fallback)

        if test_width > max_width and current_words:
            lines.append(LayoutLine(words=current_words, width=current_width))
            current_words = [word]
            current_width = measure_line_width(word, metrics, scale, letter_spacing, fallback)
        else:
            current_words = test_words
            current_width = test_width

    if current_words:
        lines.append(LayoutLine(words=current_words, width=current_width))
    return lines
