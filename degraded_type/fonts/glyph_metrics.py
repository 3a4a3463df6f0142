# /degraded_type/fonts/glyph_metrics.py

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from fontTools.pens.recordingPen import RecordingPen
from fontTools.ttLib import TTFont

from degraded_type.core.common import Glyph, GlyphPath, PathCommand

Point = Tuple[float, float]

def _midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)

def _expand_qcurve(points: Sequence[Optional[Point]]) -> Tuple[List[Tuple[Point, Point]], Optional[Point]]:
    """
    Splits a TrueType qCurveTo (cp1, ..., cpN, end) into single quadratic
    segments with implied on-curve points halfway between control points.
    A trailing None marks a contour made only of off-curve points; its
    implied start point is returned so the caller can open the contour there.
    """
    points = list(points)
    implied_start = None
    if points and points[-1] is None:
        off_curve = points[:-1]
        implied_start = _midpoint(off_curve[-1], off_curve[0])
        points = off_curve + [implied_start]

    segments = []
    controls, end = points[:-1], points[-1]
    for i, control in enumerate(controls):
        target = end if i == len(controls) - 1 else _midpoint(control, controls[i + 1])
        segments.append((control, target))
    if not controls:
        segments.append((end, end))
    return segments, implied_start

def recording_to_glyph_path(recording, x: float, y: float, scale: float) -> GlyphPath:
    """
    Converts RecordingPen operations in font units (y up) into path commands
    positioned at baseline origin (x, y) in surface space (y down).
    """
    def to_surface(p: Point) -> Point:
        return x + p[0] * scale, y - p[1] * scale

    commands = []
    for op, args in recording:
        if op == 'moveTo':
            commands.append(PathCommand.move_to(*to_surface(args[0])))
        elif op == 'lineTo':
            commands.append(PathCommand.line_to(*to_surface(args[0])))
        elif op == 'qCurveTo':
            segments, implied_start = _expand_qcurve(args)
            if implied_start is not None:
                commands.append(PathCommand.move_to(*to_surface(implied_start)))
            for control, target in segments:
                commands.append(PathCommand.quad_to(*to_surface(control), *to_surface(target)))
        elif op == 'curveTo':
            # Cubic curves may carry more than two control points; take them in triples.
            for i in range(0, len(args) - 2, 3):
                c1, c2, target = args[i:i + 3]
                commands.append(PathCommand.cubic_to(*to_surface(c1), *to_surface(c2), *to_surface(target)))
        elif op == 'closePath':
            commands.append(PathCommand.close())
    return commands

class FontGlyphMetrics:
    """Glyph metrics and outlines read from a font file with fontTools."""

    def __init__(self, font: TTFont):
        self.font = font
        self.units_per_em = font['head'].unitsPerEm
        self.cmap = font.getBestCmap() or {}
        self.glyph_set = font.getGlyphSet()
        self.hmtx = font['hmtx']

    def char_to_glyph(self, char: str) -> Optional[Glyph]:
        glyph_name = self.cmap.get(ord(char))
        if glyph_name is None or glyph_name not in self.glyph_set:
            return None

        advance_width, _ = self.hmtx[glyph_name]
        units_per_em = self.units_per_em
        glyph_set = self.glyph_set

        def outline(x: float, y: float, font_size: float) -> GlyphPath:
            pen = RecordingPen()
            glyph_set[glyph_name].draw(pen)
            return recording_to_glyph_path(pen.value, x, y, font_size / units_per_em)

        return Glyph(advance_width=advance_width, outline=outline)

def load_glyph_metrics(font_path: Optional[Union[str, Path]]) -> Optional[FontGlyphMetrics]:
    """Loads a font; returns None when it is unavailable so callers can render without glyphs."""
    if not font_path:
        logging.warning("No font configured; text will not be drawn.")
        return None
    try:
        return FontGlyphMetrics(TTFont(str(font_path)))
    except Exception as e:
        logging.warning(f"Could not load font {font_path}: {e}")
        return None
