import string
import sys
from pathlib import Path

import pytest

# Ensure the repository root is on sys.path for direct pytest runs
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from degraded_type.core.common import Glyph, PathCommand

ADVANCES = {"A": 600, "B": 500, " ": 250}
DEFAULT_ADVANCE = 500


class FakeMetrics:
    """
    In-memory glyph provider: ASCII letters and space only. Letters are
    rectangles as wide as their advance and 0.7 em tall; space has no outline.
    """

    def __init__(self, units_per_em=1000):
        self.units_per_em = units_per_em

    def char_to_glyph(self, char):
        if char not in string.ascii_letters + " ":
            return None
        advance = ADVANCES.get(char, DEFAULT_ADVANCE)
        units_per_em = self.units_per_em

        def outline(x, y, font_size):
            if char == " ":
                return []
            scale = font_size / units_per_em
            right = x + advance * scale
            top = y - 0.7 * font_size
            return [
                PathCommand.move_to(x, y),
                PathCommand.line_to(right, y),
                PathCommand.line_to(right, top),
                PathCommand.line_to(x, top),
                PathCommand.close(),
            ]

        return Glyph(advance_width=advance, outline=outline)


class CyclingRandomSource:
    """Returns the given values in order, starting over when exhausted."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def next(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def metrics():
    return FakeMetrics()


@pytest.fixture
def mid_random():
    return CyclingRandomSource([0.5])
