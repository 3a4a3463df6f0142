# /degraded_type/core/common.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Protocol, Tuple

class StrEnum(str, Enum):
    """Enum where members are also strings."""
    def __str__(self):
        return self.value

class CommandType(StrEnum):
    MOVE_TO = "M"
    LINE_TO = "L"
    QUAD_TO = "Q"
    CUBIC_TO = "C"
    CLOSE = "Z"

class Color(NamedTuple):
    r: int
    g: int
    b: int

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

@dataclass(frozen=True)
class PathCommand:
    """
    One outline instruction. Only the target (x, y) takes part in distortion;
    curve control points ride along in `controls` so a surface can still draw
    the original curve.
    """
    type: CommandType
    x: float = 0.0
    y: float = 0.0
    controls: Tuple[Tuple[float, float], ...] = ()

    @classmethod
    def move_to(cls, x: float, y: float) -> "PathCommand":
        return cls(CommandType.MOVE_TO, x, y)

    @classmethod
    def line_to(cls, x: float, y: float) -> "PathCommand":
        return cls(CommandType.LINE_TO, x, y)

    @classmethod
    def quad_to(cls, cx: float, cy: float, x: float, y: float) -> "PathCommand":
        return cls(CommandType.QUAD_TO, x, y, ((cx, cy),))

    @classmethod
    def cubic_to(cls, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float) -> "PathCommand":
        return cls(CommandType.CUBIC_TO, x, y, ((c1x, c1y), (c2x, c2y)))

    @classmethod
    def close(cls) -> "PathCommand":
        return cls(CommandType.CLOSE)

GlyphPath = List[PathCommand]

@dataclass(frozen=True)
class Glyph:
    """A character's advance width (font units) and a positioned outline factory."""
    advance_width: float
    outline: Callable[[float, float, float], GlyphPath]

    def get_outline(self, x: float, y: float, font_size: float) -> GlyphPath:
        return self.outline(x, y, font_size)

class GlyphMetrics(Protocol):
    units_per_em: float

    def char_to_glyph(self, char: str) -> Optional[Glyph]:
        ...

class RandomSource(Protocol):
    def next(self) -> float:
        ...

@dataclass
class LayoutLine:
    """Words of one wrapped line plus its measured width."""
    words: List[str] = field(default_factory=list)
    width: float = 0.0

    @property
    def text(self) -> str:
        return " ".join(self.words)

@dataclass(frozen=True)
class RenderContext:
    """The caller's current selection, passed explicitly to each render call."""
    text: str = ""
    entity: Optional[str] = None
    year: Optional[int] = None
    score: Optional[float] = None
