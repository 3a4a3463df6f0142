# /degraded_type/core/surface.py

from dataclasses import dataclass, field
from typing import List, Protocol, Union

from degraded_type.core.common import Color, GlyphPath

class DrawingSurface(Protocol):
    """What the renderer needs from a canvas; rasterization is the surface's business."""
    def clear(self) -> None: ...
    def set_background(self, color: Color) -> None: ...
    def set_blur(self, blur_px: float) -> None: ...
    def fill_path(self, path: GlyphPath, color: Color) -> None: ...

@dataclass(frozen=True)
class ClearSurface:
    pass

@dataclass(frozen=True)
class SetBackground:
    color: Color

@dataclass(frozen=True)
class SetBlur:
    blur_px: float

@dataclass(frozen=True)
class FillPath:
    path: GlyphPath
    color: Color

Instruction = Union[ClearSurface, SetBackground, SetBlur, FillPath]

@dataclass
class RecordingSurface:
    """Keeps every instruction in order, for rasterizing later or for inspection."""
    instructions: List[Instruction] = field(default_factory=list)

    def clear(self) -> None:
        # A cleared surface forgets everything drawn before it.
        self.instructions = [ClearSurface()]

    def set_background(self, color: Color) -> None:
        self.instructions.append(SetBackground(color))

    def set_blur(self, blur_px: float) -> None:
        self.instructions.append(SetBlur(blur_px))

    def fill_path(self, path: GlyphPath, color: Color) -> None:
        self.instructions.append(FillPath(list(path), color))

    @property
    def fills(self) -> List[FillPath]:
        return [i for i in self.instructions if isinstance(i, FillPath)]

    @property
    def backgrounds(self) -> List[SetBackground]:
        return [i for i in self.instructions if isinstance(i, SetBackground)]

    @property
    def blurs(self) -> List[SetBlur]:
        return [i for i in self.instructions if isinstance(i, SetBlur)]

    @property
    def background(self) -> Color:
        backgrounds = self.backgrounds
        return backgrounds[-1].color if backgrounds else Color(255, 255, 255)

    @property
    def blur_px(self) -> float:
        blurs = self.blurs
        return blurs[-1].blur_px if blurs else 0.0
