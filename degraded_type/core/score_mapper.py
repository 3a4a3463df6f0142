# /degraded_type/core/score_mapper.py

from dataclasses import dataclass

from degraded_type.core.common import Color

LOW_SCORE_COLOR = Color(220, 40, 40)
HIGH_SCORE_COLOR = Color(20, 210, 120)

@dataclass(frozen=True)
class VisualParams:
    score: float
    distortion: float
    color: Color
    blur_px: float

def clamp_score(score: float) -> float:
    return max(0.0, min(1.0, float(score)))

def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t

def _round_half_up(value: float) -> int:
    # Channels are non-negative, so floor(v + 0.5) rounds halves upward.
    return int(value + 0.5)

def score_to_distortion(score: float) -> float:
    """Low score = high distortion."""
    return 1.0 - clamp_score(score)

def score_to_color(score: float) -> Color:
    """Solid color between red (score 0) and green (score 1)."""
    s = clamp_score(score)
    return Color(*(
        _round_half_up(_lerp(low, high, s))
        for low, high in zip(LOW_SCORE_COLOR, HIGH_SCORE_COLOR)
    ))

def distortion_to_blur(level: float, max_blur_px: float) -> float:
    return level * max_blur_px

def derive_visual_params(score: float, max_blur_px: float) -> VisualParams:
    """Bundles every visual parameter that depends on the score alone."""
    clamped = clamp_score(score)
    distortion = score_to_distortion(clamped)
    return VisualParams(
        score=clamped,
        distortion=distortion,
        color=score_to_color(clamped),
        blur_px=distortion_to_blur(distortion, max_blur_px),
    )
