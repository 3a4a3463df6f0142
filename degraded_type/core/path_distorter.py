# /degraded_type/core/path_distorter.py

import math
from typing import List

from degraded_type.core.common import CommandType, GlyphPath, PathCommand, RandomSource

# Peak-to-peak jitter per unit of distortion level.
LINE_JITTER = 6.0
CURVE_JITTER = 10.0

def extra_points_for(level: float, max_extra_points: int) -> int:
    """Number of interior points per segment; halves round up like Math.round."""
    return int(math.floor(level * max_extra_points + 0.5))

def _subdivide(
    prev_x: float,
    prev_y: float,
    cmd: PathCommand,
    extra_points: int,
    amplitude: float,
    random_source: RandomSource,
) -> List[PathCommand]:
    """Jittered straight-line points strictly between the cursor and the command's target."""
    points = []
    for i in range(1, extra_points + 1):
        t = i / (extra_points + 1)
        base_x = prev_x + (cmd.x - prev_x) * t
        base_y = prev_y + (cmd.y - prev_y) * t

        jx = (random_source.next() - 0.5) * amplitude
        jy = (random_source.next() - 0.5) * amplitude
        points.append(PathCommand.line_to(base_x + jx, base_y + jy))
    return points

def distort_path(
    path: GlyphPath,
    level: float,
    max_extra_points: int,
    random_source: RandomSource,
) -> GlyphPath:
    """
    Returns a new outline where every line or curve segment is preceded by
    `round(level * max_extra_points)` jittered LineTo points.

    Original commands are emitted unchanged, so segment endpoints and the
    open/close structure of the outline are preserved. Curves are approximated
    by the straight chord between cursor and endpoint; control points are
    ignored.

    Args:
        path: The outline to distort. It is not modified.
        level: Distortion level in [0, 1].
        max_extra_points: Interior points per segment at level 1.
        random_source: Provides `next()` in [0, 1); called twice per point.

    Returns:
        The distorted outline.
    """
    if level <= 0:
        return list(path)

    extra_points = extra_points_for(level, max_extra_points)
    if extra_points <= 0:
        return list(path)

    new_commands = []
    prev_x, prev_y = 0.0, 0.0

    for cmd in path:
        if cmd.type == CommandType.MOVE_TO:
            new_commands.append(cmd)
            prev_x, prev_y = cmd.x, cmd.y
        elif cmd.type == CommandType.LINE_TO:
            new_commands.extend(_subdivide(prev_x, prev_y, cmd, extra_points, level * LINE_JITTER, random_source))
            new_commands.append(cmd)
            prev_x, prev_y = cmd.x, cmd.y
        elif cmd.type in (CommandType.QUAD_TO, CommandType.CUBIC_TO):
            new_commands.extend(_subdivide(prev_x, prev_y, cmd, extra_points, level * CURVE_JITTER, random_source))
            new_commands.append(cmd)
            prev_x, prev_y = cmd.x, cmd.y
        else:
            new_commands.append(cmd)

    return new_commands
