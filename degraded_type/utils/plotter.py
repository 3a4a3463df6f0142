# /degraded_type/utils/plotter.py

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.patches import PathPatch
from matplotlib.path import Path as MplPath
from pathlib import Path
from scipy.ndimage import gaussian_filter

from degraded_type.core.common import CommandType, GlyphPath
from degraded_type.core.surface import FillPath, RecordingSurface

def glyph_path_to_mpl(path: GlyphPath) -> MplPath:
    """Converts path commands to a matplotlib Path, keeping curve control points."""
    vertices = []
    codes = []
    start = None
    for cmd in path:
        if cmd.type == CommandType.MOVE_TO:
            vertices.append((cmd.x, cmd.y))
            codes.append(MplPath.MOVETO)
            start = (cmd.x, cmd.y)
        elif cmd.type == CommandType.LINE_TO:
            vertices.append((cmd.x, cmd.y))
            codes.append(MplPath.LINETO)
        elif cmd.type == CommandType.QUAD_TO:
            vertices.extend([cmd.controls[0], (cmd.x, cmd.y)])
            codes.extend([MplPath.CURVE3] * 2)
        elif cmd.type == CommandType.CUBIC_TO:
            vertices.extend([cmd.controls[0], cmd.controls[1], (cmd.x, cmd.y)])
            codes.extend([MplPath.CURVE4] * 3)
        elif cmd.type == CommandType.CLOSE and start is not None:
            vertices.append(start)
            codes.append(MplPath.CLOSEPOLY)
    if not vertices:
        return MplPath(np.empty((0, 2)))
    return MplPath(vertices, codes)

def rasterize_surface(surface: RecordingSurface, width: int, height: int, dpi: int = 100, apply_blur: bool = True) -> np.ndarray:
    """
    Draws the recorded instructions into an (height, width, 3) uint8 array.
    The blur is applied afterwards as a Gaussian filter, like a CSS blur()
    on the finished canvas.
    """
    width, height = max(1, int(round(width))), max(1, int(round(height)))
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, width)
    ax.set_ylim(0, height)
    # Surface coordinates have the origin at the top-left
    ax.invert_yaxis()
    ax.axis('off')

    background = surface.background
    fig.patch.set_facecolor(background.to_hex())
    ax.set_facecolor(background.to_hex())

    for instruction in surface.instructions:
        if isinstance(instruction, FillPath) and instruction.path:
            patch = PathPatch(glyph_path_to_mpl(instruction.path), facecolor=instruction.color.to_hex(), edgecolor='none')
            ax.add_patch(patch)

    fig.canvas.draw()
    image = np.asarray(fig.canvas.buffer_rgba())[:, :, :3].copy()
    plt.close(fig)

    blur_px = surface.blur_px
    if apply_blur and blur_px > 0:
        # CSS blur radius is the Gaussian standard deviation
        image = gaussian_filter(image.astype(np.float64), sigma=(blur_px, blur_px, 0))
        image = np.clip(np.round(image), 0, 255).astype(np.uint8)
    return image

def save_surface_png(surface: RecordingSurface, width: int, height: int, output_path: Path, dpi: int = 100, apply_blur: bool = True):
    """Rasterizes the surface and saves it as a PNG."""
    image = rasterize_surface(surface, width, height, dpi=dpi, apply_blur=apply_blur)
    plt.imsave(output_path, image)
