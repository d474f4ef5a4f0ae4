"""
Turning sampled frames into an animated GIF.

Frames are rasterised with NumPy against a palette computed once per
animation, then laid out with a header (the equation) and a footer (time
and caption) by Matplotlib and written with its Pillow writer.
"""

import warnings
from typing import List, Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation

from .colours import LINE_COLOUR, WHITE, heat_palette
from .config import RenderConfig
from .expressions import Equation
from .sampler import GridRect, Plot, plot

BORDER = 20
DPI = 100
FONT_SIZE = 9


def rasterize(frame: Plot, bucket_count: int, palette: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Colour one frame.

    Args:
        frame: sampled residuals
        bucket_count: heat buckets on each side of zero
        palette: ``heat_palette(bucket_count)``; pass it in to share one
            palette across all frames

    Returns:
        ``(height, width, 3)`` uint8 image, row 0 at the top (largest y)
    """
    if palette is None:
        palette = heat_palette(bucket_count)

    values = frame.values
    raster = np.empty(values.shape + (3,), dtype=np.uint8)
    raster[...] = WHITE

    with np.errstate(invalid="ignore"):
        in_band = np.isfinite(values) & (np.abs(values) < 1)
    buckets = np.trunc(np.where(in_band, values, 0.0) * bucket_count).astype(np.int64)
    buckets = np.clip(buckets, -(bucket_count - 1), bucket_count - 1)
    raster[in_band] = palette[buckets[in_band] + bucket_count - 1]

    draw_axes(raster, frame.rect)
    return np.flipud(raster)


def draw_axes(raster: np.ndarray, rect: GridRect):
    """Paint the x=0 and y=0 lines in place (rows are y, unflipped)"""
    if rect.min_y <= 0 < rect.max_y:
        raster[0 - rect.min_y, :] = LINE_COLOUR
    if rect.min_x <= 0 < rect.max_x:
        raster[:, 0 - rect.min_x] = LINE_COLOUR


def scale_raster(raster: np.ndarray, scale: int) -> np.ndarray:
    """Nearest-neighbour magnification"""
    if scale == 1:
        return raster
    return np.repeat(np.repeat(raster, scale, axis=0), scale, axis=1)


def footer_label(t: int, time_upper: int, time_used: bool, footer_text: str) -> str:
    if time_used:
        return f"T: {t}/{time_upper} - {footer_text}"
    return footer_text


def build_figure(rasters: Sequence[np.ndarray], labels: Sequence[str], equation_text: str,
                 scale: int) -> Tuple[plt.Figure, object, object]:
    """
    Lay out the first frame with its header and footer.

    Text is drawn without antialiasing so every frame holds only the heat
    palette plus white, black and the axis colour.

    Returns:
        ``(figure, image artist, footer text artist)``
    """
    image_h, image_w = rasters[0].shape[:2]
    border = BORDER * scale
    fig_w, fig_h = image_w + 2 * border, image_h + 2 * border

    fig = plt.figure(figsize=(fig_w / DPI, fig_h / DPI), dpi=DPI, facecolor="white")
    ax = fig.add_axes([border / fig_w, border / fig_h, image_w / fig_w, image_h / fig_h])
    ax.set_axis_off()
    image = ax.imshow(rasters[0], interpolation="nearest", aspect="auto")
    fig.text(10 / fig_w, 1 - 4 / fig_h, equation_text, ha="left", va="top",
             fontsize=FONT_SIZE * scale, color="black", antialiased=False)
    footer = fig.text(10 / fig_w, 4 / fig_h, labels[0], ha="left", va="bottom",
                      fontsize=FONT_SIZE * scale, color="black", antialiased=False)
    return fig, image, footer


def render_plots(plots: Sequence[Plot], equation_text: str, filename: str,
                 bucket_count: int, scale: int = 2, speed_ms: int = 100,
                 time_upper: int = 100, time_used: bool = False,
                 footer_text: str = "") -> bool:
    """
    Write ``plots`` to ``filename`` as an animated GIF.

    Returns:
        True when the file was written
    """
    if not plots:
        warnings.warn("Cannot render an empty frame sequence")
        return False

    palette = heat_palette(bucket_count)
    rasters: List[np.ndarray] = [scale_raster(rasterize(p, bucket_count, palette), scale) for p in plots]
    labels = [footer_label(p.t, time_upper, time_used, footer_text) for p in plots]

    fig, image, footer = build_figure(rasters, labels, equation_text, scale)
    try:
        def animate_frame(frame):
            image.set_data(rasters[frame])
            footer.set_text(labels[frame])
            return image, footer

        anim = animation.FuncAnimation(
            fig, animate_frame, frames=len(rasters),
            interval=speed_ms, blit=False, repeat=True
        )
        anim.save(filename, writer="pillow", fps=1000.0 / speed_ms)
    finally:
        plt.close(fig)

    return True


def render_equation(equation: Equation, config: RenderConfig) -> bool:
    """Sample ``equation`` over the configured grid and time range and write the GIF"""
    config.validate()
    time_used, plots = plot(equation, config.time_lower, config.time_upper,
                            config.grid_rect, config.point_size)
    return render_plots(
        plots,
        equation.to_text(),
        config.output_file,
        bucket_count=config.heat_colour_count,
        scale=config.scale,
        speed_ms=config.speed_ms,
        time_upper=config.time_upper,
        time_used=time_used,
        footer_text=config.footer_text,
    )
