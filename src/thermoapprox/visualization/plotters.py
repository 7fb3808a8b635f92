import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.ticker import MaxNLocator

from thermoapprox.core.polynomial import Polynomial
from thermoapprox.data.constants import PlotConstants
from thermoapprox.parsing.config.model_yaml_parser import ModelConfig

logger = logging.getLogger(__name__)

Points = Sequence[Tuple[int, int]]


def stepped_line(points: Points) -> Tuple[List[int], List[int]]:
    """
    Vertices of a staircase through ``points``.
    The level changes halfway (truncated toward zero) between two points
    whose offsets differ.
    """
    if not points:
        return [], []
    xs, ys = [points[0][0]], [points[0][1]]
    for (t0, y0), (t1, y1) in zip(points, points[1:]):
        if y0 != y1:
            middle = int((t0 + t1) / 2)
            xs.extend([middle, middle])
            ys.extend([y0, y1])
        xs.append(t1)
        ys.append(y1)
    return xs, ys


def _offset_limits(*series: Points) -> Tuple[int, int]:
    values = [offset for points in series for _, offset in points]
    lower = min(values, default=0)
    upper = max(values, default=0)
    return min(lower, 0) - 1, max(upper, 0) + 1


def _plot_axis(ax, label: str, raw: Points, model: Points, grid: Sequence[int]) -> None:
    """Draw one offset panel."""
    x_lower = grid[0] - PlotConstants.AXIS_MARGIN
    x_upper = grid[-1] + PlotConstants.AXIS_MARGIN
    y_lower, y_upper = _offset_limits(raw, model)
    ax.set_title(label, fontsize=16, fontweight='bold')
    ax.set_xlim(x_lower, x_upper)
    ax.set_ylim(y_lower, y_upper)
    ax.set_xticks(list(grid))
    ax.yaxis.set_major_locator(MaxNLocator(integer=True))
    ax.grid(True, linestyle='--', alpha=0.3)
    ax.set_axisbelow(True)
    ax.axhline(0, color=PlotConstants.CENTER_COLOR, linewidth=2, alpha=0.8)
    if raw:
        ax.plot(*zip(*raw), linestyle='none', marker='o', markersize=PlotConstants.MARKER_SIZE,
                color=PlotConstants.RAW_COLOR, label='measured')
    if model:
        ax.plot(*stepped_line(model), color=PlotConstants.STEP_COLOR, linewidth=2, label='model steps')
        ax.plot(*zip(*model), linestyle='none', marker='^', markersize=PlotConstants.MARKER_SIZE,
                color=PlotConstants.MODEL_COLOR, label='model')
        if len({t for t, _ in model}) == len(model):
            temperatures = np.arange(x_lower, x_upper + 1)
            curve = np.trunc(Polynomial.lagrange(model).evaluate_many(temperatures))
            ax.plot(temperatures, curve, color=PlotConstants.CENTER_COLOR, linewidth=1, alpha=0.6,
                    label='model fit')
        else:
            logger.warning("Model '%s' has repeated temperatures, skipping fitted curve", label)
    ax.legend(loc='upper right')


def plot_model(path: Union[str, Path], title: str,
               raw_x: Points, model_x: Points,
               raw_y: Points, model_y: Points,
               config: Optional[ModelConfig] = None) -> Path:
    """
    Render measured and modelled offsets to a PNG file.
    Args:
        path: Output image path
        title: Figure title
        raw_x, model_x: ``(temperature, offset)`` pairs for the X panel
        raw_y, model_y: ``(temperature, offset)`` pairs for the Y panel
        config: Labels and grid; defaults to ``ModelConfig()``
    Returns:
        The path written.
    """
    config = config if config is not None else ModelConfig()
    path = Path(path)
    logger.info("Plotting model to: %s", path)
    fig, (ax_x, ax_y) = plt.subplots(2, 1, figsize=PlotConstants.FIGURE_SIZE, dpi=PlotConstants.DPI)
    try:
        fig.suptitle(title, fontsize=20, fontweight='bold')
        _plot_axis(ax_x, config.x_label, raw_x, model_x, config.grid)
        _plot_axis(ax_y, config.y_label, raw_y, model_y, config.grid)
        fig.tight_layout()
        fig.savefig(str(path), facecolor='white', edgecolor='none')
    finally:  # Always close the figure to prevent memory leaks
        plt.close(fig)
        logger.debug("Figure closed")
    return path
