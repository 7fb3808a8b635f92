"""Chart rendering for offset models."""

from .plotters import plot_model, stepped_line

__all__ = [
    "plot_model",
    "stepped_line"
]
