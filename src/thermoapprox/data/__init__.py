"""
Constants shared across thermoapprox.

This package provides the text-table format constants, the default resample
grid, file naming conventions and chart defaults.
"""

from .constants.processing_constants import ProcessingConstants, TableFormat, FileConstants, PlotConstants

__all__ = [
    "ProcessingConstants",
    "TableFormat",
    "FileConstants",
    "PlotConstants"
]
