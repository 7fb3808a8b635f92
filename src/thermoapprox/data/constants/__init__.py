"""Processing, format and file constants for thermoapprox."""

from .processing_constants import ProcessingConstants, TableFormat, FileConstants, PlotConstants

__all__ = [
    "ProcessingConstants",
    "TableFormat",
    "FileConstants",
    "PlotConstants"
]
