"""
thermoapprox - temperature calibration models for two-axis offset sensors.

This library turns temperature vs. X/Y offset measurements into a compact
model table: absolute offsets are rebased per measurement segment, a
Lagrange polynomial is fitted through each axis and the fit is resampled on
a fixed temperature grid.

Main Components:
- Core: Polynomial algebra, offset rows and offset tables
- Parsing: YAML model configuration and table file I/O
- Model: Orchestration of loading, computing and exporting models
- Visualization: Charts of measured and modelled offsets
- Data: Format, grid and file constants
"""

try:
    from importlib.metadata import version, PackageNotFoundError
    try:
        __version__ = version("thermoapprox")
    except PackageNotFoundError:
        __version__ = "0.1.0+unknown"
except ImportError:
    __version__ = "0.1.0+unknown"

# Core types
from .core.polynomial import Polynomial
from .core.row import OffsetRow, SegmentBreak
from .core.table import OffsetTable, resample_grid
from .core.exceptions import (ThermoApproxError, EmptyInputError, DegreeCollisionError, ParseError,
                              TooFewRowsError, UnrecognizedHeaderError, MalformedRowError)

# Configuration and I/O
from .parsing.config.model_yaml_parser import ModelConfig, load_model_config
from .parsing.io.data_handler import load_table, save_table

# Orchestration
from .model.thermo_model import ThermoModel, detect_serial_number

__all__ = [
    # Version
    '__version__',

    # Core
    'Polynomial',
    'OffsetRow',
    'SegmentBreak',
    'OffsetTable',
    'resample_grid',

    # Errors
    'ThermoApproxError',
    'EmptyInputError',
    'DegreeCollisionError',
    'ParseError',
    'TooFewRowsError',
    'UnrecognizedHeaderError',
    'MalformedRowError',

    # Configuration and I/O
    'ModelConfig',
    'load_model_config',
    'load_table',
    'save_table',

    # Orchestration
    'ThermoModel',
    'detect_serial_number'
]
