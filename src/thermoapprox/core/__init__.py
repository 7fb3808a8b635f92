"""Core data types: polynomials, offset rows and offset tables."""

from .exceptions import (ThermoApproxError, PolynomialError, EmptyInputError, DegreeCollisionError,
                         ParseError, TooFewRowsError, UnrecognizedHeaderError, MalformedRowError,
                         ConfigError, SerialNumberError)
from .polynomial import Polynomial
from .row import OffsetRow, SegmentBreak
from .table import OffsetTable, resample_grid, rebase

__all__ = [
    "Polynomial",
    "OffsetRow",
    "SegmentBreak",
    "OffsetTable",
    "resample_grid",
    "rebase",
    "ThermoApproxError",
    "PolynomialError",
    "EmptyInputError",
    "DegreeCollisionError",
    "ParseError",
    "TooFewRowsError",
    "UnrecognizedHeaderError",
    "MalformedRowError",
    "ConfigError",
    "SerialNumberError"
]
