"""Custom exceptions for thermoapprox."""
import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class ThermoApproxError(Exception):
    """Base exception for all thermoapprox errors."""

    def __init__(self, message):
        super().__init__(message)
        logger.error("%s raised: %s", type(self).__name__, message)


class PolynomialError(ThermoApproxError):
    """Exception raised when a polynomial cannot be constructed."""


class EmptyInputError(PolynomialError):
    """Exception raised when a polynomial is built from no data."""

    def __init__(self, what: str = "coefficients"):
        self.what = what
        super().__init__(f"Cannot build a polynomial from empty {what}")


class DegreeCollisionError(PolynomialError):
    """Exception raised when two (degree, value) pairs name the same degree."""

    def __init__(self, degrees: Iterable[int]):
        self.degrees = sorted(set(degrees))
        super().__init__(f"Degree collision: {', '.join(str(d) for d in self.degrees)} given more than once")


class ParseError(ThermoApproxError):
    """Base exception for offset table parse failures."""


class TooFewRowsError(ParseError):
    """Exception raised when a table has no data line after the header."""

    def __init__(self, line_count: int, minimum: int):
        self.line_count = line_count
        self.minimum = minimum
        super().__init__(f"Table has {line_count} line(s), at least {minimum} required")


class UnrecognizedHeaderError(ParseError):
    """Exception raised when the header line is neither absolute nor differential."""

    def __init__(self, header: str, expected: Iterable[str]):
        self.header = header
        self.expected = list(expected)
        super().__init__(f"Invalid header '{header}', expected one of: {', '.join(self.expected)}")


class MalformedRowError(ParseError):
    """Exception raised for rows that cannot be used."""

    def __init__(self, message: str, line: Optional[str] = None, index: Optional[int] = None):
        self.line = line
        self.index = index
        if index is not None:
            message = f"{message} (line {index})"
        if line is not None:
            message = f"{message}: '{line}'"
        super().__init__(message)


class ConfigError(ThermoApproxError):
    """Exception raised when a model configuration file is invalid."""


class SerialNumberError(ThermoApproxError):
    """Exception raised when no serial number can be detected."""
