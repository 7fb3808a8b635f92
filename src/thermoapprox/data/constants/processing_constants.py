from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class ProcessingConstants:
    """Processing constants used by the table and resampling code."""
    # Resample grid (inclusive bounds)
    GRID_START: Final[int] = -50
    GRID_STOP: Final[int] = 70
    GRID_STEP: Final[int] = 6
    # Table shape
    MIN_TABLE_LINES: Final[int] = 2
    ROW_FIELD_COUNT: Final[int] = 3
    # Signed 32-bit range of a row field
    FIELD_MIN: Final[int] = -2 ** 31
    FIELD_MAX: Final[int] = 2 ** 31 - 1
    # Serial numbers look like "2БЛК12А"
    SERIAL_PATTERN: Final[str] = r'[0-9]?БЛ[А-Я]?[0-9]*[А-Я]?'


@dataclass(frozen=True)
class TableFormat:
    """Text table format constants."""
    DELIMITER: Final[str] = ';'
    MISSING_TOKEN: Final[str] = 'nan'
    LINE_SEPARATOR: Final[str] = '\r\n'
    ABSOLUTE_HEADERS: Final[tuple] = ('temp', 'x', 'y')
    DIFFERENTIAL_HEADERS: Final[tuple] = ('temp', 'dx', 'dy')


@dataclass(frozen=True)
class FileConstants:
    """File naming and I/O related constants."""
    DEFAULT_ENCODING: Final[str] = 'utf-8'
    MAX_FILE_SIZE_MB: Final[int] = 10
    AUTO_MODEL_SUFFIX: Final[str] = '_auto_model.txt'
    MARKDOWN_SUFFIX: Final[str] = '_model.md'
    PLOT_SUFFIX: Final[str] = '_with_model.png'
    CT_PREFIX: Final[str] = 'tpk-k'
    CT_EXTENSION: Final[str] = '.ct'


@dataclass(frozen=True)
class PlotConstants:
    """Chart rendering defaults."""
    FIGURE_SIZE: Final[tuple] = (18.0, 11.0)
    DPI: Final[int] = 100
    X_LABEL: Final[str] = 'dX'
    Y_LABEL: Final[str] = 'dY'
    AXIS_MARGIN: Final[int] = 6
    MARKER_SIZE: Final[float] = 7.0
    RAW_COLOR: Final[str] = '#039be5'
    MODEL_COLOR: Final[str] = '#ff5722'
    STEP_COLOR: Final[str] = '#26a69a'
    CENTER_COLOR: Final[str] = '#000000'
