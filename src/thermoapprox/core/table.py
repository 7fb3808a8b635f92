import logging
from collections import Counter
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from thermoapprox.core.exceptions import (EmptyInputError, MalformedRowError, TooFewRowsError,
                                          UnrecognizedHeaderError)
from thermoapprox.core.polynomial import Polynomial
from thermoapprox.core.row import OffsetRow, Record, SegmentBreak, to_record
from thermoapprox.data.constants import ProcessingConstants, TableFormat

logger = logging.getLogger(__name__)

ABSOLUTE_HEADER = TableFormat.DELIMITER.join(TableFormat.ABSOLUTE_HEADERS)
DIFFERENTIAL_HEADER = TableFormat.DELIMITER.join(TableFormat.DIFFERENTIAL_HEADERS)


def resample_grid(start: int = ProcessingConstants.GRID_START,
                  stop: int = ProcessingConstants.GRID_STOP,
                  step: int = ProcessingConstants.GRID_STEP) -> List[int]:
    """Temperatures from ``start`` to ``stop`` (inclusive) every ``step`` degrees."""
    if step <= 0:
        raise ValueError(f"Grid step must be positive, got {step}")
    if stop < start:
        raise ValueError(f"Grid stop ({stop}) is below grid start ({start})")
    return [int(t) for t in np.arange(start, stop + 1, step)]


def _sort_and_deduplicate(rows: Iterable[OffsetRow]) -> List[OffsetRow]:
    """Stable sort by temperature, then drop consecutive identical rows."""
    ordered = sorted(rows, key=lambda row: row.temp)
    unique: List[OffsetRow] = []
    for row in ordered:
        if unique and unique[-1] == row:
            continue
        unique.append(row)
    dropped = len(ordered) - len(unique)
    if dropped:
        logger.warning("Dropped %d duplicate row(s)", dropped)
    return unique


def rebase(records: Sequence[Record]) -> List[OffsetRow]:
    """
    Convert absolute offsets into offsets relative to each segment's baseline.

    The baseline starts at ``(0, 0)``. A ``SegmentBreak`` sets it to the x/y of
    the record that follows it; every complete row is emitted with the baseline
    subtracted. Line numbers in errors count the header as line 1.
    Raises:
        MalformedRowError: For a segment break with no usable row after it, or
            a row that is neither complete nor a segment break
    """
    x0, y0 = 0, 0
    rows = []
    for index, record in enumerate(records):
        line_number = index + 2
        if isinstance(record, SegmentBreak):
            if index + 1 >= len(records):
                raise MalformedRowError("Segment break cannot be the last row", index=line_number)
            following = records[index + 1]
            if isinstance(following, SegmentBreak) or following.x is None or following.y is None:
                raise MalformedRowError("Segment break must be followed by a row with x and y",
                                        line=str(following) if isinstance(following, OffsetRow) else None,
                                        index=line_number + 1)
            x0, y0 = following.x, following.y
            logger.debug("New segment at line %d, baseline x0=%d, y0=%d", line_number, x0, y0)
        elif record.is_complete:
            rows.append(OffsetRow(record.temp, record.x - x0, record.y - y0))
        else:
            raise MalformedRowError("Invalid row format", line=str(record), index=line_number)
    return rows


class OffsetTable:
    """
    Ordered, immutable collection of offset rows.

    Tables produced by ``parse`` and ``resample`` are differential, sorted by
    temperature, free of anchor rows and of consecutive duplicates.
    """

    def __init__(self, rows: Iterable[OffsetRow] = (), differential: bool = True) -> None:
        self._rows: Tuple[OffsetRow, ...] = tuple(rows)
        self._differential = differential

    # --- Parsing ---
    @classmethod
    def parse(cls, text: str) -> 'OffsetTable':
        """
        Parse a table from text.
        Args:
            text: Header line (``temp;x;y`` or ``temp;dx;dy``) followed by rows,
                with any line-ending convention
        Returns:
            A differential table in canonical order.
        Raises:
            TooFewRowsError: If there is no line after the header
            UnrecognizedHeaderError: If the header is not one of the two forms
            MalformedRowError: If a row has the wrong field count, lacks a temperature
                or cannot be rebased
        """
        lines = text.splitlines()
        if len(lines) < ProcessingConstants.MIN_TABLE_LINES:
            raise TooFewRowsError(len(lines), ProcessingConstants.MIN_TABLE_LINES)
        header = lines[0]
        if header == DIFFERENTIAL_HEADER:
            differential = True
        elif header == ABSOLUTE_HEADER:
            differential = False
        else:
            raise UnrecognizedHeaderError(header, (ABSOLUTE_HEADER, DIFFERENTIAL_HEADER))
        records = [to_record(OffsetRow.parse(line)) for line in lines[1:]]
        logger.debug("Parsed %d record(s) with %s header", len(records),
                     "differential" if differential else "absolute")
        if differential:
            rows = []
            for index, record in enumerate(records):
                if isinstance(record, SegmentBreak):
                    continue
                if record.temp is None:
                    raise MalformedRowError("Row has no temperature", line=str(record), index=index + 2)
                rows.append(record)
        else:
            rows = rebase(records)
        table = cls(_sort_and_deduplicate(rows), differential=True)
        logger.info("Loaded table with %d row(s)", len(table))
        return table

    # --- Accessors ---
    @property
    def rows(self) -> Tuple[OffsetRow, ...]:
        return self._rows

    @property
    def differential(self) -> bool:
        return self._differential

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[OffsetRow]:
        return iter(self._rows)

    def __getitem__(self, index):
        return self._rows[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, OffsetTable):
            return NotImplemented
        return self._rows == other._rows and self._differential == other._differential

    def __hash__(self) -> int:
        return hash((self._rows, self._differential))

    def __repr__(self) -> str:
        return f"OffsetTable({len(self._rows)} rows, differential={self._differential})"

    def offset_pairs(self, axis: str) -> List[Tuple[int, int]]:
        """``(temperature, offset)`` pairs for ``axis`` ('x' or 'y') from complete rows."""
        if axis not in ('x', 'y'):
            raise ValueError(f"Axis must be 'x' or 'y', got '{axis}'")
        return [(row.temp, getattr(row, axis)) for row in self._rows if row.is_complete]

    def to_pandas(self) -> pd.DataFrame:
        headers = TableFormat.DIFFERENTIAL_HEADERS if self._differential else TableFormat.ABSOLUTE_HEADERS
        columns = zip(*((row.temp, row.x, row.y) for row in self._rows)) if self._rows else ((), (), ())
        return pd.DataFrame({name: pd.array(list(values), dtype='Int32')
                             for name, values in zip(headers, columns)})

    # --- Model ---
    def resample(self, grid: Optional[Iterable[int]] = None) -> 'OffsetTable':
        """
        Fit the offsets and evaluate the fit on a temperature grid.

        Two Lagrange polynomials are built through every row, one for
        ``(temp, x)`` and one for ``(temp, y)``. Each is evaluated at the grid
        temperatures and truncated toward zero.
        Args:
            grid: Ascending temperatures; defaults to -50..70 every 6 degrees
        Returns:
            A differential table with one row per grid temperature.
        Raises:
            EmptyInputError: If the table has no rows
            MalformedRowError: If a row has a missing field or two rows share a
                temperature
            ValueError: If the table is not differential
        """
        if not self._differential:
            raise ValueError("Only differential tables can be resampled")
        if not self._rows:
            raise EmptyInputError("table rows")
        for row in self._rows:
            if not row.is_complete:
                raise MalformedRowError("Cannot resample a row with missing fields", line=str(row))
        repeated = sorted(t for t, count in Counter(row.temp for row in self._rows).items() if count > 1)
        if repeated:
            raise MalformedRowError(f"Cannot interpolate through repeated temperature(s) {repeated}")
        grid = resample_grid() if grid is None else [int(t) for t in grid]
        poly_x = Polynomial.lagrange((row.temp, row.x) for row in self._rows)
        poly_y = Polynomial.lagrange((row.temp, row.y) for row in self._rows)
        logger.info("poly_x: %s", poly_x)
        logger.info("poly_y: %s", poly_y)
        rows = [OffsetRow(t, int(poly_x.evaluate(t)), int(poly_y.evaluate(t))) for t in grid]
        logger.info("Resampled %d row(s) onto %d grid point(s)", len(self._rows), len(rows))
        return OffsetTable(rows, differential=True)

    # --- Formatting ---
    def format(self) -> str:
        header = DIFFERENTIAL_HEADER if self._differential else ABSOLUTE_HEADER
        return TableFormat.LINE_SEPARATOR.join([header] + [row.format() for row in self._rows])

    def __str__(self) -> str:
        return self.format()
