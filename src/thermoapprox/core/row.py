import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from thermoapprox.core.exceptions import MalformedRowError
from thermoapprox.data.constants import ProcessingConstants, TableFormat

logger = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')


def parse_field(text: str) -> Optional[int]:
    """
    Parse one row field as a signed 32-bit integer.
    Anything else, including the ``nan`` token, an empty field or an
    out-of-range value, is an absent field and returns None.
    """
    if not _INTEGER_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if not ProcessingConstants.FIELD_MIN <= value <= ProcessingConstants.FIELD_MAX:
        logger.debug("Field value %s is outside the 32-bit range, treating as missing", text)
        return None
    return value


def format_field(value: Optional[int]) -> str:
    return TableFormat.MISSING_TOKEN if value is None else str(value)


@dataclass(frozen=True)
class OffsetRow:
    """A single table record: temperature and the X/Y offsets, each optional."""
    temp: Optional[int] = None
    x: Optional[int] = None
    y: Optional[int] = None

    @classmethod
    def parse(cls, line: str) -> 'OffsetRow':
        """
        Parse a delimited line into a row.
        Args:
            line: Text such as ``"12;-3;nan"``
        Returns:
            The row; fields that are not integers are None.
        Raises:
            MalformedRowError: If the line does not have exactly three fields
        """
        fields = line.split(TableFormat.DELIMITER)
        if len(fields) != ProcessingConstants.ROW_FIELD_COUNT:
            raise MalformedRowError(
                f"Invalid row length {len(fields)}, expected {ProcessingConstants.ROW_FIELD_COUNT}", line=line)
        return cls(*(parse_field(field) for field in fields))

    @property
    def is_anchor(self) -> bool:
        """True for the all-missing row that separates measurement segments."""
        return self.temp is None and self.x is None and self.y is None

    @property
    def is_complete(self) -> bool:
        return self.temp is not None and self.x is not None and self.y is not None

    def format(self) -> str:
        return TableFormat.DELIMITER.join(format_field(value) for value in (self.temp, self.x, self.y))

    def __str__(self) -> str:
        return self.format()


class SegmentBreak:
    """Marks the start of a measurement segment in a parsed absolute table."""

    __slots__ = ()

    def __eq__(self, other) -> bool:
        return isinstance(other, SegmentBreak)

    def __hash__(self) -> int:
        return hash(SegmentBreak)

    def __repr__(self) -> str:
        return "SegmentBreak()"


Record = Union[OffsetRow, SegmentBreak]


def to_record(row: OffsetRow) -> Record:
    """Turn anchor rows into segment breaks, leave data rows untouched."""
    return SegmentBreak() if row.is_anchor else row
