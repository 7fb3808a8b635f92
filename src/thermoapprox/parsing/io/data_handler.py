import logging
from pathlib import Path
from typing import Union

from thermoapprox.core.table import OffsetTable
from thermoapprox.data.constants import FileConstants

logger = logging.getLogger(__name__)


def derive_path(source: Union[str, Path], suffix: str) -> Path:
    """
    Build a sibling path of ``source`` with its extension replaced by ``suffix``.
    Example:
        derive_path('data/run.csv', '_auto_model.txt') -> <cwd>/data/run_auto_model.txt
    """
    source = Path(source).absolute()
    return source.with_name(source.stem + suffix)


def read_table_text(file_path: Union[str, Path]) -> str:
    """
    Read a table file with existence and size checks.
    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the path is not a file or the file is too large
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    if not file_path.is_file():
        raise ValueError(f"Path is not a file: {file_path}")
    file_size_mb = file_path.stat().st_size / (1024 * 1024)
    if file_size_mb > FileConstants.MAX_FILE_SIZE_MB:
        raise ValueError(f"File size ({file_size_mb:.2f} MB) exceeds the maximum limit "
                         f"of {FileConstants.MAX_FILE_SIZE_MB} MB.")
    try:
        return file_path.read_text(encoding=FileConstants.DEFAULT_ENCODING)
    except PermissionError as e:
        raise PermissionError(f"Permission denied reading file {file_path}: {str(e)}") from e
    except UnicodeDecodeError as e:
        raise ValueError(f"File {file_path} is not valid {FileConstants.DEFAULT_ENCODING} text: {str(e)}") from e


def load_table(file_path: Union[str, Path]) -> OffsetTable:
    """Load and parse an offset table file."""
    logger.info("Loading table from: %s", file_path)
    return OffsetTable.parse(read_table_text(file_path))


def save_table(table: OffsetTable, file_path: Union[str, Path]) -> Path:
    """Write ``table`` in its text format and return the path written."""
    return save_text(table.format(), file_path)


def save_text(text: str, file_path: Union[str, Path]) -> Path:
    file_path = Path(file_path)
    # newline='' keeps the CRLF separators as written
    with open(file_path, 'w', encoding=FileConstants.DEFAULT_ENCODING, newline='') as f:
        f.write(text)
    logger.info("Saved %s", file_path)
    return file_path
