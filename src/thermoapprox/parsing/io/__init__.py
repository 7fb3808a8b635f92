"""Reading and writing offset table files."""

from .data_handler import derive_path, load_table, read_table_text, save_table, save_text

__all__ = [
    "derive_path",
    "load_table",
    "read_table_text",
    "save_table",
    "save_text"
]
