"""Reading and writing hierarchy CSV files."""

from .csv_reader import HierarchyFormatError, read_csv, read_nodes
from .csv_writer import write_csv, write_rows

__all__ = [
    "HierarchyFormatError",
    "read_csv",
    "read_nodes",
    "write_csv",
    "write_rows",
]
