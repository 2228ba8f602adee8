"""
Record store abstraction.

Rows are addressed by their 0-based position in read_all(); row 0 is the
header row.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence


class RecordStore(ABC):
    """Tabular store holding a header row followed by data rows."""

    @abstractmethod
    def read_all(self) -> List[List[Any]]:
        """Return every row, header included."""

    @abstractmethod
    def write_row(self, row_index: int, values: Sequence[Any], start_column: int = 0) -> None:
        """Overwrite len(values) cells of an existing row starting at start_column."""

    @abstractmethod
    def append_row(self, values: Sequence[Any]) -> None:
        """Add a row after the last one."""

    @abstractmethod
    def append_rows(self, rows: Sequence[Sequence[Any]]) -> None:
        """Add several rows after the last one in a single write."""


class MemoryRecordStore(RecordStore):
    """List-backed store for local development and tests."""

    def __init__(self, rows: Optional[List[List[Any]]] = None):
        self.rows = [list(row) for row in rows] if rows else []

    def read_all(self) -> List[List[Any]]:
        return [list(row) for row in self.rows]

    def write_row(self, row_index: int, values: Sequence[Any], start_column: int = 0) -> None:
        if row_index < 0 or row_index >= len(self.rows):
            raise IndexError(f"Row {row_index} does not exist")
        row = self.rows[row_index]
        end = start_column + len(values)
        if len(row) < end:
            row.extend([''] * (end - len(row)))
        row[start_column:end] = list(values)

    def append_row(self, values: Sequence[Any]) -> None:
        self.rows.append(list(values))

    def append_rows(self, rows: Sequence[Sequence[Any]]) -> None:
        self.rows.extend(list(row) for row in rows)
