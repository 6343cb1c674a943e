"""Observation record loading errors."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..exceptions import InseasonError


class RecordError(InseasonError):
    """Base class for record-set issues."""


class RecordFormatError(RecordError):
    """Raised when an export cannot be read as a whole."""

    def __init__(self, path: Path, message: str, *, row: Optional[int] = None):
        self.path = Path(path)
        self.message = message
        self.row = row
        where = self.path.name if row is None else f"{self.path.name} near row {row}"
        super().__init__(f"{where}: {message}")


class RecordDataError(RecordError):
    """Raised when a single row carries an unusable value."""

    def __init__(self, path: Path, row: int, column: str, message: str):
        self.path = Path(path)
        self.row = row
        self.column = column
        self.message = message
        super().__init__(f"{self.path.name} row {row} [{column}]: {message}")


class MalformedDate(RecordDataError):
    """Raised when an observation date cannot be parsed."""

    def __init__(self, path: Path, row: int, value: str, column: str = "observed_on"):
        self.value = value
        super().__init__(path, row, column, f"invalid date '{value}'")
