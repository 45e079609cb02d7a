"""
Cell and table model for lookup input.

Spreadsheet ranges arrive as lists of rows holding heterogeneous scalars.
Each raw value is wrapped in a Cell tagged Text, Number or Empty, and
as_text() is the one place a cell is turned into text.
"""

import math
from enum import Enum
from typing import Any, List, Sequence


class CellKind(Enum):
    TEXT = "text"
    NUMBER = "number"
    EMPTY = "empty"


class Cell:
    """A single table cell tagged with its kind."""

    def __init__(self, kind: CellKind, value: Any = None):
        self.kind = kind
        self.value = value

    @classmethod
    def from_value(cls, raw: Any) -> "Cell":
        if isinstance(raw, Cell):
            return raw
        if raw is None or raw == "":
            return cls(CellKind.EMPTY)
        if isinstance(raw, bool):
            return cls(CellKind.TEXT, "true" if raw else "false")
        if isinstance(raw, (int, float)):
            return cls(CellKind.NUMBER, raw)
        return cls(CellKind.TEXT, str(raw))

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    def as_text(self) -> str:
        if self.kind is CellKind.EMPTY:
            return ""
        if self.kind is CellKind.NUMBER:
            return format_number(self.value)
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.kind is other.kind and self.value == other.value

    def __repr__(self) -> str:
        if self.is_empty:
            return "Cell(empty)"
        return f"Cell({self.kind.value}={self.value!r})"


def format_number(n: Any) -> str:
    """Render a number the way a spreadsheet displays it: 3.0 -> "3"."""
    if isinstance(n, float):
        if math.isfinite(n) and n.is_integer():
            return str(int(n))
        return repr(n)
    return str(n)


def _is_row(row: Any) -> bool:
    return isinstance(row, Sequence) and not isinstance(row, (str, bytes))


def validate_table(table: Any) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means the table
    is a non-empty rectangular grid with at least one column.
    """
    errors: List[str] = []

    if not _is_row(table):
        errors.append("Table must be a sequence of rows")
        return errors
    if len(table) == 0:
        errors.append("Table must contain at least one row")
        return errors

    width = None
    for i, row in enumerate(table):
        if not _is_row(row):
            errors.append(f"Row {i + 1} must be a sequence of cells")
            continue
        if width is None:
            width = len(row)
            if width == 0:
                errors.append("Rows must contain at least one column")
        elif len(row) != width:
            errors.append(f"Row {i + 1} has {len(row)} cells, expected {width}")

    return errors


def build_table(raw: Sequence[Sequence[Any]]) -> List[List[Cell]]:
    """Wrap every raw value of an already validated grid in a Cell."""
    return [[Cell.from_value(v) for v in row] for row in raw]
