"""
Diagnostic scan for LOOKUP formulas in a sheet.

Walks a grid of raw cell contents (formula text where a cell holds one) and
reports every cell calling LOOKUP, flagging the calls that request a
confidence column. Purely informational; it does not evaluate anything.
"""

from typing import Any, List, Sequence

LOOKUP_CALL = "LOOKUP("


def column_letter(col: int) -> str:
    """1-based column number to spreadsheet letters: 1 -> A, 27 -> AA."""
    if col < 1:
        raise ValueError(f"Column must be >= 1, got {col}")
    letters = ""
    while col > 0:
        col, rem = divmod(col - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def a1_notation(row: int, col: int) -> str:
    if row < 1:
        raise ValueError(f"Row must be >= 1, got {row}")
    return f"{column_letter(col)}{row}"


class FormulaHit:
    """A cell whose formula calls LOOKUP."""

    def __init__(self, address: str, formula: str, with_confidence: bool):
        self.address = address
        self.formula = formula
        self.with_confidence = with_confidence

    def __repr__(self) -> str:
        return f"FormulaHit({self.address}, confidence={self.with_confidence})"


def scan_lookup_formulas(grid: Sequence[Sequence[Any]]) -> List[FormulaHit]:
    hits: List[FormulaHit] = []
    for r, row in enumerate(grid, start=1):
        for c, cell in enumerate(row, start=1):
            if not isinstance(cell, str) or LOOKUP_CALL not in cell.upper():
                continue
            # A TRUE argument is the show-confidence flag
            with_confidence = "TRUE" in cell or "true" in cell
            hits.append(FormulaHit(a1_notation(r, c), cell, with_confidence))
    return hits
