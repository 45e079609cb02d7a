"""
Result types for lookups.

Errors never cross the public boundary as exceptions: every outcome is a
LookupResult carrying a status tag, and to_output() renders it as the
value or sentinel text a spreadsheet cell expects.
"""

import math
from enum import Enum
from typing import Optional, Tuple, Union

NOT_FOUND = "#N/A"
MISSING_PARAMETERS = "#ERROR: Missing required parameters"
INVALID_TABLE = "#ERROR: Invalid table array"
COLUMN_OUT_OF_RANGE = "#ERROR: Column index out of range"
ERROR_PREFIX = "#ERROR: "

LookupOutput = Union[str, Tuple[str, str]]


class LookupStatus(Enum):
    MATCH = "match"
    NOT_FOUND = "not_found"
    PARAMETER_ERROR = "parameter_error"
    TABLE_ERROR = "table_error"
    RANGE_ERROR = "range_error"
    INTERNAL_ERROR = "internal_error"


class MatchResult:
    """Best candidate found by a scan.

    Attributes:
        row_index: 0-based index of the winning row, or None if no row scored
        score: Composite score of the winner (0.0 when nothing scored)
        rows_scored: Number of rows that were actually scored
    """

    def __init__(self, row_index: Optional[int], score: float, rows_scored: int = 0):
        self.row_index = row_index
        self.score = score
        self.rows_scored = rows_scored

    def __repr__(self) -> str:
        return f"MatchResult(row_index={self.row_index}, score={self.score:.4f}, rows_scored={self.rows_scored})"


def confidence_percent(score: float) -> int:
    """Integer percentage of score, rounding .5 up (round() would round to even)."""
    return int(math.floor(score * 100 + 0.5))


class LookupResult:
    """Outcome of a single lookup call."""

    def __init__(
        self,
        status: LookupStatus,
        value: str = "",
        score: float = 0.0,
        row_index: Optional[int] = None,
        message: str = "",
        with_confidence: bool = False,
    ):
        self.status = status
        self.value = value
        self.score = score
        self.row_index = row_index
        self.message = message
        self.with_confidence = with_confidence

    @classmethod
    def match(cls, value: str, score: float, row_index: int, with_confidence: bool) -> "LookupResult":
        return cls(LookupStatus.MATCH, value=value, score=score, row_index=row_index,
                   with_confidence=with_confidence)

    @classmethod
    def not_found(cls, score: float, with_confidence: bool, row_index: Optional[int] = None) -> "LookupResult":
        """row_index is the best candidate below the threshold, kept for explanations."""
        return cls(LookupStatus.NOT_FOUND, score=score, row_index=row_index,
                   with_confidence=with_confidence)

    @classmethod
    def failure(cls, status: LookupStatus, message: str) -> "LookupResult":
        return cls(status, message=message)

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.MATCH

    @property
    def is_error(self) -> bool:
        return self.status not in (LookupStatus.MATCH, LookupStatus.NOT_FOUND)

    @property
    def confidence(self) -> str:
        if self.status is LookupStatus.MATCH:
            return f"{confidence_percent(self.score)}%"
        return "0%"

    def to_output(self) -> LookupOutput:
        if self.is_error:
            return self.message
        if self.status is LookupStatus.NOT_FOUND:
            return (NOT_FOUND, "0%") if self.with_confidence else NOT_FOUND
        if self.with_confidence:
            return (self.value, self.confidence)
        return self.value

    def __repr__(self) -> str:
        return f"LookupResult(status={self.status.value}, output={self.to_output()!r})"
