"""
Public lookup entry point.

lookup() behaves like a spreadsheet function: it always returns a value.
Bad arguments, no-match and unexpected failures all come back as sentinel
text (#ERROR: ..., #N/A) instead of exceptions.
"""

import math
from typing import Any, Optional

from .cells import Cell, build_table, validate_table
from .env import LookupSettings
from .logger import get_logger
from .matching import select_best
from .normalize import normalize_name
from .result import (
    COLUMN_OUT_OF_RANGE,
    ERROR_PREFIX,
    INVALID_TABLE,
    MISSING_PARAMETERS,
    LookupOutput,
    LookupResult,
    LookupStatus,
)

MATCH_THRESHOLD = 0.3


def _is_missing(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def _column_number(value: Any) -> Optional[int]:
    """1-based column as int, or None when value is not a whole number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def _validate(query: Any, table: Any, target_column: Any) -> Optional[LookupResult]:
    if _is_missing(query) or table is None or _is_missing(target_column):
        return LookupResult.failure(LookupStatus.PARAMETER_ERROR, MISSING_PARAMETERS)

    if validate_table(table):
        return LookupResult.failure(LookupStatus.TABLE_ERROR, INVALID_TABLE)

    column = _column_number(target_column)
    if column is None or column < 1 or column > len(table[0]):
        return LookupResult.failure(LookupStatus.RANGE_ERROR, COLUMN_OUT_OF_RANGE)

    return None


def _resolve(query, table, column: int, with_confidence: bool, settings: LookupSettings) -> LookupResult:
    logger = get_logger()
    cells = build_table(table)
    normalized_query = normalize_name(Cell.from_value(query).as_text())

    best = select_best(
        normalized_query,
        cells,
        workers=settings.workers,
        max_candidates=settings.max_candidates,
        deadline_seconds=settings.deadline_seconds,
    )

    if best.row_index is None or best.score < MATCH_THRESHOLD:
        logger.record_not_found(best.rows_scored)
        logger.info(
            "No match above threshold",
            query=normalized_query,
            best_score=round(best.score, 4),
            rows_scored=best.rows_scored,
        )
        return LookupResult.not_found(best.score, with_confidence, best.row_index)

    value = cells[best.row_index][column - 1].as_text()
    logger.record_match(best.rows_scored)
    logger.info(
        "Match found",
        query=normalized_query,
        row=best.row_index,
        score=round(best.score, 4),
        rows_scored=best.rows_scored,
    )
    return LookupResult.match(value, best.score, best.row_index, with_confidence)


def _describe(error: Exception) -> str:
    """ExceptionType: message, or just the type when the message cannot be rendered."""
    name = type(error).__name__
    try:
        message = str(error)
    except Exception:
        return name
    return f"{name}: {message}" if message else name


def lookup_result(
    query: Any,
    table: Any,
    target_column: Any,
    with_confidence: bool = False,
    settings: Optional[LookupSettings] = None,
) -> LookupResult:
    """
    Fuzzy VLOOKUP over the first column of table.

    Args:
        query: Name to search for (text, or a number coerced to text)
        table: Non-empty rectangular grid; column 1 holds the keys
        target_column: 1-based column whose value is returned
        with_confidence: Also report the match confidence as "<n>%"
        settings: Scan settings (default: LookupSettings())

    Returns:
        LookupResult; never raises
    """
    logger = get_logger()

    try:
        logger.record_lookup()
        if settings is None:
            settings = LookupSettings()
        with_confidence = bool(with_confidence)

        failure = _validate(query, table, target_column)
        if failure is not None:
            logger.record_error(failure.status.value)
            logger.info("Lookup rejected", reason=failure.message)
            return failure
        return _resolve(query, table, _column_number(target_column), with_confidence, settings)
    except Exception as e:
        description = _describe(e)
        logger.record_error(type(e).__name__)
        logger.error(f"Lookup failed: {description}", error_type=type(e).__name__)
        return LookupResult.failure(LookupStatus.INTERNAL_ERROR, f"{ERROR_PREFIX}{description}")


def lookup(
    query: Any,
    table: Any,
    target_column: Any,
    with_confidence: bool = False,
    settings: Optional[LookupSettings] = None,
) -> LookupOutput:
    """
    Same as lookup_result() but rendered for a cell: the matched value, a
    (value, "<n>%") pair when with_confidence is set, or a sentinel string.
    """
    return lookup_result(query, table, target_column, with_confidence, settings).to_output()
