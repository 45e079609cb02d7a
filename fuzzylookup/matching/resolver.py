"""
Match Resolution Orchestrator.

Responsibilities:
- Coordinate candidate selection.
- Normalize each candidate key and invoke scoring logic.
- Reduce all scores to a single winner.

Non-Responsibilities:
- No parameter validation.
- No threshold decisions or output shaping.

Invariant:
This module must be deterministic given the same inputs. Among equal
maximal scores the lowest row index wins, also when rows are scored
concurrently.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Sequence, Tuple

from ..cells import Cell
from ..logger import get_logger
from ..normalize import normalize_name
from ..result import MatchResult
from .candidate_selector import iter_candidates
from .scoring import composite_score


class FuzzyLookupError(Exception):
    """Base class for failures raised while resolving a lookup."""
    pass


class LookupDeadlineExceeded(FuzzyLookupError):
    """Raised when a scan runs past its configured deadline."""

    def __init__(self, deadline_seconds: float, rows_scored: int):
        super().__init__(
            f"Lookup deadline exceeded after {rows_scored} rows ({deadline_seconds:g}s)"
        )
        self.deadline_seconds = deadline_seconds
        self.rows_scored = rows_scored


def score_candidate(normalized_query: str, key_text: str) -> float:
    return composite_score(normalized_query, normalize_name(key_text))


def reduce_best(scored: Iterable[Tuple[int, float]]) -> MatchResult:
    """
    Pick the highest score from (row_index, score) pairs given in row order.

    Strict greater-than keeps the earliest row among ties.
    """
    best_index: Optional[int] = None
    best_score = 0.0
    count = 0
    for row_index, score in scored:
        count += 1
        if score > best_score:
            best_score = score
            best_index = row_index
    return MatchResult(best_index, best_score, rows_scored=count)


def _check_deadline(started: float, deadline_seconds: Optional[float], rows_scored: int) -> None:
    if deadline_seconds is not None and time.monotonic() - started > deadline_seconds:
        raise LookupDeadlineExceeded(deadline_seconds, rows_scored)


def _scan_sequential(normalized_query, candidates, started, deadline_seconds):
    logger = get_logger()
    scanned = 0
    for row_index, key_text in candidates:
        _check_deadline(started, deadline_seconds, scanned)
        score = score_candidate(normalized_query, key_text)
        scanned += 1
        logger.debug("Scored candidate", row=row_index, key=key_text, score=round(score, 4))
        yield row_index, score


def _scan_parallel(normalized_query, candidates, workers, started, deadline_seconds):
    logger = get_logger()
    candidates = list(candidates)
    pool = ThreadPoolExecutor(max_workers=workers)
    try:
        # map() yields in submission order, so the reduction sees row order
        scores = pool.map(lambda c: score_candidate(normalized_query, c[1]), candidates)
        for scanned, ((row_index, key_text), score) in enumerate(zip(candidates, scores)):
            _check_deadline(started, deadline_seconds, scanned)
            logger.debug("Scored candidate", row=row_index, key=key_text, score=round(score, 4))
            yield row_index, score
    finally:
        pool.shutdown(wait=True, cancel_futures=True)


def select_best(
    normalized_query: str,
    table: Sequence[Sequence[Cell]],
    workers: int = 1,
    max_candidates: Optional[int] = None,
    deadline_seconds: Optional[float] = None,
) -> MatchResult:
    """
    Score every candidate row against an already normalized query.

    Args:
        normalized_query: Output of normalize_name for the query
        table: Rows of Cells; column 0 is the key
        workers: Threads used for scoring (1 = sequential)
        max_candidates: Optional bound on rows scored
        deadline_seconds: Optional wall-clock limit for the scan

    Returns:
        MatchResult for the best row; row_index is None when no row scored above 0

    Raises:
        LookupDeadlineExceeded: If the scan outlives deadline_seconds
    """
    started = time.monotonic()
    candidates = iter_candidates(table, max_candidates=max_candidates)

    if workers > 1:
        scored = _scan_parallel(normalized_query, candidates, workers, started, deadline_seconds)
    else:
        scored = _scan_sequential(normalized_query, candidates, started, deadline_seconds)

    return reduce_best(scored)
