"""
Candidate Selection Logic.

Responsibilities:
- Select the rows whose key is compared against the query.
- Skip rows with an empty key cell.
- Apply the optional bound on the number of candidates.

Non-Responsibilities:
- No scoring.
- No normalization.
- No threshold decisions.

Invariant:
Candidates are yielded in table order; selection never reorders rows.
"""

from typing import Iterator, Optional, Sequence, Tuple

from ..cells import Cell


def iter_candidates(
    table: Sequence[Sequence[Cell]],
    max_candidates: Optional[int] = None,
) -> Iterator[Tuple[int, str]]:
    """
    Yield (row_index, key_text) for every row with a non-empty key cell.

    Args:
        table: Rows of Cells; column 0 is the key
        max_candidates: Stop after this many candidates (None = no bound)
    """
    selected = 0
    for row_index, row in enumerate(table):
        if max_candidates is not None and selected >= max_candidates:
            return
        key = row[0]
        if key.is_empty:
            continue
        selected += 1
        yield row_index, key.as_text()
