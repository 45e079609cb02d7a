"""
Scoring Logic for Name Matching (v1).

Responsibilities:
- Compute a deterministic confidence between a normalized query and a
  normalized candidate key.
- Emit the per-feature breakdown for explanations.

Non-Responsibilities:
- No candidate selection.
- No threshold decisions.

Invariant:
Given identical inputs, this module must always return the same score,
and the score is in [0, 1].
"""

from typing import Dict

from .features import (
    edit_distance_score,
    exact_substring_score,
    jaro_winkler_score,
    token_match_score,
)

WEIGHTS: Dict[str, float] = {
    "exact": 0.4,
    "edit": 0.3,
    "similarity": 0.2,
    "token": 0.1,
}


def score_components(a: str, b: str) -> Dict[str, float]:
    return {
        "exact": exact_substring_score(a, b),
        "edit": edit_distance_score(a, b),
        "similarity": jaro_winkler_score(a, b),
        "token": token_match_score(a, b),
    }


def weighted_score(components: Dict[str, float]) -> float:
    return (
        components["exact"] * WEIGHTS["exact"]
        + components["edit"] * WEIGHTS["edit"]
        + components["similarity"] * WEIGHTS["similarity"]
        + components["token"] * WEIGHTS["token"]
    )


def composite_score(a: str, b: str) -> float:
    """Confidence in [0, 1] that two normalized names refer to the same entity."""
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return weighted_score(score_components(a, b))
