from .features import (
    edit_distance_score,
    exact_substring_score,
    jaro_score,
    jaro_winkler_score,
    token_match_score,
)
from .resolver import FuzzyLookupError, LookupDeadlineExceeded, select_best
from .scoring import WEIGHTS, composite_score, score_components

__all__ = [
    "WEIGHTS",
    "FuzzyLookupError",
    "LookupDeadlineExceeded",
    "composite_score",
    "edit_distance_score",
    "exact_substring_score",
    "jaro_score",
    "jaro_winkler_score",
    "score_components",
    "select_best",
    "token_match_score",
]
