"""
Similarity Features for Name Matching.

Responsibilities:
- Compute the individual similarity features between two normalized names:
  exact substring, edit distance, Jaro-Winkler and token overlap.

Non-Responsibilities:
- No weighting logic.
- No threshold logic.
- No normalization (inputs are already normalized).

Invariant:
Every feature returns a float in [0, 1] and is a pure function of its inputs.
"""

from rapidfuzz.distance import Levenshtein

JARO_WINKLER_BOOST_THRESHOLD = 0.7
JARO_WINKLER_PREFIX_SCALE = 0.1
JARO_WINKLER_MAX_PREFIX = 4
TOKEN_EDIT_THRESHOLD = 0.8


def longest_common_substring(a: str, b: str) -> int:
    """Length of the longest contiguous run shared by a and b."""
    if not a or not b:
        return 0
    best = 0
    prev = [0] * (len(b) + 1)
    for i in range(1, len(a) + 1):
        cur = [0] * (len(b) + 1)
        for j in range(1, len(b) + 1):
            if a[i - 1] == b[j - 1]:
                cur[j] = prev[j - 1] + 1
                if cur[j] > best:
                    best = cur[j]
        prev = cur
    return best


def exact_substring_score(a: str, b: str) -> float:
    """
    Containment ratio of the shorter string in the longer one, falling back
    to longest common substring over the longer length.
    """
    if len(b) > len(a):
        longer, shorter = b, a
    else:
        longer, shorter = a, b

    if not longer:
        return 1.0
    if shorter in longer:
        return len(shorter) / len(longer)

    return longest_common_substring(a, b) / max(len(a), len(b))


def edit_distance_score(a: str, b: str) -> float:
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    distance = Levenshtein.distance(a, b)
    return (max_len - distance) / max_len


def jaro_score(a: str, b: str) -> float:
    if a == b:
        return 1.0
    len_a, len_b = len(a), len(b)
    if len_a == 0 or len_b == 0:
        return 0.0

    window = max(len_a, len_b) // 2 - 1
    if window < 0:
        return 0.0

    a_matched = [False] * len_a
    b_matched = [False] * len_b
    matches = 0

    for i in range(len_a):
        start = max(0, i - window)
        end = min(i + window + 1, len_b)
        for j in range(start, end):
            if b_matched[j] or a[i] != b[j]:
                continue
            a_matched[i] = True
            b_matched[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    # Walk both matched sequences in order and count disagreements
    transpositions = 0
    k = 0
    for i in range(len_a):
        if not a_matched[i]:
            continue
        while not b_matched[k]:
            k += 1
        if a[i] != b[k]:
            transpositions += 1
        k += 1

    return (
        matches / len_a
        + matches / len_b
        + (matches - transpositions / 2) / matches
    ) / 3.0


def jaro_winkler_score(a: str, b: str) -> float:
    """
    Jaro similarity with the Winkler common-prefix boost.

    The boost only applies when Jaro is at least 0.7; the shared prefix
    counts up to four characters.
    """
    jaro = jaro_score(a, b)
    if jaro < JARO_WINKLER_BOOST_THRESHOLD:
        return jaro

    prefix = 0
    for ca, cb in zip(a[:JARO_WINKLER_MAX_PREFIX], b[:JARO_WINKLER_MAX_PREFIX]):
        if ca != cb:
            break
        prefix += 1

    return jaro + JARO_WINKLER_PREFIX_SCALE * prefix * (1 - jaro)


def _tokens_match(t1: str, t2: str) -> bool:
    return (
        t2 in t1
        or t1 in t2
        or edit_distance_score(t1, t2) > TOKEN_EDIT_THRESHOLD
    )


def token_match_score(a: str, b: str) -> float:
    """
    Share of words that find a partner in the other name.

    Greedy first fit: each token of a takes the first unused token of b that
    contains it, is contained by it, or is within a small edit distance.
    The result depends on token order and is not symmetric.
    """
    tokens_a = a.split()
    tokens_b = b.split()
    if not tokens_a or not tokens_b:
        return 0.0

    used = set()
    matched = 0
    for t1 in tokens_a:
        for idx, t2 in enumerate(tokens_b):
            if idx in used:
                continue
            if _tokens_match(t1, t2):
                used.add(idx)
                matched += 1
                break

    return matched / max(len(tokens_a), len(tokens_b))
