import re

BUSINESS_SUFFIXES = ("inc", "llc", "corp", "ltd", "company", "co")
TITLES = ("mr", "mrs", "ms", "dr", "prof")

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_SUFFIX_WORDS = re.compile(r"\b(?:%s)\b" % "|".join(BUSINESS_SUFFIXES))
_TITLE_WORDS = re.compile(r"\b(?:%s)\b" % "|".join(TITLES))


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def normalize_name(name: str) -> str:
    """Canonical form of a person or account name used for matching.

    Lower-cases, strips punctuation, collapses whitespace and drops
    business suffixes (inc, llc, ...) and titles (mr, dr, ...) as whole
    words. normalize_name(normalize_name(s)) == normalize_name(s).
    """
    s = name.lower().strip()
    s = _NON_ALNUM.sub("", s)
    s = _WHITESPACE.sub(" ", s)
    s = _SUFFIX_WORDS.sub("", s)
    s = _TITLE_WORDS.sub("", s)
    # Removed words leave double spaces behind
    return normalize_text(s)
