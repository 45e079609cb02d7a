"""Sample table and queries showing lookup behaviour on typical name noise."""

from typing import List, Tuple

from .lookup import lookup
from .result import LookupOutput

SAMPLE_TABLE = [
    ["John Smith Inc", "CEO", "john@example.com"],
    ["Jane Doe LLC", "Manager", "jane@example.com"],
    ["Bob Johnson Corp", "Director", "bob@example.com"],
    ["Alice Brown Company", "VP", "alice@example.com"],
]

SAMPLE_QUERIES = [
    ("Jon Smith", 2),
    ("Jane D", 3),
]


def run_demo() -> List[Tuple[str, int, bool, LookupOutput]]:
    """Run each sample query without and with confidence."""
    results = []
    for query, column in SAMPLE_QUERIES:
        for with_confidence in (False, True):
            output = lookup(query, SAMPLE_TABLE, column, with_confidence)
            results.append((query, column, with_confidence, output))
    return results
