"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Any, List

from fuzzylookup.logger import reset_logger


@pytest.fixture(autouse=True)
def fresh_logger():
    """Every test starts with a new global logger and zeroed metrics."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def contacts_table() -> List[List[Any]]:
    """Contact table with business suffixes on the keys."""
    return [
        ["John Smith Inc", "CEO", "john@example.com"],
        ["Jane Doe LLC", "Manager", "jane@example.com"],
        ["Bob Johnson Corp", "Director", "bob@example.com"],
        ["Alice Brown Company", "VP", "alice@example.com"],
    ]


@pytest.fixture
def two_column_table() -> List[List[Any]]:
    return [
        ["John Smith", "CEO"],
        ["Jane Doe", "Manager"],
    ]


@pytest.fixture
def sample_names() -> List[str]:
    """Raw names with the kinds of noise lookups have to cope with."""
    return [
        "",
        "   ",
        "John Smith",
        "  JOHN   smith  ",
        "Dr. Jane Smith, MD",
        "Acme Co. Ltd",
        "Smith & Co Inc.",
        "Mr and Mrs Jones",
        "O'Brien-Walsh",
        "prof dr mr",
        "Coca Cola Company",
        "Café Müller GmbH",
        "john\tsmith\njr",
        "Jones Inc Smith",
    ]
