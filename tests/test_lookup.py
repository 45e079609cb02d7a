"""
Tests for the public lookup function and its sentinels.
"""

import pytest
from fuzzylookup import lookup, lookup_result
from fuzzylookup.env import LookupSettings
from fuzzylookup.logger import get_logger
from fuzzylookup.matching import resolver
from fuzzylookup.result import LookupStatus, confidence_percent


class Unprintable:
    """Cell value whose text conversion fails."""

    def __str__(self):
        raise RuntimeError("cannot render cell")


class AmbiguousFlag:
    """Flag whose truth value cannot be decided, like a numpy array."""

    def __bool__(self):
        raise ValueError("truth value is ambiguous")


class SilentError(Exception):
    """Exception whose message itself fails to render."""

    def __str__(self):
        raise RuntimeError("no message")


class SilentlyUnprintable:
    def __str__(self):
        raise SilentError()


class TestScenarios:
    """End-to-end lookups on small tables."""

    def test_exact_match(self):
        assert lookup("John Smith", [["John Smith", "CEO"]], 2, False) == "CEO"

    def test_typo_with_confidence(self):
        assert lookup("acme", [["acne", "X"]], 2, True) == ("X", "60%")

    def test_no_similarity(self):
        assert lookup("Zyxqq", [["John Smith", "CEO"]], 2, False) == "#N/A"

    def test_no_similarity_with_confidence(self):
        assert lookup("Zyxqq", [["John Smith", "CEO"]], 2, True) == ("#N/A", "0%")

    def test_title_stripped(self):
        table = [["Jane Smith MD", "A"], ["Bob Jones", "B"]]
        assert lookup("Dr Jane Smith", table, 1, True) == ("Jane Smith MD", "80%")

    def test_suffix_stripped(self, contacts_table):
        assert lookup("Jon Smith", contacts_table, 2) == "CEO"
        assert lookup("Jon Smith", contacts_table, 2, True) == ("CEO", "75%")

    def test_partial_name(self, contacts_table):
        assert lookup("Jane D", contacts_table, 3) == "jane@example.com"
        value, confidence = lookup("Jane D", contacts_table, 3, True)
        assert value == "jane@example.com"
        assert confidence.endswith("%")

    def test_confidence_is_default_off(self, two_column_table):
        assert lookup("John Smith", two_column_table, 2) == "CEO"


class TestParameterErrors:
    """Missing or malformed arguments."""

    @pytest.mark.parametrize("query", ["", None])
    def test_missing_query(self, two_column_table, query):
        assert lookup(query, two_column_table, 2) == "#ERROR: Missing required parameters"

    def test_missing_table(self):
        assert lookup("John", None, 2) == "#ERROR: Missing required parameters"

    @pytest.mark.parametrize("column", [None, 0])
    def test_missing_column(self, two_column_table, column):
        assert lookup("John", two_column_table, column) == "#ERROR: Missing required parameters"

    @pytest.mark.parametrize("table", [[], "John Smith", [["a", "b"], ["c"]], [[]]])
    def test_invalid_table(self, table):
        assert lookup("John", table, 1) == "#ERROR: Invalid table array"

    @pytest.mark.parametrize("column", [5, 3, -1, 1.5, "2"])
    def test_column_out_of_range(self, two_column_table, column):
        assert lookup("John", two_column_table, column) == "#ERROR: Column index out of range"

    def test_integral_float_column(self, two_column_table):
        assert lookup("John Smith", two_column_table, 2.0) == "CEO"

    def test_missing_beats_invalid_table(self):
        assert lookup("", [], 9) == "#ERROR: Missing required parameters"

    def test_invalid_table_beats_range(self):
        assert lookup("John", [], 9) == "#ERROR: Invalid table array"

    def test_errors_ignore_confidence_flag(self, two_column_table):
        assert lookup("John", two_column_table, 5, True) == "#ERROR: Column index out of range"


class TestCellValues:
    """Key and result cells of different kinds."""

    def test_empty_keys_skipped(self):
        table = [[None, "x"], ["", "y"], ["John Smith", "z"]]
        assert lookup("John Smith", table, 2) == "z"

    def test_numeric_query_and_key(self):
        assert lookup(1042, [[1042, "answer"]], 2) == "answer"

    def test_numeric_result(self):
        assert lookup("John", [["John", 3.0]], 2) == "3"
        assert lookup("John", [["John", 0]], 2) == "0"

    def test_empty_result_cell(self):
        assert lookup("John", [["John", None]], 2, True) == ("", "100%")

    def test_all_keys_empty(self):
        assert lookup("John", [[None, "x"]], 2) == "#N/A"


class TestTieBreak:
    """Equal scores resolve to the earliest row."""

    def test_first_row_wins(self):
        table = [["Acme", "first"], ["ACME", "second"]]
        assert lookup("acme", table, 2) == "first"

    def test_first_row_wins_repeatedly(self):
        table = [["acne", "first"], ["acne", "second"], ["acne", "third"]]
        for _ in range(5):
            assert lookup("acme", table, 2) == "first"

    def test_first_row_wins_in_parallel(self):
        table = [["zzz", "no"]] * 7 + [["acne", "first"], ["acne", "second"]]
        settings = LookupSettings(workers=4)
        assert lookup("acme", table, 2, settings=settings) == "first"


class TestInternalErrors:
    """Failures during scoring come back as #ERROR text."""

    def test_unexpected_failure(self):
        output = lookup("John", [[Unprintable(), "x"]], 2)
        assert output == "#ERROR: RuntimeError: cannot render cell"

    def test_deadline(self, monkeypatch):
        class Clock:
            now = 0.0

            def monotonic(self):
                Clock.now += 1.0
                return Clock.now

        monkeypatch.setattr(resolver, "time", Clock())
        settings = LookupSettings(deadline_seconds=0.5)
        output = lookup("John", [["John", "x"]], 2, settings=settings)
        assert output.startswith("#ERROR: LookupDeadlineExceeded: Lookup deadline exceeded")

    def test_max_candidates(self):
        table = [["Zed", "1"], ["John Smith", "2"]]
        settings = LookupSettings(max_candidates=1)
        assert lookup("John Smith", table, 2, settings=settings) == "#N/A"

    def test_undecidable_confidence_flag(self):
        output = lookup("John", [["John", "x"]], 2, AmbiguousFlag())
        assert output == "#ERROR: ValueError: truth value is ambiguous"

    def test_unrenderable_exception_message(self):
        output = lookup("John", [[SilentlyUnprintable(), "x"]], 2)
        assert output == "#ERROR: SilentError"


class TestThreshold:
    """Acceptance threshold and percentage rounding."""

    def test_score_at_threshold_matches(self, monkeypatch):
        monkeypatch.setattr(resolver, "composite_score", lambda a, b: 0.3)
        assert lookup("John", [["anyone", "v"]], 2, True) == ("v", "30%")

    def test_score_below_threshold_not_found(self, monkeypatch):
        monkeypatch.setattr(resolver, "composite_score", lambda a, b: 0.2999)
        assert lookup("John", [["anyone", "v"]], 2, True) == ("#N/A", "0%")

    def test_not_found_keeps_best_row(self, monkeypatch):
        monkeypatch.setattr(resolver, "composite_score", lambda a, b: 0.1)
        result = lookup_result("John", [["a", "v"], ["b", "w"]], 2)
        assert result.status is LookupStatus.NOT_FOUND
        assert result.row_index == 0
        assert result.to_output() == "#N/A"

    def test_half_rounds_up(self):
        assert confidence_percent(0.745) == 75
        assert confidence_percent(0.125) == 13
        assert confidence_percent(0.0) == 0
        assert confidence_percent(1.0) == 100


class TestLookupResult:
    """Test the tagged result and metrics side of a lookup."""

    def test_match_result(self, two_column_table):
        result = lookup_result("John Smith", two_column_table, 2)
        assert result.ok
        assert result.status is LookupStatus.MATCH
        assert result.row_index == 0
        assert result.score == 1.0

    def test_status_tags(self, two_column_table):
        assert lookup_result("", two_column_table, 2).status is LookupStatus.PARAMETER_ERROR
        assert lookup_result("x", [], 2).status is LookupStatus.TABLE_ERROR
        assert lookup_result("x", two_column_table, 9).status is LookupStatus.RANGE_ERROR
        assert lookup_result("Zyxqq", two_column_table, 2).status is LookupStatus.NOT_FOUND
        assert lookup_result("x", [[Unprintable()]], 1).status is LookupStatus.INTERNAL_ERROR

    def test_metrics_recorded(self, two_column_table):
        lookup("John Smith", two_column_table, 2)
        lookup("Zyxqq", two_column_table, 2)
        lookup("John", two_column_table, 9)

        metrics = get_logger().get_metrics()
        assert metrics["lookups_attempted"] == 3
        assert metrics["matches_found"] == 1
        assert metrics["not_found"] == 1
        assert metrics["errors_by_type"] == {"range_error": 1}
        assert metrics["rows_scored"] == 4

    def test_rejections_are_quiet(self, two_column_table, capsys):
        """A rejected call is a normal outcome and writes nothing at the default level."""
        assert lookup("John", two_column_table, 9) == "#ERROR: Column index out of range"
        assert "Lookup rejected" not in capsys.readouterr().err
