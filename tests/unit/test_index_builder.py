"""
Unit tests for time_trace_analyzer.processors.index_builder module.
"""
import random

import pytest
from time_trace_analyzer.core.summary import SortCriterion, SummaryTable, TargetSummary, TimingSummary
from time_trace_analyzer.processors.index_builder import (
    BACKEND_OPERATION_INDICES,
    FRONTEND_OPERATION_INDICES,
    INCLUDE_FILE_INDICES,
    SOURCE_FILE_INDICES,
    TARGET_INDICES,
    IndexBuilder,
)


def target(first, last, frontend=0, backend=0):
    return TargetSummary(total_files=1, total_frontend_us=frontend, total_backend_us=backend,
                         first_event_time=first, last_event_time=last)


@pytest.fixture
def include_files():
    return {
        "c.h": TimingSummary(total_us=300, self_us=10, occurrence_count=1),
        "a.h": TimingSummary(total_us=100, self_us=100, occurrence_count=5),
        "b.h": TimingSummary(total_us=300, self_us=50, occurrence_count=5),
    }


class TestBuildIndex:
    """Tests for ordering the keys of one table."""

    def test_natural_order(self, include_files):
        assert IndexBuilder.build_index(include_files) == ("a.h", "b.h", "c.h")

    def test_descending(self, include_files):
        index = IndexBuilder.build_index(include_files, lambda s: s.self_us, descending=True)
        assert index == ("a.h", "b.h", "c.h")

    def test_ties_keep_natural_order(self, include_files):
        by_total = IndexBuilder.build_index(include_files, lambda s: s.total_us, descending=True)
        by_count = IndexBuilder.build_index(include_files, lambda s: s.occurrence_count, descending=True)

        assert by_total == ("b.h", "c.h", "a.h")
        assert by_count == ("a.h", "b.h", "c.h")

    def test_ascending(self):
        targets = {"late": target(50, 60), "early": target(10, 90), "middle": target(30, 40)}

        assert IndexBuilder.build_index(targets, lambda t: t.first_event_time) == ("early", "middle", "late")
        assert IndexBuilder.build_index(targets, lambda t: t.last_event_time) == ("middle", "late", "early")

    def test_empty(self):
        assert IndexBuilder.build_index({}) == ()


class TestBuildTable:
    """Tests for tables with all their indices."""

    def test_target_table(self):
        targets = {
            "b": target(10, 100, frontend=30, backend=5),
            "a": target(20, 50, frontend=90, backend=10),
        }

        table = IndexBuilder.build_table(targets, TARGET_INDICES)

        assert table.index(SortCriterion.ALPHA) == ("a", "b")
        assert table.index(SortCriterion.FIRST_EVENT) == ("b", "a")
        assert table.index(SortCriterion.LAST_EVENT) == ("a", "b")
        assert table.index(SortCriterion.LARGEST_DURATION) == ("a", "b")

    def test_only_declared_criteria(self, include_files):
        table = IndexBuilder.build_table(include_files, INCLUDE_FILE_INDICES)

        assert set(table.criteria) == set(INCLUDE_FILE_INDICES)
        with pytest.raises(KeyError):
            table.index(SortCriterion.FIRST_EVENT)

    @pytest.mark.parametrize("orderings", [
        INCLUDE_FILE_INDICES, FRONTEND_OPERATION_INDICES, BACKEND_OPERATION_INDICES,
    ])
    def test_every_index_is_a_permutation(self, orderings):
        rng = random.Random(7)
        entries = {
            f"sym{i}": TimingSummary(total_us=rng.randint(0, 50), self_us=0,
                                      occurrence_count=rng.randint(1, 5))
            for i in range(40)
        }

        table = IndexBuilder.build_table(entries, orderings)

        for criterion in table.criteria:
            index = table.index(criterion)
            assert len(index) == len(entries)
            assert set(index) == set(entries)

    def test_source_file_indices(self):
        class Entry:
            def __init__(self, frontend, backend):
                self.frontend_us = frontend
                self.backend_us = backend
                self.total_us = frontend + backend

        entries = {"x.cpp": Entry(10, 90), "y.cpp": Entry(60, 0)}

        table = IndexBuilder.build_table(entries, SOURCE_FILE_INDICES)

        assert table.index(SortCriterion.LARGEST_TOTAL_TIME) == ("x.cpp", "y.cpp")
        assert table.index(SortCriterion.LARGEST_FRONTEND_TIME) == ("y.cpp", "x.cpp")
        assert table.index(SortCriterion.LARGEST_BACKEND_TIME) == ("x.cpp", "y.cpp")


class TestSummaryTable:
    """Tests for the read-only table view."""

    def test_mapping_access(self, include_files):
        table = IndexBuilder.build_table(include_files, INCLUDE_FILE_INDICES)

        assert len(table) == 3
        assert "a.h" in table
        assert table["a.h"].self_us == 100
        assert table.get("missing") is None
        assert list(table) == ["a.h", "b.h", "c.h"]

    def test_entries_are_read_only(self, include_files):
        table = IndexBuilder.build_table(include_files, INCLUDE_FILE_INDICES)

        with pytest.raises(TypeError):
            table["d.h"] = None

    def test_ordered_with_limit(self, include_files):
        table = IndexBuilder.build_table(include_files, INCLUDE_FILE_INDICES)

        rows = table.ordered(SortCriterion.LARGEST_SELF_TIME, limit=2)

        assert [key for key, _ in rows] == ["a.h", "b.h"]

    def test_equality(self, include_files):
        first = IndexBuilder.build_table(include_files, INCLUDE_FILE_INDICES)
        second = IndexBuilder.build_table(dict(reversed(list(include_files.items()))), INCLUDE_FILE_INDICES)

        assert first == second
        assert first != SummaryTable({}, {})
