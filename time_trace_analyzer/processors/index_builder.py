"""
Sort-order indices over the summary tables.
"""

from typing import Callable, Dict, Hashable, Mapping, Optional, Tuple, TypeVar

from ..core.summary import SortCriterion, SummaryTable

K = TypeVar('K', bound=Hashable)
V = TypeVar('V')

# criterion -> (value to sort by, largest first); None keeps the natural key order
IndexSpec = Dict[SortCriterion, Optional[Tuple[Callable[[V], int], bool]]]

TARGET_INDICES: IndexSpec = {
    SortCriterion.ALPHA: None,
    SortCriterion.FIRST_EVENT: (lambda t: t.first_event_time, False),
    SortCriterion.LAST_EVENT: (lambda t: t.last_event_time, False),
    SortCriterion.LARGEST_DURATION: (lambda t: t.total_us, True),
}

INCLUDE_FILE_INDICES: IndexSpec = {
    SortCriterion.LARGEST_SELF_TIME: (lambda s: s.self_us, True),
    SortCriterion.LARGEST_TOTAL_TIME: (lambda s: s.total_us, True),
    SortCriterion.MOST_OCCURRENCES: (lambda s: s.occurrence_count, True),
}

SOURCE_FILE_INDICES: IndexSpec = {
    SortCriterion.LARGEST_TOTAL_TIME: (lambda s: s.total_us, True),
    SortCriterion.LARGEST_FRONTEND_TIME: (lambda s: s.frontend_us, True),
    SortCriterion.LARGEST_BACKEND_TIME: (lambda s: s.backend_us, True),
}

FRONTEND_OPERATION_INDICES: IndexSpec = {
    SortCriterion.LARGEST_TOTAL_TIME: (lambda s: s.total_us, True),
    SortCriterion.LARGEST_SELF_TIME: (lambda s: s.self_us, True),
    SortCriterion.MOST_OCCURRENCES: (lambda s: s.occurrence_count, True),
}

BACKEND_OPERATION_INDICES: IndexSpec = {
    SortCriterion.LARGEST_TOTAL_TIME: (lambda s: s.total_us, True),
    SortCriterion.MOST_OCCURRENCES: (lambda s: s.occurrence_count, True),
}


class IndexBuilder:
    """Builds every ordering of a table from scratch."""

    @staticmethod
    def build_index(
        entries: Mapping[K, V],
        value: Optional[Callable[[V], int]] = None,
        descending: bool = False
    ) -> Tuple[K, ...]:
        """
        Order the keys of `entries`.

        Keys start in their natural order; the sort by `value` is stable, so equal
        values keep that order.

        Args:
            entries: Aggregate map
            value: Entry attribute to sort by; None for the natural key order
            descending: Largest value first

        Returns:
            A permutation of the keys of `entries`
        """
        keys = sorted(entries)
        if value is None:
            return tuple(keys)
        return tuple(sorted(keys, key=lambda key: value(entries[key]), reverse=descending))

    @staticmethod
    def build_table(entries: Mapping[K, V], orderings: IndexSpec) -> SummaryTable:
        """Wrap `entries` with one index per criterion of `orderings`."""
        natural = dict(sorted(entries.items(), key=lambda item: item[0]))
        indices = {}
        for criterion, ordering in orderings.items():
            if ordering is None:
                indices[criterion] = IndexBuilder.build_index(natural)
            else:
                value, descending = ordering
                indices[criterion] = IndexBuilder.build_index(natural, value, descending)
        return SummaryTable(natural, indices)
