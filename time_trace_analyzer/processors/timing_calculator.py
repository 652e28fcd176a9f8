"""
Self/total time attribution for nested named intervals.
"""

from dataclasses import dataclass
from typing import Callable, DefaultDict, Dict, Hashable, Iterable, List, Tuple, TypeVar

K = TypeVar('K', bound=Hashable)
T = TypeVar('T')

# (accounting key, start_us, duration_us)
Interval = Tuple[K, int, int]


@dataclass
class TimingAccumulator:
    """Running self/total time of one accounting key."""
    total_us: int = 0
    self_us: int = 0
    occurrence_count: int = 0


class TimingCalculator:
    """Computes total and self time over nested intervals with an ordered stack."""

    @staticmethod
    def attribute(intervals: Iterable[Interval], table: DefaultDict[K, TimingAccumulator]) -> int:
        """
        Accumulate total and self time of every interval into `table`.

        Intervals are visited by start time, a parent before a child that starts
        at the same time. The stack holds the chain of intervals enclosing the
        current position. Each interval is charged in full to its own key and its
        duration is taken off the self time of the interval that encloses it.
        Unwinding before subtracting, and the longer-first order on equal
        starts, are what make the self times below a root add up to its total.

        Example:
            a.h [0, 100) encloses b.h [10, 60)
            -> a.h: total 100, self 50
               b.h: total 50,  self 50

        Args:
            intervals: (key, start_us, duration_us) tuples
            table: Accumulators per key (a defaultdict of TimingAccumulator), updated in place

        Returns:
            Number of intervals that partially overlapped their enclosing interval
            (neither disjoint nor nested). Those are not subtracted from anything.
        """
        ordered = sorted(intervals, key=lambda interval: (interval[1], -interval[2]))

        stack: List[Tuple[K, int]] = []
        violations = 0

        for key, start, duration in ordered:
            end = start + duration

            stats = table[key]
            stats.occurrence_count += 1
            stats.total_us += duration
            # Self time starts as the full duration; children take their share off
            stats.self_us += duration

            # Drop intervals that ended before this one started
            while stack and stack[-1][1] <= start:
                stack.pop()

            if stack:
                parent_key, parent_end = stack[-1]
                if parent_end >= end:
                    table[parent_key].self_us -= duration
                else:
                    violations += 1

            stack.append((key, end))

        return violations

    @staticmethod
    def finalize(table: Dict[K, TimingAccumulator], build: Callable[[int, int, int], T]) -> Dict[K, T]:
        """
        Convert accumulators into public summary entries.

        Args:
            table: Accumulators per key
            build: Factory called with (total_us, self_us, occurrence_count)

        Returns:
            Summary entries per key
        """
        result = {}
        for key, stats in table.items():
            assert 0 <= stats.self_us <= stats.total_us, (
                f"self time {stats.self_us} out of range [0, {stats.total_us}] for {key!r}"
            )
            result[key] = build(stats.total_us, stats.self_us, stats.occurrence_count)
        return result
