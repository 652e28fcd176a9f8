"""
Immutable analysis results handed to the presentation layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Generic, Hashable, Iterator, List, Mapping, Optional, Tuple, TypeVar

from .types import BuildVariant

K = TypeVar('K', bound=Hashable)
V = TypeVar('V')

US_PER_SEC = 1_000_000
US_PER_MS = 1_000


class SortCriterion(Enum):
    """Named orderings of a summary table's keys."""
    ALPHA = "alpha"
    FIRST_EVENT = "first_event"
    LAST_EVENT = "last_event"
    LARGEST_DURATION = "largest_duration"
    LARGEST_TOTAL_TIME = "largest_total_time"
    LARGEST_SELF_TIME = "largest_self_time"
    LARGEST_FRONTEND_TIME = "largest_frontend_time"
    LARGEST_BACKEND_TIME = "largest_backend_time"
    MOST_OCCURRENCES = "most_occurrences"


@dataclass(frozen=True)
class TargetSummary:
    """Per-target totals."""
    total_files: int
    total_frontend_us: int
    total_backend_us: int
    first_event_time: int
    last_event_time: int

    @property
    def total_us(self) -> int:
        return self.total_frontend_us + self.total_backend_us

    @property
    def frontend_sec(self) -> float:
        return self.total_frontend_us / US_PER_SEC

    @property
    def backend_sec(self) -> float:
        return self.total_backend_us / US_PER_SEC


@dataclass(frozen=True)
class TimingSummary:
    """Self/total time of an include file or a frontend operation."""
    total_us: int
    self_us: int
    occurrence_count: int

    @property
    def avg_total_ms(self) -> float:
        if not self.occurrence_count:
            return 0.0
        return self.total_us / US_PER_MS / self.occurrence_count

    @property
    def avg_self_ms(self) -> float:
        if not self.occurrence_count:
            return 0.0
        return self.self_us / US_PER_MS / self.occurrence_count


@dataclass(frozen=True)
class SourceFileSummary:
    """Frontend/backend split of one translation unit."""
    total_us: int
    frontend_us: int
    backend_us: int


@dataclass(frozen=True)
class BackendOperationSummary:
    """Accumulated time of one backend symbol."""
    total_us: int
    occurrence_count: int

    @property
    def avg_total_ms(self) -> float:
        if not self.occurrence_count:
            return 0.0
        return self.total_us / US_PER_MS / self.occurrence_count


class SummaryTable(Generic[K, V]):
    """
    Read-only aggregate map plus its precomputed key orderings.

    Lookup works like a mapping; `ordered()` walks the keys in one of the
    orderings built when the table was created.
    """

    def __init__(self, entries: Mapping[K, V], indices: Mapping[SortCriterion, Tuple[K, ...]]):
        self._entries = MappingProxyType(dict(entries))
        self._indices = MappingProxyType(dict(indices))

    def __getitem__(self, key: K) -> V:
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SummaryTable):
            return NotImplemented
        return dict(self._entries) == dict(other._entries) and dict(self._indices) == dict(other._indices)

    def __repr__(self) -> str:
        return f"SummaryTable({len(self._entries)} entries, indices={[c.value for c in self._indices]})"

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        return self._entries.get(key, default)

    def keys(self):
        return self._entries.keys()

    def items(self):
        return self._entries.items()

    @property
    def criteria(self) -> Tuple[SortCriterion, ...]:
        return tuple(self._indices)

    def index(self, criterion: SortCriterion) -> Tuple[K, ...]:
        """
        Return the keys ordered by `criterion`.

        Raises:
            KeyError: If the table has no index for this criterion
        """
        return self._indices[criterion]

    def ordered(self, criterion: SortCriterion, limit: Optional[int] = None) -> List[Tuple[K, V]]:
        """Return (key, entry) pairs ordered by `criterion`, at most `limit` of them."""
        keys = self.index(criterion)
        if limit is not None:
            keys = keys[:limit]
        return [(key, self._entries[key]) for key in keys]


def _empty_table() -> SummaryTable:
    return SummaryTable({}, {})


@dataclass(frozen=True)
class Summary:
    """Aggregated statistics of one analysis run."""
    total_valid_files: int = 0
    total_invalid_files: int = 0
    frontend_duration_total_us: int = 0
    backend_duration_total_us: int = 0
    # Sum of individual backend operation events, unlike the coarse Backend span
    backend_duration_single_events_us: int = 0
    first_event_time: int = 0
    last_event_time: int = 0
    nesting_violations: int = 0

    targets: SummaryTable = field(default_factory=_empty_table)
    include_files: SummaryTable = field(default_factory=_empty_table)
    source_files: SummaryTable = field(default_factory=_empty_table)
    frontend_operations: SummaryTable = field(default_factory=_empty_table)
    backend_operations: SummaryTable = field(default_factory=_empty_table)

    @property
    def total_files(self) -> int:
        return self.total_valid_files + self.total_invalid_files

    @property
    def frontend_duration_sec(self) -> float:
        return self.frontend_duration_total_us / US_PER_SEC

    @property
    def backend_duration_sec(self) -> float:
        return self.backend_duration_total_us / US_PER_SEC

    @property
    def backend_duration_single_events_sec(self) -> float:
        return self.backend_duration_single_events_us / US_PER_SEC

    @property
    def inferred_used_time_secs(self) -> float:
        """Wall time between the first and the last event of the run."""
        if not self.total_valid_files:
            return 0.0
        return (self.last_event_time - self.first_event_time) / US_PER_SEC

    def target_offsets_sec(self, target_name: str) -> Tuple[float, float]:
        """Start and end of a target relative to the run's first event, in seconds."""
        target = self.targets[target_name]
        if not target.total_files:
            return 0.0, 0.0
        return (
            (target.first_event_time - self.first_event_time) / US_PER_SEC,
            (target.last_event_time - self.first_event_time) / US_PER_SEC,
        )


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one `analyze()` invocation."""
    selected_path: str
    resolved_metadata_path: str
    build_variant: BuildVariant
    summary: Summary
