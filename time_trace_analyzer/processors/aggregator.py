"""
Folding of parsed trace files into the run summary.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import DefaultDict, Dict, List, Optional

import ijson

from ..core.errors import TraceFormatError
from ..core.summary import (
    BackendOperationSummary,
    SourceFileSummary,
    Summary,
    TargetSummary,
    TimingSummary,
)
from ..core.types import EventCategory, FrontendOperationKey, Profile, TraceFileLocation
from .demangler import SymbolDemangler
from .event_classifier import frontend_operation, is_backend_operation
from .file_processor import TraceFileProcessor
from .index_builder import (
    BACKEND_OPERATION_INDICES,
    FRONTEND_OPERATION_INDICES,
    INCLUDE_FILE_INDICES,
    SOURCE_FILE_INDICES,
    TARGET_INDICES,
    IndexBuilder,
)
from .timing_calculator import Interval, TimingAccumulator, TimingCalculator

# Failures that make a single trace file invalid without stopping the run
PER_FILE_ERRORS = (OSError, UnicodeDecodeError, ijson.JSONError, TraceFormatError)


@dataclass
class _TargetAccumulator:
    total_files: int = 0
    frontend_us: int = 0
    backend_us: int = 0
    first_event_time: Optional[int] = None
    last_event_time: Optional[int] = None


@dataclass
class _BackendAccumulator:
    total_us: int = 0
    occurrence_count: int = 0


def _min(current: Optional[int], value: int) -> int:
    return value if current is None else min(current, value)


def _max(current: Optional[int], value: int) -> int:
    return value if current is None else max(current, value)


class SummaryAggregator:
    """
    Accumulates per-file results into the run totals and the aggregate maps.

    One aggregator serves exactly one analysis run; `build()` produces the
    immutable summary with all indices.
    """

    def __init__(self, demangler: Optional[SymbolDemangler] = None):
        """
        Args:
            demangler: Demangler whose cache lives as long as this run
        """
        self.demangler = demangler or SymbolDemangler()

        self.total_valid_files = 0
        self.total_invalid_files = 0
        self.frontend_duration_total_us = 0
        self.backend_duration_total_us = 0
        self.backend_duration_single_events_us = 0
        self.first_event_time: Optional[int] = None
        self.last_event_time: Optional[int] = None
        self.nesting_violations = 0

        self.targets: DefaultDict[str, _TargetAccumulator] = defaultdict(_TargetAccumulator)
        self.include_files: DefaultDict[str, TimingAccumulator] = defaultdict(TimingAccumulator)
        self.source_files: Dict[str, SourceFileSummary] = {}
        self.frontend_operations: DefaultDict[FrontendOperationKey, TimingAccumulator] = defaultdict(TimingAccumulator)
        self.backend_operations: DefaultDict[str, _BackendAccumulator] = defaultdict(_BackendAccumulator)

    def fold_file(self, location: TraceFileLocation) -> bool:
        """
        Read, decode and fold one trace file.

        A file that cannot be read or decoded is counted as invalid and skipped.

        Returns:
            True if the file was valid
        """
        # Registers the target even if none of its files is valid
        self.targets[location.target_name]

        try:
            profile = TraceFileProcessor.process_file(location.path)
        except PER_FILE_ERRORS as e:
            print(f"  Skipping invalid trace file {location.path}: {e}")
            self.total_invalid_files += 1
            return False

        self.add_profile(location, profile)
        return True

    def add_profile(self, location: TraceFileLocation, profile: Profile) -> None:
        """
        Fold an already decoded profile.

        Raises:
            ValueError: If a file with the same display key was already folded
        """
        if location.display_key in self.source_files:
            raise ValueError(f"Duplicate source file key '{location.display_key}' for {location.path}")

        target = self.targets[location.target_name]

        self.total_valid_files += 1
        target.total_files += 1

        frontend_us = 0
        backend_us = 0
        sources: List[Interval] = []
        frontend_events: List[Interval] = []
        backend_events = []

        for event in profile.events:
            if event.category is EventCategory.FRONTEND:
                frontend_us += event.duration_us
            elif event.category is EventCategory.BACKEND:
                backend_us += event.duration_us
            elif event.detail is None:
                # Nothing to account the remaining categories to
                continue
            elif event.category is EventCategory.SOURCE:
                sources.append((event.detail, event.start_us, event.duration_us))
            elif frontend_operation(event.category) is not None:
                key = (event.detail, frontend_operation(event.category))
                frontend_events.append((key, event.start_us, event.duration_us))
            elif is_backend_operation(event.category):
                backend_events.append(event)

        end_of_time = profile.origin_time + frontend_us + backend_us

        self.frontend_duration_total_us += frontend_us
        self.backend_duration_total_us += backend_us
        self.first_event_time = _min(self.first_event_time, profile.origin_time)
        self.last_event_time = _max(self.last_event_time, end_of_time)

        target.frontend_us += frontend_us
        target.backend_us += backend_us
        target.first_event_time = _min(target.first_event_time, profile.origin_time)
        target.last_event_time = _max(target.last_event_time, end_of_time)

        self.nesting_violations += TimingCalculator.attribute(sources, self.include_files)

        self.source_files[location.display_key] = SourceFileSummary(
            total_us=frontend_us + backend_us,
            frontend_us=frontend_us,
            backend_us=backend_us
        )

        self.nesting_violations += TimingCalculator.attribute(frontend_events, self.frontend_operations)

        # Backend operations do not nest; plain sums per demangled symbol
        for event in backend_events:
            symbol = self.demangler.demangle(event.detail)
            stats = self.backend_operations[symbol]
            stats.occurrence_count += 1
            stats.total_us += event.duration_us
            self.backend_duration_single_events_us += event.duration_us

    def build(self) -> Summary:
        """Freeze the accumulated data and build every index."""
        targets = {
            name: TargetSummary(
                total_files=acc.total_files,
                total_frontend_us=acc.frontend_us,
                total_backend_us=acc.backend_us,
                first_event_time=acc.first_event_time or 0,
                last_event_time=acc.last_event_time or 0
            )
            for name, acc in self.targets.items()
        }
        backend_operations = {
            symbol: BackendOperationSummary(total_us=acc.total_us, occurrence_count=acc.occurrence_count)
            for symbol, acc in self.backend_operations.items()
        }

        return Summary(
            total_valid_files=self.total_valid_files,
            total_invalid_files=self.total_invalid_files,
            frontend_duration_total_us=self.frontend_duration_total_us,
            backend_duration_total_us=self.backend_duration_total_us,
            backend_duration_single_events_us=self.backend_duration_single_events_us,
            first_event_time=self.first_event_time or 0,
            last_event_time=self.last_event_time or 0,
            nesting_violations=self.nesting_violations,
            targets=IndexBuilder.build_table(targets, TARGET_INDICES),
            include_files=IndexBuilder.build_table(
                TimingCalculator.finalize(self.include_files, TimingSummary),
                INCLUDE_FILE_INDICES
            ),
            source_files=IndexBuilder.build_table(self.source_files, SOURCE_FILE_INDICES),
            frontend_operations=IndexBuilder.build_table(
                TimingCalculator.finalize(self.frontend_operations, TimingSummary),
                FRONTEND_OPERATION_INDICES
            ),
            backend_operations=IndexBuilder.build_table(backend_operations, BACKEND_OPERATION_INDICES),
        )
