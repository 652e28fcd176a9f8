"""Processors for trace data decoding and aggregation."""

from .file_processor import TraceFileProcessor
from .event_classifier import classify
from .timing_calculator import TimingAccumulator, TimingCalculator
from .demangler import SymbolDemangler
from .aggregator import SummaryAggregator
from .index_builder import IndexBuilder

__all__ = [
    "TraceFileProcessor",
    "classify",
    "TimingAccumulator",
    "TimingCalculator",
    "SymbolDemangler",
    "SummaryAggregator",
    "IndexBuilder",
]
