"""Core components for trace analysis."""

from .analyzer import TraceAnalyzer, analyze
from .errors import (
    AnalysisError,
    LayoutError,
    MetadataDirNotFound,
    SourceDirNotFound,
    TraceDiscoveryError,
    TraceFormatError,
)
from .summary import AnalysisResult, SortCriterion, Summary, SummaryTable
from .types import AnalysisConfig, BuildVariant, EventCategory, FrontendOperation

__all__ = [
    "TraceAnalyzer",
    "analyze",
    "AnalysisConfig",
    "AnalysisError",
    "AnalysisResult",
    "BuildVariant",
    "EventCategory",
    "FrontendOperation",
    "LayoutError",
    "MetadataDirNotFound",
    "SortCriterion",
    "SourceDirNotFound",
    "Summary",
    "SummaryTable",
    "TraceDiscoveryError",
    "TraceFormatError",
]
