"""
Time Trace Analyzer - Compiler Time-Trace Build Analysis Tool
"""

__version__ = "1.0.0"

from .core.analyzer import TraceAnalyzer, analyze
from .core.errors import AnalysisError, LayoutError
from .core.summary import AnalysisResult, SortCriterion, Summary
from .core.types import AnalysisConfig, BuildVariant

__all__ = [
    "TraceAnalyzer",
    "analyze",
    "AnalysisConfig",
    "AnalysisError",
    "AnalysisResult",
    "BuildVariant",
    "LayoutError",
    "SortCriterion",
    "Summary",
]
