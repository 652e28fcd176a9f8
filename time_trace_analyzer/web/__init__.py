"""Conversion of analysis results into JSON-ready structures."""

from .result_builder import prepare_results, DEFAULT_LIMIT, DEFAULT_SORT

__all__ = ["prepare_results", "DEFAULT_LIMIT", "DEFAULT_SORT"]
