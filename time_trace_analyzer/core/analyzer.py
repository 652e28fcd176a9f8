"""
Main trace analyzer orchestrator.
"""

from typing import Optional, Union

from ..core.summary import AnalysisResult
from ..core.types import AnalysisConfig, BuildVariant
from ..layout import BuildLayoutResolver, MetadataDirResolver
from ..processors import SummaryAggregator, SymbolDemangler


class TraceAnalyzer:
    """Main orchestrator for build trace analysis."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Initialize the TraceAnalyzer.

        Args:
            config: Layout and ingestion settings (defaults to a CMake layout)
        """
        self.config = config or AnalysisConfig()

        self.metadata_resolver = MetadataDirResolver(self.config)
        self.layout_resolver = BuildLayoutResolver(self.config)

    def analyze(self, selected_path: str, build_variant: Union[BuildVariant, str]) -> AnalysisResult:
        """
        Analyze every trace file of a build in one sequential pass.

        Args:
            selected_path: Source or build directory
            build_variant: Build variant, or its name (e.g. "Debug")

        Returns:
            Analysis result with an immutable summary

        Raises:
            LayoutError: If the metadata directory or the trace files cannot be located
        """
        build_variant = BuildVariant(build_variant)

        metadata_dir = self.metadata_resolver.resolve(selected_path)
        locations = self.layout_resolver.resolve(selected_path, build_variant, metadata_dir)

        print(f"Processing {len(locations)} trace files from {metadata_dir} ({build_variant})...")

        # Demangle cache lives for this run only
        aggregator = SummaryAggregator(SymbolDemangler())

        for count, location in enumerate(locations, start=1):
            aggregator.fold_file(location)
            if count % self.config.progress_interval == 0:
                print(f"  Read {count} files...")

        summary = aggregator.build()

        print(f"Completed reading: {summary.total_valid_files} valid, {summary.total_invalid_files} invalid files.")
        print(f"Found {len(summary.targets)} targets, {len(summary.include_files)} included files")
        print(f"Found {len(summary.frontend_operations)} unique frontend operations, "
              f"{len(summary.backend_operations)} unique backend symbols")
        if summary.nesting_violations:
            print(f"Warning: {summary.nesting_violations} partially overlapping events; "
                  f"self times around them may be inaccurate")

        return AnalysisResult(
            selected_path=selected_path,
            resolved_metadata_path=str(metadata_dir),
            build_variant=build_variant,
            summary=summary
        )


def analyze(selected_path: str, build_variant: Union[BuildVariant, str],
            config: Optional[AnalysisConfig] = None) -> AnalysisResult:
    """Run one analysis with a fresh analyzer."""
    return TraceAnalyzer(config).analyze(selected_path, build_variant)
