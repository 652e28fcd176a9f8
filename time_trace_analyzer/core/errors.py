"""
Error taxonomy for trace analysis.

Only layout errors abort an analysis run. Everything else is recovered per file
and shows up in the invalid-file count.
"""


class AnalysisError(Exception):
    """Base class for all analysis failures."""


class LayoutError(AnalysisError):
    """The build layout could not be resolved; no summary is produced."""
    kind = "layout_error"

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class SourceDirNotFound(LayoutError):
    """The selected path does not exist or is not a directory."""
    kind = "source_not_found"


class MetadataDirNotFound(LayoutError):
    """No build metadata directory below the selected path."""
    kind = "metadata_not_found"


class TraceDiscoveryError(LayoutError):
    """Listing the build tree failed."""
    kind = "io_error"


class TraceFormatError(AnalysisError):
    """A trace file does not follow the trace schema."""
