"""
Type definitions for compiler time-trace analysis.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


class BuildVariant(Enum):
    """Build configuration whose trace files should be analyzed."""
    DEBUG = "Debug"
    DEV_RELEASE = "DevRelease"
    RELEASE = "Release"
    SINGLE_CONFIG = "SingleConfig"

    @property
    def is_multi_config(self) -> bool:
        return self is not BuildVariant.SINGLE_CONFIG

    @classmethod
    def names(cls) -> Tuple[str, ...]:
        return tuple(variant.value for variant in cls)

    def __str__(self) -> str:
        return self.value


class EventCategory(Enum):
    """Category of a trace event, derived from its name."""
    FRONTEND = "Frontend"
    BACKEND = "Backend"
    SOURCE = "Source"
    INSTANTIATE_FUNCTION = "InstantiateFunction"
    INSTANTIATE_CLASS = "InstantiateClass"
    PARSE_CLASS = "ParseClass"
    DEBUG_TYPE = "DebugType"
    CODE_GEN_FUNCTION = "CodeGenFunction"
    DEVIRT_PASS = "DevirtPass"
    OPT_FUNCTION = "OptFunction"
    OTHER = "Other"


class FrontendOperation(Enum):
    """Frontend operations which are specific to some class or function."""
    CODE_GEN_FUNCTION = "CodeGenFunction"
    DEBUG_TYPE = "DebugType"
    INSTANTIATE_CLASS = "InstantiateClass"
    INSTANTIATE_FUNCTION = "InstantiateFunction"
    PARSE_CLASS = "ParseClass"

    def __lt__(self, other):
        if not isinstance(other, FrontendOperation):
            return NotImplemented
        return self.value < other.value


# (symbol or type name, operation kind)
FrontendOperationKey = Tuple[str, FrontendOperation]


@dataclass(frozen=True)
class TraceEvent:
    """One timed event of a trace file."""
    category: EventCategory
    name: str
    start_us: int
    duration_us: int = 0
    detail: Optional[str] = None

    @property
    def end_us(self) -> int:
        return self.start_us + self.duration_us


@dataclass(frozen=True)
class Profile:
    """Decoded content of one trace file."""
    origin_time: int
    events: Tuple[TraceEvent, ...]


@dataclass(frozen=True)
class TraceFileLocation:
    """Where a trace file lives and how it is named in the summary."""
    path: Path
    display_key: str
    target_name: str


def _default_platform_prefix() -> str:
    if sys.platform == "darwin":
        return "macos"
    if sys.platform.startswith("win"):
        return "windows"
    return "linux"


class AnalysisConfig:
    """Configuration for trace discovery and ingestion."""

    def __init__(
        self,
        trace_extension: str = ".json",
        excluded_file_names: Tuple[str, ...] = ("compile_commands.json",),
        target_suffix: str = ".dir",
        object_dir_name: str = "CMakeFiles",
        build_dir_name: str = "build",
        platform_prefix: Optional[str] = None,
        progress_interval: int = 100
    ):
        """
        Initialize trace analysis configuration.

        Args:
            trace_extension: Extension of the per-translation-unit trace files.

            excluded_file_names: File names that carry the trace extension but are
                                 not trace files (the compilation database).

            target_suffix: Suffix of the directory the build system creates for each
                           compilation target. Stripped to obtain the target name.

            object_dir_name: Name of the build system bookkeeping directory. It is
                             both removed from display keys and used as the
                             metadata directory to resolve.

            build_dir_name: Name of the directory holding per-platform build trees.

            platform_prefix: Prefix of the per-platform build directory to pick.
                             Default: derived from the host platform.

            progress_interval: Report progress every N processed trace files.
        """
        self.trace_extension = trace_extension
        self.excluded_file_names = tuple(excluded_file_names)
        self.target_suffix = target_suffix
        self.object_dir_name = object_dir_name
        self.build_dir_name = build_dir_name
        self.platform_prefix = platform_prefix or _default_platform_prefix()
        self.progress_interval = progress_interval
