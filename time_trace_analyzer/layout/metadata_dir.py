"""
Resolution of the build metadata directory from a user-selected path.
"""

from pathlib import Path
from typing import List

from ..core.errors import MetadataDirNotFound, SourceDirNotFound, TraceDiscoveryError
from ..core.types import AnalysisConfig


class MetadataDirResolver:
    """Finds the build metadata directory (`CMakeFiles`) for a build or source tree."""

    def __init__(self, config: AnalysisConfig):
        self.config = config

    def resolve(self, selected_path: str) -> Path:
        """
        Resolve the metadata directory for the selected path.

        The directory directly below the selected path is preferred. Otherwise the
        first (by name) per-platform directory inside the `build` directory is used,
        e.g. `build/linux-x86_64-gcc-13/CMakeFiles`.

        Args:
            selected_path: Source or build directory chosen by the user

        Returns:
            Path of the metadata directory

        Raises:
            SourceDirNotFound: If the selected path is missing or not a directory
            MetadataDirNotFound: If neither location holds a metadata directory
        """
        path = Path(selected_path)

        if not path.is_dir():
            raise SourceDirNotFound(f"Source directory not found: {selected_path}", selected_path)

        first_candidate = path / self.config.object_dir_name
        if first_candidate.is_dir():
            return first_candidate

        build_dir = path / self.config.build_dir_name
        if build_dir.is_dir():
            platform_dirs = self._platform_dirs(build_dir)
            if platform_dirs:
                second_candidate = platform_dirs[0] / self.config.object_dir_name
                if second_candidate.is_dir():
                    return second_candidate

        raise MetadataDirNotFound(
            f"No {self.config.object_dir_name} directory found for: {selected_path}",
            selected_path
        )

    def _platform_dirs(self, build_dir: Path) -> List[Path]:
        """List the per-platform build directories, sorted by name."""
        try:
            entries = list(build_dir.iterdir())
        except OSError as e:
            raise TraceDiscoveryError(f"Failed to read directory {build_dir}: {e}", str(build_dir)) from e

        candidates = [
            entry for entry in entries
            if entry.is_dir() and entry.name.startswith(self.config.platform_prefix)
        ]
        return sorted(candidates, key=lambda entry: entry.name)
