"""
Discovery of per-translation-unit trace files in a build tree.
"""

import os
from collections import Counter
from pathlib import Path
from typing import Iterator, List, Tuple

from ..core.errors import TraceDiscoveryError
from ..core.types import AnalysisConfig, BuildVariant, TraceFileLocation

NO_TARGET = "NONE"


class BuildLayoutResolver:
    """Locates trace files for single- and multi-configuration build layouts."""

    def __init__(self, config: AnalysisConfig):
        self.config = config

    def resolve(self, selected_path: str, build_variant: BuildVariant, metadata_dir: Path) -> List[TraceFileLocation]:
        """
        Enumerate all trace files of the requested build variant.

        Args:
            selected_path: Directory chosen by the user
            build_variant: Requested build variant
            metadata_dir: Resolved metadata directory

        Returns:
            Trace file locations with unique display keys
        """
        if build_variant.is_multi_config:
            locations = self.enumerate_multi_config(metadata_dir, build_variant.value)
        else:
            locations = self.enumerate_single_config(Path(selected_path))
        return self._make_keys_unique(locations, selected_path)

    def enumerate_single_config(self, build_path: Path) -> List[TraceFileLocation]:
        """
        Walk the whole build directory and collect every trace file.

        The target name comes from the `<target>.dir` path segment. Display keys drop
        that segment and every `CMakeFiles` segment, so
        `CMakeFiles/app.dir/src/main.cpp.json` becomes `src/main.cpp` of target `app`.
        """
        locations = []

        for path in self._walk_trace_files(build_path):
            parts = path.relative_to(build_path).parts
            target_name = NO_TARGET
            key_parts = []

            for part in parts[:-1]:
                if part.endswith(self.config.target_suffix):
                    target_name = part[:-len(self.config.target_suffix)]
                elif part != self.config.object_dir_name:
                    key_parts.append(part)

            key_parts.append(self._strip_extension(parts[-1]))

            locations.append(TraceFileLocation(
                path=path,
                display_key="/".join(key_parts),
                target_name=target_name
            ))

        return locations

    def enumerate_multi_config(self, metadata_dir: Path, variant_name: str) -> List[TraceFileLocation]:
        """
        Collect trace files below `<target>.dir/<variant>/` of every target.

        Display keys are relative to the variant directory, without the trace extension.
        """
        locations = []

        try:
            top_entries = sorted(metadata_dir.iterdir(), key=lambda entry: entry.name)
        except OSError as e:
            raise TraceDiscoveryError(f"Failed to read directory {metadata_dir}: {e}", str(metadata_dir)) from e

        for top_entry in top_entries:
            if not (top_entry.name.endswith(self.config.target_suffix) and top_entry.is_dir()):
                continue

            target_name = top_entry.name[:-len(self.config.target_suffix)]
            variant_dir = top_entry / variant_name
            if not variant_dir.is_dir():
                continue

            for path in self._walk_trace_files(variant_dir):
                relative = path.relative_to(variant_dir).as_posix()
                locations.append(TraceFileLocation(
                    path=path,
                    display_key=self._strip_extension(relative),
                    target_name=target_name
                ))

        return locations

    def _walk_trace_files(self, root: Path) -> Iterator[Path]:
        """Yield trace files below root in a stable order."""
        def _raise(error: OSError):
            raise TraceDiscoveryError(f"Failed to read directory {error.filename}: {error}", str(error.filename)) from error

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            dirnames.sort()
            for filename in sorted(filenames):
                if not filename.endswith(self.config.trace_extension):
                    continue
                if filename in self.config.excluded_file_names:
                    continue
                yield Path(dirpath) / filename

    def _strip_extension(self, name: str) -> str:
        return name[:-len(self.config.trace_extension)]

    def _make_keys_unique(self, locations: List[TraceFileLocation], selected_path: str) -> List[TraceFileLocation]:
        """
        Qualify display keys until no two files share one.

        A colliding key is replaced by the next, more specific candidate: first
        `<target>/<key>`, then the path relative to the selected directory, and
        finally the absolute path. Qualified keys are checked again, since
        `app/x.cpp` may already be the plain key of another file.
        """
        candidates = [self._key_candidates(location, selected_path) for location in locations]
        levels = [0] * len(locations)

        while True:
            keys = [options[level] for options, level in zip(candidates, levels)]
            counts = Counter(keys)
            colliding = [i for i, key in enumerate(keys) if counts[key] > 1]
            if not colliding:
                break
            for i in colliding:
                # Absolute paths of distinct files never collide
                assert levels[i] < len(candidates[i]) - 1, f"no unique key for {locations[i].path}"
                levels[i] += 1

        return [
            location if key == location.display_key else TraceFileLocation(
                path=location.path,
                display_key=key,
                target_name=location.target_name
            )
            for location, key in zip(locations, keys)
        ]

    def _key_candidates(self, location: TraceFileLocation, selected_path: str) -> Tuple[str, ...]:
        relative = Path(os.path.relpath(location.path, selected_path)).as_posix()
        return (
            location.display_key,
            f"{location.target_name}/{location.display_key}",
            self._strip_extension(relative),
            self._strip_extension(location.path.absolute().as_posix()),
        )
