"""Build layout resolution: where the trace files of a build live."""

from .build_layout import BuildLayoutResolver, NO_TARGET
from .metadata_dir import MetadataDirResolver

__all__ = ["BuildLayoutResolver", "MetadataDirResolver", "NO_TARGET"]
