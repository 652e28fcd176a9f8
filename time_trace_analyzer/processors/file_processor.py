"""
Trace file parsing using streaming parser.
"""

import io
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Union

import ijson

from ..core.errors import TraceFormatError
from ..core.types import Profile, TraceEvent
from .event_classifier import classify

_CONTAINER_START = ('start_map', 'start_array')
_CONTAINER_END = ('end_map', 'end_array')


def _require_uint(record: Dict[str, Any], field: str) -> int:
    value = record.get(field)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise TraceFormatError(f"'{field}' must be an unsigned integer, got {value!r}")
    return value


def _optional_uint(record: Dict[str, Any], field: str) -> int:
    if record.get(field) is None:
        return 0
    return _require_uint(record, field)


def _detail(record: Dict[str, Any]) -> Optional[str]:
    args = record.get("args")
    if args is None:
        return None
    if not isinstance(args, dict):
        raise TraceFormatError(f"'args' must be an object, got {type(args).__name__}")

    detail = args.get("detail")
    if detail is not None and not isinstance(detail, str):
        raise TraceFormatError(f"'detail' must be a string, got {type(detail).__name__}")
    return detail


class TraceFileProcessor:
    """Decodes compiler time-trace JSON files (`-ftime-trace` output)."""

    @staticmethod
    def process_file(file_path: Union[str, Path]) -> Profile:
        """
        Read and decode one trace file.

        Args:
            file_path: Path to the trace JSON file

        Returns:
            Decoded profile

        Raises:
            OSError: If the file cannot be read
            ijson.JSONError: If the file is not valid JSON
            TraceFormatError: If the JSON does not follow the trace schema
        """
        with open(file_path, 'rb') as f:
            return TraceFileProcessor.parse(f)

    @staticmethod
    def parse_contents(contents: Union[str, bytes]) -> Profile:
        """Decode a trace document held in memory."""
        if isinstance(contents, str):
            contents = contents.encode('utf-8')
        return TraceFileProcessor.parse(io.BytesIO(contents))

    @staticmethod
    def parse(stream: BinaryIO) -> Profile:
        """
        Decode a trace document from a binary stream.

        `traceEvents` is streamed: each event record is built, validated and
        converted on its own, so the raw event list is never held in memory.
        Other top-level members are skipped.
        """
        origin_time = None
        events: Optional[List[TraceEvent]] = None
        builder = None
        depth = 0

        for prefix, event, value in ijson.parse(stream):
            if builder is not None:
                # Inside one event record
                builder.event(event, value)
                if event in _CONTAINER_START:
                    depth += 1
                elif event in _CONTAINER_END:
                    depth -= 1
                    if depth == 0:
                        events.append(TraceFileProcessor.parse_event(builder.value))
                        builder = None
            elif prefix == '':
                if event not in ('start_map', 'map_key', 'end_map'):
                    raise TraceFormatError("trace document must be an object")
            elif prefix == 'beginningOfTime':
                if event in _CONTAINER_START:
                    raise TraceFormatError("'beginningOfTime' must be an unsigned integer")
                origin_time = value
            elif prefix == 'traceEvents':
                if event == 'start_array':
                    events = []
                elif event != 'end_array':
                    raise TraceFormatError("'traceEvents' must be an array")
            elif prefix == 'traceEvents.item' and events is not None:
                if event in _CONTAINER_START:
                    builder = ijson.ObjectBuilder()
                    builder.event(event, value)
                    depth = 1
                else:
                    events.append(TraceFileProcessor.parse_event(value))

        if origin_time is None:
            raise TraceFormatError("missing 'beginningOfTime'")
        if isinstance(origin_time, bool) or not isinstance(origin_time, int) or origin_time < 0:
            raise TraceFormatError(f"'beginningOfTime' must be an unsigned integer, got {origin_time!r}")
        if events is None:
            raise TraceFormatError("missing 'traceEvents'")

        return Profile(origin_time=origin_time, events=tuple(events))

    @staticmethod
    def parse_event(record: Any) -> TraceEvent:
        """Decode one event record."""
        if not isinstance(record, dict):
            raise TraceFormatError(f"event must be an object, got {type(record).__name__}")

        name = record.get('name')
        if not isinstance(name, str):
            raise TraceFormatError(f"event 'name' must be a string, got {name!r}")

        return TraceEvent(
            category=classify(name),
            name=name,
            start_us=_require_uint(record, 'ts'),
            duration_us=_optional_uint(record, 'dur'),
            detail=_detail(record)
        )
