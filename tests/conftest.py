"""
Pytest configuration and shared fixtures for time-trace analyzer tests.
"""
import json
import pytest


def trace_event(name, ts, dur=None, detail=None, pid=1, tid=1):
    """Build one trace event record as the compiler writes it."""
    event = {"pid": pid, "tid": tid, "ph": "X", "ts": ts, "name": name}
    if dur is not None:
        event["dur"] = dur
    if detail is not None:
        event["args"] = {"detail": detail}
    return event


def trace_document(events, beginning_of_time=0):
    """Build a complete trace document."""
    return {"traceEvents": list(events), "beginningOfTime": beginning_of_time}


@pytest.fixture
def event():
    """Factory for trace event records."""
    return trace_event


@pytest.fixture
def document():
    """Factory for trace documents."""
    return trace_document


@pytest.fixture
def write_trace():
    """Write a trace document (or raw text) to a path, creating parent directories."""
    def _write(path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data)
        else:
            path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture
def sample_trace():
    """
    Realistic trace of one translation unit.

    main.cpp includes a.h (which includes b.h), instantiates a template that
    parses a class, and runs two backend passes.
    """
    return trace_document([
        trace_event("Source", 100, 500, "/src/a.h"),
        trace_event("Source", 200, 200, "/src/b.h"),
        trace_event("InstantiateClass", 700, 300, "std::vector<int>"),
        trace_event("ParseClass", 750, 100, "Widget"),
        trace_event("OptFunction", 1200, 40, "_Z3fooi"),
        trace_event("DevirtSCCRepeatedPass", 1250, 60, "(_Z3fooi)"),
        trace_event("OptFunction", 1320, 30, "main"),
        trace_event("Frontend", 0, 1100),
        trace_event("Backend", 1100, 400),
        trace_event("ExecuteCompiler", 0, 1500),
        trace_event("process_name", 0, detail=None),
    ], beginning_of_time=1_000_000)


@pytest.fixture
def single_config_build(tmp_path, write_trace, sample_trace):
    """
    Single-configuration build directory:

        build/
          CMakeFiles/mytarget.dir/src/x.cpp.json
          CMakeFiles/mytarget.dir/src/y.cpp.json
          CMakeFiles/other.dir/lib.cpp.json
          compile_commands.json
    """
    build = tmp_path / "build"
    write_trace(build / "CMakeFiles" / "mytarget.dir" / "src" / "x.cpp.json", sample_trace)
    write_trace(build / "CMakeFiles" / "mytarget.dir" / "src" / "y.cpp.json", trace_document([
        trace_event("Frontend", 0, 300),
        trace_event("Backend", 300, 100),
    ], beginning_of_time=1_000_500))
    write_trace(build / "CMakeFiles" / "other.dir" / "lib.cpp.json", trace_document([
        trace_event("Source", 0, 80, "/src/a.h"),
        trace_event("Frontend", 0, 200),
        trace_event("Backend", 200, 50),
    ], beginning_of_time=2_000_000))
    write_trace(build / "compile_commands.json", [{"file": "x.cpp", "command": "clang++ -c x.cpp"}])
    return build


@pytest.fixture
def multi_config_build(tmp_path, write_trace, sample_trace):
    """
    Multi-configuration project with the metadata directory at its root:

        project/CMakeFiles/
          app.dir/Debug/src/main.cpp.json
          app.dir/Release/src/main.cpp.json
          lib.dir/Debug/util.cpp.json
          cmake.check_cache
    """
    metadata = tmp_path / "project" / "CMakeFiles"
    write_trace(metadata / "app.dir" / "Debug" / "src" / "main.cpp.json", sample_trace)
    write_trace(metadata / "app.dir" / "Release" / "src" / "main.cpp.json", trace_document([
        trace_event("Frontend", 0, 50),
    ], beginning_of_time=5))
    write_trace(metadata / "lib.dir" / "Debug" / "util.cpp.json", trace_document([
        trace_event("Frontend", 0, 700),
        trace_event("Backend", 700, 300),
    ], beginning_of_time=1_000_200))
    write_trace(metadata / "cmake.check_cache", "# generated\n")
    return tmp_path / "project"
