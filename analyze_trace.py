#!/usr/bin/env python3
"""
Build Time-Trace Analyzer - Command Line Facade
"""

import json
import sys

from time_trace_analyzer import BuildVariant, LayoutError, analyze
from time_trace_analyzer.web import DEFAULT_LIMIT, prepare_results


def print_results(results: dict, limit: int) -> None:
    """Print the run summary and the top rows of each table."""
    s = results['summary']
    print(f"\nSelected path: {s['selected_path']}")
    print(f"Resolved path: {s['resolved_path']}")
    print(f"Total files:   {s['total_files']} ({s['total_valid_files']} valid, {s['total_invalid_files']} invalid)")
    print(f"Frontend [s]:  {s['frontend_sec']:.2f}")
    print(f"Backend [s]:   {s['backend_sec']:.2f}")
    print(f"Backend single events [s]: {s['backend_single_events_sec']:.2f}")
    print(f"Used time [s]: {s['used_time_sec']:.2f}")

    print("\nTargets:")
    for t in results['targets']:
        print(f"  {t['name']:<40} files={t['total_files']:<6} frontend={t['frontend_sec']:.2f}s "
              f"backend={t['backend_sec']:.2f}s start={t['start_sec']:.2f}s end={t['end_sec']:.2f}s")

    print(f"\nTop {limit} included files (by {results['sort']['include_files']}):")
    for f in results['include_files']:
        print(f"  {f['self_time']['formatted']:>12} self {f['total_time']['formatted']:>12} total "
              f"x{f['count']:<6} {f['name']}")

    print(f"\nTop {limit} source files (by {results['sort']['source_files']}):")
    for f in results['source_files']:
        print(f"  {f['total_time']['formatted']:>12} total {f['frontend_time']['formatted']:>12} frontend "
              f"{f['backend_time']['formatted']:>12} backend {f['name']}")

    print(f"\nTop {limit} frontend operations (by {results['sort']['frontend_operations']}):")
    for op in results['frontend_operations']:
        print(f"  {op['self_time']['formatted']:>12} self {op['total_time']['formatted']:>12} total "
              f"x{op['count']:<6} {op['operation']:<20} {op['name']}")

    print(f"\nTop {limit} backend operations (by {results['sort']['backend_operations']}):")
    for op in results['backend_operations']:
        print(f"  {op['total_time']['formatted']:>12} total x{op['count']:<6} {op['name']}")


def main():
    import argparse
    parser = argparse.ArgumentParser(
        description='Analyze compiler time-trace files of a CMake build.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python analyze_trace.py path/to/project
  python analyze_trace.py path/to/project --variant Release
  python analyze_trace.py path/to/build --variant SingleConfig --limit 20
  python analyze_trace.py path/to/project -o results.json
        """
    )
    parser.add_argument('selected_path', help='Source or build directory')
    parser.add_argument('--variant', dest='build_variant', default=BuildVariant.DEBUG.value,
                        choices=BuildVariant.names(), help='Build variant to analyze (default: Debug)')
    parser.add_argument('--limit', type=int, default=DEFAULT_LIMIT, help='Rows per table')
    parser.add_argument('-o', '--output', dest='output_file', help='Write the results as JSON')
    args = parser.parse_args()

    try:
        result = analyze(args.selected_path, args.build_variant)
    except LayoutError as e:
        print(f"Error ({e.kind}): {e}")
        sys.exit(1)

    results = prepare_results(result, limit=args.limit)
    print_results(results, args.limit)

    if args.output_file:
        with open(args.output_file, 'w', encoding='utf-8') as f:
            json.dump(results, f, indent=2)
        print(f"\nResults written to {args.output_file}")

    print(f"\n✓ Analysis complete!")


if __name__ == "__main__":
    main()
