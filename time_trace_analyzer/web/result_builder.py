"""
Result builder for JSON/CLI output.
"""

from typing import Dict, Optional, Union

from ..core.summary import AnalysisResult, SortCriterion, Summary
from ..formatters import format_duration, shorten_name, to_seconds

DEFAULT_LIMIT = 100

DEFAULT_SORT: Dict[str, SortCriterion] = {
    'targets': SortCriterion.ALPHA,
    'include_files': SortCriterion.LARGEST_TOTAL_TIME,
    'source_files': SortCriterion.LARGEST_TOTAL_TIME,
    'frontend_operations': SortCriterion.LARGEST_TOTAL_TIME,
    'backend_operations': SortCriterion.LARGEST_TOTAL_TIME,
}


def _resolve_sort(summary: Summary, sort: Optional[Dict[str, Union[SortCriterion, str]]]) -> Dict[str, SortCriterion]:
    """
    Merge requested orderings with the defaults.

    Raises:
        ValueError: If a table or criterion is unknown, or the table has no such index
    """
    resolved = dict(DEFAULT_SORT)
    for table_name, criterion in (sort or {}).items():
        if table_name not in DEFAULT_SORT:
            raise ValueError(f"Unknown table '{table_name}'. Must be one of: {list(DEFAULT_SORT)}")
        criterion = SortCriterion(criterion)
        table = getattr(summary, table_name)
        if criterion not in table.criteria:
            raise ValueError(
                f"Table '{table_name}' cannot be sorted by '{criterion.value}'. "
                f"Must be one of: {[c.value for c in table.criteria]}"
            )
        resolved[table_name] = criterion
    return resolved


def _timing(us: int) -> Dict[str, Union[int, str]]:
    return {'us': us, 'formatted': format_duration(us)}


def prepare_results(result: AnalysisResult, limit: Optional[int] = DEFAULT_LIMIT,
                    sort: Optional[Dict[str, Union[SortCriterion, str]]] = None) -> Dict:
    """
    Convert an analysis result to a structured format for JSON output.

    Args:
        result: Completed analysis
        limit: Maximum rows per table (None for all)
        sort: Table name -> criterion overrides (see DEFAULT_SORT)

    Returns:
        Dictionary with structured results for rendering
    """
    summary = result.summary
    order = _resolve_sort(summary, sort)

    targets = []
    for name, target in summary.targets.ordered(order['targets'], limit):
        start_sec, end_sec = summary.target_offsets_sec(name)
        targets.append({
            'name': name,
            'total_files': target.total_files,
            'frontend_sec': target.frontend_sec,
            'backend_sec': target.backend_sec,
            'start_sec': start_sec,
            'end_sec': end_sec,
        })

    include_files = []
    for path, stats in summary.include_files.ordered(order['include_files'], limit):
        include_files.append({
            'name': shorten_name(path),
            'full_name': path,
            'self_time': _timing(stats.self_us),
            'total_time': _timing(stats.total_us),
            'count': stats.occurrence_count,
            'avg_self_ms': stats.avg_self_ms,
            'avg_total_ms': stats.avg_total_ms,
        })

    source_files = []
    for path, stats in summary.source_files.ordered(order['source_files'], limit):
        source_files.append({
            'name': shorten_name(path),
            'full_name': path,
            'total_time': _timing(stats.total_us),
            'frontend_time': _timing(stats.frontend_us),
            'backend_time': _timing(stats.backend_us),
        })

    frontend_operations = []
    for (symbol, operation), stats in summary.frontend_operations.ordered(order['frontend_operations'], limit):
        frontend_operations.append({
            'name': shorten_name(symbol),
            'full_name': symbol,
            'operation': operation.value,
            'self_time': _timing(stats.self_us),
            'total_time': _timing(stats.total_us),
            'count': stats.occurrence_count,
            'avg_self_ms': stats.avg_self_ms,
            'avg_total_ms': stats.avg_total_ms,
        })

    backend_operations = []
    for symbol, stats in summary.backend_operations.ordered(order['backend_operations'], limit):
        backend_operations.append({
            'name': shorten_name(symbol),
            'full_name': symbol,
            'total_time': _timing(stats.total_us),
            'count': stats.occurrence_count,
            'avg_total_ms': stats.avg_total_ms,
        })

    return {
        'summary': {
            'selected_path': result.selected_path,
            'resolved_path': result.resolved_metadata_path,
            'build_variant': result.build_variant.value,
            'total_files': summary.total_files,
            'total_valid_files': summary.total_valid_files,
            'total_invalid_files': summary.total_invalid_files,
            'frontend_sec': summary.frontend_duration_sec,
            'backend_sec': summary.backend_duration_sec,
            'backend_single_events_sec': summary.backend_duration_single_events_sec,
            'used_time_sec': summary.inferred_used_time_secs,
            'nesting_violations': summary.nesting_violations,
            'unique_targets': len(summary.targets),
            'unique_include_files': len(summary.include_files),
            'unique_source_files': len(summary.source_files),
            'unique_frontend_operations': len(summary.frontend_operations),
            'unique_backend_operations': len(summary.backend_operations),
        },
        'sort': {table_name: criterion.value for table_name, criterion in order.items()},
        'targets': targets,
        'include_files': include_files,
        'source_files': source_files,
        'frontend_operations': frontend_operations,
        'backend_operations': backend_operations,
    }
