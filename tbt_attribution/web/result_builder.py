"""
Result builder for JSON output.
"""

from collections import defaultdict
from typing import Any, Dict, List

from ..core.types import TBTImpactTask, TimingWindow
from ..formatters import format_time


def _task_entry(task: TBTImpactTask) -> Dict[str, Any]:
    return {
        'index': task.index,
        'name': task.name,
        'event': task.event if isinstance(task.event, (str, int, float)) else str(task.event),
        'start_time_ms': task.start_time,
        'end_time_ms': task.end_time,
        'duration_ms': task.duration,
        'duration_formatted': format_time(task.duration),
        'tbt_impact_ms': task.tbt_impact,
        'tbt_impact_formatted': format_time(task.tbt_impact),
        'self_tbt_impact_ms': task.self_tbt_impact,
        'self_tbt_impact_formatted': format_time(task.self_tbt_impact),
    }


def _build_hierarchy(task: TBTImpactTask, tasks: List[TBTImpactTask]) -> Dict[str, Any]:
    node = _task_entry(task)
    children = [tasks[i] for i in task.children]
    # Children with no impact are dropped to keep the tree readable
    node['children'] = [
        _build_hierarchy(child, tasks)
        for child in sorted(children, key=lambda c: -c.tbt_impact)
        if child.tbt_impact > 0
    ]
    return node


def prepare_results(impact_tasks: List[TBTImpactTask], window: TimingWindow, top_n: int = 10) -> Dict[str, Any]:
    """
    Convert impact tasks to a structured format for JSON output.

    Args:
        impact_tasks: Attributor output, in task tree order
        window: Analysis window the impacts were computed for
        top_n: Number of tasks listed in 'top_tasks'

    Returns:
        Dictionary with structured results for rendering
    """
    roots = [task for task in impact_tasks if task.parent is None]
    total_tbt = sum(task.tbt_impact for task in roots)

    # Self impact grouped by task name
    by_name = defaultdict(lambda: {'count': 0, 'self_tbt_impact_ms': 0.0})
    for task in impact_tasks:
        stats = by_name[task.name or '<unnamed>']
        stats['count'] += 1
        stats['self_tbt_impact_ms'] += task.self_tbt_impact

    names_summary = [
        {
            'name': name,
            'count': stats['count'],
            'self_tbt_impact_ms': stats['self_tbt_impact_ms'],
            'self_tbt_impact_formatted': format_time(stats['self_tbt_impact_ms']),
        }
        for name, stats in by_name.items()
        if stats['self_tbt_impact_ms'] > 0
    ]
    names_summary.sort(key=lambda x: -x['self_tbt_impact_ms'])

    top_tasks = sorted(
        (task for task in impact_tasks if task.self_tbt_impact > 0),
        key=lambda t: -t.self_tbt_impact
    )[:top_n]

    return {
        'summary': {
            'total_tasks': len(impact_tasks),
            'top_level_tasks': len(roots),
            'blocking_tasks': sum(1 for task in roots if task.tbt_impact > 0),
            'window_start_ms': window.start_time_ms,
            'window_end_ms': window.end_time_ms,
            'total_blocking_time_ms': total_tbt,
            'total_blocking_time_formatted': format_time(total_tbt),
        },
        'top_tasks': [_task_entry(task) for task in top_tasks],
        'by_name': names_summary,
        'hierarchy': [
            _build_hierarchy(root, impact_tasks)
            for root in sorted(roots, key=lambda r: -r.tbt_impact)
            if root.tbt_impact > 0
        ],
    }
