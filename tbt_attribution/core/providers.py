"""
Collaborator contracts consumed by the attributor, and an implementation
backed by a precomputed artifact.
"""

import json
from typing import Any, Dict, List, Protocol

from .types import (
    BlockingTimeResult,
    MetricComputationInput,
    MilestoneResult,
    NodeTiming,
    ObservedBlockingTime,
    SimulatedBlockingTime,
    SimulationNode,
    TaskTree,
)


class ArtifactFormatError(ValueError):
    """Raised when an artifact section is missing or malformed."""


class TaskTreeProvider(Protocol):
    def get_task_tree(self, trace: Any) -> TaskTree:
        raise NotImplementedError


class TraceTimingsProvider(Protocol):
    def get_trace_end(self, trace: Any) -> float:
        raise NotImplementedError


class MilestoneProvider(Protocol):
    def get_first_contentful_paint(self, data: MetricComputationInput) -> MilestoneResult:
        raise NotImplementedError

    def get_interactive(self, data: MetricComputationInput) -> MilestoneResult:
        raise NotImplementedError


class BlockingTimeProvider(Protocol):
    def get_total_blocking_time(self, data: MetricComputationInput) -> BlockingTimeResult:
        raise NotImplementedError


def event_identity(raw_event: Any) -> Any:
    """Turn a raw event reference into a hashable lookup key."""
    if isinstance(raw_event, (dict, list)):
        return json.dumps(raw_event, sort_keys=True)
    return raw_event


def _require(section: Dict[str, Any], key: str, context: str) -> Any:
    if not isinstance(section, dict) or key not in section:
        raise ArtifactFormatError(f"'{context}' is missing required field '{key}'")
    return section[key]


def parse_number(value: Any, context: str) -> float:
    """Convert an artifact field to a float, rejecting nulls and non-numeric values."""
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ArtifactFormatError(f"'{context}' must be a number, got {value!r}") from e


def parse_milestone(section: Dict[str, Any], name: str) -> MilestoneResult:
    """
    Parse a milestone section into a MilestoneResult.

    Args:
        section: Dictionary with 'timing' and optional estimates
        name: Section name, used in error messages

    Returns:
        MilestoneResult
    """
    timing = parse_number(_require(section, 'timing', name), f'{name}.timing')
    optimistic = section.get('optimisticEstimate')
    pessimistic = section.get('pessimisticEstimate')
    return MilestoneResult(
        timing=timing,
        optimistic_estimate_ms=(
            parse_number(
                _require(optimistic, 'timeInMs', f'{name}.optimisticEstimate'),
                f'{name}.optimisticEstimate.timeInMs',
            )
            if optimistic is not None else None
        ),
        pessimistic_estimate_ms=(
            parse_number(
                _require(pessimistic, 'timeInMs', f'{name}.pessimisticEstimate'),
                f'{name}.pessimisticEstimate.timeInMs',
            )
            if pessimistic is not None else None
        ),
    )


def parse_blocking_time(section: Dict[str, Any]) -> BlockingTimeResult:
    """
    Parse a totalBlockingTime section.

    A section carrying 'pessimisticEstimate' is a simulated result whose
    node timings come from the pessimistic estimate. Anything else is
    an observed result.

    Args:
        section: Dictionary with 'timing' and optional 'pessimisticEstimate'

    Returns:
        ObservedBlockingTime or SimulatedBlockingTime
    """
    timing = parse_number(_require(section, 'timing', 'totalBlockingTime'), 'totalBlockingTime.timing')
    if 'pessimisticEstimate' not in section:
        return ObservedBlockingTime(timing=timing)

    raw_timings = _require(
        section['pessimisticEstimate'], 'nodeTimings', 'totalBlockingTime.pessimisticEstimate'
    )
    if not isinstance(raw_timings, list):
        raise ArtifactFormatError("'totalBlockingTime.pessimisticEstimate.nodeTimings' must be a list")

    node_timings: Dict[SimulationNode, NodeTiming] = {}
    for entry in raw_timings:
        raw_node = _require(entry, 'node', 'nodeTimings[]')
        node = SimulationNode(
            node_id=str(_require(raw_node, 'id', 'nodeTimings[].node')),
            type=str(_require(raw_node, 'type', 'nodeTimings[].node')),
            event=event_identity(raw_node.get('event')),
        )
        start_time = parse_number(_require(entry, 'startTime', 'nodeTimings[]'), 'nodeTimings[].startTime')
        end_time = parse_number(_require(entry, 'endTime', 'nodeTimings[]'), 'nodeTimings[].endTime')
        node_timings[node] = NodeTiming(
            start_time=start_time,
            end_time=end_time,
            duration=parse_number(entry.get('duration', end_time - start_time), 'nodeTimings[].duration'),
        )

    return SimulatedBlockingTime(timing=timing, node_timings=node_timings)


class ArtifactProviders:
    """
    Serves every collaborator from one loaded artifact dictionary.

    Args:
        artifact: Top-level artifact sections (see TraceArtifactProcessor)
        hierarchy_builder: HierarchyBuilder used to build the task tree
    """

    def __init__(self, artifact: Dict[str, Any], hierarchy_builder):
        self.artifact = artifact
        self.hierarchy_builder = hierarchy_builder

    def _section(self, key: str) -> Any:
        if key not in self.artifact:
            raise ArtifactFormatError(f"Artifact has no '{key}' section")
        return self.artifact[key]

    def get_task_tree(self, trace: Any) -> TaskTree:
        records: List[Dict[str, Any]] = self._section('tasks')
        return self.hierarchy_builder.build_task_tree(records)

    def get_trace_end(self, trace: Any) -> float:
        return parse_number(self._section('traceEnd'), 'traceEnd')

    def get_first_contentful_paint(self, data: MetricComputationInput) -> MilestoneResult:
        return parse_milestone(self._section('firstContentfulPaint'), 'firstContentfulPaint')

    def get_interactive(self, data: MetricComputationInput) -> MilestoneResult:
        return parse_milestone(self._section('interactive'), 'interactive')

    def get_total_blocking_time(self, data: MetricComputationInput) -> BlockingTimeResult:
        return parse_blocking_time(self._section('totalBlockingTime'))
