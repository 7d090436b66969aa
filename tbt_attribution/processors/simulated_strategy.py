"""
Impact computation from a simulated (lantern) timeline.
"""

import logging
from typing import Dict, Hashable, List

from ..core.types import NodeTiming, SimulatedEvent, SimulationNode, TaskNode, TaskTree, TimingWindow
from ..metrics.tbt_utils import calculate_tbt_impact_for_event
from .parallel_processor import ImpactWorkItem

logger = logging.getLogger(__name__)

CPU_NODE_TYPE = 'cpu'


class SimulatedTimelineStrategy:
    """
    Projects simulated node timings onto the observed task tree.

    Simulated timings only exist for top-level CPU tasks. Their impacts are
    taken directly from the simulated timing; every other task is placed on
    the simulated timeline relative to its top-level task.
    """

    def __init__(self, impact_processor):
        """
        Initialize with the impact processor.

        Args:
            impact_processor: ParallelImpactProcessor instance
        """
        self.impact_processor = impact_processor

    def compute_impacts(
        self,
        tree: TaskTree,
        node_timings: Dict[SimulationNode, NodeTiming],
        window: TimingWindow
    ) -> Dict[int, float]:
        """
        Compute per-task impacts against the simulated timeline.

        Args:
            tree: Observed task tree
            node_timings: Simulated timing of each simulation node
            window: Analysis window

        Returns:
            Dictionary mapping task index -> tbt_impact
        """
        task_impacts: Dict[int, float] = {}
        top_level_events: Dict[int, SimulatedEvent] = {}

        task_by_event: Dict[Hashable, TaskNode] = {}
        for task in tree:
            task_by_event[task.event] = task

        # Pass 1: simulated timings give the impact of top-level tasks directly
        for node, timing in node_timings.items():
            if node.type != CPU_NODE_TYPE:
                continue

            event = SimulatedEvent(start=timing.start_time, end=timing.end_time, duration=timing.duration)
            tbt_impact = calculate_tbt_impact_for_event(event, window.start_time_ms, window.end_time_ms)

            task = task_by_event.get(node.event)
            if task is None:
                logger.debug("No task matches simulation node %s", node.node_id)
                continue

            top_level_events[task.index] = event
            task_impacts[task.index] = tbt_impact

        # Pass 2: interpolate the remaining tasks from their top-level task
        work_items: List[ImpactWorkItem] = []
        for task in tree:
            if task.index in task_impacts:
                continue

            top_level_task = tree.get_top_level_task(task)
            top_level_event = top_level_events.get(top_level_task.index)
            if top_level_event is None:
                continue

            event = self.interpolate_event(task, top_level_task, top_level_event)
            work_items.append((task.index, event, top_level_event))

        task_impacts.update(self.impact_processor.compute_impacts(work_items, window))
        return task_impacts

    @staticmethod
    def interpolate_event(
        task: TaskNode,
        top_level_task: TaskNode,
        top_level_event: SimulatedEvent
    ) -> SimulatedEvent:
        """
        Estimate a nested task's simulated timing.

        The task keeps its relative position inside the top-level task while
        the top-level task is stretched or shrunk to its simulated span.

        Args:
            task: Nested task
            top_level_task: The task's top-level ancestor (observed timing)
            top_level_event: Simulated timing of the top-level ancestor

        Returns:
            Interpolated SimulatedEvent
        """
        if top_level_task.duration == 0:
            start_ratio = 0.0
            end_ratio = 0.0
        else:
            start_ratio = (task.start_time - top_level_task.start_time) / top_level_task.duration
            end_ratio = (top_level_task.end_time - task.end_time) / top_level_task.duration

        start = start_ratio * top_level_event.duration + top_level_event.start
        end = top_level_event.end - end_ratio * top_level_event.duration

        return SimulatedEvent(start=start, end=end, duration=end - start)
