"""
Impact computation from the observed task timeline.
"""

from typing import Dict, List

from ..core.types import SimulatedEvent, TaskTree, TimingWindow
from .parallel_processor import ImpactWorkItem


class ObservedTimelineStrategy:
    """Computes per-task impacts straight from observed task timings."""

    def __init__(self, impact_processor):
        """
        Initialize with the impact processor.

        Args:
            impact_processor: ParallelImpactProcessor instance
        """
        self.impact_processor = impact_processor

    def compute_impacts(self, tree: TaskTree, window: TimingWindow) -> Dict[int, float]:
        """
        Compute the impact of every task, weighted by its top-level task.

        Args:
            tree: Task tree
            window: Analysis window

        Returns:
            Dictionary mapping task index -> tbt_impact
        """
        work_items: List[ImpactWorkItem] = []
        for task in tree:
            top_level_task = tree.get_top_level_task(task)
            work_items.append((
                task.index,
                SimulatedEvent.from_task(task),
                SimulatedEvent.from_task(top_level_task),
            ))

        return self.impact_processor.compute_impacts(work_items, window)
