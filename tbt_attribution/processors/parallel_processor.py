"""
Parallel impact processor for large task trees.
"""

from multiprocessing import Pool
from typing import Dict, List, Optional, Tuple

from ..core.types import AttributionConfig, SimulatedEvent, TimingWindow
from ..metrics.tbt_utils import calculate_tbt_impact_for_event


# (task index, event, top-level event or None)
ImpactWorkItem = Tuple[int, SimulatedEvent, Optional[SimulatedEvent]]


def _compute_single_impact(args: Tuple[int, SimulatedEvent, Optional[SimulatedEvent], float, float]) -> Tuple[int, float]:
    """
    Compute the impact of one task. Designed to run in a worker process.

    Args:
        args: Tuple of (task_index, event, top_level_event, start_time_ms, end_time_ms)

    Returns:
        Tuple of (task_index, tbt_impact)
    """
    index, event, top_level_event, start_time_ms, end_time_ms = args
    return index, calculate_tbt_impact_for_event(event, start_time_ms, end_time_ms, top_level_event)


class ParallelImpactProcessor:
    """Evaluate independent per-task impacts, in parallel when worthwhile."""

    def __init__(self, config: AttributionConfig):
        """
        Initialize parallel processor.

        Args:
            config: AttributionConfig instance
        """
        self.config = config
        self.num_workers = config.num_workers

    def compute_impacts(self, work_items: List[ImpactWorkItem], window: TimingWindow) -> Dict[int, float]:
        """
        Compute the TBT impact of every work item.

        Args:
            work_items: List of (task_index, event, top_level_event)
            window: Analysis window

        Returns:
            Dictionary mapping task index -> tbt_impact
        """
        item_count = len(work_items)
        if not work_items:
            return {}

        if item_count < self.config.parallel_threshold or self.num_workers <= 1:
            return self._compute_sequential(work_items, window)

        args = [
            (index, event, top_level_event, window.start_time_ms, window.end_time_ms)
            for index, event, top_level_event in work_items
        ]

        effective_workers = min(self.num_workers, item_count)
        chunksize = max(1, item_count // (effective_workers * 4))

        impacts: Dict[int, float] = {}
        with Pool(processes=effective_workers) as pool:
            for index, tbt_impact in pool.imap_unordered(_compute_single_impact, args, chunksize=chunksize):
                impacts[index] = tbt_impact

        return impacts

    @staticmethod
    def _compute_sequential(work_items: List[ImpactWorkItem], window: TimingWindow) -> Dict[int, float]:
        """
        Fallback sequential evaluation for small batches or a single worker.
        """
        impacts: Dict[int, float] = {}
        for index, event, top_level_event in work_items:
            impacts[index] = calculate_tbt_impact_for_event(
                event, window.start_time_ms, window.end_time_ms, top_level_event
            )
        return impacts
