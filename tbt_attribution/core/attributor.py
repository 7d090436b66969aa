"""
Main TBT impact attribution orchestrator.
"""

import logging
from multiprocessing.pool import ThreadPool
from typing import List, Optional

from .types import (
    AttributionConfig,
    MetricComputationInput,
    SimulatedBlockingTime,
    TaskTree,
    TBTImpactTask,
    TimingWindow,
)
from ..processors.aggregator import ImpactAggregator
from ..processors.observed_strategy import ObservedTimelineStrategy
from ..processors.parallel_processor import ParallelImpactProcessor
from ..processors.simulated_strategy import SimulatedTimelineStrategy
from ..processors.window_resolver import WindowResolver
from ..storage.computed_cache import ComputedArtifactCache

logger = logging.getLogger(__name__)


class TBTImpactAttributor:
    """Attributes Total Blocking Time to the tasks of a page load."""

    def __init__(
        self,
        task_tree_provider,
        trace_timings_provider,
        milestone_provider,
        blocking_time_provider,
        config: Optional[AttributionConfig] = None,
        cache: Optional[ComputedArtifactCache] = None
    ):
        """
        Initialize the attributor with its collaborators.

        Args:
            task_tree_provider: TaskTreeProvider building the task tree of a trace
            trace_timings_provider: TraceTimingsProvider supplying the trace end
            milestone_provider: MilestoneProvider supplying FCP and TTI
            blocking_time_provider: BlockingTimeProvider supplying the TBT result
            config: AttributionConfig (defaults used if omitted)
            cache: ComputedArtifactCache shared between attributors (private one if omitted)
        """
        self.config = config or AttributionConfig()
        self.cache = cache if cache is not None else ComputedArtifactCache()

        self.task_tree_provider = task_tree_provider
        self.blocking_time_provider = blocking_time_provider

        self.window_resolver = WindowResolver(trace_timings_provider, milestone_provider)
        self.impact_processor = ParallelImpactProcessor(self.config)
        self.observed_strategy = ObservedTimelineStrategy(self.impact_processor)
        self.simulated_strategy = SimulatedTimelineStrategy(self.impact_processor)
        self.aggregator = ImpactAggregator()

    def request(self, data: MetricComputationInput) -> List[TBTImpactTask]:
        """
        Memoized entry point: computations for the same input run once.

        Args:
            data: Metric computation input

        Returns:
            List of TBTImpactTask
        """
        if not self.config.cache_results:
            return self.compute(data)
        return self.cache.get_or_compute(data.fingerprint(), lambda: self.compute(data), source=data)

    def compute(self, data: MetricComputationInput) -> List[TBTImpactTask]:
        """
        Compute the TBT impact of every task.

        Args:
            data: Metric computation input

        Returns:
            List of TBTImpactTask in task tree order
        """
        with ThreadPool(processes=2) as pool:
            tbt_async = pool.apply_async(self.blocking_time_provider.get_total_blocking_time, (data,))
            tree_async = pool.apply_async(self.task_tree_provider.get_task_tree, (data.trace,))
            tbt_result = tbt_async.get()
            tree: TaskTree = tree_async.get()

        window = self.window_resolver.resolve(data)

        if isinstance(tbt_result, SimulatedBlockingTime):
            logger.info(
                "Attributing simulated TBT over %d tasks (%d simulation nodes)",
                len(tree), len(tbt_result.node_timings)
            )
            task_impacts = self.simulated_strategy.compute_impacts(tree, tbt_result.node_timings, window)
        else:
            logger.info("Attributing observed TBT over %d tasks", len(tree))
            task_impacts = self.observed_strategy.compute_impacts(tree, window)

        return self.aggregator.create_impact_tasks(tree, task_impacts)

    def get_tbt_window(self, data: MetricComputationInput) -> TimingWindow:
        """
        Resolve the analysis window without attributing tasks.

        Args:
            data: Metric computation input

        Returns:
            TimingWindow
        """
        return self.window_resolver.resolve(data)
