"""
Analysis window resolution for TBT attribution.
"""

import logging
from multiprocessing.pool import ThreadPool

from ..core.types import NAVIGATION_MODE, MetricComputationInput, TimingWindow

logger = logging.getLogger(__name__)


class WindowResolver:
    """Derives the blocking-time window from gather mode and milestones."""

    def __init__(self, trace_timings_provider, milestone_provider):
        """
        Initialize with collaborators.

        Args:
            trace_timings_provider: TraceTimingsProvider supplying the trace end
            milestone_provider: MilestoneProvider supplying FCP and TTI
        """
        self.trace_timings_provider = trace_timings_provider
        self.milestone_provider = milestone_provider

    def resolve(self, data: MetricComputationInput) -> TimingWindow:
        """
        Resolve the analysis window.

        Outside of navigations the whole recording is in scope. For
        navigations the window runs from FCP to TTI. When simulated
        estimates exist the widest window is used: the optimistic FCP and
        the pessimistic TTI, matching the pessimistic simulated timeline
        the tasks are attributed against.

        Args:
            data: Metric computation input

        Returns:
            TimingWindow
        """
        if data.gather_context.gather_mode != NAVIGATION_MODE:
            trace_end = self.trace_timings_provider.get_trace_end(data.trace)
            return TimingWindow(start_time_ms=0, end_time_ms=trace_end)

        with ThreadPool(processes=2) as pool:
            fcp_async = pool.apply_async(self.milestone_provider.get_first_contentful_paint, (data,))
            tti_async = pool.apply_async(self.milestone_provider.get_interactive, (data,))
            fcp_result = fcp_async.get()
            tti_result = tti_async.get()

        start_time_ms = fcp_result.timing
        end_time_ms = tti_result.timing

        if fcp_result.optimistic_estimate_ms is not None:
            start_time_ms = fcp_result.optimistic_estimate_ms
        if tti_result.pessimistic_estimate_ms is not None:
            end_time_ms = tti_result.pessimistic_estimate_ms

        logger.debug(
            "Resolved %s navigation window [%s, %s]",
            "simulated" if fcp_result.is_simulated or tti_result.is_simulated else "observed",
            start_time_ms, end_time_ms
        )
        return TimingWindow(start_time_ms=start_time_ms, end_time_ms=end_time_ms)
