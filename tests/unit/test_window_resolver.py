"""
Unit tests for tbt_attribution.processors.window_resolver module.
"""
import logging
import pytest
from unittest.mock import Mock
from tbt_attribution.core.types import (
    GatherContext,
    MetricComputationInput,
    MilestoneResult,
    TimingWindow,
)
from tbt_attribution.processors.window_resolver import WindowResolver


def make_input(gather_mode='navigation'):
    return MetricComputationInput(trace='trace.json', gather_context=GatherContext(gather_mode=gather_mode))


@pytest.fixture
def trace_timings():
    provider = Mock()
    provider.get_trace_end.return_value = 5000.0
    return provider


class TestWindowResolver:
    """Tests for analysis window resolution."""
    
    @pytest.mark.parametrize('gather_mode', ['timespan', 'snapshot'])
    def test_non_navigation_covers_whole_trace(self, trace_timings, gather_mode):
        milestones = Mock()
        resolver = WindowResolver(trace_timings, milestones)
        
        window = resolver.resolve(make_input(gather_mode))
        
        assert window == TimingWindow(start_time_ms=0, end_time_ms=5000.0)
        milestones.get_first_contentful_paint.assert_not_called()
        milestones.get_interactive.assert_not_called()
    
    def test_navigation_observed_milestones(self, trace_timings):
        milestones = Mock()
        milestones.get_first_contentful_paint.return_value = MilestoneResult(timing=1000)
        milestones.get_interactive.return_value = MilestoneResult(timing=3000)
        resolver = WindowResolver(trace_timings, milestones)
        
        window = resolver.resolve(make_input())
        
        assert window.start_time_ms == 1000
        assert window.end_time_ms == 3000
        trace_timings.get_trace_end.assert_not_called()
    
    def test_navigation_simulated_milestones_use_widest_window(self, trace_timings):
        """Optimistic FCP starts the window and pessimistic TTI ends it."""
        milestones = Mock()
        milestones.get_first_contentful_paint.return_value = MilestoneResult(
            timing=1000, optimistic_estimate_ms=800, pessimistic_estimate_ms=1200
        )
        milestones.get_interactive.return_value = MilestoneResult(
            timing=3000, optimistic_estimate_ms=2500, pessimistic_estimate_ms=3500
        )
        resolver = WindowResolver(trace_timings, milestones)
        
        window = resolver.resolve(make_input())
        
        assert window.start_time_ms == 800
        assert window.end_time_ms == 3500
    
    def test_milestones_receive_input_unchanged(self, trace_timings):
        milestones = Mock()
        milestones.get_first_contentful_paint.return_value = MilestoneResult(timing=1000)
        milestones.get_interactive.return_value = MilestoneResult(timing=3000)
        data = make_input()
        
        WindowResolver(trace_timings, milestones).resolve(data)
        
        milestones.get_first_contentful_paint.assert_called_once_with(data)
        milestones.get_interactive.assert_called_once_with(data)
    
    def test_milestone_failure_propagates(self, trace_timings):
        milestones = Mock()
        milestones.get_first_contentful_paint.side_effect = RuntimeError("no FCP in trace")
        milestones.get_interactive.return_value = MilestoneResult(timing=3000)
        
        with pytest.raises(RuntimeError, match="no FCP"):
            WindowResolver(trace_timings, milestones).resolve(make_input())
    
    def test_inverted_window_rejected(self, trace_timings):
        milestones = Mock()
        milestones.get_first_contentful_paint.return_value = MilestoneResult(timing=4000)
        milestones.get_interactive.return_value = MilestoneResult(timing=3000)
        
        with pytest.raises(ValueError, match="after window end"):
            WindowResolver(trace_timings, milestones).resolve(make_input())
    
    @pytest.mark.parametrize('fcp, tti, kind', [
        (MilestoneResult(timing=1000), MilestoneResult(timing=3000), 'observed'),
        (MilestoneResult(timing=1000, optimistic_estimate_ms=800), MilestoneResult(timing=3000), 'simulated'),
    ])
    def test_logs_window_kind(self, trace_timings, caplog, fcp, tti, kind):
        milestones = Mock()
        milestones.get_first_contentful_paint.return_value = fcp
        milestones.get_interactive.return_value = tti
        
        with caplog.at_level(logging.DEBUG, logger='tbt_attribution.processors.window_resolver'):
            WindowResolver(trace_timings, milestones).resolve(make_input())
        
        assert f"Resolved {kind} navigation window" in caplog.text
