"""
Unit tests for tbt_attribution.processors.observed_strategy module.
"""
import pytest
from tbt_attribution.core.types import AttributionConfig, TimingWindow
from tbt_attribution.processors.observed_strategy import ObservedTimelineStrategy
from tbt_attribution.processors.parallel_processor import ParallelImpactProcessor


@pytest.fixture
def strategy():
    return ObservedTimelineStrategy(ParallelImpactProcessor(AttributionConfig()))


class TestObservedTimelineStrategy:
    """Tests for impacts computed from observed task timings."""
    
    def test_single_root_task(self, strategy, build_tree):
        tree = build_tree([(1000, 1200, None)])
        impacts = strategy.compute_impacts(tree, TimingWindow(500, 1500))
        assert impacts == {0: 150}
    
    def test_nested_tasks_weighted_by_top_level_task(self, strategy, build_tree):
        tree = build_tree([
            (0, 200, None),
            (50, 150, 0),
        ])
        impacts = strategy.compute_impacts(tree, TimingWindow(0, 1000))
        
        assert impacts[0] == 150
        # Threshold scaled to 50 * 100 / 200 = 25ms
        assert impacts[1] == 75
    
    def test_every_task_gets_an_impact(self, strategy, nested_tree):
        impacts = strategy.compute_impacts(nested_tree, TimingWindow(0, 5000))
        assert set(impacts) == {0, 1, 2}
    
    def test_tasks_outside_window_have_no_impact(self, strategy, build_tree):
        tree = build_tree([
            (0, 300, None),
            (50, 250, 0),
            (2000, 2400, None),
        ])
        impacts = strategy.compute_impacts(tree, TimingWindow(500, 1500))
        assert impacts == {0: 0, 1: 0, 2: 0}
