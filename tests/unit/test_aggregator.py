"""
Unit tests for tbt_attribution.processors.aggregator module.
"""
import logging
import pytest
from tbt_attribution.core.types import TBTImpactTask
from tbt_attribution.processors.aggregator import ImpactAggregator


class TestCreateImpactTasks:
    """Tests for deriving total and self impacts."""
    
    def test_single_task(self, build_tree):
        tree = build_tree([(1000, 1200, None)])
        
        result = ImpactAggregator.create_impact_tasks(tree, {0: 150})
        
        assert len(result) == 1
        assert isinstance(result[0], TBTImpactTask)
        assert result[0].tbt_impact == 150
        assert result[0].self_tbt_impact == 150
    
    def test_self_impact_excludes_direct_children_only(self, nested_tree):
        impacts = {0: 850, 1: 190, 2: 95}
        
        result = ImpactAggregator.create_impact_tasks(nested_tree, impacts)
        
        assert [t.tbt_impact for t in result] == [850, 190, 95]
        assert [t.self_tbt_impact for t in result] == [660, 95, 95]
    
    def test_self_plus_children_equals_total(self, build_tree):
        tree = build_tree([
            (0, 1000, None),
            (100, 300, 0),
            (400, 900, 0),
            (450, 600, 2),
            (650, 850, 2),
        ])
        impacts = {0: 950, 1: 190, 2: 475, 3: 142.5, 4: 190}
        
        result = ImpactAggregator.create_impact_tasks(tree, impacts)
        
        for task in result:
            children_total = sum(result[i].tbt_impact for i in task.children)
            assert task.self_tbt_impact + children_total == pytest.approx(task.tbt_impact)
    
    def test_missing_impacts_default_to_zero(self, nested_tree):
        result = ImpactAggregator.create_impact_tasks(nested_tree, {0: 100})
        
        assert result[0].self_tbt_impact == 100
        assert result[1].tbt_impact == 0
        assert result[2].self_tbt_impact == 0
    
    def test_task_fields_preserved(self, nested_tree):
        result = ImpactAggregator.create_impact_tasks(nested_tree, {})
        
        for original, impact_task in zip(nested_tree, result):
            assert impact_task.index == original.index
            assert impact_task.start_time == original.start_time
            assert impact_task.end_time == original.end_time
            assert impact_task.duration == original.duration
            assert impact_task.event == original.event
            assert impact_task.parent == original.parent
            assert impact_task.children == original.children
            assert impact_task.name == original.name
    
    def test_negative_self_impact_reported(self, nested_tree, caplog):
        with caplog.at_level(logging.WARNING, logger='tbt_attribution.processors.aggregator'):
            result = ImpactAggregator.create_impact_tasks(nested_tree, {0: 10, 1: 50})
        
        assert result[0].self_tbt_impact == -40
        assert "negative self TBT impact" in caplog.text
    
    def test_float_noise_not_reported(self, build_tree, caplog):
        tree = build_tree([(0, 100, None), (0, 100, 0)])
        with caplog.at_level(logging.WARNING, logger='tbt_attribution.processors.aggregator'):
            ImpactAggregator.create_impact_tasks(tree, {0: 0.3, 1: 0.1 + 0.2})
        
        assert caplog.text == ""
