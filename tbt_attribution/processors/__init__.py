"""Processors for task trees and TBT impact attribution."""

from .file_processor import TraceArtifactProcessor
from .hierarchy_builder import HierarchyBuilder
from .window_resolver import WindowResolver
from .parallel_processor import ParallelImpactProcessor
from .observed_strategy import ObservedTimelineStrategy
from .simulated_strategy import SimulatedTimelineStrategy
from .aggregator import ImpactAggregator

__all__ = [
    "TraceArtifactProcessor",
    "HierarchyBuilder",
    "WindowResolver",
    "ParallelImpactProcessor",
    "ObservedTimelineStrategy",
    "SimulatedTimelineStrategy",
    "ImpactAggregator",
]
