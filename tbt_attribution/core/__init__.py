"""Core components for TBT impact attribution."""

from .types import (
    AttributionConfig,
    MetricComputationInput,
    TaskNode,
    TaskTree,
    TBTImpactTask,
    TimingWindow,
)
from .providers import ArtifactFormatError, ArtifactProviders
from .attributor import TBTImpactAttributor

__all__ = [
    "AttributionConfig",
    "MetricComputationInput",
    "TaskNode",
    "TaskTree",
    "TBTImpactTask",
    "TimingWindow",
    "ArtifactFormatError",
    "ArtifactProviders",
    "TBTImpactAttributor",
]
