"""
Helpers wiring an artifact file to a ready-to-use attributor.
"""

from typing import List, Optional, Tuple

from .core.attributor import TBTImpactAttributor
from .core.providers import ArtifactProviders
from .core.types import (
    NAVIGATION_MODE,
    AttributionConfig,
    GatherContext,
    MetricComputationInput,
    TBTImpactTask,
    TimingWindow,
)
from .processors.file_processor import TraceArtifactProcessor
from .processors.hierarchy_builder import HierarchyBuilder


def attribute_artifact_file(
    file_path: str,
    config: Optional[AttributionConfig] = None
) -> Tuple[List[TBTImpactTask], TimingWindow]:
    """
    Load an artifact file and attribute its TBT to tasks.

    Args:
        file_path: Path to the artifact JSON file
        config: AttributionConfig (defaults used if omitted)

    Returns:
        Tuple of (impact_tasks, window)
    """
    artifact = TraceArtifactProcessor.process_file(file_path)
    providers = ArtifactProviders(artifact, HierarchyBuilder())

    attributor = TBTImpactAttributor(
        task_tree_provider=providers,
        trace_timings_provider=providers,
        milestone_provider=providers,
        blocking_time_provider=providers,
        config=config,
    )

    data = MetricComputationInput(
        trace=file_path,
        url=str(artifact.get('url', '')),
        gather_context=GatherContext(gather_mode=str(artifact.get('gatherMode', NAVIGATION_MODE))),
    )

    impact_tasks = attributor.request(data)
    window = attributor.get_tbt_window(data)
    return impact_tasks, window
