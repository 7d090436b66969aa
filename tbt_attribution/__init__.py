"""
TBT Attribution - Total Blocking Time impact attribution for main-thread tasks
"""

__version__ = "1.0.0"

from .core.attributor import TBTImpactAttributor
from .core.types import AttributionConfig, MetricComputationInput, TBTImpactTask

__all__ = ["TBTImpactAttributor", "AttributionConfig", "MetricComputationInput", "TBTImpactTask"]
