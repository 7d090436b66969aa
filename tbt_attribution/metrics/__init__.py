"""Blocking-time metric primitives."""

from .tbt_utils import (
    BLOCKING_TIME_THRESHOLD,
    calculate_sum_of_blocking_time,
    calculate_tbt_impact_for_event,
)

__all__ = [
    "BLOCKING_TIME_THRESHOLD",
    "calculate_sum_of_blocking_time",
    "calculate_tbt_impact_for_event",
]
