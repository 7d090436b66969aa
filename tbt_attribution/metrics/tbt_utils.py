"""
Blocking-time primitives shared by TBT and its per-task attribution.
"""

from typing import Iterable, Optional

from ..core.types import SimulatedEvent


BLOCKING_TIME_THRESHOLD = 50


def calculate_tbt_impact_for_event(
    event: SimulatedEvent,
    start_time_ms: float,
    end_time_ms: float,
    top_level_event: Optional[SimulatedEvent] = None
) -> float:
    """
    Calculate the blocking time contributed by a single event within a window.

    The event is first clipped to the window, then everything past the
    blocking threshold counts. A 150ms task [0, 150] with the window starting
    at 50ms is clipped to [50, 150] and blocks for 50ms.

    When ``top_level_event`` is given the event is a sub-task, and the
    threshold is scaled by the event's share of its top-level task. An 80ms
    task with two 40ms children then attributes blocking time to both
    children even though neither reaches 50ms on its own.

    Args:
        event: The event timing
        start_time_ms: Window start
        end_time_ms: Window end
        top_level_event: Timing of the event's top-level task, if the event is nested

    Returns:
        Blocking time in milliseconds
    """
    threshold = BLOCKING_TIME_THRESHOLD
    if top_level_event is not None and top_level_event.duration > 0:
        threshold *= event.duration / top_level_event.duration

    if event.duration < threshold:
        return 0
    if event.end < start_time_ms:
        return 0
    if event.start > end_time_ms:
        return 0

    clipped_start = max(event.start, start_time_ms)
    clipped_end = min(event.end, end_time_ms)
    clipped_duration = clipped_end - clipped_start
    if clipped_duration < threshold:
        return 0

    return clipped_duration - threshold


def calculate_sum_of_blocking_time(
    top_level_events: Iterable[SimulatedEvent],
    start_time_ms: float,
    end_time_ms: float
) -> float:
    """
    Sum the blocking time of top-level events within a window.

    Args:
        top_level_events: Timings of top-level tasks
        start_time_ms: Window start
        end_time_ms: Window end

    Returns:
        Total blocking time in milliseconds
    """
    if end_time_ms <= start_time_ms:
        return 0

    sum_blocking_time = 0
    for event in top_level_events:
        sum_blocking_time += calculate_tbt_impact_for_event(event, start_time_ms, end_time_ms)
    return sum_blocking_time
