"""
Type definitions for TBT impact attribution.
"""

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterator, List, Optional, Union


NAVIGATION_MODE = 'navigation'


def _identity(value: Any) -> Any:
    # Objects other than plain values are identified by identity; cache
    # entries keep the input alive so the id is not reused while cached
    if value is None or isinstance(value, (str, int, float, bytes)):
        return value
    return f'obj:{id(value)}'


@dataclass
class TaskNode:
    """A unit of main-thread CPU work, stored in a TaskTree arena."""
    index: int
    start_time: float
    end_time: float
    duration: float
    event: Hashable
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    name: str = ''


@dataclass
class TBTImpactTask(TaskNode):
    """A TaskNode extended with its blocking-time attribution."""
    tbt_impact: float = 0.0
    self_tbt_impact: float = 0.0

    @classmethod
    def from_task(cls, task: TaskNode, tbt_impact: float, self_tbt_impact: float) -> 'TBTImpactTask':
        return cls(
            index=task.index,
            start_time=task.start_time,
            end_time=task.end_time,
            duration=task.duration,
            event=task.event,
            parent=task.parent,
            children=list(task.children),
            name=task.name,
            tbt_impact=tbt_impact,
            self_tbt_impact=self_tbt_impact,
        )


class TaskTree:
    """
    Flattened task tree.

    Tasks are owned by the tree and refer to each other by arena index,
    so parents and children never hold references to one another.

    Args:
        tasks: Tasks in flattened order; ``tasks[i].index`` must equal ``i``
    """

    def __init__(self, tasks: List[TaskNode]):
        for position, task in enumerate(tasks):
            if task.index != position:
                raise ValueError(
                    f"Task at position {position} has arena index {task.index}"
                )
        self.tasks = tasks

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[TaskNode]:
        return iter(self.tasks)

    def get_task(self, index: int) -> TaskNode:
        return self.tasks[index]

    def parent_of(self, task: TaskNode) -> Optional[TaskNode]:
        if task.parent is None:
            return None
        return self.tasks[task.parent]

    def children_of(self, task: TaskNode) -> List[TaskNode]:
        return [self.tasks[i] for i in task.children]

    def roots(self) -> List[TaskNode]:
        return [task for task in self.tasks if task.parent is None]

    def get_top_level_task(self, task: TaskNode) -> TaskNode:
        """
        Walk the parent chain up to the task that has no parent.

        Args:
            task: Any task of this tree

        Returns:
            The enclosing top-level task (the task itself for roots)
        """
        top_level_task = task
        while top_level_task.parent is not None:
            top_level_task = self.tasks[top_level_task.parent]
        return top_level_task


@dataclass(frozen=True)
class TimingWindow:
    """The interval over which blocking time is measured."""
    start_time_ms: float
    end_time_ms: float

    def __post_init__(self):
        if self.start_time_ms > self.end_time_ms:
            raise ValueError(
                f"Window start {self.start_time_ms} is after window end {self.end_time_ms}"
            )


@dataclass(frozen=True)
class SimulatedEvent:
    """A {start, end, duration} timing triple, observed or predicted."""
    start: float
    end: float
    duration: float

    @classmethod
    def from_task(cls, task: TaskNode) -> 'SimulatedEvent':
        return cls(start=task.start_time, end=task.end_time, duration=task.duration)


@dataclass(frozen=True)
class MilestoneResult:
    """
    Timing of a page-load milestone (FCP or TTI).

    Observed milestones only carry ``timing``. Simulated milestones also
    carry the optimistic and pessimistic estimates.
    """
    timing: float
    optimistic_estimate_ms: Optional[float] = None
    pessimistic_estimate_ms: Optional[float] = None

    @property
    def is_simulated(self) -> bool:
        return self.optimistic_estimate_ms is not None or self.pessimistic_estimate_ms is not None


@dataclass(frozen=True)
class SimulationNode:
    """A node of the simulation graph (``cpu``, ``network``, ...)."""
    node_id: str
    type: str
    event: Optional[Hashable] = None


@dataclass(frozen=True)
class NodeTiming:
    """Predicted timing of a simulation node."""
    start_time: float
    end_time: float
    duration: float


@dataclass(frozen=True)
class ObservedBlockingTime:
    """Blocking time measured directly on the recorded trace."""
    timing: float


@dataclass(frozen=True)
class SimulatedBlockingTime:
    """Blocking time predicted by the simulation, with per-node timings."""
    timing: float
    node_timings: Dict[SimulationNode, NodeTiming] = field(default_factory=dict, hash=False)


BlockingTimeResult = Union[ObservedBlockingTime, SimulatedBlockingTime]


@dataclass(frozen=True)
class GatherContext:
    gather_mode: str = NAVIGATION_MODE


@dataclass(frozen=True)
class MetricComputationInput:
    """
    Inputs shared by every metric collaborator, passed through unchanged.
    """
    trace: Any
    devtools_log: Any = None
    url: str = ''
    gather_context: GatherContext = field(default_factory=GatherContext)
    settings: Dict[str, Any] = field(default_factory=dict, hash=False)
    simulator: Any = None

    def fingerprint(self) -> str:
        """
        Stable cache key built from trace identity and gather settings.

        Returns:
            Hex digest identifying this computation
        """
        payload = json.dumps(
            {
                'trace': _identity(self.trace),
                'devtools_log': _identity(self.devtools_log),
                'url': self.url,
                'gather_mode': self.gather_context.gather_mode,
                'settings': self.settings,
                'simulator': _identity(self.simulator),
            },
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(payload.encode('utf-8')).hexdigest()


class AttributionConfig:
    """Configuration for TBT impact attribution."""

    def __init__(
        self,
        num_workers: int = 1,
        parallel_threshold: int = 2000,
        cache_results: bool = True
    ):
        """
        Initialize attribution configuration.

        Args:
            num_workers: Number of worker processes used to evaluate per-task
                         impacts. Default: 1 (sequential evaluation)

            parallel_threshold: Minimum number of per-task work items before a
                                process pool is used. Smaller batches are always
                                evaluated sequentially since pool startup costs
                                more than the work itself.
                                Default: 2000

            cache_results: If True, repeated requests with the same inputs
                           share a single computation.
                           Default: True
        """
        if num_workers < 1:
            raise ValueError(f"num_workers must be at least 1, got {num_workers}")
        self.num_workers = num_workers
        self.parallel_threshold = parallel_threshold
        self.cache_results = cache_results
