"""
Impact aggregator for task trees.
"""

import logging
from typing import Dict, List

from ..core.types import TaskTree, TBTImpactTask

logger = logging.getLogger(__name__)

# Float noise tolerated before a negative self impact is reported
NEGATIVE_IMPACT_TOLERANCE_MS = 1e-6


class ImpactAggregator:
    """Turns per-task impacts into total and self impacts."""

    @staticmethod
    def create_impact_tasks(tree: TaskTree, task_impacts: Dict[int, float]) -> List[TBTImpactTask]:
        """
        Build the impact tasks for the whole tree.

        Tasks without an impact count as zero. The self impact of a task is
        its impact minus the impact of its direct children.

        Args:
            tree: Task tree
            task_impacts: Dictionary mapping task index -> tbt_impact

        Returns:
            List of TBTImpactTask in tree order
        """
        impact_tasks: List[TBTImpactTask] = []

        for task in tree:
            tbt_impact = task_impacts.get(task.index, 0)
            self_tbt_impact = tbt_impact

            for child in tree.children_of(task):
                self_tbt_impact -= task_impacts.get(child.index, 0)

            if self_tbt_impact < -NEGATIVE_IMPACT_TOLERANCE_MS:
                logger.warning(
                    "Task %s (%s) has negative self TBT impact %.3fms; children outweigh their parent",
                    task.index, task.name or task.event, self_tbt_impact
                )

            impact_tasks.append(TBTImpactTask.from_task(task, tbt_impact, self_tbt_impact))

        return impact_tasks
