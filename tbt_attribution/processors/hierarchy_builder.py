"""
Hierarchy builder for main-thread tasks.
"""

from typing import Any, Dict, List

from ..core.providers import ArtifactFormatError, event_identity, parse_number
from ..core.types import TaskNode, TaskTree


class HierarchyBuilder:
    """Builds a task tree arena from a flat list of task records."""

    def build_task_tree(self, records: List[Dict[str, Any]]) -> TaskTree:
        """
        Build the task arena from flat records, linking children to parents
        by record id.

        Records keep their input order, which becomes the flattened task
        order. A record whose parent id is unknown becomes a root.

        Args:
            records: List of task dictionaries with 'id', 'parentId',
                     'startTime', 'endTime' and optional 'duration',
                     'event' and 'name'

        Returns:
            TaskTree holding one TaskNode per record
        """
        if not isinstance(records, list):
            raise ArtifactFormatError(f"Task records must be a list, got {type(records).__name__}")

        tasks: List[TaskNode] = []
        index_by_id: Dict[Any, int] = {}

        # First pass: create nodes and index them by record id
        for record in records:
            if not isinstance(record, dict):
                raise ArtifactFormatError(f"Task record must be an object: {record!r}")
            record_id = record.get('id')
            if record_id is None:
                raise ArtifactFormatError(f"Task record has no 'id': {record!r}")
            if not isinstance(record_id, (str, int, float)):
                raise ArtifactFormatError(f"Task id must be a string or number: {record_id!r}")
            if record_id in index_by_id:
                raise ArtifactFormatError(f"Duplicate task id: {record_id!r}")
            try:
                start_time = parse_number(record['startTime'], f'task {record_id!r} startTime')
                end_time = parse_number(record['endTime'], f'task {record_id!r} endTime')
            except KeyError as e:
                raise ArtifactFormatError(f"Task {record_id!r} is missing {e.args[0]!r}") from e

            duration = record.get('duration')
            if duration is not None:
                duration = parse_number(duration, f'task {record_id!r} duration')
            else:
                duration = end_time - start_time
            raw_event = record.get('event', record_id)

            index = len(tasks)
            index_by_id[record_id] = index
            tasks.append(TaskNode(
                index=index,
                start_time=start_time,
                end_time=end_time,
                duration=duration,
                event=event_identity(raw_event),
                name=str(record.get('name', '')),
            ))

        # Second pass: link children in record order
        for record, task in zip(records, tasks):
            parent_id = record.get('parentId')
            if not isinstance(parent_id, (str, int, float)) or parent_id not in index_by_id:
                continue
            parent_index = index_by_id[parent_id]
            if parent_index == task.index:
                raise ArtifactFormatError(f"Task {record['id']!r} is its own parent")
            task.parent = parent_index
            tasks[parent_index].children.append(task.index)

        tree = TaskTree(tasks)
        self._check_acyclic(tree)
        return tree

    @staticmethod
    def _check_acyclic(tree: TaskTree) -> None:
        for task in tree:
            seen = set()
            current = task
            while current.parent is not None:
                if current.index in seen:
                    raise ArtifactFormatError(f"Task {task.index} has a cyclic parent chain")
                seen.add(current.index)
                current = tree.get_task(current.parent)
