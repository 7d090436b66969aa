"""
Pytest configuration and shared fixtures for TBT attribution tests.
"""
import json
import pytest

from tbt_attribution.core.types import TaskNode, TaskTree


def make_tree(specs):
    """
    Build a TaskTree from (start, end, parent_index) tuples.

    Tasks get events 'e0', 'e1', ... and names 'task0', 'task1', ...
    """
    tasks = []
    for index, (start, end, parent) in enumerate(specs):
        tasks.append(TaskNode(
            index=index,
            start_time=start,
            end_time=end,
            duration=end - start,
            event=f"e{index}",
            parent=parent,
            name=f"task{index}",
        ))
    for task in tasks:
        if task.parent is not None:
            tasks[task.parent].children.append(task.index)
    return TaskTree(tasks)


@pytest.fixture
def build_tree():
    """Factory building task trees from (start, end, parent_index) tuples."""
    return make_tree


@pytest.fixture
def nested_tree():
    """Root [0, 1000] with a child [200, 400] and a grandchild [250, 350]."""
    return make_tree([
        (0, 1000, None),
        (200, 400, 0),
        (250, 350, 1),
    ])


@pytest.fixture
def task_records():
    """Flat task records as found in an artifact file."""
    return [
        {"id": 1, "parentId": None, "startTime": 0, "endTime": 1000, "event": "ev-root", "name": "RunTask"},
        {"id": 2, "parentId": 1, "startTime": 200, "endTime": 400, "event": "ev-child", "name": "EvaluateScript"},
        {"id": 3, "parentId": 2, "startTime": 250, "endTime": 350, "name": "FunctionCall"},
        {"id": 4, "parentId": None, "startTime": 1500, "endTime": 1520, "duration": 20, "event": "ev-short", "name": "RunTask"},
    ]


@pytest.fixture
def observed_artifact(task_records):
    """Artifact of a navigation measured on the recorded trace."""
    return {
        "url": "https://example.com/",
        "gatherMode": "navigation",
        "traceEnd": 5000,
        "tasks": task_records,
        "firstContentfulPaint": {"timing": 100},
        "interactive": {"timing": 3000},
        "totalBlockingTime": {"timing": 950},
    }


@pytest.fixture
def simulated_artifact(task_records):
    """Artifact of a navigation scored against a simulated timeline."""
    return {
        "url": "https://example.com/",
        "gatherMode": "navigation",
        "traceEnd": 5000,
        "tasks": task_records,
        "firstContentfulPaint": {
            "timing": 300,
            "optimisticEstimate": {"timeInMs": 0},
            "pessimisticEstimate": {"timeInMs": 400},
        },
        "interactive": {
            "timing": 4000,
            "optimisticEstimate": {"timeInMs": 3500},
            "pessimisticEstimate": {"timeInMs": 6000},
        },
        "totalBlockingTime": {
            "timing": 1900,
            "optimisticEstimate": {"nodeTimings": []},
            "pessimisticEstimate": {
                "nodeTimings": [
                    {
                        "node": {"id": "1", "type": "cpu", "event": "ev-root"},
                        "startTime": 0, "endTime": 2000, "duration": 2000,
                    },
                    {
                        "node": {"id": "2", "type": "network", "event": "ev-short"},
                        "startTime": 0, "endTime": 3000, "duration": 3000,
                    },
                    {
                        "node": {"id": "3", "type": "cpu", "event": "ev-unknown"},
                        "startTime": 100, "endTime": 900, "duration": 800,
                    },
                ]
            },
        },
    }


@pytest.fixture
def write_artifact(tmp_path):
    """Write an artifact dictionary to a temporary JSON file and return its path."""
    def _write(data, name="artifact.json"):
        file_path = tmp_path / name
        with open(file_path, "w") as f:
            json.dump(data, f)
        return str(file_path)

    return _write
