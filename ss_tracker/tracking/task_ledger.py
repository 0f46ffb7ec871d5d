"""Daily task ledger with XP rewards."""
from dataclasses import replace
from typing import List, Sequence

from ss_tracker.data_layer.exceptions import TaskNotFoundError
from ss_tracker.data_layer.models import Task


class TaskLedger:
    """Completion state for a fixed set of daily tasks."""

    def __init__(self, tasks: Sequence[Task]):
        self._tasks: List[Task] = [replace(t) for t in tasks]

    @property
    def tasks(self) -> List[Task]:
        return [replace(t) for t in self._tasks]

    def toggle(self, task_id: str) -> Task:
        """Flip the completed flag of one task.

        Args:
            task_id: Task id

        Returns:
            Copy of the updated task

        Raises:
            TaskNotFoundError: If no task has this id
        """
        for task in self._tasks:
            if task.id == task_id:
                task.completed = not task.completed
                return replace(task)
        raise TaskNotFoundError(task_id)

    def total_xp(self) -> int:
        """XP earned from completed tasks."""
        return sum(task.xp for task in self._tasks if task.completed)

    def completed_count(self) -> int:
        return sum(1 for task in self._tasks if task.completed)
