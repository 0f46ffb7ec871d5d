"""Tests for the task/XP ledger."""
import pytest

from ss_tracker.data_layer.exceptions import TaskNotFoundError
from ss_tracker.data_layer.models import Task
from ss_tracker.tracking.task_ledger import TaskLedger


@pytest.fixture
def ledger():
    return TaskLedger(
        [
            Task(id="1", text="Drink 500ml Water", completed=False, xp=50),
            Task(id="2", text="Walk 2000 steps", completed=False, xp=100),
            Task(id="3", text="Stretching 5 min", completed=True, xp=50),
        ]
    )


class TestTaskLedger:
    """Tests for TaskLedger."""

    def test_toggle_flips_one_task(self, ledger):
        task = ledger.toggle("1")

        assert task.completed is True
        assert [t.completed for t in ledger.tasks] == [True, False, True]

    def test_toggle_is_its_own_inverse(self, ledger):
        """Test toggling twice restores the original state."""
        before = ledger.tasks
        ledger.toggle("2")
        ledger.toggle("2")
        assert ledger.tasks == before

    def test_toggle_unknown_id(self, ledger):
        """Test unknown ids raise and leave every task alone."""
        before = ledger.tasks
        with pytest.raises(TaskNotFoundError) as exc_info:
            ledger.toggle("99")

        assert exc_info.value.task_id == "99"
        assert ledger.tasks == before

    def test_total_xp(self, ledger):
        """Test XP sums over completed tasks only."""
        assert ledger.total_xp() == 50
        ledger.toggle("2")
        assert ledger.total_xp() == 150
        ledger.toggle("3")
        assert ledger.total_xp() == 100

    def test_completed_count(self, ledger):
        assert ledger.completed_count() == 1

    def test_text_and_xp_unchanged_by_toggle(self, ledger):
        task = ledger.toggle("2")
        assert (task.text, task.xp) == ("Walk 2000 steps", 100)

    def test_tasks_are_copies(self, ledger):
        ledger.tasks[0].completed = True
        assert ledger.tasks[0].completed is False

    def test_constructor_copies_input(self):
        """Test the ledger doesn't share Task objects with its caller."""
        tasks = [Task(id="1", text="Walk", completed=False, xp=10)]
        ledger = TaskLedger(tasks)
        ledger.toggle("1")
        assert tasks[0].completed is False
