"""Daily tracking: meals, counters and tasks."""

from ss_tracker.tracking.aggregator import CalorieBalance, DailyAggregator
from ss_tracker.tracking.task_ledger import TaskLedger

__all__ = [
    "CalorieBalance",
    "DailyAggregator",
    "TaskLedger",
]
