"""Custom exceptions for the health tracker."""


class MealValidationError(ValueError):
    """Raised when a meal cannot be logged from the given input."""

    def __init__(self, field_name: str, value, reason: str):
        """Initialize exception with the rejected field.

        Args:
            field_name: Name of the offending field ("name", "calories", "protein")
            value: Raw value that was rejected
            reason: Human-readable reason
        """
        self.field_name = field_name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid meal {field_name} {value!r}: {reason}")


class TaskNotFoundError(KeyError):
    """Raised when a task id is not part of the daily task set."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task '{task_id}' not found")

    def __str__(self) -> str:
        return self.args[0]


class ProfileValidationError(ValueError):
    """Raised when a profile would violate the metrics preconditions."""

    def __init__(self, field_name: str, value):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Profile {field_name} must be greater than 0, got {value!r}")
