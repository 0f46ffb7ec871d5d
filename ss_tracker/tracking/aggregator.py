"""Daily aggregator: meal log, calorie totals and activity counters."""
import re
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Union

from ss_tracker.data_layer.exceptions import MealValidationError
from ss_tracker.data_layer.models import DailyStats, Meal

# Counters that may be adjusted directly. calories_consumed is derived.
ADJUSTABLE_COUNTERS = (
    "steps",
    "water_intake",
    "calories_burned",
    "active_minutes",
    "sleep_hours",
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

MEAL_TIME_FORMAT = "%I:%M %p"


def parse_leading_int(value: Union[str, int, float, None]) -> Optional[int]:
    """Parse an integer from the start of ``value``.

    ``"350"`` and ``" 350 kcal"`` give 350; ``"abc"``, ``""`` and ``None``
    give None. Floats are truncated.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


@dataclass(frozen=True)
class CalorieBalance:
    """Consumed calories against the daily target."""

    target: int
    consumed: int
    remaining: int
    percent: float  # progress bar fill, capped at 100
    over_target: bool


class DailyAggregator:
    """Owns the day's meal log and counters.

    ``calories_consumed`` is recomputed from the meal log after every
    meal mutation and on construction.
    """

    def __init__(
        self,
        stats: DailyStats,
        meals: Optional[Sequence[Meal]] = None,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ):
        """Initialize aggregator.

        Args:
            stats: Starting counters (calories_consumed is overwritten)
            meals: Already-logged meals
            clock: Source of meal timestamps
            id_factory: Source of meal ids
        """
        self._stats = replace(stats)
        self._meals: List[Meal] = [replace(m) for m in (meals or [])]
        self._clock = clock
        self._id_factory = id_factory
        self._recalculate_calories()

    @property
    def stats(self) -> DailyStats:
        return replace(self._stats)

    @property
    def meals(self) -> List[Meal]:
        return [replace(m) for m in self._meals]

    def add_meal(
        self,
        name: str,
        calories: Union[str, int],
        protein: Union[str, int, None] = None,
    ) -> Meal:
        """Log a meal.

        Args:
            name: Meal name (must be non-blank)
            calories: Calories as entered (string or number)
            protein: Protein grams as entered; unparsable or missing means 0

        Returns:
            The created Meal

        Raises:
            MealValidationError: If name is blank or calories are missing,
                unparsable or negative. Nothing is logged in that case.
        """
        name = (name or "").strip()
        if not name:
            raise MealValidationError("name", name, "name is required")

        parsed_calories = parse_leading_int(calories)
        if parsed_calories is None:
            raise MealValidationError("calories", calories, "not a number")
        if parsed_calories < 0:
            raise MealValidationError("calories", calories, "must not be negative")

        parsed_protein = parse_leading_int(protein) or 0
        if parsed_protein < 0:
            raise MealValidationError("protein", protein, "must not be negative")

        meal = Meal(
            id=self._id_factory(),
            name=name,
            calories=parsed_calories,
            protein=parsed_protein,
            time=self._clock().strftime(MEAL_TIME_FORMAT),
        )
        self._meals.append(meal)
        self._recalculate_calories()
        return replace(meal)

    def delete_meal(self, meal_id: str) -> bool:
        """Remove a meal by id.

        Returns:
            True if a meal was removed
        """
        remaining = [m for m in self._meals if m.id != meal_id]
        removed = len(remaining) != len(self._meals)
        self._meals = remaining
        self._recalculate_calories()
        return removed

    def add_water(self, glasses: int = 1) -> int:
        return self.adjust("water_intake", glasses)

    def remove_water(self, glasses: int = 1) -> int:
        return self.adjust("water_intake", -glasses)

    def record_activity(
        self, steps: int = 0, calories_burned: int = 0, active_minutes: int = 0
    ) -> DailyStats:
        """Add activity deltas, e.g. from a device sync."""
        self.adjust("steps", steps)
        self.adjust("calories_burned", calories_burned)
        self.adjust("active_minutes", active_minutes)
        return self.stats

    def adjust(self, counter: str, delta: Union[int, float]):
        """Apply a delta to one counter, clamped at zero.

        Args:
            counter: One of ADJUSTABLE_COUNTERS
            delta: Amount to add (negative to subtract)

        Returns:
            New counter value

        Raises:
            ValueError: If counter is not adjustable
        """
        if counter not in ADJUSTABLE_COUNTERS:
            raise ValueError(f"Counter '{counter}' cannot be adjusted directly")
        value = max(0, getattr(self._stats, counter) + delta)
        setattr(self._stats, counter, value)
        return value

    def total_protein(self) -> int:
        return sum(meal.protein for meal in self._meals)

    def calorie_balance(self, target: int) -> CalorieBalance:
        """Compare consumed calories with the daily target.

        Args:
            target: Daily calorie target (from the profile)
        """
        consumed = self._stats.calories_consumed
        if target > 0:
            percent = min(consumed / target * 100, 100.0)
        else:
            percent = 100.0 if consumed > 0 else 0.0
        return CalorieBalance(
            target=target,
            consumed=consumed,
            remaining=target - consumed,
            percent=percent,
            over_target=consumed > target,
        )

    def _recalculate_calories(self) -> None:
        self._stats.calories_consumed = sum(meal.calories for meal in self._meals)
