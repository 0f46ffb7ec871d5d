"""Application coordinator: the single owner of tracker state.

Every mutation goes through a command method here. Commands are meant to
be called from one asyncio event loop; the only suspending commands are
the advice fetch, the chat send and the simulated device sync.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Any, List, Optional

from ss_tracker.advisor.gemini_client import CHAT_FAILURE_RESPONSE, fallback_advice
from ss_tracker.data_layer.app_store import AppDataStore
from ss_tracker.data_layer.defaults import default_app_data
from ss_tracker.data_layer.exceptions import ProfileValidationError
from ss_tracker.data_layer.models import (
    ActivityLevel,
    AIAdvice,
    AppData,
    AppView,
    ChatMessage,
    DailyStats,
    Gender,
    Meal,
    Task,
    UserProfile,
)
from ss_tracker.metrics.calculator import calculate_health_metrics
from ss_tracker.metrics.classifier import BMICategoryInfo, bmi_gauge_position, classify_bmi
from ss_tracker.tracking.aggregator import CalorieBalance, DailyAggregator
from ss_tracker.tracking.task_ledger import TaskLedger

logger = logging.getLogger(__name__)

PROFILE_INPUT_FIELDS = ("name", "age", "height", "weight", "gender", "activity_level")

# Deltas applied by the simulated watch sync
DEVICE_SYNC_STEPS = 2300
DEVICE_SYNC_CALORIES = 150
DEVICE_SYNC_ACTIVE_MINUTES = 25


@dataclass
class DashboardSummary:
    """Read model for the dashboard screens."""

    profile: UserProfile
    bmi_info: BMICategoryInfo
    bmi_gauge: float
    stats: DailyStats
    calorie_balance: CalorieBalance
    meals: List[Meal]
    tasks: List[Task]
    total_xp: int
    total_protein: int
    advice: Optional[AIAdvice]
    is_watch_connected: bool
    is_loading_advice: bool = False
    is_syncing: bool = False


class AppCoordinator:
    """Owns the profile, daily log, tasks, advice and chat transcript.

    Usage:
        coordinator = AppCoordinator(AppDataStore(), HealthAdvisor.from_env())
        coordinator.login("me@example.com", "secret")
        advice = await coordinator.submit_profile(weight=72)
        coordinator.add_meal("Banana", "105", "1")
    """

    # Transcript entries kept, and the most recent of them sent to the model
    chat_history_limit = 100
    chat_context_limit = 20

    def __init__(
        self,
        store: AppDataStore,
        advisor: Any = None,
        device_sync_delay: float = 2.0,
    ):
        """Initialize coordinator from the persisted snapshot.

        Args:
            store: Snapshot store
            advisor: HealthAdvisor (None means always use fallbacks)
            device_sync_delay: Seconds the simulated watch sync takes
        """
        self.store = store
        self.advisor = advisor
        self.device_sync_delay = device_sync_delay

        self.advice: Optional[AIAdvice] = None
        self.chat_history: List[ChatMessage] = []
        self.is_loading_advice = False
        self.is_syncing = False
        self.is_watch_connected = False

        self._advice_request: Optional[asyncio.Future] = None
        self._sync_request: Optional[asyncio.Future] = None
        self._chat_lock = asyncio.Lock()

        self._apply_snapshot(store.load())

    # --- State ---

    def _apply_snapshot(self, data: AppData) -> None:
        self.profile = data.user_profile
        self.view = data.view
        self.is_logged_in = data.is_logged_in
        self.aggregator = DailyAggregator(data.daily_stats, data.meals)
        self.ledger = TaskLedger(data.tasks)

    def snapshot(self) -> AppData:
        return AppData(
            user_profile=replace(self.profile),
            daily_stats=self.aggregator.stats,
            meals=self.aggregator.meals,
            tasks=self.ledger.tasks,
            view=self.view,
            is_logged_in=self.is_logged_in,
        )

    def dashboard(self) -> DashboardSummary:
        return DashboardSummary(
            profile=replace(self.profile),
            bmi_info=classify_bmi(self.profile.bmi),
            bmi_gauge=bmi_gauge_position(self.profile.bmi),
            stats=self.aggregator.stats,
            calorie_balance=self.aggregator.calorie_balance(self.profile.daily_calories),
            meals=self.aggregator.meals,
            tasks=self.ledger.tasks,
            total_xp=self.ledger.total_xp(),
            total_protein=self.aggregator.total_protein(),
            advice=self.advice,
            is_watch_connected=self.is_watch_connected,
            is_loading_advice=self.is_loading_advice,
            is_syncing=self.is_syncing,
        )

    def _persist(self) -> None:
        self.store.save(self.snapshot())

    # --- Session ---

    def login(self, email: str, password: str) -> bool:
        """Pass the login gate. Any non-empty credentials are accepted."""
        if not (email and password):
            return False
        self.is_logged_in = True
        self.view = AppView.ONBOARDING
        self._persist()
        return True

    def logout(self) -> None:
        self.is_logged_in = False
        self.view = AppView.AUTH
        self._persist()

    def set_view(self, view: AppView) -> None:
        self.view = view
        self._persist()

    def reset(self) -> None:
        """Clear persisted data and return to the default snapshot."""
        self.store.clear()
        self._apply_snapshot(default_app_data())
        self.advice = None
        self.chat_history = []
        self.is_watch_connected = False
        logger.info("Tracker data cleared")

    # --- Profile ---

    def update_profile(self, **changes: Any) -> UserProfile:
        """Apply profile edits and recompute metrics.

        Args:
            **changes: Any of PROFILE_INPUT_FIELDS; gender and activity_level
                may be given as enum members or their string values

        Returns:
            Updated profile

        Raises:
            ValueError: For unknown fields or enum values
            ProfileValidationError: If height or weight is not positive
        """
        unknown = set(changes) - set(PROFILE_INPUT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown profile fields: {sorted(unknown)}")
        if "gender" in changes:
            changes["gender"] = Gender(changes["gender"])
        if "activity_level" in changes:
            changes["activity_level"] = ActivityLevel(changes["activity_level"])

        candidate = replace(self.profile, **changes)
        for field_name in ("height", "weight"):
            value = getattr(candidate, field_name)
            if not value > 0:
                raise ProfileValidationError(field_name, value)

        self.profile = calculate_health_metrics(candidate)
        self._persist()
        return replace(self.profile)

    async def submit_profile(self, **changes: Any) -> AIAdvice:
        """Recompute metrics, fetch coaching advice and open the dashboard.

        Phase one (metrics + loading flag) happens immediately; phase two
        applies the advice when the collaborator answers. A call made while
        a request is in flight waits for that request instead of starting
        a second one.
        """
        if self._advice_request is not None and not self._advice_request.done():
            return await asyncio.shield(self._advice_request)

        profile = self.update_profile(**changes)
        self.is_loading_advice = True
        self._advice_request = asyncio.ensure_future(self._run_advice_request(profile))
        return await asyncio.shield(self._advice_request)

    async def _run_advice_request(self, profile: UserProfile) -> AIAdvice:
        try:
            if self.advisor is None:
                logger.warning("No advisor configured, using fallback advice")
                advice = fallback_advice()
            else:
                advice = await self.advisor.get_health_insights(profile)
            self.advice = advice
            self.view = AppView.DASHBOARD
            self._persist()
            return advice
        finally:
            self.is_loading_advice = False

    # --- Meals & counters ---

    def add_meal(self, name: str, calories, protein=None) -> Meal:
        """Log a meal; raises MealValidationError without changing state."""
        meal = self.aggregator.add_meal(name, calories, protein)
        self._persist()
        return meal

    def delete_meal(self, meal_id: str) -> bool:
        removed = self.aggregator.delete_meal(meal_id)
        if removed:
            self._persist()
        return removed

    def add_water(self, glasses: int = 1) -> int:
        value = self.aggregator.add_water(glasses)
        self._persist()
        return value

    def remove_water(self, glasses: int = 1) -> int:
        value = self.aggregator.remove_water(glasses)
        self._persist()
        return value

    # --- Tasks ---

    def toggle_task(self, task_id: str) -> Task:
        """Toggle a task; raises TaskNotFoundError for unknown ids."""
        task = self.ledger.toggle(task_id)
        self._persist()
        return task

    # --- Device sync ---

    async def connect_device(self) -> DailyStats:
        """Simulate pairing a watch: wait, then add one batch of activity."""
        if self._sync_request is not None and not self._sync_request.done():
            return await asyncio.shield(self._sync_request)

        self.is_syncing = True
        self._sync_request = asyncio.ensure_future(self._run_device_sync())
        return await asyncio.shield(self._sync_request)

    async def _run_device_sync(self) -> DailyStats:
        try:
            await asyncio.sleep(self.device_sync_delay)
            self.is_watch_connected = True
            stats = self.aggregator.record_activity(
                steps=DEVICE_SYNC_STEPS,
                calories_burned=DEVICE_SYNC_CALORIES,
                active_minutes=DEVICE_SYNC_ACTIVE_MINUTES,
            )
            self._persist()
            return stats
        finally:
            self.is_syncing = False

    # --- Chat ---

    async def send_chat_message(self, text: str) -> Optional[str]:
        """Send a chat message and record both sides of the exchange.

        Returns:
            Bot reply, or None for a blank message
        """
        if not text or not text.strip():
            return None

        async with self._chat_lock:
            self.chat_history.append(ChatMessage(sender="user", text=text))
            history = [message.text for message in self.chat_history[-self.chat_context_limit:]]
            if self.advisor is None:
                reply = CHAT_FAILURE_RESPONSE
            else:
                reply = await self.advisor.get_chat_response(text, history)
            self.chat_history.append(ChatMessage(sender="bot", text=reply))
            del self.chat_history[:-self.chat_history_limit]
            return reply
