"""Data models for the health tracker.

Attributes are snake_case; ``to_dict``/``from_dict`` use the camelCase keys
of the persisted snapshot so stored data stays readable by older clients.
Unknown keys are ignored on load.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class Gender(Enum):
    """Biological sex used by the BMR formula."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class ActivityLevel(Enum):
    """Self-reported activity level, ordered from least to most active."""

    SEDENTARY = "Sedentary"  # Little or no exercise
    LIGHTLY_ACTIVE = "Lightly Active"  # Light exercise 1-3 days/week
    MODERATELY_ACTIVE = "Moderately Active"  # Moderate exercise 3-5 days/week
    VERY_ACTIVE = "Very Active"  # Hard exercise 6-7 days/week
    SUPER_ACTIVE = "Super Active"  # Very hard exercise & physical job


class AdviceType(Enum):
    GENERAL = "General"
    RECOVERY = "Recovery"


class AppView(Enum):
    """Screen the client was last showing."""

    AUTH = "AUTH"
    ONBOARDING = "ONBOARDING"
    DASHBOARD = "DASHBOARD"
    ANALYTICS = "ANALYTICS"
    NUTRITION = "NUTRITION"
    SETTINGS = "SETTINGS"


@dataclass
class UserProfile:
    """Biometric profile plus cached health metrics.

    ``bmi``, ``bmr`` and ``daily_calories`` are outputs of
    ``calculate_health_metrics`` and are not part of the profile's identity.
    """

    name: str
    age: int  # years
    height: float  # cm
    weight: float  # kg
    gender: Gender
    activity_level: ActivityLevel

    # Cached metrics
    bmi: float = 0.0
    bmr: float = 0.0
    daily_calories: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "age": self.age,
            "height": self.height,
            "weight": self.weight,
            "gender": self.gender.value,
            "activityLevel": self.activity_level.value,
            "bmi": self.bmi,
            "bmr": self.bmr,
            "dailyCalories": self.daily_calories,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        return cls(
            name=str(data["name"]),
            age=int(data["age"]),
            height=float(data["height"]),
            weight=float(data["weight"]),
            gender=Gender(data["gender"]),
            activity_level=ActivityLevel(data["activityLevel"]),
            bmi=float(data.get("bmi", 0.0)),
            bmr=float(data.get("bmr", 0.0)),
            daily_calories=int(data.get("dailyCalories", 0)),
        )


@dataclass
class DailyStats:
    """Counters for the current day.

    ``calories_consumed`` always equals the sum of logged meal calories;
    it is maintained by ``DailyAggregator`` only.
    """

    steps: int
    steps_goal: int
    water_intake: int  # glasses (250ml)
    water_goal: int
    calories_burned: int
    calories_consumed: int
    sleep_hours: float
    active_minutes: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "steps": self.steps,
            "stepsGoal": self.steps_goal,
            "waterIntake": self.water_intake,
            "waterGoal": self.water_goal,
            "caloriesBurned": self.calories_burned,
            "caloriesConsumed": self.calories_consumed,
            "sleepHours": self.sleep_hours,
            "activeMinutes": self.active_minutes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DailyStats":
        return cls(
            steps=int(data["steps"]),
            steps_goal=int(data["stepsGoal"]),
            water_intake=int(data["waterIntake"]),
            water_goal=int(data["waterGoal"]),
            calories_burned=int(data["caloriesBurned"]),
            calories_consumed=int(data["caloriesConsumed"]),
            sleep_hours=float(data["sleepHours"]),
            active_minutes=int(data["activeMinutes"]),
        )


@dataclass
class Meal:
    """A logged meal. ``time`` is fixed when the meal is created."""

    id: str
    name: str
    calories: int
    protein: int  # grams
    time: str  # e.g. "08:00 AM"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "calories": self.calories,
            "protein": self.protein,
            "time": self.time,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Meal":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            calories=int(data["calories"]),
            protein=int(data.get("protein", 0)),
            time=data.get("time", ""),
        )


@dataclass
class Task:
    """Daily task with an XP reward. Only ``completed`` ever changes."""

    id: str
    text: str
    completed: bool
    xp: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "xp": self.xp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        return cls(
            id=str(data["id"]),
            text=data["text"],
            completed=bool(data.get("completed", False)),
            xp=int(data.get("xp", 0)),
        )


@dataclass
class AIAdvice:
    """Coaching text returned by the language model."""

    nutrition: List[str]
    workout: List[str]
    motivation: str
    type: AdviceType = AdviceType.GENERAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nutrition": list(self.nutrition),
            "workout": list(self.workout),
            "motivation": self.motivation,
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AIAdvice":
        return cls(
            nutrition=list(data["nutrition"]),
            workout=list(data["workout"]),
            motivation=data["motivation"],
            type=AdviceType(data["type"]),
        )


@dataclass
class ChatMessage:
    """One entry of the chat transcript."""

    sender: str  # "user" or "bot"
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"sender": self.sender, "text": self.text}


@dataclass
class AppData:
    """Everything that is persisted between sessions."""

    user_profile: UserProfile
    daily_stats: DailyStats
    meals: List[Meal] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)
    view: AppView = AppView.AUTH
    is_logged_in: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userProfile": self.user_profile.to_dict(),
            "dailyStats": self.daily_stats.to_dict(),
            "meals": [meal.to_dict() for meal in self.meals],
            "tasks": [task.to_dict() for task in self.tasks],
            "view": self.view.value,
            "isLoggedIn": self.is_logged_in,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppData":
        return cls(
            user_profile=UserProfile.from_dict(data["userProfile"]),
            daily_stats=DailyStats.from_dict(data["dailyStats"]),
            meals=[Meal.from_dict(m) for m in data.get("meals", [])],
            tasks=[Task.from_dict(t) for t in data.get("tasks", [])],
            view=AppView(data.get("view", AppView.AUTH.value)),
            is_logged_in=bool(data.get("isLoggedIn", False)),
        )
