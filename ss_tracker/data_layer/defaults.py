"""Default snapshot used for first launch and for recovering from bad storage."""
from typing import Any, Dict

from ss_tracker.data_layer.models import AppData

DEFAULT_DATA: Dict[str, Any] = {
    "userProfile": {
        "name": "Guest User",
        "age": 25,
        "height": 175,
        "weight": 70,
        "gender": "Male",
        "activityLevel": "Moderately Active",
        "bmi": 22.9,
        "bmr": 1600,
        "dailyCalories": 2200,
    },
    "dailyStats": {
        "steps": 6500,
        "stepsGoal": 10000,
        "waterIntake": 4,
        "waterGoal": 8,
        "caloriesBurned": 450,
        "caloriesConsumed": 0,
        "sleepHours": 7.2,
        "activeMinutes": 45,
    },
    "meals": [
        {"id": "1", "name": "Oatmeal & Berries", "calories": 350, "protein": 12, "time": "08:00 AM"},
        {"id": "2", "name": "Grilled Chicken Salad", "calories": 450, "protein": 40, "time": "12:30 PM"},
    ],
    "tasks": [
        {"id": "1", "text": "Drink 500ml Water", "completed": False, "xp": 50},
        {"id": "2", "text": "Walk 2000 steps", "completed": False, "xp": 100},
        {"id": "3", "text": "Stretching 5 min", "completed": False, "xp": 50},
        {"id": "4", "text": "No sugar for 6 hours", "completed": False, "xp": 75},
    ],
    "view": "AUTH",
    "isLoggedIn": False,
}


def default_app_data() -> AppData:
    """Return a fresh copy of the default snapshot."""
    return AppData.from_dict(DEFAULT_DATA)
