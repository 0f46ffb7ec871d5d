"""Formatters for dashboard output (JSON and Markdown)."""

import json
from typing import Any, Dict

from ss_tracker.coordinator import DashboardSummary
from ss_tracker.data_layer.models import AIAdvice, Meal, Task
from ss_tracker.metrics.calculator import format_bmi

# The advice card only has room for two workout items
FOCUS_WORKOUT_ITEMS = 2


def format_meal_string(meal: Meal) -> str:
    """Format a meal as a single line (e.g. "Oatmeal (08:00 AM) - 350 kcal, 12g protein")."""
    return f"{meal.name} ({meal.time}) - {meal.calories} kcal, {meal.protein}g protein"


def format_task_string(task: Task) -> str:
    box = "x" if task.completed else " "
    return f"[{box}] {task.text} (+{task.xp} XP)"


def format_advice_markdown(advice: AIAdvice) -> str:
    """Format the coaching card: motivation plus today's focus."""
    lines = [f'> "{advice.motivation}"', "", "**Today's Focus:**"]
    for item in advice.workout[:FOCUS_WORKOUT_ITEMS]:
        lines.append(f"- {item}")
    return "\n".join(lines)


def format_dashboard_markdown(summary: DashboardSummary) -> str:
    """Format a DashboardSummary as Markdown.

    Args:
        summary: Summary from ``AppCoordinator.dashboard()``

    Returns:
        Formatted Markdown string
    """
    profile = summary.profile
    stats = summary.stats
    balance = summary.calorie_balance
    lines = []

    lines.append(f"# {profile.name}'s Dashboard\n")

    # Body metrics
    lines.append("## Body Metrics")
    lines.append(f"**BMI:** {format_bmi(profile.bmi)} ({summary.bmi_info.category})")
    lines.append(f"**BMR:** {profile.bmr:.0f} kcal")
    lines.append(f"**Daily Calories:** {profile.daily_calories} kcal")
    lines.append("")
    lines.append("### Recommended Action Plan")
    lines.append(summary.bmi_info.advice)
    lines.append("")

    # Activity
    lines.append("## Today")
    lines.append(f"**Steps:** {stats.steps:,} / {stats.steps_goal:,}")
    lines.append(f"**Water:** {stats.water_intake} / {stats.water_goal} glasses")
    lines.append(f"**Calories Burned:** {stats.calories_burned}")
    lines.append(f"**Active Minutes:** {stats.active_minutes}")
    lines.append(f"**Sleep:** {stats.sleep_hours}h")
    lines.append("")

    # Nutrition
    lines.append("## Nutrition")
    if summary.meals:
        for meal in summary.meals:
            lines.append(f"- {format_meal_string(meal)}")
    else:
        lines.append("No meals logged today.")
    lines.append("")
    lines.append(f"**Consumed:** {balance.consumed} / {balance.target} kcal ({balance.percent:.0f}%)")
    lines.append(f"**Protein:** {summary.total_protein}g")
    if balance.over_target:
        lines.append(f"⚠️ Over target by {-balance.remaining} kcal")
    lines.append("")

    # Tasks
    lines.append("## Daily Quests")
    for task in summary.tasks:
        lines.append(f"- {format_task_string(task)}")
    lines.append(f"**XP Earned:** {summary.total_xp}")
    lines.append("")

    if summary.advice is not None:
        lines.append("## AI Coach")
        lines.append(format_advice_markdown(summary.advice))
        lines.append("")

    return "\n".join(lines)


def format_dashboard_json(summary: DashboardSummary) -> Dict[str, Any]:
    """Format a DashboardSummary as a JSON-ready dict (for API usage)."""
    balance = summary.calorie_balance
    return {
        "profile": summary.profile.to_dict(),
        "bmi": {
            "value": summary.profile.bmi,
            "display": format_bmi(summary.profile.bmi),
            "category": summary.bmi_info.category,
            "color": summary.bmi_info.color,
            "bgColor": summary.bmi_info.bg_color,
            "advice": summary.bmi_info.advice,
            "gaugePosition": summary.bmi_gauge,
        },
        "dailyStats": summary.stats.to_dict(),
        "calorieBalance": {
            "target": balance.target,
            "consumed": balance.consumed,
            "remaining": balance.remaining,
            "percent": balance.percent,
            "overTarget": balance.over_target,
        },
        "meals": [meal.to_dict() for meal in summary.meals],
        "totalProtein": summary.total_protein,
        "tasks": [task.to_dict() for task in summary.tasks],
        "totalXp": summary.total_xp,
        "advice": summary.advice.to_dict() if summary.advice is not None else None,
        "isWatchConnected": summary.is_watch_connected,
        "isLoadingAdvice": summary.is_loading_advice,
        "isSyncing": summary.is_syncing,
    }


def format_dashboard_json_string(summary: DashboardSummary, indent: int = 2) -> str:
    return json.dumps(format_dashboard_json(summary), indent=indent)
