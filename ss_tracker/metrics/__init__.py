"""Health metrics derivation and BMI classification."""

from ss_tracker.metrics.calculator import (
    ACTIVITY_MULTIPLIERS,
    calculate_bmi,
    calculate_bmr,
    calculate_daily_calories,
    calculate_health_metrics,
    format_bmi,
)
from ss_tracker.metrics.classifier import (
    BMICategoryInfo,
    bmi_gauge_position,
    classify_bmi,
)

__all__ = [
    "ACTIVITY_MULTIPLIERS",
    "calculate_bmi",
    "calculate_bmr",
    "calculate_daily_calories",
    "calculate_health_metrics",
    "format_bmi",
    "BMICategoryInfo",
    "bmi_gauge_position",
    "classify_bmi",
]
