"""BMI category classification with static advice."""
from dataclasses import dataclass

UNDERWEIGHT_MAX = 18.5
HEALTHY_MAX = 24.9
OVERWEIGHT_MIN = 25
OVERWEIGHT_MAX = 29.9

# Gauge scale shown on the dashboard
GAUGE_MIN_BMI = 15
GAUGE_SPAN_BMI = 25


@dataclass(frozen=True)
class BMICategoryInfo:
    """A BMI band with its display style and advice."""

    category: str
    color: str  # text style tag
    bg_color: str  # badge style tag
    advice: str


UNDERWEIGHT = BMICategoryInfo(
    category="Underweight",
    color="text-yellow-400",
    bg_color="bg-yellow-400",
    advice=(
        "Prioritize calorie-dense, nutritious foods like nuts, avocados, and whole grains. "
        "Incorporate strength training to build muscle mass."
    ),
)

HEALTHY = BMICategoryInfo(
    category="Healthy",
    color="text-green-400",
    bg_color="bg-green-500",
    advice=(
        "Excellent work! Maintain your current balanced diet and stay consistent "
        "with your mix of cardio and resistance workouts."
    ),
)

OVERWEIGHT = BMICategoryInfo(
    category="Overweight",
    color="text-orange-400",
    bg_color="bg-orange-400",
    advice=(
        "Aim for a lower-calorie diet rich in fiber and protein. "
        "Try increasing your cardio duration to 30+ minutes daily to boost fat loss."
    ),
)

OBESE = BMICategoryInfo(
    category="Obese",
    color="text-red-400",
    bg_color="bg-red-500",
    advice=(
        "Focus on low-impact activities like swimming or walking to protect joints. "
        "Consult a nutritionist for a sustainable, structured meal plan."
    ),
)


def classify_bmi(bmi: float) -> BMICategoryInfo:
    """Map a BMI value to its category.

    The bands leave 24.9 <= bmi < 25 uncovered; those values (and NaN)
    fall through to Obese.

    Args:
        bmi: Unrounded BMI

    Returns:
        One of UNDERWEIGHT, HEALTHY, OVERWEIGHT, OBESE
    """
    if bmi < UNDERWEIGHT_MAX:
        return UNDERWEIGHT
    elif UNDERWEIGHT_MAX <= bmi < HEALTHY_MAX:
        return HEALTHY
    elif OVERWEIGHT_MIN <= bmi < OVERWEIGHT_MAX:
        return OVERWEIGHT
    return OBESE


def bmi_gauge_position(bmi: float) -> float:
    """Marker position on the 15-40 BMI gauge, as a percentage in [0, 100]."""
    position = (bmi - GAUGE_MIN_BMI) / GAUGE_SPAN_BMI * 100
    return min(max(position, 0.0), 100.0)
