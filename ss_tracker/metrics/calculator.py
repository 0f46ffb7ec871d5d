"""Health metrics calculator: BMI, BMR (Mifflin-St Jeor) and TDEE.

Every function here is pure. ``calculate_health_metrics`` is the only
place the cached metrics on a ``UserProfile`` are computed; callers must
route every profile edit through it.
"""
from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict

from ss_tracker.data_layer.models import ActivityLevel, Gender, UserProfile

# TDEE multipliers applied to BMR
ACTIVITY_MULTIPLIERS: Dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.SUPER_ACTIVE: 1.9,
}

MALE_BMR_OFFSET = 5
# Female and Other share this branch
NON_MALE_BMR_OFFSET = -161


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero.

    Uses the exact binary value of ``value`` so results never depend on
    ``value + 0.5`` rounding error.
    """
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def calculate_bmi(weight: float, height: float) -> float:
    """Body Mass Index.

    Args:
        weight: Weight in kilograms
        height: Height in centimeters (must be > 0)

    Returns:
        BMI at full float precision
    """
    height_m = height / 100
    return weight / (height_m * height_m)


def calculate_bmr(weight: float, height: float, age: int, gender: Gender) -> float:
    """Basal Metabolic Rate using Mifflin-St Jeor.

    Args:
        weight: Weight in kilograms
        height: Height in centimeters
        age: Age in years
        gender: Gender; only ``Gender.MALE`` takes the +5 branch

    Returns:
        BMR in kcal/day (unrounded)
    """
    bmr = (10 * weight) + (6.25 * height) - (5 * age)
    if gender == Gender.MALE:
        return bmr + MALE_BMR_OFFSET
    return bmr + NON_MALE_BMR_OFFSET


def calculate_daily_calories(bmr: float, activity_level: ActivityLevel) -> int:
    """Total Daily Energy Expenditure rounded to whole kcal."""
    return round_half_away_from_zero(bmr * ACTIVITY_MULTIPLIERS[activity_level])


def calculate_health_metrics(profile: UserProfile) -> UserProfile:
    """Recompute the cached metrics of a profile.

    Args:
        profile: Profile with valid inputs (height > 0)

    Returns:
        New UserProfile with bmi, bmr and daily_calories filled in

    Raises:
        ZeroDivisionError: If height is 0 (caller precondition)
    """
    bmi = calculate_bmi(profile.weight, profile.height)
    bmr = calculate_bmr(profile.weight, profile.height, profile.age, profile.gender)
    daily_calories = calculate_daily_calories(bmr, profile.activity_level)
    return replace(profile, bmi=bmi, bmr=bmr, daily_calories=daily_calories)


def format_bmi(bmi: float) -> str:
    """Format BMI for display (one decimal place)."""
    return f"{bmi:.1f}"
