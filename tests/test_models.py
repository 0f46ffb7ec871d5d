"""Tests for data models and their snapshot serialization."""
import pytest

from ss_tracker.data_layer.defaults import DEFAULT_DATA, default_app_data
from ss_tracker.data_layer.models import (
    ActivityLevel,
    AdviceType,
    AIAdvice,
    AppData,
    AppView,
    Gender,
    UserProfile,
)


class TestEnums:
    """Tests for enum values used in stored data."""

    def test_activity_level_values(self):
        assert [level.value for level in ActivityLevel] == [
            "Sedentary",
            "Lightly Active",
            "Moderately Active",
            "Very Active",
            "Super Active",
        ]

    def test_gender_values(self):
        assert {g.value for g in Gender} == {"Male", "Female", "Other"}


class TestUserProfile:
    """Tests for UserProfile serialization."""

    def test_camel_case_keys(self):
        profile = UserProfile(
            name="Sam",
            age=30,
            height=180,
            weight=80,
            gender=Gender.FEMALE,
            activity_level=ActivityLevel.VERY_ACTIVE,
            bmi=24.7,
            bmr=1600.0,
            daily_calories=2760,
        )
        data = profile.to_dict()

        assert data["activityLevel"] == "Very Active"
        assert data["dailyCalories"] == 2760
        assert data["gender"] == "Female"
        assert UserProfile.from_dict(data) == profile

    def test_unknown_keys_ignored(self):
        data = dict(DEFAULT_DATA["userProfile"], favouriteColor="green")
        assert UserProfile.from_dict(data).name == "Guest User"

    def test_invalid_enum_rejected(self):
        data = dict(DEFAULT_DATA["userProfile"], gender="Robot")
        with pytest.raises(ValueError):
            UserProfile.from_dict(data)


class TestAIAdvice:
    """Tests for AIAdvice."""

    def test_round_trip_keeps_full_shape(self):
        """Test every list entry survives, not just the displayed ones."""
        advice = AIAdvice(
            nutrition=["Eat greens", "Hydrate", "Less salt", "More fiber"],
            workout=["Run", "Row", "Swim", "Lift"],
            motivation="Go!",
            type=AdviceType.RECOVERY,
        )
        assert AIAdvice.from_dict(advice.to_dict()) == advice
        assert advice.to_dict()["type"] == "Recovery"


class TestAppData:
    """Tests for the persisted snapshot."""

    def test_defaults_round_trip(self):
        """Test the default snapshot serializes back to the documented dict."""
        assert default_app_data().to_dict() == DEFAULT_DATA

    def test_default_values(self):
        data = default_app_data()

        assert data.user_profile.name == "Guest User"
        assert data.user_profile.activity_level == ActivityLevel.MODERATELY_ACTIVE
        assert data.daily_stats.steps_goal == 10000
        assert [meal.calories for meal in data.meals] == [350, 450]
        assert [task.xp for task in data.tasks] == [50, 100, 50, 75]
        assert data.view == AppView.AUTH
        assert data.is_logged_in is False

    def test_default_copies_are_independent(self):
        first = default_app_data()
        first.meals.clear()
        assert len(default_app_data().meals) == 2

    def test_missing_optional_sections(self):
        data = AppData.from_dict(
            {
                "userProfile": DEFAULT_DATA["userProfile"],
                "dailyStats": DEFAULT_DATA["dailyStats"],
            }
        )
        assert data.meals == []
        assert data.tasks == []
        assert data.view == AppView.AUTH
