"""User profile loader for loading a biometric profile from YAML."""
import yaml
from pathlib import Path

from ss_tracker.data_layer.models import ActivityLevel, Gender, UserProfile
from ss_tracker.metrics.calculator import calculate_health_metrics


class UserProfileLoader:
    """Loader for user profile configuration from YAML.

    Expected layout::

        profile:
          name: Alex
          age: 30
          height_cm: 180
          weight_kg: 80
          gender: Male
          activity_level: Very Active
    """

    def __init__(self, yaml_path: str):
        """Initialize user profile loader from YAML file.

        Args:
            yaml_path: Path to YAML file containing user profile
        """
        self.yaml_path = Path(yaml_path)

    def load(self) -> UserProfile:
        """Load user profile from YAML file and derive its metrics.

        Returns:
            UserProfile object with bmi, bmr and daily_calories computed

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            KeyError: If required fields are missing
            ValueError: If gender/activity level are unknown, or height
                or weight are not positive
        """
        with open(self.yaml_path, "r") as f:
            data = yaml.safe_load(f)

        profile = data["profile"]

        height = float(profile["height_cm"])
        weight = float(profile["weight_kg"])
        if height <= 0 or weight <= 0:
            raise ValueError(
                f"height_cm and weight_kg must be positive, got {height} and {weight}"
            )

        return calculate_health_metrics(
            UserProfile(
                name=str(profile.get("name", "Guest User")),
                age=int(profile["age"]),
                height=height,
                weight=weight,
                gender=Gender(str(profile.get("gender", Gender.MALE.value))),
                activity_level=ActivityLevel(
                    str(profile.get("activity_level", ActivityLevel.MODERATELY_ACTIVE.value))
                ),
            )
        )
