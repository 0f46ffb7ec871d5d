"""Runtime settings and logging setup.

Settings come from an optional YAML file, then environment variables
(``.env`` files are honoured), then built-in defaults.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from ss_tracker.advisor.gemini_client import DEFAULT_TIMEOUT_SECONDS, MODEL_ID
from ss_tracker.data_layer.app_store import AppDataStore

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

ENV_OVERRIDES = {
    "SS_TRACKER_DATA_DIR": "data_dir",
    "SS_TRACKER_MODEL": "model_id",
    "SS_TRACKER_ADVICE_TIMEOUT": "advice_timeout_seconds",
    "SS_TRACKER_DEVICE_SYNC_DELAY": "device_sync_delay_seconds",
    "SS_TRACKER_LOG_LEVEL": "log_level",
}


@dataclass
class Settings:
    data_dir: str = AppDataStore.DEFAULT_DATA_DIR
    model_id: str = MODEL_ID
    advice_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    device_sync_delay_seconds: float = 2.0
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        defaults = cls()
        return cls(
            data_dir=str(data.get("data_dir", defaults.data_dir)),
            model_id=str(data.get("model_id", defaults.model_id)),
            advice_timeout_seconds=float(
                data.get("advice_timeout_seconds", defaults.advice_timeout_seconds)
            ),
            device_sync_delay_seconds=float(
                data.get("device_sync_delay_seconds", defaults.device_sync_delay_seconds)
            ),
            log_level=str(data.get("log_level", defaults.log_level)).upper(),
        )


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Load settings.

    Args:
        config_path: Optional YAML file with a top-level ``tracker`` mapping

    Returns:
        Settings with environment overrides applied

    Raises:
        FileNotFoundError: If config_path is given but doesn't exist
    """
    load_dotenv(find_dotenv(usecwd=True))

    data: Dict[str, Any] = {}
    if config_path:
        with open(Path(config_path), "r") as f:
            data = dict((yaml.safe_load(f) or {}).get("tracker") or {})

    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            data[key] = value

    return Settings.from_dict(data)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
