#!/usr/bin/env python3
"""Command-line interface for the SS-Tracker dashboard."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from ss_tracker.advisor.gemini_client import HealthAdvisor
from ss_tracker.config import configure_logging, load_settings
from ss_tracker.coordinator import AppCoordinator
from ss_tracker.data_layer.app_store import AppDataStore
from ss_tracker.data_layer.user_profile import UserProfileLoader
from ss_tracker.output.formatters import format_dashboard_json_string, format_dashboard_markdown

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show health metrics, today's log and coaching advice"
    )
    parser.add_argument(
        "--profile",
        type=str,
        help="Path to a user profile YAML file; its values replace the stored profile"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to a settings YAML file (see config/settings.yaml.example)"
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        help="Directory holding the saved tracker data (overrides settings)"
    )
    parser.add_argument(
        "--output",
        type=str,
        choices=["markdown", "json"],
        default="markdown",
        help="Output format: markdown (default) or json"
    )
    parser.add_argument(
        "--advice",
        action="store_true",
        help="Fetch coaching advice from Gemini (needs GEMINI_API_KEY)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (overrides settings)"
    )
    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.config and not Path(args.config).exists():
        print(f"Error: Settings file not found: {args.config}", file=sys.stderr)
        sys.exit(1)
    if args.profile and not Path(args.profile).exists():
        print(f"Error: User profile file not found: {args.profile}", file=sys.stderr)
        print("Hint: Copy config/user_profile.yaml.example and customize it", file=sys.stderr)
        sys.exit(1)

    settings = load_settings(args.config)
    configure_logging(args.log_level or settings.log_level)

    advisor = None
    if args.advice:
        try:
            advisor = HealthAdvisor.from_env(
                model_id=settings.model_id, timeout_seconds=settings.advice_timeout_seconds
            )
        except ValueError as e:
            print("Failed to initialize AI coach:", file=sys.stderr)
            print(str(e), file=sys.stderr)
            sys.exit(3)

    try:
        coordinator = AppCoordinator(AppDataStore(args.data_dir or settings.data_dir), advisor)

        profile_changes = {}
        if args.profile:
            loaded = UserProfileLoader(args.profile).load()
            profile_changes = {
                "name": loaded.name,
                "age": loaded.age,
                "height": loaded.height,
                "weight": loaded.weight,
                "gender": loaded.gender,
                "activity_level": loaded.activity_level,
            }

        if args.advice:
            print("Fetching coaching advice...", file=sys.stderr)
            asyncio.run(coordinator.submit_profile(**profile_changes))
        else:
            coordinator.update_profile(**profile_changes)

        summary = coordinator.dashboard()
        if args.output == "json":
            print(format_dashboard_json_string(summary, indent=2))
        else:
            print(format_dashboard_markdown(summary))

    except Exception as e:
        logger.exception("Dashboard generation failed")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
