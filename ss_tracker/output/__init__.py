"""Output formatting for the dashboard."""

from ss_tracker.output.formatters import (
    format_dashboard_json,
    format_dashboard_json_string,
    format_dashboard_markdown,
    format_meal_string,
)

__all__ = [
    "format_dashboard_json",
    "format_dashboard_json_string",
    "format_dashboard_markdown",
    "format_meal_string",
]
