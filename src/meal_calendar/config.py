"""View preferences loading with defaults and CLI override merging."""

from __future__ import annotations

import copy
from pathlib import Path

import yaml

CONFIG_FILENAME = "meal-calendar.yaml"

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "meal-calendar"

DEFAULTS = {
    "view_options": {
        "show_added_by": False,
        "show_added_on": False,
        "show_recipe_title": True,
        "group_similar": True,
    },
    "calendar": {
        "max_months_ahead": 12,
        "timezone": None,
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_dir: Path) -> dict:
    """Load view preferences from YAML file, falling back to defaults."""
    config_path = config_dir / CONFIG_FILENAME

    if config_path.exists():
        with open(config_path) as f:
            user_config = yaml.safe_load(f) or {}
        return deep_merge(copy.deepcopy(DEFAULTS), user_config)

    return copy.deepcopy(DEFAULTS)


def apply_cli_overrides(config: dict, **overrides: object) -> dict:
    """Apply CLI argument overrides to config.

    Flags left at None keep the configured value:
      show_added_by, show_added_on, show_recipe_title, group_similar -> view_options.*
      timezone -> calendar.timezone
    """
    for key in ("show_added_by", "show_added_on", "show_recipe_title", "group_similar"):
        if overrides.get(key) is not None:
            config["view_options"][key] = bool(overrides[key])
    if overrides.get("timezone") is not None:
        config["calendar"]["timezone"] = str(overrides["timezone"])

    return config
