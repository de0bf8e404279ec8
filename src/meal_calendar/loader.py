"""Meal plan file loading: JSON/YAML documents into MealPlanItem records."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, time
from pathlib import Path
from zoneinfo import ZoneInfo

import yaml

from meal_calendar.models import MealPlanItem

logger = logging.getLogger(__name__)


def parse_timestamp(value: object, tz: str | None = None) -> datetime | None:
    """Parse a scheduled/created value into a datetime.

    Handles: datetime, date (midnight), ISO 8601 strings with or without a
    trailing "Z". Anything else -> None. Aware values are converted to `tz`
    when given, otherwise their wall-clock date is kept.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(s)
        except ValueError:
            return None
    else:
        return None

    if tz and parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(tz))
    return parsed


def _person_name(raw: object) -> str | None:
    if isinstance(raw, dict):
        return raw.get("name") or raw.get("email")
    return str(raw) if raw else None


def parse_item(raw: dict, tz: str | None = None) -> MealPlanItem:
    """Convert one plan item mapping to a MealPlanItem."""
    recipe = raw.get("recipe") or {}
    recipe_id = recipe.get("id") if isinstance(recipe, dict) else None
    recipe_id = recipe_id or raw.get("recipeId") or raw.get("recipe_id")
    recipe_title = recipe.get("title") if isinstance(recipe, dict) else None

    title = str(raw.get("title") or recipe_title or "")
    meal = raw.get("meal")
    scheduled = parse_timestamp(raw.get("scheduled"), tz)
    if scheduled is None:
        logger.debug("Unparsable scheduled value for item '%s': %r", title, raw.get("scheduled"))

    return MealPlanItem(
        id=str(raw.get("id", "")),
        title=title,
        scheduled=scheduled,
        meal=str(meal) if meal is not None else None,
        recipe_id=str(recipe_id) if recipe_id is not None else None,
        recipe_title=recipe_title,
        added_by=_person_name(raw.get("addedBy", raw.get("added_by"))),
        created_at=parse_timestamp(raw.get("createdAt", raw.get("created_at")), tz),
        notes=raw.get("notes"),
    )


def parse_plan(data: object, tz: str | None = None) -> list[MealPlanItem]:
    """Parse a plan document: a list of items or a mapping with an "items" list."""
    if isinstance(data, dict):
        data = data.get("items") or []
    if not isinstance(data, list):
        raise ValueError("Meal plan must be a list of items or a mapping with 'items'")

    return [parse_item(raw, tz) for raw in data if isinstance(raw, dict)]


def load_plan_file(path: Path, tz: str | None = None) -> list[MealPlanItem]:
    """Load meal plan items from a .json, .yaml or .yml file."""
    suffix = path.suffix.lower()

    with open(path) as f:
        if suffix == ".json":
            data = json.load(f)
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            raise ValueError(f"Unsupported plan file format: '{path.suffix}'")

    items = parse_plan(data, tz)
    logger.debug("Loaded %d meal plan item(s) from %s", len(items), path)
    return items
