"""Month calendar and day agenda output: rich table, Markdown, and JSON."""

from __future__ import annotations

import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path

import yaml
from rich.table import Table
from rich.text import Text

from meal_calendar.config import DEFAULTS, apply_cli_overrides, load_config
from meal_calendar.loader import load_plan_file
from meal_calendar.log import stdout_console
from meal_calendar.models import CalendarView, DaySlot, MealPlanItem, MealsByDate
from meal_calendar.view import (
    bucket_items,
    items_for_day,
    month_name,
    month_offset,
    navigate,
    open_calendar,
    select_day,
)

logger = logging.getLogger(__name__)

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def group_items(
    items: list[MealPlanItem], group_similar: bool
) -> list[tuple[MealPlanItem, int]]:
    """Collapse items sharing (meal, title) into (first item, count) pairs."""
    if not group_similar:
        return [(item, 1) for item in items]

    grouped: dict[tuple[str | None, str], list] = {}
    for item in items:
        key = (item.meal, item.title)
        if key in grouped:
            grouped[key][1] += 1
        else:
            grouped[key] = [item, 1]
    return [(item, count) for item, count in grouped.values()]


def item_label(item: MealPlanItem, options: dict, count: int = 1) -> str:
    """Display text for one item according to view options."""
    label = item.title
    if (
        options.get("show_recipe_title")
        and item.recipe_title
        and item.recipe_title != item.title
    ):
        label += f" ({item.recipe_title})"
    if count > 1:
        label += f" x{count}"
    if options.get("show_added_by") and item.added_by:
        label += f" · added by {item.added_by}"
    if options.get("show_added_on") and item.created_at:
        label += f" · added {item.created_at.strftime('%Y-%m-%d')}"
    return label


def _options(options: dict | None) -> dict:
    return options if options is not None else DEFAULTS["view_options"]


def _day_date(view: CalendarView, day: int) -> date:
    return date(view.center.year, view.center.month, day)


def render_month_table(
    view: CalendarView, index: MealsByDate, options: dict | None = None
) -> Table:
    """Build a rich Table for the displayed month, one row per week."""
    options = _options(options)
    table = Table(
        title=f"{month_name(view.center)} {view.center.year}",
        show_lines=True,
    )
    for header in WEEKDAY_HEADERS:
        table.add_column(header, vertical="top", min_width=10)

    for week in view.grid.weeks:
        cells = []
        for slot in week:
            if not slot.is_day:
                cells.append(Text("·", style="dim"))
                continue

            style = "bold reverse" if slot.day == view.selected_day else "bold"
            cell = Text(str(slot.day), style=style)
            day_items = items_for_day(index, view, slot.day)
            for item, count in group_items(day_items, options.get("group_similar", True)):
                cell.append(f"\n{item_label(item, options, count)}")
            cells.append(cell)
        table.add_row(*cells)

    return table


def format_day_markdown(
    view: CalendarView, index: MealsByDate, day: int, options: dict | None = None
) -> str:
    """Format one day's items as a Markdown section."""
    options = _options(options)
    d = _day_date(view, day)
    lines = [f"## {d:%A, %B} {d.day}", ""]

    day_items = items_for_day(index, view, day)
    if not day_items:
        lines.append("*Nothing planned.*")
        lines.append("")
        return "\n".join(lines)

    lines.append("| Meal | Item |")
    lines.append("|------|------|")
    for item, count in group_items(day_items, options.get("group_similar", True)):
        meal = (item.meal or "other").title()
        lines.append(f"| {meal} | {item_label(item, options, count)} |")
    lines.append("")

    return "\n".join(lines)


def format_month_markdown(
    view: CalendarView, index: MealsByDate, options: dict | None = None
) -> str:
    """Format the displayed month as a Markdown grid plus per-day sections."""
    lines = [
        f"# Meal Plan: {month_name(view.center)} {view.center.year}",
        "",
        "| " + " | ".join(WEEKDAY_HEADERS) + " |",
        "|" + "-----|" * 7,
    ]

    planned_days = []
    for week in view.grid.weeks:
        cells = []
        for slot in week:
            if not slot.is_day:
                cells.append("")
                continue
            count = len(items_for_day(index, view, slot.day))
            text = f"**{slot.day}**" if slot.day == view.selected_day else str(slot.day)
            if count:
                text += f" ({count})"
                planned_days.append(slot.day)
            cells.append(text)
        lines.append("| " + " | ".join(cells) + " |")
    lines.append("")

    for day in planned_days:
        lines.append(format_day_markdown(view, index, day, options))

    return "\n".join(lines)


def _item_json(item: MealPlanItem) -> dict:
    return {
        "id": item.id,
        "title": item.title,
        "meal": item.meal,
        "scheduled": item.scheduled.isoformat() if item.scheduled else None,
        "recipe_id": item.recipe_id,
        "recipe_title": item.recipe_title,
        "added_by": item.added_by,
        "created_at": item.created_at.isoformat() if item.created_at else None,
        "notes": item.notes,
    }


def format_day_json(view: CalendarView, index: MealsByDate, day: int) -> str:
    """Format one day's items as JSON."""
    data = {
        "date": _day_date(view, day).isoformat(),
        "items": [_item_json(i) for i in items_for_day(index, view, day)],
    }
    return json.dumps(data, indent=2)


def format_month_json(view: CalendarView, index: MealsByDate) -> str:
    """Format the displayed month as JSON with sentinel-encoded weeks."""
    days = {}
    for day in view.grid.days():
        day_items = items_for_day(index, view, day)
        if day_items:
            days[str(day)] = [_item_json(i) for i in day_items]

    data = {
        "year": view.center.year,
        "month": view.center.month,
        "month_name": month_name(view.center),
        "selected_day": view.selected_day,
        "weeks": view.grid.as_numbers(),
        "days": days,
    }
    return json.dumps(data, indent=2)


def parse_month_arg(raw: str) -> date:
    """Parse 'YYYY-MM' into the first day of that month."""
    try:
        parsed = datetime.strptime(raw.strip(), "%Y-%m")
    except ValueError:
        raise ValueError(f"Invalid month '{raw}'. Expected YYYY-MM")
    return parsed.date()


def parse_date_arg(raw: str) -> date:
    """Parse 'YYYY-MM-DD' into a date."""
    try:
        return datetime.strptime(raw.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date '{raw}'. Expected YYYY-MM-DD")


def open_at_month(today: date, target: date, max_months_ahead: int) -> CalendarView:
    """Open the calendar and step toward target's month within navigation bounds."""
    view = open_calendar(today)
    offset = month_offset(today, target)
    direction = 1 if offset > 0 else -1
    for _ in range(abs(offset)):
        moved = navigate(view, direction, max_months_ahead)
        if moved is view:
            logger.warning(
                "%s %d is outside the navigable range; showing %s %d",
                month_name(target), target.year,
                month_name(view.center), view.center.year,
            )
            break
        view = moved
    return view


def _load_index(plan_file: Path, tz: str | None) -> MealsByDate:
    try:
        items = load_plan_file(plan_file, tz)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error("Could not read plan file %s: %s", plan_file, e)
        sys.exit(1)
    return bucket_items(items).index


def run_month(
    plan_file: Path,
    config_dir: Path,
    month: str | None = None,
    today: str | None = None,
    steps_next: int = 0,
    steps_prev: int = 0,
    output_format: str = "table",
    **view_overrides: object,
) -> None:
    """CLI entry point for month command."""
    config = apply_cli_overrides(load_config(config_dir), **view_overrides)
    options = config["view_options"]
    max_ahead = config["calendar"]["max_months_ahead"]

    today_date = parse_date_arg(today) if today else date.today()
    target = parse_month_arg(month) if month else today_date
    view = open_at_month(today_date, target, max_ahead)

    for _ in range(steps_next):
        view = navigate(view, 1, max_ahead)
    for _ in range(steps_prev):
        view = navigate(view, -1, max_ahead)

    index = _load_index(plan_file, config["calendar"]["timezone"])

    if output_format == "json":
        print(format_month_json(view, index))
    elif output_format == "markdown":
        print(format_month_markdown(view, index, options))
    else:
        stdout_console.print(render_month_table(view, index, options))


def run_day(
    plan_file: Path,
    config_dir: Path,
    day: str | None = None,
    today: str | None = None,
    output_format: str = "markdown",
    **view_overrides: object,
) -> None:
    """CLI entry point for day command."""
    config = apply_cli_overrides(load_config(config_dir), **view_overrides)
    options = config["view_options"]
    max_ahead = config["calendar"]["max_months_ahead"]

    today_date = parse_date_arg(today) if today else date.today()
    target = parse_date_arg(day) if day else today_date
    view = open_at_month(today_date, target, max_ahead)
    if (view.center.year, view.center.month) != (target.year, target.month):
        logger.error("No calendar view for %s", target.isoformat())
        sys.exit(1)
    view = select_day(view, DaySlot.of(target.day), max_ahead)

    index = _load_index(plan_file, config["calendar"]["timezone"])

    if output_format == "json":
        print(format_day_json(view, index, view.selected_day))
    else:
        print(format_day_markdown(view, index, view.selected_day, options))
