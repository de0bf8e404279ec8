"""Month calendar view model: grid layout, meal bucketing, and navigation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import date, timedelta

from meal_calendar.models import (
    NEXT_MONTH_SLOT,
    PREV_MONTH_SLOT,
    BucketResult,
    CalendarGrid,
    CalendarView,
    DaySlot,
    MealPlanItem,
    MealsByDate,
    SlotKind,
    meal_rank,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_MONTHS_AHEAD = 12


def first_day_of_month(d: date) -> date:
    return date(d.year, d.month, 1)


def last_day_of_month(d: date) -> date:
    """Day 0 of the following month."""
    if d.month == 12:
        next_first = date(d.year + 1, 1, 1)
    else:
        next_first = date(d.year, d.month + 1, 1)
    return next_first - timedelta(days=1)


def sunday_weekday(d: date) -> int:
    """Weekday index with Sunday=0 .. Saturday=6."""
    return d.isoweekday() % 7


def shift_month(d: date, months: int) -> date:
    """First day of the month `months` away from d's month."""
    total = d.year * 12 + (d.month - 1) + months
    return date(total // 12, total % 12 + 1, 1)


def month_offset(start: date, end: date) -> int:
    """Whole months from start's month to end's month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def month_name(d: date) -> str:
    return d.strftime("%B")


def build_grid(center: date) -> CalendarGrid:
    """Lay out center's month as weeks of 7 slots, Sunday first."""
    start = first_day_of_month(center)
    last_day = last_day_of_month(center).day

    weeks: list[list[DaySlot]] = []
    week: list[DaySlot] = [PREV_MONTH_SLOT] * sunday_weekday(start)

    for day in range(1, last_day + 1):
        week.append(DaySlot.of(day))
        if len(week) == 7:
            weeks.append(week)
            week = []

    if week:
        week.extend([NEXT_MONTH_SLOT] * (7 - len(week)))
        weeks.append(week)

    return CalendarGrid(year=start.year, month=start.month, last_day=last_day, weeks=weeks)


def _sort_key(item: MealPlanItem) -> tuple[int, str]:
    return meal_rank(item.meal), str(item.title or "")


def bucket_items(items: Iterable[MealPlanItem]) -> BucketResult:
    """Group items by (month index, day of month), sorted by meal then title.

    Month keys are 0-indexed (January = 0). Items without a usable
    `scheduled` value are counted in `skipped` instead of bucketed.
    """
    index: MealsByDate = {}
    skipped = 0

    for item in items:
        if item.scheduled is None:
            skipped += 1
            continue
        month = item.scheduled.month - 1
        day = item.scheduled.day
        index.setdefault(month, {}).setdefault(day, []).append(item)

    for days in index.values():
        for day, bucket in days.items():
            days[day] = sorted(bucket, key=_sort_key)

    if skipped:
        logger.warning("Skipped %d meal plan item(s) with no valid scheduled date", skipped)

    return BucketResult(index=index, skipped=skipped)


def items_for_day(index: MealsByDate, view: CalendarView, day: int) -> list[MealPlanItem]:
    """Items for a day of the displayed month."""
    bucket = index.get(view.center.month - 1, {}).get(day, [])
    # The index is keyed by month only; keep the displayed year's items
    return [i for i in bucket if i.scheduled.year == view.center.year]


def open_calendar(today: date, center: date | None = None) -> CalendarView:
    center = center or today
    return CalendarView(
        today=today,
        center=center,
        selected_day=center.day,
        grid=build_grid(center),
    )


def new_center(view: CalendarView, direction: int) -> date:
    """First day of the next (direction > 0) or previous month."""
    return shift_month(view.center, 1 if direction > 0 else -1)


def can_navigate(
    view: CalendarView,
    direction: int,
    max_months_ahead: int = DEFAULT_MAX_MONTHS_AHEAD,
) -> bool:
    candidate = new_center(view, direction)
    if direction > 0:
        return month_offset(view.today, candidate) <= max_months_ahead
    return candidate >= first_day_of_month(view.today)


def navigate(
    view: CalendarView,
    direction: int,
    max_months_ahead: int = DEFAULT_MAX_MONTHS_AHEAD,
) -> CalendarView:
    """Move one month forward or back; out-of-range moves return view unchanged."""
    if not can_navigate(view, direction, max_months_ahead):
        logger.debug(
            "Navigation %+d from %s is out of range", direction, view.center.isoformat()
        )
        return view

    center = new_center(view, direction)
    return replace(view, center=center, selected_day=center.day, grid=build_grid(center))


def select_day(
    view: CalendarView,
    slot: DaySlot,
    max_months_ahead: int = DEFAULT_MAX_MONTHS_AHEAD,
) -> CalendarView:
    """Select a grid cell; adjacent-month cells navigate instead."""
    if slot.kind == SlotKind.PREV_MONTH:
        return navigate(view, -1, max_months_ahead)
    if slot.kind == SlotKind.NEXT_MONTH:
        return navigate(view, 1, max_months_ahead)

    if slot.day is None or not 1 <= slot.day <= view.grid.last_day:
        raise ValueError(
            f"Day {slot.day} is not in {month_name(view.center)} {view.center.year}"
        )
    return replace(view, selected_day=slot.day)


def selected_date(view: CalendarView) -> date:
    """Date a new item would be scheduled on."""
    return date(view.center.year, view.center.month, view.selected_day)
