"""Shared data models for the meal calendar."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class MealCategory(Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACKS = "snacks"
    OTHER = "other"


MEAL_RANKS: dict[MealCategory, int] = {
    MealCategory.BREAKFAST: 1,
    MealCategory.LUNCH: 2,
    MealCategory.DINNER: 3,
    MealCategory.SNACKS: 4,
    MealCategory.OTHER: 5,
}

UNKNOWN_MEAL_RANK = 6


def meal_rank(meal: str | MealCategory | None) -> int:
    """Display rank for a meal category; unrecognized values sort last."""
    if isinstance(meal, MealCategory):
        return MEAL_RANKS[meal]
    if not isinstance(meal, str):
        return UNKNOWN_MEAL_RANK
    try:
        return MEAL_RANKS[MealCategory(meal)]
    except ValueError:
        return UNKNOWN_MEAL_RANK


@dataclass
class MealPlanItem:
    id: str
    title: str
    scheduled: datetime | None
    meal: str | None = None
    # Linked recipe, when the item is not freeform
    recipe_id: str | None = None
    recipe_title: str | None = None
    added_by: str | None = None
    created_at: datetime | None = None
    notes: str | None = None


class SlotKind(Enum):
    PREV_MONTH = "prev_month"
    DAY = "day"
    NEXT_MONTH = "next_month"


@dataclass(frozen=True)
class DaySlot:
    kind: SlotKind
    day: int | None = None

    @classmethod
    def of(cls, day: int) -> DaySlot:
        return cls(SlotKind.DAY, day)

    @property
    def is_day(self) -> bool:
        return self.kind == SlotKind.DAY

    def legacy_value(self, last_day: int) -> int:
        """Sentinel encoding: 0 before day 1, last_day + 1 after the last day."""
        if self.kind == SlotKind.PREV_MONTH:
            return 0
        if self.kind == SlotKind.NEXT_MONTH:
            return last_day + 1
        return self.day


PREV_MONTH_SLOT = DaySlot(SlotKind.PREV_MONTH)
NEXT_MONTH_SLOT = DaySlot(SlotKind.NEXT_MONTH)


@dataclass(frozen=True)
class CalendarGrid:
    year: int
    month: int  # 1-12
    last_day: int
    weeks: list[list[DaySlot]] = field(default_factory=list)

    def days(self) -> list[int]:
        return [s.day for week in self.weeks for s in week if s.is_day]

    def as_numbers(self) -> list[list[int]]:
        return [[s.legacy_value(self.last_day) for s in week] for week in self.weeks]


# month index (0 = January) -> day of month -> items
MealsByDate = dict[int, dict[int, list[MealPlanItem]]]


@dataclass
class BucketResult:
    index: MealsByDate
    skipped: int = 0


@dataclass(frozen=True)
class CalendarView:
    """Caller-owned calendar state; view functions return updated copies."""
    today: date
    center: date
    selected_day: int
    grid: CalendarGrid
