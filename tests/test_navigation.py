"""Tests for month navigation bounds and day selection."""

from datetime import date

import pytest
from meal_calendar.models import NEXT_MONTH_SLOT, PREV_MONTH_SLOT, DaySlot
from meal_calendar.view import (
    build_grid,
    can_navigate,
    navigate,
    new_center,
    open_calendar,
    select_day,
    selected_date,
    shift_month,
)

TODAY = date(2026, 10, 18)


def view_at_offset(months: int):
    """Calendar opened today and moved forward `months` times."""
    view = open_calendar(TODAY)
    for _ in range(months):
        view = navigate(view, 1)
    return view


class TestOpenCalendar:
    def test_defaults_to_today(self):
        view = open_calendar(TODAY)
        assert view.center == TODAY
        assert view.selected_day == 18
        assert view.grid == build_grid(TODAY)

    def test_selected_date(self):
        assert selected_date(open_calendar(TODAY)) == TODAY


class TestNewCenter:
    def test_forward_is_first_of_next_month(self):
        view = open_calendar(date(2026, 1, 31))
        assert new_center(view, 1) == date(2026, 2, 1)

    def test_backward_is_first_of_previous_month(self):
        view = open_calendar(date(2026, 3, 31))
        assert new_center(view, -1) == date(2026, 2, 1)


class TestCanNavigate:
    def test_backward_blocked_at_current_month(self):
        assert not can_navigate(open_calendar(TODAY), -1)

    @pytest.mark.parametrize("offset", range(1, 13))
    def test_backward_allowed_after_current_month(self, offset):
        assert can_navigate(view_at_offset(offset), -1)

    @pytest.mark.parametrize("offset", range(0, 12))
    def test_forward_allowed_below_twelve_months(self, offset):
        assert can_navigate(view_at_offset(offset), 1)

    def test_forward_blocked_at_twelve_months(self):
        view = view_at_offset(12)
        assert view.center == date(2027, 10, 1)
        assert not can_navigate(view, 1)

    def test_custom_limit(self):
        view = view_at_offset(2)
        assert not can_navigate(view, 1, max_months_ahead=2)

    def test_is_pure(self):
        view = open_calendar(TODAY)
        can_navigate(view, 1)
        assert view.center == TODAY


class TestNavigate:
    def test_forward_rebuilds_grid(self):
        view = navigate(open_calendar(TODAY), 1)
        assert view.center == date(2026, 11, 1)
        assert view.grid == build_grid(date(2026, 11, 1))
        assert view.selected_day == 1

    def test_forward_from_twelve_months_is_noop(self):
        view = view_at_offset(12)
        assert navigate(view, 1) is view
        assert navigate(view, 1).grid == view.grid

    def test_backward_from_current_month_is_noop(self):
        view = open_calendar(TODAY)
        assert navigate(view, -1) is view

    def test_round_trip(self):
        view = navigate(navigate(open_calendar(TODAY), 1), -1)
        assert view.center == date(2026, 10, 1)

    def test_does_not_mutate_input(self):
        view = open_calendar(TODAY)
        navigate(view, 1)
        assert view.center == TODAY

    def test_day_fixed_to_first_avoids_rollover(self):
        view = open_calendar(date(2027, 1, 31), center=date(2027, 1, 31))
        view = navigate(view, 1)
        assert view.center == date(2027, 2, 1)
        assert shift_month(view.center, 1) == date(2027, 3, 1)


class TestSelectDay:
    def test_records_day(self):
        view = select_day(open_calendar(TODAY), DaySlot.of(25))
        assert view.selected_day == 25
        assert selected_date(view) == date(2026, 10, 25)

    def test_prev_sentinel_navigates_back(self):
        view = select_day(view_at_offset(1), PREV_MONTH_SLOT)
        assert view.center == date(2026, 10, 1)

    def test_prev_sentinel_blocked_in_current_month(self):
        view = open_calendar(TODAY)
        assert select_day(view, PREV_MONTH_SLOT) is view

    def test_next_sentinel_navigates_forward(self):
        view = select_day(open_calendar(TODAY), NEXT_MONTH_SLOT)
        assert view.center == date(2026, 11, 1)
        assert view.selected_day == 1

    def test_invalid_day_rejected(self):
        with pytest.raises(ValueError, match="not in November"):
            select_day(view_at_offset(1), DaySlot.of(31))
