import pytest
from datetime import datetime
from meal_calendar.models import MealPlanItem


@pytest.fixture
def sample_items() -> list[MealPlanItem]:
    """A few meal plan items spread over March and April 2024."""
    return [
        MealPlanItem(id="1", title="Pad See Ew", meal="dinner",
                     scheduled=datetime(2024, 3, 2, 18, 0)),
        MealPlanItem(id="2", title="Baked Oatmeal", meal="breakfast",
                     scheduled=datetime(2024, 3, 2, 8, 0)),
        MealPlanItem(id="3", title="Caesar Salad", meal="lunch",
                     scheduled=datetime(2024, 3, 2, 12, 0)),
        MealPlanItem(id="4", title="Granola Bar", meal="snacks",
                     scheduled=datetime(2024, 3, 15)),
        MealPlanItem(id="5", title="Beef Stew", meal="dinner",
                     scheduled=datetime(2024, 4, 1)),
        MealPlanItem(id="6", title="Mystery Leftovers", meal="brunch",
                     scheduled=datetime(2024, 3, 15)),
    ]
