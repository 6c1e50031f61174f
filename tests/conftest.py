"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest

from mealplanner.config import get_settings
from mealplanner.normalize.quantity import RationalQuantity
from mealplanner.normalize.units import Unit
from mealplanner.plan.shopping_list import PlannedMeal, Recipe, RecipeIngredient

# =============================================================================
# Settings
# =============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Give every test fresh settings built from its own environment."""
    for name in (
        "QUANTITY_INPUT_MODE",
        "DISPLAY_FORMAT",
        "DISPLAY_DECIMAL_PLACES",
        "CONVERSION_FRACTION_RESOLUTION",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def decimal_mode(monkeypatch):
    """Switch the API boundary to decimal-only input."""
    monkeypatch.setenv("QUANTITY_INPUT_MODE", "decimal")
    get_settings.cache_clear()


# =============================================================================
# Recipe Fixtures
# =============================================================================


@pytest.fixture
def pancakes():
    """Pancakes, serves 4."""
    return Recipe(
        id=1,
        name="Pancakes",
        default_servings=4,
        ingredients=[
            RecipeIngredient(1, "Flour", RationalQuantity(2, 0, 1), Unit.CUP, category="Baking"),
            RecipeIngredient(2, "Milk", RationalQuantity(1, 1, 2), Unit.CUP, category="Dairy"),
            RecipeIngredient(3, "Butter", RationalQuantity(2, 0, 1), Unit.TBSP, "Dairy", "melted"),
        ],
    )


@pytest.fixture
def bread():
    """Bread, serves 2."""
    return Recipe(
        id=2,
        name="Bread",
        default_servings=2,
        ingredients=[
            RecipeIngredient(1, "Flour", RationalQuantity(1, 1, 2), Unit.CUP, category="Baking"),
            RecipeIngredient(4, "yeast", RationalQuantity(0, 1, 4), Unit.OZ, category=None),
            RecipeIngredient(2, "Milk", RationalQuantity(250), Unit.ML, "Dairy"),
        ],
    )


@pytest.fixture
def category_order():
    return {"Produce": 1, "Dairy": 2, "Baking": 3}


@pytest.fixture
def week_of_meals(pancakes, bread):
    return [
        PlannedMeal(pancakes, date(2024, 3, 4), "breakfast"),
        PlannedMeal(bread, date(2024, 3, 5), "lunch"),
        PlannedMeal(pancakes, date(2024, 3, 9), "breakfast", serving_override=2),
    ]
