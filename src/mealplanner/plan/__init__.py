"""Shopping list aggregation over planned meals."""

from mealplanner.plan.shopping_list import (
    AccumulationMode,
    AggregatedIngredient,
    CategoryGroup,
    PlannedMeal,
    Recipe,
    RecipeIngredient,
    RecipeReference,
    ShoppingList,
    ShoppingListGenerator,
    generate_for_range,
    generate_monthly,
    generate_weekly,
    meals_in_range,
    month_range,
    week_range,
)

__all__ = [
    "AccumulationMode",
    "AggregatedIngredient",
    "CategoryGroup",
    "PlannedMeal",
    "Recipe",
    "RecipeIngredient",
    "RecipeReference",
    "ShoppingList",
    "ShoppingListGenerator",
    "generate_for_range",
    "generate_monthly",
    "generate_weekly",
    "meals_in_range",
    "month_range",
    "week_range",
]
