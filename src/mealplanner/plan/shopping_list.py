"""Shopping list generation from meal plans."""

import calendar
import datetime
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from enum import Enum
from fractions import Fraction

from mealplanner.config import get_settings
from mealplanner.errors import CrossFamilyConversionError
from mealplanner.logging_config import get_logger
from mealplanner.normalize.quantity import RationalQuantity, add, multiply
from mealplanner.normalize.storage import db_to_quantity
from mealplanner.normalize.units import (
    Unit,
    from_base_units,
    measurement_type,
    round_to_fraction,
    to_base_units,
)

logger = get_logger(__name__)


# =============================================================================
# Inputs
# =============================================================================


@dataclass(frozen=True)
class RecipeIngredient:
    """One ingredient line of a recipe. ``unit`` accepts any spelling ``Unit.parse`` does."""

    ingredient_id: int
    ingredient_name: str
    quantity: RationalQuantity
    unit: Unit
    category: str | None = None
    prep_notes: str | None = None
    display_order: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit", Unit.parse(self.unit))

    @classmethod
    def from_db_row(
        cls,
        ingredient_id: int,
        ingredient_name: str,
        quantity_whole: int,
        quantity_num: int,
        quantity_denom: int,
        unit: str,
        prep_notes: str | None = None,
        display_order: int = 0,
        category: str | None = None,
    ) -> "RecipeIngredient":
        """Build an ingredient line from a persisted recipe-ingredient row."""
        return cls(
            ingredient_id=ingredient_id,
            ingredient_name=ingredient_name,
            quantity=db_to_quantity(quantity_whole, quantity_num, quantity_denom),
            unit=Unit.parse(unit),
            category=category,
            prep_notes=prep_notes or None,
            display_order=display_order,
        )


@dataclass(frozen=True)
class Recipe:
    """A recipe and the servings its quantities are written for."""

    id: int
    name: str
    default_servings: int
    ingredients: list[RecipeIngredient] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.default_servings <= 0:
            raise ValueError(f"Recipe {self.name!r} must serve at least one person")


@dataclass(frozen=True)
class PlannedMeal:
    """A recipe scheduled on a date, optionally for a different number of servings."""

    recipe: Recipe
    # Qualified: the field name shadows ``date`` inside the class body.
    date: datetime.date | None = None
    meal_type: str | None = None
    serving_override: int | None = None

    @property
    def servings(self) -> int:
        return self.serving_override or self.recipe.default_servings

    @property
    def scale_factor(self) -> Fraction:
        """Ratio of servings needed to the recipe's default servings, kept exact."""
        return Fraction(self.servings, self.recipe.default_servings)


# =============================================================================
# Aggregation
# =============================================================================


class AccumulationMode(str, Enum):
    """How an aggregated ingredient's total was reached."""

    # Every contribution used the display unit; ``quantity`` is the exact total.
    SAME_UNIT_SUM = "same_unit_sum"
    # Units differed; only ``base_value`` holds the full total.
    CROSS_UNIT_BASE_SUM = "cross_unit_base_sum"


@dataclass(frozen=True)
class RecipeReference:
    """One recipe's contribution to an aggregated ingredient."""

    recipe_name: str
    quantity: RationalQuantity
    unit: Unit
    prep_notes: str | None = None


@dataclass
class AggregatedIngredient:
    """An ingredient with quantities aggregated across planned meals."""

    ingredient_id: int
    ingredient_name: str
    quantity: RationalQuantity
    unit: Unit
    base_value: float
    base_unit: Unit
    category: str | None = None
    prep_notes: list[str] = field(default_factory=list)
    recipe_references: list[RecipeReference] = field(default_factory=list)
    accumulation: AccumulationMode = AccumulationMode.SAME_UNIT_SUM
    checked: bool = False

    @property
    def is_cross_unit(self) -> bool:
        return self.accumulation is AccumulationMode.CROSS_UNIT_BASE_SUM

    def add_prep_notes(self, prep_notes: str | None) -> None:
        if prep_notes and prep_notes not in self.prep_notes:
            self.prep_notes.append(prep_notes)

    def combined_quantity(self, resolution: int | None = None) -> RationalQuantity:
        """
        The full total expressed in the display unit.

        Same-unit totals are exact. Cross-unit totals are converted back from
        the base value and rounded to the nearest 1/16.
        """
        if not self.is_cross_unit:
            return self.quantity
        resolution = resolution or get_settings().conversion_fraction_resolution
        return round_to_fraction(from_base_units(self.base_value, self.base_unit, self.unit), resolution)


@dataclass(frozen=True)
class CategoryGroup:
    """Ingredients of one category, in display order."""

    category: str
    display_order: int
    ingredients: list[AggregatedIngredient]


@dataclass(frozen=True)
class ShoppingList:
    """Aggregated shopping list for a date range."""

    start_date: date | None
    end_date: date | None
    total_meals: int
    ingredients_by_category: list[CategoryGroup] = field(default_factory=list)
    all_ingredients: list[AggregatedIngredient] = field(default_factory=list)

    def find(self, ingredient_id: int) -> AggregatedIngredient | None:
        for ingredient in self.all_ingredients:
            if ingredient.ingredient_id == ingredient_id:
                return ingredient
        return None

    def with_checks(self, checks: Mapping[int, bool]) -> "ShoppingList":
        """Return a copy with items marked checked by ingredient id. The source list is left as is."""
        marked = {
            ing.ingredient_id: replace(
                ing,
                prep_notes=list(ing.prep_notes),
                recipe_references=list(ing.recipe_references),
                checked=checks.get(ing.ingredient_id, False),
            )
            for ing in self.all_ingredients
        }
        return replace(
            self,
            ingredients_by_category=[
                replace(group, ingredients=[marked[ing.ingredient_id] for ing in group.ingredients])
                for group in self.ingredients_by_category
            ],
            all_ingredients=[marked[ing.ingredient_id] for ing in self.all_ingredients],
        )


def _sort_key(ingredient: AggregatedIngredient) -> tuple[str, str]:
    return ingredient.ingredient_name.casefold(), ingredient.ingredient_name


class ShoppingListGenerator:
    """
    Generates shopping lists from planned meals with:
    - Exact scaling by serving overrides
    - Exact fraction sums for ingredients used in the same unit
    - Base-unit sums (ml or g) when the same ingredient appears in different units
    - Grouping by category in a caller-supplied display order
    """

    def __init__(
        self,
        default_category: str | None = None,
        unranked_category_order: int | None = None,
    ):
        settings = get_settings()
        self.default_category = default_category or settings.default_category
        self.unranked_category_order = (
            unranked_category_order
            if unranked_category_order is not None
            else settings.unranked_category_order
        )

    def generate(
        self,
        meals: Iterable[PlannedMeal],
        category_order: Mapping[str, int] | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> ShoppingList:
        """
        Generate a shopping list from planned meals.

        Args:
            meals: Meals to shop for, each with its recipe and servings.
            category_order: Display order by category name; unknown categories sort last.
            start_date: Start of the covered date range.
            end_date: End of the covered date range.

        Returns:
            ShoppingList with ingredients grouped by category and sorted by name.

        Raises:
            CrossFamilyConversionError: An ingredient is used by volume in one
                recipe and by mass in another.
        """
        meals = list(meals)
        logger.info(f"Generating shopping list for {len(meals)} meals ({start_date} - {end_date})")

        aggregated = self._aggregate_meals(meals)
        ingredients = sorted(aggregated.values(), key=_sort_key)
        groups = self._group_by_category(ingredients, category_order or {})

        logger.info(
            f"Generated shopping list: {len(ingredients)} ingredients "
            f"in {len(groups)} categories"
        )

        return ShoppingList(
            start_date=start_date,
            end_date=end_date,
            total_meals=len(meals),
            ingredients_by_category=groups,
            all_ingredients=ingredients,
        )

    def _aggregate_meals(self, meals: list[PlannedMeal]) -> dict[int, AggregatedIngredient]:
        """Aggregate every ingredient of every meal, keyed by ingredient id."""
        aggregated: dict[int, AggregatedIngredient] = {}

        for meal in meals:
            scale_factor = meal.scale_factor

            for recipe_ing in meal.recipe.ingredients:
                scaled = multiply(recipe_ing.quantity, scale_factor)

                agg = aggregated.get(recipe_ing.ingredient_id)
                if agg is None:
                    agg = self._seed(recipe_ing, scaled)
                    aggregated[recipe_ing.ingredient_id] = agg
                else:
                    self._accumulate(agg, scaled, recipe_ing.unit)
                    agg.add_prep_notes(recipe_ing.prep_notes)

                agg.recipe_references.append(
                    RecipeReference(
                        recipe_name=meal.recipe.name,
                        quantity=scaled,
                        unit=recipe_ing.unit,
                        prep_notes=recipe_ing.prep_notes,
                    )
                )

        return aggregated

    def _seed(self, recipe_ing: RecipeIngredient, scaled: RationalQuantity) -> AggregatedIngredient:
        base = to_base_units(scaled, recipe_ing.unit)
        return AggregatedIngredient(
            ingredient_id=recipe_ing.ingredient_id,
            ingredient_name=recipe_ing.ingredient_name,
            quantity=scaled,
            unit=recipe_ing.unit,
            base_value=base.value,
            base_unit=base.unit,
            category=recipe_ing.category,
            prep_notes=[recipe_ing.prep_notes] if recipe_ing.prep_notes else [],
        )

    def _accumulate(self, agg: AggregatedIngredient, scaled: RationalQuantity, unit: Unit) -> None:
        """Fold one scaled contribution into an aggregated ingredient."""
        if measurement_type(unit) != measurement_type(agg.unit):
            logger.warning(
                f"Ingredient {agg.ingredient_name!r} is measured in both {agg.unit} and {unit}"
            )
            raise CrossFamilyConversionError(
                agg.unit,
                unit,
                f"Cannot combine {agg.unit} and {unit} for ingredient {agg.ingredient_name!r}",
            )

        contribution = to_base_units(scaled, unit)

        if unit == agg.unit:
            agg.quantity = add(agg.quantity, scaled)
            if agg.is_cross_unit:
                agg.base_value = round(agg.base_value + contribution.value, 2)
            else:
                agg.base_value = to_base_units(agg.quantity, agg.unit).value
            return

        # Display quantity and unit stay as first seen; the base value carries the total.
        logger.debug(
            f"Combining {agg.ingredient_name!r} across units {agg.unit} and {unit} "
            f"in {agg.base_unit}"
        )
        agg.base_value = round(agg.base_value + contribution.value, 2)
        agg.accumulation = AccumulationMode.CROSS_UNIT_BASE_SUM

    def _group_by_category(
        self,
        ingredients: list[AggregatedIngredient],
        category_order: Mapping[str, int],
    ) -> list[CategoryGroup]:
        """Group sorted ingredients by category and order the groups."""
        categories: dict[str, list[AggregatedIngredient]] = {}
        for ing in ingredients:
            categories.setdefault(ing.category or self.default_category, []).append(ing)

        groups = [
            CategoryGroup(
                category=name,
                display_order=category_order.get(name, self.unranked_category_order),
                ingredients=items,
            )
            for name, items in categories.items()
        ]
        return sorted(groups, key=lambda group: (group.display_order, group.category.casefold()))


# =============================================================================
# Date Ranges
# =============================================================================


def week_range(start: date) -> tuple[date, date]:
    """Seven-day window beginning on ``start``, both ends inclusive."""
    return start, start + timedelta(days=6)


def month_range(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def meals_in_range(meals: Iterable[PlannedMeal], start: date, end: date) -> list[PlannedMeal]:
    """Meals dated within [start, end]; undated meals are skipped."""
    return [meal for meal in meals if meal.date is not None and start <= meal.date <= end]


def generate_for_range(
    meals: Iterable[PlannedMeal],
    start: date,
    end: date,
    category_order: Mapping[str, int] | None = None,
    generator: ShoppingListGenerator | None = None,
) -> ShoppingList:
    """Generate a shopping list for the meals falling in a date range."""
    generator = generator or ShoppingListGenerator()
    return generator.generate(meals_in_range(meals, start, end), category_order, start, end)


def generate_weekly(
    meals: Iterable[PlannedMeal],
    start: date,
    category_order: Mapping[str, int] | None = None,
) -> ShoppingList:
    return generate_for_range(meals, *week_range(start), category_order=category_order)


def generate_monthly(
    meals: Iterable[PlannedMeal],
    year: int,
    month: int,
    category_order: Mapping[str, int] | None = None,
) -> ShoppingList:
    return generate_for_range(meals, *month_range(year, month), category_order=category_order)
