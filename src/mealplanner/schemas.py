"""Schemas for quantities crossing the API boundary."""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from mealplanner.config import get_settings
from mealplanner.normalize.formatting import FormatMode, format_quantity, format_quantity_with_unit
from mealplanner.normalize.parsing import get_quantity_parser
from mealplanner.normalize.quantity import RationalQuantity
from mealplanner.normalize.storage import QuantityColumns, quantity_to_db
from mealplanner.normalize.units import Unit
from mealplanner.plan.shopping_list import (
    AggregatedIngredient,
    CategoryGroup,
    RecipeReference,
    ShoppingList,
)


def _display_options(mode: FormatMode | None) -> tuple[FormatMode, int]:
    settings = get_settings()
    return mode or settings.display_format, settings.display_decimal_places


class QuantityInput(BaseModel):
    """A quantity string and unit submitted by a user, e.g. {"quantity": "1 1/2", "unit": "cup"}."""

    quantity: str = Field(description="Quantity in the configured input mode")
    unit: Unit

    @field_validator("quantity")
    @classmethod
    def quantity_must_parse(cls, value: str) -> str:
        get_quantity_parser().parse(value)
        return value.strip()

    @field_validator("unit", mode="before")
    @classmethod
    def unit_from_alias(cls, value: object) -> Unit:
        return Unit.parse(value)

    def to_quantity(self) -> RationalQuantity:
        return get_quantity_parser().parse(self.quantity)

    def to_db(self) -> QuantityColumns:
        return quantity_to_db(self.to_quantity())


class QuantityOut(BaseModel):
    """A quantity with both its exact fields and its display string."""

    whole: int
    num: int
    denom: int
    display: str

    @classmethod
    def from_quantity(cls, q: RationalQuantity, mode: FormatMode | None = None) -> "QuantityOut":
        mode, places = _display_options(mode)
        return cls(whole=q.whole, num=q.num, denom=q.denom, display=format_quantity(q, mode, places))


class RecipeReferenceOut(BaseModel):
    recipe_name: str
    quantity: QuantityOut
    unit: str
    prep_notes: str | None = None

    @classmethod
    def from_reference(cls, ref: RecipeReference, mode: FormatMode | None = None) -> "RecipeReferenceOut":
        return cls(
            recipe_name=ref.recipe_name,
            quantity=QuantityOut.from_quantity(ref.quantity, mode),
            unit=ref.unit.value,
            prep_notes=ref.prep_notes,
        )


class AggregatedIngredientOut(BaseModel):
    """One shopping list line."""

    ingredient_id: int
    ingredient_name: str
    category: str | None = None
    quantity: QuantityOut
    unit: str
    display: str
    base_value: float
    base_unit: str
    accumulation: str
    prep_notes: list[str] = Field(default_factory=list)
    recipe_references: list[RecipeReferenceOut] = Field(default_factory=list)
    checked: bool = False

    @classmethod
    def from_ingredient(
        cls, ing: AggregatedIngredient, mode: FormatMode | None = None
    ) -> "AggregatedIngredientOut":
        mode, places = _display_options(mode)
        return cls(
            ingredient_id=ing.ingredient_id,
            ingredient_name=ing.ingredient_name,
            category=ing.category,
            quantity=QuantityOut.from_quantity(ing.quantity, mode),
            unit=ing.unit.value,
            display=format_quantity_with_unit(ing.combined_quantity(), ing.unit, "long", mode, places),
            base_value=ing.base_value,
            base_unit=ing.base_unit.value,
            accumulation=ing.accumulation.value,
            prep_notes=list(ing.prep_notes),
            recipe_references=[
                RecipeReferenceOut.from_reference(ref, mode) for ref in ing.recipe_references
            ],
            checked=ing.checked,
        )


class CategoryGroupOut(BaseModel):
    category: str
    display_order: int
    ingredients: list[AggregatedIngredientOut]

    @classmethod
    def from_group(cls, group: CategoryGroup, mode: FormatMode | None = None) -> "CategoryGroupOut":
        return cls(
            category=group.category,
            display_order=group.display_order,
            ingredients=[AggregatedIngredientOut.from_ingredient(ing, mode) for ing in group.ingredients],
        )


class ShoppingListOut(BaseModel):
    """Shopping list response."""

    start_date: date | None = None
    end_date: date | None = None
    total_meals: int
    ingredients_by_category: list[CategoryGroupOut]
    all_ingredients: list[AggregatedIngredientOut]

    @classmethod
    def from_shopping_list(cls, shopping_list: ShoppingList, mode: FormatMode | None = None) -> "ShoppingListOut":
        return cls(
            start_date=shopping_list.start_date,
            end_date=shopping_list.end_date,
            total_meals=shopping_list.total_meals,
            ingredients_by_category=[
                CategoryGroupOut.from_group(group, mode) for group in shopping_list.ingredients_by_category
            ],
            all_ingredients=[
                AggregatedIngredientOut.from_ingredient(ing, mode) for ing in shopping_list.all_ingredients
            ],
        )
