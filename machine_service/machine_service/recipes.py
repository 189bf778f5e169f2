"""Ingredients required for each drink."""

from typing import NamedTuple

from .schemas import DrinkType


class Recipe(NamedTuple):
    beans: int
    milk: int


RECIPES: dict[DrinkType, Recipe] = {
    DrinkType.ESPRESSO: Recipe(beans=1, milk=0),
    DrinkType.COFFEE: Recipe(beans=2, milk=1),
    DrinkType.CAPPUCCINO: Recipe(beans=1, milk=2),
}


def recipe_for(drink_type: str) -> Recipe | None:
    """Return the recipe for ``drink_type``, or None if there is none."""
    try:
        return RECIPES[DrinkType(drink_type)]
    except ValueError:
        return None
