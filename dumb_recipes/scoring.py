"""Rank recipes by how much of them the pantry already covers."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .matcher import matches, matches_any
from .recipes import Ingredient, Recipe


@dataclass
class RecipeWithScore:
    """A recipe together with its pantry coverage. Never persisted."""

    recipe: Recipe
    matching_ingredients: list[str] = field(default_factory=list)
    missing_ingredients: int = 0
    total_ingredients: int = 0

    @property
    def sort_key(self) -> tuple[int, int]:
        return self.missing_ingredients, self.total_ingredients


def _item_names(items: Iterable[Ingredient | str]) -> list[str]:
    """Get usable names from pantry entries, skipping blank ones."""
    names = []
    for entry in items:
        name = entry.item if isinstance(entry, Ingredient) else entry
        name = name.strip().lower()
        if name:
            names.append(name)
    return names


def score_recipe(recipe: Recipe, pantry_items: Iterable[Ingredient | str]) -> RecipeWithScore:
    """
    Score a single recipe against the pantry.

    A pantry item counts once if it matches any recipe ingredient. Matching
    is many-to-many, so ``missing_ingredients`` is the ingredient count minus
    the number of pantry items that hit, which can go below zero when several
    pantry items hit the same ingredient. That arithmetic is kept as-is.

    Args:
        recipe: Recipe to score
        pantry_items: Owned ingredients, as names or Ingredient records

    Returns:
        RecipeWithScore for the recipe
    """
    recipe_items = [ing.item for ing in recipe.ingredients if ing.item.strip()]
    matching = [name for name in _item_names(pantry_items) if matches_any(name, recipe_items)]
    total = len(recipe.ingredients)
    return RecipeWithScore(
        recipe=recipe,
        matching_ingredients=matching,
        missing_ingredients=total - len(matching),
        total_ingredients=total,
    )


def score_recipes(
    pantry_items: Iterable[Ingredient | str],
    recipes: Sequence[Recipe],
) -> list[RecipeWithScore]:
    """
    Rank recipes by pantry coverage.

    Recipes without a single matching ingredient are left out. The rest are
    ordered by fewest missing ingredients, then fewest ingredients overall;
    ties keep catalog order.

    Args:
        pantry_items: Owned ingredients, as names or Ingredient records
        recipes: Recipe catalog

    Returns:
        Scored recipes, best first
    """
    names = _item_names(pantry_items)
    if not names:
        return []

    scored = [score_recipe(recipe, names) for recipe in recipes]
    # sorted() is stable, so equal keys keep catalog order
    return sorted(
        (entry for entry in scored if entry.matching_ingredients),
        key=lambda entry: entry.sort_key,
    )


def has_ingredient(ingredient: Ingredient, pantry_items: Iterable[Ingredient | str]) -> bool:
    """Check if any pantry item matches the ingredient."""
    if not ingredient.item.strip():
        return False
    return any(matches(name, ingredient.item) for name in _item_names(pantry_items))


def missing_ingredient_details(
    recipe: Recipe,
    pantry_items: Iterable[Ingredient | str],
) -> list[Ingredient]:
    """
    Get the recipe ingredients no pantry item matches.

    Args:
        recipe: Recipe to check
        pantry_items: Owned ingredients, as names or Ingredient records

    Returns:
        Missing ingredients in recipe order
    """
    names = _item_names(pantry_items)
    return [ing for ing in recipe.ingredients if not has_ingredient(ing, names)]
