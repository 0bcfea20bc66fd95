"""Dumb Recipes - recipe browsing and "what can I cook" pantry matching."""

__version__ = "1.0.0"

from .matcher import matches, matches_any
from .normalizer import core_name, normalize, tokenize
from .pantry import (
    KitchenLists,
    add_if_absent,
    remove_matching,
    transfer_to_pantry,
    transfer_to_shopping_list,
)
from .recipe_store import RecipeStore, RecipeStoreError
from .recipes import Ingredient, Recipe
from .scoring import RecipeWithScore, missing_ingredient_details, score_recipes

__all__ = [
    "Ingredient",
    "Recipe",
    "RecipeStore",
    "RecipeStoreError",
    "RecipeWithScore",
    "KitchenLists",
    "normalize",
    "tokenize",
    "core_name",
    "matches",
    "matches_any",
    "score_recipes",
    "missing_ingredient_details",
    "add_if_absent",
    "remove_matching",
    "transfer_to_pantry",
    "transfer_to_shopping_list",
]
