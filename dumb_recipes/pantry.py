"""Pantry and shopping list management, keyed by ingredient match rather than exact name."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path

from .matcher import matches
from .normalizer import core_name
from .recipes import Ingredient, Recipe
from .scoring import missing_ingredient_details


@dataclass
class KitchenLists:
    """The user's pantry and shopping list.

    Neither list holds two entries that match each other. That is enforced
    when entries are added, not re-checked afterwards.
    """

    pantry: list[Ingredient] = field(default_factory=list)
    shopping_list: list[Ingredient] = field(default_factory=list)
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "version": 1,
            "pantry": [ing.to_dict() for ing in self.pantry],
            "shopping_list": [ing.to_dict() for ing in self.shopping_list],
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> KitchenLists:
        """Create from dict."""
        updated_at = None
        if data.get("updated_at"):
            updated_at = datetime.fromisoformat(data["updated_at"])

        return cls(
            pantry=[Ingredient.from_dict(ing) for ing in data.get("pantry", [])],
            shopping_list=[Ingredient.from_dict(ing) for ing in data.get("shopping_list", [])],
            updated_at=updated_at,
        )


def load_kitchen_lists(kitchen_file: Path) -> KitchenLists:
    """Load pantry and shopping list from disk."""
    if not kitchen_file.exists():
        return KitchenLists()

    try:
        with open(kitchen_file, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            return KitchenLists()
        return KitchenLists.from_dict(data)
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError):
        return KitchenLists()


def save_kitchen_lists(lists: KitchenLists, kitchen_file: Path) -> None:
    """Save pantry and shopping list to disk."""
    lists.updated_at = datetime.now()
    kitchen_file.parent.mkdir(parents=True, exist_ok=True)
    with open(kitchen_file, "w", encoding="utf-8") as f:
        json.dump(lists.to_dict(), f, indent=2, ensure_ascii=False)


# =============================================================================
# List operations
#
# Each returns a new list; the input is never modified.
# =============================================================================


def _is_blank(ingredient: Ingredient) -> bool:
    return not ingredient.item.strip()


def contains_match(items: Iterable[Ingredient], ingredient: Ingredient) -> bool:
    """Check if any entry matches the ingredient."""
    if _is_blank(ingredient):
        return False
    return any(matches(existing.item, ingredient.item) for existing in items)


def add_if_absent(items: Sequence[Ingredient], ingredient: Ingredient) -> list[Ingredient]:
    """
    Append an ingredient unless an entry already matches it.

    A duplicate by match is dropped silently, as is a blank name.

    Args:
        items: Current list
        ingredient: Ingredient to add

    Returns:
        New list, with the ingredient appended if it was absent
    """
    if _is_blank(ingredient) or contains_match(items, ingredient):
        return list(items)
    return [*items, ingredient]


def remove_matching(items: Sequence[Ingredient], ingredient: Ingredient) -> list[Ingredient]:
    """
    Remove every entry that matches the ingredient.

    Removing "salt" from ["sea salt", "table salt", "pepper"] leaves
    ["pepper"].
    """
    if _is_blank(ingredient):
        return list(items)
    return [existing for existing in items if not matches(existing.item, ingredient.item)]


def to_shopping_list_item(ingredient: Ingredient) -> Ingredient:
    """Drop amount and unit; a shopping list only records what to buy."""
    return ingredient.without_quantity()


def from_recipe(ingredient: Ingredient) -> Ingredient:
    """Reduce a recipe ingredient to its core name before it enters a list."""
    return replace(ingredient, item=core_name(ingredient.item))


# =============================================================================
# Pantry / shopping list transfers
# =============================================================================


def add_to_pantry(lists: KitchenLists, ingredient: Ingredient) -> KitchenLists:
    """Add an ingredient to the pantry."""
    return replace(lists, pantry=add_if_absent(lists.pantry, ingredient))


def remove_from_pantry(lists: KitchenLists, ingredient: Ingredient) -> KitchenLists:
    """Remove every pantry entry matching the ingredient."""
    return replace(lists, pantry=remove_matching(lists.pantry, ingredient))


def remove_from_shopping_list(lists: KitchenLists, ingredient: Ingredient) -> KitchenLists:
    """Remove every shopping list entry matching the ingredient."""
    return replace(lists, shopping_list=remove_matching(lists.shopping_list, ingredient))


def transfer_to_shopping_list(lists: KitchenLists, ingredient: Ingredient) -> KitchenLists:
    """Put an ingredient on the shopping list, without amount and unit."""
    item = to_shopping_list_item(ingredient)
    return replace(lists, shopping_list=add_if_absent(lists.shopping_list, item))


def transfer_to_pantry(lists: KitchenLists, ingredient: Ingredient) -> KitchenLists:
    """
    Add an ingredient to the pantry and cross it off the shopping list.

    Once you have something you no longer need to buy it, so every
    matching shopping list entry goes.
    """
    return KitchenLists(
        pantry=add_if_absent(lists.pantry, ingredient),
        shopping_list=remove_matching(lists.shopping_list, ingredient),
        updated_at=lists.updated_at,
    )


def move_all_to_pantry(lists: KitchenLists) -> KitchenLists:
    """Move the whole shopping list into the pantry and empty it."""
    pantry = list(lists.pantry)
    for item in lists.shopping_list:
        pantry = add_if_absent(pantry, item)
    return KitchenLists(pantry=pantry, shopping_list=[], updated_at=lists.updated_at)


def clear_pantry(lists: KitchenLists) -> KitchenLists:
    return replace(lists, pantry=[])


def clear_shopping_list(lists: KitchenLists) -> KitchenLists:
    return replace(lists, shopping_list=[])


def _with_core_name(ingredient: Ingredient) -> list[Ingredient]:
    """The ingredient as shown in the recipe and as it is stored in a list."""
    reduced = from_recipe(ingredient)
    return [ingredient] if reduced.item == ingredient.item else [ingredient, reduced]


def _toggle(items: Sequence[Ingredient], ingredient: Ingredient) -> list[Ingredient] | None:
    """Remove the ingredient from the list if present; None if it was absent."""
    forms = _with_core_name(ingredient)
    if not any(contains_match(items, form) for form in forms):
        return None
    for form in forms:
        items = remove_matching(items, form)
    return list(items)


def toggle_pantry(lists: KitchenLists, ingredient: Ingredient) -> KitchenLists:
    """
    Flip whether the pantry has a recipe ingredient.

    Presence is checked by match against both the recipe name and its core
    name, which is what gets stored. Toggling twice therefore restores the
    pantry even when the two spellings no longer match each other, as with
    "ox, kg" stored as "ox kg".

    Args:
        lists: Current pantry and shopping list
        ingredient: Ingredient as shown in a recipe

    Returns:
        Updated lists
    """
    pantry = _toggle(lists.pantry, ingredient)
    if pantry is not None:
        return replace(lists, pantry=pantry)
    return transfer_to_pantry(lists, from_recipe(ingredient))


def toggle_shopping_list(lists: KitchenLists, ingredient: Ingredient) -> KitchenLists:
    """Flip whether a recipe ingredient is on the shopping list."""
    shopping_list = _toggle(lists.shopping_list, ingredient)
    if shopping_list is not None:
        return replace(lists, shopping_list=shopping_list)
    return transfer_to_shopping_list(lists, from_recipe(ingredient))


def add_missing_to_shopping_list(lists: KitchenLists, recipe: Recipe) -> KitchenLists:
    """Put every ingredient the pantry lacks for a recipe on the shopping list."""
    for ingredient in missing_ingredient_details(recipe, lists.pantry):
        lists = transfer_to_shopping_list(lists, from_recipe(ingredient))
    return lists
