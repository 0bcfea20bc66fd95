"""Recipe and ingredient records, plus catalog browsing helpers."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from rapidfuzz import fuzz, process

from .normalizer import normalize, search_terms

# Minimum rapidfuzz score for a typo suggestion
FUZZY_SUGGESTION_CUTOFF = 80


@dataclass(frozen=True)
class Ingredient:
    """An ingredient line. Only ``item`` takes part in matching."""

    item: str
    amount: str = ""
    unit: str | None = None
    notes: str | None = None

    def __str__(self) -> str:
        return format_ingredient(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict, omitting unset optional fields."""
        data: dict[str, Any] = {"amount": self.amount}
        if self.unit is not None:
            data["unit"] = self.unit
        data["item"] = self.item
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ingredient":
        """Create from dict."""
        item = data["item"]
        if not isinstance(item, str):
            raise TypeError(f"ingredient item must be a string, not {type(item).__name__}")
        return cls(
            item=item,
            amount=data.get("amount") or "",
            unit=data.get("unit"),
            notes=data.get("notes"),
        )

    def without_quantity(self) -> "Ingredient":
        """Copy with amount and unit blanked, as stored on a shopping list."""
        return replace(self, amount="", unit="")


@dataclass(frozen=True)
class Recipe:
    """A catalog recipe. Read-only as far as matching is concerned."""

    id: str
    title: str
    description: str = ""
    image: str = ""
    ingredients: list[Ingredient] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    date_added: str = ""
    prep_time: int | None = None  # minutes
    cook_time: int | None = None  # minutes
    servings: int | None = None
    category: str | None = None
    tags: list[str] | None = None
    try_this: list[str] | None = None  # tips, variations, substitutions

    @property
    def total_time(self) -> int | None:
        if self.prep_time is None and self.cook_time is None:
            return None
        return (self.prep_time or 0) + (self.cook_time or 0)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the catalog's JSON shape."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "instructions": list(self.instructions),
            "dateAdded": self.date_added,
        }
        optional = {
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "servings": self.servings,
            "category": self.category,
            "tags": list(self.tags) if self.tags is not None else None,
            "tryThis": list(self.try_this) if self.try_this is not None else None,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Recipe":
        """Create from the catalog's JSON shape."""
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description") or "",
            image=data.get("image") or "",
            ingredients=[Ingredient.from_dict(ing) for ing in data.get("ingredients", [])],
            instructions=list(data.get("instructions", [])),
            date_added=data.get("dateAdded") or "",
            prep_time=data.get("prepTime"),
            cook_time=data.get("cookTime"),
            servings=data.get("servings"),
            category=data.get("category"),
            tags=list(data["tags"]) if data.get("tags") is not None else None,
            try_this=list(data["tryThis"]) if data.get("tryThis") is not None else None,
        )


def format_ingredient(ingredient: Ingredient) -> str:
    """Format as "amount unit item", skipping empty parts."""
    parts = [ingredient.amount, ingredient.unit or "", ingredient.item]
    return " ".join(part for part in parts if part)


def filter_recipes(
    recipes: Sequence[Recipe],
    query: str = "",
    tags: Iterable[str] = (),
) -> list[Recipe]:
    """
    Filter the catalog by free-text query and tags.

    The query is matched case-insensitively against title, description,
    ingredient items and instructions. Every selected tag must be present.

    Args:
        recipes: Recipe catalog
        query: Search text (blank means no text filter)
        tags: Tags that must all be present

    Returns:
        Matching recipes in catalog order
    """
    needle = normalize(query)
    required_tags = list(tags)

    def matches_query(recipe: Recipe) -> bool:
        if not needle:
            return True
        haystacks = [recipe.title, recipe.description]
        haystacks.extend(ing.item for ing in recipe.ingredients)
        haystacks.extend(recipe.instructions)
        return any(needle in text.lower() for text in haystacks)

    def matches_tags(recipe: Recipe) -> bool:
        recipe_tags = recipe.tags or []
        return all(tag in recipe_tags for tag in required_tags)

    return [recipe for recipe in recipes if matches_query(recipe) and matches_tags(recipe)]


def all_tags(recipes: Iterable[Recipe]) -> list[str]:
    """Get the sorted set of tags used in the catalog."""
    tags: set[str] = set()
    for recipe in recipes:
        tags.update(recipe.tags or [])
    return sorted(tags)


def ingredient_vocabulary(recipes: Iterable[Recipe]) -> list[str]:
    """Get every searchable ingredient name in the catalog, sorted."""
    names: set[str] = set()
    for recipe in recipes:
        for ingredient in recipe.ingredients:
            names.update(search_terms(ingredient.item))
    return sorted(names)


def ingredient_suggestions(
    recipes: Iterable[Recipe],
    query: str,
    exclude: Iterable[str] = (),
    limit: int = 8,
) -> list[str]:
    """
    Suggest ingredient names for a search-as-you-type pantry box.

    Names containing the query come first. If none do, the closest names
    by fuzzy similarity are offered instead, so "tomatoe" still finds
    "tomato".

    Args:
        recipes: Recipe catalog to draw names from
        query: What the user has typed so far
        exclude: Names already chosen (compared case-insensitively)
        limit: Maximum number of suggestions

    Returns:
        Up to ``limit`` suggested names
    """
    needle = normalize(query)
    if not needle:
        return []

    excluded = {normalize(name) for name in exclude}
    vocabulary = [name for name in ingredient_vocabulary(recipes) if name not in excluded]

    suggestions = [name for name in vocabulary if needle in name]
    if suggestions:
        return suggestions[:limit]

    # No substring hit, fall back to typo tolerance
    ranked = process.extract(
        needle,
        vocabulary,
        scorer=fuzz.WRatio,
        limit=limit,
        score_cutoff=FUZZY_SUGGESTION_CUTOFF,
    )
    return [name for name, _score, _index in ranked]
