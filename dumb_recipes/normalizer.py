"""Ingredient name normalization: lowercasing, tokenizing and core-name extraction."""

import re

# Tokens of this length or shorter never take part in word-overlap matching
MIN_TOKEN_LENGTH = 3

_TOKEN_SPLIT = re.compile(r"[\s,]+")
_PARENTHETICAL = re.compile(r"\([^)]*\)")

# Descriptive words dropped when reducing a recipe ingredient to its core name
FILLER_WORDS: frozenset[str] = frozenset(
    {
        # Freshness
        "fresh",
        "dried",
        "frozen",
        "canned",
        # Preparation state
        "ground",
        "whole",
        "chopped",
        "minced",
        "sliced",
        "diced",
        "grated",
        "shredded",
        "cooked",
        "raw",
        # Quality
        "organic",
        "free-range",
        "extra",
        "virgin",
        "kosher",
        "sea",
        "table",
        "fine",
        "coarse",
        # Size
        "large",
        "small",
        "medium",
        # Filler
        "about",
        "approximately",
        "or",
        "to",
        "taste",
    }
)

# Base ingredients that are offered as search suggestions on their own,
# e.g. "garlic" from "garlic, minced"
CORE_INGREDIENTS: frozenset[str] = frozenset(
    {
        "flour",
        "sugar",
        "salt",
        "pepper",
        "oil",
        "butter",
        "milk",
        "cream",
        "cheese",
        "eggs",
        "egg",
        "water",
        "vinegar",
        "wine",
        "beer",
        "stock",
        "broth",
        "honey",
        "garlic",
        "onion",
        "onions",
        "ginger",
        "lemon",
        "lime",
        "tomato",
        "tomatoes",
        "potato",
        "potatoes",
        "carrot",
        "carrots",
        "celery",
        "mushrooms",
        "mushroom",
        "chicken",
        "beef",
        "pork",
        "fish",
        "salmon",
        "shrimp",
        "pasta",
        "rice",
        "bread",
        "basil",
        "oregano",
        "thyme",
        "rosemary",
        "parsley",
        "cilantro",
        "spinach",
        "lettuce",
    }
)


def normalize(raw: str) -> str:
    """Lowercase and trim an ingredient name."""
    return raw.strip().lower()


def split_words(raw: str) -> list[str]:
    """Split on whitespace and commas, dropping empty pieces."""
    return [word for word in _TOKEN_SPLIT.split(raw) if word]


def tokenize(raw: str) -> list[str]:
    """
    Split an ingredient name into significant words.

    Words of two characters or fewer ("ox", "up", "of") are discarded,
    they are too short to say anything about the ingredient.

    Args:
        raw: Ingredient name as typed or stored

    Returns:
        Lowercase words longer than two characters, in order
    """
    return [word for word in split_words(normalize(raw)) if len(word) >= MIN_TOKEN_LENGTH]


def strip_parentheticals(raw: str) -> str:
    """Remove "(...)" groups, e.g. "butter (softened)" -> "butter"."""
    return _PARENTHETICAL.sub("", raw).strip()


def clean_name(raw: str) -> str:
    """Normalize and strip parentheticals."""
    return strip_parentheticals(normalize(raw))


def core_name(raw: str) -> str:
    """
    Reduce a descriptive ingredient phrase to its core name.

    Used when an ingredient moves from a recipe into the pantry or the
    shopping list, where "fresh chopped basil" should become "basil".

    Args:
        raw: Ingredient phrase from a recipe

    Returns:
        Remaining words joined by single spaces, or the cleaned phrase
        itself if every word was filler
    """
    cleaned = clean_name(raw)
    words = [word for word in split_words(cleaned) if len(word) > 1 and word not in FILLER_WORDS]
    if words:
        return " ".join(words)
    # Every word was filler; keep something rather than nothing
    return cleaned or normalize(raw) or raw


def search_terms(raw: str) -> list[str]:
    """
    Get the names an ingredient can be found under when searching.

    The full cleaned name comes first, followed by any base ingredient
    words it contains.
    """
    cleaned = clean_name(raw)
    if not cleaned:
        return []

    terms = [cleaned]
    for word in tokenize(cleaned):
        if word in CORE_INGREDIENTS and word not in terms:
            terms.append(word)
    return terms
