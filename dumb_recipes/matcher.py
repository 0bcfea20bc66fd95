"""Ingredient name matching: decide whether two names refer to the same ingredient."""

from collections.abc import Iterable

from .normalizer import normalize, tokenize


def words_overlap(words_a: list[str], words_b: list[str]) -> bool:
    """Check if any word of one list is contained in any word of the other."""
    return any(a in b or b in a for a in words_a for b in words_b)


def matches(a: str, b: str) -> bool:
    """
    Check if two ingredient names refer to the same ingredient.

    Rules, first hit wins:
    - exact match after trimming and lowercasing
    - substring match, e.g. "salt" and "sea salt"
    - word overlap, e.g. "chicken thighs" and "boneless chicken"
      (only words longer than two characters count)

    The relation is symmetric but not transitive: "oil" ~ "olive oil" and
    "olive oil" ~ "olives", yet "oil" does not match "olives". Grouping
    must compare against every existing entry, not against a class.

    An empty name is a substring of everything and therefore matches
    any name. Callers filter out blank names before matching.

    Args:
        a: First ingredient name
        b: Second ingredient name

    Returns:
        True if the names match
    """
    norm_a = normalize(a)
    norm_b = normalize(b)

    if norm_a == norm_b:
        return True

    if norm_a in norm_b or norm_b in norm_a:
        return True

    return words_overlap(tokenize(norm_a), tokenize(norm_b))


def matches_any(name: str, candidates: Iterable[str]) -> bool:
    """Check if a name matches at least one of the candidates."""
    return any(matches(name, candidate) for candidate in candidates)


def find_matches(name: str, candidates: Iterable[str]) -> list[str]:
    """Get every candidate that matches the name, in candidate order."""
    return [candidate for candidate in candidates if matches(name, candidate)]
