"""Recipe catalog storage with a per-instance cache."""

import json
import logging
import random
import string
from datetime import datetime
from pathlib import Path
from typing import Any

import httpx

from .config import HTTP_TIMEOUT
from .recipes import Recipe

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 9

# Fields assigned by the store, never taken from caller data
_STORE_FIELDS = {"id", "dateAdded"}


class RecipeStoreError(Exception):
    """Exception raised for invalid recipe data."""

    pass


def generate_recipe_id() -> str:
    """Generate a short random base-36 id."""
    return "".join(random.choices(_ID_ALPHABET, k=_ID_LENGTH))


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class RecipeStore:
    """
    Recipe catalog backed by a JSON file or a read-only URL.

    The catalog is loaded on first use and cached for the life of the
    instance. A failed load is logged and treated as an empty catalog;
    it is not cached, so the next call tries again. Until a load succeeds,
    writes to a file source are refused so the unread catalog is never
    overwritten.
    """

    def __init__(self, source: str | Path, client: httpx.Client | None = None):
        self.source = str(source)
        self._client = client
        self._recipes: list[Recipe] = []
        self._loaded = False
        self._load_failed = False

    @property
    def is_read_only(self) -> bool:
        return is_url(self.source)

    def _fetch(self) -> Any:
        """Read the raw catalog JSON from the source."""
        if self.is_read_only:
            if self._client is not None:
                response = self._client.get(self.source)
            else:
                response = httpx.get(self.source, follow_redirects=True, timeout=HTTP_TIMEOUT)
            response.raise_for_status()
            return response.json()

        path = Path(self.source)
        if not path.exists():
            return []
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    def load_recipes(self) -> list[Recipe]:
        """
        Load the catalog, using the cache after the first success.

        Returns:
            All recipes, or an empty list if loading failed
        """
        if self._loaded:
            return self._recipes

        try:
            data = self._fetch()
            if not isinstance(data, list):
                raise ValueError("catalog is not a JSON array")
            recipes = [Recipe.from_dict(item) for item in data]
        except (OSError, httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            # ValueError covers json.JSONDecodeError
            logger.warning("Failed to load recipes from %s: %s", self.source, e)
            self._load_failed = True
            return []

        self._recipes = recipes
        self._loaded = True
        self._load_failed = False
        logger.debug("Loaded %d recipes from %s", len(recipes), self.source)
        return self._recipes

    def _ensure_writable(self) -> None:
        """Refuse to write a file source whose catalog could not be read."""
        if self._load_failed and not self.is_read_only:
            raise RecipeStoreError("catalog could not be loaded; refusing to overwrite")

    def get_all_recipes(self) -> list[Recipe]:
        """Get all recipes (loads on first call)."""
        return self.load_recipes()

    def get_recipe_by_id(self, recipe_id: str) -> Recipe | None:
        """Get a recipe by id, or None if absent."""
        for recipe in self.get_all_recipes():
            if recipe.id == recipe_id:
                return recipe
        return None

    def save_recipes(self, recipes: list[Recipe]) -> bool:
        """
        Replace the catalog.

        The cache is always updated. File sources are rewritten; URL sources
        are read-only and only the cache changes.

        Returns:
            True on success, False if the file could not be written

        Raises:
            RecipeStoreError: If the file catalog failed to load
        """
        self._ensure_writable()
        self._recipes = list(recipes)
        self._loaded = True

        if self.is_read_only:
            return True

        path = Path(self.source)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump([r.to_dict() for r in self._recipes], f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error("Failed to save recipes to %s: %s", self.source, e)
            return False
        return True

    def add_recipe(self, data: dict[str, Any]) -> Recipe:
        """
        Add a recipe, assigning a fresh id and the current time.

        Args:
            data: Recipe fields in catalog JSON shape (id/dateAdded ignored)

        Returns:
            The stored recipe

        Raises:
            RecipeStoreError: If the data is not a valid recipe, or the
                file catalog failed to load
        """
        recipes = self.get_all_recipes()
        self._ensure_writable()
        existing_ids = {r.id for r in recipes}

        recipe_id = generate_recipe_id()
        while recipe_id in existing_ids:
            recipe_id = generate_recipe_id()

        fields = {k: v for k, v in data.items() if k not in _STORE_FIELDS}
        fields.update({"id": recipe_id, "dateAdded": datetime.now().isoformat()})
        try:
            recipe = Recipe.from_dict(fields)
        except (KeyError, TypeError) as e:
            raise RecipeStoreError(f"Invalid recipe data: {e}") from e

        self.save_recipes([*recipes, recipe])
        return recipe

    def update_recipe(self, recipe_id: str, updates: dict[str, Any]) -> bool:
        """
        Merge updates into an existing recipe.

        Args:
            recipe_id: Id of the recipe to update
            updates: Fields to change, in catalog JSON shape

        Returns:
            False if no recipe has that id, otherwise the save result

        Raises:
            RecipeStoreError: If the merged data is invalid, or the file
                catalog failed to load
        """
        recipes = self.get_all_recipes()
        self._ensure_writable()
        for index, recipe in enumerate(recipes):
            if recipe.id == recipe_id:
                break
        else:
            return False

        merged = {**recipe.to_dict(), **updates, "id": recipe_id}
        try:
            updated = Recipe.from_dict(merged)
        except (KeyError, TypeError) as e:
            raise RecipeStoreError(f"Invalid recipe data: {e}") from e

        new_recipes = list(recipes)
        new_recipes[index] = updated
        return self.save_recipes(new_recipes)

    def delete_recipe(self, recipe_id: str) -> bool:
        """Delete a recipe. Returns False if no recipe has that id."""
        recipes = self.get_all_recipes()
        self._ensure_writable()
        remaining = [r for r in recipes if r.id != recipe_id]
        if len(remaining) == len(recipes):
            return False
        return self.save_recipes(remaining)
