"""Shared fixtures for dumb-recipes tests."""

import json

import pytest
import respx

from dumb_recipes.recipes import Ingredient, Recipe


@pytest.fixture
def mock_httpx():
    """Activate respx mock for HTTP requests."""
    with respx.mock(assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
def garlic_pasta() -> Recipe:
    return Recipe(
        id="garlic-pasta",
        title="Garlic Pasta",
        description="Spaghetti with a quick oil sauce.",
        ingredients=[
            Ingredient(item="spaghetti", amount="200", unit="g"),
            Ingredient(item="garlic, minced", amount="3", unit="cloves"),
            Ingredient(item="extra virgin olive oil", amount="3", unit="tbsp"),
            Ingredient(item="salt", amount="", notes="to taste"),
        ],
        instructions=["Boil the pasta.", "Warm the oil and toss everything together."],
        date_added="2025-01-05T10:00:00",
        prep_time=5,
        cook_time=12,
        servings=2,
        category="Dinner",
        tags=["pasta", "quick"],
    )


@pytest.fixture
def tomato_salad() -> Recipe:
    return Recipe(
        id="tomato-salad",
        title="Tomato Salad",
        description="Ripe tomatoes, nothing else to it.",
        ingredients=[
            Ingredient(item="tomatoes", amount="4"),
            Ingredient(item="red onion", amount="1/2"),
            Ingredient(item="olive oil", amount="2", unit="tbsp"),
        ],
        instructions=["Slice and dress."],
        date_added="2025-01-06T10:00:00",
        tags=["salad", "quick", "vegetarian"],
    )


@pytest.fixture
def omelette() -> Recipe:
    return Recipe(
        id="omelette",
        title="Omelette",
        description="Breakfast in five minutes.",
        ingredients=[
            Ingredient(item="eggs", amount="3"),
            Ingredient(item="butter", amount="1", unit="tbsp"),
            Ingredient(item="salt", amount="1", unit="pinch"),
        ],
        instructions=["Whisk the eggs.", "Fry in butter."],
        date_added="2025-01-07T10:00:00",
        tags=["breakfast", "quick", "vegetarian"],
        try_this=["Add cheese before folding."],
    )


@pytest.fixture
def beef_stew() -> Recipe:
    return Recipe(
        id="beef-stew",
        title="Beef Stew",
        description="Slow and hearty.",
        ingredients=[
            Ingredient(item="beef chuck", amount="1", unit="kg"),
            Ingredient(item="carrots", amount="3"),
            Ingredient(item="potatoes", amount="4"),
            Ingredient(item="beef stock", amount="1", unit="l"),
        ],
        instructions=["Brown the beef.", "Simmer for two hours."],
        date_added="2025-01-08T10:00:00",
        tags=["dinner"],
    )


@pytest.fixture
def catalog(garlic_pasta, tomato_salad, omelette, beef_stew) -> list[Recipe]:
    """Recipe catalog in catalog order."""
    return [garlic_pasta, tomato_salad, omelette, beef_stew]


@pytest.fixture
def catalog_file(tmp_path, catalog):
    """Write the catalog to a JSON file."""
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps([r.to_dict() for r in catalog]), encoding="utf-8")
    return path


@pytest.fixture
def kitchen_file(tmp_path, monkeypatch):
    """Point the CLI at a temporary kitchen file."""
    path = tmp_path / "kitchen.json"
    monkeypatch.setattr("dumb_recipes.cli.KITCHEN_FILE", path)
    return path
