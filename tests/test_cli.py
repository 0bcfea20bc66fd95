"""Tests for the CLI module."""

import json

import click
import pytest
from click.testing import CliRunner

from dumb_recipes.cli import cli, parse_ingredient_option
from dumb_recipes.pantry import KitchenLists, load_kitchen_lists, save_kitchen_lists
from dumb_recipes.recipes import Ingredient


@pytest.fixture
def runner():
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def invoke(runner, catalog_file, kitchen_file):
    """Invoke the CLI against the temporary catalog and kitchen files."""

    def _invoke(*args: str, **kwargs):
        return runner.invoke(cli, ["--recipes", str(catalog_file), *args], **kwargs)

    return _invoke


def stock_kitchen(kitchen_file, pantry=(), shopping=()):
    save_kitchen_lists(
        KitchenLists(
            pantry=[Ingredient(item=name) for name in pantry],
            shopping_list=[Ingredient(item=name) for name in shopping],
        ),
        kitchen_file,
    )


def pantry_names(kitchen_file) -> list[str]:
    return [ing.item for ing in load_kitchen_lists(kitchen_file).pantry]


def shopping_names(kitchen_file) -> list[str]:
    return [ing.item for ing in load_kitchen_lists(kitchen_file).shopping_list]


# ============================================================================
# Main CLI Tests
# ============================================================================


class TestMainCli:
    """Tests for the main CLI group."""

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Dumb Recipes" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestParseIngredientOption:
    """Tests for --ingredient parsing."""

    def test_item_only(self):
        assert parse_ingredient_option("butter") == Ingredient(item="butter")

    def test_amount_and_item(self):
        assert parse_ingredient_option("2|eggs") == Ingredient(item="eggs", amount="2")

    def test_full(self):
        assert parse_ingredient_option("1 | cup | flour | sifted") == Ingredient(
            item="flour", amount="1", unit="cup", notes="sifted"
        )

    def test_empty_unit(self):
        assert parse_ingredient_option("2||slices bread") == Ingredient(
            item="slices bread", amount="2"
        )

    def test_blank_item_rejected(self):
        with pytest.raises(click.BadParameter):
            parse_ingredient_option("2|cup|")

    def test_too_many_parts(self):
        with pytest.raises(click.BadParameter):
            parse_ingredient_option("a|b|c|d|e")


# ============================================================================
# Recipe Command Tests
# ============================================================================


class TestRecipesCommands:
    """Tests for the recipes command group."""

    def test_list(self, invoke):
        result = invoke("recipes", "list")
        assert result.exit_code == 0
        assert "Garlic Pasta" in result.output
        assert "Beef Stew" in result.output
        assert "4 recipes" in result.output

    def test_list_search(self, invoke):
        result = invoke("recipes", "list", "-q", "garlic")
        assert result.exit_code == 0
        assert "Garlic Pasta" in result.output
        assert "Omelette" not in result.output
        assert "1 recipe" in result.output

    def test_list_tags(self, invoke):
        result = invoke("recipes", "list", "-t", "quick", "-t", "vegetarian")
        assert "Tomato Salad" in result.output
        assert "Omelette" in result.output
        assert "Garlic Pasta" not in result.output

    def test_list_no_match(self, invoke):
        result = invoke("recipes", "list", "-q", "durian")
        assert result.exit_code == 0
        assert "No recipes match" in result.output

    def test_list_unreadable_catalog(self, runner, tmp_path, kitchen_file):
        path = tmp_path / "broken.json"
        path.write_text("{{{")
        result = runner.invoke(cli, ["--recipes", str(path), "recipes", "list"])
        assert result.exit_code == 0
        assert "No recipes yet" in result.output

    def test_show_marks_owned_ingredients(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, pantry=["garlic"], shopping=["spaghetti"])
        result = invoke("recipes", "show", "garlic-pasta")
        assert result.exit_code == 0
        assert "RECIPE: Garlic Pasta" in result.output
        assert "✓  2. 3 cloves garlic, minced" in result.output
        assert "🛒 1. 200 g spaghetti" in result.output
        assert "Boil the pasta." in result.output

    def test_show_missing_recipe(self, invoke):
        result = invoke("recipes", "show", "nope")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_tags(self, invoke):
        result = invoke("recipes", "tags")
        assert "vegetarian" in result.output

    def test_add_and_delete(self, invoke, catalog_file):
        result = invoke(
            "recipes",
            "add",
            "--title",
            "Toast",
            "-i",
            "2||slices bread",
            "-i",
            "butter",
            "-s",
            "Toast it.",
            "-t",
            "quick",
        )
        assert result.exit_code == 0
        assert "Added 'Toast'" in result.output

        saved = json.loads(catalog_file.read_text())
        toast = saved[-1]
        assert toast["title"] == "Toast"
        assert toast["ingredients"][0] == {"amount": "2", "item": "slices bread"}
        assert toast["tags"] == ["quick"]

        result = invoke("recipes", "delete", toast["id"], "-y")
        assert result.exit_code == 0
        assert "Deleted 'Toast'" in result.output
        assert len(json.loads(catalog_file.read_text())) == 4

    def test_add_to_url_catalog_refused(self, runner, kitchen_file):
        result = runner.invoke(
            cli,
            ["--recipes", "https://recipes.example.com/r.json", "recipes", "add", "--title", "X"],
        )
        assert result.exit_code == 1
        assert "read-only" in result.output

    def test_delete_cancelled(self, invoke, catalog_file):
        result = invoke("recipes", "delete", "omelette", input="n\n")
        assert "Cancelled" in result.output
        assert len(json.loads(catalog_file.read_text())) == 4

    def test_add_to_unreadable_catalog_refused(self, runner, tmp_path, kitchen_file):
        path = tmp_path / "broken.json"
        path.write_text('[{"id": "a"}]')
        result = runner.invoke(cli, ["--recipes", str(path), "recipes", "add", "--title", "X"])
        assert result.exit_code == 1
        assert "refusing to overwrite" in result.output
        assert path.read_text() == '[{"id": "a"}]'


# ============================================================================
# Cook / Missing Command Tests
# ============================================================================


class TestCookCommand:
    """Tests for the cook command."""

    def test_empty_pantry(self, invoke):
        result = invoke("cook")
        assert result.exit_code == 0
        assert "pantry is empty" in result.output

    def test_ranks_recipes(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, pantry=["salt", "eggs"])
        result = invoke("cook")
        assert result.exit_code == 0
        assert "2 recipes found" in result.output
        assert result.output.index("Omelette") < result.output.index("Garlic Pasta")
        assert "missing 1 of 3" in result.output
        assert "Beef Stew" not in result.output

    def test_ready_to_cook(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, pantry=["eggs", "butter", "salt"])
        result = invoke("cook")
        assert "ready to cook" in result.output

    def test_nothing_matches(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, pantry=["durian"])
        result = invoke("cook")
        assert "No recipes use anything" in result.output


class TestMissingCommand:
    """Tests for the missing command."""

    def test_lists_missing(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, pantry=["garlic"])
        result = invoke("missing", "garlic-pasta")
        assert result.exit_code == 0
        assert "You need 3 more ingredients" in result.output
        assert "200 g spaghetti" in result.output
        assert shopping_names(kitchen_file) == []

    def test_shop_adds_core_names(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, pantry=["garlic"])
        result = invoke("missing", "garlic-pasta", "--shop")
        assert result.exit_code == 0
        assert "Added 3 item(s)" in result.output
        assert shopping_names(kitchen_file) == ["spaghetti", "olive oil", "salt"]

    def test_have_everything(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, pantry=["eggs", "butter", "salt"])
        result = invoke("missing", "omelette")
        assert "You have everything" in result.output


# ============================================================================
# Pantry Command Tests
# ============================================================================


class TestPantryCommands:
    """Tests for the pantry command group."""

    def test_list_empty(self, invoke):
        result = invoke("pantry", "list")
        assert "Pantry is empty" in result.output

    def test_add_skips_matches(self, invoke, kitchen_file):
        result = invoke("pantry", "add", "garlic", "olive oil")
        assert "Added 2 item(s)" in result.output

        result = invoke("pantry", "add", "garlic, minced")
        assert "Added 0 item(s)" in result.output
        assert "1 already in pantry" in result.output
        assert pantry_names(kitchen_file) == ["garlic", "olive oil"]

    def test_list(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, pantry=["salt", "rice"])
        result = invoke("pantry", "list")
        assert "Pantry (2 items)" in result.output
        assert "rice" in result.output

    def test_remove_all_matches(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, pantry=["sea salt", "table salt", "pepper"])
        result = invoke("pantry", "remove", "salt")
        assert "Removed 2 item(s)" in result.output
        assert pantry_names(kitchen_file) == ["pepper"]

    def test_clear(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, pantry=["salt"])
        result = invoke("pantry", "clear", "-y")
        assert "Pantry cleared" in result.output
        assert pantry_names(kitchen_file) == []

    def test_suggest(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, pantry=["oil"])
        result = invoke("pantry", "suggest", "oil")
        assert "olive oil" in result.output
        assert "  • oil\n" not in result.output

    def test_suggest_nothing(self, invoke):
        result = invoke("pantry", "suggest", "zzzzqqq")
        assert "No ingredients found" in result.output

    def test_toggle(self, invoke, kitchen_file):
        result = invoke("pantry", "toggle", "garlic-pasta", "2")
        assert result.exit_code == 0
        assert "Added 'garlic, minced' to pantry" in result.output
        assert pantry_names(kitchen_file) == ["garlic"]

        result = invoke("pantry", "toggle", "garlic-pasta", "2")
        assert "Removed 'garlic, minced' from pantry" in result.output
        assert pantry_names(kitchen_file) == []

    def test_toggle_bad_number(self, invoke):
        result = invoke("pantry", "toggle", "garlic-pasta", "9")
        assert result.exit_code == 1
        assert "has 4 ingredients" in result.output


# ============================================================================
# Shopping List Command Tests
# ============================================================================


class TestShopCommands:
    """Tests for the shop command group."""

    def test_add_and_list(self, invoke, kitchen_file):
        invoke("shop", "add", "flour", "sea salt")
        invoke("shop", "add", "salt")
        result = invoke("shop", "list")
        assert "Shopping list (2 items)" in result.output
        assert shopping_names(kitchen_file) == ["flour", "sea salt"]

    def test_remove(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, shopping=["sea salt", "table salt", "pepper"])
        result = invoke("shop", "remove", "salt")
        assert "Removed 2 item(s)" in result.output
        assert shopping_names(kitchen_file) == ["pepper"]

    def test_buy(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, shopping=["sea salt", "flour"])
        result = invoke("shop", "buy", "salt")
        assert result.exit_code == 0
        assert pantry_names(kitchen_file) == ["sea salt"]
        assert shopping_names(kitchen_file) == ["flour"]

    def test_buy_all(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, pantry=["salt"], shopping=["sea salt", "flour"])
        result = invoke("shop", "buy-all")
        assert "Moved 2 item(s)" in result.output
        assert pantry_names(kitchen_file) == ["salt", "flour"]
        assert shopping_names(kitchen_file) == []

    def test_clear(self, invoke, kitchen_file):
        stock_kitchen(kitchen_file, shopping=["flour"])
        result = invoke("shop", "clear", "-y")
        assert "Shopping list cleared" in result.output
        assert shopping_names(kitchen_file) == []

    def test_toggle(self, invoke, kitchen_file):
        invoke("shop", "toggle", "garlic-pasta", "3")
        assert shopping_names(kitchen_file) == ["olive oil"]

        invoke("shop", "toggle", "garlic-pasta", "3")
        assert shopping_names(kitchen_file) == []
