"""CLI entry point for Dumb Recipes."""

import logging

import click

from . import __version__
from .config import KITCHEN_FILE, RECIPES_SOURCE, SUGGESTION_LIMIT
from .pantry import (
    KitchenLists,
    add_missing_to_shopping_list,
    add_to_pantry,
    clear_pantry,
    clear_shopping_list,
    contains_match,
    load_kitchen_lists,
    move_all_to_pantry,
    remove_from_pantry,
    remove_from_shopping_list,
    save_kitchen_lists,
    toggle_pantry,
    toggle_shopping_list,
    transfer_to_pantry,
    transfer_to_shopping_list,
)
from .recipe_store import RecipeStore, RecipeStoreError
from .recipes import Ingredient, Recipe, all_tags, filter_recipes, ingredient_suggestions
from .scoring import missing_ingredient_details, score_recipes


def get_store(ctx: click.Context) -> RecipeStore:
    """Get the recipe store created for this invocation."""
    return ctx.find_root().obj["store"]


def get_recipe_or_exit(store: RecipeStore, recipe_id: str) -> Recipe:
    recipe = store.get_recipe_by_id(recipe_id)
    if recipe is None:
        click.echo(f"✗ Recipe '{recipe_id}' not found.", err=True)
        raise SystemExit(1)
    return recipe


def get_ingredient_or_exit(recipe: Recipe, number: int) -> Ingredient:
    if not 1 <= number <= len(recipe.ingredients):
        click.echo(
            f"✗ '{recipe.title}' has {len(recipe.ingredients)} ingredients, not {number}.",
            err=True,
        )
        raise SystemExit(1)
    return recipe.ingredients[number - 1]


def parse_ingredient_option(value: str) -> Ingredient:
    """
    Parse an --ingredient value.

    Accepts "item", "amount|item", "amount|unit|item" or
    "amount|unit|item|notes".
    """
    parts = [part.strip() for part in value.split("|")]
    if len(parts) > 4:
        raise click.BadParameter(f"too many '|' separated parts in '{value}'")

    notes = None
    if len(parts) == 4:
        notes = parts.pop() or None

    item = parts.pop()
    if not item:
        raise click.BadParameter(f"ingredient '{value}' has no item name")

    amount = parts.pop(0) if parts else ""
    unit = parts.pop(0) or None if parts else None
    return Ingredient(item=item, amount=amount, unit=unit, notes=notes)


def display_recipe(recipe: Recipe, lists: KitchenLists | None = None) -> None:
    """Display a recipe, marking ingredients already in the pantry."""
    click.echo()
    click.echo("=" * 60)
    click.echo(f"RECIPE: {recipe.title}  [{recipe.id}]")
    click.echo("=" * 60)

    if recipe.description:
        click.echo(recipe.description)
    details = []
    if recipe.prep_time is not None:
        details.append(f"Prep: {recipe.prep_time} min")
    if recipe.cook_time is not None:
        details.append(f"Cook: {recipe.cook_time} min")
    if recipe.servings:
        details.append(f"Servings: {recipe.servings}")
    if recipe.category:
        details.append(f"Category: {recipe.category}")
    if details:
        click.echo(" | ".join(details))
    if recipe.tags:
        click.echo(f"Tags: {', '.join(recipe.tags)}")

    click.echo("\nIngredients:")
    for i, ing in enumerate(recipe.ingredients, 1):
        marker = "  "
        if lists is not None:
            if contains_match(lists.pantry, ing):
                marker = "✓ "
            elif contains_match(lists.shopping_list, ing):
                marker = "🛒"
        note = f" ({ing.notes})" if ing.notes else ""
        click.echo(f"  {marker} {i}. {ing}{note}")

    if recipe.instructions:
        click.echo("\nInstructions:")
        for i, step in enumerate(recipe.instructions, 1):
            click.echo(f"  {i}. {step}")

    if recipe.try_this:
        click.echo("\nTry this:")
        for tip in recipe.try_this:
            click.echo(f"  • {tip}")

    click.echo()


def display_list(title: str, items: list[Ingredient]) -> None:
    if not items:
        click.echo(f"{title} is empty.")
        return
    click.echo(f"{title} ({len(items)} item{'s' if len(items) != 1 else ''}):")
    for ing in items:
        click.echo(f"  • {ing}")


# ============================================================================
# Main CLI Group
# ============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="dumb-recipes")
@click.option(
    "--recipes",
    "recipes_source",
    default=RECIPES_SOURCE,
    show_default=True,
    help="Recipe catalog: JSON file path or URL",
)
@click.option("--verbose", "-v", is_flag=True, help="Show log messages")
@click.pass_context
def cli(ctx: click.Context, recipes_source: str, verbose: bool):
    """Dumb Recipes: recipes for people who like to eat but hate to cook.

    Browse recipes, keep track of what is in your pantry, find out what you
    can cook with it, and build a shopping list for the rest.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["store"] = RecipeStore(recipes_source)


# ============================================================================
# Recipe Commands
# ============================================================================


@cli.group()
def recipes():
    """Browse and edit the recipe catalog."""
    pass


@recipes.command("list")
@click.option("--search", "-q", "query", default="", help="Search title, ingredients and steps")
@click.option("--tag", "-t", "tags", multiple=True, help="Only recipes with this tag (repeatable)")
@click.pass_context
def recipes_list(ctx: click.Context, query: str, tags: tuple[str, ...]):
    """List recipes, optionally filtered.

    Examples:

    \b
        dumb-recipes recipes list
        dumb-recipes recipes list -q garlic -t quick
    """
    catalog = get_store(ctx).get_all_recipes()
    found = filter_recipes(catalog, query, tags)

    if not found:
        if query.strip() or tags:
            click.echo("No recipes match. Try adjusting your search or removing some tags.")
        else:
            click.echo("No recipes yet.")
        return

    for recipe in found:
        click.echo(f"  [{recipe.id}] {recipe.title}  ({len(recipe.ingredients)} ingredients)")
    click.echo(f"\n{len(found)} recipe{'s' if len(found) != 1 else ''}")


@recipes.command("show")
@click.argument("recipe_id")
@click.pass_context
def recipes_show(ctx: click.Context, recipe_id: str):
    """Show a recipe, marking what you already have."""
    recipe = get_recipe_or_exit(get_store(ctx), recipe_id)
    display_recipe(recipe, load_kitchen_lists(KITCHEN_FILE))


@recipes.command("tags")
@click.pass_context
def recipes_tags(ctx: click.Context):
    """List all tags used in the catalog."""
    tags = all_tags(get_store(ctx).get_all_recipes())
    if not tags:
        click.echo("No tags.")
        return
    for tag in tags:
        click.echo(f"  • {tag}")


@recipes.command("add")
@click.option("--title", required=True, help="Recipe title")
@click.option("--description", default="", help="Short description")
@click.option("--image", default="", help="Image URL")
@click.option(
    "--ingredient",
    "-i",
    "ingredients",
    multiple=True,
    help='Ingredient as "amount|unit|item|notes" (repeatable)',
)
@click.option("--step", "-s", "steps", multiple=True, help="Instruction step (repeatable)")
@click.option("--tag", "-t", "tags", multiple=True, help="Tag (repeatable)")
@click.option("--category", help="Category")
@click.option("--servings", type=int, help="Number of servings")
@click.option("--prep-time", type=int, help="Prep time in minutes")
@click.option("--cook-time", type=int, help="Cook time in minutes")
@click.pass_context
def recipes_add(
    ctx: click.Context,
    title: str,
    description: str,
    image: str,
    ingredients: tuple[str, ...],
    steps: tuple[str, ...],
    tags: tuple[str, ...],
    category: str | None,
    servings: int | None,
    prep_time: int | None,
    cook_time: int | None,
):
    """Add a recipe to the catalog.

    Examples:

    \b
        dumb-recipes recipes add --title "Toast" -i "2||slices bread" -i "butter" -s "Toast it."
    """
    store = get_store(ctx)
    if store.is_read_only:
        click.echo("✗ The recipe catalog is read-only (loaded from a URL).", err=True)
        raise SystemExit(1)

    data = {
        "title": title,
        "description": description,
        "image": image,
        "ingredients": [parse_ingredient_option(value).to_dict() for value in ingredients],
        "instructions": list(steps),
        "tags": list(tags) or None,
        "category": category,
        "servings": servings,
        "prepTime": prep_time,
        "cookTime": cook_time,
    }

    try:
        recipe = store.add_recipe(data)
    except RecipeStoreError as e:
        click.echo(f"✗ {e}", err=True)
        raise SystemExit(1) from None

    click.echo(f"✓ Added '{recipe.title}' with id {recipe.id}")


@recipes.command("delete")
@click.argument("recipe_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def recipes_delete(ctx: click.Context, recipe_id: str, yes: bool):
    """Delete a recipe from the catalog."""
    store = get_store(ctx)
    recipe = get_recipe_or_exit(store, recipe_id)

    if not yes and not click.confirm(f"Delete '{recipe.title}'?"):
        click.echo("Cancelled.")
        return

    try:
        deleted = store.delete_recipe(recipe_id)
    except RecipeStoreError as e:
        click.echo(f"✗ {e}", err=True)
        raise SystemExit(1) from None

    if not deleted:
        click.echo(f"✗ Could not delete '{recipe.title}'.", err=True)
        raise SystemExit(1)
    click.echo(f"✓ Deleted '{recipe.title}'")


# ============================================================================
# What Can I Cook
# ============================================================================


@cli.command("cook")
@click.option("--limit", "-l", default=10, help="Maximum recipes to show")
@click.pass_context
def cook(ctx: click.Context, limit: int):
    """Rank recipes by how much of them your pantry covers."""
    lists = load_kitchen_lists(KITCHEN_FILE)
    if not lists.pantry:
        click.echo("Your pantry is empty. Add ingredients with: dumb-recipes pantry add")
        return

    ranked = score_recipes(lists.pantry, get_store(ctx).get_all_recipes())
    if not ranked:
        click.echo("No recipes use anything in your pantry yet.")
        return

    click.echo(f"{len(ranked)} recipe{'s' if len(ranked) != 1 else ''} found\n")
    for entry in ranked[:limit]:
        recipe = entry.recipe
        if entry.missing_ingredients <= 0:
            status = "✓ ready to cook"
        else:
            status = f"missing {entry.missing_ingredients} of {entry.total_ingredients}"
        click.echo(f"  [{recipe.id}] {recipe.title}  ({status})")
        click.echo(f"      you have: {', '.join(entry.matching_ingredients)}")


@cli.command("missing")
@click.argument("recipe_id")
@click.option("--shop", is_flag=True, help="Put the missing ingredients on the shopping list")
@click.pass_context
def missing(ctx: click.Context, recipe_id: str, shop: bool):
    """Show which ingredients of a recipe you don't have."""
    recipe = get_recipe_or_exit(get_store(ctx), recipe_id)
    lists = load_kitchen_lists(KITCHEN_FILE)

    needed = missing_ingredient_details(recipe, lists.pantry)
    if not needed:
        click.echo(f"✓ You have everything for '{recipe.title}'.")
        return

    click.echo(
        f"You need {len(needed)} more ingredient{'s' if len(needed) != 1 else ''} "
        f"for '{recipe.title}':"
    )
    for ing in needed:
        on_list = " (on shopping list)" if contains_match(lists.shopping_list, ing) else ""
        click.echo(f"  • {ing}{on_list}")

    if shop:
        updated = add_missing_to_shopping_list(lists, recipe)
        added = len(updated.shopping_list) - len(lists.shopping_list)
        save_kitchen_lists(updated, KITCHEN_FILE)
        click.echo(f"✓ Added {added} item(s) to the shopping list")


# ============================================================================
# Pantry Commands
# ============================================================================


@cli.group()
def pantry():
    """Manage your pantry (ingredients you have at home)."""
    pass


@pantry.command("list")
def pantry_list():
    """List your pantry items."""
    display_list("Pantry", load_kitchen_lists(KITCHEN_FILE).pantry)


@pantry.command("add")
@click.argument("items", nargs=-1, required=True)
def pantry_add(items: tuple[str, ...]):
    """Add items to your pantry.

    Items that match something already in the pantry are skipped.

    Examples:

    \b
        dumb-recipes pantry add garlic "olive oil"
    """
    lists = load_kitchen_lists(KITCHEN_FILE)
    before = len(lists.pantry)
    for item in items:
        lists = add_to_pantry(lists, Ingredient(item=item.strip()))
    save_kitchen_lists(lists, KITCHEN_FILE)

    added = len(lists.pantry) - before
    click.echo(f"✓ Added {added} item(s) to pantry")
    if added < len(items):
        click.echo(f"  ({len(items) - added} already in pantry)")


@pantry.command("remove")
@click.argument("items", nargs=-1, required=True)
def pantry_remove(items: tuple[str, ...]):
    """Remove items from your pantry.

    Every entry matching an item is removed, so "salt" removes both
    "sea salt" and "table salt".
    """
    lists = load_kitchen_lists(KITCHEN_FILE)
    before = len(lists.pantry)
    for item in items:
        lists = remove_from_pantry(lists, Ingredient(item=item.strip()))
    save_kitchen_lists(lists, KITCHEN_FILE)
    click.echo(f"✓ Removed {before - len(lists.pantry)} item(s) from pantry")


@pantry.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def pantry_clear(yes: bool):
    """Remove everything from your pantry."""
    if not yes and not click.confirm("Clear your pantry?"):
        click.echo("Cancelled.")
        return
    save_kitchen_lists(clear_pantry(load_kitchen_lists(KITCHEN_FILE)), KITCHEN_FILE)
    click.echo("✓ Pantry cleared")


@pantry.command("suggest")
@click.argument("query")
@click.option("--limit", "-l", default=SUGGESTION_LIMIT, help="Maximum suggestions")
@click.pass_context
def pantry_suggest(ctx: click.Context, query: str, limit: int):
    """Suggest ingredient names from the catalog."""
    lists = load_kitchen_lists(KITCHEN_FILE)
    suggestions = ingredient_suggestions(
        get_store(ctx).get_all_recipes(),
        query,
        exclude=[ing.item for ing in lists.pantry],
        limit=limit,
    )
    if not suggestions:
        click.echo(f"No ingredients found for '{query}'.")
        return
    for name in suggestions:
        click.echo(f"  • {name}")


@pantry.command("toggle")
@click.argument("recipe_id")
@click.argument("number", type=int)
@click.pass_context
def pantry_toggle(ctx: click.Context, recipe_id: str, number: int):
    """Mark a recipe ingredient as had / not had.

    NUMBER is the ingredient's position as shown by 'recipes show'.
    """
    recipe = get_recipe_or_exit(get_store(ctx), recipe_id)
    ingredient = get_ingredient_or_exit(recipe, number)

    lists = load_kitchen_lists(KITCHEN_FILE)
    had = contains_match(lists.pantry, ingredient)
    save_kitchen_lists(toggle_pantry(lists, ingredient), KITCHEN_FILE)

    if had:
        click.echo(f"✓ Removed '{ingredient.item}' from pantry")
    else:
        click.echo(f"✓ Added '{ingredient.item}' to pantry")


# ============================================================================
# Shopping List Commands
# ============================================================================


@cli.group()
def shop():
    """Manage your shopping list."""
    pass


@shop.command("list")
def shop_list():
    """Show the shopping list."""
    display_list("Shopping list", load_kitchen_lists(KITCHEN_FILE).shopping_list)


@shop.command("add")
@click.argument("items", nargs=-1, required=True)
def shop_add(items: tuple[str, ...]):
    """Add items to the shopping list."""
    lists = load_kitchen_lists(KITCHEN_FILE)
    before = len(lists.shopping_list)
    for item in items:
        lists = transfer_to_shopping_list(lists, Ingredient(item=item.strip()))
    save_kitchen_lists(lists, KITCHEN_FILE)
    click.echo(f"✓ Added {len(lists.shopping_list) - before} item(s) to shopping list")


@shop.command("remove")
@click.argument("items", nargs=-1, required=True)
def shop_remove(items: tuple[str, ...]):
    """Remove items from the shopping list."""
    lists = load_kitchen_lists(KITCHEN_FILE)
    before = len(lists.shopping_list)
    for item in items:
        lists = remove_from_shopping_list(lists, Ingredient(item=item.strip()))
    save_kitchen_lists(lists, KITCHEN_FILE)
    click.echo(f"✓ Removed {before - len(lists.shopping_list)} item(s) from shopping list")


@shop.command("buy")
@click.argument("items", nargs=-1, required=True)
def shop_buy(items: tuple[str, ...]):
    """Move bought items from the shopping list into the pantry."""
    lists = load_kitchen_lists(KITCHEN_FILE)
    for item in items:
        ingredient = Ingredient(item=item.strip())
        matched = [e for e in lists.shopping_list if contains_match([e], ingredient)]
        # Keep the shopping list's own spelling and notes where there is one
        lists = transfer_to_pantry(lists, matched[0] if matched else ingredient)
    save_kitchen_lists(lists, KITCHEN_FILE)
    click.echo(f"✓ Moved {len(items)} item(s) to pantry")


@shop.command("buy-all")
def shop_buy_all():
    """Move everything on the shopping list into the pantry."""
    lists = load_kitchen_lists(KITCHEN_FILE)
    count = len(lists.shopping_list)
    save_kitchen_lists(move_all_to_pantry(lists), KITCHEN_FILE)
    click.echo(f"✓ Moved {count} item(s) to pantry")


@shop.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def shop_clear(yes: bool):
    """Empty the shopping list."""
    if not yes and not click.confirm("Clear the shopping list?"):
        click.echo("Cancelled.")
        return
    save_kitchen_lists(clear_shopping_list(load_kitchen_lists(KITCHEN_FILE)), KITCHEN_FILE)
    click.echo("✓ Shopping list cleared")


@shop.command("toggle")
@click.argument("recipe_id")
@click.argument("number", type=int)
@click.pass_context
def shop_toggle(ctx: click.Context, recipe_id: str, number: int):
    """Put a recipe ingredient on or off the shopping list.

    NUMBER is the ingredient's position as shown by 'recipes show'.
    """
    recipe = get_recipe_or_exit(get_store(ctx), recipe_id)
    ingredient = get_ingredient_or_exit(recipe, number)

    lists = load_kitchen_lists(KITCHEN_FILE)
    listed = contains_match(lists.shopping_list, ingredient)
    save_kitchen_lists(toggle_shopping_list(lists, ingredient), KITCHEN_FILE)

    if listed:
        click.echo(f"✓ Removed '{ingredient.item}' from shopping list")
    else:
        click.echo(f"✓ Added '{ingredient.item}' to shopping list")


# ============================================================================
# Entry Point
# ============================================================================


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
