"""Plain-text rendering of recipes for the detail pane."""

from typing import Iterable

from recipes.models import Recipe

RULE = "-" * 15


def format_recipe(recipe: Recipe) -> str:
    lines = [recipe.name, "=" * max(len(recipe.name), len(RULE)), ""]

    lines += ["Ingredienser", RULE]
    lines += [str(ingredient) for ingredient in recipe.ingredients]

    lines += ["", "Gör så här", RULE]
    lines += recipe.instructions

    return "\n".join(lines)


def format_recipes(recipes: Iterable[Recipe]) -> str:
    return "\n\n\n".join(format_recipe(recipe) for recipe in recipes)
