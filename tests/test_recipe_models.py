import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from recipes.models import Ingredient, Recipe


def make_recipe():
    recipe = Recipe("Pannkakor")
    recipe.add_ingredient(Ingredient("2 1/2", "dl", "vetemjöl"))
    recipe.add_ingredient(Ingredient("3", "st", "ägg"))
    recipe.add_instruction("Vispa ihop.")
    return recipe


def test_copy_is_equal_but_independent():
    recipe = make_recipe()
    clone = recipe.copy()
    assert clone == recipe
    assert clone is not recipe

    clone.name = "Crêpes"
    clone.ingredients[0].amount = "5"
    clone.add_ingredient(Ingredient("", "", "salt"))
    clone.instructions.clear()

    assert recipe.name == "Pannkakor"
    assert recipe.ingredients[0].amount == "2 1/2"
    assert len(recipe.ingredients) == 2
    assert recipe.instructions == ["Vispa ihop."]


def test_equality_is_structural():
    assert make_recipe() == make_recipe()
    other = make_recipe()
    other.add_instruction("Grädda.")
    assert other != make_recipe()


def test_new_recipe_is_empty():
    recipe = Recipe("Tom")
    assert recipe.ingredients == [] and recipe.instructions == []
    assert Recipe("A").ingredients is not Recipe("B").ingredients


def test_ingredient_str_skips_empty_parts():
    assert str(Ingredient("2", "dl", "mjölk")) == "2 dl mjölk"
    assert str(Ingredient("", "", "salt och peppar")) == "salt och peppar"
    assert str(Ingredient("3", "", "ägg")) == "3 ägg"
