"""
Recipe domain models for Filed Recipes.

Recipes and ingredients are plain value types. Anything handed out by the
repository is a copy made with ``Recipe.copy()``.
"""

from dataclasses import dataclass, field, replace
from typing import List


@dataclass
class Ingredient:
    """An amount/measure/name triple, e.g. ``2;dl;mjölk``."""
    amount: str = ""
    measure: str = ""
    name: str = ""

    def copy(self) -> "Ingredient":
        return replace(self)

    def __str__(self) -> str:
        return " ".join(part for part in (self.amount, self.measure, self.name) if part)


@dataclass
class Recipe:
    """A named recipe with ordered ingredients and instruction lines.

    Equality is structural: name, ingredients and instructions must all match.
    """
    name: str
    ingredients: List[Ingredient] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)

    def add_ingredient(self, ingredient: Ingredient):
        self.ingredients.append(ingredient)

    def add_instruction(self, instruction: str):
        self.instructions.append(instruction)

    def copy(self) -> "Recipe":
        """Return a deep copy sharing no mutable storage with this recipe."""
        return Recipe(
            name=self.name,
            ingredients=[ing.copy() for ing in self.ingredients],
            instructions=list(self.instructions),
        )

    def __repr__(self) -> str:
        return (
            f"<Recipe(name={self.name!r}, ingredients={len(self.ingredients)}, "
            f"instructions={len(self.instructions)})>"
        )
