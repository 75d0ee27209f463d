"""
Recipe file reader and writer for Filed Recipes.

Recipes are stored in a line-delimited text file where three marker lines
decide how the following lines are interpreted::

    [Recept]
    Pannkakor
    [Ingredienser]
    2 1/2;dl;vetemjöl
    [Instruktioner]
    Vispa ihop mjöl och hälften av mjölken.

Blank lines are ignored everywhere.
"""

import codecs
import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from recipes.models import Ingredient, Recipe

SECTION_RECIPE = "[Recept]"
SECTION_INGREDIENTS = "[Ingredienser]"
SECTION_INSTRUCTIONS = "[Instruktioner]"

INGREDIENT_SEPARATOR = ";"
INGREDIENT_FIELDS = 3

DEFAULT_ENCODING = "utf-8"

logger = logging.getLogger(__name__)


class RecipeStoreError(Exception):
    """Base class for recipe store errors."""
    pass


class RecipeFormatError(RecipeStoreError, ValueError):
    """Raised when a recipe file does not follow the section format."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class ReadStatus(Enum):
    """How the next content line read from the file is interpreted."""
    INDEFINITE = "indefinite"
    NEW = "new"
    INGREDIENT = "ingredient"
    INSTRUCTION = "instruction"


class LineAction(Enum):
    """What the parser does with a single line."""
    SKIP = "skip"
    SECTION = "section"
    NEW_RECIPE = "new_recipe"
    ADD_INGREDIENT = "add_ingredient"
    ADD_INSTRUCTION = "add_instruction"
    REJECT = "reject"


SECTION_STATUS = {
    SECTION_RECIPE: ReadStatus.NEW,
    SECTION_INGREDIENTS: ReadStatus.INGREDIENT,
    SECTION_INSTRUCTIONS: ReadStatus.INSTRUCTION,
}

CONTENT_ACTION = {
    ReadStatus.INDEFINITE: LineAction.REJECT,
    ReadStatus.NEW: LineAction.NEW_RECIPE,
    ReadStatus.INGREDIENT: LineAction.ADD_INGREDIENT,
    ReadStatus.INSTRUCTION: LineAction.ADD_INSTRUCTION,
}


def transition(status: ReadStatus, line: str) -> Tuple[ReadStatus, LineAction]:
    """Map the current status and a line to the next status and an action.

    Marker lines switch status unconditionally. Blank lines leave the status
    alone. Any other line is content for the current section.
    """
    if not line.strip():
        return status, LineAction.SKIP
    if line in SECTION_STATUS:
        return SECTION_STATUS[line], LineAction.SECTION
    return status, CONTENT_ACTION[status]


def parse_ingredient(line: str) -> Ingredient:
    """Parse an ``amount;measure;name`` line."""
    parts = line.split(INGREDIENT_SEPARATOR)
    if len(parts) != INGREDIENT_FIELDS:
        raise RecipeFormatError(
            f"Expected {INGREDIENT_FIELDS} fields separated by "
            f"'{INGREDIENT_SEPARATOR}', got {len(parts)}"
        )
    amount, measure, name = parts
    return Ingredient(amount=amount, measure=measure, name=name)


def format_ingredient(ingredient: Ingredient) -> str:
    return INGREDIENT_SEPARATOR.join((ingredient.amount, ingredient.measure, ingredient.name))


class RecipeParser:
    """Builds recipes from lines fed one at a time."""

    def __init__(self):
        self.status = ReadStatus.INDEFINITE
        self.line_number = 0
        self.recipes: List[Recipe] = []
        self._current: Optional[Recipe] = None

    def feed(self, line: str):
        self.line_number += 1
        line = line.rstrip("\r\n")
        self.status, action = transition(self.status, line)

        if action in (LineAction.SKIP, LineAction.SECTION):
            return

        if action is LineAction.REJECT:
            raise RecipeFormatError(
                f"Content before any {SECTION_RECIPE} section", self.line_number, line
            )

        if action is LineAction.NEW_RECIPE:
            self._current = Recipe(name=line)
            self.recipes.append(self._current)
            return

        if self._current is None:
            raise RecipeFormatError(
                f"No {SECTION_RECIPE} section for this line", self.line_number, line
            )

        if action is LineAction.ADD_INGREDIENT:
            try:
                ingredient = parse_ingredient(line)
            except RecipeFormatError as e:
                raise RecipeFormatError(str(e), self.line_number, line) from None
            self._current.add_ingredient(ingredient)
        else:
            self._current.add_instruction(line)

    def finish(self) -> List[Recipe]:
        """Return the parsed recipes in file order."""
        return self.recipes


def parse_lines(lines: Iterable[str]) -> List[Recipe]:
    """Parse recipes from an iterable of lines, in file order."""
    parser = RecipeParser()
    for line in lines:
        parser.feed(line)
    return parser.finish()


def dump_lines(recipes: Iterable[Recipe]) -> Iterator[str]:
    """Yield the file lines (without terminators) for the given recipes."""
    for recipe in recipes:
        yield SECTION_RECIPE
        yield recipe.name
        yield SECTION_INGREDIENTS
        for ingredient in recipe.ingredients:
            yield format_ingredient(ingredient)
        yield SECTION_INSTRUCTIONS
        yield from recipe.instructions


def read_recipes(path: Union[str, Path], encoding: str = DEFAULT_ENCODING) -> List[Recipe]:
    """Read and parse a whole recipe file.

    A leading UTF-8 byte-order mark is skipped.
    """
    if codecs.lookup(encoding).name == "utf-8":
        encoding = "utf-8-sig"

    try:
        with open(path, 'r', encoding=encoding) as f:
            lines = f.readlines()
    except UnicodeDecodeError as e:
        logger.warning(f"Cannot decode recipe file {path}: {e}")
        raise RecipeFormatError(f"File is not valid {e.encoding}: {e.reason}") from e

    try:
        recipes = parse_lines(lines)
    except RecipeFormatError as e:
        logger.warning(f"Malformed recipe file {path}: {e}")
        raise

    logger.debug(f"Parsed {len(recipes)} recipes from {len(lines)} lines in {path}")
    return recipes


def write_recipes(path: Union[str, Path], recipes: Iterable[Recipe], encoding: str = DEFAULT_ENCODING):
    """Write recipes to a file, replacing its contents."""
    with open(path, 'w', encoding=encoding) as f:
        for line in dump_lines(recipes):
            f.write(line + "\n")
