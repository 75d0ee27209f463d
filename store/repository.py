"""
Recipe repository for Filed Recipes.

Holds the in-memory recipe collection backed by a recipe text file and
emits ``recipes_changed`` whenever the collection changes.
"""

import logging
import os
from pathlib import Path
from typing import List, Union

from PySide6.QtCore import QObject, Signal

from recipes.loader import DEFAULT_ENCODING, RecipeStoreError, read_recipes, write_recipes
from recipes.models import Recipe


class PathError(RecipeStoreError):
    """Raised when the recipe file path cannot be resolved."""
    pass


def resolve_path(path: Union[str, os.PathLike]) -> Path:
    """Return ``path`` as an absolute path or raise PathError."""
    try:
        raw = os.fspath(path)
    except TypeError as e:
        raise PathError(f"Invalid recipe file path: {path!r}") from e

    if isinstance(raw, bytes) or not raw.strip():
        raise PathError(f"Invalid recipe file path: {path!r}")
    if "\0" in raw:
        raise PathError("Recipe file path contains a null byte")

    try:
        return Path(os.path.abspath(os.path.expanduser(raw)))
    except (ValueError, OSError) as e:
        raise PathError(f"Invalid recipe file path {raw!r}: {e}") from e


class RecipeRepository(QObject):
    """Holder for recipes.

    ``recipes_changed`` is emitted with the repository after every load and
    successful delete; receivers re-query with get_all or get_at.
    """

    recipes_changed = Signal(object)

    def __init__(self, path: Union[str, os.PathLike], encoding: str = DEFAULT_ENCODING):
        """Initialize the repository. Does not touch the file."""
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self._path = resolve_path(path)
        self.encoding = encoding
        self._recipes: List[Recipe] = []
        self._modified = False

    @property
    def path(self) -> Path:
        """The absolute path of the recipe file."""
        return self._path

    @property
    def is_modified(self) -> bool:
        """True when the collection has changed since it was last loaded or saved."""
        return self._modified

    def __len__(self) -> int:
        return len(self._recipes)

    # Queries ---------------------------------------------------------

    def get_all(self) -> List[Recipe]:
        """Return copies of all recipes, in collection order."""
        return [recipe.copy() for recipe in self._recipes]

    def get_at(self, index: int) -> Recipe:
        """Return a copy of the recipe at the zero-based ``index``."""
        return self._recipe_at(index).copy()

    def _recipe_at(self, index: int) -> Recipe:
        if not 0 <= index < len(self._recipes):
            raise IndexError(
                f"Recipe index {index} out of range (0..{len(self._recipes) - 1})"
            )
        return self._recipes[index]

    # Mutations -------------------------------------------------------

    def delete(self, recipe: Recipe):
        """Delete a recipe owned by the repository, or the first one equal to it.

        Deleting a recipe that matches nothing leaves the repository unchanged.
        """
        position = self._find(recipe)
        if position is None:
            self.logger.debug(f"No recipe matching {recipe!r} to delete")
            return

        removed = self._recipes.pop(position)
        self._modified = True
        self.logger.info(f"Deleted recipe '{removed.name}' ({len(self._recipes)} left)")
        self._on_recipes_changed()

    def delete_at(self, index: int):
        """Delete the recipe at the zero-based ``index``."""
        self.delete(self._recipe_at(index))

    def _find(self, recipe: Recipe):
        for i, owned in enumerate(self._recipes):
            if owned is recipe:
                return i
        for i, owned in enumerate(self._recipes):
            if owned == recipe:
                return i
        return None

    # Persistence -----------------------------------------------------

    def load(self):
        """Replace the collection with the recipes read from the file.

        On any error the current collection and modified flag are kept.
        """
        recipes = read_recipes(self._path, encoding=self.encoding)
        self._recipes = sorted(recipes, key=lambda r: r.name)
        self._modified = False
        self.logger.info(f"Loaded {len(self._recipes)} recipes from {self._path}")
        self._on_recipes_changed()

    def save(self):
        """Write the collection to the file, replacing its contents."""
        write_recipes(self._path, self._recipes, encoding=self.encoding)
        self._modified = False
        self.logger.info(f"Saved {len(self._recipes)} recipes to {self._path}")

    def _on_recipes_changed(self):
        self.recipes_changed.emit(self)
