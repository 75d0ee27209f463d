#!/usr/bin/env python3
"""
Filed Recipes - Main Entry Point

A desktop application for browsing and pruning a file of recipes.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from PySide6.QtWidgets import QApplication

from engine.config import ConfigManager, ConfigError
from gui.main_window import MainWindow
from logging_config import get_logger
from recipes.loader import RecipeFormatError
from store.repository import RecipeRepository, PathError
from utils.paths import init_app_paths


def main() -> int:
    """Main application entry point."""
    app = QApplication(sys.argv)
    app.setApplicationName("Filed Recipes")
    app.setApplicationVersion("1.0.0")

    try:
        config_manager = ConfigManager()
        config_manager.load_config()
    except ConfigError as e:
        get_logger(__name__).error("Failed to load configuration: %s", e)
        return 1

    log = get_logger(__name__, config_manager.get_logging_config())
    for problem in config_manager.validate_config():
        log.warning("Config: %s", problem)

    try:
        recipes_path = Path(config_manager.get_recipes_path())
        init_app_paths(recipes_path)

        repository = RecipeRepository(recipes_path, encoding=config_manager.get_recipes_encoding())
        repository.load()
    except (PathError, OSError, RecipeFormatError) as e:
        log.error("Failed to load recipes: %s", e)
        return 1

    main_window = MainWindow(repository, config_manager)
    main_window.show()

    log.info("Filed Recipes started with %d recipes", len(repository))

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
