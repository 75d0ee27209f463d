"""
Main window for Filed Recipes.

Lists the recipes held by a RecipeRepository and shows the selected one.
"""

import logging
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QListWidget,
    QPlainTextEdit, QLabel, QMessageBox
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent, QFont

from engine.config import ConfigManager
from gui.recipe_view import format_recipe, format_recipes
from recipes.loader import RecipeFormatError
from store.repository import RecipeRepository


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, repository: RecipeRepository, config_manager: Optional[ConfigManager] = None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.config_manager = config_manager or ConfigManager()
        self.config = self.config_manager.get_config()
        self.repository = repository
        self.init_ui(); self.init_menu_bar(); self.init_status_bar()

        self.repository.recipes_changed.connect(self.on_recipes_changed)
        self._connected = True
        self.refresh_list()

    def init_ui(self):
        """Initialize the user interface."""
        ui_cfg = self.config.get('ui', {})
        self.resize(ui_cfg.get('window_width', 900), ui_cfg.get('window_height', 600))

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)
        main_layout.setContentsMargins(5, 5, 5, 5)

        splitter = QSplitter(Qt.Horizontal)
        self.recipe_list = QListWidget()
        self.recipe_list.currentRowChanged.connect(self.on_current_row_changed)

        self.detail = QPlainTextEdit()
        self.detail.setReadOnly(True)
        self.detail.setFont(QFont("Monospace"))

        splitter.addWidget(self.recipe_list)
        splitter.addWidget(self.detail)
        splitter.setStretchFactor(1, 3)
        main_layout.addWidget(splitter)

    def init_menu_bar(self):
        """Initialize the menu bar."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu('&File')

        self.reload_action = QAction('&Reload', self)
        self.reload_action.setShortcut('Ctrl+R')
        self.reload_action.triggered.connect(self.reload_recipes)
        file_menu.addAction(self.reload_action)

        self.save_action = QAction('&Save', self)
        self.save_action.setShortcut('Ctrl+S')
        self.save_action.triggered.connect(self.save_recipes)
        file_menu.addAction(self.save_action)

        file_menu.addSeparator()

        exit_action = QAction('E&xit', self)
        exit_action.setShortcut('Ctrl+Q')
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        recipe_menu = menubar.addMenu('&Recipe')

        self.delete_action = QAction('&Delete', self)
        self.delete_action.setShortcut('Del')
        self.delete_action.triggered.connect(self.delete_selected)
        recipe_menu.addAction(self.delete_action)

        show_all_action = QAction('Show &All', self)
        show_all_action.triggered.connect(self.show_all)
        recipe_menu.addAction(show_all_action)

    def init_status_bar(self):
        """Initialize the status bar."""
        self.status_label = QLabel("Ready")
        self.statusBar().addWidget(self.status_label)

    # Repository events -----------------------------------------------

    def on_recipes_changed(self, _repository=None):
        self.refresh_list()

    def refresh_list(self):
        """Re-query the repository and rebuild the recipe list."""
        row = self.recipe_list.currentRow()
        recipes = self.repository.get_all()

        self.recipe_list.blockSignals(True)
        self.recipe_list.clear()
        self.recipe_list.addItems([recipe.name for recipe in recipes])
        self.recipe_list.blockSignals(False)

        if recipes:
            self.recipe_list.setCurrentRow(min(max(row, 0), len(recipes) - 1))
            self.on_current_row_changed(self.recipe_list.currentRow())
        else:
            self.detail.clear()

        self.delete_action.setEnabled(bool(recipes))
        self.update_title()
        self.set_status(f"{len(recipes)} recipes")

    def on_current_row_changed(self, row: int):
        if row < 0 or row >= len(self.repository):
            self.detail.clear()
            return
        self.detail.setPlainText(format_recipe(self.repository.get_at(row)))

    def update_title(self):
        title = f"Filed Recipes - {self.repository.path.name}"
        if self.repository.is_modified:
            title += " *"
        self.setWindowTitle(title)

    # Actions ---------------------------------------------------------

    def reload_recipes(self):
        """Reload recipes from the file, discarding unsaved changes."""
        if self.repository.is_modified and not self.confirm(
            "Reload Recipes", "Discard unsaved changes and reload from file?"
        ):
            return
        try:
            self.repository.load()
        except (OSError, RecipeFormatError) as e:
            self.logger.error(f"Failed to load recipes: {e}")
            self.show_error("Load Error", f"Failed to load {self.repository.path}:\n{e}")

    def save_recipes(self) -> bool:
        """Save recipes to the file."""
        try:
            self.repository.save()
        except OSError as e:
            self.logger.error(f"Failed to save recipes: {e}")
            self.show_error("Save Error", f"Failed to save {self.repository.path}:\n{e}")
            return False
        self.update_title()
        self.set_status(f"Saved {len(self.repository)} recipes")
        return True

    def delete_selected(self):
        """Delete the selected recipe."""
        row = self.recipe_list.currentRow()
        if row < 0:
            return
        recipe = self.repository.get_at(row)
        if self.config.get('ui', {}).get('confirm_delete', True) and not self.confirm(
            "Delete Recipe", f"Delete '{recipe.name}'?"
        ):
            return
        self.repository.delete_at(row)

    def show_all(self):
        """Show every recipe in the detail pane."""
        self.recipe_list.clearSelection()
        self.detail.setPlainText(format_recipes(self.repository.get_all()))

    def closeEvent(self, event: QCloseEvent):
        if self.repository.is_modified:
            reply = QMessageBox.question(
                self,
                "Unsaved Changes",
                "Save changes to the recipe file before closing?",
                QMessageBox.Save | QMessageBox.Discard | QMessageBox.Cancel,
            )
            if reply == QMessageBox.Cancel or (reply == QMessageBox.Save and not self.save_recipes()):
                event.ignore()
                return

        if self._connected:
            self.repository.recipes_changed.disconnect(self.on_recipes_changed)
            self._connected = False
        self.save_window_size()
        event.accept()

    # Helpers ---------------------------------------------------------

    def save_window_size(self):
        """Remember the window size in the configuration file."""
        self.config_manager.set('ui.window_width', self.width())
        self.config_manager.set('ui.window_height', self.height())
        try:
            self.config_manager.save_config()
        except OSError as e:
            self.logger.warning(f"Could not save window size: {e}")

    def confirm(self, title: str, message: str) -> bool:
        reply = QMessageBox.question(self, title, message, QMessageBox.Yes | QMessageBox.No)
        return reply == QMessageBox.Yes

    def set_status(self, message: str):
        """Set status bar message."""
        self.status_label.setText(message)
        self.logger.debug(f"Status: {message}")

    def show_error(self, title: str, message: str):
        """Show error message dialog."""
        QMessageBox.critical(self, title, message)
