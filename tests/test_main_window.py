import os, sys, pathlib
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("QT_OPENGL", "software")
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

import pytest
import yaml
try:
    from PySide6.QtWidgets import QApplication, QMessageBox
except Exception:  # pragma: no cover
    pytest.skip("PySide6 not available", allow_module_level=True)

from engine.config import ConfigManager
from store.repository import RecipeRepository


RECIPES = """\
[Recept]
Pannkakor
[Ingredienser]
3;st;ägg
[Instruktioner]
Grädda.
[Recept]
Omelett
[Ingredienser]
2;st;ägg
[Instruktioner]
Stek.
"""


@pytest.fixture
def app():
    return QApplication.instance() or QApplication([])


@pytest.fixture
def repo(tmp_path):
    path = tmp_path / "recipes.txt"
    path.write_text(RECIPES, encoding="utf-8")
    repository = RecipeRepository(path)
    repository.load()
    return repository


@pytest.fixture
def config_manager(tmp_path):
    manager = ConfigManager(config_path=str(tmp_path / "config.yaml"))
    manager.set('ui.confirm_delete', False)
    return manager


@pytest.fixture
def window(app, repo, config_manager):
    from gui.main_window import MainWindow

    w = MainWindow(repo, config_manager)
    yield w
    if w._connected:
        repo.recipes_changed.disconnect(w.on_recipes_changed)
    w.deleteLater()


def list_names(w):
    return [w.recipe_list.item(i).text() for i in range(w.recipe_list.count())]


def test_window_lists_recipes(window):
    assert list_names(window) == ["Omelett", "Pannkakor"]
    assert window.recipe_list.currentRow() == 0
    assert window.detail.toPlainText().startswith("Omelett")
    assert not window.windowTitle().endswith("*")


def test_selecting_shows_recipe(window):
    window.recipe_list.setCurrentRow(1)
    assert "3 st ägg" in window.detail.toPlainText()


def test_delete_refreshes_from_notification(window, repo):
    window.recipe_list.setCurrentRow(0)
    window.delete_selected()
    assert list_names(window) == ["Pannkakor"]
    assert repo.is_modified
    assert window.windowTitle().endswith("*")


def test_delete_cancelled(window, repo, monkeypatch):
    window.config['ui']['confirm_delete'] = True
    monkeypatch.setattr(QMessageBox, "question", lambda *a, **k: QMessageBox.No)
    window.delete_selected()
    assert len(repo) == 2 and not repo.is_modified


def test_save_clears_modified_marker(window, repo):
    window.delete_selected()
    assert window.save_recipes()
    assert not repo.is_modified
    assert not window.windowTitle().endswith("*")
    assert "Omelett" not in repo.path.read_text(encoding="utf-8")


def test_reload_error_is_reported(window, repo, monkeypatch):
    errors = []
    monkeypatch.setattr(window, "show_error", lambda title, msg: errors.append(title))
    repo.path.write_text("no marker\n", encoding="utf-8")
    window.reload_recipes()
    assert errors == ["Load Error"]
    assert list_names(window) == ["Omelett", "Pannkakor"]


def test_show_all(window):
    window.show_all()
    text = window.detail.toPlainText()
    assert "Omelett" in text and "Pannkakor" in text


def test_close_disconnects_from_repository(window, repo):
    window.close()
    repo.delete_at(0)
    assert list_names(window) == ["Omelett", "Pannkakor"]


def test_close_saves_window_size(window, config_manager):
    window.resize(640, 480)
    window.close()

    with config_manager.config_path.open(encoding="utf-8") as f:
        saved = yaml.safe_load(f)
    assert saved['ui']['window_width'] == window.width()
    assert saved['ui']['window_height'] == window.height()
    assert saved['ui']['confirm_delete'] is False


def test_window_size_comes_from_config(app, repo, tmp_path):
    from gui.main_window import MainWindow

    manager = ConfigManager(config_path=str(tmp_path / "config.yaml"))
    manager.set('ui.window_width', 700)
    manager.set('ui.window_height', 500)
    w = MainWindow(repo, manager)
    try:
        assert (w.width(), w.height()) == (700, 500)
    finally:
        repo.recipes_changed.disconnect(w.on_recipes_changed)
        w.deleteLater()
