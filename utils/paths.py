import shutil
from pathlib import Path

from platformdirs import user_data_dir, user_log_dir

APP_NAME = "FiledRecipes"
APP_VENDOR = "FiledRecipes"

DATA_DIR = Path(user_data_dir(APP_NAME, APP_VENDOR))
LOG_DIR = Path(user_log_dir(APP_NAME, APP_VENDOR))
CONFIG_PATH = DATA_DIR / "config.yaml"
RECIPES_PATH = DATA_DIR / "recipes.txt"

SAMPLE_RECIPES_PATH = Path(__file__).resolve().parents[1] / "recipes" / "recipes.txt"


def init_app_paths(recipes_path: Path = RECIPES_PATH) -> None:
    for _p in (DATA_DIR, LOG_DIR):
        _p.mkdir(parents=True, exist_ok=True)

    if not recipes_path.exists() and SAMPLE_RECIPES_PATH.exists():
        recipes_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(SAMPLE_RECIPES_PATH, recipes_path)
