"""Project-wide settings and defaults."""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Base paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.environ.get("SETTINGS_DATA_DIR", str(PROJECT_ROOT / "data")))

# Settings storage
SETTINGS_BACKEND = os.environ.get("SETTINGS_BACKEND", "json").lower()
_DEFAULT_FILENAME = "settings.db" if SETTINGS_BACKEND == "sqlite" else "settings.json"
SETTINGS_PATH = os.environ.get("SETTINGS_PATH", str(DATA_DIR / _DEFAULT_FILENAME))
SETTINGS_OPTION_NAME = os.environ.get("SETTINGS_OPTION_NAME", "app-settings")
SETTINGS_DEFAULTS_PATH = os.environ.get("SETTINGS_DEFAULTS_PATH", "")

# Web API
SETTINGS_API_KEY = os.environ.get("SETTINGS_API_KEY", "")
FLASK_SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-settings-key")

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def load_defaults_file(path: str | Path | None) -> dict:
    """Read a JSON object of setting defaults; anything unusable gives {}."""
    if not path:
        return {}
    path = Path(path)
    if not path.exists():
        logger.warning("Defaults file %s not found", path)
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        logger.error("Could not read defaults file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.error("Defaults file %s does not contain a JSON object", path)
        return {}
    return data
