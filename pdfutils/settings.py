# pdfutils/settings.py

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "source_directory": "",
    "destination_directory": "",
    "images_directory": "",
    "image_prefix": "img_",
    "render_dpi": 300,
    "log_level": "INFO",
}

DIRECTORY_KEYS = ("source_directory", "destination_directory", "images_directory")


def config_dir() -> Path:
    # AppData\Roaming\PDFUtils on Windows
    if os.name == 'nt' and 'APPDATA' in os.environ:
        return Path(os.environ['APPDATA']) / "PDFUtils"
    return Path.home() / ".pdfutils"


def default_config_path() -> Path:
    return config_dir() / "config.json"


def load_settings(config_path: Path) -> dict:
    """Load saved settings from a JSON config file, on top of the defaults."""
    settings = dict(DEFAULT_SETTINGS)
    try:
        if config_path.exists():
            with open(config_path, 'r') as f:
                saved = json.load(f)
            if isinstance(saved, dict):
                settings.update(saved)
    except (OSError, ValueError) as e:
        logger.warning("Could not load settings from %s: %s", config_path, e)
        return dict(DEFAULT_SETTINGS)

    # Forget directories that were removed since the last run
    for key in DIRECTORY_KEYS:
        saved_dir = settings.get(key) or ""
        if saved_dir and not os.path.isdir(saved_dir):
            settings[key] = ""

    try:
        settings["render_dpi"] = int(settings["render_dpi"])
    except (TypeError, ValueError):
        settings["render_dpi"] = DEFAULT_SETTINGS["render_dpi"]
    if not settings.get("image_prefix"):
        settings["image_prefix"] = DEFAULT_SETTINGS["image_prefix"]

    return settings


def save_settings(config_path: Path, settings: dict) -> None:
    """Save settings dictionary to a JSON config file."""
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            json.dump(settings, f, indent=4)
    except OSError as e:
        # Settings are a convenience, a failed save must not break an operation
        logger.warning("Could not save settings to %s: %s", config_path, e)
