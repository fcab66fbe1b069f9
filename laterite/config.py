"""Settings for the Laterite REPL and CLI.

Settings live in an optional ``laterite.config`` YAML file in the working
directory. Any section or key it names replaces the built-in value in
``DEFAULTS``; everything else keeps its default. The merged mapping is
loaded once per process, and tests drop it with ``_reset_config()``.
"""

import copy
import os

import yaml

from laterite.errors import ConfigError

_config = None

CONFIG_FILENAME = "laterite.config"

DEFAULTS = {
    "repl": {
        "prompt": ">> ",
        "history_file": None,
        "show_line": True,
    },
    "diagnostics": {
        "color": True,
        "code": 3,
    },
    "logging": {
        "level": "WARNING",
    },
}


def _overlay(settings: dict, overrides: dict) -> None:
    """Write *overrides* onto *settings* in place, descending into sections."""
    for key, value in overrides.items():
        section = settings.get(key)
        if isinstance(section, dict) and isinstance(value, dict):
            _overlay(section, value)
        else:
            settings[key] = copy.deepcopy(value)


def _read_user_settings(path: str) -> dict:
    with open(path) as f:
        try:
            loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid {CONFIG_FILENAME}: {e}") from e
    return loaded if isinstance(loaded, dict) else {}


def get_config(config_dir: str | None = None) -> dict:
    """Return the merged settings, reading the file on first use only."""
    global _config
    if _config is None:
        path = os.path.join(config_dir or os.getcwd(), CONFIG_FILENAME)
        settings = copy.deepcopy(DEFAULTS)
        if os.path.isfile(path):
            _overlay(settings, _read_user_settings(path))
        _config = settings
    return _config


def _reset_config():
    global _config
    _config = None
