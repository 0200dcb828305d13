"""Locating, reading and writing the serpscope config file."""

import json
import os
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from serpscope.config.schema import Config

CONFIG_PATH_ENV = "SERPSCOPE_CONFIG"


def get_config_path() -> Path:
    """``$SERPSCOPE_CONFIG`` when set, else ``~/.serpscope/config.json``."""
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".serpscope" / "config.json"


def read_config_file(path: Path) -> dict[str, Any]:
    """Raw settings stored at ``path``; empty when absent or unreadable."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable config {}: {}", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config {}: top level must be a JSON object", path)
        return {}
    return data


def load_config(config_path: Path | None = None) -> Config:
    """
    Build the effective configuration.

    Layers, highest first: values in the config file, ``SERPSCOPE_*``
    environment variables (``__`` separates section and field, e.g.
    ``SERPSCOPE_BROWSER__CDP_URL``), built-in defaults. Layers merge per
    field, so a file that sets only ``browser.wsEndpoint`` still picks up
    ``SERPSCOPE_BROWSER__HEADLESS``. A file that fails validation is dropped
    as a whole.
    """
    path = config_path or get_config_path()
    data = read_config_file(path)
    if not data:
        return Config()

    try:
        config = Config(**data)
    except ValidationError as e:
        logger.warning("Ignoring invalid config {} ({} errors): {}", path, e.error_count(), e)
        return Config()

    logger.debug("Loaded config from {}", path)
    return config


def save_config(config: Config, config_path: Path | None = None) -> Path:
    """Write ``config`` as camelCase JSON and return the path written."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config.model_dump_json(by_alias=True, indent=2) + "\n", encoding="utf-8")
    return path
