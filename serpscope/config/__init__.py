"""Configuration module for serpscope."""

from serpscope.config.loader import get_config_path, load_config, save_config
from serpscope.config.schema import Config

__all__ = ["Config", "get_config_path", "load_config", "save_config"]
