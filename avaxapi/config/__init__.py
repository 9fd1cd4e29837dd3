"""Configuration module for avaxapi."""

from avaxapi.config.access import clear_config_cache, get_config
from avaxapi.config.loader import get_config_path, load_config, save_config
from avaxapi.config.schema import Config

__all__ = ["Config", "load_config", "save_config", "get_config_path", "get_config", "clear_config_cache"]
