"""Configuration loading and schema."""

from iqdb.config.loader import get_config_path, load_config, save_config
from iqdb.config.schema import Config, HttpConfig

__all__ = ["Config", "HttpConfig", "get_config_path", "load_config", "save_config"]
