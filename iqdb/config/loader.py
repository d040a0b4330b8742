"""Configuration loading utilities."""

import json
from pathlib import Path

from iqdb.config.schema import Config


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".iqdb" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file or create default.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path) as f:
                data = json.load(f)
            data = _migrate_config(data)
            return Config.model_validate(data)
        except (json.JSONDecodeError, ValueError) as e:
            print(f"Warning: Failed to load config from {path}: {e}")
            print("Using default configuration.")

    return Config()


def save_config(config: Config, config_path: Path | None = None) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(by_alias=True)

    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def _migrate_config(data: dict) -> dict:
    """Migrate old config formats to current."""
    # Move url -> baseUrl
    legacy_url = data.pop("url", None)
    if legacy_url and not data.get("baseUrl") and not data.get("base_url"):
        data["baseUrl"] = legacy_url

    # Move timeout -> http.timeout
    legacy_timeout = data.pop("timeout", None)
    http_cfg = data.setdefault("http", {})
    if legacy_timeout is not None and "timeout" not in http_cfg:
        http_cfg["timeout"] = legacy_timeout

    return data

