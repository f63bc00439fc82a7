"""Configuration loading for buildrunas."""

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from buildrunas.errors import ConfigError
from buildrunas.models import RunAsConfig

log = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".buildrunas"
CONFIG_FILE = CONFIG_DIR / "config.json"

ENV_OVERRIDES = {
    "BUILDRUNAS_COMMAND": "command",
    "BUILDRUNAS_TEMP_DIR": "temp_dir",
}


def _read_config_file(path: Path) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        log.debug("no config file at %s", path)
        return {}
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Unable to read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def load_config(path: Path = CONFIG_FILE) -> RunAsConfig:
    """Load config from file, applying environment overrides."""
    data = _read_config_file(path)
    for env_key, field_name in ENV_OVERRIDES.items():
        value = os.environ.get(env_key)
        if value:
            log.debug("%s overrides %s", env_key, field_name)
            data[field_name] = value
    try:
        return RunAsConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e


def save_config(config: RunAsConfig, path: Path = CONFIG_FILE) -> None:
    """Write config to disk, readable only by the current user."""
    path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        json.dump(config.model_dump(exclude_none=True), f, indent=2)
        f.write("\n")
