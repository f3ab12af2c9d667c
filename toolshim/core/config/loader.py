"""
Configuration loader — reads toolshim.yml into a ShimConfig.

Lookup order when no explicit path is given:
    TOOLSHIM_CONFIG env var  >  toolshim.yml walking up from cwd
    >  $XDG_CONFIG_HOME/toolshim/toolshim.yml (default ~/.config)

No file at all is fine: the defaults enable every built-in fragment.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from toolshim.core.models.config import ShimConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "toolshim.yml"

CONFIG_ENV_VAR = "TOOLSHIM_CONFIG"


class ConfigError(Exception):
    """Raised when configuration is invalid or an explicit path is missing."""


def user_config_dir() -> Path:
    """Per-user config directory (XDG on every platform)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "toolshim"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Locate toolshim.yml.

    Args:
        start_dir: Directory to start the upward search from (default: cwd).

    Returns:
        Path to the config file, or None if there is none anywhere.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    user_file = user_config_dir() / CONFIG_FILE
    if user_file.is_file():
        return user_file

    return None


def load_config(path: Path | None = None, *, explicit: bool = False) -> ShimConfig:
    """Load and validate configuration.

    Args:
        path: Path to toolshim.yml. If None, searches with find_config_file().
        explicit: True when the user named the path (--config). A missing
            explicit file is an error; a missing discovered one is not.

    Returns:
        Validated ShimConfig (defaults when no file exists).

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return ShimConfig()

    if not path.is_file():
        if explicit or os.environ.get(CONFIG_ENV_VAR):
            raise ConfigError(f"Config file not found: {path}")
        return ShimConfig()

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return ShimConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = ShimConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info(
        "Loaded config from %s (%d user aliases)", path, len(config.aliases)
    )
    return config
