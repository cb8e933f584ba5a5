"""
Configuration loader: reads installer overrides into InstallerConfig.

The postinstall run needs no file: every field has a default. An
override file is taken from ``--config`` or the MACRTOOLS_CONFIG env
var, parsed as YAML and validated against the Pydantic model.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from macrtools.core.models.config import InstallerConfig

logger = logging.getLogger(__name__)

CONFIG_ENV = "MACRTOOLS_CONFIG"


class ConfigError(Exception):
    """Raised when installer configuration is invalid or missing."""


def find_config_file(explicit: Path | None = None) -> Path | None:
    """Return the override file to use, if any.

    Args:
        explicit: Path given on the command line (wins over the env var).
    """
    if explicit is not None:
        return explicit
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return None


def load_config(path: Path | None = None) -> InstallerConfig:
    """Load and validate installer configuration.

    Args:
        path: Override file.  None means defaults (after checking
            MACRTOOLS_CONFIG).

    Returns:
        Validated InstallerConfig.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    path = find_config_file(path)
    if path is None:
        logger.debug("No config override; using defaults")
        return InstallerConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading installer config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Accept both a flat file and one nested under "installer:"
    if isinstance(data.get("installer"), dict):
        data = data["installer"]

    try:
        config = InstallerConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid installer configuration: {e}") from e

    logger.info("Loaded installer config from %s", path)
    return config
