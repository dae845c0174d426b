from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import ConfigError
from .model import Config
from .paths import config_path

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file and returns a mapping."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError, YAMLError) as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(root: Path, explicit: Optional[Path] = None) -> Config:
    """
    Load run configuration.

    Args:
        root: Directory where .fgoi.yaml is looked up (normally CWD)
        explicit: Config file given on the command line; must exist

    Returns:
        Parsed config, or defaults when no file is found
    """
    if explicit is not None:
        if not explicit.is_file():
            raise ConfigError(f"config file not found: {explicit}")
        path = explicit
    else:
        path = config_path(root)
        if not path.is_file():
            return Config()

    logger.debug(f"Loading config from {path}")
    raw = _read_yaml_map(path)
    try:
        return Config.from_dict(raw)
    except ConfigError as e:
        raise ConfigError(f"{path}: {e}") from e


__all__ = ["load_config"]
