"""
Configuration loading for fgoi.
"""

from __future__ import annotations

from .load import load_config
from .model import Config
from .paths import CONFIG_FILE, DEFAULT_EXTENSIONS, config_path

__all__ = ["Config", "load_config", "CONFIG_FILE", "DEFAULT_EXTENSIONS", "config_path"]
