from __future__ import annotations

from pathlib import Path

# Single source of truth for configuration file naming.
CONFIG_FILE = ".fgoi.yaml"
DEFAULT_EXTENSIONS = (".go",)


def config_path(root: Path) -> Path:
    """Path to the project configuration file <root>/.fgoi.yaml."""
    return (root / CONFIG_FILE).resolve()


__all__ = ["CONFIG_FILE", "DEFAULT_EXTENSIONS", "config_path"]
