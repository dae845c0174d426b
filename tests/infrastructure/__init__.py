"""
Shared test infrastructure for fgoi.

Modules:
- file_utils: creating Go files and directory trees
- cli_utils: running the CLI as a subprocess
"""

from .cli_utils import jload, run_cli
from .file_utils import read, write, write_go

__all__ = ["read", "write", "write_go", "run_cli", "jload"]
