"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from FgoiUserError.

Programming errors and bugs should NOT inherit from FgoiUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class FgoiUserError(Exception):
    """
    Base class for all user-facing errors in fgoi.

    These errors indicate problems that the user can fix:
    malformed import blocks, broken configuration, unreadable files.
    """
    pass


class MalformedImportError(FgoiUserError):
    """
    An import block holds something that is neither an import spec
    nor the closing parenthesis, or it is never closed.
    """

    def __init__(self, path: Path | str, line_no: int, line: Optional[str] = None):
        self.path = Path(path)
        self.line_no = line_no
        self.line = line
        if line is None:
            msg = f"{self.path}:{line_no}: unterminated import block"
        else:
            msg = f"{self.path}:{line_no}: unexpected line inside import block: {line.strip()!r}"
        super().__init__(msg)


class SourceDecodeError(FgoiUserError):
    """Source file is not valid UTF-8."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        super().__init__(f"{self.path}: not a UTF-8 text file ({reason})")


class MatcherCompileError(FgoiUserError):
    """Import line patterns failed to compile."""
    pass


class ConfigError(FgoiUserError):
    """Configuration file cannot be read or has an unexpected shape."""
    pass


__all__ = [
    "FgoiUserError",
    "MalformedImportError",
    "SourceDecodeError",
    "MatcherCompileError",
    "ConfigError",
]
