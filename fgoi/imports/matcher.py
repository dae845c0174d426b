"""
Line-level recognizers for Go import declarations.

Four independent predicates over a single line; the matcher keeps no state
between calls, so one instance can be shared by every file of a run.
"""

from __future__ import annotations

import re
from typing import Optional

from ..errors import MatcherCompileError
from .model import Import

# Alias alphabet: identifiers, "_" blank imports and "." dot imports.
_NAME = r"([a-zA-Z0-9_.\-]*)?"

SINGLE_IMPORT = r'^\s*import\s+' + _NAME + r'\s*"(.+)"\s*$'
BLOCK_IMPORT = r'^\s*' + _NAME + r'\s*"(.+)"\s*$'
IMPORT_BEGIN = r'^\s*import\s+\(\s*$'
IMPORT_END = r'^\s*\)\s*$'


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise MatcherCompileError(f"invalid import pattern {pattern!r}: {e}") from e


class ImportMatcher:
    """Recognizes single imports, block entries and block delimiters."""

    def __init__(
        self,
        *,
        single_import: str = SINGLE_IMPORT,
        block_import: str = BLOCK_IMPORT,
        import_begin: str = IMPORT_BEGIN,
        import_end: str = IMPORT_END,
    ):
        self.single_import = _compile(single_import)
        self.block_import = _compile(block_import)
        self.import_begin = _compile(import_begin)
        self.import_end = _compile(import_end)

    def match_single(self, line: str) -> Optional[Import]:
        """`import [name] "path"` on one line."""
        return _capture(self.single_import, line)

    def match_in_block(self, line: str) -> Optional[Import]:
        """`[name] "path"` inside a parenthesized import block."""
        return _capture(self.block_import, line)

    def match_import_begin(self, line: str) -> bool:
        return self.import_begin.match(line) is not None

    def match_import_end(self, line: str) -> bool:
        return self.import_end.match(line) is not None


def _capture(pattern: re.Pattern[str], line: str) -> Optional[Import]:
    m = pattern.match(line)
    if m is None:
        return None
    return Import.of(m.group(1), m.group(2))


__all__ = ["ImportMatcher"]
