"""
Go source file engine: import extraction, re-serialization and atomic write.

Reading drives a two-state line machine (outside / inside an import block)
with the ImportMatcher. Every line that is not part of an import declaration
is kept verbatim; the import section itself is rebuilt from the sorter on
render and placed right after the package clause.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .errors import MalformedImportError, SourceDecodeError
from .imports import Import, ImportClassifier, ImportMatcher, ImportSorter

logger = logging.getLogger(__name__)

# package clause; tolerates a leading BOM and any whitespace after the keyword
PACKAGE_CLAUSE = re.compile(r"^\ufeff?package\s")


def split_lines(text: str) -> List[str]:
    """Split on LF, drop one trailing CR per line, ignore the final terminator."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


class SourceFile:
    """One Go file: its retained (non-import) lines and its imports."""

    def __init__(self, path: Path, sorter: ImportSorter, original: str = ""):
        self.path = Path(path)
        self.lines: List[str] = []
        self.sorter = sorter
        self._original = original

    # ---------- reading ----------
    @classmethod
    def read(
        cls,
        path: Union[Path, str],
        classifier: Union[ImportClassifier, Iterable[str], None] = None,
        matcher: Optional[ImportMatcher] = None,
    ) -> "SourceFile":
        """
        Read a file and split it into retained lines and imports.

        Raises:
            OSError: the file cannot be opened or read
            SourceDecodeError: the file is not UTF-8
            MalformedImportError: an import block holds foreign content
                or is left open at end of file
        """
        path = Path(path)
        data = path.read_bytes()
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SourceDecodeError(path, str(e)) from e
        return cls.parse(text, path, classifier, matcher)

    @classmethod
    def parse(
        cls,
        text: str,
        path: Union[Path, str] = "<string>",
        classifier: Union[ImportClassifier, Iterable[str], None] = None,
        matcher: Optional[ImportMatcher] = None,
    ) -> "SourceFile":
        """Same as read() but over in-memory text."""
        matcher = matcher or ImportMatcher()
        sf = cls(Path(path), ImportSorter(classifier), original=text)

        inside_block = False
        block_start = 0
        for line_no, line in enumerate(split_lines(text), start=1):
            if inside_block:
                if matcher.match_import_end(line):
                    inside_block = False
                    continue
                imp = matcher.match_in_block(line)
                if imp is not None:
                    sf.add_import(imp)
                    continue
                if line.strip():
                    raise MalformedImportError(sf.path, line_no, line)
                continue

            imp = matcher.match_single(line)
            if imp is not None:
                sf.add_import(imp)
                continue

            if matcher.match_import_begin(line):
                inside_block = True
                block_start = line_no
                continue

            sf.lines.append(line)

        if inside_block:
            raise MalformedImportError(sf.path, block_start)

        logger.debug(f"{sf.path}: {len(sf.sorter)} imports, {len(sf.lines)} retained lines")
        return sf

    def add_import(self, imp: Import) -> None:
        self.sorter.insert(imp)

    # ---------- transformation ----------
    def sort(self) -> None:
        self.sorter.sort()

    def render_imports(self) -> List[str]:
        """Import section lines (without the trailing blank line)."""
        single = self.sorter.get_single_count()
        if single is not None:
            return [f"import {single}"]
        if not len(self.sorter):
            return []

        out = ["import ("]
        put_blank = False
        for bucket in self.sorter:
            if not bucket:
                continue
            if put_blank:
                out.append("")
            out.extend(f"\t{imp}" for imp in bucket)
            put_blank = True
        out.append(")")
        return out

    def render(self) -> str:
        """Full new file text."""
        section = self.render_imports()
        if not section:
            return "".join(f"{ln}\n" for ln in self.lines)

        slot = 0
        for idx, line in enumerate(self.lines):
            if PACKAGE_CLAUSE.match(line):
                slot = idx + 1
                break

        out: List[str] = list(self.lines[:slot])
        if slot:
            out.append("")
        out.extend(section)
        out.append("")

        # only one blank line separates the import section from the code
        rest = self.lines[slot:]
        skip = 0
        while skip < len(rest) and not rest[skip].strip():
            skip += 1
        out.extend(rest[skip:])
        return "".join(f"{ln}\n" for ln in out)

    def is_changed(self) -> bool:
        return self.render() != self._original

    # ---------- writing ----------
    def write(self) -> bool:
        """
        Persist the rendered text. Returns False (and leaves the file alone)
        when nothing would change.
        """
        content = self.render()
        if content == self._original:
            return False
        write_atomic(self.path, content.encode("utf-8"))
        return True


def write_atomic(path: Path, data: bytes) -> None:
    """
    Replace `path` with `data` through a temporary sibling file.
    The target is either fully rewritten or left exactly as it was.
    Symlinks are written through: the link stays, its target is replaced.
    """
    path = Path(os.path.realpath(path))
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        if path.exists():
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


__all__ = ["SourceFile", "split_lines", "write_atomic"]
