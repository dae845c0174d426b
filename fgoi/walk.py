from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

import pathspec


def is_source_file(path: Path, extensions: Sequence[str]) -> bool:
    return path.suffix.lower() in extensions


def build_ignore_spec(
    root: Path,
    *,
    exclude: Iterable[str] = (),
    use_gitignore: bool = True,
) -> Optional[pathspec.GitIgnoreSpec]:
    """
    Combine configured exclude patterns with <root>/.gitignore.
    Return None when there is nothing to ignore.
    """
    lines: List[str] = [p for p in exclude if p]
    gitignore = root / ".gitignore"
    if use_gitignore and gitignore.is_file():
        for ln in gitignore.read_text(encoding="utf-8", errors="ignore").splitlines():
            ln = ln.strip()
            if ln and not ln.startswith("#"):
                lines.append(ln)
    if not lines:
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


def iter_files(
    root: Path,
    *,
    extensions: Sequence[str],
    spec: Optional[pathspec.PathSpec] = None,
) -> Iterator[Path]:
    """
    Recursive source file iterator with ignore-spec directory pruning.
    Yields paths in a stable (sorted) order.
    """
    root = root.resolve()
    for dirpath, dirnames, filenames in os.walk(root):
        # Do not enter .git
        if ".git" in dirnames:
            dirnames.remove(".git")

        if spec is not None:
            keep: List[str] = []
            for d in dirnames:
                rel_dir = Path(dirpath, d).relative_to(root).as_posix()
                if not spec.match_file(rel_dir + "/"):
                    keep.append(d)
            dirnames[:] = keep
        dirnames.sort()

        for fn in sorted(filenames):
            p = Path(dirpath, fn)
            if not is_source_file(p, extensions):
                continue
            if spec is not None and spec.match_file(p.relative_to(root).as_posix()):
                continue
            yield p


__all__ = ["is_source_file", "build_ignore_spec", "iter_files"]
