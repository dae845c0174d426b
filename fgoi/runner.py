"""
Batch driver: expands paths, runs read -> sort -> write per file and
collects a RunReport. One failing file never stops its siblings.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from .config import Config
from .errors import FgoiUserError
from .imports import ImportClassifier, ImportMatcher, PrefixClassifier
from .report import FileFailure, RunReport
from .source_file import SourceFile
from .walk import build_ignore_spec, is_source_file, iter_files

logger = logging.getLogger(__name__)


def process_file(
    path: Path,
    classifier: ImportClassifier,
    matcher: ImportMatcher,
    *,
    check: bool = False,
) -> bool:
    """Sort imports of one file. Returns True when its content changes."""
    sf = SourceFile.read(path, classifier, matcher)
    sf.sort()
    if check:
        return sf.is_changed()
    return sf.write()


def collect_files(paths: Iterable[Path], cfg: Config) -> Tuple[List[Path], List[FileFailure]]:
    """Expand file and directory arguments into the list of files to process."""
    files: List[Path] = []
    failures: List[FileFailure] = []
    seen = set()

    def _add(p: Path) -> None:
        key = p.resolve()
        if key not in seen:
            seen.add(key)
            files.append(p)

    for p in paths:
        if p.is_dir():
            spec = build_ignore_spec(p, exclude=cfg.exclude, use_gitignore=cfg.use_gitignore)
            for f in iter_files(p, extensions=cfg.extensions, spec=spec):
                _add(f)
        elif p.is_file():
            if is_source_file(p, cfg.extensions):
                _add(p)
            else:
                logger.debug(f"Skipping {p}: not a source file")
        else:
            logger.error(f"could not process file '{p}': no such file or directory")
            failures.append(FileFailure(path=str(p), error="no such file or directory"))
    return files, failures


def run(paths: Iterable[Path], cfg: Optional[Config] = None, *, check: bool = False) -> RunReport:
    """
    Process every Go file reachable from `paths`.

    The matcher and the classifier are built once and shared read-only
    between worker threads; each file gets its own sorter.
    """
    cfg = cfg or Config()
    matcher = ImportMatcher()
    classifier = PrefixClassifier(cfg.packages)

    files, failures = collect_files(paths, cfg)
    report = RunReport(check=check, failed=failures)

    def _one(path: Path) -> Tuple[bool, Optional[str]]:
        try:
            return process_file(path, classifier, matcher, check=check), None
        except (FgoiUserError, OSError) as e:
            logger.error(f"could not process file '{path}': {e}")
            return False, str(e)

    results: Dict[Path, Tuple[bool, Optional[str]]] = {}
    if cfg.jobs > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=min(cfg.jobs, len(files))) as executor:
            for path, res in zip(files, executor.map(_one, files)):
                results[path] = res
    else:
        for path in files:
            results[path] = _one(path)

    for path in files:
        changed, error = results[path]
        if error is not None:
            report.failed.append(FileFailure(path=str(path), error=error))
            continue
        report.processed.append(str(path))
        if changed:
            report.changed.append(str(path))
            logger.debug(f"{'Would rewrite' if check else 'Rewrote'} {path}")

    verb = "would change" if check else "changed"
    logger.info(
        f"{len(report.processed)} files processed, {len(report.changed)} {verb}, "
        f"{len(report.failed)} failed"
    )
    return report


__all__ = ["run", "process_file", "collect_files"]
