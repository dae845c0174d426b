"""
Configuration model for fgoi runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional

from ..errors import ConfigError
from .paths import DEFAULT_EXTENSIONS


@dataclass(frozen=True)
class Config:
    """
    Effective settings of one run.

    packages      custom bucket prefixes, in output order
    extensions    source file suffixes picked up while walking directories
    exclude       gitwildmatch patterns pruned while walking directories
    use_gitignore honour .gitignore of walked directories
    jobs          worker threads used to process files
    """
    packages: List[str] = field(default_factory=list)
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude: List[str] = field(default_factory=list)
    use_gitignore: bool = True
    jobs: int = 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create an instance from a mapping (from YAML)."""
        unknown = set(data) - {"packages", "extensions", "exclude", "use_gitignore", "jobs"}
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")

        exts = _str_list(data, "extensions") if "extensions" in data else list(DEFAULT_EXTENSIONS)
        use_gitignore = data.get("use_gitignore", True)
        if not isinstance(use_gitignore, bool):
            raise ConfigError("use_gitignore: expected a boolean")
        jobs = data.get("jobs", 1)
        if isinstance(jobs, bool) or not isinstance(jobs, int) or jobs < 1:
            raise ConfigError("jobs: expected a positive integer")

        return cls(
            packages=_str_list(data, "packages"),
            extensions=[_normalize_ext(e) for e in exts],
            exclude=_str_list(data, "exclude"),
            use_gitignore=use_gitignore,
            jobs=jobs,
        )

    def with_overrides(
        self,
        *,
        packages: Iterable[str] = (),
        jobs: Optional[int] = None,
    ) -> "Config":
        """CLI packages go after configured ones; duplicates keep the first."""
        merged: List[str] = []
        for p in [*self.packages, *packages]:
            if p and p not in merged:
                merged.append(p)
        return replace(self, packages=merged, jobs=jobs if jobs is not None else self.jobs)


def _str_list(data: Dict[str, Any], key: str) -> List[str]:
    raw = data.get(key)
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not all(isinstance(x, str) for x in raw):
        raise ConfigError(f"{key}: expected a list of strings")
    return [x.strip() for x in raw if x.strip()]


def _normalize_ext(ext: str) -> str:
    ext = ext.lower()
    return ext if ext.startswith(".") else "." + ext


__all__ = ["Config"]
