"""
Import classification: which bucket an import path belongs to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple


class BucketKind(str, Enum):
    CORE = "core"
    THIRD_PARTY = "third_party"
    CUSTOM = "custom"


@dataclass(frozen=True)
class BucketKey:
    """Bucket identity. `prefix` is set only for custom buckets."""
    kind: BucketKind
    prefix: Optional[str] = None

    @classmethod
    def custom(cls, prefix: str) -> "BucketKey":
        return cls(BucketKind.CUSTOM, prefix)

    def __str__(self) -> str:
        if self.kind is BucketKind.CUSTOM:
            return f"custom({self.prefix})"
        return self.kind.value


CORE = BucketKey(BucketKind.CORE)
THIRD_PARTY = BucketKey(BucketKind.THIRD_PARTY)


def looks_remote(url: str) -> bool:
    """Domain-shaped path heuristic: both a dot and a slash somewhere in it."""
    return "." in url and "/" in url


class ImportClassifier(ABC):
    """Abstract base for import classification."""

    @property
    @abstractmethod
    def prefixes(self) -> Tuple[str, ...]:
        """Custom bucket prefixes in output order."""
        pass

    @abstractmethod
    def classify(self, url: str) -> BucketKey:
        """Determine the bucket for an import path."""
        pass


class PrefixClassifier(ImportClassifier):
    """
    Core / third-party / custom-prefix classification.

    The prefix table is fixed at construction and never mutated afterwards,
    so one instance may be shared by any number of sorters and threads.
    Duplicate prefixes collapse to their first declaration; empty ones
    are dropped.
    """

    def __init__(self, prefixes: Iterable[str] = ()):
        seen: list[str] = []
        for p in prefixes:
            if p and p not in seen:
                seen.append(p)
        self._prefixes: Tuple[str, ...] = tuple(seen)

    @property
    def prefixes(self) -> Tuple[str, ...]:
        return self._prefixes

    def classify(self, url: str) -> BucketKey:
        if not looks_remote(url):
            return CORE
        prefix = self.best_prefix(url)
        if prefix is None:
            return THIRD_PARTY
        return BucketKey.custom(prefix)

    def best_prefix(self, url: str) -> Optional[str]:
        """
        Longest declared prefix that the path starts with.

        Lets a caller declare both "github.com/org" and
        "github.com/org/special" and have imports routed to the more
        specific one. Equal lengths resolve to the first declared.
        """
        best: Optional[str] = None
        for p in self._prefixes:
            if url.startswith(p) and (best is None or len(p) > len(best)):
                best = p
        return best

    def __repr__(self) -> str:
        return f"PrefixClassifier({list(self._prefixes)!r})"


__all__ = [
    "BucketKind",
    "BucketKey",
    "CORE",
    "THIRD_PARTY",
    "ImportClassifier",
    "PrefixClassifier",
    "looks_remote",
]
