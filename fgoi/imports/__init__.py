from __future__ import annotations

from .classifier import (
    CORE,
    THIRD_PARTY,
    BucketKey,
    BucketKind,
    ImportClassifier,
    PrefixClassifier,
)
from .matcher import ImportMatcher
from .model import Import
from .sorter import ImportSorter

__all__ = [
    "Import",
    "ImportMatcher",
    "ImportSorter",
    "ImportClassifier",
    "PrefixClassifier",
    "BucketKey",
    "BucketKind",
    "CORE",
    "THIRD_PARTY",
]
