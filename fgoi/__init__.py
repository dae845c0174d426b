from __future__ import annotations

# Public API:
#  • SourceFile - read / sort / write of one Go file
#  • ImportMatcher, ImportSorter, PrefixClassifier - the building blocks
#  • run - batch processing of files and directories
from .imports import Import, ImportMatcher, ImportSorter, PrefixClassifier
from .runner import run
from .source_file import SourceFile

__all__ = ["Import", "ImportMatcher", "ImportSorter", "PrefixClassifier", "SourceFile", "run"]
