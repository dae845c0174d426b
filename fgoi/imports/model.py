"""
Import value type shared by the matcher, the sorter and the source file engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Import:
    """A single Go import spec: optional bound name plus the quoted path."""
    name: Optional[str]  # alias, "_" or "."; None when unaliased
    url: str             # import path without quotes

    def __str__(self) -> str:
        if self.name:
            return f'{self.name} "{self.url}"'
        return f'"{self.url}"'

    @classmethod
    def of(cls, name: Optional[str], url: str) -> "Import":
        """Build an import, normalizing an empty name to None."""
        return cls(name=name or None, url=url)


__all__ = ["Import"]
