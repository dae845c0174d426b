from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class FileFailure(BaseModel):
    path: str
    error: str


class RunReport(BaseModel):
    """Outcome of one run; printed as JSON with --json."""
    check: bool = False
    processed: List[str] = Field(default_factory=list)
    changed: List[str] = Field(default_factory=list)
    failed: List[FileFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        if self.failed:
            return False
        return not (self.check and self.changed)

    def exit_code(self) -> int:
        return 0 if self.ok else 1


__all__ = ["FileFailure", "RunReport"]
