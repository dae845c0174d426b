from pathlib import Path

import pytest

from fgoi.imports import ImportMatcher
from tests.infrastructure.file_utils import write, write_go
from tests.infrastructure.samples import MESSY_GO


@pytest.fixture
def matcher() -> ImportMatcher:
    return ImportMatcher()


@pytest.fixture
def goproj(tmp_path: Path) -> Path:
    """Small Go tree: two packages, an ignored vendor dir, a non-Go file."""
    root = tmp_path / "proj"
    write(root / "cmd" / "main.go", MESSY_GO)
    write_go(root / "pkg" / "util" / "util.go", '''
        package util

        import "strings"

        func Up(s string) string { return strings.ToUpper(s) }
    ''')
    write(root / "vendor" / "dep" / "dep.go", MESSY_GO)
    write(root / "README.md", "import (\nnot go\n")
    write(root / ".gitignore", "vendor/\n")
    return root
