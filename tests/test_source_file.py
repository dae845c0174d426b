"""
Tests for reading, rendering and writing Go files.
"""

import os
import stat
import textwrap
from pathlib import Path

import pytest

from fgoi.errors import MalformedImportError, SourceDecodeError
from fgoi.imports import Import
from fgoi.source_file import SourceFile, split_lines
from tests.infrastructure.file_utils import read, write, write_go
from tests.infrastructure.samples import MESSY_GO, SORTED_GO, SORTED_GO_NO_PREFIX


def _go(src: str) -> str:
    return textwrap.dedent(src).lstrip("\n")


def _rewrite(text: str, prefixes=()) -> str:
    sf = SourceFile.parse(text, classifier=prefixes)
    sf.sort()
    return sf.render()


class TestRead:

    def test_retained_lines_exclude_imports(self):
        sf = SourceFile.parse(MESSY_GO, classifier=["github.com/S1"])
        assert sf.lines[0] == "package main"
        assert not any("github.com" in ln for ln in sf.lines)
        assert sf.sorter.imports_count() == 5
        assert sf.sorter.custom["github.com/S1"] == [
            Import("srv", "github.com/S1/server"),
            Import("util", "github.com/S1/server/util"),
        ]

    def test_single_and_block_imports_are_merged(self):
        sf = SourceFile.parse(_go('''
            package main

            import "fmt"
            import (
            \t"os"
            )
        '''))
        assert [i.url for i in sf.sorter.core] == ["fmt", "os"]
        assert sf.lines == ["package main", ""]

    def test_garbage_inside_block_is_malformed(self, tmp_path: Path):
        src = _go('''
            package main

            import (
            \t"fmt"
            this is not an import
            )
        ''')
        p = write(tmp_path / "bad.go", src)
        with pytest.raises(MalformedImportError) as ei:
            SourceFile.read(p)
        assert ei.value.line_no == 5
        assert "this is not an import" in str(ei.value)
        assert read(p) == src

    def test_comment_inside_block_is_malformed(self):
        with pytest.raises(MalformedImportError):
            SourceFile.parse('package main\n\nimport (\n\t// tools\n\t"fmt"\n)\n')

    def test_unterminated_block_is_malformed(self):
        with pytest.raises(MalformedImportError) as ei:
            SourceFile.parse('package main\n\nimport (\n\t"fmt"\n\n')
        assert ei.value.line_no == 3
        assert "unterminated" in str(ei.value)

    def test_blank_lines_inside_block_are_ignored(self):
        sf = SourceFile.parse('package main\n\nimport (\n\n   \n\t"fmt"\n\n)\n')
        assert sf.sorter.imports_count() == 1

    def test_missing_file_is_os_error(self, tmp_path: Path):
        with pytest.raises(OSError):
            SourceFile.read(tmp_path / "nope.go")

    def test_non_utf8_file(self, tmp_path: Path):
        p = tmp_path / "latin.go"
        p.write_bytes(b"package main\n// caf\xe9\n")
        with pytest.raises(SourceDecodeError):
            SourceFile.read(p)

    def test_split_lines(self):
        assert split_lines("") == []
        assert split_lines("a\nb") == ["a", "b"]
        assert split_lines("a\r\nb\r\n") == ["a", "b"]
        assert split_lines("a\n\n") == ["a", ""]


class TestRender:

    def test_block_with_custom_bucket(self):
        assert _rewrite(MESSY_GO, ["github.com/S1"]) == SORTED_GO

    def test_block_without_custom_buckets(self):
        assert _rewrite(MESSY_GO) == SORTED_GO_NO_PREFIX

    def test_single_import(self):
        src = _go('''
            package main

            import (
            \t"fmt"
            )


            func main() { fmt.Println() }
        ''')
        assert _rewrite(src) == 'package main\n\nimport "fmt"\n\nfunc main() { fmt.Println() }\n'

    def test_single_aliased_import(self):
        src = 'package x\n\nimport (\n\tf "fmt"\n)\n\nvar _ = f.Sprint\n'
        assert _rewrite(src) == 'package x\n\nimport f "fmt"\n\nvar _ = f.Sprint\n'

    def test_no_imports_is_verbatim(self):
        src = "// Package x.\npackage x\n\n\n\nvar y = 1\n"
        assert _rewrite(src) == src

    def test_empty_buckets_get_no_separator(self):
        src = _go('''
            package main

            import (
            \t"a.io/p/x"
            \t"os"
            )

            var v int
        ''')
        out = _rewrite(src, ["b.io/q", "a.io/p"])
        assert out == 'package main\n\nimport (\n\t"os"\n\n\t"a.io/p/x"\n)\n\nvar v int\n'

    def test_separator_only_between_populated_buckets(self):
        sf = SourceFile.parse(
            'package m\n\nimport (\n\t"x.io/a"\n\t"y.io/b/c"\n)\n',
            classifier=["y.io/b"],
        )
        sf.sort()
        assert sf.render_imports() == ["import (", '\t"x.io/a"', "", '\t"y.io/b/c"', ")"]

    def test_line_after_package_clause_is_kept(self):
        src = 'package main\n// Helpers.\nimport (\n\t"fmt"\n\t"os"\n)\nvar v int\n'
        out = _rewrite(src)
        assert out == 'package main\n\nimport (\n\t"fmt"\n\t"os"\n)\n\n// Helpers.\nvar v int\n'

    def test_leading_comments_stay_above_package(self):
        src = _go('''
            //go:build linux

            // Package a does things.
            package a

            import "os"

            var _ = os.Args
        ''')
        assert _rewrite(src) == src

    def test_only_blank_lines_after_imports_are_collapsed(self):
        src = 'package a\n\nimport "os"\n\n\n\nvar a = 1\n\n\n\nvar b = 2\n'
        assert _rewrite(src) == 'package a\n\nimport "os"\n\nvar a = 1\n\n\n\nvar b = 2\n'

    def test_second_package_line_is_not_an_insertion_point(self):
        src = _go('''
            package a

            import (
            \t"fmt"
            \t"os"
            )

            const doc = `
            package b
            `
        ''')
        assert _rewrite(src) == src

    def test_package_clause_with_tab(self):
        src = 'package\tmain\n\nimport (\n\t"os"\n\t"fmt"\n)\n\nfunc main() {}\n'
        assert _rewrite(src) == 'package\tmain\n\nimport (\n\t"fmt"\n\t"os"\n)\n\nfunc main() {}\n'

    def test_package_clause_after_bom(self):
        src = '\ufeffpackage main\n\nimport (\n\t"os"\n\t"fmt"\n)\n\nfunc main() {}\n'
        assert _rewrite(src) == '\ufeffpackage main\n\nimport (\n\t"fmt"\n\t"os"\n)\n\nfunc main() {}\n'

    def test_packaged_identifier_is_not_a_package_clause(self):
        src = 'packages := 1\nimport "os"\n'
        assert _rewrite(src) == 'import "os"\n\npackages := 1\n'

    def test_no_package_clause_puts_imports_on_top(self):
        src = '// generated\nimport (\n\t"os"\n\t"fmt"\n)\nvar x = 1\n'
        assert _rewrite(src) == 'import (\n\t"fmt"\n\t"os"\n)\n\n// generated\nvar x = 1\n'

    def test_missing_final_newline_is_added(self):
        src = 'package a\n\nimport "os"\n\nvar _ = os.Args'
        assert _rewrite(src) == 'package a\n\nimport "os"\n\nvar _ = os.Args\n'

    def test_crlf_is_normalized(self):
        src = 'package a\r\n\r\nimport "os"\r\n\r\nvar _ = os.Args\r\n'
        assert _rewrite(src) == 'package a\n\nimport "os"\n\nvar _ = os.Args\n'

    @pytest.mark.parametrize("src", [MESSY_GO, SORTED_GO, 'package a\n\nimport "os"\nvar x int'])
    def test_idempotent(self, src):
        once = _rewrite(src, ["github.com/S1"])
        assert _rewrite(once, ["github.com/S1"]) == once


class TestWrite:

    def test_write_rewrites_file(self, tmp_path: Path):
        p = write(tmp_path / "main.go", MESSY_GO)
        sf = SourceFile.read(p, ["github.com/S1"])
        sf.sort()
        assert sf.write() is True
        assert read(p) == SORTED_GO
        assert [x.name for x in tmp_path.iterdir()] == ["main.go"]

    def test_write_shrinks_file(self, tmp_path: Path):
        src = 'package a\n\nimport (\n\t"os"\n)\n\n\n\n\n\n\n\n\nvar _ = os.Args\n'
        p = write(tmp_path / "a.go", src)
        sf = SourceFile.read(p)
        sf.sort()
        sf.write()
        assert read(p) == 'package a\n\nimport "os"\n\nvar _ = os.Args\n'

    def test_unchanged_file_is_not_touched(self, tmp_path: Path):
        p = write(tmp_path / "main.go", SORTED_GO)
        os.utime(p, (1_000_000, 1_000_000))
        sf = SourceFile.read(p, ["github.com/S1"])
        sf.sort()
        assert not sf.is_changed()
        assert sf.write() is False
        assert p.stat().st_mtime == 1_000_000

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_write_keeps_mode(self, tmp_path: Path):
        p = write(tmp_path / "main.go", MESSY_GO)
        p.chmod(0o640)
        sf = SourceFile.read(p)
        sf.sort()
        sf.write()
        assert stat.S_IMODE(p.stat().st_mode) == 0o640

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_write_goes_through_symlink(self, tmp_path: Path):
        real = write(tmp_path / "shared" / "real.go", MESSY_GO)
        link = tmp_path / "pkg" / "link.go"
        link.parent.mkdir()
        link.symlink_to(real)

        sf = SourceFile.read(link, ["github.com/S1"])
        sf.sort()
        assert sf.write() is True

        assert link.is_symlink()
        assert read(real) == SORTED_GO
        assert sorted(x.name for x in link.parent.iterdir()) == ["link.go"]
        assert sorted(x.name for x in real.parent.iterdir()) == ["real.go"]

    def test_failed_write_leaves_original(self, tmp_path: Path, monkeypatch):
        p = write(tmp_path / "main.go", MESSY_GO)
        sf = SourceFile.read(p)
        sf.sort()

        def _boom(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("fgoi.source_file.os.replace", _boom)
        with pytest.raises(OSError, match="disk full"):
            sf.write()
        assert read(p) == MESSY_GO
        assert [x.name for x in tmp_path.iterdir()] == ["main.go"]

    def test_round_trip_on_disk_is_stable(self, tmp_path: Path):
        p = write_go(tmp_path / "x.go", '''
            package x

            import (
            \tz "z.io/a"
            \t"bytes"
            \t"q.io/w/e"
            )
            var _ = bytes.MinRead
        ''')
        for _ in range(2):
            sf = SourceFile.read(p, ["q.io"])
            sf.sort()
            sf.write()
        first = read(p)
        sf = SourceFile.read(p, ["q.io"])
        sf.sort()
        assert sf.write() is False
        assert read(p) == first
