# Copyright Rand Arete @ Ananke 2025
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
"""Unit tests for path normalization."""

from pathlib import Path

import pytest

from noderesolve import (
    InvalidPathError,
    ResolutionIOError,
    canonicalize,
    normalize_lexically,
    normalize_path,
)
from noderesolve.paths import check_path, is_dir, is_file


class TestNormalizeLexically:
    """"." and ".." are collapsed without touching the filesystem."""

    @pytest.mark.parametrize("raw,expected", [
        ("/a/b/c", "/a/b/c"),
        ("/a/./b", "/a/b"),
        ("/a/b/../c", "/a/c"),
        ("/a/b/../../c", "/c"),
        ("/../a", "/a"),
        ("/a/../..", "/"),
        ("/", "/"),
        ("a/../b", "b"),
        ("a/..", "."),
    ])
    def test_collapse(self, raw, expected):
        assert normalize_lexically(raw) == Path(expected)

    def test_nonexistent_path(self):
        assert normalize_lexically("/does/not/exist/../x") == Path("/does/not/x")


class TestCanonicalize:
    """Canonicalization goes through the filesystem."""

    def test_real_path(self, root):
        (root / "sub").mkdir()
        (root / "file.js").write_text("")
        assert canonicalize(root / "sub" / ".." / "file.js") == root / "file.js"

    def test_follows_symlink(self, root, make_symlink):
        (root / "real").mkdir()
        (root / "real" / "file.js").write_text("")
        make_symlink(root / "link", root / "real", target_is_directory=True)

        assert canonicalize(root / "link" / "file.js") == root / "real" / "file.js"

    def test_dangling_symlink(self, root, make_symlink):
        make_symlink(root / "dangling.js", root / "missing.js")

        with pytest.raises(ResolutionIOError) as exc_info:
            canonicalize(root / "dangling.js")
        assert isinstance(exc_info.value.cause, OSError)

    def test_missing_path(self, root):
        with pytest.raises(ResolutionIOError):
            canonicalize(root / "missing.js")


class TestNormalizePath:
    """normalize_path picks the mode from preserve_symlinks."""

    def test_preserve_keeps_link_segment(self, root, make_symlink):
        (root / "real").mkdir()
        (root / "real" / "file.js").write_text("")
        make_symlink(root / "link", root / "real", target_is_directory=True)

        path = root / "link" / "." / "file.js"
        assert normalize_path(path, preserve_symlinks=True) == root / "link" / "file.js"
        assert normalize_path(path, preserve_symlinks=False) == root / "real" / "file.js"

    def test_preserve_makes_absolute(self, root, monkeypatch):
        monkeypatch.chdir(root)
        assert normalize_path("a/../b.js", preserve_symlinks=True) == root / "b.js"


class TestCheckPath:
    """check_path rejects paths the filesystem cannot represent."""

    def test_valid(self):
        assert check_path(Path("/a/b.js")) == "/a/b.js"

    def test_nul_byte(self):
        with pytest.raises(InvalidPathError):
            check_path("/a/b\x00.js")


class TestProbes:
    """is_file / is_dir answer False for candidates that cannot exist."""

    def test_missing(self, root):
        assert not is_file(root / "missing.js")
        assert not is_dir(root / "missing")

    def test_overlong_name(self, root):
        name = "x" * 300
        assert not is_file(root / name)
        assert not is_dir(root / name)

    def test_existing(self, root):
        (root / "file.js").write_text("")
        assert is_file(root / "file.js")
        assert is_dir(root)
        assert not is_dir(root / "file.js")
