"""Unit tests for the tree copier.

Tests structural equality of copies, handling of symlinks and special
entries, the reserved marker name, and fatal error propagation.
"""

import os
import shutil
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from cleancopy.core.errors import FatalCopyError
from cleancopy.core.paths import MARKER_FILENAME
from cleancopy.filesystem.copier import copy_tree, get_entry_type
from cleancopy.filesystem.guard import prepare
from cleancopy.filesystem.models import EntryType
from tests.conftest import TreeSpec, read_tree


class TestCopyTree:
    """Tests for copy_tree."""

    def test_copy_is_structurally_identical(
        self, tmp_path: Path, make_tree: Callable[[Path, TreeSpec], Path]
    ) -> None:
        """Every file and directory is mirrored with identical bytes."""
        src = make_tree(
            tmp_path / "src",
            {
                "a.js": "// comment\nlet a = 1;\n",
                "deep/er/b.ts": "const b = 2; /* c */\n",
                "img/logo.png": b"\x89PNG\r\n\x1a\n\x00\xff",
                "crlf.js": "let c = 3;\r\n",
            },
        )
        (src / "empty_dir").mkdir()
        dest = prepare(tmp_path / "out")

        stats = copy_tree(src, dest)

        copied = read_tree(dest)
        copied.pop(MARKER_FILENAME)
        assert copied == read_tree(src)
        assert (dest / "empty_dir").is_dir()
        assert stats.files == 4
        assert stats.directories == 4  # deep, deep/er, img, empty_dir
        assert stats.ignored == 0

    def test_source_is_not_modified(
        self, tmp_path: Path, make_tree: Callable[[Path, TreeSpec], Path]
    ) -> None:
        src = make_tree(tmp_path / "src", {"a.js": "// c\nx();\n"})
        before = read_tree(src)

        copy_tree(src, prepare(tmp_path / "out"))

        assert read_tree(src) == before

    def test_symlinks_are_skipped(
        self,
        tmp_path: Path,
        make_tree: Callable[[Path, TreeSpec], Path],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        src = make_tree(tmp_path / "src", {"real.js": "x();\n"})
        (src / "link.js").symlink_to(src / "real.js")
        (src / "dangling.js").symlink_to(src / "missing.js")
        (src / "dirlink").symlink_to(src, target_is_directory=True)
        dest = prepare(tmp_path / "out")

        stats = copy_tree(src, dest)

        assert (dest / "real.js").is_file()
        assert not (dest / "link.js").exists()
        assert not (dest / "link.js").is_symlink()
        assert not (dest / "dangling.js").is_symlink()
        assert not (dest / "dirlink").exists()
        assert stats.files == 1
        assert stats.ignored == 3
        assert "symlink entries are not copied" in caplog.text

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="FIFOs not supported")
    def test_special_files_are_skipped(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        src.mkdir()
        os.mkfifo(src / "pipe")
        dest = prepare(tmp_path / "out")

        stats = copy_tree(src, dest)

        assert not (dest / "pipe").exists()
        assert stats.ignored == 1

    def test_marker_named_source_file_is_not_copied(
        self, tmp_path: Path, make_tree: Callable[[Path, TreeSpec], Path]
    ) -> None:
        """The guard's fresh marker survives a source that carries one."""
        src = make_tree(tmp_path / "src", {MARKER_FILENAME: "foreign", "a.js": "x();"})
        dest = prepare(tmp_path / "out")
        fresh_marker = (dest / MARKER_FILENAME).read_text()

        stats = copy_tree(src, dest)

        assert (dest / MARKER_FILENAME).read_text() == fresh_marker
        assert stats.ignored == 1

    def test_marker_name_below_root_is_copied(
        self, tmp_path: Path, make_tree: Callable[[Path, TreeSpec], Path]
    ) -> None:
        src = make_tree(tmp_path / "src", {f"sub/{MARKER_FILENAME}": "nested"})
        dest = prepare(tmp_path / "out")

        copy_tree(src, dest)

        assert (dest / "sub" / MARKER_FILENAME).read_text() == "nested"

    def test_file_copy_failure_is_fatal(
        self, tmp_path: Path, make_tree: Callable[[Path, TreeSpec], Path]
    ) -> None:
        src = make_tree(tmp_path / "src", {"a.js": "x();", "b.js": "y();"})
        dest = prepare(tmp_path / "out")

        with patch(
            "cleancopy.filesystem.copier.shutil.copyfile",
            side_effect=PermissionError(13, "Permission denied"),
        ):
            with pytest.raises(FatalCopyError) as exc_info:
                copy_tree(src, dest)

        assert exc_info.value.path == src / "a.js"
        assert "Permission denied" in str(exc_info.value)

    def test_listing_failure_is_fatal(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        src.mkdir()
        dest = prepare(tmp_path / "out")

        with patch(
            "cleancopy.filesystem.copier.list_entries",
            side_effect=FileNotFoundError(2, "No such file or directory"),
        ):
            with pytest.raises(FatalCopyError) as exc_info:
                copy_tree(src, dest)

        assert exc_info.value.path == src

    def test_failure_leaves_partial_copy(
        self, tmp_path: Path, make_tree: Callable[[Path, TreeSpec], Path]
    ) -> None:
        """No rollback: files copied before the failure remain."""
        src = make_tree(tmp_path / "src", {"a.js": "a();", "b.js": "b();"})
        dest = prepare(tmp_path / "out")
        real_copyfile = shutil.copyfile

        def copy_first_only(source: Path, target: Path, **kwargs: object) -> Path:
            if Path(source).name == "b.js":
                raise OSError(5, "Input/output error")
            return real_copyfile(source, target)

        with patch("cleancopy.filesystem.copier.shutil.copyfile", side_effect=copy_first_only):
            with pytest.raises(FatalCopyError):
                copy_tree(src, dest)

        assert (dest / "a.js").read_text() == "a();"
        assert not (dest / "b.js").exists()


class TestGetEntryType:
    """Tests for get_entry_type."""

    def test_classifies_entries(self, tmp_path: Path) -> None:
        (tmp_path / "dir").mkdir()
        (tmp_path / "file.js").write_text("x")
        (tmp_path / "link").symlink_to(tmp_path / "file.js")

        assert get_entry_type(tmp_path / "dir") == EntryType.DIRECTORY
        assert get_entry_type(tmp_path / "file.js") == EntryType.FILE
        assert get_entry_type(tmp_path / "link") == EntryType.SYMLINK
