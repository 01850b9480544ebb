"""Unit tests for the destination guard.

Tests creation of new destinations, refusal of foreign directories,
replacement of owned directories, and marker file handling.
"""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest

from cleancopy import __version__
from cleancopy.core.errors import ForeignDirectoryError, GuardError
from cleancopy.core.paths import MARKER_FILENAME
from cleancopy.filesystem.guard import has_marker, prepare, write_marker


class TestPrepareMissingDestination:
    """Tests for destinations that do not exist yet."""

    def test_creates_destination_with_marker(self, tmp_path: Path) -> None:
        dest = tmp_path / "out"

        result = prepare(dest)

        assert result == dest
        assert dest.is_dir()
        assert [p.name for p in dest.iterdir()] == [MARKER_FILENAME]

    def test_creates_missing_ancestors(self, tmp_path: Path) -> None:
        dest = tmp_path / "a" / "b" / "out"

        prepare(dest)

        assert has_marker(dest)


class TestPrepareForeignDestination:
    """Tests for existing directories without the marker."""

    def test_refuses_directory_without_marker(self, tmp_path: Path) -> None:
        dest = tmp_path / "precious"
        dest.mkdir()
        (dest / "notes.txt").write_text("do not delete")

        with pytest.raises(ForeignDirectoryError) as exc_info:
            prepare(dest)

        assert exc_info.value.path == dest
        assert "marker" in str(exc_info.value)
        assert (dest / "notes.txt").read_text() == "do not delete"
        assert not (dest / MARKER_FILENAME).exists()

    def test_refuses_empty_directory_without_marker(self, tmp_path: Path) -> None:
        """Even an empty foreign directory is left alone."""
        dest = tmp_path / "empty"
        dest.mkdir()

        with pytest.raises(ForeignDirectoryError):
            prepare(dest)

        assert list(dest.iterdir()) == []

    def test_refuses_regular_file(self, tmp_path: Path) -> None:
        dest = tmp_path / "file.txt"
        dest.write_text("content")

        with pytest.raises(ForeignDirectoryError):
            prepare(dest)

        assert dest.read_text() == "content"

    def test_refuses_marker_directory_instead_of_file(self, tmp_path: Path) -> None:
        """A directory named like the marker is not proof of ownership."""
        dest = tmp_path / "out"
        (dest / MARKER_FILENAME).mkdir(parents=True)

        with pytest.raises(ForeignDirectoryError):
            prepare(dest)

    def test_no_deletion_happens_before_check(self, tmp_path: Path) -> None:
        dest = tmp_path / "precious"
        dest.mkdir()

        with patch("cleancopy.filesystem.guard.shutil.rmtree") as mock_rmtree:
            with pytest.raises(ForeignDirectoryError):
                prepare(dest)

        mock_rmtree.assert_not_called()


class TestPrepareOwnedDestination:
    """Tests for destinations created by a previous run."""

    def test_replaces_previous_output(self, tmp_path: Path) -> None:
        dest = tmp_path / "out"
        prepare(dest)
        (dest / "stale.js").write_text("old")
        (dest / "old_dir").mkdir()
        (dest / "old_dir" / "x.ts").write_text("old")

        prepare(dest)

        assert sorted(p.name for p in dest.iterdir()) == [MARKER_FILENAME]

    def test_rmtree_failure_raises_guard_error(self, tmp_path: Path) -> None:
        dest = tmp_path / "out"
        prepare(dest)

        with patch(
            "cleancopy.filesystem.guard.shutil.rmtree",
            side_effect=PermissionError("Permission denied"),
        ):
            with pytest.raises(GuardError, match="Cannot remove previous output"):
                prepare(dest)


class TestMarker:
    """Tests for marker file content."""

    def test_marker_is_readable_toml(self, tmp_path: Path) -> None:
        dest = tmp_path / "out"
        dest.mkdir()
        source = tmp_path / "src"

        marker = write_marker(dest, source)

        data = tomllib.loads(marker.read_text(encoding="utf-8"))
        assert data["tool"] == "cleancopy"
        assert data["version"] == __version__
        assert data["source"] == str(source)
        assert "created" in data

    def test_marker_starts_with_explanation(self, tmp_path: Path) -> None:
        dest = tmp_path / "out"
        dest.mkdir()

        marker = write_marker(dest)

        assert marker.read_text(encoding="utf-8").startswith("# This directory was generated")

    def test_has_marker(self, tmp_path: Path) -> None:
        assert has_marker(tmp_path) is False
        (tmp_path / MARKER_FILENAME).write_text("x")
        assert has_marker(tmp_path) is True

    def test_write_failure_raises_guard_error(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing"

        with pytest.raises(GuardError, match="Cannot write marker file"):
            write_marker(missing)
