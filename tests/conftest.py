"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

TreeSpec = dict[str, str | bytes]


def write_tree(root: Path, files: TreeSpec) -> Path:
    """Create files below root from a mapping of relative path to content."""
    root.mkdir(parents=True, exist_ok=True)
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
    return root


def read_tree(root: Path) -> dict[str, bytes]:
    """Read every regular file below root, keyed by forward-slash relative path."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file() and not path.is_symlink()
    }


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user settings never leak in."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def make_tree() -> Callable[[Path, TreeSpec], Path]:
    """Factory fixture building a file tree from a mapping."""
    return write_tree


@pytest.fixture
def sample_source(tmp_path: Path) -> Path:
    """Source tree with plain, minified and typed scripts plus a non-script file."""
    return write_tree(
        tmp_path / "src",
        {
            "a.js": "// c\nlet x=1;",
            "b.min.js": "/* keep */var y=2;",
            "lib/c.ts": "// typed\nexport const z: number = 3;\n",
            "README.md": "# Title\n// not a script\n",
        },
    )
