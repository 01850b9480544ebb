"""Exclusion patterns for files that must not be cleaned.

A pattern is either a prefix (ends with a path separator, e.g. ``lib/``)
or a glob over the whole relative path (e.g. ``*.spec.ts``). Globs only
know two wildcards: ``*`` matches any run of characters, including
``/``, and ``?`` matches exactly one character. Every other character is
literal, so brackets and braces never form character classes.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

_SEPARATORS: tuple[str, ...] = ("/", "\\")


class PatternKind(str, Enum):
    """How an exclusion pattern is matched.

    Attributes:
        PREFIX: Literal prefix of the relative path.
        GLOB: Anchored wildcard match of the whole relative path.
    """

    PREFIX = "prefix"
    GLOB = "glob"


def normalize_separators(path: str) -> str:
    """Replace backslashes with forward slashes."""
    return path.replace("\\", "/")


def to_relative_posix(path: Path, root: Path) -> str:
    """Express a path below root as a forward-slash relative string.

    Args:
        path: Path located under root.
        root: Directory the result is relative to.

    Returns:
        Relative path such as ``lib/util.js``.
    """
    return path.relative_to(root).as_posix()


def glob_to_regex(glob: str) -> re.Pattern[str]:
    """Translate a glob into an anchored regular expression.

    Literal runs are passed through ``re.escape``; ``*`` becomes ``.*``
    and ``?`` becomes ``.``. The result must be used with ``fullmatch``.

    Args:
        glob: Glob pattern text.

    Returns:
        Compiled regular expression.
    """
    parts: list[str] = []
    for char in glob:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


@dataclass(frozen=True, slots=True)
class ExclusionPattern:
    """A compiled exclusion pattern.

    Attributes:
        raw: Pattern text as given by the user.
        kind: Prefix or glob.
        regex: Compiled expression, always used with ``fullmatch``.
        prefix: Normalized prefix (PREFIX kind only).
    """

    raw: str
    kind: PatternKind
    regex: re.Pattern[str]
    prefix: str | None = None

    @classmethod
    def parse(cls, raw: str) -> "ExclusionPattern":
        """Compile pattern text once for repeated matching.

        Never raises: any text is a valid pattern.

        Args:
            raw: Pattern text, e.g. ``lib/`` or ``src/*.test.js``.

        Returns:
            Compiled ExclusionPattern.
        """
        if raw.endswith(_SEPARATORS):
            prefix = normalize_separators(raw)
            regex = re.compile(re.escape(prefix) + ".*", re.DOTALL)
            return cls(raw=raw, kind=PatternKind.PREFIX, regex=regex, prefix=prefix)
        return cls(raw=raw, kind=PatternKind.GLOB, regex=glob_to_regex(raw))

    def matches(self, relative_path: str) -> bool:
        """Check a forward-slash relative path against this pattern."""
        return self.regex.fullmatch(normalize_separators(relative_path)) is not None


def compile_patterns(raw_patterns: Iterable[str]) -> tuple[ExclusionPattern, ...]:
    """Compile pattern texts, keeping their order."""
    return tuple(ExclusionPattern.parse(raw) for raw in raw_patterns)


def matches(relative_path: str, patterns: Iterable[ExclusionPattern]) -> bool:
    """Check whether any pattern excludes a relative path.

    Args:
        relative_path: Path relative to the destination root, using
            forward slashes.
        patterns: Compiled exclusion patterns.

    Returns:
        True if at least one pattern matches; False for no patterns.
    """
    return any(pattern.matches(relative_path) for pattern in patterns)
