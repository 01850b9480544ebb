"""Console color theme.

Colors come from the bundled ``data/theme.toml``; a ``[colors]`` table in
``~/.config/cleancopy/theme.toml`` overrides any subset of them. Every
value must be a ``#RGB`` or ``#RRGGBB`` hex code.
"""

import functools
import logging
import tomllib
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationError
from rich.theme import Theme

from cleancopy.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

HexColor = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"),
]


class ThemeColors(BaseModel):
    """Colors used by the summary tables and status messages."""

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"
    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"
    processed: HexColor = "#c1ff62"
    skipped: HexColor = "#faf870"


def bundled_theme_file() -> Traversable:
    return resources.files("cleancopy.data") / "theme.toml"


def read_colors(source: Path | Traversable) -> dict[str, Any]:
    """Read the ``[colors]`` table of a theme file.

    A missing file yields an empty table. An unreadable or malformed file
    is logged and treated as empty too.
    """
    try:
        table = tomllib.loads(source.read_text(encoding="utf-8")).get("colors", {})
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", source, e)
        return {}

    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", source)
        return {}
    return table


def load_colors() -> ThemeColors:
    """Merge the user's overrides onto the bundled colors.

    Falls back to the built-in defaults when the merged colors do not
    validate.
    """
    user_file = get_user_theme_path()
    merged = {**read_colors(bundled_theme_file()), **read_colors(user_file)}
    try:
        return ThemeColors.model_validate(merged)
    except ValidationError as e:
        logger.warning("Invalid colors in %s, using defaults: %s", user_file, e)
        return ThemeColors()


def build_theme(colors: ThemeColors) -> Theme:
    """Turn colors into Rich styles, adding the derived ones."""
    styles: dict[str, str] = colors.model_dump()
    styles.update(
        error=f"bold {colors.error}",
        bold_header=f"bold {colors.header}",
        path=f"bold {colors.text}",
    )
    return Theme(styles)


@functools.cache
def get_theme() -> Theme:
    """Theme shared by every console, loaded on first use."""
    return build_theme(load_colors())
