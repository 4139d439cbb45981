"""Console colors for dotviz.

The bundled ``data/theme.toml`` defines every color. A user file at
``~/.config/dotviz/theme.toml`` may override any subset of them; an
invalid override is logged and the defaults are used instead.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict
from rich.theme import Theme

from dotviz.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _parse_hex_color(value: object) -> str:
    if not isinstance(value, str):
        raise ValueError("color must be a string")
    color = value.strip()
    if not color.startswith("#"):
        raise ValueError("color must start with '#'")
    digits = color[1:]
    if len(digits) not in (3, 6):
        raise ValueError("color must be #RGB or #RRGGBB format")
    try:
        int(digits, 16)
    except ValueError:
        raise ValueError(f"invalid hex color '{color}'") from None
    return color


HexColor = Annotated[str, BeforeValidator(_parse_hex_color)]


class ThemeColors(BaseModel):
    """Named colors used by the CLI, as ``#RGB`` or ``#RRGGBB`` codes."""

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # Simulation results
    added: HexColor = "#c1ff62"
    removed: HexColor = "#f53263"
    changed: HexColor = "#0e8ac8"

    # File listing
    template: HexColor = "#faf870"
    executable: HexColor = "#d44ebc"
    module: HexColor = "#69B9A1"
    directory: HexColor = "#0e8ac8"


# Colors rendered in bold under their own name
BOLD_COLORS = frozenset({"error", "directory"})

# Extra style name -> (source color, bold)
DERIVED_STYLES: dict[str, tuple[str, bool]] = {
    "bold_header": ("header", True),
    "dim": ("muted", False),
    "path": ("text", True),
}


def get_bundled_theme_path() -> Path:
    """Path of the theme shipped with the package."""
    return Path(str(resources.files("dotviz").joinpath("data", "theme.toml")))


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Args:
        path: Theme file.

    Returns:
        String-valued entries of the table, or None if the file is
        missing, unreadable or malformed.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    table = data.get("colors", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return None
    return {name: value for name, value in table.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the user theme over the bundled one.

    Returns:
        Validated colors; the built-in defaults if validation fails.
    """
    colors = _load_toml_colors(get_bundled_theme_path())
    if colors is None:
        logger.error("Bundled theme is missing or broken; using built-in colors")
        colors = {}

    user_path = get_user_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Applying %d color overrides from %s", len(overrides), user_path)
        colors = {**colors, **overrides}

    try:
        return ThemeColors.model_validate(colors)
    except ValueError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a set of colors.

    Every color becomes a style of the same name. ``bold_header``,
    ``dim`` and ``path`` are derived from header, muted and text.

    Args:
        colors: Colors to use. Loaded from disk when None.

    Returns:
        Rich Theme.
    """
    palette = (colors or load_theme()).model_dump()

    styles = {
        name: f"bold {color}" if name in BOLD_COLORS else color
        for name, color in palette.items()
    }
    for name, (source, bold) in DERIVED_STYLES.items():
        styles[name] = f"bold {palette[source]}" if bold else palette[source]
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Rich theme shared by the console instances, loaded once."""
    return get_rich_theme()


def reload_theme() -> Theme:
    """Drop the cached theme and load it again from disk."""
    get_theme.cache_clear()
    return get_theme()
