"""Console color theme.

The bundled ``data/theme.toml`` provides every color. A ``theme.toml``
in the naudit config directory may override any subset of them; values
that fail validation are reported and the bundled theme is used instead.
"""

import functools
import logging
import re
import tomllib
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from naudit.core.paths import get_config_dir

logger = logging.getLogger(__name__)

THEME_FILE_NAME = "theme.toml"

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Hex colors used by console output."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"
    step: str = "#0e8ac8"
    label: str = "#69B9A1"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object) -> str:
        """Accept only ``#RGB`` or ``#RRGGBB`` strings."""
        if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value.strip()):
            msg = f"expected #RGB or #RRGGBB, got {value!r}"
            raise ValueError(msg)
        return value.strip()


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/naudit/theme.toml.
    """
    return get_config_dir() / THEME_FILE_NAME


def read_color_table(text: str, source: str) -> dict[str, str]:
    """Extract the ``[colors]`` table from TOML text.

    Args:
        text: TOML document.
        source: Name used in log messages.

    Returns:
        Color names mapped to their string values. Empty if the document
        cannot be parsed or has no usable table.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring unparsable theme %s: %s", source, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme %s: [colors] is not a table", source)
        return {}
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Merge user overrides into the bundled theme.

    Args:
        user_path: Override file. Defaults to the config directory theme.

    Returns:
        Validated ThemeColors.
    """
    bundled_text = resources.files("naudit.data").joinpath(THEME_FILE_NAME).read_text("utf-8")
    bundled = read_color_table(bundled_text, "bundled theme")

    path = user_path or get_user_theme_path()
    overrides: dict[str, str] = {}
    try:
        overrides = read_color_table(path.read_text(encoding="utf-8"), str(path))
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Cannot read theme %s: %s", path, e)

    try:
        return ThemeColors.model_validate({**bundled, **overrides})
    except ValidationError as e:
        logger.warning("Invalid theme overrides in %s, using bundled colors: %s", path, e)
        return ThemeColors.model_validate(bundled)


def build_rich_theme(colors: ThemeColors) -> Theme:
    """Map theme colors to the Rich style names used in markup."""
    styles = colors.model_dump()
    styles.update(
        error=f"bold {colors.error}",
        step=f"bold {colors.step}",
        label=f"bold {colors.label}",
        bold_header=f"bold {colors.header}",
    )
    return Theme(styles)


@functools.cache
def get_theme() -> Theme:
    """Return the Rich theme, loaded once per process."""
    return build_rich_theme(load_theme())
