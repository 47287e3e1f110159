"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the picker chrome: the filter label, the
cursor row, and marked rows.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the frame renderer."""

    name: str
    filter_label: str
    reverse: str
    marked: str
    reset: str


DEFAULT_THEME = UITheme(
    name="default",
    filter_label="\033[36m",
    reverse="\033[7m",
    marked="\033[42m",
    reset="\033[0m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    filter_label="\033[1;38;5;45m",
    reverse="\033[7m",
    marked="\033[48;5;24m",
    reset="\033[0m",
)

PLAIN_THEME = UITheme(
    name="plain",
    filter_label="",
    reverse="",
    marked="",
    reset="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]
