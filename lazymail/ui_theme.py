"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the thread region, the pager, and the chrome
rows. Patch attachments are coloured by Pygments' default terminal
formatter, independent of the theme.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    cursor: str
    reldate: str
    flag_flagged: str
    tree_graphics: str
    sender_unread: str
    subject: str
    nonstandard_tag: str
    separator: str
    bar: str
    info: str
    warning: str
    pager_header: str
    pager_quote: str
    pager_part: str
    pager_highlight: str
    prompt: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    cursor="\033[1;33;41m",
    reldate="\033[1;34m",
    flag_flagged="\033[1;31m",
    tree_graphics="\033[35m",
    sender_unread="\033[1m",
    subject="\033[32m",
    nonstandard_tag="\033[1;31m",
    separator="\033[37;44m",
    bar="\033[7m",
    info="\033[36m",
    warning="\033[1;31m",
    pager_header="\033[1;38;5;81m",
    pager_quote="\033[38;5;109m",
    pager_part="\033[38;5;214m",
    pager_highlight="\033[7m",
    prompt="\033[1m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    cursor="\033[1;38;5;231;48;5;24m",
    reldate="\033[38;5;39m",
    flag_flagged="\033[1;38;5;215m",
    tree_graphics="\033[38;5;31m",
    sender_unread="\033[1;38;5;153m",
    subject="\033[38;5;117m",
    nonstandard_tag="\033[38;5;215m",
    separator="\033[38;5;153;48;5;24m",
    bar="\033[38;5;231;48;5;31m",
    info="\033[38;5;117m",
    warning="\033[1;38;5;209m",
    pager_header="\033[1;38;5;45m",
    pager_quote="\033[38;5;73m",
    pager_part="\033[38;5;215m",
    pager_highlight="\033[7m",
    prompt="\033[1;38;5;45m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    cursor="",
    reldate="",
    flag_flagged="",
    tree_graphics="",
    sender_unread="",
    subject="",
    nonstandard_tag="",
    separator="",
    bar="",
    info="",
    warning="",
    pager_header="",
    pager_quote="",
    pager_part="",
    pager_highlight="",
    prompt="",
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


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
