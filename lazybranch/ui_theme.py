"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the branch list chrome and rows.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reset: str
    title: str
    tab_active: str
    tab_inactive: str
    filter_query: str
    filter_hint: str
    row_marker: str
    branch_name: str
    branch_head: str
    match_hit: str
    commit_hash: str
    commit_message: str
    scrollbar_track: str
    scrollbar_thumb: str
    status_message: str
    command_key: str
    command_disabled: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reset="\033[0m",
    title="\033[1;38;5;81m",
    tab_active="\033[1;4;38;5;81m",
    tab_inactive="\033[2;38;5;250m",
    filter_query="\033[1;38;5;81m",
    filter_hint="\033[2;38;5;250m",
    row_marker="\033[38;5;44m",
    branch_name="\033[38;5;252m",
    branch_head="\033[1;38;5;42m",
    match_hit="\033[1;38;5;214m",
    commit_hash="\033[38;5;110m",
    commit_message="\033[38;5;250m",
    scrollbar_track="\033[2;38;5;240m",
    scrollbar_thumb="\033[38;5;81m",
    status_message="\033[38;5;203m",
    command_key="\033[38;5;229m",
    command_disabled="\033[2;38;5;242m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    tab_active="\033[1;4;38;5;45m",
    tab_inactive="\033[2;38;5;110m",
    filter_query="\033[1;38;5;45m",
    filter_hint="\033[2;38;5;110m",
    row_marker="\033[38;5;39m",
    branch_name="\033[38;5;153m",
    branch_head="\033[1;38;5;84m",
    match_hit="\033[1;38;5;215m",
    commit_hash="\033[38;5;73m",
    commit_message="\033[38;5;117m",
    scrollbar_track="\033[2;38;5;24m",
    scrollbar_thumb="\033[38;5;45m",
    status_message="\033[38;5;209m",
    command_key="\033[38;5;153m",
    command_disabled="\033[2;38;5;24m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reset="",
    title="",
    tab_active="",
    tab_inactive="",
    filter_query="",
    filter_hint="",
    row_marker="",
    branch_name="",
    branch_head="",
    match_hit="",
    commit_hash="",
    commit_message="",
    scrollbar_track="",
    scrollbar_thumb="",
    status_message="",
    command_key="",
    command_disabled="",
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
