"""Compose one ANSI frame for the branch picker.

Rendering is a pure function of a :class:`ListSnapshot` plus chrome state
(status message, prompt, command table); the event loop writes the result.

Frame layout, top to bottom: the partition tabs, the query row (or an
active prompt), the branch rows with a scrollbar in the last column, and
the status/command bar.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..ansi import ELLIPSIS, clip_ansi_line, display_width, pad_to_width, truncate_to_width
from ..branch_list.intents import CommandInfo
from ..branch_list.scroll import scrollbar_thumb
from ..branch_list.types import ListSnapshot, Partition, SnapshotRow
from ..input.keymap import KeyBindings
from ..ui_theme import DEFAULT_THEME, UITheme

CHROME_ROWS = 3
HASH_COLUMNS = 8
NAME_WIDTH_PERCENT = 40
HEAD_SYMBOL = "*"
UPSTREAM_SYMBOL = "↑"
TRACKING_SYMBOL = "↓"
EMPTY_SYMBOL = " "
SCROLLBAR_TRACK = "│"
SCROLLBAR_THUMB = "█"
SELECTED_STYLE = "\033[7m"
STYLE_RESET = "\033[0m"

COMMAND_KEY_NAMES: dict[str, tuple[str, ...]] = {
    "scroll": ("move_up", "move_down"),
    "close": ("exit_popup",),
    "inspect": ("inspect",),
    "compare": ("compare",),
    "toggle": ("tab_toggle",),
    "checkout": ("enter",),
    "create": ("create_branch",),
    "delete": ("delete_branch",),
    "merge": ("merge_branch",),
    "rebase": ("rebase_branch",),
    "rename": ("rename_branch",),
    "fetch": ("fetch",),
    "find": ("fuzzy_find",),
}


_KEY_LABELS: dict[str, str] = {
    "UP": "↑",
    "DOWN": "↓",
    "LEFT": "←",
    "RIGHT": "→",
    "PAGE_UP": "PgUp",
    "PAGE_DOWN": "PgDn",
    "SHIFT_TAB": "Shift+Tab",
}


def list_viewport_height(term_rows: int) -> int:
    """Rows left for branch entries once the chrome is drawn."""
    return max(1, term_rows - CHROME_ROWS)


def key_label(token: str) -> str:
    """Human label for a key token, e.g. ``CTRL_F`` -> ``Ctrl+F``."""
    if token in _KEY_LABELS:
        return _KEY_LABELS[token]
    if token.startswith("CTRL_"):
        return f"Ctrl+{token[5:]}"
    if len(token) > 1:
        return token.title()
    return token


def row_prefix(row: SnapshotRow, partition: Partition) -> str:
    head = HEAD_SYMBOL if row.flags.is_head else EMPTY_SYMBOL
    if partition is Partition.LOCAL and row.flags.has_upstream:
        tracking = UPSTREAM_SYMBOL
    elif partition is Partition.REMOTE and row.flags.has_tracking:
        tracking = TRACKING_SYMBOL
    else:
        tracking = EMPTY_SYMBOL
    return f"{head}{tracking} "


def _styled_name(row: SnapshotRow, name_cols: int, theme: UITheme, reset_to: str) -> str:
    """Branch name padded to ``name_cols`` with fuzzy hits highlighted."""
    name = truncate_to_width(row.display_name, name_cols)
    truncated = name != row.display_name
    # Hit positions index the full name; ones cut by truncation are dropped.
    kept = len(name) - len(ELLIPSIS) if truncated else len(name)
    base = theme.branch_head if row.flags.is_head else theme.branch_name
    out: list[str] = [base]
    for idx, ch in enumerate(name):
        if idx < kept and idx in row.match_positions:
            out.append(f"{theme.match_hit}{ch}{theme.reset}{reset_to}{base}")
        else:
            out.append(ch)
    out.append(" " * max(0, name_cols - display_width(name)))
    return "".join(out)


def format_row(row: SnapshotRow, partition: Partition, width: int, theme: UITheme = DEFAULT_THEME) -> str:
    """Render one branch row into exactly ``width`` columns."""
    if width <= 0:
        return ""
    # Reverse video is fixed so the cursor stays visible in colourless themes.
    selected = SELECTED_STYLE if row.is_selected else ""
    prefix = row_prefix(row, partition)
    name_cols = max(1, (width * NAME_WIDTH_PERCENT) // 100)
    commit = row.top_commit[:HASH_COLUMNS]
    used = display_width(prefix) + name_cols + 1 + HASH_COLUMNS + 1
    message = truncate_to_width(row.summary, max(0, width - used))

    parts = [
        selected,
        theme.row_marker,
        prefix,
        theme.reset,
        selected,
        _styled_name(row, name_cols, theme, selected),
        theme.reset,
        selected,
        " ",
        theme.commit_hash,
        pad_to_width(commit, HASH_COLUMNS),
        theme.reset,
        selected,
        " ",
        theme.commit_message,
        message,
    ]
    line = clip_ansi_line("".join(parts), width)
    fill = width - display_width(line)
    if fill > 0:
        line = f"{line}{theme.reset}{selected}{' ' * fill}"
    if selected:
        return f"{line}{STYLE_RESET}"
    return f"{line}{theme.reset}"


def format_tabs(partition: Partition, width: int, theme: UITheme = DEFAULT_THEME) -> str:
    tabs: list[str] = []
    for candidate in (Partition.LOCAL, Partition.REMOTE):
        style = theme.tab_active if candidate is partition else theme.tab_inactive
        tabs.append(f"{style}{candidate.label}{theme.reset}")
    divider = f"{theme.divider} | {theme.reset}"
    line = f"{theme.title}Branches{theme.reset}  {divider.join(tabs)}"
    return clip_ansi_line(line, width)


def format_query_row(snapshot: ListSnapshot, bindings: KeyBindings, width: int, theme: UITheme = DEFAULT_THEME) -> str:
    if snapshot.filtering or snapshot.query:
        cursor = "_" if snapshot.filtering else ""
        line = f"{theme.filter_query}/{snapshot.query}{cursor}{theme.reset} {theme.filter_hint}({snapshot.total}){theme.reset}"
    else:
        hint = key_label(bindings.hint("fuzzy_find")) or "/"
        line = f"{theme.filter_hint}{hint} to filter{theme.reset}"
    return clip_ansi_line(line, width)


def format_command_bar(
    commands: Sequence[CommandInfo],
    bindings: KeyBindings,
    width: int,
    theme: UITheme = DEFAULT_THEME,
) -> str:
    parts: list[str] = []
    for info in commands:
        if not info.visible:
            continue
        keys = "/".join(key_label(bindings.hint(name)) for name in COMMAND_KEY_NAMES.get(info.name, ()))
        keys = keys or "?"
        if info.enabled:
            parts.append(f"{theme.command_key}{keys}{theme.reset} {info.name}")
        else:
            parts.append(f"{theme.command_disabled}{keys} {info.name}{theme.reset}")
    return clip_ansi_line("  ".join(parts), width)


def _scrollbar_cells(snapshot: ListSnapshot, height: int, theme: UITheme) -> list[str]:
    thumb = scrollbar_thumb(snapshot.offset, snapshot.total, height)
    if thumb is None:
        return [" "] * height
    start, size = thumb
    cells: list[str] = []
    for row in range(height):
        if start <= row < start + size:
            cells.append(f"{theme.scrollbar_thumb}{SCROLLBAR_THUMB}{theme.reset}")
        else:
            cells.append(f"{theme.scrollbar_track}{SCROLLBAR_TRACK}{theme.reset}")
    return cells


def render_frame(
    snapshot: ListSnapshot,
    width: int,
    height: int,
    *,
    bindings: KeyBindings | None = None,
    commands: Sequence[CommandInfo] = (),
    status_message: str = "",
    prompt_line: str | None = None,
    theme: UITheme = DEFAULT_THEME,
) -> str:
    """Return the full frame as one string, cursor-homed and line-cleared."""
    bindings = bindings or KeyBindings()
    width = max(1, width)
    list_rows = list_viewport_height(height)
    row_width = max(1, width - 1)

    lines: list[str] = [format_tabs(snapshot.partition, width, theme)]
    if prompt_line is not None:
        lines.append(clip_ansi_line(f"{theme.filter_query}{prompt_line}_{theme.reset}", width))
    else:
        lines.append(format_query_row(snapshot, bindings, width, theme))

    scrollbar = _scrollbar_cells(snapshot, list_rows, theme)
    for idx in range(list_rows):
        if idx < len(snapshot.rows):
            body = format_row(snapshot.rows[idx], snapshot.partition, row_width, theme)
        elif idx == 0 and snapshot.total == 0:
            body = pad_to_width(truncate_to_width("no branches" if not snapshot.query else "no matches", row_width), row_width)
        else:
            body = " " * row_width
        lines.append(f"{body}{scrollbar[idx]}")

    if status_message:
        lines.append(clip_ansi_line(f"{theme.status_message}{status_message}{theme.reset}", width))
    else:
        lines.append(format_command_bar(commands, bindings, width, theme))

    out: list[str] = ["\033[H"]
    for idx, line in enumerate(lines):
        out.append(line)
        if "\033" in line:
            out.append("\033[0m")
        out.append("\033[K")
        if idx < len(lines) - 1:
            out.append("\r\n")
    return "".join(out)
