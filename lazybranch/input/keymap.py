"""Translate key tokens into list intents.

The controller only understands :class:`Intent` values; this layer owns the
binding table and the difference between browsing and filtering input.
While filtering, printable keys edit the query and everything that is not a
query-editing key falls through to the browsing bindings.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from ..branch_list.intents import Intent, IntentKind
from .key_registry import KeyComboBinding, KeyComboRegistry

logger = logging.getLogger(__name__)

DEFAULT_KEYS: dict[str, tuple[str, ...]] = {
    "move_up": ("UP", "k"),
    "move_down": ("DOWN", "j"),
    "page_up": ("PAGE_UP",),
    "page_down": ("PAGE_DOWN",),
    "home": ("HOME", "g"),
    "end": ("END", "G"),
    "tab_toggle": ("TAB",),
    "enter": ("ENTER",),
    "create_branch": ("c",),
    "rename_branch": ("r",),
    "delete_branch": ("D",),
    "merge_branch": ("m",),
    "rebase_branch": ("R",),
    "inspect": ("RIGHT", "l"),
    "compare": ("C",),
    "fetch": ("f",),
    "fuzzy_find": ("/", "CTRL_F"),
    "exit_popup": ("ESC", "CTRL_C", "q"),
    "command_bar": (".",),
    "popup_up": ("UP",),
    "popup_down": ("DOWN",),
    "clear_query": ("CTRL_U",),
}

BROWSING_INTENTS: dict[str, IntentKind] = {
    "move_up": IntentKind.MOVE_TOWARD_START,
    "move_down": IntentKind.MOVE_TOWARD_END,
    "page_up": IntentKind.PAGE_TOWARD_START,
    "page_down": IntentKind.PAGE_TOWARD_END,
    "home": IntentKind.HOME,
    "end": IntentKind.END,
    "tab_toggle": IntentKind.TOGGLE_PARTITION,
    "enter": IntentKind.CHECKOUT,
    "create_branch": IntentKind.CREATE,
    "rename_branch": IntentKind.RENAME,
    "delete_branch": IntentKind.DELETE,
    "merge_branch": IntentKind.MERGE,
    "rebase_branch": IntentKind.REBASE,
    "inspect": IntentKind.INSPECT,
    "compare": IntentKind.COMPARE,
    "fetch": IntentKind.FETCH_REMOTES,
    "fuzzy_find": IntentKind.TOGGLE_FILTER_MODE,
    "exit_popup": IntentKind.CLOSE,
    "command_bar": IntentKind.COMMAND_BAR,
}

FILTERING_INTENTS: dict[str, IntentKind] = {
    "exit_popup": IntentKind.EXIT_FILTER_MODE,
    "popup_up": IntentKind.MOVE_TOWARD_START,
    "popup_down": IntentKind.MOVE_TOWARD_END,
    "clear_query": IntentKind.CLEAR_QUERY,
}


def is_text_key(key: str) -> bool:
    """Return whether ``key`` is a single printable character."""
    return len(key) == 1 and key.isprintable()


@dataclass(frozen=True)
class KeyBindings:
    keys: dict[str, tuple[str, ...]] = field(default_factory=lambda: dict(DEFAULT_KEYS))

    @classmethod
    def with_overrides(cls, overrides: Mapping[str, tuple[str, ...]]) -> KeyBindings:
        """Return defaults with ``overrides`` applied; unknown names are skipped."""
        keys = dict(DEFAULT_KEYS)
        for name, combos in overrides.items():
            if name not in keys:
                logger.warning("Ignoring unknown key binding %r", name)
                continue
            keys[name] = tuple(combos)
        return cls(keys=keys)

    def combos(self, name: str) -> tuple[str, ...]:
        return self.keys.get(name, ())

    def hint(self, name: str) -> str:
        combos = self.combos(name)
        return combos[0] if combos else ""


class KeyTranslator:
    """Maps key tokens to intents for the current input mode."""

    def __init__(self, bindings: KeyBindings | None = None) -> None:
        self.bindings = bindings or KeyBindings()
        self._browsing = self._build(BROWSING_INTENTS)
        # Printable combos can never reach filtering bindings; they are query text.
        self._filtering = self._build(FILTERING_INTENTS, skip_text_keys=True)

    def _build(self, table: Mapping[str, IntentKind], *, skip_text_keys: bool = False) -> KeyComboRegistry:
        registry = KeyComboRegistry()
        for name, intent in table.items():
            combos = self.bindings.combos(name)
            if skip_text_keys:
                combos = tuple(combo for combo in combos if not is_text_key(combo))
            registry.register_binding(KeyComboBinding(combos=combos, intent=intent))
        return registry

    def translate(self, key: str, filtering: bool) -> Intent | None:
        """Return the intent for ``key``, or ``None`` when nothing is bound."""
        if filtering:
            kind = self._filtering.lookup(key)
            if kind is not None:
                return Intent(kind)
            if key == "BACKSPACE":
                return Intent(IntentKind.DELETE_BACKWARD)
            if is_text_key(key):
                return Intent(IntentKind.INSERT_TEXT, text=key)
        kind = self._browsing.lookup(key)
        if kind is None:
            return None
        return Intent(kind)
