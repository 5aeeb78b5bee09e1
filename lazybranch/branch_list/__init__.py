"""Filterable, scrollable, single-selection branch list.

The controller owns the item store, the fuzzy-filtered view, the selection
cursor and the scroll offset, and keeps them consistent across refreshes,
query edits and cursor/viewport changes.
"""

from .controller import BranchSource, ListController
from .cursor import Motion, SelectionCursor
from .filtering import filter_entries
from .intents import (
    ActionKind,
    ActionRequest,
    CommandInfo,
    Intent,
    IntentKind,
    IntentOutcome,
)
from .scroll import ViewportScroller, scroll_offset_for, scrollbar_thumb
from .store import ItemStore
from .types import Entry, EntryFlags, FilteredEntry, ListSnapshot, Partition, SnapshotRow

__all__ = [
    "ActionKind",
    "ActionRequest",
    "BranchSource",
    "CommandInfo",
    "Entry",
    "EntryFlags",
    "FilteredEntry",
    "Intent",
    "IntentKind",
    "IntentOutcome",
    "ItemStore",
    "ListController",
    "ListSnapshot",
    "Motion",
    "Partition",
    "SelectionCursor",
    "SnapshotRow",
    "ViewportScroller",
    "filter_entries",
    "scroll_offset_for",
    "scrollbar_thumb",
]
