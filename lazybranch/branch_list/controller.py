"""Branch list controller composing store, filter, cursor, and scroller.

Every mutation goes through one of the public methods below and restores the
view invariants before returning: the filtered view is rebuilt from the
current store and query, the cursor is clamped against it, and the scroll
offset is recomputed so the cursor row stays visible. Nothing about the
selection is cached; :meth:`ListController.current_selection` derives it from
the filtered row under the cursor on every call.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from ..errors import ActionUnavailable, NoSelection, user_facing_error
from .cursor import Motion, SelectionCursor
from .filtering import filter_entries
from .intents import (
    ACTION_INTENTS,
    MOTION_INTENTS,
    UNTARGETED_ACTIONS,
    ActionKind,
    ActionRequest,
    CommandInfo,
    Intent,
    IntentKind,
    IntentOutcome,
)
from .scroll import ViewportScroller
from .store import ItemStore
from .types import Entry, FilteredEntry, ListSnapshot, Partition, SnapshotRow

logger = logging.getLogger(__name__)

# Actions that make no sense against the checked-out branch itself.
_HEAD_EXCLUDED_ACTIONS = frozenset(
    {
        ActionKind.CHECKOUT,
        ActionKind.MERGE,
        ActionKind.REBASE,
        ActionKind.DELETE,
        ActionKind.COMPARE,
    }
)
_HIDE_BEFORE_DISPATCH = frozenset({ActionKind.INSPECT_TARGET, ActionKind.COMPARE})


class BranchSource(Protocol):
    def list_entries(self, partition: Partition) -> Sequence[Entry]: ...


class ListController:
    def __init__(self, source: BranchSource | None = None, partition: Partition = Partition.LOCAL) -> None:
        self.source = source
        self.store = ItemStore()
        self.cursor = SelectionCursor()
        self.scroller = ViewportScroller()
        self._view: tuple[FilteredEntry, ...] = ()
        self._query = ""
        self.partition = partition
        self.has_remotes = False
        self.visible = False
        self.filtering = False

    @property
    def query(self) -> str:
        return self._query

    @property
    def filtered_view(self) -> tuple[FilteredEntry, ...]:
        return self._view

    @property
    def viewport_height(self) -> int:
        return self.scroller.viewport_height

    # -- state transitions -------------------------------------------------

    def open(self) -> None:
        """Show the list: reset the query, leave filter mode, and reload."""
        entries = self._fetch(self.partition)
        self.visible = True
        self.filtering = False
        self._query = ""
        self.refresh(entries)

    def reveal(self) -> None:
        """Show the list again with the entries it already holds."""
        self.visible = True
        self.filtering = False

    def close(self) -> None:
        """Hide the list. Query and cursor survive until the next ``open``."""
        self.visible = False
        self.filtering = False

    def refresh(self, entries: Sequence[Entry]) -> None:
        """Replace the whole store and rebuild the view for the current query."""
        self.store.replace(entries)
        self._rebuild()

    def reload(self) -> None:
        """Pull a fresh snapshot of the active partition from the source."""
        self.refresh(self._fetch(self.partition))

    def notify_source_changed(self) -> None:
        if self.visible:
            logger.debug("Source changed, reloading partition=%s", self.partition.value)
            self.reload()

    def set_query(self, text: str) -> None:
        self._query = text
        self._rebuild()

    def move_cursor(self, motion: Motion) -> bool:
        moved = self.cursor.move(motion, self.scroller.viewport_height)
        self.scroller.update(self.cursor.index, len(self._view))
        return moved

    def resize_viewport(self, height: int) -> int:
        return self.scroller.update(self.cursor.index, len(self._view), height)

    def toggle_partition(self) -> None:
        """Switch between local and remote branches.

        The new listing is fetched before anything is changed, so a failing
        backend leaves the previous partition and view in place.
        """
        target = self.partition.toggled()
        entries = self._fetch(target)
        self.partition = target
        self.refresh(entries)

    def _fetch(self, partition: Partition) -> list[Entry]:
        if self.source is None:
            return list(self.store.entries) if partition is self.partition else []
        entries = list(self.source.list_entries(partition))
        if partition is Partition.REMOTE:
            self.has_remotes = bool(entries)
        logger.debug("Fetched %d entries partition=%s", len(entries), partition.value)
        return entries

    def _rebuild(self) -> None:
        self._view = tuple(filter_entries(self.store.entries, self._query))
        self.cursor.clamp(len(self._view))
        self.scroller.update(self.cursor.index, len(self._view))

    # -- selection -----------------------------------------------------------

    def selected_entry(self) -> Entry | None:
        index = self.cursor.index
        if index is None:
            return None
        return self.store.get(self._view[index].source_index)

    def current_selection(self) -> str | None:
        entry = self.selected_entry()
        return entry.identifier if entry is not None else None

    def selection_is_head(self) -> bool:
        entry = self.selected_entry()
        return entry is not None and entry.flags.is_head

    # -- actions -------------------------------------------------------------

    def resolve_action(self, kind: ActionKind) -> ActionRequest:
        """Turn an action intent into a request against the selected branch.

        Raises :class:`NoSelection` for an empty view and
        :class:`ActionUnavailable` when the selection or partition rules the
        action out.
        """
        if kind is ActionKind.CREATE:
            if self.partition is not Partition.LOCAL:
                raise ActionUnavailable("branches can only be created from the local list")
            return ActionRequest(kind=kind, partition=self.partition)
        if kind is ActionKind.FETCH_REMOTES:
            if self.partition is not Partition.REMOTE or not self.has_remotes:
                raise ActionUnavailable("no remotes to fetch")
            return ActionRequest(kind=kind, partition=self.partition)

        entry = self.selected_entry()
        if entry is None:
            raise NoSelection("no branch selected")
        if kind in _HEAD_EXCLUDED_ACTIONS and entry.flags.is_head:
            raise ActionUnavailable(f"{entry.display_name} is the checked-out branch")
        if kind is ActionKind.RENAME and self.partition is not Partition.LOCAL:
            raise ActionUnavailable("remote branches cannot be renamed")
        return ActionRequest(
            kind=kind,
            partition=self.partition,
            identifier=entry.identifier,
            display_name=entry.display_name,
            top_commit=entry.top_commit,
        )

    def complete_action(self, request: ActionRequest) -> None:
        """Apply the list-side follow-up once the host executed ``request``."""
        kind = request.kind
        if kind is ActionKind.CHECKOUT:
            if request.partition is Partition.LOCAL:
                self.close()
                return
            # A checked-out remote branch now lives in the local list.
            entries = self._fetch(Partition.LOCAL)
            self.partition = Partition.LOCAL
            self.refresh(entries)
            return
        if kind in (ActionKind.MERGE, ActionKind.REBASE):
            self.close()
            return
        if kind in (ActionKind.RENAME, ActionKind.DELETE, ActionKind.CREATE, ActionKind.FETCH_REMOTES):
            if self.visible:
                self.reload()

    def handle_intent(self, intent: Intent) -> IntentOutcome:
        """Apply one intent and report whether it was consumed.

        Backend failures from reloads propagate unchanged to the caller.
        """
        if not self.visible:
            return IntentOutcome(consumed=False)
        kind = intent.kind

        if kind is IntentKind.COMMAND_BAR:
            return IntentOutcome(consumed=False)
        if kind in MOTION_INTENTS:
            self.move_cursor(MOTION_INTENTS[kind])
            return IntentOutcome(consumed=True)
        if kind is IntentKind.TOGGLE_FILTER_MODE:
            self.filtering = not self.filtering
            return IntentOutcome(consumed=True)
        if kind is IntentKind.EXIT_FILTER_MODE:
            self.filtering = False
            return IntentOutcome(consumed=True)
        if kind in (IntentKind.INSERT_TEXT, IntentKind.DELETE_BACKWARD, IntentKind.CLEAR_QUERY):
            if self.filtering:
                self._edit_query(intent)
            return IntentOutcome(consumed=True)
        if kind is IntentKind.CLOSE:
            self.close()
            return IntentOutcome(consumed=True)
        if kind is IntentKind.TOGGLE_PARTITION:
            self.toggle_partition()
            return IntentOutcome(consumed=True)

        action = ACTION_INTENTS.get(kind)
        if action is None:
            return IntentOutcome(consumed=True)
        try:
            request = self.resolve_action(action)
        except (NoSelection, ActionUnavailable) as exc:
            logger.debug("Ignoring %s: %s", action.value, exc)
            return IntentOutcome(consumed=True, message=user_facing_error(exc))
        if action in _HIDE_BEFORE_DISPATCH:
            self.close()
        return IntentOutcome(consumed=True, request=request)

    def _edit_query(self, intent: Intent) -> None:
        if intent.kind is IntentKind.INSERT_TEXT:
            if intent.text:
                self.set_query(self._query + intent.text)
        elif intent.kind is IntentKind.DELETE_BACKWARD:
            if self._query:
                self.set_query(self._query[:-1])
        elif self._query:
            self.set_query("")

    def command_infos(self) -> list[CommandInfo]:
        """Describe which commands the command bar should offer right now."""
        has_selection = self.cursor.index is not None
        not_head = has_selection and not self.selection_is_head()
        local = self.partition is Partition.LOCAL
        return [
            CommandInfo("scroll", True),
            CommandInfo("close", True),
            CommandInfo("inspect", has_selection),
            CommandInfo("compare", not_head),
            CommandInfo("toggle", True),
            CommandInfo("checkout", not_head),
            CommandInfo("create", True, visible=local),
            CommandInfo("delete", not_head),
            CommandInfo("merge", not_head),
            CommandInfo("rebase", not_head),
            CommandInfo("rename", has_selection, visible=local),
            CommandInfo("fetch", self.has_remotes, visible=not local),
            CommandInfo("find", True),
        ]

    # -- rendering -----------------------------------------------------------

    def snapshot(self, viewport_height: int | None = None) -> ListSnapshot:
        """Return the rows visible in a viewport of ``viewport_height`` rows.

        When the height differs from the stored one the offset is computed
        for that height without touching scroll state.
        """
        total = len(self._view)
        selected = self.cursor.index
        if viewport_height is None or viewport_height == self.scroller.viewport_height:
            height = self.scroller.viewport_height
            offset = self.scroller.offset
        else:
            height = max(0, viewport_height)
            offset = self.scroller.peek(selected, total, height)

        rows: list[SnapshotRow] = []
        for view_idx in range(offset, min(total, offset + height)):
            filtered = self._view[view_idx]
            entry = self.store.get(filtered.source_index)
            rows.append(
                SnapshotRow(
                    display_name=entry.display_name,
                    summary=entry.summary,
                    flags=entry.flags,
                    is_selected=view_idx == selected,
                    match_positions=filtered.match_positions,
                    top_commit=entry.top_commit,
                )
            )
        return ListSnapshot(
            rows=tuple(rows),
            offset=offset,
            total=total,
            viewport_height=height,
            query=self._query,
            filtering=self.filtering,
            partition=self.partition,
            has_remotes=self.has_remotes,
            visible=self.visible,
        )
