"""Value types for branch entries, filtered rows, and render snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Partition(str, Enum):
    """Which side of the repository the list is showing."""

    LOCAL = "local"
    REMOTE = "remote"

    @property
    def label(self) -> str:
        return "Local" if self is Partition.LOCAL else "Remote"

    def toggled(self) -> Partition:
        return Partition.REMOTE if self is Partition.LOCAL else Partition.LOCAL


@dataclass(frozen=True)
class EntryFlags:
    """Per-branch state used for row markers and action gating.

    ``has_upstream`` applies to local branches with a configured upstream;
    ``has_tracking`` applies to remote branches some local branch tracks.
    """

    is_head: bool = False
    has_upstream: bool = False
    has_tracking: bool = False


@dataclass(frozen=True)
class Entry:
    identifier: str
    display_name: str
    summary: str = ""
    flags: EntryFlags = field(default_factory=EntryFlags)
    top_commit: str = ""


@dataclass(frozen=True)
class FilteredEntry:
    """One row of the filtered view, pointing back into the item store."""

    source_index: int
    match_score: int | None = None
    match_positions: frozenset[int] = frozenset()


@dataclass(frozen=True)
class SnapshotRow:
    display_name: str
    summary: str
    flags: EntryFlags
    is_selected: bool
    match_positions: frozenset[int]
    top_commit: str = ""


@dataclass(frozen=True)
class ListSnapshot:
    """Read-only view of the controller sized to one viewport."""

    rows: tuple[SnapshotRow, ...]
    offset: int
    total: int
    viewport_height: int
    query: str = ""
    filtering: bool = False
    partition: Partition = Partition.LOCAL
    has_remotes: bool = False
    visible: bool = True

    @property
    def selected_row(self) -> SnapshotRow | None:
        for row in self.rows:
            if row.is_selected:
                return row
        return None
