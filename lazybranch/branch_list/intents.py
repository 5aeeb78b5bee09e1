"""Tagged intents accepted by the list controller and the requests it emits."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .cursor import Motion
from .types import Partition


class IntentKind(str, Enum):
    MOVE_TOWARD_START = "move_toward_start"
    MOVE_TOWARD_END = "move_toward_end"
    PAGE_TOWARD_START = "page_toward_start"
    PAGE_TOWARD_END = "page_toward_end"
    HOME = "home"
    END = "end"
    TOGGLE_FILTER_MODE = "toggle_filter_mode"
    EXIT_FILTER_MODE = "exit_filter_mode"
    INSERT_TEXT = "insert_text"
    DELETE_BACKWARD = "delete_backward"
    CLEAR_QUERY = "clear_query"
    TOGGLE_PARTITION = "toggle_partition"
    CLOSE = "close"
    CHECKOUT = "checkout"
    MERGE = "merge"
    REBASE = "rebase"
    RENAME = "rename"
    DELETE = "delete"
    INSPECT = "inspect"
    COMPARE = "compare"
    CREATE = "create"
    FETCH_REMOTES = "fetch_remotes"
    COMMAND_BAR = "command_bar"


MOTION_INTENTS: dict[IntentKind, Motion] = {
    IntentKind.MOVE_TOWARD_START: Motion.TOWARD_START,
    IntentKind.MOVE_TOWARD_END: Motion.TOWARD_END,
    IntentKind.PAGE_TOWARD_START: Motion.PAGE_TOWARD_START,
    IntentKind.PAGE_TOWARD_END: Motion.PAGE_TOWARD_END,
    IntentKind.HOME: Motion.HOME,
    IntentKind.END: Motion.END,
}


@dataclass(frozen=True)
class Intent:
    kind: IntentKind
    text: str = ""


class ActionKind(str, Enum):
    CHECKOUT = "checkout"
    MERGE = "merge"
    REBASE = "rebase"
    RENAME = "rename"
    DELETE = "delete"
    INSPECT_TARGET = "inspect_target"
    COMPARE = "compare"
    CREATE = "create"
    FETCH_REMOTES = "fetch_remotes"


ACTION_INTENTS: dict[IntentKind, ActionKind] = {
    IntentKind.CHECKOUT: ActionKind.CHECKOUT,
    IntentKind.MERGE: ActionKind.MERGE,
    IntentKind.REBASE: ActionKind.REBASE,
    IntentKind.RENAME: ActionKind.RENAME,
    IntentKind.DELETE: ActionKind.DELETE,
    IntentKind.INSPECT: ActionKind.INSPECT_TARGET,
    IntentKind.COMPARE: ActionKind.COMPARE,
    IntentKind.CREATE: ActionKind.CREATE,
    IntentKind.FETCH_REMOTES: ActionKind.FETCH_REMOTES,
}

# Actions that operate on the partition rather than on the selected branch.
UNTARGETED_ACTIONS = frozenset({ActionKind.CREATE, ActionKind.FETCH_REMOTES})


@dataclass(frozen=True)
class ActionRequest:
    """Outbound work for the host to hand to the action executor."""

    kind: ActionKind
    partition: Partition
    identifier: str | None = None
    display_name: str = ""
    top_commit: str = ""


@dataclass(frozen=True)
class IntentOutcome:
    consumed: bool
    request: ActionRequest | None = None
    message: str = ""


@dataclass(frozen=True)
class CommandInfo:
    """Command-bar entry: ``enabled`` greys it out, ``visible`` hides it."""

    name: str
    enabled: bool
    visible: bool = True
