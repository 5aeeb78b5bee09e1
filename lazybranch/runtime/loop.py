"""Main interactive event loop for the branch picker.

Coordinates rendering, key dispatch, action execution, and ref polling.
Feature logic lives in the controller and the git backend; the loop only
wires them to the terminal.
"""

from __future__ import annotations

import logging
import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from ..branch_list.controller import ListController
from ..branch_list.intents import ActionRequest
from ..errors import BackendError, user_facing_error
from ..input import KeyTranslator, read_key
from ..ui_theme import DEFAULT_THEME, UITheme
from .prompt import PromptResult, PromptState, prompt_for
from .render import list_viewport_height, render_frame
from .terminal import TerminalController

logger = logging.getLogger(__name__)


class ActionBackend(Protocol):
    def perform_action(self, request: ActionRequest, new_name: str | None = None) -> None: ...

    def is_interactive(self, request: ActionRequest) -> bool: ...


@dataclass(frozen=True)
class PickerLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    poll_interval_ms: int = 200
    watch_interval_seconds: float = 1.0
    status_message_seconds: float = 4.0


@dataclass
class PickerSession:
    """Chrome state the controller does not own."""

    status_message: str = ""
    status_message_until: float = 0.0
    prompt: PromptState | None = None
    last_request: ActionRequest | None = None
    dirty: bool = True


def run_branch_picker(
    controller: ListController,
    backend: ActionBackend,
    terminal: TerminalController,
    stdin_fd: int,
    *,
    translator: KeyTranslator | None = None,
    theme: UITheme = DEFAULT_THEME,
    timing: PickerLoopTiming | None = None,
    source_signature: Callable[[], str] | None = None,
    key_reader: Callable[..., str] = read_key,
    terminal_size: Callable[..., object] = shutil.get_terminal_size,
    clock: Callable[[], float] = time.monotonic,
) -> ActionRequest | None:
    """Run the picker until the list closes.

    Returns the last request that completed successfully, so the caller can
    report what happened after the alternate screen is gone.
    """
    translator = translator or KeyTranslator()
    timing = timing or PickerLoopTiming()
    session = PickerSession()
    last_signature = source_signature() if source_signature is not None else None
    next_watch = clock() + timing.watch_interval_seconds

    def set_status(message: str) -> None:
        session.status_message = message
        session.status_message_until = clock() + timing.status_message_seconds
        session.dirty = True

    def reopen() -> None:
        try:
            controller.open()
        except BackendError as exc:
            logger.warning("Reload after git returned failed: %s", exc)
            set_status(user_facing_error(exc))
            controller.reveal()

    def execute(request: ActionRequest, new_name: str | None = None) -> None:
        interactive = backend.is_interactive(request)
        try:
            if interactive:
                with terminal.suspended():
                    backend.perform_action(request, new_name)
            else:
                backend.perform_action(request, new_name)
        except BackendError as exc:
            logger.warning("Action %s failed: %s", request.kind.value, exc)
            set_status(user_facing_error(exc))
            if interactive:
                reopen()
            return
        if interactive:
            # The picker is the only view, so it comes back after git exits.
            reopen()
            return
        session.last_request = request
        controller.complete_action(request)

    def dispatch(request: ActionRequest) -> None:
        prompt = prompt_for(request)
        if prompt is not None:
            session.prompt = prompt
            return
        execute(request)

    def handle_prompt_key(prompt: PromptState, key: str) -> None:
        result = prompt.handle_key(key)
        if result is PromptResult.PENDING:
            return
        session.prompt = None
        if result is PromptResult.SUBMIT:
            execute(prompt.request, prompt.value if not prompt.confirm else None)

    if not controller.visible:
        controller.open()

    with terminal.raw_mode():
        while controller.visible:
            term = terminal_size((80, 24))
            now = clock()
            list_rows = list_viewport_height(term.lines)
            if list_rows != controller.viewport_height:
                controller.resize_viewport(list_rows)
                session.dirty = True
            if session.status_message and now >= session.status_message_until:
                session.status_message = ""
                session.status_message_until = 0.0
                session.dirty = True

            if session.dirty:
                frame = render_frame(
                    controller.snapshot(),
                    term.columns,
                    term.lines,
                    bindings=translator.bindings,
                    commands=controller.command_infos(),
                    status_message=session.status_message,
                    prompt_line=session.prompt.line() if session.prompt is not None else None,
                    theme=theme,
                )
                terminal.write_frame(frame)
                session.dirty = False

            key = key_reader(stdin_fd, timeout_ms=timing.poll_interval_ms)
            if not key:
                if source_signature is not None and clock() >= next_watch:
                    next_watch = clock() + timing.watch_interval_seconds
                    signature = source_signature()
                    if signature != last_signature:
                        last_signature = signature
                        try:
                            controller.notify_source_changed()
                        except BackendError as exc:
                            set_status(user_facing_error(exc))
                        session.dirty = True
                continue

            session.dirty = True
            try:
                if session.prompt is not None:
                    handle_prompt_key(session.prompt, key)
                    continue
                intent = translator.translate(key, controller.filtering)
                if intent is None:
                    continue
                outcome = controller.handle_intent(intent)
                if outcome.message:
                    set_status(outcome.message)
                if outcome.request is not None:
                    dispatch(outcome.request)
            except BackendError as exc:
                logger.warning("Branch list update failed: %s", exc)
                set_status(user_facing_error(exc))

    return session.last_request
