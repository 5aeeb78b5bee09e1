"""Single-line prompts shown in place of the query row.

Rename and create ask for a branch name; delete asks for a y/n
confirmation. A prompt holds the action request it was opened for so the
event loop can execute it once the user submits.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..branch_list.intents import ActionKind, ActionRequest
from ..input.keymap import is_text_key


class PromptResult(str, Enum):
    PENDING = "pending"
    SUBMIT = "submit"
    CANCEL = "cancel"


@dataclass
class PromptState:
    label: str
    request: ActionRequest
    text: str = ""
    confirm: bool = False

    def handle_key(self, key: str) -> PromptResult:
        if key in {"ESC", "CTRL_C"}:
            return PromptResult.CANCEL
        if self.confirm:
            if key in {"y", "Y"}:
                return PromptResult.SUBMIT
            if key in {"n", "N", "q"}:
                return PromptResult.CANCEL
            return PromptResult.PENDING
        if key == "ENTER":
            return PromptResult.SUBMIT if self.text.strip() else PromptResult.PENDING
        if key == "BACKSPACE":
            self.text = self.text[:-1]
        elif key == "CTRL_U":
            self.text = ""
        elif is_text_key(key) and key != " ":
            # Branch names cannot contain spaces.
            self.text += key
        return PromptResult.PENDING

    @property
    def value(self) -> str:
        return self.text.strip()

    def line(self) -> str:
        if self.confirm:
            return f"{self.label} [y/n]"
        return f"{self.label}: {self.text}"


def prompt_for(request: ActionRequest) -> PromptState | None:
    """Return the prompt ``request`` needs before it can run, if any."""
    if request.kind is ActionKind.RENAME:
        return PromptState(label=f"Rename {request.display_name} to", request=request, text=request.display_name)
    if request.kind is ActionKind.CREATE:
        return PromptState(label="New branch name", request=request)
    if request.kind is ActionKind.DELETE:
        return PromptState(label=f"Delete branch {request.display_name}?", request=request, confirm=True)
    return None
