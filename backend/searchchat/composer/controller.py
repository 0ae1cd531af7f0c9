"""Headless composer: draft state, web-search toggle and keyboard dispatch.

The controller owns no rendering. A front end forwards key, paste and
composition events to it and supplies the collaborators it calls back into.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from searchchat.composer.capabilities import supports_image_input
from searchchat.models import ChatSettings

FOCUS_DELAY_SECONDS = 0.2

IMAGE_NOT_SUPPORTED_MESSAGE = (
    "Images are not supported by this model. Please use a vision model such as GPT-4 Vision."
)

PICKER_NAMES = ("prompt", "file", "tool", "assistant")
PICKER_NAV_KEYS = frozenset({"Tab", "ArrowUp", "ArrowDown"})


class SendMessage(Protocol):
    def __call__(
        self,
        content: str,
        chat_messages: list[Any],
        is_regeneration: bool,
        use_web_search: bool,
    ) -> Any: ...


@dataclass
class KeyEvent:
    key: str
    shift: bool = False
    ctrl: bool = False
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass
class ClipboardItem:
    mime_type: str
    data: bytes | None = None

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image")


@dataclass
class Tool:
    id: str
    name: str


@dataclass
class Picker:
    open: bool = False
    focused: bool = False


class UserMessageHistory:
    """Walks back and forth through the user's earlier messages."""

    def __init__(self) -> None:
        self._index: int | None = None

    @staticmethod
    def _user_contents(chat_messages: list[Any]) -> list[str]:
        contents = []
        for entry in chat_messages:
            msg = entry.get("message", entry) if isinstance(entry, dict) else None
            if isinstance(msg, dict) and msg.get("role") == "user" and msg.get("content"):
                contents.append(str(msg["content"]))
        return contents

    def previous(self, chat_messages: list[Any]) -> str | None:
        contents = self._user_contents(chat_messages)
        if not contents:
            return None
        if self._index is None:
            self._index = len(contents) - 1
        elif self._index > 0:
            self._index -= 1
        return contents[self._index]

    def next(self, chat_messages: list[Any]) -> str | None:
        contents = self._user_contents(chat_messages)
        if self._index is None or not contents:
            return None
        if self._index >= len(contents) - 1:
            # Past the newest message: back to an empty draft
            self._index = None
            return ""
        self._index += 1
        return contents[self._index]

    def reset(self) -> None:
        self._index = None


@dataclass
class ComposerController:
    send_message: SendMessage
    select_file: Callable[[bytes], Any] = lambda data: None
    notify_error: Callable[[str], Any] = lambda message: None
    focus_input: Callable[[], Any] = lambda: None
    stop_message: Callable[[], Any] = lambda: None
    chat_settings: ChatSettings = field(default_factory=ChatSettings)

    user_input: str = ""
    chat_messages: list[Any] = field(default_factory=list)
    use_web_search: bool = False
    is_typing: bool = False
    is_generating: bool = False
    selected_tools: list[Tool] = field(default_factory=list)
    pickers: dict[str, Picker] = field(
        default_factory=lambda: {name: Picker() for name in PICKER_NAMES}
    )
    history: UserMessageHistory = field(default_factory=UserMessageHistory)

    # -- toggles and composition --

    def set_use_web_search(self, enabled: bool) -> None:
        self.use_web_search = enabled

    def composition_start(self) -> None:
        self.is_typing = True

    def composition_end(self) -> None:
        self.is_typing = False

    def set_input(self, text: str) -> None:
        self.user_input = text

    @property
    def any_picker_open(self) -> bool:
        return any(p.open for p in self.pickers.values())

    # -- events --

    def handle_key_down(self, event: KeyEvent) -> None:
        if not self.is_typing and event.key == "Enter" and not event.shift:
            event.prevent_default()
            self.pickers["prompt"].open = False
            self._submit()

        if self.any_picker_open and event.key in PICKER_NAV_KEYS:
            event.prevent_default()
            for picker in self.pickers.values():
                if picker.open:
                    picker.focused = not picker.focused

        if event.shift and event.ctrl and event.key in ("ArrowUp", "ArrowDown"):
            event.prevent_default()
            if event.key == "ArrowUp":
                recalled = self.history.previous(self.chat_messages)
            else:
                recalled = self.history.next(self.chat_messages)
            if recalled is not None:
                self.user_input = recalled

    def handle_paste(self, items: list[ClipboardItem]) -> None:
        images_allowed = supports_image_input(self.chat_settings.model)
        for item in items:
            if not item.is_image:
                continue
            if not images_allowed:
                self.notify_error(IMAGE_NOT_SUPPORTED_MESSAGE)
                return
            if item.data is not None:
                self.select_file(item.data)

    def click_send(self) -> None:
        # The send button is replaced by the stop button while generating
        if self.is_generating or not self.user_input:
            return
        self._submit()

    def click_stop(self) -> None:
        if self.is_generating:
            self.stop_message()

    def remove_tool(self, tool_id: str) -> None:
        self.selected_tools = [t for t in self.selected_tools if t.id != tool_id]

    def schedule_focus(self, loop: asyncio.AbstractEventLoop | None = None) -> asyncio.TimerHandle:
        """Refocus the input shortly after the preset or assistant changes."""
        loop = loop or asyncio.get_running_loop()
        return loop.call_later(FOCUS_DELAY_SECONDS, self.focus_input)

    def _submit(self) -> None:
        if not self.user_input:
            return
        self.history.reset()
        self.send_message(self.user_input, self.chat_messages, False, self.use_web_search)
