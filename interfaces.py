"""Protocol interfaces for the capabilities the palette consumes."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from models import ActionResult, ActionType, CaptureResult, ClipboardEntry, Command, PasteResult


class TextCapture(Protocol):
    async def capture_text(self, mode: str) -> CaptureResult: ...


class CommandCatalog(Protocol):
    async def load_command_catalog(self, context_hint: Optional[str] = None) -> list[Command]: ...


class ActionExecutor(Protocol):
    async def execute_action(self, action_type: ActionType, text: str) -> ActionResult: ...


class UsageRecorder(Protocol):
    async def record_usage(self, command_id: str) -> None: ...


class WidgetHost(Protocol):
    async def open_widget(self, widget_id: str) -> None: ...


class WindowManager(Protocol):
    def hide_window(self) -> None: ...

    def set_ignore_cursor_events(self, ignore: bool) -> None: ...


class ClipboardFeed(Protocol):
    def entries(self) -> list[ClipboardEntry]: ...


class PasteService(Protocol):
    def paste_text(self, text: str) -> PasteResult: ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_s: float, callback: Callable[[], None]) -> TimerHandle: ...


class ConfigStore(Protocol):
    def get_api_key(self) -> str: ...

    def set_api_key(self, key: str) -> None: ...

    def get_hotkey(self) -> str: ...

    def set_hotkey(self, hotkey: str) -> None: ...

    def get_model(self) -> str: ...
