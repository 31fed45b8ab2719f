"""State-machine based palette orchestration."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine, Optional

from capture_pipeline import CapturePipeline
from command_ranker import PaletteSections, build_sections, clipboard_shortcut_index, rank_commands
from errors import ERROR_MESSAGES, NO_TEXT_AVAILABLE, TEXT_TOO_LONG, error_message
from generation import Generation
from interfaces import (
    ActionExecutor,
    ClipboardFeed,
    CommandCatalog,
    PasteService,
    Scheduler,
    TextCapture,
    TimerHandle,
    UsageRecorder,
    WidgetHost,
    WindowManager,
)
from models import (
    ActionKind,
    ClipboardEntry,
    Command,
    PaletteSession,
    PaletteState,
    Popover,
    PopoverState,
    Selection,
    SelectionKind,
)
from timers import AsyncioScheduler

logger = logging.getLogger(__name__)

StateCallback = Callable[[PaletteState, PaletteState], None]
ChangeCallback = Callable[[], None]

# Actions whose backend cost grows with the input length.
PROCESSING_ACTIONS = frozenset({ActionKind.TRANSLATE, ActionKind.ANALYZE_TEXT, ActionKind.DEFINITION})
PROCESSING_CHAR_LIMIT = 250
NO_TEXT_AUTO_CLEAR_S = 3.0
PASTE_REARM_S = 0.5
PROCESSING_MESSAGE = "Processing..."


class PaletteController:
    def __init__(
        self,
        capture: TextCapture,
        catalog: CommandCatalog,
        executor: ActionExecutor,
        usage: UsageRecorder,
        widget_host: WidgetHost,
        window: WindowManager,
        clipboard_feed: ClipboardFeed,
        paste_service: PasteService,
        session: Optional[PaletteSession] = None,
        scheduler: Optional[Scheduler] = None,
        on_state_change: Optional[StateCallback] = None,
        on_change: Optional[ChangeCallback] = None,
    ) -> None:
        self._pipeline = CapturePipeline(capture)
        self._catalog = catalog
        self._executor = executor
        self._usage = usage
        self._widget_host = widget_host
        self._window = window
        self._clipboard_feed = clipboard_feed
        self._paste_service = paste_service
        self._scheduler = scheduler or AsyncioScheduler()
        self._on_state_change = on_state_change
        self._on_change = on_change

        self._session = session if session is not None else PaletteSession()
        self._state = PaletteState.HIDDEN
        self._catalog_generation = Generation()
        self._action_generation = Generation()
        self._auto_clear: Optional[TimerHandle] = None
        self._paste_rearm: Optional[TimerHandle] = None
        self._pasting = False
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def state(self) -> PaletteState:
        return self._state

    @property
    def session(self) -> PaletteSession:
        return self._session

    def replace_executor(self, executor: ActionExecutor) -> None:
        self._executor = executor

    # ------------------------------------------------------------------
    # Window lifecycle
    # ------------------------------------------------------------------

    async def on_window_focused(self) -> None:
        """Start a fresh session: reset first, then capture and load commands."""
        self._transition(PaletteState.FOCUSED)
        self._reset_session()

        text = await self._pipeline.acquire()
        if text is None:
            return
        self._session.captured_text = text
        self._notify()

        if await self._load_catalog(text):
            self._transition(PaletteState.READY)

    def on_window_hidden(self) -> None:
        self._pipeline.invalidate()
        self._catalog_generation.invalidate()
        self._action_generation.invalidate()
        self._cancel_auto_clear()
        self._transition(PaletteState.HIDDEN)

    # ------------------------------------------------------------------
    # Query and listing
    # ------------------------------------------------------------------

    def set_query(self, query: str) -> None:
        self._session.query = query
        if self._session.popover.is_open or self._session.executing_id is not None:
            self._dismiss()
        self._notify()

    def on_list_scrolled(self) -> None:
        if self._session.popover.is_open:
            self.dismiss_popover()

    def dismiss_popover(self) -> None:
        self._dismiss()
        self._notify()

    def ranked_commands(self) -> list[Command]:
        return rank_commands(self._session.commands, self._session.query, self._session.captured_text)

    def sections(self) -> PaletteSections:
        return build_sections(self.ranked_commands(), self._session.query, self._clipboard_entries())

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    async def select(self, command: Command) -> None:
        if command.is_widget:
            await self.open_widget(command)
        else:
            await self.execute_action(command)

    async def open_widget(self, command: Command) -> None:
        widget_type = command.widget_type
        if widget_type is None:
            return
        self._session.selection = Selection(command.id, SelectionKind.WIDGET)
        self._hide_window()

        results = await asyncio.gather(
            self._widget_host.open_widget(widget_type),
            self._usage.record_usage(command.id),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.warning("Failed to open widget %s or record usage: %s", widget_type, result)

    async def execute_action(self, command: Command) -> None:
        action_type = command.action_type
        if action_type is None:
            return

        token = self._action_generation.next()
        self._cancel_auto_clear()
        self._session.selection = Selection(command.id, SelectionKind.ACTION)
        self._session.executing_id = command.id
        self._notify()

        text = self._session.captured_text
        if not text.strip():
            text = await self._pipeline.capture_selection()
            if not self._action_generation.is_current(token):
                return

        if not text.strip():
            logger.warning("No text available for action %s", command.id)
            self._show_error(ERROR_MESSAGES[NO_TEXT_AVAILABLE])
            self._auto_clear = self._scheduler.call_later(
                NO_TEXT_AUTO_CLEAR_S, lambda: self._auto_clear_popover(token)
            )
            return

        if action_type.kind in PROCESSING_ACTIONS and len(text) > PROCESSING_CHAR_LIMIT:
            logger.warning("Text too long for action %s (%d chars)", command.id, len(text))
            self._show_error(ERROR_MESSAGES[TEXT_TOO_LONG])
            return

        self._session.popover = Popover(PopoverState.PROCESSING, PROCESSING_MESSAGE)
        self._notify()
        self.spawn(self._record_usage(command.id))

        try:
            result = await self._executor.execute_action(action_type, text)
        except Exception as exc:
            if not self._action_generation.is_current(token):
                logger.debug("Dropping failure of superseded action %s", command.id)
                return
            message = error_message(exc)
            logger.warning("Action %s failed: %s", command.id, message)
            self._show_error(f"Error: {message}")
            return

        if not self._action_generation.is_current(token):
            logger.debug("Dropping result of superseded action %s", command.id)
            return
        self._session.popover = Popover(PopoverState.SUCCESS, result.result)
        self._session.executing_id = None
        self._notify()

    # ------------------------------------------------------------------
    # Clipboard shortcuts
    # ------------------------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Return True when the key press was consumed as a clipboard shortcut."""
        if self._state == PaletteState.HIDDEN:
            return False
        entries = self._clipboard_entries()
        index = clipboard_shortcut_index(key, self._session.query, entries)
        if index is None:
            return False
        self.spawn(self.paste_clipboard_entry(entries[index].id))
        return True

    async def paste_clipboard_entry(self, entry_id: str) -> None:
        if self._pasting:
            return
        entry = next((e for e in self._clipboard_entries() if e.id == entry_id), None)
        if entry is None:
            logger.warning("Clipboard entry %s is no longer available", entry_id)
            return

        self._pasting = True
        try:
            self._hide_window()
            result = await asyncio.to_thread(self._paste_service.paste_text, entry.content)
            if not result.success:
                logger.warning("Paste of clipboard entry failed: %s", result.reason)
        except Exception as exc:
            logger.warning("Paste of clipboard entry failed: %s", exc)
        finally:
            self._paste_rearm = self._scheduler.call_later(PASTE_REARM_S, self._rearm_paste)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[Any]:
        """Run a coroutine in the background; it is awaited by flush and cancelled by close."""
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def flush_background_tasks(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        self._pipeline.invalidate()
        self._catalog_generation.invalidate()
        self._action_generation.invalidate()
        self._cancel_auto_clear()
        if self._paste_rearm is not None:
            self._paste_rearm.cancel()
            self._paste_rearm = None
        for task in list(self._tasks):
            task.cancel()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _load_catalog(self, text: str) -> bool:
        token = self._catalog_generation.next()
        self._session.loading_commands = True
        self._notify()

        try:
            commands = await self._catalog.load_command_catalog(text or None)
        except Exception as exc:
            if not self._catalog_generation.is_current(token):
                return False
            logger.warning("Command catalog load failed: %s", exc)
            commands = []

        if not self._catalog_generation.is_current(token):
            return False
        self._session.commands = list(commands)
        self._session.loading_commands = False
        self._notify()
        return True

    async def _record_usage(self, command_id: str) -> None:
        try:
            await self._usage.record_usage(command_id)
        except Exception as exc:
            logger.warning("Failed to record usage for %s: %s", command_id, exc)

    def _reset_session(self) -> None:
        self._catalog_generation.invalidate()
        self._action_generation.invalidate()
        self._cancel_auto_clear()
        self._session.reset()
        self._notify()

    def _dismiss(self) -> None:
        self._action_generation.invalidate()
        self._cancel_auto_clear()
        self._session.popover = Popover()
        self._session.selection = None
        self._session.executing_id = None

    def _show_error(self, content: str) -> None:
        self._session.popover = Popover(PopoverState.ERROR, content)
        self._session.executing_id = None
        self._notify()

    def _auto_clear_popover(self, token: int) -> None:
        self._auto_clear = None
        if not self._action_generation.is_current(token):
            return
        self._session.popover = Popover()
        self._session.selection = None
        self._notify()

    def _cancel_auto_clear(self) -> None:
        if self._auto_clear is not None:
            self._auto_clear.cancel()
            self._auto_clear = None

    def _rearm_paste(self) -> None:
        self._paste_rearm = None
        self._pasting = False

    def _hide_window(self) -> None:
        try:
            self._window.hide_window()
        except Exception as exc:
            logger.warning("Failed to hide palette window: %s", exc)
        self.on_window_hidden()

    def _clipboard_entries(self) -> list[ClipboardEntry]:
        try:
            return list(self._clipboard_feed.entries())
        except Exception as exc:
            logger.warning("Clipboard feed unavailable: %s", exc)
            return []

    def _notify(self) -> None:
        if self._on_change:
            self._on_change()

    def _transition(self, to_state: PaletteState) -> None:
        from_state = self._state
        if from_state == to_state:
            return
        self._state = to_state
        logger.debug("Palette %s -> %s", from_state.value, to_state.value)
        if self._on_state_change:
            self._on_state_change(from_state, to_state)
