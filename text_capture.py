"""Capture of ambient text from the clipboard or the live selection."""

from __future__ import annotations

import asyncio
import sys
import time

from models import CaptureResult

try:
    import pyperclip
except Exception:  # pragma: no cover
    pyperclip = None  # type: ignore

try:
    from pynput.keyboard import Controller, Key
except Exception:  # pragma: no cover
    Controller = None  # type: ignore
    Key = None  # type: ignore


class SystemTextCapture:
    def __init__(self, copy_delay_s: float = 0.15) -> None:
        self._copy_delay_s = copy_delay_s

    async def capture_text(self, mode: str) -> CaptureResult:
        if mode == "selection":
            return await asyncio.to_thread(self._capture_selection)
        return await asyncio.to_thread(self._capture_clipboard)

    def _capture_clipboard(self) -> CaptureResult:
        if pyperclip is None:
            raise RuntimeError("pyperclip is not installed")
        return CaptureResult(text=pyperclip.paste() or "", source="clipboard")

    def _capture_selection(self) -> CaptureResult:
        if pyperclip is None or Controller is None or Key is None:
            raise RuntimeError("clipboard/keyboard dependency missing")
        modifier = Key.cmd if sys.platform == "darwin" else Key.ctrl
        keyboard = Controller()
        keyboard.press(modifier)
        keyboard.press("c")
        keyboard.release("c")
        keyboard.release(modifier)
        time.sleep(self._copy_delay_s)
        return CaptureResult(text=pyperclip.paste() or "", source="selection")
