"""Global hotkey adapter based on pynput."""

from __future__ import annotations

import threading
from typing import Callable, Optional

try:
    from pynput import keyboard
except Exception:  # pragma: no cover
    keyboard = None  # type: ignore


class GlobalHotkeyAdapter:
    def __init__(self, hotkey: str = "<ctrl>+<alt>+<space>") -> None:
        self._hotkey = hotkey
        self._listener: Optional[object] = None
        self._lock = threading.Lock()

    @property
    def hotkey(self) -> str:
        return self._hotkey

    def start(self, on_activate: Callable[[], None]) -> None:
        if keyboard is None:
            raise RuntimeError("pynput is not installed")
        with self._lock:
            if self._listener is not None:
                return
            listener = keyboard.GlobalHotKeys({self._hotkey: on_activate})
            listener.start()
            self._listener = listener

    def stop(self) -> None:
        with self._lock:
            listener = self._listener
            self._listener = None
        if listener is not None:
            listener.stop()
