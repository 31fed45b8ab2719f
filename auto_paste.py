"""Auto paste service for inserting clipboard history entries."""

from __future__ import annotations

import sys
import time

from models import PasteResult

try:
    import pyperclip
except Exception:  # pragma: no cover
    pyperclip = None  # type: ignore

try:
    from pynput.keyboard import Controller, Key
except Exception:  # pragma: no cover
    Controller = None  # type: ignore
    Key = None  # type: ignore


class ClipboardPasteService:
    """Puts text on the clipboard and sends the paste chord to the focused app.

    The text is left on the clipboard afterwards so the pasted entry becomes
    the most recent one, matching what a manual copy/paste would do.
    """

    def __init__(self, focus_delay_s: float = 0.1) -> None:
        self._focus_delay_s = focus_delay_s

    def paste_text(self, text: str) -> PasteResult:
        if not text.strip():
            return PasteResult(success=False, reason="empty text", clipboard_restored=True)
        if pyperclip is None or Controller is None or Key is None:
            return PasteResult(
                success=False,
                reason="clipboard/keyboard dependency missing",
                clipboard_restored=False,
            )

        old_clip: str | None = None
        try:
            old_clip = pyperclip.paste()
            pyperclip.copy(text)
            # let the previously focused app regain key focus after the palette hides
            time.sleep(self._focus_delay_s)
            modifier = Key.cmd if sys.platform == "darwin" else Key.ctrl
            keyboard = Controller()
            keyboard.press(modifier)
            keyboard.press("v")
            keyboard.release("v")
            keyboard.release(modifier)
            return PasteResult(success=True, reason="ok", clipboard_restored=False)
        except Exception as exc:
            restored = False
            try:
                if old_clip is not None:
                    pyperclip.copy(old_clip)
                    restored = True
            except Exception:
                restored = False
            return PasteResult(success=False, reason=f"paste failed: {exc}", clipboard_restored=restored)
