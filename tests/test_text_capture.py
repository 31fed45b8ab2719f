from __future__ import annotations

from unittest.mock import MagicMock

import pytest

import text_capture
from text_capture import SystemTextCapture


@pytest.mark.asyncio
async def test_clipboard_mode_reads_clipboard(monkeypatch) -> None:  # noqa: ANN001
    fake = MagicMock()
    fake.paste.return_value = "copied"
    monkeypatch.setattr(text_capture, "pyperclip", fake)

    result = await SystemTextCapture().capture_text("clipboard")

    assert result.text == "copied"
    assert result.source == "clipboard"


@pytest.mark.asyncio
async def test_selection_mode_sends_copy_chord(monkeypatch) -> None:  # noqa: ANN001
    clip = MagicMock()
    clip.paste.return_value = "selected words"
    keyboard = MagicMock()
    monkeypatch.setattr(text_capture, "pyperclip", clip)
    monkeypatch.setattr(text_capture, "Controller", MagicMock(return_value=keyboard))
    monkeypatch.setattr(text_capture, "Key", MagicMock())

    result = await SystemTextCapture(copy_delay_s=0).capture_text("selection")

    assert result.text == "selected words"
    assert result.source == "selection"
    keyboard.press.assert_any_call("c")
    keyboard.release.assert_any_call("c")


@pytest.mark.asyncio
async def test_missing_dependencies_raise(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setattr(text_capture, "pyperclip", None)

    with pytest.raises(RuntimeError):
        await SystemTextCapture().capture_text("clipboard")
    with pytest.raises(RuntimeError):
        await SystemTextCapture().capture_text("selection")
