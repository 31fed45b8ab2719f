from __future__ import annotations

from unittest.mock import MagicMock

import auto_paste
from auto_paste import ClipboardPasteService


def test_paste_returns_failure_when_dependencies_missing(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setattr(auto_paste, "pyperclip", None)
    monkeypatch.setattr(auto_paste, "Controller", None)
    monkeypatch.setattr(auto_paste, "Key", None)

    service = ClipboardPasteService()
    result = service.paste_text("hello")

    assert result.success is False
    assert result.clipboard_restored is False


def test_paste_returns_failure_on_empty_text() -> None:
    service = ClipboardPasteService()
    result = service.paste_text("   ")

    assert result.success is False
    assert result.clipboard_restored is True


def test_paste_copies_text_and_sends_chord(monkeypatch) -> None:  # noqa: ANN001
    clip = MagicMock()
    clip.paste.return_value = "previous"
    keyboard = MagicMock()
    monkeypatch.setattr(auto_paste, "pyperclip", clip)
    monkeypatch.setattr(auto_paste, "Controller", MagicMock(return_value=keyboard))
    monkeypatch.setattr(auto_paste, "Key", MagicMock())

    result = ClipboardPasteService(focus_delay_s=0).paste_text("history entry")

    assert result.success is True
    clip.copy.assert_called_once_with("history entry")
    keyboard.press.assert_any_call("v")


def test_paste_failure_restores_clipboard(monkeypatch) -> None:  # noqa: ANN001
    clip = MagicMock()
    clip.paste.return_value = "previous"
    monkeypatch.setattr(auto_paste, "pyperclip", clip)
    monkeypatch.setattr(auto_paste, "Controller", MagicMock(side_effect=OSError("no display")))
    monkeypatch.setattr(auto_paste, "Key", MagicMock())

    result = ClipboardPasteService(focus_delay_s=0).paste_text("history entry")

    assert result.success is False
    assert result.clipboard_restored is True
    assert "no display" in result.reason
    clip.copy.assert_called_with("previous")
