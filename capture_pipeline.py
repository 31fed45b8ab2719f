"""Acquisition of ambient text (clipboard first, live selection as fallback)."""

from __future__ import annotations

import logging
from typing import Optional

from generation import Generation
from interfaces import TextCapture

logger = logging.getLogger(__name__)

CLIPBOARD_MODE = "clipboard"
SELECTION_MODE = "selection"


class CapturePipeline:
    def __init__(self, capture: TextCapture) -> None:
        self._capture = capture
        self._generation = Generation()

    async def acquire(self) -> Optional[str]:
        """Capture text for a new focus generation.

        Returns None when a newer ``acquire`` started before this one
        resolved; the caller must then leave its state untouched.
        """
        token = self._generation.next()

        text = await self._read(CLIPBOARD_MODE)
        if not self._generation.is_current(token):
            logger.debug("Discarding stale clipboard capture (generation %d)", token)
            return None

        if not text.strip():
            text = await self._read(SELECTION_MODE)
            if not self._generation.is_current(token):
                logger.debug("Discarding stale selection capture (generation %d)", token)
                return None

        return text

    async def capture_selection(self) -> str:
        """Read the live selection once, outside the focus generations."""
        return await self._read(SELECTION_MODE)

    def invalidate(self) -> None:
        self._generation.invalidate()

    async def _read(self, mode: str) -> str:
        try:
            result = await self._capture.capture_text(mode)
        except Exception as exc:
            logger.warning("Text capture (%s) failed: %s", mode, exc)
            return ""
        return result.text or ""
