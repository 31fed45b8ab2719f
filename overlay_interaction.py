"""Pointer-driven click-through and blur-driven hiding of the overlay window.

The overlay window covers both the palette and the popover area but only
those regions should catch the pointer; everywhere else input passes through
to the windows beneath. Toggling click-through can make the platform report
a transient blur, so a blur that lands within ``IGNORE_SETTLE_MS`` of
switching to click-through is disregarded. A genuine blur hides the window
after ``HIDE_DELAY_MS`` unless focus comes back first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from interfaces import Scheduler, TimerHandle, WindowManager
from timers import AsyncioScheduler, now_ms

logger = logging.getLogger(__name__)

IGNORE_SETTLE_MS = 50
HIDE_DELAY_MS = 100


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height


PALETTE_RECT = Rect(0, 0, 270, 328)
POPOVER_RECT = Rect(280, 0, 270, 328)


class OverlayInteractionModel:
    def __init__(
        self,
        window: WindowManager,
        palette_rect: Rect = PALETTE_RECT,
        popover_rect: Rect = POPOVER_RECT,
        scheduler: Optional[Scheduler] = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._window = window
        self._palette_rect = palette_rect
        self._popover_rect = popover_rect
        self._scheduler = scheduler or AsyncioScheduler()
        self._clock = clock

        self._popover_open = False
        self._pointer: Optional[tuple[float, float]] = None
        self._ignore: Optional[bool] = None
        self._last_flip_ms = 0
        self._hide_timer: Optional[TimerHandle] = None

    @property
    def ignore_cursor_events(self) -> Optional[bool]:
        return self._ignore

    @property
    def hide_pending(self) -> bool:
        return self._hide_timer is not None

    def on_pointer_move(self, x: float, y: float) -> None:
        self._pointer = (x, y)
        self._evaluate()

    def set_popover_open(self, is_open: bool) -> None:
        if is_open == self._popover_open:
            return
        self._popover_open = is_open
        if self._pointer is not None:
            self._evaluate()

    def on_blur(self, focus_within_app: bool = False) -> bool:
        """Handle a window blur; returns True when a hide was scheduled."""
        if focus_within_app:
            logger.debug("Blur ignored: focus moved within the palette")
            return False

        elapsed = self._clock() - self._last_flip_ms
        if self._ignore and elapsed < IGNORE_SETTLE_MS:
            logger.debug("Blur ignored: click-through switched %d ms ago", elapsed)
            return False

        self._cancel_hide()
        logger.debug("Scheduling palette hide in %d ms", HIDE_DELAY_MS)
        self._hide_timer = self._scheduler.call_later(HIDE_DELAY_MS / 1000.0, self._hide)
        return True

    def on_focus(self) -> None:
        if self._hide_timer is not None:
            logger.debug("Focus returned, cancelling scheduled hide")
        self._cancel_hide()

    def close(self) -> None:
        self._cancel_hide()
        self._apply(False)

    def _evaluate(self) -> None:
        if self._pointer is None:
            return
        x, y = self._pointer
        over_palette = self._palette_rect.contains(x, y)
        over_popover = self._popover_open and self._popover_rect.contains(x, y)
        should_ignore = not over_palette and not over_popover
        if should_ignore != self._ignore:
            self._last_flip_ms = self._clock()
            self._apply(should_ignore)

    def _apply(self, ignore: bool) -> None:
        self._ignore = ignore
        try:
            self._window.set_ignore_cursor_events(ignore)
        except Exception as exc:
            logger.warning("Failed to toggle click-through: %s", exc)

    def _hide(self) -> None:
        self._hide_timer = None
        logger.debug("Hiding palette after blur")
        try:
            self._window.hide_window()
        except Exception as exc:
            logger.warning("Failed to hide palette window: %s", exc)

    def _cancel_hide(self) -> None:
        if self._hide_timer is not None:
            self._hide_timer.cancel()
            self._hide_timer = None
