"""Monotonic generation tokens for discarding superseded async results."""

from __future__ import annotations


class Generation:
    """Hands out increasing tokens; only the latest token is current.

    A caller takes a token before awaiting a capability and checks
    ``is_current`` after the await. Calls already in flight are never
    cancelled; their results are simply dropped.
    """

    def __init__(self) -> None:
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def next(self) -> int:
        self._current += 1
        return self._current

    def invalidate(self) -> None:
        self._current += 1

    def is_current(self, token: int) -> bool:
        return token == self._current
