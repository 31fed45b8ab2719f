"""Clipboard history feed and the background monitor that fills it."""

from __future__ import annotations

import logging
import re
import threading
import time
import uuid
from typing import Callable, Optional

from models import ClipboardEntry

try:
    import pyperclip
except Exception:  # pragma: no cover
    pyperclip = None  # type: ignore

logger = logging.getLogger(__name__)

MAX_HISTORY_SIZE = 50
DISPLAY_LIMIT = 5
PREVIEW_LENGTH = 60
# Secret scanning is skipped above this size.
SENSITIVE_SCAN_LIMIT = 10_000

SECRET_PATTERNS = (
    re.compile(r"ghp_[a-zA-Z0-9]{36}"),
    re.compile(r"sk_live_[a-zA-Z0-9]{24}"),
    re.compile(r"xox[baprs]-[a-zA-Z0-9]{10,48}"),
    re.compile(r"AKIA[0-9A-Z]{16}"),
    re.compile(r"AIza[0-9A-Za-z\-_]{35}"),
    re.compile(r"-----BEGIN (RSA|DSA|EC|PGP|OPENSSH) PRIVATE KEY-----"),
)

SENSITIVE_APP_MARKERS = ("password", "keychain", "bitwarden", "keepass")


def is_sensitive(content: str, source_app: Optional[str] = None) -> bool:
    """True for content copied from a password manager or that looks like a credential."""
    if source_app:
        lowered = source_app.lower()
        if any(marker in lowered for marker in SENSITIVE_APP_MARKERS):
            logger.info("Skipping clipboard content from %s", source_app)
            return True
    if len(content) > SENSITIVE_SCAN_LIMIT:
        return False
    if any(pattern.search(content) for pattern in SECRET_PATTERNS):
        # never log the matched content
        logger.info("Skipping clipboard content that looks like a secret")
        return True
    return False


def make_preview(content: str, max_length: int = PREVIEW_LENGTH) -> str:
    collapsed = " ".join(content.split())
    if len(collapsed) <= max_length:
        return collapsed
    return collapsed[:max_length] + "..."


class ClipboardHistory:
    """Most-recent-first clipboard entries, unique by content."""

    def __init__(self, max_size: int = MAX_HISTORY_SIZE) -> None:
        self._max_size = max_size
        self._lock = threading.Lock()
        self._items: list[ClipboardEntry] = []

    def add(self, content: str, source_app: Optional[str] = None) -> Optional[ClipboardEntry]:
        if not content or not content.strip():
            return None
        if is_sensitive(content, source_app):
            return None
        with self._lock:
            if any(item.content == content for item in self._items):
                return None
            entry = ClipboardEntry(
                id=uuid.uuid4().hex,
                content=content,
                preview=make_preview(content),
                timestamp=int(time.time() * 1000),
            )
            self._items.insert(0, entry)
            del self._items[self._max_size:]
            return entry

    def entries(self) -> list[ClipboardEntry]:
        with self._lock:
            return list(self._items)

    def recent(self, limit: int = DISPLAY_LIMIT) -> list[ClipboardEntry]:
        with self._lock:
            return self._items[:limit]

    def get(self, entry_id: str) -> Optional[ClipboardEntry]:
        with self._lock:
            return next((item for item in self._items if item.id == entry_id), None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class ClipboardMonitor:
    def __init__(
        self,
        history: ClipboardHistory,
        on_entry: Optional[Callable[[ClipboardEntry], None]] = None,
        poll_interval_s: float = 0.5,
    ) -> None:
        self._history = history
        self._on_entry = on_entry
        self._poll_interval_s = poll_interval_s
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._last_content: Optional[str] = None

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        if pyperclip is None:
            raise RuntimeError("pyperclip is not installed")
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._worker, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=1.0)
        self._thread = None

    def poll_once(self) -> Optional[ClipboardEntry]:
        """Read the clipboard once and record it if it changed."""
        if pyperclip is None:
            return None
        content = pyperclip.paste()
        if content == self._last_content:
            return None
        self._last_content = content
        entry = self._history.add(content)
        if entry is not None and self._on_entry:
            self._on_entry(entry)
        return entry

    def _worker(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except Exception as exc:
                logger.warning("Clipboard poll failed: %s", exc)
            self._stop_event.wait(self._poll_interval_s)
