"""Floating palette window: query field, sectioned command list, popover."""

from __future__ import annotations

from typing import Any, Optional

from command_ranker import PaletteSections
from models import ClipboardEntry, Command, PaletteSession, PaletteState, PopoverState

try:
    from PySide6.QtCore import QEvent, QObject, Qt, QTimer
    from PySide6.QtGui import QCursor
    from PySide6.QtWidgets import QApplication, QLabel, QLineEdit, QListWidget, QListWidgetItem, QVBoxLayout, QWidget
except Exception:  # pragma: no cover
    QEvent = None  # type: ignore
    QObject = None  # type: ignore
    Qt = None  # type: ignore
    QTimer = None  # type: ignore
    QCursor = None  # type: ignore
    QApplication = None  # type: ignore
    QLabel = object  # type: ignore
    QLineEdit = object  # type: ignore
    QListWidget = object  # type: ignore
    QListWidgetItem = object  # type: ignore
    QVBoxLayout = object  # type: ignore
    QWidget = object  # type: ignore

WINDOW_WIDTH = 550
WINDOW_HEIGHT = 328
PALETTE_WIDTH = 270
POPOVER_X = 280
POINTER_POLL_MS = 30

_PANEL_STYLE = (
    "background: rgba(250,250,250,240); border-radius: 10px;"
    "color: #222; font-size: 14px;"
)
_POPOVER_STYLE = (
    "color: #222; font-size: 13px; padding: 10px;"
    "background: rgba(255,255,255,245); border-radius: 8px; border: 1px solid #ccc;"
)
_POPOVER_ERROR_STYLE = (
    "color: #c62828; font-size: 13px; padding: 10px;"
    "background: rgba(255,235,238,245); border-radius: 8px; border: 1px solid #ef5350;"
)


class PaletteWindow(QWidget):
    """Qt rendition of the palette; also the window-manager capability."""

    def __init__(self) -> None:
        if Qt is None:
            raise RuntimeError("PySide6 is not installed")
        super().__init__()
        self.setWindowFlags(Qt.WindowStaysOnTopHint | Qt.FramelessWindowHint | Qt.Tool)
        self.setAttribute(Qt.WA_TranslucentBackground, True)
        self.setFixedSize(WINDOW_WIDTH, WINDOW_HEIGHT)

        self._controller: Any = None
        self._interaction: Any = None
        self._rendering = False
        self._reflagging = False

        self._panel = QWidget(self)
        self._panel.setGeometry(0, 0, PALETTE_WIDTH, WINDOW_HEIGHT)
        self._panel.setStyleSheet(_PANEL_STYLE)

        self._input = QLineEdit()
        self._input.setPlaceholderText("search...")
        self._input.installEventFilter(self)
        self._input.textChanged.connect(self._on_text_changed)

        self._list = QListWidget()
        self._list.itemActivated.connect(self._on_item_activated)
        self._list.verticalScrollBar().valueChanged.connect(self._on_scrolled)

        layout = QVBoxLayout()
        layout.setContentsMargins(8, 8, 8, 8)
        layout.addWidget(self._input)
        layout.addWidget(self._list)
        self._panel.setLayout(layout)

        self._popover = QLabel(self)
        self._popover.setWordWrap(True)
        self._popover.setMaximumWidth(WINDOW_WIDTH - POPOVER_X)
        self._popover.setStyleSheet(_POPOVER_STYLE)
        self._popover.hide()

        self._pointer_timer = QTimer(self)
        self._pointer_timer.timeout.connect(self._poll_pointer)

    def attach(self, controller: Any, interaction: Any) -> None:
        self._controller = controller
        self._interaction = interaction

    # ------------------------------------------------------------------
    # Window manager capability
    # ------------------------------------------------------------------

    def hide_window(self) -> None:
        self.hide()

    def set_ignore_cursor_events(self, ignore: bool) -> None:
        visible = self.isVisible()
        self._reflagging = True
        try:
            self.setWindowFlag(Qt.WindowTransparentForInput, ignore)
            if visible:
                # changing window flags unmaps the window
                self.show()
                if not ignore:
                    self.activateWindow()
        finally:
            self._reflagging = False

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def present(self) -> None:
        """Show the palette near the top center of the primary screen."""
        screen = QApplication.primaryScreen() if QApplication is not None else None
        if screen is not None:
            geom = screen.availableGeometry()
            self.move(geom.x() + (geom.width() - self.width()) // 2, geom.y() + 120)
        self.show()
        self.raise_()
        self.activateWindow()
        self._input.setFocus()

    def render(self, sections: PaletteSections, session: PaletteSession) -> None:
        self._rendering = True
        try:
            if self._input.text() != session.query:
                self._input.setText(session.query)
            self._list.clear()
            if session.loading_commands and not session.commands:
                self._add_header("Loading commands...")
            elif sections.is_empty():
                self._add_header("no commands found")
            self._add_clipboard(sections.clipboard)
            self._add_commands("suggested", sections.suggested, session)
            self._add_commands("widgets", sections.widgets, session)
            self._add_commands("actions", sections.actions, session)
            self._list.scrollToTop()
        finally:
            self._rendering = False
        self._render_popover(session)

    def _render_popover(self, session: PaletteSession) -> None:
        popover = session.popover
        if not popover.is_open:
            self._popover.hide()
            return
        self._popover.setStyleSheet(
            _POPOVER_ERROR_STYLE if popover.state == PopoverState.ERROR else _POPOVER_STYLE
        )
        self._popover.setText(popover.content)
        self._popover.adjustSize()
        y = max(0, min(WINDOW_HEIGHT - self._popover.height(), self._selected_row_y()))
        self._popover.move(POPOVER_X, y)
        self._popover.show()

    def _selected_row_y(self) -> int:
        item = self._list.currentItem()
        if item is None:
            return 0
        rect = self._list.visualItemRect(item)
        return self._list.viewport().mapTo(self, rect.topLeft()).y()

    def _add_header(self, title: str) -> None:
        item = QListWidgetItem(title)
        item.setFlags(Qt.NoItemFlags)
        self._list.addItem(item)

    def _add_clipboard(self, entries: list[ClipboardEntry]) -> None:
        if not entries:
            return
        self._add_header("clipboard")
        for index, entry in enumerate(entries, start=1):
            item = QListWidgetItem(f"{entry.preview}    {index}")
            item.setToolTip(entry.content)
            item.setData(Qt.UserRole, entry)
            self._list.addItem(item)

    def _add_commands(self, title: str, commands: list[Command], session: PaletteSession) -> None:
        if not commands:
            return
        self._add_header(title)
        selected = session.selection.id if session.selection else None
        for command in commands:
            item = QListWidgetItem(command.label)
            item.setData(Qt.UserRole, command)
            if command.description:
                item.setToolTip(command.description)
            self._list.addItem(item)
            if command.id == selected:
                self._list.setCurrentItem(item)

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is self._input and event.type() == QEvent.KeyPress:
            if self._handle_key(event):
                return True
        return super().eventFilter(watched, event)

    def changeEvent(self, event: QEvent) -> None:
        if event.type() == QEvent.ActivationChange and self._interaction is not None:
            if self.isActiveWindow():
                self._interaction.on_focus()
                if self._controller is not None and self._controller.state == PaletteState.HIDDEN:
                    self._controller.spawn(self._controller.on_window_focused())
            else:
                self._interaction.on_blur(focus_within_app=self._focus_within_app())
        super().changeEvent(event)

    def showEvent(self, event: QEvent) -> None:
        self._pointer_timer.start(POINTER_POLL_MS)
        super().showEvent(event)

    def hideEvent(self, event: QEvent) -> None:
        if self._reflagging:
            super().hideEvent(event)
            return
        self._pointer_timer.stop()
        self._popover.hide()
        if self._controller is not None:
            self._controller.on_window_hidden()
        super().hideEvent(event)

    def _handle_key(self, event: Any) -> bool:
        key = event.key()
        if key == Qt.Key_Escape:
            self.hide_window()
            return True
        if key in (Qt.Key_Down, Qt.Key_Up):
            self._move_selection(1 if key == Qt.Key_Down else -1)
            return True
        if key in (Qt.Key_Return, Qt.Key_Enter):
            item = self._list.currentItem()
            if item is not None:
                self._on_item_activated(item)
            return True
        if self._controller is not None and event.text():
            return bool(self._controller.handle_key(event.text()))
        return False

    def _move_selection(self, step: int) -> None:
        row = self._list.currentRow()
        count = self._list.count()
        while 0 <= row + step < count:
            row += step
            if self._list.item(row).flags() & Qt.ItemIsEnabled:
                self._list.setCurrentRow(row)
                return

    def _focus_within_app(self) -> bool:
        active = QApplication.activeWindow() if QApplication is not None else None
        return active is not None and active is not self

    def _poll_pointer(self) -> None:
        if self._interaction is None:
            return
        local = self.mapFromGlobal(QCursor.pos())
        self._interaction.on_pointer_move(local.x(), local.y())

    def _on_text_changed(self, text: str) -> None:
        if not self._rendering and self._controller is not None:
            self._controller.set_query(text)

    def _on_scrolled(self, _value: int) -> None:
        if not self._rendering and self._controller is not None:
            self._controller.on_list_scrolled()

    def _on_item_activated(self, item: QListWidgetItem) -> None:
        if self._controller is None:
            return
        payload: Optional[Any] = item.data(Qt.UserRole)
        if isinstance(payload, Command):
            self._controller.spawn(self._controller.select(payload))
        elif isinstance(payload, ClipboardEntry):
            self._controller.spawn(self._controller.paste_clipboard_entry(payload.id))
