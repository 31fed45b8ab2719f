"""Application entrypoint."""

from __future__ import annotations

import logging
import sys

from action_executor import DashscopeActionExecutor
from auto_paste import ClipboardPasteService
from catalog import BuiltinCommandCatalog
from clipboard_history import ClipboardHistory, ClipboardMonitor
from config import JsonConfigStore
from hotkey import GlobalHotkeyAdapter
from interfaces import ConfigStore
from models import PaletteState
from overlay import PaletteWindow
from overlay_interaction import OverlayInteractionModel
from palette_controller import PaletteController
from text_capture import SystemTextCapture

try:
    from PySide6 import QtAsyncio
    from PySide6.QtCore import QObject, Signal, QSize
    from PySide6.QtGui import QAction, QIcon, QPixmap, QPainter, QColor, QBrush
    from PySide6.QtWidgets import QApplication, QInputDialog, QMenu, QMessageBox, QSystemTrayIcon
except Exception as exc:  # pragma: no cover
    raise SystemExit(f"PySide6 is required to run the desktop app: {exc}")

logger = logging.getLogger(__name__)

APP_NAME = "Quick Palette"


def _create_icon(color: str = "#3D7EFF", size: int = 22) -> QIcon:
    """Generate a simple rounded-square tray icon with the given color."""
    pixmap = QPixmap(QSize(size, size))
    pixmap.fill(QColor(0, 0, 0, 0))
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing, True)
    painter.setBrush(QBrush(QColor(color)))
    painter.setPen(QColor(color))
    painter.drawRoundedRect(2, 2, size - 4, size - 4, 5, 5)
    painter.end()
    return QIcon(pixmap)


class UIBridge(QObject):
    activate_signal = Signal()
    clipboard_signal = Signal()


class TrayWidgetHost:
    """Announces widget launches through the tray until widgets get windows."""

    def __init__(self, tray: QSystemTrayIcon) -> None:
        self._tray = tray

    async def open_widget(self, widget_id: str) -> None:
        title = widget_id.replace("_", " ").title()
        self._tray.showMessage(APP_NAME, f"Opening {title}")


class App:
    def __init__(self) -> None:
        self.app = QApplication(sys.argv)
        self.app.setQuitOnLastWindowClosed(False)
        self.config_store: ConfigStore = JsonConfigStore()
        self.history = ClipboardHistory()
        self.catalog = BuiltinCommandCatalog()
        self.window = PaletteWindow()

        self.ui = UIBridge()
        self.ui.activate_signal.connect(self._on_activate_ui)
        self.ui.clipboard_signal.connect(self._on_clipboard_ui)

        self.tray = QSystemTrayIcon()
        self.tray.setIcon(_create_icon())
        self.tray.setToolTip(f"{APP_NAME} - Ready")
        self._setup_menu()
        self.tray.show()

        self.controller = PaletteController(
            capture=SystemTextCapture(),
            catalog=self.catalog,
            executor=self._make_executor(self.config_store.get_api_key()),
            usage=self.catalog,
            widget_host=TrayWidgetHost(self.tray),
            window=self.window,
            clipboard_feed=self.history,
            paste_service=ClipboardPasteService(),
            on_state_change=self._on_state_change,
            on_change=self._on_change,
        )
        self.interaction = OverlayInteractionModel(window=self.window)
        self.window.attach(self.controller, self.interaction)

        self.monitor = ClipboardMonitor(
            self.history, on_entry=lambda _entry: self.ui.clipboard_signal.emit()
        )
        self.hotkey = GlobalHotkeyAdapter(hotkey=self.config_store.get_hotkey())

    def _make_executor(self, api_key: str) -> DashscopeActionExecutor:
        return DashscopeActionExecutor(api_key=api_key, model=self.config_store.get_model())

    def _setup_menu(self) -> None:
        menu = QMenu()

        open_action = QAction("Open Palette", menu)
        open_action.triggered.connect(self._on_activate_ui)
        menu.addAction(open_action)

        api_action = QAction("Set API Key", menu)
        api_action.triggered.connect(self._set_api_key)
        menu.addAction(api_action)

        hotkey_action = QAction("Set Hotkey", menu)
        hotkey_action.triggered.connect(self._set_hotkey)
        menu.addAction(hotkey_action)

        menu.addSeparator()
        quit_action = QAction("Quit", menu)
        quit_action.triggered.connect(self.quit)
        menu.addAction(quit_action)

        self.tray.setContextMenu(menu)

    def _set_api_key(self) -> None:
        value, ok = QInputDialog.getText(None, "API Key", "DashScope API Key")
        if not ok:
            return
        self.config_store.set_api_key(value)
        # Hot-swap executor with new key
        self.controller.replace_executor(self._make_executor(value))
        QMessageBox.information(None, "Saved", "API Key saved and applied.")

    def _set_hotkey(self) -> None:
        value, ok = QInputDialog.getText(
            None, "Hotkey", "Use pynput hotkey format, e.g. <ctrl>+<alt>+<space>"
        )
        if not ok or not value:
            return
        self.config_store.set_hotkey(value)
        QMessageBox.information(None, "Saved", "Hotkey saved. Restart app to apply.")

    # ------------------------------------------------------------------
    # Controller callbacks (event loop thread)
    # ------------------------------------------------------------------

    def _on_state_change(self, from_state: PaletteState, to_state: PaletteState) -> None:
        if to_state == PaletteState.HIDDEN:
            self.tray.setToolTip(f"{APP_NAME} - Ready")
        elif to_state == PaletteState.FOCUSED:
            self.tray.setToolTip(f"{APP_NAME} - Capturing...")
        elif to_state == PaletteState.READY:
            self.tray.setToolTip(f"{APP_NAME} - Open")

    def _on_change(self) -> None:
        session = self.controller.session
        self.interaction.set_popover_open(session.popover.is_open)
        if self.window.isVisible():
            self.window.render(self.controller.sections(), session)

    # ------------------------------------------------------------------
    # UI thread handlers (safe for Qt)
    # ------------------------------------------------------------------

    def _on_activate_ui(self) -> None:
        if self.window.isVisible() and self.window.isActiveWindow():
            self.window.hide_window()
            return
        self.window.present()

    def _on_clipboard_ui(self) -> None:
        if self.window.isVisible():
            self.window.render(self.controller.sections(), self.controller.session)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def run(self) -> int:
        try:
            # pynput calls back on its own thread; the signal hops to the UI thread
            self.hotkey.start(on_activate=self.ui.activate_signal.emit)
        except Exception as exc:
            logger.warning("Hotkey disabled: %s", exc)
            self.tray.showMessage(APP_NAME, f"Hotkey disabled: {exc}")
        try:
            self.monitor.start()
        except Exception as exc:
            logger.warning("Clipboard history disabled: %s", exc)
        QtAsyncio.run(keep_running=True, quit_qapp=True)
        return 0

    def quit(self) -> None:
        self.hotkey.stop()
        self.monitor.stop()
        self.interaction.close()
        self.controller.close()
        self.app.quit()


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = App()
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
