"""Desktop notifications through the system tray.

Usage:
    from mpdnotify.ui.notifier import TrayNotifier

    notifier = TrayNotifier()
    notifier.show("Now Playing", "Artist: ...", "/tmp/mpdthumb", 3000)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from PySide6.QtCore import QCoreApplication, Qt
from PySide6.QtGui import QBrush, QColor, QIcon, QPainter, QPixmap
from PySide6.QtWidgets import QSystemTrayIcon

logger = logging.getLogger(__name__)

_ICON_SIZE = 64


class NotificationSink(ABC):
    """Something that can put a notification in front of the user."""

    @abstractmethod
    def show(self, title: str, body: str, image_path: str, timeout_ms: int) -> bool:
        """Display a notification.

        Args:
            title: Notification summary line.
            body: Notification text.
            image_path: Path of an image to show, or empty string for none.
            timeout_ms: How long the notification stays up.

        Returns:
            True if the notification was handed to the platform.
        """


def _build_app_icon() -> QIcon:
    """Return the theme's audio icon, or a drawn disc if the theme has none."""
    icon = QIcon.fromTheme("audio-x-generic")
    if not icon.isNull():
        return icon
    return _draw_app_icon()


def _draw_app_icon() -> QIcon:
    """Draw a plain record-like disc."""
    pixmap = QPixmap(_ICON_SIZE, _ICON_SIZE)
    pixmap.fill(Qt.GlobalColor.transparent)
    painter = QPainter(pixmap)
    try:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor("#3b4252")))
        painter.drawEllipse(2, 2, _ICON_SIZE - 4, _ICON_SIZE - 4)
        painter.setBrush(QBrush(QColor("#eceff4")))
        hole = _ICON_SIZE // 4
        painter.drawEllipse((_ICON_SIZE - hole) // 2, (_ICON_SIZE - hole) // 2, hole, hole)
    finally:
        painter.end()
    return QIcon(pixmap)


class TrayNotifier(NotificationSink):
    """Shows notifications as system tray balloon messages.

    On Linux, Qt forwards tray messages to the freedesktop notification
    service, so they appear as regular desktop notifications.
    """

    def __init__(self, app_name: str = "mpdnotify", icon: QIcon | None = None) -> None:
        """Initialize the tray notifier.

        Args:
            app_name: Name shown as the tray tooltip.
            icon: Tray icon; defaults to a themed audio icon.
        """
        self._app_name = app_name
        self._tray = QSystemTrayIcon(icon if icon is not None else _build_app_icon())
        self._tray.setToolTip(app_name)

    @property
    def available(self) -> bool:
        """Return True if the platform can display tray messages."""
        return QSystemTrayIcon.isSystemTrayAvailable() and QSystemTrayIcon.supportsMessages()

    def show(self, title: str, body: str, image_path: str, timeout_ms: int) -> bool:
        """Display a notification through the tray icon.

        Failures are logged and reported through the return value.
        """
        if not self.available:
            logger.error("There was an error with the notification: tray messages unsupported")
            return False

        if not self._tray.isVisible():
            self._tray.show()

        try:
            if image_path:
                self._tray.showMessage(title, body, QIcon(image_path), timeout_ms)
            else:
                self._tray.showMessage(
                    title, body, QSystemTrayIcon.MessageIcon.Information, timeout_ms
                )
        except RuntimeError as e:
            logger.error("There was an error with the notification: %s", e)
            return False

        self._tray.setToolTip(f"{self._app_name}\n{title}")
        # No Qt event loop runs here; flush so the message leaves now
        QCoreApplication.processEvents()
        logger.debug("Notification shown: %s", title)
        return True

    def close(self) -> None:
        """Remove the tray icon."""
        self._tray.hide()
