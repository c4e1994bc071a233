"""GTK tray icon, notifiers and main loop.

Importing this module requires PyGObject with GTK 3. The libnotify
binding is optional and probed once by ``create_notifier``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, Final

import gi

gi.require_version("Gtk", "3.0")
from gi.repository import GLib, Gtk  # noqa: E402

from battray.constants import APP_NAME, POLL_INTERVAL_SECONDS  # noqa: E402
from battray.display.notify import FallbackNotifier  # noqa: E402
from battray.errors import NotificationError  # noqa: E402

logger: Final = logging.getLogger(__name__)

FALLBACK_ICON_NAME: Final = "battery-missing"
NOTIFICATION_ICON_NAME: Final = "battery-caution"


class GtkTrayIcon:
    """Tray indicator backed by ``Gtk.StatusIcon``."""

    def __init__(self) -> None:
        self.status_icon = Gtk.StatusIcon()
        self.status_icon.set_title(APP_NAME)
        self.hide_icon()

    def set_tooltip(self, text: str) -> None:
        self.status_icon.set_tooltip_text(text)

    def show_icon(self, path: Path) -> None:
        self.status_icon.set_from_file(str(path))
        self.status_icon.set_visible(True)

    def hide_icon(self) -> None:
        self.status_icon.set_from_icon_name(FALLBACK_ICON_NAME)
        self.status_icon.set_visible(False)


class LibnotifyNotifier:
    """Desktop notifications through the libnotify GObject binding."""

    def __init__(self, notify_module: Any) -> None:
        self._notify = notify_module

    @classmethod
    def probe(cls) -> LibnotifyNotifier | None:
        """Return a notifier if libnotify is installed and initializes."""
        try:
            gi.require_version("Notify", "0.7")
            from gi.repository import Notify
        except (ImportError, ValueError) as exc:
            logger.info("libnotify unavailable (%s); using dialogs", exc)
            return None

        if not Notify.init(APP_NAME):
            logger.info("libnotify failed to initialize; using dialogs")
            return None
        return cls(Notify)

    def notify(self, title: str, body: str) -> None:
        notification = self._notify.Notification.new(title, body, NOTIFICATION_ICON_NAME)
        try:
            notification.show()
        except GLib.Error as exc:
            raise NotificationError(str(exc)) from exc


class DialogNotifier:
    """Modal warning dialog, used when notifications are unavailable."""

    def notify(self, title: str, body: str) -> None:
        dialog = Gtk.MessageDialog(
            transient_for=None,
            flags=0,
            message_type=Gtk.MessageType.WARNING,
            buttons=Gtk.ButtonsType.CLOSE,
            text=title,
        )
        dialog.format_secondary_text(body)
        dialog.run()
        dialog.destroy()


def create_notifier(use_notifications: bool = True) -> FallbackNotifier:
    """Select the warning strategy once at startup."""
    primary = LibnotifyNotifier.probe() if use_notifications else None
    return FallbackNotifier(primary, DialogNotifier())


class GtkMainLoop:
    """Drives a poll function from the GLib main loop."""

    def __init__(self, interval: int = POLL_INTERVAL_SECONDS) -> None:
        self.interval = interval
        self.source_id: int | None = None

    def run(self, poll: Callable[[], bool]) -> None:
        """Poll once, then every ``interval`` seconds until the process exits.

        ``poll`` must return True to keep the timer alive.
        """
        poll()
        self.source_id = GLib.timeout_add_seconds(self.interval, poll)
        Gtk.main()
