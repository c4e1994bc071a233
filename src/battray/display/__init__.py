"""Display collaborators: tray icon and warning notifiers.

The GTK implementations live in ``battray.display.gtk`` and are imported
on demand so the rest of the package works without PyGObject.
"""

from .notify import FallbackNotifier
from .protocols import FailingNotifier, MockNotifier, MockTray, Notifier, TrayIcon

__all__ = [
    "FailingNotifier",
    "FallbackNotifier",
    "MockNotifier",
    "MockTray",
    "Notifier",
    "TrayIcon",
]
