# src/battray/display/protocols.py
from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from battray.errors import NotificationError


@runtime_checkable
class TrayIcon(Protocol):
    """Protocol defining the interface for the tray indicator.

    This protocol abstracts the desktop toolkit so the poll cycle can run
    against any tray implementation, or none at all in tests.
    """

    def set_tooltip(self, text: str) -> None:
        """Replace the tooltip text.

        Args:
            text: Per-battery status lines
        """
        ...

    def show_icon(self, path: Path) -> None:
        """Show the indicator with the icon at ``path``."""
        ...

    def hide_icon(self) -> None:
        """Reset the icon to the fallback and hide the indicator."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """Protocol for presenting low battery warnings."""

    def notify(self, title: str, body: str) -> None:
        """Present a warning.

        Raises:
            NotificationError: If delivery failed
        """
        ...


class MockTray:
    """Mock implementation of TrayIcon for testing."""

    def __init__(self) -> None:
        self.tooltip: str | None = None
        self.icon: Path | None = None
        self.visible = False
        self.icon_history: list[Path | None] = []

    def set_tooltip(self, text: str) -> None:
        self.tooltip = text

    def show_icon(self, path: Path) -> None:
        self.icon = path
        self.visible = True
        self.icon_history.append(path)

    def hide_icon(self) -> None:
        self.icon = None
        self.visible = False
        self.icon_history.append(None)


class MockNotifier:
    """Mock implementation of Notifier that records every message."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def notify(self, title: str, body: str) -> None:
        self.messages.append((title, body))

    def reset_call_history(self) -> None:
        self.messages = []


class FailingNotifier(MockNotifier):
    """Notifier mock that fails on every delivery attempt."""

    def notify(self, title: str, body: str) -> None:
        super().notify(title, body)
        raise NotificationError("simulated notification failure")
