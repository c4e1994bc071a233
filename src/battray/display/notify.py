"""Warning delivery with a one-way fallback to dialogs."""

from __future__ import annotations

import logging
from typing import Final

from battray.display.protocols import Notifier
from battray.errors import NotificationError

logger: Final = logging.getLogger(__name__)


class FallbackNotifier:
    """Uses the primary notifier until it fails once, then the fallback.

    The switch is permanent for the lifetime of the object; the primary
    notifier is never retried.
    """

    def __init__(self, primary: Notifier | None, fallback: Notifier) -> None:
        """Initialize the strategy.

        Args:
            primary: Preferred notifier, or None when it is unavailable
            fallback: Notifier used once the primary is gone
        """
        self._primary = primary
        self._fallback = fallback

    @property
    def using_fallback(self) -> bool:
        return self._primary is None

    def notify(self, title: str, body: str) -> None:
        if self._primary is not None:
            try:
                self._primary.notify(title, body)
                return
            except NotificationError as exc:
                logger.warning("Notification failed (%s); falling back to dialogs", exc)
                self._primary = None
        self._fallback.notify(title, body)
