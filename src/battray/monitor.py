"""Poll-evaluate-display cycle."""

from __future__ import annotations

import logging
from typing import Final

from battray.context import AppContext
from battray.display.protocols import Notifier, TrayIcon
from battray.engine.alerts import LowBatteryWarning
from battray.engine.evaluator import Evaluation
from battray.system.acpi import BatterySource, PollResult

logger: Final = logging.getLogger(__name__)


class BatteryMonitor:
    """Runs one polling cycle at a time against the active theme.

    The cycle reads the battery source, updates the tray, runs any
    triggered step callback inline and raises low battery warnings. A
    callback that raises is logged and the cycle carries on. It is not
    reentrant: the caller must not start a cycle while one is running.
    """

    def __init__(
        self,
        context: AppContext,
        source: BatterySource,
        tray: TrayIcon,
        notifier: Notifier,
    ) -> None:
        self.context = context
        self.source = source
        self.tray = tray
        self.notifier = notifier
        self.last_reading: PollResult | None = None
        self.last_evaluation: Evaluation | None = None

    def poll(self) -> bool:
        """Run one cycle.

        Returns:
            Always True, so a GLib timer keeps calling it
        """
        reading = self.source.read()
        if reading is None:
            return True

        self.last_reading = reading
        self.tray.set_tooltip(reading.tooltip)

        theme = self.context.registry.active_theme()
        evaluation = self.context.evaluator.evaluate(theme, reading.direction, reading.level)
        self.last_evaluation = evaluation

        if evaluation.icon_path is not None:
            self.tray.show_icon(evaluation.icon_path)
        else:
            self.tray.hide_icon()

        if evaluation.callback is not None:
            logger.info(
                "Running event for %.1f%% (%s)", reading.level, reading.direction.value
            )
            try:
                evaluation.callback(reading.level, reading.charging)
            except Exception:
                logger.exception("Event callback %r failed", evaluation.callback)

        warning = self.context.warnings.check(reading.level, reading.charging)
        if warning is not None:
            self._raise_warning(warning)

        return True

    def _raise_warning(self, warning: LowBatteryWarning) -> None:
        self.notifier.notify(warning.title, warning.body)
