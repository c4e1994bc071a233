"""Low battery warning thresholds."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from battray.constants import FULL_LEVEL

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True)
class LowBatteryWarning:
    """A warning raised for one threshold."""

    threshold: float
    level: float

    @property
    def title(self) -> str:
        return "Low battery"

    @property
    def body(self) -> str:
        return f"Battery level is {self.level:.0f}% (warning threshold {self.threshold:g}%)."


def check_warning(
    level: float,
    charging: bool | None,
    thresholds: Sequence[float],
    last_warning_level: float,
) -> tuple[float, LowBatteryWarning | None]:
    """Decide whether a poll raises a low battery warning.

    Thresholds are visited in the order given. Those at or above the last
    warned level are skipped; the first remaining threshold the level has
    fallen to raises the warning and lowers the last warned level.

    Args:
        level: Current aggregate level in percent
        charging: Charging flag of the poll; truthy resets the state
        thresholds: Configured thresholds, highest first
        last_warning_level: Level of the previous warning (100 when none)

    Returns:
        Tuple of (new last warning level, warning or None)
    """
    if charging:
        return FULL_LEVEL, None

    for threshold in thresholds:
        if threshold >= last_warning_level:
            continue
        if level <= threshold:
            return level, LowBatteryWarning(threshold=threshold, level=level)

    return last_warning_level, None


class WarningController:
    """Keeps the ratcheting last-warning level between polls."""

    def __init__(self, thresholds: Sequence[float]) -> None:
        self.thresholds = list(thresholds)
        self.last_warning_level = FULL_LEVEL

    def check(self, level: float, charging: bool | None) -> LowBatteryWarning | None:
        self.last_warning_level, warning = check_warning(
            level, charging, self.thresholds, self.last_warning_level
        )
        if warning is not None:
            logger.info(
                "Battery at %.1f%% crossed warning threshold %g%%", level, warning.threshold
            )
        return warning
