"""Battery readings from the ``acpi`` command.

The command is expected to print, per battery, lines such as::

    Battery 0: Discharging, 85%, 02:30:00 remaining
    Battery 0: design capacity 4400 mAh, last full capacity 4020 mAh

Lines are classified into tagged variants and batteries are aggregated
into a single capacity-weighted level and charge direction.
"""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final, Protocol, Union, runtime_checkable

from battray.constants import DEFAULT_BATTERY_COMMAND
from battray.themes.models import Direction

logger: Final = logging.getLogger(__name__)

_STATUS_RE: Final = re.compile(
    r"^Battery (?P<index>\d+): (?P<state>[A-Za-z ]+?), (?P<level>\d+(?:\.\d+)?)%(?:, (?P<detail>.*))?$"
)
_CAPACITY_RE: Final = re.compile(
    r"^Battery (?P<index>\d+): design capacity (?P<design>\d+) \w+, "
    r"last full capacity (?P<last_full>\d+) \w+"
)

_STATES: Final = {
    "charging": Direction.CHARGING,
    "discharging": Direction.DISCHARGING,
    "full": Direction.FULL,
    "not charging": Direction.UNKNOWN,
    "unknown": Direction.UNKNOWN,
}


# ── line variants ────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class BatteryStatusLine:
    index: int
    state: Direction
    level: float
    text: str
    detail: str | None = None


@dataclass(frozen=True)
class BatteryCapacityLine:
    index: int
    design: int
    last_full: int


@dataclass(frozen=True)
class OtherLine:
    text: str


ReportLine = Union[BatteryStatusLine, BatteryCapacityLine, OtherLine]


def classify_report_line(text: str) -> ReportLine:
    """Classify one line of battery command output."""
    stripped = text.strip()

    status = _STATUS_RE.match(stripped)
    if status:
        state = _STATES.get(status.group("state").strip().lower(), Direction.UNKNOWN)
        return BatteryStatusLine(
            index=int(status.group("index")),
            state=state,
            level=float(status.group("level")),
            text=stripped,
            detail=status.group("detail"),
        )

    capacity = _CAPACITY_RE.match(stripped)
    if capacity:
        return BatteryCapacityLine(
            index=int(capacity.group("index")),
            design=int(capacity.group("design")),
            last_full=int(capacity.group("last_full")),
        )

    return OtherLine(stripped)


# ── poll result ──────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class PollResult:
    """Aggregated reading for one polling cycle."""

    level: float
    direction: Direction
    battery_lines: list[str] = field(default_factory=list)

    @property
    def charging(self) -> bool | None:
        return self.direction.charging_flag

    @property
    def tooltip(self) -> str:
        return "\n".join(self.battery_lines)


def aggregate_direction(states: Sequence[Direction]) -> Direction:
    """Combine per-battery states into one direction.

    Any discharging battery makes the whole system discharge; otherwise any
    charging battery makes it charge. All-full is FULL, anything else UNKNOWN.
    """
    if Direction.DISCHARGING in states:
        return Direction.DISCHARGING
    if Direction.CHARGING in states:
        return Direction.CHARGING
    if states and all(state is Direction.FULL for state in states):
        return Direction.FULL
    return Direction.UNKNOWN


def aggregate_level(levels: dict[int, float], capacities: dict[int, int]) -> float:
    """Capacity-weighted mean of battery levels.

    Batteries are weighted by their last full capacity. Without any capacity
    information the plain mean is used.
    """
    weights = {index: capacities.get(index, 0) for index in levels}
    total = sum(weights.values())
    if total <= 0:
        return sum(levels.values()) / len(levels)
    return sum(levels[index] * weights[index] for index in levels) / total


def parse_battery_report(text: str) -> PollResult | None:
    """Parse battery command output into an aggregated reading.

    Args:
        text: Full command output

    Returns:
        The aggregated reading, or None when no battery status line is found
    """
    statuses: dict[int, BatteryStatusLine] = {}
    capacities: dict[int, int] = {}

    for raw in text.splitlines():
        line = classify_report_line(raw)
        if isinstance(line, BatteryStatusLine):
            statuses[line.index] = line
        elif isinstance(line, BatteryCapacityLine):
            capacities[line.index] = line.last_full

    if not statuses:
        return None

    level = aggregate_level({i: s.level for i, s in statuses.items()}, capacities)
    direction = aggregate_direction([s.state for s in statuses.values()])
    return PollResult(
        level=level,
        direction=direction,
        battery_lines=[statuses[i].text for i in sorted(statuses)],
    )


# ── sources ──────────────────────────────────────────────────────────────────
@runtime_checkable
class BatterySource(Protocol):
    """Protocol for anything that can produce one reading per poll."""

    def read(self) -> PollResult | None:
        """Return the current reading, or None when there is none this cycle."""
        ...


class AcpiBatterySource:
    """Runs the battery command synchronously and parses its output.

    No timeout is applied: a hanging command stalls the poll cycle.
    """

    def __init__(self, command: Sequence[str] = DEFAULT_BATTERY_COMMAND) -> None:
        self.command = list(command)

    def read(self) -> PollResult | None:
        try:
            result = subprocess.run(
                self.command,
                check=True,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except FileNotFoundError:
            logger.warning("Battery command not found: %s", self.command[0])
            return None
        except subprocess.CalledProcessError as exc:
            logger.warning("Battery command failed: %s", exc)
            return None

        reading = parse_battery_report(result.stdout)
        if reading is None:
            logger.debug("No battery found in %s output", self.command[0])
        return reading


class StaticBatterySource:
    """Source returning canned output; used for tests and ``status --report``."""

    def __init__(self, report: str) -> None:
        self.report = report

    def read(self) -> PollResult | None:
        return parse_battery_report(self.report)
