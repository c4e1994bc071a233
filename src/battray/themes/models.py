"""Theme data model: steps, step sets and themes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from battray.constants import SYSTEM_ICON_DIR
from battray.errors import InvalidDirectionError, ShapeMismatchError


class Direction(Enum):
    """Charge direction reported for a poll.

    Only DISCHARGING selects the discharging step set; every other state
    is evaluated against the charging steps.
    """

    CHARGING = "charging"
    DISCHARGING = "discharging"
    FULL = "full"
    UNKNOWN = "unknown"

    @property
    def charging_flag(self) -> bool | None:
        """Flag handed to callbacks: True, False, or None when unknown."""
        if self is Direction.DISCHARGING:
            return False
        if self is Direction.UNKNOWN:
            return None
        return True

    @classmethod
    def from_token(cls, token: str | Direction) -> Direction:
        """Resolve an event direction token.

        Args:
            token: ``"charging"``, ``"discharging"`` or the matching enum member

        Returns:
            Direction.CHARGING or Direction.DISCHARGING

        Raises:
            InvalidDirectionError: For any other token
        """
        if isinstance(token, Direction):
            if token in (cls.CHARGING, cls.DISCHARGING):
                return token
            raise InvalidDirectionError(token)
        if isinstance(token, str):
            normalized = token.strip().lower()
            if normalized == cls.CHARGING.value:
                return cls.CHARGING
            if normalized == cls.DISCHARGING.value:
                return cls.DISCHARGING
        raise InvalidDirectionError(token)


@runtime_checkable
class StepCallback(Protocol):
    """User code attached to a step, run when the step is entered."""

    def __call__(self, level: float, charging: bool | None) -> None: ...


@dataclass
class Step:
    """One ``(minimum, maximum]`` level range and what to show for it."""

    minimum: float
    maximum: float
    icon: str
    alt_icon: str | None = None
    callback: StepCallback | None = None

    @property
    def flashing(self) -> bool:
        """Whether the step alternates between its two icons."""
        return self.alt_icon is not None

    def matches(self, level: float) -> bool:
        # Open below, closed above: a level of exactly 0 never matches
        return self.minimum < level <= self.maximum


StepSet = list[Step]


@dataclass
class Theme:
    """Named bundle of icon steps for both charge directions.

    Built incrementally: ``set_step_count`` first, then the directory and
    the two step sets. Only callbacks may be attached after that.
    """

    step_count: int | None = None
    base_dir: Path = SYSTEM_ICON_DIR
    charging_steps: StepSet = field(default_factory=list)
    discharging_steps: StepSet = field(default_factory=list)

    def set_step_count(self, count: int) -> None:
        if count <= 0:
            raise ValueError(f"step count must be positive, got {count}")
        self.step_count = count

    def set_dir(self, path: str | Path) -> None:
        self.base_dir = Path(path)

    def set_charging(self, steps: StepSet) -> None:
        """Assign the charging step set.

        Raises:
            ShapeMismatchError: If ``len(steps)`` differs from the step count
        """
        self._check_shape(steps)
        self.charging_steps = list(steps)

    def set_discharging(self, steps: StepSet) -> None:
        """Assign the discharging step set.

        Raises:
            ShapeMismatchError: If ``len(steps)`` differs from the step count
        """
        self._check_shape(steps)
        self.discharging_steps = list(steps)

    def set_event(
        self, step_index: int, callback: StepCallback, direction: str | Direction
    ) -> None:
        """Attach a callback to one step of a direction's step set.

        Args:
            step_index: Position of the step; must be in range
            callback: Callable invoked with ``(level, charging)``
            direction: ``"charging"`` or ``"discharging"``

        Raises:
            InvalidDirectionError: If the direction token is not recognized
        """
        resolved = Direction.from_token(direction)
        self.steps_for(resolved)[step_index].callback = callback

    def steps_for(self, direction: Direction) -> StepSet:
        """Return the step set used to evaluate ``direction``."""
        if direction is Direction.DISCHARGING:
            return self.discharging_steps
        return self.charging_steps

    def icon_path(self, icon: str) -> Path:
        return self.base_dir / icon

    def _check_shape(self, steps: StepSet) -> None:
        if self.step_count is None or len(steps) != self.step_count:
            raise ShapeMismatchError(self.step_count, len(steps))
