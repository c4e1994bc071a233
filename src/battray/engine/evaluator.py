"""Selects the icon and callback for a battery reading."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from battray.themes.models import Direction, Step, StepCallback, Theme

logger: Final = logging.getLogger(__name__)


@dataclass
class EvaluatorState:
    """Mutable state carried from one evaluation to the next.

    ``last_event`` holds ``(charging_flag, step_minimum)`` of the most recent
    callback that fired, or None before the first one.
    """

    last_event: tuple[bool | None, float] | None = None
    flash_phase: bool = False


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one reading against a theme."""

    icon_path: Path | None
    flash_alt: bool = False
    step: Step | None = None
    callback: StepCallback | None = None

    @property
    def visible(self) -> bool:
        return self.icon_path is not None


class LevelEvaluator:
    """Matches a level to a theme step and tracks flashing and event state."""

    def __init__(self, state: EvaluatorState | None = None) -> None:
        self.state = state or EvaluatorState()

    @staticmethod
    def match_step(theme: Theme, direction: Direction, level: float) -> Step | None:
        """Return the first step whose ``(minimum, maximum]`` range holds ``level``."""
        for step in theme.steps_for(direction):
            if step.matches(level):
                return step
        return None

    def evaluate(self, theme: Theme, direction: Direction, level: float) -> Evaluation:
        """Evaluate a reading.

        Flashing steps alternate between their primary and alternate icon on
        every call, starting with the primary one. A step callback is
        returned, not invoked; it is reported only when no event fired yet,
        or when both the charging flag and the step minimum differ from the
        last event that fired.

        Args:
            theme: Theme to evaluate against
            direction: Charge direction of the reading
            level: Aggregate battery level in percent

        Returns:
            Icon to show (None hides the indicator), flash phase and callback
        """
        step = self.match_step(theme, direction, level)
        if step is None:
            logger.debug("No %s step matches level %.1f", direction.value, level)
            return Evaluation(icon_path=None)

        icon = step.icon
        flash_alt = False
        if step.alt_icon is not None:
            flash_alt = self.state.flash_phase
            self.state.flash_phase = not self.state.flash_phase
            if flash_alt:
                icon = step.alt_icon

        callback = None
        if step.callback is not None and self._should_fire(direction, step):
            self.state.last_event = (direction.charging_flag, step.minimum)
            callback = step.callback
            logger.debug(
                "Event for %s step (%g, %g] triggered at %.1f%%",
                direction.value,
                step.minimum,
                step.maximum,
                level,
            )

        return Evaluation(
            icon_path=theme.icon_path(icon),
            flash_alt=flash_alt,
            step=step,
            callback=callback,
        )

    def _should_fire(self, direction: Direction, step: Step) -> bool:
        if self.state.last_event is None:
            return True
        # An unknown direction records None and compares as a direction of its own
        last_flag, last_minimum = self.state.last_event
        return last_flag != direction.charging_flag and last_minimum != step.minimum
