from pathlib import Path

import pytest

from battray.engine import EvaluatorState, LevelEvaluator
from battray.themes import Direction, Theme, parse_steps


class RecordingCallback:
    def __init__(self) -> None:
        self.calls: list[tuple[float, bool | None]] = []

    def __call__(self, level: float, charging: bool | None) -> None:
        self.calls.append((level, charging))


@pytest.fixture
def evaluator() -> LevelEvaluator:
    return LevelEvaluator()


class TestStepMatching:
    def test_zero_matches_no_step(self, evaluator: LevelEvaluator, example_theme: Theme) -> None:
        """A level of exactly 0 matches no step and hides the icon."""
        result = evaluator.evaluate(example_theme, Direction.DISCHARGING, 0)

        assert result.icon_path is None
        assert not result.visible
        assert result.step is None

    @pytest.mark.parametrize(
        "level, icon",
        [
            (0.1, "missing.png"),
            (2, "missing.png"),
            (2.5, "low.png"),
            (10, "low.png"),
            (10.01, "full.png"),
            (100, "full.png"),
        ],
    )
    def test_upper_bound_is_inclusive(
        self, evaluator: LevelEvaluator, example_theme: Theme, level: float, icon: str
    ) -> None:
        """Each step covers levels above its minimum up to and including its maximum."""
        step = evaluator.match_step(example_theme, Direction.DISCHARGING, level)

        assert step is not None
        assert step.icon == icon

    def test_level_above_last_step_is_unmatched(self, evaluator: LevelEvaluator) -> None:
        """Levels above every maximum are not clamped into the last step."""
        theme = Theme()
        theme.set_step_count(1)
        theme.set_charging(parse_steps("90:a.png", 1))

        result = evaluator.evaluate(theme, Direction.CHARGING, 95)

        assert result.icon_path is None

    @pytest.mark.parametrize(
        "direction, icon",
        [
            (Direction.CHARGING, "c.png"),
            (Direction.FULL, "c.png"),
            (Direction.UNKNOWN, "c.png"),
            (Direction.DISCHARGING, "full.png"),
        ],
    )
    def test_only_discharging_uses_discharging_steps(
        self,
        evaluator: LevelEvaluator,
        example_theme: Theme,
        direction: Direction,
        icon: str,
    ) -> None:
        """Charging, full and unknown readings all use the charging steps."""
        result = evaluator.evaluate(example_theme, direction, 50)

        assert result.icon_path == Path("/icons") / icon


class TestFlashing:
    def test_alternates_every_call(self, evaluator: LevelEvaluator, example_theme: Theme) -> None:
        """A flashing step shows primary and alternate icons in turn."""
        icons = [
            evaluator.evaluate(example_theme, Direction.DISCHARGING, 1).icon_path
            for _ in range(4)
        ]

        assert icons == [
            Path("/icons/missing.png"),
            Path("/icons/low.png"),
            Path("/icons/missing.png"),
            Path("/icons/low.png"),
        ]

    def test_flash_flag_reports_alternate(
        self, evaluator: LevelEvaluator, example_theme: Theme
    ) -> None:
        """The evaluation reports which icon of a flashing step is shown."""
        flags = [
            evaluator.evaluate(example_theme, Direction.DISCHARGING, 1).flash_alt
            for _ in range(3)
        ]

        assert flags == [False, True, False]

    def test_toggle_is_shared_across_steps(self, example_theme: Theme) -> None:
        """One flash phase is shared by all flashing steps."""
        evaluator = LevelEvaluator()
        evaluator.evaluate(example_theme, Direction.DISCHARGING, 1)

        # A non-flashing step in between leaves the phase untouched
        evaluator.evaluate(example_theme, Direction.DISCHARGING, 50)
        assert evaluator.state.flash_phase is True

        result = evaluator.evaluate(example_theme, Direction.DISCHARGING, 1.5)
        assert result.flash_alt is True
        assert result.icon_path == Path("/icons/low.png")

    def test_non_flashing_step_never_shows_alternate(
        self, evaluator: LevelEvaluator, example_theme: Theme
    ) -> None:
        """Steps without an alternate icon never flash."""
        results = [evaluator.evaluate(example_theme, Direction.DISCHARGING, 5) for _ in range(3)]

        assert {r.icon_path for r in results} == {Path("/icons/low.png")}
        assert not any(r.flash_alt for r in results)


class TestCallbacks:
    def test_first_match_fires(self, evaluator: LevelEvaluator, example_theme: Theme) -> None:
        """The first step with a callback always reports it."""
        callback = RecordingCallback()
        example_theme.set_event(2, callback, "discharging")

        result = evaluator.evaluate(example_theme, Direction.DISCHARGING, 80)

        assert result.callback is callback
        assert evaluator.state.last_event == (False, 10)
        # Evaluation reports the callback; the caller invokes it
        assert callback.calls == []

    def test_same_step_does_not_refire(
        self, evaluator: LevelEvaluator, example_theme: Theme
    ) -> None:
        """Staying on a step does not report its callback again."""
        example_theme.set_event(2, RecordingCallback(), "discharging")

        evaluator.evaluate(example_theme, Direction.DISCHARGING, 80)
        again = evaluator.evaluate(example_theme, Direction.DISCHARGING, 70)

        assert again.callback is None

    def test_new_step_same_direction_does_not_fire(
        self, evaluator: LevelEvaluator, example_theme: Theme
    ) -> None:
        """Moving to another step in the same direction is not enough to fire."""
        # Firing needs both the direction and the step minimum to change
        example_theme.set_event(2, RecordingCallback(), "discharging")
        example_theme.set_event(1, RecordingCallback(), "discharging")

        evaluator.evaluate(example_theme, Direction.DISCHARGING, 80)
        lower = evaluator.evaluate(example_theme, Direction.DISCHARGING, 5)

        assert lower.callback is None
        assert evaluator.state.last_event == (False, 10)

    def test_direction_change_with_same_minimum_does_not_fire(
        self, evaluator: LevelEvaluator, example_theme: Theme
    ) -> None:
        """Changing direction on the same lower bound is not enough to fire."""
        example_theme.set_event(0, RecordingCallback(), "discharging")
        example_theme.set_event(0, RecordingCallback(), "charging")

        evaluator.evaluate(example_theme, Direction.DISCHARGING, 1)
        plugged = evaluator.evaluate(example_theme, Direction.CHARGING, 1)

        assert plugged.callback is None

    def test_direction_and_minimum_change_fires(
        self, evaluator: LevelEvaluator, example_theme: Theme
    ) -> None:
        """Changing both direction and lower bound fires the callback."""
        charging_callback = RecordingCallback()
        example_theme.set_event(2, RecordingCallback(), "discharging")
        example_theme.set_event(2, charging_callback, "charging")

        evaluator.evaluate(example_theme, Direction.DISCHARGING, 80)
        plugged = evaluator.evaluate(example_theme, Direction.CHARGING, 95)

        assert plugged.callback is charging_callback
        assert evaluator.state.last_event == (True, 90)

    def test_step_without_callback_keeps_state(
        self, evaluator: LevelEvaluator, example_theme: Theme
    ) -> None:
        """Steps without callbacks leave the recorded event alone."""
        example_theme.set_event(2, RecordingCallback(), "discharging")

        evaluator.evaluate(example_theme, Direction.DISCHARGING, 80)
        evaluator.evaluate(example_theme, Direction.CHARGING, 5)

        assert evaluator.state.last_event == (False, 10)

    def test_unknown_direction_flag_is_distinct(self, example_theme: Theme) -> None:
        """An unknown direction differs from charging when deciding to fire."""
        callback = RecordingCallback()
        example_theme.set_event(1, callback, "charging")
        evaluator = LevelEvaluator(EvaluatorState(last_event=(True, 0)))

        result = evaluator.evaluate(example_theme, Direction.UNKNOWN, 50)

        assert result.callback is callback
        assert evaluator.state.last_event == (None, 10)

    def test_unknown_direction_is_not_treated_as_unset(self, example_theme: Theme) -> None:
        """A recorded unknown direction blocks re-firing on the same step."""
        callback = RecordingCallback()
        example_theme.set_event(1, callback, "charging")
        evaluator = LevelEvaluator()

        first = evaluator.evaluate(example_theme, Direction.UNKNOWN, 50)
        second = evaluator.evaluate(example_theme, Direction.UNKNOWN, 60)

        assert first.callback is callback
        assert evaluator.state.last_event == (None, 10)
        assert second.callback is None
