"""Level evaluation and low battery warnings."""

from .alerts import LowBatteryWarning, WarningController, check_warning
from .evaluator import Evaluation, EvaluatorState, LevelEvaluator

__all__ = [
    "Evaluation",
    "EvaluatorState",
    "LevelEvaluator",
    "LowBatteryWarning",
    "WarningController",
    "check_warning",
]
