"""Theme model, step parser, theme registry and theme file parser."""

from .models import Direction, Step, StepCallback, StepSet, Theme
from .parser import ThemeFileParser, classify_line, parse_theme_file
from .registry import ThemeRegistry
from .steps import parse_steps

__all__ = [
    "Direction",
    "Step",
    "StepCallback",
    "StepSet",
    "Theme",
    "ThemeFileParser",
    "ThemeRegistry",
    "classify_line",
    "parse_steps",
    "parse_theme_file",
]
