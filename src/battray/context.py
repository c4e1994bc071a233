"""Process-scoped state shared by the config loaders and the poll cycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from battray.constants import DEFAULT_WARNING_THRESHOLDS, SYSTEM_ICON_DIR
from battray.engine.alerts import WarningController
from battray.engine.evaluator import LevelEvaluator
from battray.errors import UnknownThemeError
from battray.settings.paths import ConfigPaths
from battray.settings.user import UserSettings
from battray.system.scripts import run_script
from battray.themes.parser import ThemeFileParser
from battray.themes.registry import ThemeRegistry

logger: Final = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Theme registry plus the evaluator and warning state.

    One instance is built at startup and passed explicitly to the loaders
    and the monitor; tests build a fresh one each.
    """

    registry: ThemeRegistry = field(default_factory=ThemeRegistry)
    evaluator: LevelEvaluator = field(default_factory=LevelEvaluator)
    warnings: WarningController = field(
        default_factory=lambda: WarningController(DEFAULT_WARNING_THRESHOLDS)
    )
    icon_dir: Path = SYSTEM_ICON_DIR

    @classmethod
    def from_settings(cls, settings: UserSettings) -> AppContext:
        return cls(
            warnings=WarningController(settings.warning_thresholds),
            icon_dir=settings.icon_dir,
        )

    def parse_themes(self, path: Path) -> str | None:
        """Parse a theme file and make its last theme the default.

        Returns:
            Name of the last theme in the file, or None
        """
        last = ThemeFileParser(self.registry, self.icon_dir).parse_file(path)
        if last is not None:
            self.registry.make_default(last)
        return last


def load_themes(context: AppContext, paths: ConfigPaths) -> str:
    """Load every configuration source in precedence order.

    System theme file, system script, user theme file, user script. Each
    theme file's last theme becomes the default, so the user file overrides
    the system one; scripts may change the default afterwards.

    Returns:
        Name of the resulting default theme

    Raises:
        ShapeMismatchError: If a theme file declares inconsistent steps
        ScriptError: If a script fails
        UnknownThemeError: If no registered theme ends up as the default
    """
    if paths.system_themes.is_file():
        context.parse_themes(paths.system_themes)
    else:
        logger.warning("System theme file %s not found", paths.system_themes)

    if paths.system_script.is_file():
        run_script(paths.system_script, context)

    if paths.user_themes.is_file():
        context.parse_themes(paths.user_themes)

    if paths.user_script.is_file():
        run_script(paths.user_script, context)

    default = context.registry.default_name
    if default is None or default not in context.registry:
        raise UnknownThemeError(default)

    logger.info("Using theme %r (%d themes loaded)", default, len(context.registry))
    return default
