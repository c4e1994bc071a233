"""User and system configuration scripts.

Scripts are plain Python files executed once at startup. They receive a
``battray`` object that lets them pick the default theme and attach
callbacks to theme steps, for example::

    battray.make_default("minimal")
    battray.set_event("minimal", 0, battray.command("systemctl suspend"), "discharging")
"""

from __future__ import annotations

import logging
import os
import runpy
import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Final

from battray.errors import ScriptError
from battray.themes.models import Direction, StepCallback, Theme

if TYPE_CHECKING:
    from battray.context import AppContext

logger: Final = logging.getLogger(__name__)


class CommandCallback:
    """Step callback that runs an external command.

    The level and charging flag are passed through the ``BATTRAY_LEVEL``
    and ``BATTRAY_CHARGING`` environment variables. The command runs
    synchronously inside the poll cycle.
    """

    def __init__(self, command: str | Sequence[str]) -> None:
        self.command = shlex.split(command) if isinstance(command, str) else list(command)

    def __call__(self, level: float, charging: bool | None) -> None:
        env = dict(os.environ)
        env["BATTRAY_LEVEL"] = f"{level:g}"
        env["BATTRAY_CHARGING"] = "unknown" if charging is None else str(charging).lower()
        try:
            subprocess.run(self.command, check=True, env=env)
        except subprocess.CalledProcessError as exc:
            logger.warning("Event command failed: %s", exc)
        except OSError as exc:
            logger.warning("Event command %s could not run: %s", self.command[0], exc)

    def __repr__(self) -> str:
        return f"CommandCallback({shlex.join(self.command)!r})"


class ScriptApi:
    """The ``battray`` object scripts see."""

    def __init__(self, context: AppContext) -> None:
        self._context = context

    def themes(self) -> list[str]:
        return self._context.registry.names()

    def get_theme(self, name: str) -> Theme | None:
        return self._context.registry.get_theme(name)

    def make_default(self, name: str) -> None:
        self._context.registry.make_default(name)

    def set_event(
        self,
        theme: str,
        step_index: int,
        callback: StepCallback,
        direction: str | Direction,
    ) -> None:
        """Attach ``callback`` to step ``step_index`` of a registered theme.

        Raises:
            KeyError: If the theme is not registered
            InvalidDirectionError: If the direction token is not recognized
        """
        found = self._context.registry.get_theme(theme)
        if found is None:
            raise KeyError(f"unknown theme {theme!r}")
        found.set_event(step_index, callback, direction)

    @staticmethod
    def command(command: str | Sequence[str]) -> CommandCallback:
        return CommandCallback(command)


def run_script(path: Path, context: AppContext) -> None:
    """Execute a configuration script against ``context``.

    Raises:
        ScriptError: If the script raises
    """
    logger.info("Running script %s", path)
    try:
        runpy.run_path(str(path), init_globals={"battray": ScriptApi(context)})
    except Exception as exc:
        raise ScriptError(path, exc) from exc
