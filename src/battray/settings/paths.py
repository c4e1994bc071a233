"""Locations of the system and per-user configuration files."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from battray.constants import (
    APP_NAME,
    SCRIPT_FILE_NAME,
    SYSTEM_CONFIG_DIR,
    THEME_FILE_NAME,
)
from battray.errors import MissingHomeConfigError


def user_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Resolve the per-user configuration directory.

    ``$XDG_CONFIG_HOME/battray`` wins, then ``$HOME/.config/battray``.

    Raises:
        MissingHomeConfigError: If neither variable is set
    """
    env = os.environ if environ is None else environ
    config_home = env.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / APP_NAME
    home = env.get("HOME")
    if home:
        return Path(home) / ".config" / APP_NAME
    raise MissingHomeConfigError()


@dataclass
class ConfigPaths:
    """Configuration files, in the order they are applied."""

    system_dir: Path
    user_dir: Path

    @classmethod
    def discover(
        cls,
        system_dir: Path = SYSTEM_CONFIG_DIR,
        environ: Mapping[str, str] | None = None,
    ) -> ConfigPaths:
        return cls(system_dir=Path(system_dir), user_dir=user_config_dir(environ))

    @property
    def system_themes(self) -> Path:
        return self.system_dir / THEME_FILE_NAME

    @property
    def system_script(self) -> Path:
        return self.system_dir / SCRIPT_FILE_NAME

    @property
    def user_themes(self) -> Path:
        return self.user_dir / THEME_FILE_NAME

    @property
    def user_script(self) -> Path:
        return self.user_dir / SCRIPT_FILE_NAME
