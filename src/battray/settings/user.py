"""User-configurable settings loaded from settings.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from battray.constants import (
    DEFAULT_BATTERY_COMMAND,
    DEFAULT_WARNING_THRESHOLDS,
    SYSTEM_CONFIG_DIR,
    SYSTEM_ICON_DIR,
)
from battray.errors import SettingsError

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class UserSettings(BaseModel):
    """Application behaviour outside the theme files.

    Every field has a default, so a missing settings file is not an error.
    """

    ENV_VAR: ClassVar[str] = "BATTRAY_SETTINGS"

    warning_thresholds: list[float] = Field(
        default_factory=lambda: list(DEFAULT_WARNING_THRESHOLDS),
        description="Battery % levels that raise a warning, highest first",
    )
    battery_command: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BATTERY_COMMAND),
        min_length=1,
        description="Command printing battery status in acpi format",
    )
    icon_dir: Path = Field(
        SYSTEM_ICON_DIR, description="Icon directory new themes start from"
    )
    system_config_dir: Path = Field(
        SYSTEM_CONFIG_DIR, description="Directory holding system themes.conf and rc.py"
    )
    use_notifications: bool = Field(
        True, description="Use desktop notifications; False shows dialogs instead"
    )

    # ---- validators ----
    @field_validator("warning_thresholds")
    @classmethod
    def validate_thresholds(cls, v: list[float]) -> list[float]:
        """Each threshold must be a percentage. The order is kept as given."""
        for threshold in v:
            if not 0 <= threshold <= 100:
                raise ValueError(f"warning threshold {threshold} is outside 0-100")
        return v

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load settings from a YAML file.

        Args:
            path: Settings file (optional; falls back to $BATTRAY_SETTINGS,
                then to defaults when neither is given)

        Returns:
            Validated UserSettings object

        Raises:
            FileNotFoundError: If an explicitly requested file does not exist
            SettingsError: If the file cannot be parsed or is invalid
        """
        if path is None:
            env_path = os.environ.get(cls.ENV_VAR)
            if not env_path:
                return cls()
            path = Path(env_path)

        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text(encoding="utf-8"))
            data = yaml.safe_load(raw) or {}
        except Exception as exc:  # pragma: no cover
            raise SettingsError(f"Unable to read settings YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise SettingsError(f"Invalid settings:\n{err}") from err
